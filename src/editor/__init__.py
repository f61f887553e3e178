"""Local editing of a generated question set."""

from .question_set import (
    add_question,
    delete_question,
    move_question,
    regenerate_question,
    update_answer_text,
    update_question_text,
)

__all__ = [
    "add_question",
    "delete_question",
    "move_question",
    "regenerate_question",
    "update_answer_text",
    "update_question_text",
]
