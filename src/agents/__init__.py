"""Model-backed agents for quiz generation."""

from .generator import build_question_prompt, generate_question, shuffle_answers
from .llm import build_chat_model
from .titler import generate_title

__all__ = [
    "build_chat_model",
    "build_question_prompt",
    "generate_question",
    "generate_title",
    "shuffle_answers",
]
