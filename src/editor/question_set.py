"""Pure edits over an ordered list of questions.

Every function takes the current list and returns a new one; the list passed
in is never changed. Positions are 0-based. After delete_question or
move_question, any index the caller was holding may point at a different
question and has to be re-checked.
"""

from src.agents.generator import QuestionGenerator, generate_question
from src.models.quiz import DifficultyLevel, Question


def _in_range(questions: list[Question], index: int) -> bool:
    return 0 <= index < len(questions)


def update_question_text(questions: list[Question], index: int, text: str) -> list[Question]:
    """Replace the text of the question at index. Out of range is a no-op."""
    if not _in_range(questions, index):
        return list(questions)
    updated = list(questions)
    updated[index] = questions[index].model_copy(update={"question_text": text})
    return updated


def update_answer_text(
    questions: list[Question], index: int, answer_index: int, text: str
) -> list[Question]:
    """Replace the text of one answer, keeping its correctness flag."""
    if not _in_range(questions, index):
        return list(questions)
    question = questions[index]
    if not 0 <= answer_index < len(question.answers):
        return list(questions)

    answers = list(question.answers)
    answers[answer_index] = answers[answer_index].model_copy(update={"text": text})

    updated = list(questions)
    updated[index] = question.model_copy(update={"answers": answers})
    return updated


def delete_question(questions: list[Question], index: int) -> list[Question]:
    """Remove the question at index; later questions move up by one."""
    if not _in_range(questions, index):
        return list(questions)
    return questions[:index] + questions[index + 1 :]


def add_question(questions: list[Question], question: Question) -> list[Question]:
    """Append a manually written question."""
    return [*questions, question]


def move_question(questions: list[Question], from_index: int, to_index: int) -> list[Question]:
    """Move one question to a new position. Out of range is a no-op."""
    if not _in_range(questions, from_index) or not _in_range(questions, to_index):
        return list(questions)
    updated = list(questions)
    updated.insert(to_index, updated.pop(from_index))
    return updated


def regenerate_question(
    questions: list[Question],
    index: int,
    topic: str,
    model: str | None,
    difficulty: DifficultyLevel | str,
    *,
    authenticated: bool = True,
    generate_one: QuestionGenerator | None = None,
) -> list[Question]:
    """
    Replace the question at index with a freshly generated one.

    The prompt lists every other question so the replacement does not repeat
    them. If generation fails the error propagates and the caller keeps the
    list it already has.

    Args:
        questions: Current question list
        index: Position to replace
        topic: Quiz topic
        model: Requested model id
        difficulty: Audience level
        authenticated: Whether the caller is signed in
        generate_one: Function producing a single question (provider call if omitted)

    Returns:
        New list with the replacement at index

    Raises:
        IndexError: If index is out of range
        GenerationError: If the provider call fails
    """
    if not _in_range(questions, index):
        raise IndexError(f"No question at position {index}")

    others = [q.question_text for i, q in enumerate(questions) if i != index]

    if generate_one is None:
        replacement = generate_question(
            topic, others, model, difficulty, authenticated=authenticated
        )
    else:
        replacement = generate_one(topic, others, model, difficulty)

    updated = list(questions)
    updated[index] = replacement
    return updated
