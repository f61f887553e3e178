"""State carried through the generation workflow."""

from typing import TypedDict

from src.models.quiz import GenerationConfig, Question


class GenerationState(TypedDict):
    """State of one generation run."""

    config: GenerationConfig
    questions: list[Question]
    # question texts of the successful results so far, in order
    previous_questions: list[str]
    attempts: int
    progress_percent: float
    errors: list[str]
    cancelled: bool


def create_initial_state(config: GenerationConfig) -> GenerationState:
    """
    Create the state a generation run starts from.

    Args:
        config: Session configuration

    Returns:
        Fresh state with progress at 0
    """
    return GenerationState(
        config=config,
        questions=[],
        previous_questions=[],
        attempts=0,
        progress_percent=0.0,
        errors=[],
        cancelled=False,
    )
