"""Shared test fixtures and configuration for pytest."""

from typing import Any

import pytest

from src.config.settings import get_settings
from src.errors import GenerationError
from src.export.kahoot_template import create_blank_template
from src.models.quiz import Answer, DifficultyLevel, GenerationConfig, Question


def make_question(text: str, answers: list[str] | None = None, correct: int = 0) -> Question:
    """Build a question whose answer at position `correct` is the right one."""
    answers = answers or ["Right", "Wrong 1", "Wrong 2", "Wrong 3"]
    return Question(
        question_text=text,
        answers=[Answer(text=a, is_correct=(i == correct)) for i, a in enumerate(answers)],
    )


class FakeGenerator:
    """Stand-in for the single question generator that records every call."""

    def __init__(self, fail_on: set[int] | None = None):
        self.fail_on = fail_on or set()
        self.calls: list[dict[str, Any]] = []

    def __call__(
        self,
        topic: str,
        previous_questions: list[str],
        model: str,
        difficulty: DifficultyLevel,
    ) -> Question:
        self.calls.append(
            {
                "topic": topic,
                "previous_questions": list(previous_questions),
                "model": model,
                "difficulty": difficulty,
            }
        )
        attempt = len(self.calls)
        if attempt in self.fail_on:
            raise GenerationError(f"provider failure on call {attempt}", payload={"call": attempt})
        return make_question(f"{topic} question {attempt}?")


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_generator_factory():
    """Return the FakeGenerator class so tests can choose failing calls."""
    return FakeGenerator


@pytest.fixture
def question_factory():
    """Return the make_question helper."""
    return make_question


@pytest.fixture
def sample_question() -> Question:
    """Create a sample Question for testing."""
    return make_question(
        "What is the capital of France?",
        ["Paris", "London", "Berlin", "Madrid"],
        correct=0,
    )


@pytest.fixture
def sample_questions() -> list[Question]:
    """Create a list of five sample questions for testing."""
    return [make_question(f"Question number {i}?") for i in range(5)]


@pytest.fixture
def sample_config() -> GenerationConfig:
    """Create a sample GenerationConfig for testing."""
    return GenerationConfig.for_caller(
        "History",
        authenticated=True,
        requested_model="gpt-4o",
        difficulty=DifficultyLevel.COLLEGE,
        number_of_questions=5,
        time_limit=30,
    )


@pytest.fixture
def template_bytes() -> bytes:
    """Kahoot template workbook."""
    return create_blank_template()
