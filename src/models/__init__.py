"""Data models for quiz generation."""

from .quiz import (
    ANSWER_CHAR_LIMIT,
    ECONOMY_MODEL,
    MODELS,
    QUESTION_CHAR_LIMIT,
    TIME_LIMITS,
    Answer,
    DifficultyLevel,
    # Structured output models
    GeneratedQuestion,
    GeneratedQuestionEnvelope,
    GenerationConfig,
    Question,
    exceeds_limit,
    has_limit_warnings,
    resolve_model,
)
from .records import QuizPage, QuizQuestionLink, StoredQuestion, StoredQuiz

__all__ = [
    "Answer",
    "Question",
    "DifficultyLevel",
    "GenerationConfig",
    "GeneratedQuestion",
    "GeneratedQuestionEnvelope",
    "StoredQuestion",
    "StoredQuiz",
    "QuizQuestionLink",
    "QuizPage",
    "exceeds_limit",
    "has_limit_warnings",
    "resolve_model",
    "MODELS",
    "ECONOMY_MODEL",
    "TIME_LIMITS",
    "QUESTION_CHAR_LIMIT",
    "ANSWER_CHAR_LIMIT",
]
