"""Storage for saved quizzes and the question bank."""

from .memory import InMemoryQuizStore

__all__ = ["InMemoryQuizStore"]
