"""Exception types shared across the quiz pipeline."""

from typing import Any


class QuizAideError(Exception):
    """Base class for errors raised by this package."""


class GenerationError(QuizAideError):
    """A provider call failed or returned data that does not match the schema."""

    def __init__(self, message: str, payload: Any = None):
        super().__init__(message)
        self.payload = payload


class ExportError(QuizAideError):
    """The spreadsheet template could not be loaded or written."""


class NotFoundError(QuizAideError):
    """A stored quiz or question does not exist."""


class PermissionDeniedError(QuizAideError):
    """The caller does not own the quiz or question being changed."""
