"""Records held by the quiz store."""

import secrets
import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.models.quiz import DEFAULT_TIME_LIMIT, TIME_LIMITS, Answer, Question


def _new_id() -> str:
    return str(uuid.uuid4())


def _new_short_id() -> str:
    return secrets.token_urlsafe(6)


class StoredQuestion(BaseModel):
    """A question in an author's question bank."""

    id: str = Field(default_factory=_new_id)
    author_id: str
    question_text: str
    subject: str = Field(default="General")
    answers: list[Answer] = Field(default_factory=list)
    is_starred: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    def to_question(self) -> Question:
        """Convert back to the editable question shape."""
        return Question(
            question_text=self.question_text,
            answers=[answer.model_copy() for answer in self.answers],
        )


class QuizQuestionLink(BaseModel):
    """Position of a bank question inside a quiz."""

    quiz_id: str
    question_id: str
    order: int = Field(..., ge=0)


class StoredQuiz(BaseModel):
    """A saved quiz. Question order lives in its links."""

    id: str = Field(default_factory=_new_id)
    short_id: str = Field(default_factory=_new_short_id)
    name: str = Field(..., min_length=1)
    description: str | None = None
    topic: str | None = None
    time_limit: int = Field(default=DEFAULT_TIME_LIMIT)
    difficulty: str | None = None
    author_id: str
    questions: list[QuizQuestionLink] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("time_limit")
    @classmethod
    def validate_time_limit(cls, v: int) -> int:
        """Only the time limits Kahoot accepts are allowed."""
        if v not in TIME_LIMITS:
            raise ValueError(f"Time limit must be one of {', '.join(map(str, TIME_LIMITS))}")
        return v

    @property
    def question_ids(self) -> list[str]:
        """Question ids in quiz order."""
        return [link.question_id for link in sorted(self.questions, key=lambda l: l.order)]


class QuizPage(BaseModel):
    """One page of quizzes plus the cursor for the next page."""

    quizzes: list[StoredQuiz]
    next_cursor: str | None = None
