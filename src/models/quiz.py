"""Pydantic models for quiz data structures."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

QUESTION_CHAR_LIMIT = 120
ANSWER_CHAR_LIMIT = 75

MIN_QUESTIONS = 1
MAX_QUESTIONS = 50

TIME_LIMITS: tuple[int, ...] = (5, 10, 20, 30, 60, 90, 120, 240)
DEFAULT_TIME_LIMIT = 20

MODELS: dict[str, str] = {
    "GPT_4O": "gpt-4o",
    "GPT_5": "gpt-5",
    "GPT_5_MINI": "gpt-5-mini",
    "GPT_5_2": "gpt-5.2",
}
ECONOMY_MODEL = MODELS["GPT_5_MINI"]
DEFAULT_SIGNED_IN_MODEL = MODELS["GPT_5"]


class DifficultyLevel(str, Enum):
    """Audience level the questions are written for."""

    HIGH_SCHOOL = "high_school"
    COLLEGE = "college"
    POST_GRAD = "post_grad"

    @property
    def label(self) -> str:
        """Human readable label."""
        return {
            DifficultyLevel.HIGH_SCHOOL: "High School",
            DifficultyLevel.COLLEGE: "College",
            DifficultyLevel.POST_GRAD: "Post-Grad",
        }[self]


class Answer(BaseModel):
    """One answer option of a multiple choice question."""

    text: str = Field(..., description="The text of the answer")
    is_correct: bool = Field(..., description="Whether this answer is correct")


class Question(BaseModel):
    """A quiz question with two to four answer options."""

    question_text: str = Field(..., min_length=1, description="The text of the question")
    answers: list[Answer] = Field(
        ...,
        min_length=2,
        max_length=4,
        description="Answer options in display order",
    )

    @field_validator("answers")
    @classmethod
    def validate_answers(cls, v: list[Answer]) -> list[Answer]:
        """Ensure at least one answer is marked correct."""
        if not any(answer.is_correct for answer in v):
            raise ValueError("At least one answer must be marked correct")
        return v

    @property
    def correct_positions(self) -> list[int]:
        """1-based positions of the correct answers."""
        return [i + 1 for i, answer in enumerate(self.answers) if answer.is_correct]

    model_config = {
        "json_schema_extra": {
            "example": {
                "question_text": "What is the capital of France?",
                "answers": [
                    {"text": "London", "is_correct": False},
                    {"text": "Paris", "is_correct": True},
                    {"text": "Berlin", "is_correct": False},
                    {"text": "Madrid", "is_correct": False},
                ],
            }
        }
    }


def exceeds_limit(question: Question) -> bool:
    """Return True if the question or any of its answers is over the Kahoot limits."""
    if len(question.question_text) > QUESTION_CHAR_LIMIT:
        return True
    return any(len(answer.text) > ANSWER_CHAR_LIMIT for answer in question.answers)


def has_limit_warnings(questions: list[Question]) -> bool:
    """Return True if any question in the set should trigger a length warning."""
    return any(exceeds_limit(q) for q in questions)


def resolve_model(requested: str | None, authenticated: bool) -> str:
    """
    Pick the model a caller is allowed to use.

    Anonymous callers always get the economy model. Signed-in callers get the
    model they asked for if it is recognised, the economy model if it is not,
    and the signed-in default when they did not ask for one.

    Args:
        requested: Model id the caller asked for, if any
        authenticated: Whether the caller is signed in

    Returns:
        Model id to send to the provider
    """
    if not authenticated:
        return ECONOMY_MODEL
    if requested is None:
        return DEFAULT_SIGNED_IN_MODEL
    if requested not in MODELS.values():
        return ECONOMY_MODEL
    return requested


class GenerationConfig(BaseModel):
    """Settings for one generation session, resolved once when it starts."""

    topic: str = Field(..., min_length=1, description="Quiz topic")
    difficulty: DifficultyLevel = Field(
        default=DifficultyLevel.COLLEGE,
        description="Audience level",
    )
    model: str = Field(default=ECONOMY_MODEL, description="Resolved model id")
    authenticated: bool = Field(default=False, description="Whether the caller is signed in")
    number_of_questions: int = Field(
        default=10,
        description="How many questions to attempt (clamped to 1-50)",
    )
    time_limit: int = Field(
        default=DEFAULT_TIME_LIMIT,
        description="Seconds per question in the exported quiz",
    )

    @field_validator("topic")
    @classmethod
    def validate_topic(cls, v: str) -> str:
        """Strip whitespace and reject blank topics."""
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("A topic is required")
        return cleaned

    @field_validator("number_of_questions")
    @classmethod
    def clamp_number_of_questions(cls, v: int) -> int:
        """Clamp rather than reject out of range counts."""
        return max(MIN_QUESTIONS, min(MAX_QUESTIONS, v))

    @field_validator("time_limit")
    @classmethod
    def validate_time_limit(cls, v: int) -> int:
        """Only the time limits Kahoot accepts are allowed."""
        if v not in TIME_LIMITS:
            raise ValueError(f"Time limit must be one of {', '.join(map(str, TIME_LIMITS))}")
        return v

    @model_validator(mode="after")
    def apply_model_policy(self) -> "GenerationConfig":
        """Anonymous callers and unknown ids fall back to the economy model."""
        self.model = resolve_model(self.model, self.authenticated)
        return self

    @classmethod
    def for_caller(
        cls,
        topic: str,
        *,
        authenticated: bool,
        requested_model: str | None = None,
        **kwargs,
    ) -> "GenerationConfig":
        """
        Build a config for a caller, applying the model policy.

        Args:
            topic: Quiz topic
            authenticated: Whether the caller is signed in
            requested_model: Model the caller asked for
            **kwargs: Remaining GenerationConfig fields

        Returns:
            GenerationConfig with the resolved model
        """
        model = resolve_model(requested_model, authenticated)
        return cls(topic=topic, model=model, authenticated=authenticated, **kwargs)

    model_config = {
        "json_schema_extra": {
            "example": {
                "topic": "The French Revolution",
                "difficulty": "college",
                "model": "gpt-5-mini",
                "number_of_questions": 10,
                "time_limit": 20,
            }
        }
    }


# Structured output models for LLM responses


class GeneratedQuestion(BaseModel):
    """Question shape requested from the provider."""

    question_text: str = Field(..., min_length=1, description="The text of the question")
    answers: list[Answer] = Field(
        ...,
        min_length=2,
        max_length=4,
        description="Exactly 4 answers, exactly one of them correct",
    )


class GeneratedQuestionEnvelope(BaseModel):
    """A single generated question with its answers."""

    question: GeneratedQuestion = Field(..., description="The generated question")
