"""Question Generator - Generates one quiz question per provider call."""

import logging
import random
from typing import Any, Callable

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from src.agents.llm import build_chat_model
from src.config.settings import Settings
from src.errors import GenerationError
from src.models.quiz import (
    ANSWER_CHAR_LIMIT,
    QUESTION_CHAR_LIMIT,
    Answer,
    DifficultyLevel,
    GeneratedQuestionEnvelope,
    Question,
    resolve_model,
)

logger = logging.getLogger(__name__)

# (topic, previous_questions, model, difficulty) -> Question
QuestionGenerator = Callable[[str, list[str], str, DifficultyLevel], Question]

AUDIENCES = {
    DifficultyLevel.HIGH_SCHOOL.value: "high school students",
    DifficultyLevel.COLLEGE.value: "college students",
    DifficultyLevel.POST_GRAD.value: "post-graduate students or experts in the field",
}
FALLBACK_AUDIENCE = "a general audience"

SYSTEM_PROMPT = """You are an expert quiz question writer. You write clear, engaging multiple-choice questions for Kahoot quizzes.

Requirements:
- Each question must have exactly 4 answers
- Exactly ONE answer is correct
- Incorrect answers should be plausible but clearly wrong
- Questions should be clear and unambiguous"""


def shuffle_answers(answers: list[Answer], rng: random.Random | None = None) -> list[Answer]:
    """
    Return the answers in a uniformly random order.

    Fisher-Yates: walk from the last index down, swapping each slot with a
    uniformly chosen slot at or before it.

    Args:
        answers: Answers to shuffle (left untouched)
        rng: Random source, module level random if omitted

    Returns:
        New list holding the same answers
    """
    rng = rng or random
    shuffled = list(answers)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def audience_for(difficulty: DifficultyLevel | str) -> str:
    """Map a difficulty level to the audience phrase used in the prompt."""
    key = difficulty.value if isinstance(difficulty, DifficultyLevel) else str(difficulty)
    return AUDIENCES.get(key, FALLBACK_AUDIENCE)


def build_question_prompt(
    topic: str,
    previous_questions: list[str],
    difficulty: DifficultyLevel | str,
) -> str:
    """
    Build the instruction for a single question.

    Args:
        topic: Quiz topic
        previous_questions: Texts of questions already in the quiz
        difficulty: Audience level

    Returns:
        Prompt text
    """
    prompt = (
        f"I want to make a quiz about {topic}. Write 1 question with 4 answers. "
        f"The difficulty level of the question should be for {audience_for(difficulty)}. "
        f"Give exactly 1 correct answer. "
        f"The question can not be longer than {QUESTION_CHAR_LIMIT} characters, "
        f"and the answers can not be longer than {ANSWER_CHAR_LIMIT} characters."
    )

    if previous_questions:
        listed = "\n".join(f"{i}. {text}" for i, text in enumerate(previous_questions, 1))
        prompt += (
            "\n\nThe quiz already contains these questions. "
            "Do not repeat or closely paraphrase any of them:\n"
            f"{listed}"
        )

    return prompt


def generate_question(
    topic: str,
    previous_questions: list[str],
    model: str | None,
    difficulty: DifficultyLevel | str,
    *,
    authenticated: bool = True,
    llm: BaseChatModel | None = None,
    settings: Settings | None = None,
) -> Question:
    """
    Ask the provider for one question and return it with shuffled answers.

    Anonymous callers and unknown model ids are silently switched to the
    economy model. The call is made once; any failure becomes a
    GenerationError for the caller to handle.

    Args:
        topic: Quiz topic
        previous_questions: Question texts the new question must not repeat
        model: Requested model id
        difficulty: Audience level
        authenticated: Whether the caller is signed in
        llm: Chat model to use instead of building one from settings
        settings: Settings used when building the chat model

    Returns:
        The generated Question

    Raises:
        GenerationError: If the call fails or the reply does not match the schema
    """
    resolved_model = resolve_model(model, authenticated)
    if llm is None:
        llm = build_chat_model(resolved_model, settings)

    # include_raw keeps parse failures as data instead of exceptions
    llm_with_structure = llm.with_structured_output(
        GeneratedQuestionEnvelope, include_raw=True
    )

    messages = [
        SystemMessage(content=SYSTEM_PROMPT),
        HumanMessage(content=build_question_prompt(topic, previous_questions, difficulty)),
    ]

    try:
        result: dict[str, Any] = llm_with_structure.invoke(messages)
    except Exception as e:
        raise GenerationError(
            f"Provider call failed for model {resolved_model}: {e}", payload=e
        ) from e

    parsed = result.get("parsed") if isinstance(result, dict) else None
    parsing_error = result.get("parsing_error") if isinstance(result, dict) else None
    if parsing_error is not None or not isinstance(parsed, GeneratedQuestionEnvelope):
        raw = result.get("raw") if isinstance(result, dict) else result
        raise GenerationError(
            f"Provider returned an unusable question: {parsing_error or 'no structured output'}",
            payload=raw,
        )

    generated = parsed.question
    try:
        question = Question(
            question_text=generated.question_text,
            answers=shuffle_answers(generated.answers),
        )
    except ValueError as e:
        # pydantic ValidationError, e.g. no answer marked correct
        raise GenerationError(f"Provider returned an invalid question: {e}", payload=result.get("raw")) from e

    logger.debug("Generated question for %r with %s", topic, resolved_model)
    return question
