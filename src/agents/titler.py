"""Title Generator - Suggests a short title for a quiz."""

import logging

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage

from src.agents.llm import build_chat_model
from src.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 50


def fallback_title(topic: str) -> str:
    """Title used when the provider cannot suggest one."""
    return f"Quiz: {topic}"[:MAX_TITLE_LENGTH]


def generate_title(
    topic: str,
    question_samples: list[str] | None = None,
    *,
    llm: BaseChatModel | None = None,
    settings: Settings | None = None,
) -> str:
    """
    Ask the provider for a catchy quiz title.

    Never raises for provider problems: errors and empty replies fall back
    to "Quiz: <topic>".

    Args:
        topic: Quiz topic
        question_samples: A few question texts to give the model context
        llm: Chat model to use instead of building one from settings
        settings: Settings used when building the chat model

    Returns:
        Title of at most 50 characters
    """
    question_context = ""
    if question_samples:
        question_context = f" Some sample questions: {'; '.join(question_samples[:3])}"

    prompt = (
        f'Generate a short, catchy title (max {MAX_TITLE_LENGTH} characters) for a quiz '
        f'about "{topic}".{question_context} Return only the title, nothing else.'
    )

    try:
        if llm is None:
            settings = settings or get_settings()
            llm = build_chat_model(settings.title_model, settings)
        reply = llm.invoke([HumanMessage(content=prompt)])
    except Exception as e:
        logger.warning("Failed to generate title for %r: %s", topic, e)
        return fallback_title(topic)

    content = reply.content if isinstance(reply.content, str) else ""
    title = content.strip().strip("\"'").strip()
    if not title:
        return fallback_title(topic)
    return title[:MAX_TITLE_LENGTH]
