"""Chat model construction for the configured provider."""

from typing import Any

from botocore.config import Config
from langchain_anthropic import ChatAnthropic
from langchain_aws import ChatBedrock
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_openai import AzureChatOpenAI, ChatOpenAI

from src.config.settings import Settings, get_settings


def build_chat_model(model: str, settings: Settings | None = None) -> BaseChatModel:
    """
    Create a chat model for the given model id.

    Requests are never retried by the client; a failed or timed out call is
    reported to the caller straight away.

    Args:
        model: Model id (Azure deployment name, OpenAI/Anthropic model or Bedrock model id)
        settings: Settings to use (cached settings if omitted)

    Returns:
        LangChain chat model ready for structured output
    """
    settings = settings or get_settings()
    provider = settings.llm_provider

    common: dict[str, Any] = {}
    if settings.generation_temperature is not None:
        common["temperature"] = settings.generation_temperature

    if provider == "azure":
        if settings.azure_openai_api_key:
            common["api_key"] = settings.azure_openai_api_key
        if settings.azure_openai_endpoint:
            common["azure_endpoint"] = settings.azure_openai_endpoint
        return AzureChatOpenAI(
            azure_deployment=model,
            api_version=settings.azure_openai_api_version,
            timeout=settings.request_timeout_seconds,
            max_retries=0,
            **common,
        )

    if provider == "openai":
        if settings.openai_api_key:
            common["api_key"] = settings.openai_api_key
        return ChatOpenAI(
            model=model,
            timeout=settings.request_timeout_seconds,
            max_retries=0,
            **common,
        )

    if provider == "anthropic":
        if settings.anthropic_api_key:
            common["api_key"] = settings.anthropic_api_key
        return ChatAnthropic(
            model=model,
            timeout=settings.request_timeout_seconds,
            max_retries=0,
            **common,
        )

    if provider == "bedrock":
        if settings.aws_default_region:
            common["region_name"] = settings.aws_default_region
        return ChatBedrock(
            model=model,
            config=Config(
                read_timeout=settings.request_timeout_seconds,
                retries={"max_attempts": 0},
            ),
            **common,
        )

    raise ValueError(f"Unknown LLM provider: {provider}")
