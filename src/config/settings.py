"""Application settings and configuration."""

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env file if present
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Provider selection
    llm_provider: Literal["azure", "openai", "anthropic", "bedrock"] = Field(
        default="azure",
        description="Which chat model backend serves generation requests",
        validation_alias="LLM_PROVIDER",
    )

    # AZURE OPENAI CONFIG
    azure_openai_api_key: str | None = Field(
        default=None,
        description="Azure OpenAI API key",
        validation_alias="AZURE_OPENAI_API_KEY",
    )
    azure_openai_endpoint: str | None = Field(
        default=None,
        description="Azure OpenAI resource endpoint",
        validation_alias="AZURE_OPENAI_ENDPOINT",
    )
    azure_openai_api_version: str = Field(
        default="2024-08-01-preview",
        description="Azure OpenAI API version",
        validation_alias="AZURE_OPENAI_API_VERSION",
    )

    # OPENAI / ANTHROPIC / AWS CONFIG
    openai_api_key: str | None = Field(
        default=None,
        description="OpenAI API key",
        validation_alias="OPENAI_API_KEY",
    )
    anthropic_api_key: str | None = Field(
        default=None,
        description="Anthropic API key",
        validation_alias="ANTHROPIC_API_KEY",
    )
    aws_default_region: str | None = Field(
        default=None,
        description="AWS region for Bedrock",
        validation_alias="AWS_DEFAULT_REGION",
    )

    # Generation Settings
    generation_temperature: float | None = Field(
        default=None,  # some deployments only accept their default temperature
        ge=0.0,
        le=2.0,
        description="Temperature for question generation (provider default if unset)",
        validation_alias="GENERATION_TEMPERATURE",
    )

    request_timeout_seconds: float = Field(
        default=60.0,
        gt=0.0,
        le=600.0,
        description="Timeout for a single generation request",
        validation_alias="REQUEST_TIMEOUT_SECONDS",
    )

    title_model: str = Field(
        default="gpt-5-mini",
        description="Model used to suggest quiz titles",
        validation_alias="TITLE_MODEL",
    )

    # Output Settings
    kahoot_template_path: str | None = Field(
        default=None,
        description="Path to the Kahoot spreadsheet template (built-in layout if unset)",
        validation_alias="KAHOOT_TEMPLATE_PATH",
    )

    default_output_dir: str = Field(
        default="output",
        description="Directory exported spreadsheets are written to",
        validation_alias="DEFAULT_OUTPUT_DIR",
    )

    log_level: str = Field(
        default="INFO",
        description="Log level for the CLI",
        validation_alias="LOG_LEVEL",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# This is loaded the first time and then cached for further use by the generators
@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with loaded configuration
    """
    return Settings()
