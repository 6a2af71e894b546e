"""Type-safe environment configuration using Pydantic Settings."""

from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Required fields will raise validation errors if missing.
    Optional fields have sensible defaults.
    Secrets are masked in string representations.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
        env_ignore_empty=True,
    )

    # Required fields - will raise error if missing
    APP_NAME: str = Field(
        ...,
        description="Application name"
    )

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        ...,
        description="Application environment"
    )

    # Optional fields with defaults
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    DEBUG: bool = Field(
        default=False,
        description="Debug mode flag"
    )

    # Hosted LLM provider
    LLM_PROVIDER: Literal["openai", "gemini"] = Field(
        default="openai",
        description="Hosted LLM provider used when no custom endpoint is set"
    )

    LLM_API_KEY: SecretStr | None = Field(
        default=None,
        description="API key for the hosted LLM provider"
    )

    LLM_DEFAULT_MODEL: str = Field(
        default="gpt-4.1-mini",
        description="Model ID sent with every completion request"
    )

    LLM_TEMPERATURE: float = Field(
        default=0.8,
        description="Default sampling temperature",
        ge=0.0,
        le=2.0
    )

    LLM_TIMEOUT: int = Field(
        default=120,
        description="LLM request timeout in seconds",
        gt=0
    )

    LLM_MAX_RETRIES: int = Field(
        default=3,
        description="Maximum number of retry attempts for LLM calls",
        ge=0
    )

    LLM_RETRY_DELAY: float = Field(
        default=1.0,
        description="Initial delay between LLM retries in seconds",
        gt=0
    )

    LLM_SYSTEM_PROMPT: str | None = Field(
        default=None,
        description="Override for the system message sent with every request"
    )

    # OpenAI-compatible relay (e.g. https://api.yunwu.ai/v1, Ollama, LM Studio)
    CUSTOM_LLM_BASE_URL: str | None = Field(
        default=None,
        description="Base URL of an OpenAI-compatible endpoint; takes priority over LLM_PROVIDER"
    )

    CUSTOM_LLM_MODEL: str | None = Field(
        default=None,
        description="Model ID for the custom endpoint"
    )

    CUSTOM_LLM_API_KEY: SecretStr | None = Field(
        default=None,
        description="API key for the custom endpoint (falls back to LLM_API_KEY)"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of {valid_levels}, got '{v}'"
            )
        return v_upper

    @field_validator("CUSTOM_LLM_BASE_URL")
    @classmethod
    def validate_base_url(cls, v: str | None) -> str | None:
        """Require an http(s) scheme and drop any trailing slash."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                f"CUSTOM_LLM_BASE_URL must start with http:// or https://, got '{v}'"
            )
        return v.rstrip("/")

    def get_llm_api_key(self) -> str | None:
        """Get the hosted provider API key value if set."""
        return self.LLM_API_KEY.get_secret_value() if self.LLM_API_KEY else None

    def get_custom_llm_api_key(self) -> str | None:
        """Get the custom endpoint API key, falling back to LLM_API_KEY."""
        if self.CUSTOM_LLM_API_KEY:
            return self.CUSTOM_LLM_API_KEY.get_secret_value()
        return self.get_llm_api_key()


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Loads settings from environment variables and .env file on first call.
    Subsequent calls return the cached instance.

    Returns:
        Settings: The application settings instance

    Raises:
        ValidationError: If required environment variables are missing or invalid
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton. Useful for testing."""
    global _settings
    _settings = None
