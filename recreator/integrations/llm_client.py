"""Unified LLM client for chat completions using LiteLLM.

This module provides a single async interface for both model round trips.
Requests go to an OpenAI-compatible relay when CUSTOM_LLM_BASE_URL is set,
otherwise to the hosted LLM_PROVIDER. Every request carries the fixed system
message plus the user prompt.

Public API:
    generate_text: Generate text from a prompt using the configured provider
    LLMRetryExhausted: Raised when retries are exhausted
    LLMConfigurationError: Raised when no API key is configured

Example:
    >>> text = await generate_text("请用一句话介绍你自己")
    >>> print(text)
"""

import asyncio

import litellm

from recreator.integrations.prompts import SYSTEM_PROMPT_V1
from recreator.utils.config import get_settings
from recreator.utils.logging_config import get_logger


def _get_logger():
    """Get logger instance lazily to avoid module-level import issues."""
    return get_logger(__name__)


class LLMRetryExhausted(Exception):
    """Raised when all retry attempts are exhausted or error is non-retryable.

    This exception is raised when:
    1. All retry attempts fail (total attempts = 1 + LLM_MAX_RETRIES)
    2. A non-retryable error occurs (e.g., authentication error)

    The original exception is attached as the cause via exception chaining.
    """


class LLMConfigurationError(Exception):
    """Raised before any request when the provider cannot be called (e.g. no API key)."""


def _is_retryable_error(error: Exception) -> bool:
    """Determine if an error should trigger a retry.

    Args:
        error: The exception that occurred

    Returns:
        True if the error is retryable, False otherwise
    """
    retryable_types = (
        ConnectionError,
        TimeoutError,
        OSError,
    )

    if isinstance(error, retryable_types):
        return True

    error_str = str(error).lower()

    # Non-retryable: authentication, invalid request, etc.
    if any(
        keyword in error_str
        for keyword in [
            "authentication",
            "invalid api key",
            "unauthorized",
            "401",
            "403",
            "invalid request",
            "400",
        ]
    ):
        return False

    # Retryable: network, rate limit, server errors (5xx)
    if any(
        keyword in error_str
        for keyword in [
            "rate limit",
            "429",
            "timeout",
            "connection",
            "server error",
            "500",
            "502",
            "503",
            "504",
        ]
    ):
        return True

    # Default: retry on unknown errors
    return True


def _get_llm_config(model_override: str | None) -> dict:
    """Get LLM configuration based on priority: custom endpoint > hosted provider.

    Args:
        model_override: Optional model override

    Returns:
        dict: Configuration with keys:
            - model: Model ID
            - base_url: Custom endpoint URL or None
            - api_key: API key to use
            - provider: Provider name passed to LiteLLM

    Raises:
        LLMConfigurationError: If no API key is available for the chosen route
    """
    settings = get_settings()

    # Priority 1: OpenAI-compatible relay
    if settings.CUSTOM_LLM_BASE_URL:
        api_key = settings.get_custom_llm_api_key()
        if not api_key:
            raise LLMConfigurationError(
                "CUSTOM_LLM_API_KEY (or LLM_API_KEY) must be set when CUSTOM_LLM_BASE_URL is used"
            )
        return {
            "model": model_override or settings.CUSTOM_LLM_MODEL or settings.LLM_DEFAULT_MODEL,
            "base_url": settings.CUSTOM_LLM_BASE_URL,
            "api_key": api_key,
            "provider": "openai",
        }

    # Priority 2: Hosted provider
    api_key = settings.get_llm_api_key()
    if not api_key:
        raise LLMConfigurationError("LLM_API_KEY environment variable is not configured")

    return {
        "model": model_override or settings.LLM_DEFAULT_MODEL,
        "base_url": None,
        "api_key": api_key,
        "provider": settings.LLM_PROVIDER,
    }


def _build_messages(prompt: str, system_prompt: str) -> list[dict]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": prompt},
    ]


async def _call_llm_with_retry(  # pylint: disable=too-many-locals
    messages: list[dict],
    config: dict,
    temperature: float,
) -> str:
    """Call LLM with retry logic and exponential backoff.

    Args:
        messages: Chat messages (system + user)
        config: LLM configuration dict from _get_llm_config
        temperature: Sampling temperature

    Returns:
        Generated text, stripped of surrounding whitespace

    Raises:
        LLMRetryExhausted: When retries are exhausted or error is non-retryable
    """
    settings = get_settings()
    logger = _get_logger()
    max_retries = settings.LLM_MAX_RETRIES

    model = config["model"]
    base_url = config["base_url"]
    api_key = config["api_key"]
    provider = config["provider"]

    provider_name = "custom" if base_url else provider

    # Total attempts = 1 initial + max_retries
    for attempt in range(max_retries + 1):
        try:
            logger.debug(
                "LLM attempt %d/%d",
                attempt + 1,
                max_retries + 1,
                extra={
                    "extra_fields": {
                        "provider": provider_name,
                        "model": model,
                        "temperature": temperature,
                        "base_url": base_url if base_url else "default",
                    }
                },
            )

            response = await litellm.acompletion(
                model=model,
                messages=messages,
                temperature=temperature,
                api_key=api_key,
                base_url=base_url,
                timeout=settings.LLM_TIMEOUT,
                custom_llm_provider=provider,
            )

            generated_text = response.choices[0].message.content or ""

            logger.info(
                "LLM request successful",
                extra={
                    "extra_fields": {
                        "provider": provider_name,
                        "model": model,
                        "attempts": attempt + 1,
                        "response_chars": len(generated_text),
                    }
                },
            )

            return generated_text.strip()

        except Exception as e:
            logger.debug("LLM error on attempt %d: %s: %s", attempt + 1, type(e).__name__, str(e))

            if not _is_retryable_error(e):
                logger.error(
                    "LLM non-retryable error",
                    extra={
                        "extra_fields": {
                            "provider": provider_name,
                            "model": model,
                            "error_type": type(e).__name__,
                        }
                    },
                )
                raise LLMRetryExhausted(f"Non-retryable error: {type(e).__name__}") from e

            if attempt == max_retries:
                logger.error(
                    "LLM retries exhausted: %s: %s",
                    type(e).__name__,
                    str(e),
                    extra={
                        "extra_fields": {
                            "provider": provider_name,
                            "model": model,
                            "attempts": attempt + 1,
                            "error_type": type(e).__name__,
                        }
                    },
                )
                raise LLMRetryExhausted(
                    f"All {attempt + 1} attempts failed: {type(e).__name__}: {str(e)}"
                ) from e

            delay = settings.LLM_RETRY_DELAY * (2**attempt)
            logger.debug("Retrying in %ss (attempt %d/%d)", delay, attempt + 2, max_retries + 1)
            await asyncio.sleep(delay)

    # Unreachable: the loop either returns or raises
    raise LLMRetryExhausted("Unexpected retry loop exit")


async def generate_text(
    prompt: str,
    *,
    model: str | None = None,
    temperature: float | None = None,
    system_prompt: str | None = None,
) -> str:
    """Generate text using the configured LLM provider.

    Args:
        prompt: User prompt (a fully formatted template)
        model: Optional model override. Defaults to CUSTOM_LLM_MODEL when a
               custom endpoint is configured, else LLM_DEFAULT_MODEL.
        temperature: Sampling temperature. Defaults to LLM_TEMPERATURE (0.8).
        system_prompt: System message. Defaults to LLM_SYSTEM_PROMPT, then
                       SYSTEM_PROMPT_V1.

    Returns:
        Generated text with surrounding whitespace removed. An empty
        completion is returned as "".

    Raises:
        ValueError: If the prompt is empty or temperature is out of range
        LLMConfigurationError: If no API key is configured
        LLMRetryExhausted: When all retry attempts fail or error is non-retryable

    Notes:
        - Priority: CUSTOM_LLM_BASE_URL > LLM_PROVIDER
        - Total attempts = 1 initial + LLM_MAX_RETRIES
        - Logs provider, model, and attempt count (never prompt or generated text)
    """
    if not prompt or not prompt.strip():
        raise ValueError("Prompt cannot be empty")

    settings = get_settings()

    if temperature is None:
        temperature = settings.LLM_TEMPERATURE

    if not 0.0 <= temperature <= 2.0:
        raise ValueError("Temperature must be between 0.0 and 2.0")

    system_prompt = system_prompt or settings.LLM_SYSTEM_PROMPT or SYSTEM_PROMPT_V1

    config = _get_llm_config(model)

    return await _call_llm_with_retry(
        messages=_build_messages(prompt, system_prompt),
        config=config,
        temperature=temperature,
    )
