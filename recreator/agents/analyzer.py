"""Analyzer Agent - Structured breakdown of a source article.

First model round trip. Decomposes pasted source text into the eight-part
analysis defined by ANALYSIS_PROMPT_V1 (theme, stance, logic skeleton,
facts, reader pain points, opinion tension, rhythm template, re-creation
angles). The result is meant to be edited by a human before generation.

Public API:
    analyze_source: Run the analysis stage for one source text
    AnalysisResult: Immutable dataclass with the cleaned analysis

Example:
    >>> result = await analyze_source(source_text)
    >>> print(result.content)
    1. 主题与核心结论（2–3 句）
    ...
"""

from dataclasses import dataclass

from recreator.integrations.llm_client import generate_text
from recreator.integrations.prompts import ANALYSIS_PROMPT_V1
from recreator.text import sanitize

# Shown instead of an empty completion so the edit step always has something
EMPTY_ANALYSIS_PLACEHOLDER = "分析结果为空，请重试或检查文章内容。"


@dataclass(frozen=True)
class AnalysisResult:
    """Cleaned output of the analysis stage.

    Attributes:
        content: Sanitized analysis text, ready for human editing
        raw_response: Model output before cleanup
        char_count: Number of non-whitespace characters in content
        is_placeholder: True when the model returned nothing and content is
            the empty-result placeholder
    """

    content: str
    raw_response: str
    char_count: int
    is_placeholder: bool


def count_chars(text: str) -> int:
    """Count non-whitespace characters.

    Whitespace word counts are meaningless for Chinese text, so length is
    measured in characters.

    Examples:
        >>> count_chars("年薪 百万\\n")
        4
        >>> count_chars("")
        0
    """
    if not text:
        return 0
    return sum(1 for ch in text if not ch.isspace())


def _build_analysis_prompt(source_text: str) -> str:
    return ANALYSIS_PROMPT_V1.format(source_text=source_text.strip())


async def analyze_source(
    source_text: str,
    *,
    model: str | None = None,
    temperature: float | None = None,
) -> AnalysisResult:
    """Produce a structured, editable analysis of a source article.

    Args:
        source_text: Article text pasted by the user
        model: Optional LLM model override
        temperature: Optional sampling temperature (defaults to LLM_TEMPERATURE)

    Returns:
        AnalysisResult with sanitized content

    Raises:
        ValueError: If source_text is empty
        LLMConfigurationError: If no API key is configured
        LLMRetryExhausted: If LLM generation fails after retries

    Notes:
        - An empty completion does not raise; the placeholder text is
          returned so the user can retry or write the analysis by hand
        - LLM call is the only side effect
    """
    if not source_text or not source_text.strip():
        raise ValueError("source_text cannot be empty")

    prompt = _build_analysis_prompt(source_text)
    response = await generate_text(prompt, model=model, temperature=temperature)

    is_placeholder = not response or not response.strip()
    content = sanitize(EMPTY_ANALYSIS_PLACEHOLDER if is_placeholder else response)

    return AnalysisResult(
        content=content,
        raw_response=response or "",
        char_count=count_chars(content),
        is_placeholder=is_placeholder,
    )
