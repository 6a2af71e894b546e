"""Writer Agent - Article and title generation from an edited analysis.

Second model round trip. Sends the (possibly hand-edited) analysis with a
versioned generation prompt, then recovers the article body and the title
candidates from the delimiter-tagged response.

Public API:
    generate_article: Run the generation stage for one analysis
    parse_generation_response: Pure parser for a generation response
    GeneratedArticle: Immutable dataclass with article, titles and metadata

Parsing contract:
    1. The whole response is sanitized first (bold, headings, labels).
    2. Article: text inside [ARTICLE_START]/[ARTICLE_END]; else the part
       before ===TITLES===; else the whole cleaned response.
    3. Titles: text inside [TITLE_START]/[TITLE_END]; else the part after
       ===TITLES===; else nothing, reported as TITLES_FAILED_PLACEHOLDER.

Example:
    >>> generated = await generate_article(analysis_text)
    >>> generated.titles[0]
    '年薪百万的产品经理，到底在透支什么'
"""

from dataclasses import dataclass
from typing import Literal

from recreator.agents.analyzer import count_chars
from recreator.integrations.llm_client import generate_text
from recreator.integrations.prompts import (
    ARTICLE_END_TAG,
    ARTICLE_START_TAG,
    LATEST_GENERATION_PROMPT_VERSION,
    TITLE_END_TAG,
    TITLE_START_TAG,
    TITLES_SEPARATOR,
    get_generation_prompt,
)
from recreator.text import find_tagged, parse_title_lines, sanitize, split_on_separator

TITLES_FAILED_PLACEHOLDER = "生成标题失败"

OutputFormat = Literal["tags", "separator", "fallback"]


@dataclass(frozen=True)
class GeneratedArticle:
    """A generated article with its candidate titles.

    Attributes:
        article: Article body, sanitized and trimmed
        titles: Candidate titles, one per entry, numbering removed
        titles_text: Title block as displayed (or the failure placeholder)
        output_format: Which output contract the response matched:
            "tags", "separator", or "fallback" (neither)
        char_count: Non-whitespace character count of the article
        raw_response: Model output before cleanup
    """

    article: str
    titles: tuple[str, ...]
    titles_text: str
    output_format: OutputFormat
    char_count: int
    raw_response: str


def parse_generation_response(response: str | None) -> GeneratedArticle:
    """Split a generation response into article and titles.

    Pure function; never raises on malformed model output.

    Examples:
        >>> parsed = parse_generation_response(
        ...     "[ARTICLE_START]正文[ARTICLE_END][TITLE_START]标题一\\n标题二[TITLE_END]"
        ... )
        >>> parsed.article, parsed.titles, parsed.output_format
        ('正文', ('标题一', '标题二'), 'tags')
        >>> parse_generation_response("只有正文").titles_text
        '生成标题失败'
    """
    raw = response or ""
    cleaned = sanitize(raw)

    article = find_tagged(cleaned, ARTICLE_START_TAG, ARTICLE_END_TAG)
    titles_block = find_tagged(cleaned, TITLE_START_TAG, TITLE_END_TAG)
    output_format: OutputFormat = "tags"

    if article is None or titles_block is None:
        head, tail = split_on_separator(cleaned, TITLES_SEPARATOR)
        if tail is not None:
            # Separator contract; a stray article tag pair still wins for the body
            article = article if article is not None else head
            titles_block = titles_block if titles_block is not None else tail
            output_format = "separator"
        elif article is None and titles_block is None:
            output_format = "fallback"

    if article is None:
        article = cleaned.strip()

    titles = parse_title_lines(titles_block)
    titles_text = titles_block if titles_block else TITLES_FAILED_PLACEHOLDER

    return GeneratedArticle(
        article=article,
        titles=titles,
        titles_text=titles_text,
        output_format=output_format,
        char_count=count_chars(article),
        raw_response=raw,
    )


def _build_generation_prompt(analysis_text: str, prompt_version: int) -> str:
    template = get_generation_prompt(prompt_version)
    return template.format(analysis_text=analysis_text.strip())


async def generate_article(
    analysis_text: str,
    *,
    prompt_version: int = LATEST_GENERATION_PROMPT_VERSION,
    model: str | None = None,
    temperature: float | None = None,
) -> GeneratedArticle:
    """Write a finished article and title candidates from an analysis.

    Args:
        analysis_text: Analysis from the first stage, possibly edited by hand
        prompt_version: Generation prompt version (1 = separator, 2 = tags)
        model: Optional LLM model override
        temperature: Optional sampling temperature (defaults to LLM_TEMPERATURE)

    Returns:
        GeneratedArticle parsed from the model response

    Raises:
        ValueError: If analysis_text is empty or prompt_version is unknown
        LLMConfigurationError: If no API key is configured
        LLMRetryExhausted: If LLM generation fails after retries
    """
    if not analysis_text or not analysis_text.strip():
        raise ValueError("analysis_text cannot be empty")

    prompt = _build_generation_prompt(analysis_text, prompt_version)
    response = await generate_text(prompt, model=model, temperature=temperature)

    return parse_generation_response(response)
