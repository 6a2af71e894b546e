"""Section extraction from delimiter-tagged model output.

The generation prompts ask the model to wrap its answer in literal markers,
e.g. ``[ARTICLE_START] ... [ARTICLE_END]``, or to split article and titles
with a plain ``===TITLES===`` line. Models follow this loosely: tags change
case, get surrounded by chatter, or go missing. The helpers here recover what
they can and never raise on malformed input.

Public API:
    find_tagged: Inner text of the first start/end tag pair, or None
    extract_tagged: Like find_tagged, falling back to the whole input
    split_on_separator: Split text at the first plain-text separator
    parse_title_lines: Turn a title block into a tuple of clean titles
"""

import re

# "1." "2)" "3、" "(4)" "（5）" "- " "* " "• " "· "
_LIST_MARKER = re.compile(
    r"^\s*(?:[•·]\s*|[-*]\s+|\d{1,2}(?:[.)](?=\s)|[、．])\s*|[（(]\d{1,2}[)）]\s*)"
)


def find_tagged(text: str | None, start_tag: str, end_tag: str) -> str | None:
    """Return the trimmed text between the first start tag and the next end tag.

    Matching is case-insensitive and literal (tags are not regexes). The end
    tag is searched only after the start tag, so an end tag that appears
    earlier in the text is ignored.

    Args:
        text: Model output to search
        start_tag: Opening marker, e.g. "[ARTICLE_START]"
        end_tag: Closing marker, e.g. "[ARTICLE_END]"

    Returns:
        Inner text with surrounding whitespace removed, or None when either
        tag is missing.

    Raises:
        ValueError: If a tag is empty

    Examples:
        >>> find_tagged("x [A]hello[/A] y", "[A]", "[/A]")
        'hello'
        >>> find_tagged("no tags here", "[A]", "[/A]") is None
        True
    """
    if not start_tag or not end_tag:
        raise ValueError("start_tag and end_tag cannot be empty")

    if not text:
        return None

    pattern = re.compile(
        re.escape(start_tag) + r"(.*?)" + re.escape(end_tag),
        re.IGNORECASE | re.DOTALL,
    )
    match = pattern.search(text)
    if match is None:
        return None

    return match.group(1).strip()


def extract_tagged(text: str | None, start_tag: str, end_tag: str) -> str:
    """Return the tagged section, or the whole trimmed input if tags are absent.

    Examples:
        >>> extract_tagged("[ARTICLE_START]正文[ARTICLE_END]", "[ARTICLE_START]", "[ARTICLE_END]")
        '正文'
        >>> extract_tagged("  just text  ", "[ARTICLE_START]", "[ARTICLE_END]")
        'just text'
    """
    inner = find_tagged(text, start_tag, end_tag)
    if inner is None:
        return (text or "").strip()
    return inner


def split_on_separator(text: str | None, separator: str) -> tuple[str, str | None]:
    """Split text at the first case-insensitive occurrence of a separator.

    Args:
        text: Model output
        separator: Plain-text marker such as "===TITLES==="

    Returns:
        (head, tail) with both parts trimmed. tail is None when the separator
        does not occur.

    Examples:
        >>> split_on_separator("正文\\n===TITLES===\\n标题一", "===TITLES===")
        ('正文', '标题一')
        >>> split_on_separator("正文", "===TITLES===")
        ('正文', None)
    """
    if not separator:
        raise ValueError("separator cannot be empty")

    text = text or ""
    match = re.search(re.escape(separator), text, re.IGNORECASE)
    if match is None:
        return text.strip(), None

    return text[: match.start()].strip(), text[match.end():].strip()


def parse_title_lines(block: str | None) -> tuple[str, ...]:
    """Split a title block into individual titles.

    One title per line. List bullets and numbering are removed, blank lines
    dropped and duplicates collapsed (first occurrence wins).

    Examples:
        >>> parse_title_lines("1. 年薪百万的代价\\n- 风口上的中层\\n\\n1. 年薪百万的代价")
        ('年薪百万的代价', '风口上的中层')
    """
    if not block:
        return ()

    titles: list[str] = []
    seen: set[str] = set()
    for line in block.splitlines():
        title = _LIST_MARKER.sub("", line, count=1).strip()
        if not title or title in seen:
            continue
        seen.add(title)
        titles.append(title)

    return tuple(titles)
