"""Markdown and editorial-label cleanup for model output.

The prompts forbid bold text, headings and labelled paragraphs, but models
still produce them. Everything shown to the user or parsed for tags goes
through sanitize() first.

Public API:
    sanitize: Strip bold markers, heading markers and label prefixes
    CLEANUP_RULES: The ordered (pattern, replacement) rule sequence
"""

import re

# Labels the generation prompt forbids at the start of a paragraph
EDITORIAL_LABELS: tuple[str, ...] = ("开头", "结尾", "启示", "小结", "总结")

CLEANUP_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    # **bold**
    (re.compile(r"\*\*"), ""),
    # "## Heading" -> "Heading"
    (re.compile(r"^[ \t]*#{1,6}[ \t]*", re.MULTILINE), ""),
    # "开头：", "（总结）:", "小结】：" at line start
    (
        re.compile(
            r"^[ \t]*[（(]?(?:" + "|".join(EDITORIAL_LABELS) + r")[)）】]?[：:][ \t]*",
            re.MULTILINE,
        ),
        "",
    ),
)


def _apply_rules(text: str) -> str:
    for pattern, replacement in CLEANUP_RULES:
        text = pattern.sub(replacement, text)
    return text


def sanitize(text: str | None) -> str:
    """Remove markdown artifacts and editorial labels from model output.

    Rules are applied in order and the sequence is repeated until the text
    stops changing, so nested artifacts such as "# # 标题" or "开头：## 标题"
    are fully removed and sanitize(sanitize(x)) == sanitize(x). Every rule only
    deletes characters, so the loop terminates.

    Args:
        text: Raw model output (None is treated as empty)

    Returns:
        Cleaned text. Inner whitespace and line structure are preserved.

    Examples:
        >>> sanitize("## 核心结论\\n**重点**在这里")
        '核心结论\\n重点在这里'
        >>> sanitize("开头：那天下午")
        '那天下午'
        >>> sanitize("")
        ''
    """
    if not text:
        return ""

    previous = None
    cleaned = text
    while cleaned != previous:
        previous = cleaned
        cleaned = _apply_rules(cleaned)

    return cleaned
