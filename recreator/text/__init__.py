"""Text cleanup and tag extraction for model output."""

from recreator.text.extraction import (
    extract_tagged,
    find_tagged,
    parse_title_lines,
    split_on_separator,
)
from recreator.text.sanitizer import CLEANUP_RULES, sanitize

__all__ = [
    "sanitize",
    "CLEANUP_RULES",
    "find_tagged",
    "extract_tagged",
    "split_on_separator",
    "parse_title_lines",
]
