"""Text sanitization for forum content and user-supplied search terms."""

import html
import re

import nh3

_TAG_BOUNDARY_RE = re.compile(r"(<[^>]*>)")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_html(value: str | None) -> str:
    """Strip all markup from stored post content and normalize whitespace.

    Forum posts are stored as HTML/XML fragments. Every tag is removed with
    nh3 (nothing allowlisted; script/style bodies dropped), entities are
    decoded, and runs of whitespace collapse to a single space. Tag
    boundaries become spaces so adjacent paragraphs do not fuse words.

    Args:
        value: Raw post content; None is treated as empty.

    Returns:
        Plain text, stripped.
    """
    if not value:
        return ""
    spaced = _TAG_BOUNDARY_RE.sub(r" \1 ", value)
    text = nh3.clean(spaced, tags=set(), attributes={})
    text = html.unescape(text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def escape_like(value: str) -> str:
    """Escape LIKE wildcards (% and _) and the escape char so value matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def truncate(value: str, max_chars: int, marker: str = "...") -> str:
    """Return value cut to max_chars, with marker appended only when cut."""
    if len(value) <= max_chars:
        return value
    return value[:max_chars] + marker
