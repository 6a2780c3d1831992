"""Shared utilities: datetime and text sanitization."""

from app.shared.utils.datetime import ensure_utc, format_short_date, utc_now
from app.shared.utils.sanitization import clean_html, escape_like, truncate

__all__ = [
    "utc_now",
    "ensure_utc",
    "format_short_date",
    "clean_html",
    "escape_like",
    "truncate",
]
