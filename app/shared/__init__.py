"""Shared utilities: telemetry and text/date helpers.

Used by application and infrastructure. No business logic.
"""

from app.shared.utils import (
    clean_html,
    ensure_utc,
    escape_like,
    format_short_date,
    truncate,
    utc_now,
)

__all__ = [
    "clean_html",
    "ensure_utc",
    "escape_like",
    "format_short_date",
    "truncate",
    "utc_now",
]
