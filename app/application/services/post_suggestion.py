"""Draft-post suggestion offered when retrieval finds nothing."""

from __future__ import annotations

import re

from app.core.constants import DEFAULT_SUGGESTED_TAG, ELLIPSIS, SUGGESTION_TITLE_MAX
from app.domain.entities import PostSuggestion

_TRAILING_PUNCTUATION_RE = re.compile(r"[?!.,]+$")

# First match wins; order matters (e.g. "work plan" is professional, not plan-meet).
_TAG_KEYWORDS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("professional", re.compile(r"job|career|intern|work|freelance|hire|hiring|placement|company")),
    ("notes-links", re.compile(r"study|exam|course|subject|semester|notes|resource|cgpa|marks")),
    ("confession", re.compile(r"confession|feeling|sad|happy|emotion|love|crush|vent|rant")),
    ("plan-meet", re.compile(r"meet|trip|travel|plan|weekend|event|hangout|party")),
    ("stock-market", re.compile(r"stock|invest|market|trading|crypto|money|finance")),
    ("gaming", re.compile(r"game|gaming|play|esports|valorant|bgmi|pubg|cod")),
    ("music", re.compile(r"music|song|artist|concert|band|spotify")),
)


def suggest_tag(text: str) -> str:
    """Pick a tag slug by keyword category; 'general' when nothing matches."""
    lowered = text.lower()
    for slug, pattern in _TAG_KEYWORDS:
        if pattern.search(lowered):
            return slug
    return DEFAULT_SUGGESTED_TAG


def suggest_title(query: str) -> str:
    """Title from the query: trailing punctuation removed, trimmed, capped at 100 chars.

    All-lowercase input is title-cased word by word.
    """
    title = _TRAILING_PUNCTUATION_RE.sub("", query).strip()
    if len(title) > SUGGESTION_TITLE_MAX:
        title = title[: SUGGESTION_TITLE_MAX - len(ELLIPSIS)] + ELLIPSIS
    if title == title.lower():
        title = " ".join(word[:1].upper() + word[1:] for word in title.split(" "))
    return title


def generate_post_suggestion(query: str, forum_url: str) -> PostSuggestion:
    """Build a friendly draft discussion inviting the community to answer."""
    clean_query = _TRAILING_PUNCTUATION_RE.sub("", query).strip()
    content = (
        "Hey everyone! 👋\n\n"
        f"{clean_query}\n\n"
        "Would love to hear from you if you have any experience or thoughts on this! 🙏"
    )
    return PostSuggestion(
        title=suggest_title(query),
        content=content,
        tag=suggest_tag(query),
        link=forum_url,
    )
