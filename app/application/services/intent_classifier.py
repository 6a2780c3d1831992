"""Intent classification for chat messages (pure, no I/O).

Biased toward FORUM_SEARCH: an unnecessary search is cheap, a missed
forum thread is not. Only whole-message salutations count as greetings
and only closed-form knowledge questions skip retrieval.
"""

import re

from app.domain.enums import UserIntent

_GREETING_RE = re.compile(
    r"^(hi|hello|hey|yo|sup|hii+|heyy+|good\s*(morning|afternoon|evening))[\s!.,?]*$",
    re.IGNORECASE,
)

_GENERAL_QUESTION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^what\s+is\s+(the\s+)?(definition|meaning)\s+of\b", re.IGNORECASE),
    re.compile(r"^(define|explain|describe)\s+the\s+(concept|term|word)\b", re.IGNORECASE),
    re.compile(
        r"^(who|what|when|where)\s+(is|was|were|are)\s+[a-z]+\s*(in\s+history)?$",
        re.IGNORECASE,
    ),
    re.compile(r"^how\s+(does|do)\s+[a-z]+\s+work\s*\?*$", re.IGNORECASE),
    re.compile(r"^what\s+year\s+(did|was)\b", re.IGNORECASE),
    re.compile(r"^(calculate|compute|solve)\b", re.IGNORECASE),
)


def classify_intent(message: str) -> UserIntent:
    """Classify a chat message.

    Args:
        message: Raw user message.

    Returns:
        GREETING, GENERAL_QUESTION, or FORUM_SEARCH (default).
    """
    text = message.strip().lower()
    if _GREETING_RE.match(text):
        return UserIntent.GREETING
    if any(pattern.search(text) for pattern in _GENERAL_QUESTION_PATTERNS):
        return UserIntent.GENERAL_QUESTION
    return UserIntent.FORUM_SEARCH
