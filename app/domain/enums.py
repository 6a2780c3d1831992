"""Domain enumerations for the forum retrieval service."""

from enum import Enum


class UserIntent(str, Enum):
    """What the user wants from a chat message.

    Only FORUM_SEARCH triggers retrieval; the other two are answered
    from general knowledge or a canned greeting by the calling layer.
    """

    FORUM_SEARCH = "forum_search"
    GENERAL_QUESTION = "general_question"
    GREETING = "greeting"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid intent values as strings."""
        return [intent.value for intent in cls]
