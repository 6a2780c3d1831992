"""Domain entities.

Pure domain models; no ORM or persistence concerns.
"""

from app.domain.entities.forum_context import ForumContext, PostSuggestion
from app.domain.entities.search_result import SearchResult
from app.domain.entities.tag import TagInfo
from app.domain.entities.user import AuthenticatedUser, AuthResult

__all__ = [
    "AuthResult",
    "AuthenticatedUser",
    "ForumContext",
    "PostSuggestion",
    "SearchResult",
    "TagInfo",
]
