"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import (
    AuthenticatedUser,
    AuthResult,
    ForumContext,
    PostSuggestion,
    SearchResult,
    TagInfo,
)
from app.domain.enums import UserIntent
from app.domain.exceptions import (
    ForumRagException,
    LLMException,
    LLMNotConfiguredException,
    LLMResponseException,
    SqlNotConfiguredException,
    ValidationException,
)

__all__ = [
    # Entities
    "AuthResult",
    "AuthenticatedUser",
    "ForumContext",
    "PostSuggestion",
    "SearchResult",
    "TagInfo",
    # Enums
    "UserIntent",
    # Exceptions
    "ForumRagException",
    "LLMException",
    "LLMNotConfiguredException",
    "LLMResponseException",
    "SqlNotConfiguredException",
    "ValidationException",
]
