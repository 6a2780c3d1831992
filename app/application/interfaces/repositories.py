"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities only; no infrastructure imports.
Implementations may raise on database errors; the application layer owns
the fallback policy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.entities import AuthenticatedUser, AuthResult, SearchResult, TagInfo


# Forum post search interface
class IPostSearchRepository(Protocol):
    """Protocol for read-only post retrieval over the forum schema.

    Every method returns only approved, non-hidden comment posts in
    non-hidden, non-private discussions. Content is already plain text.
    """

    async def fulltext_search(
        self, fulltext_query: str, like_patterns: list[str], limit: int
    ) -> list[SearchResult]:
        """Relevance-ranked full-text match OR'd with content substring patterns."""

    async def substring_search(
        self, like_patterns: list[str], limit: int
    ) -> list[SearchResult]:
        """Substring match on content or discussion title, newest first."""

    async def recent_opening_posts(self, limit: int) -> list[SearchResult]:
        """Most recent opening posts (post number 1)."""

    async def posts_by_tag(self, tag_slug: str, limit: int) -> list[SearchResult]:
        """Opening posts of discussions carrying the tag, newest first."""


# Tag taxonomy interface
class ITagRepository(Protocol):
    """Protocol for loading the visible tag taxonomy."""

    async def list_visible_tags(self) -> list[TagInfo]:
        """Return all non-hidden tags in display order."""


# Session / access interface
class ISessionRepository(Protocol):
    """Protocol for the external authorizer (session token → identity)."""

    async def validate_session(self, token: str | None) -> AuthResult:
        """Resolve a session token. Never raises; failures are unauthenticated results."""

    async def accessible_private_discussions(
        self, user: AuthenticatedUser, discussion_ids: set[int]
    ) -> set[int]:
        """Subset of discussion_ids the user may read as a recipient (directly or by group)."""
