"""Time-boxed cache of the forum's visible tag taxonomy."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from app.application.interfaces.repositories import ITagRepository
from app.domain.entities import TagInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TagCacheEntry:
    """Tags as loaded at fetched_at (clock seconds)."""

    tags: tuple[TagInfo, ...]
    fetched_at: float


class TagCatalog:
    """Process-wide tag cache shared by all concurrent requests.

    Refreshed lazily by whichever request first sees an expired entry.
    There is no lock: two requests refreshing at once both load the same
    taxonomy and the last write wins. A failed refresh returns [] and
    leaves the cache untouched so the next request retries.
    """

    def __init__(
        self,
        ttl_seconds: float = 600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: TagCacheEntry | None = None

    def is_fresh(self) -> bool:
        """Return True if a cached entry exists and is younger than the TTL."""
        return (
            self._entry is not None
            and self._clock() - self._entry.fetched_at < self.ttl_seconds
        )

    async def get_tags(self, tag_repo: ITagRepository) -> list[TagInfo]:
        """Return the visible tags, loading through tag_repo when stale.

        Args:
            tag_repo: Loader used only on a cache miss (request-scoped).

        Returns:
            Tags in display order; [] when loading fails.
        """
        if self.is_fresh():
            return list(self._entry.tags)
        try:
            tags = await tag_repo.list_visible_tags()
        except Exception:
            logger.exception("Failed to load tag catalog")
            return []
        self._entry = TagCacheEntry(tags=tuple(tags), fetched_at=self._clock())
        logger.debug("Tag catalog refreshed: %d tags", len(tags))
        return list(tags)
