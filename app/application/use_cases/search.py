"""Keyword search use case: three-tier fallback over IPostSearchRepository.

Tier 1 full-text relevance (widened by content substrings), tier 2
substring match on content or title, tier 3 most recent opening posts.
Neither search() nor by_tag() ever raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.core.constants import (
    RECENT_POSTS_LIMIT_MAX,
    SEARCH_LIMIT_MAX,
    SEARCH_LIMIT_MIN,
    SEARCH_MAX_SUBSTRING_TERMS,
    SEARCH_MAX_TERMS,
    SEARCH_TERM_MIN_LENGTH,
)
from app.domain.entities import SearchResult
from app.shared.telemetry.tracing import add_span_attributes, add_span_event, traced
from app.shared.utils.sanitization import escape_like

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IPostSearchRepository

logger = logging.getLogger(__name__)

_EDGE_PUNCTUATION = "?!.,;:\"'()[]"


def clamp_limit(limit: int) -> int:
    """Clamp a requested result count to [1, 50]."""
    return min(max(SEARCH_LIMIT_MIN, limit), SEARCH_LIMIT_MAX)


@dataclass(frozen=True)
class SearchTerms:
    """Query terms prepared for the repository tiers."""

    terms: list[str]

    @classmethod
    def from_query(cls, query: str) -> "SearchTerms":
        """Lower-cased whitespace tokens of length >= 2, at most 10.

        Sentence punctuation around a token is dropped ("here?" -> "here").
        """
        stripped = (t.strip(_EDGE_PUNCTUATION) for t in query.lower().split())
        tokens = [t for t in stripped if len(t) >= SEARCH_TERM_MIN_LENGTH]
        return cls(terms=tokens[:SEARCH_MAX_TERMS])

    @property
    def fulltext_query(self) -> str:
        return " ".join(self.terms)

    @property
    def like_patterns(self) -> list[str]:
        """Escaped %term% patterns for the first 5 terms."""
        return [f"%{escape_like(t)}%" for t in self.terms[:SEARCH_MAX_SUBSTRING_TERMS]]

    def __bool__(self) -> bool:
        return bool(self.terms)


def _by_score(results: list[SearchResult]) -> list[SearchResult]:
    return sorted(results, key=lambda r: r.score, reverse=True)


class SearchService:
    """Hybrid keyword search and tag-based retrieval over forum posts."""

    def __init__(self, search_repo: "IPostSearchRepository") -> None:
        self.search_repo = search_repo

    @traced("search.keyword")
    async def search(self, query: str, limit: int = 10) -> list[SearchResult]:
        """Relevance-ranked posts for query, best first.

        An empty tier-1 result retries with tier 2 (which also matches
        discussion titles). Tier 3 is used when tier 2 raises or when the
        query has no usable terms.
        """
        limit = clamp_limit(limit)
        terms = SearchTerms.from_query(query)
        try:
            if not terms:
                return await self._recent(limit)
            results = await self._fulltext(terms, limit)
            if results is not None:
                add_span_attributes(search_tier=1, result_count=len(results))
                return results
            try:
                results = await self.search_repo.substring_search(terms.like_patterns, limit)
            except Exception as e:
                logger.warning("Substring search failed, using recent posts: %s", e)
                add_span_event("search.substring_failed")
                return await self._recent(limit)
            add_span_attributes(search_tier=2, result_count=len(results))
            return _by_score(results)
        except Exception:
            logger.exception("Keyword search failed for all tiers")
            return []

    async def _fulltext(
        self, terms: SearchTerms, limit: int
    ) -> list[SearchResult] | None:
        """Tier 1. None means fall through to tier 2 (error or no hits)."""
        try:
            results = await self.search_repo.fulltext_search(
                terms.fulltext_query, terms.like_patterns, limit
            )
        except Exception as e:
            logger.warning("Full-text search unavailable, falling back to substring: %s", e)
            add_span_event("search.fulltext_failed")
            return None
        if not results:
            logger.debug("Full-text search returned nothing, trying substring match")
            return None
        return _by_score(results)

    async def _recent(self, limit: int) -> list[SearchResult]:
        """Tier 3."""
        results = await self.search_repo.recent_opening_posts(
            min(limit, RECENT_POSTS_LIMIT_MAX)
        )
        add_span_attributes(search_tier=3, result_count=len(results))
        return results

    @traced("search.by_tag")
    async def by_tag(self, tag_slug: str, limit: int = 5) -> list[SearchResult]:
        """Opening posts of discussions tagged tag_slug, newest first; [] on failure."""
        if not tag_slug:
            return []
        try:
            return await self.search_repo.posts_by_tag(tag_slug, clamp_limit(limit))
        except Exception as e:
            logger.warning("Tag retrieval failed for %r: %s", tag_slug, e)
            return []
