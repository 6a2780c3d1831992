"""Forum context use case: the retrieval pipeline for one chat message.

classify → (catalog → tag match) ∥ expand → fan-out search → merge →
rerank → access filter → format (+ post suggestion when empty).

Every stage degrades to an empty/default value. The use case raises only
ValidationException for a non-string message and SqlNotConfiguredException
for a forum search while the forum database is not configured; greetings
and general questions are answered without it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from app.application.services.access_filter import (
    apply_access_filter,
    private_discussion_ids,
)
from app.application.services.intent_classifier import classify_intent
from app.application.services.post_suggestion import generate_post_suggestion
from app.domain.entities import AuthenticatedUser, ForumContext, SearchResult, TagInfo
from app.domain.enums import UserIntent
from app.domain.exceptions import SqlNotConfiguredException, ValidationException
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.application.interfaces.repositories import ISessionRepository, ITagRepository
    from app.application.services.context_formatter import ContextFormatter
    from app.application.services.query_expander import QueryExpander
    from app.application.services.reranker import Reranker
    from app.application.services.tag_catalog import TagCatalog
    from app.application.services.tag_matcher import TagMatcher
    from app.application.use_cases.search import SearchService

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, kw_only=True)
class RetrievalOptions:
    """Fan-out sizes and limits for one pipeline run."""

    main_limit: int = 6
    alternate_limit: int = 4
    alternate_queries: int = 1
    tag_limit: int = 5
    candidate_pool_size: int = 20
    rerank_top_k: int = 6
    branch_timeout_seconds: float = 10.0


def merge_results(
    branches: list[list[SearchResult]], pool_size: int
) -> list[SearchResult]:
    """Merge branch results into a candidate pool.

    branches must already be in priority order (primary query, alternates,
    tags). Duplicates by post_id keep the first occurrence, so a post keeps
    its highest-priority score. The stable sort by score then keeps
    priority order among equal scores.
    """
    seen: dict[int, SearchResult] = {}
    for branch in branches:
        for result in branch:
            seen.setdefault(result.post_id, result)
    merged = sorted(seen.values(), key=lambda r: r.score, reverse=True)
    return merged[:pool_size]


async def _guarded(
    label: str,
    call: Callable[[], Awaitable[T]],
    default: T,
    timeout: float | None = None,
) -> T:
    """Run one branch; any failure or timeout yields default without touching siblings."""
    try:
        if timeout is None:
            return await call()
        return await asyncio.wait_for(call(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("%s timed out after %ss", label, timeout)
    except Exception:
        logger.exception("%s failed", label)
    return default


class ForumContextService:
    """Builds ForumContext for a chat message (no state across requests)."""

    def __init__(
        self,
        *,
        search_service: "SearchService",
        tag_repo: "ITagRepository",
        tag_catalog: "TagCatalog",
        session_repo: "ISessionRepository",
        query_expander: "QueryExpander",
        tag_matcher: "TagMatcher",
        reranker: "Reranker",
        formatter: "ContextFormatter",
        forum_url: str,
        options: RetrievalOptions | None = None,
        database_ready: bool = True,
    ) -> None:
        self.search_service = search_service
        self.tag_repo = tag_repo
        self.tag_catalog = tag_catalog
        self.session_repo = session_repo
        self.query_expander = query_expander
        self.tag_matcher = tag_matcher
        self.reranker = reranker
        self.formatter = formatter
        self.forum_url = forum_url
        self.options = options or RetrievalOptions()
        self.database_ready = database_ready

    @traced("forum_context.build")
    async def build(self, message: str, token: str | None = None) -> ForumContext:
        """Run the pipeline for message on behalf of the session token's owner.

        Args:
            message: The user's chat message.
            token: Optional forum session token; absent or invalid means anonymous.

        Returns:
            ForumContext; empty for greetings and general questions.

        Raises:
            ValidationException: If message is not a string.
            SqlNotConfiguredException: If message needs a forum search and
                the database is not configured.
        """
        if not isinstance(message, str):
            raise ValidationException("Message must be a string", field="message")

        user = await self._resolve_user(token)
        intent = classify_intent(message)
        add_span_attributes(intent=intent.value, authenticated=user is not None)
        if intent is not UserIntent.FORUM_SEARCH:
            return ForumContext(intent=intent, user=user)
        if not self.database_ready:
            raise SqlNotConfiguredException()

        queries, tags = await asyncio.gather(
            _guarded("Query expansion", lambda: self.query_expander.expand(message), [message]),
            self._match_tags(message),
        )
        branches = await self._fan_out(message, queries, tags)
        candidates = merge_results(branches, self.options.candidate_pool_size)

        top_k = self.options.rerank_top_k
        ranked = await _guarded(
            "Reranking",
            lambda: self.reranker.rerank(message, candidates, top_k),
            candidates[:top_k],
        )
        results = await self._filter(ranked, user)
        add_span_attributes(
            query_count=len(queries),
            tag_count=len(tags),
            candidate_count=len(candidates),
            result_count=len(results),
        )
        logger.info(
            "Forum context: %d queries, %d tags, %d candidates, %d results",
            len(queries),
            len(tags),
            len(candidates),
            len(results),
        )

        suggestion = None
        if not results:
            suggestion = generate_post_suggestion(message, self.forum_url)
        return ForumContext(
            intent=intent,
            search_results=results,
            formatted_context=self.formatter.format(results),
            suggestion=suggestion,
            user=user,
        )

    async def _resolve_user(self, token: str | None) -> AuthenticatedUser | None:
        if not token or not self.database_ready:
            return None
        auth = await _guarded(
            "Session validation",
            lambda: self.session_repo.validate_session(token),
            None,
            self.options.branch_timeout_seconds,
        )
        if auth is None or not auth.authenticated:
            return None
        return auth.user

    async def _match_tags(self, message: str) -> list[TagInfo]:
        """Catalog lookup then tag matching (the matcher needs the catalog)."""
        catalog = await _guarded(
            "Tag catalog",
            lambda: self.tag_catalog.get_tags(self.tag_repo),
            [],
            self.options.branch_timeout_seconds,
        )
        if not catalog:
            return []
        return await _guarded(
            "Tag matching", lambda: self.tag_matcher.match(message, catalog), []
        )

    async def _fan_out(
        self, message: str, queries: list[str], tags: list[TagInfo]
    ) -> list[list[SearchResult]]:
        """Run every search branch concurrently; results come back in priority order."""
        opts = self.options
        search = self.search_service
        calls: list[tuple[str, Callable[[], Awaitable[list[SearchResult]]]]] = [
            ("Main query search", lambda: search.search(message, opts.main_limit)),
        ]
        for alternate in queries[1 : 1 + opts.alternate_queries]:
            calls.append((
                "Alternate query search",
                lambda q=alternate: search.search(q, opts.alternate_limit),
            ))
        for tag in tags:
            calls.append((
                f"Tag search ({tag.slug})",
                lambda slug=tag.slug: search.by_tag(slug, opts.tag_limit),
            ))
        return list(
            await asyncio.gather(
                *(
                    _guarded(label, call, [], opts.branch_timeout_seconds)
                    for label, call in calls
                )
            )
        )

    async def _filter(
        self, results: list[SearchResult], user: AuthenticatedUser | None
    ) -> list[SearchResult]:
        """Redact private results; access lookups fail closed."""
        private_ids = private_discussion_ids(results)
        accessible: set[int] = set()
        if user is not None and private_ids:
            accessible = await _guarded(
                "Private discussion access lookup",
                lambda: self.session_repo.accessible_private_discussions(user, private_ids),
                set(),
                self.options.branch_timeout_seconds,
            )
        return apply_access_filter(results, user, accessible)
