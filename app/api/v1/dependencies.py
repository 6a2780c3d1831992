"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the forum session factory and application
use cases. All use cases are built from infrastructure implementations
here; routes depend only on these dependencies, not on infra directly.

Process-wide objects (shared httpx client, tag catalog) live on app.state
and are created in app.core.lifespan.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.services.context_formatter import ContextFormatter
from app.application.services.prompt_builder import SystemPromptBuilder
from app.application.services.query_expander import QueryExpander
from app.application.services.reranker import Reranker
from app.application.services.tag_catalog import TagCatalog
from app.application.services.tag_matcher import TagMatcher
from app.application.use_cases.forum_context import (
    ForumContextService,
    RetrievalOptions,
)
from app.application.use_cases.search import SearchService
from app.core.config import get_settings
from app.core.constants import SESSION_COOKIE_NAMES
from app.domain.exceptions import SqlNotConfiguredException
from app.infrastructure.llm import LLMClient
from app.infrastructure.persistence.database import get_session_factory
from app.infrastructure.persistence.repositories import (
    ForumSearchRepository,
    SessionRepository,
    TagRepository,
)


def extract_token(
    headers: Mapping[str, str],
    cookies: Mapping[str, str],
    header_name: str = "X-Flarum-Token",
) -> str | None:
    """Forum session token from the token header, else the remember cookie, else the session cookie."""
    token = headers.get(header_name)
    if token:
        return token
    for name in SESSION_COOKIE_NAMES:
        token = cookies.get(name)
        if token:
            return token
    return None


def get_session_token(request: Request) -> str | None:
    """Session token for the caller, or None (anonymous)."""
    settings = get_settings()
    return extract_token(request.headers, request.cookies, settings.session_token_header)


def get_db_session_factory() -> async_sessionmaker[AsyncSession] | None:
    """Session factory for the forum database, or None when DATABASE_URL is unset.

    None still serves greetings and general questions; forum searches then
    answer 503 from ForumContextService.
    """
    try:
        return get_session_factory()
    except SqlNotConfiguredException:
        return None


def _database_unavailable() -> AsyncSession:
    raise SqlNotConfiguredException()


def get_tag_catalog(request: Request) -> TagCatalog:
    """Process-wide tag catalog created at startup."""
    catalog = getattr(request.app.state, "tag_catalog", None)
    if catalog is None:
        catalog = TagCatalog(ttl_seconds=get_settings().tag_cache_ttl_seconds)
        request.app.state.tag_catalog = catalog
    return catalog


def get_llm_client(request: Request) -> LLMClient:
    """Language-model client on the shared HTTP client."""
    return LLMClient(
        get_settings(),
        http_client=getattr(request.app.state, "http_client", None),
    )


def get_context_formatter() -> ContextFormatter:
    return ContextFormatter(get_settings().forum_url)


def get_prompt_builder() -> SystemPromptBuilder:
    settings = get_settings()
    return SystemPromptBuilder(
        assistant_name=settings.assistant_name,
        forum_name=settings.forum_name,
        forum_url=settings.forum_url,
    )


async def get_search_service(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession] | None, Depends(get_db_session_factory)
    ],
) -> SearchService:
    """Keyword search use case (three-tier fallback)."""
    prefix = get_settings().forum_table_prefix
    return SearchService(
        ForumSearchRepository(session_factory or _database_unavailable, prefix)
    )


async def get_forum_context_service(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession] | None, Depends(get_db_session_factory)
    ],
    search_service: Annotated[SearchService, Depends(get_search_service)],
    tag_catalog: Annotated[TagCatalog, Depends(get_tag_catalog)],
    llm: Annotated[LLMClient, Depends(get_llm_client)],
    formatter: Annotated[ContextFormatter, Depends(get_context_formatter)],
) -> ForumContextService:
    """Retrieval pipeline use case for one chat message."""
    settings = get_settings()
    prefix = settings.forum_table_prefix
    sessions = session_factory or _database_unavailable
    return ForumContextService(
        search_service=search_service,
        tag_repo=TagRepository(sessions, prefix),
        tag_catalog=tag_catalog,
        session_repo=SessionRepository(sessions, prefix),
        query_expander=QueryExpander(llm),
        tag_matcher=TagMatcher(llm),
        reranker=Reranker(llm),
        formatter=formatter,
        forum_url=settings.forum_url,
        options=RetrievalOptions(
            main_limit=settings.search_main_limit,
            alternate_limit=settings.search_alternate_limit,
            alternate_queries=settings.search_alternate_queries,
            tag_limit=settings.search_tag_limit,
            candidate_pool_size=settings.candidate_pool_size,
            rerank_top_k=settings.rerank_top_k,
            branch_timeout_seconds=settings.search_timeout_seconds,
        ),
        database_ready=session_factory is not None,
    )
