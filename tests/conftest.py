"""Pytest configuration and fixtures for forum-rag.

Uses app.main:app for HTTP tests. Repositories and the language model are
replaced by AsyncMock fakes; no forum database or provider key is needed.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.limiter import limiter
from app.domain.entities import SearchResult
from app.main import app


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI). Clears dependency overrides after use."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def no_rate_limit():
    """Disable the SlowAPI limiter for the duration of a test."""
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def make_result() -> Callable[..., SearchResult]:
    """Factory for SearchResult with sensible defaults; override any field by keyword."""

    def _make(post_id: int = 1, **overrides) -> SearchResult:
        fields = {
            "post_id": post_id,
            "discussion_id": post_id * 10,
            "discussion_title": f"Discussion {post_id}",
            "discussion_slug": f"discussion-{post_id}",
            "post_number": 1,
            "content": f"Content of post {post_id}",
            "author_username": "alice",
            "created_at": datetime(2025, 3, 5, 12, 0, tzinfo=timezone.utc),
            "is_private": False,
            "score": 1.0,
        }
        fields.update(overrides)
        return SearchResult(**fields)

    return _make


@pytest.fixture
def llm() -> AsyncMock:
    """Configured language-model fake; set llm.complete_json.return_value / side_effect per test."""
    fake = AsyncMock()
    fake.is_configured = MagicMock(return_value=True)
    fake.complete_json = AsyncMock(return_value={})
    return fake


@pytest.fixture
def unconfigured_llm() -> AsyncMock:
    """Language-model fake with no credential."""
    fake = AsyncMock()
    fake.is_configured = MagicMock(return_value=False)
    fake.complete_json = AsyncMock(side_effect=AssertionError("model must not be called"))
    return fake
