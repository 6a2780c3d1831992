"""TagCatalog unit tests with a fake clock and mocked tag repository."""

from unittest.mock import AsyncMock

import pytest

from app.application.services.tag_catalog import TagCatalog
from app.domain.entities import TagInfo

TAGS = [TagInfo(id=1, name="Gaming", slug="gaming"), TagInfo(id=2, name="Music", slug="music")]


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tag_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.list_visible_tags = AsyncMock(return_value=list(TAGS))
    return repo


async def test_get_tags_caches_within_ttl(clock: FakeClock, tag_repo: AsyncMock) -> None:
    catalog = TagCatalog(ttl_seconds=600, clock=clock)
    assert await catalog.get_tags(tag_repo) == TAGS
    clock.now += 599
    assert await catalog.get_tags(tag_repo) == TAGS
    assert tag_repo.list_visible_tags.await_count == 1
    assert catalog.is_fresh()


async def test_get_tags_reloads_after_ttl(clock: FakeClock, tag_repo: AsyncMock) -> None:
    catalog = TagCatalog(ttl_seconds=600, clock=clock)
    await catalog.get_tags(tag_repo)
    clock.now += 600
    assert not catalog.is_fresh()
    await catalog.get_tags(tag_repo)
    assert tag_repo.list_visible_tags.await_count == 2


async def test_failed_load_returns_empty_and_is_not_cached(
    clock: FakeClock, tag_repo: AsyncMock
) -> None:
    tag_repo.list_visible_tags.side_effect = [RuntimeError("db down"), list(TAGS)]
    catalog = TagCatalog(ttl_seconds=600, clock=clock)
    assert await catalog.get_tags(tag_repo) == []
    assert not catalog.is_fresh()
    assert await catalog.get_tags(tag_repo) == TAGS


async def test_returned_list_is_a_copy(clock: FakeClock, tag_repo: AsyncMock) -> None:
    catalog = TagCatalog(ttl_seconds=600, clock=clock)
    first = await catalog.get_tags(tag_repo)
    first.clear()
    assert await catalog.get_tags(tag_repo) == TAGS
