"""SearchService unit tests: three-tier fallback with a mocked repository."""

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from app.application.use_cases.search import SearchService, SearchTerms, clamp_limit
from app.domain.entities import SearchResult


@pytest.fixture
def search_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.fulltext_search = AsyncMock(return_value=[])
    repo.substring_search = AsyncMock(return_value=[])
    repo.recent_opening_posts = AsyncMock(return_value=[])
    repo.posts_by_tag = AsyncMock(return_value=[])
    return repo


def test_search_terms_lowercase_min_length_and_cap() -> None:
    terms = SearchTerms.from_query("How do I get an Internship")
    assert terms.terms == ["how", "do", "get", "an", "internship"]
    assert terms.fulltext_query == "how do get an internship"
    many = SearchTerms.from_query(" ".join(f"w{i}" for i in range(15)))
    assert len(many.terms) == 10
    assert len(many.like_patterns) == 5


def test_like_patterns_escape_wildcards() -> None:
    assert SearchTerms.from_query("100%_done").like_patterns == ["%100\\%\\_done%"]


def test_clamp_limit() -> None:
    assert clamp_limit(0) == 1
    assert clamp_limit(-3) == 1
    assert clamp_limit(7) == 7
    assert clamp_limit(500) == 50


async def test_fulltext_hits_are_returned_best_first(
    search_repo: AsyncMock, make_result: Callable[..., SearchResult]
) -> None:
    search_repo.fulltext_search.return_value = [
        make_result(1, score=0.5),
        make_result(2, score=3.2),
    ]
    results = await SearchService(search_repo).search("python internship", limit=6)
    assert [r.post_id for r in results] == [2, 1]
    search_repo.fulltext_search.assert_awaited_once_with(
        "python internship", ["%python%", "%internship%"], 6
    )
    search_repo.substring_search.assert_not_awaited()


async def test_empty_fulltext_falls_through_to_substring(
    search_repo: AsyncMock, make_result: Callable[..., SearchResult]
) -> None:
    search_repo.substring_search.return_value = [make_result(3, score=0.5)]
    results = await SearchService(search_repo).search("python")
    assert [r.post_id for r in results] == [3]
    search_repo.recent_opening_posts.assert_not_awaited()


async def test_fulltext_error_falls_through_to_substring(
    search_repo: AsyncMock, make_result: Callable[..., SearchResult]
) -> None:
    search_repo.fulltext_search.side_effect = RuntimeError("no FULLTEXT index")
    search_repo.substring_search.return_value = [make_result(3, score=0.5)]
    results = await SearchService(search_repo).search("python")
    assert [r.post_id for r in results] == [3]


async def test_empty_substring_does_not_fall_back_to_recent(search_repo: AsyncMock) -> None:
    assert await SearchService(search_repo).search("zzzz nothing") == []
    search_repo.recent_opening_posts.assert_not_awaited()


async def test_substring_error_falls_back_to_recent_capped_at_20(
    search_repo: AsyncMock, make_result: Callable[..., SearchResult]
) -> None:
    search_repo.fulltext_search.side_effect = RuntimeError("boom")
    search_repo.substring_search.side_effect = RuntimeError("boom")
    search_repo.recent_opening_posts.return_value = [make_result(9, score=0.3)]
    results = await SearchService(search_repo).search("python", limit=40)
    assert [r.post_id for r in results] == [9]
    search_repo.recent_opening_posts.assert_awaited_once_with(20)


async def test_query_without_terms_uses_recent_posts(
    search_repo: AsyncMock, make_result: Callable[..., SearchResult]
) -> None:
    search_repo.recent_opening_posts.return_value = [make_result(9, score=0.3)]
    results = await SearchService(search_repo).search("a ?", limit=5)
    assert [r.post_id for r in results] == [9]
    search_repo.fulltext_search.assert_not_awaited()
    search_repo.recent_opening_posts.assert_awaited_once_with(5)


async def test_all_tiers_failing_returns_empty(search_repo: AsyncMock) -> None:
    search_repo.fulltext_search.side_effect = RuntimeError("down")
    search_repo.substring_search.side_effect = RuntimeError("down")
    search_repo.recent_opening_posts.side_effect = RuntimeError("down")
    assert await SearchService(search_repo).search("python") == []


async def test_limit_is_clamped(search_repo: AsyncMock) -> None:
    await SearchService(search_repo).search("python", limit=500)
    assert search_repo.fulltext_search.await_args.args[2] == 50


async def test_by_tag_returns_repo_results(
    search_repo: AsyncMock, make_result: Callable[..., SearchResult]
) -> None:
    search_repo.posts_by_tag.return_value = [make_result(4)]
    results = await SearchService(search_repo).by_tag("gaming", 5)
    assert [r.post_id for r in results] == [4]
    search_repo.posts_by_tag.assert_awaited_once_with("gaming", 5)


async def test_by_tag_failure_or_blank_slug_returns_empty(search_repo: AsyncMock) -> None:
    search_repo.posts_by_tag.side_effect = RuntimeError("down")
    service = SearchService(search_repo)
    assert await service.by_tag("gaming") == []
    assert await service.by_tag("") == []
