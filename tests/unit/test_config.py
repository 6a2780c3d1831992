"""Settings validation unit tests."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_defaults() -> None:
    settings = _settings(openai_api_key=None, deepseek_api_key=None)
    assert settings.forum_table_prefix == "flarum_"
    assert settings.tag_cache_ttl_seconds == 600
    assert settings.search_alternate_queries == 1
    assert settings.candidate_pool_size == 20
    assert settings.rerank_top_k == 6
    assert settings.llm_provider() is None


def test_openai_provider() -> None:
    settings = _settings(openai_api_key="sk-o", deepseek_api_key=None)
    assert settings.llm_provider() == ("sk-o", "https://api.openai.com/v1", "gpt-4o-mini")


def test_deepseek_wins_when_both_set() -> None:
    settings = _settings(openai_api_key="sk-o", deepseek_api_key="sk-d")
    assert settings.llm_provider() == ("sk-d", "https://api.deepseek.com", "deepseek-chat")


@pytest.mark.parametrize("prefix", ["flarum; DROP TABLE x", "bad-prefix", "a b"])
def test_table_prefix_must_be_identifier(prefix: str) -> None:
    with pytest.raises(ValidationError):
        _settings(forum_table_prefix=prefix)


def test_empty_table_prefix_is_allowed() -> None:
    assert _settings(forum_table_prefix="").forum_table_prefix == ""


@pytest.mark.parametrize(
    "field", ["tag_cache_ttl_seconds", "candidate_pool_size", "rerank_top_k", "search_main_limit"]
)
def test_limits_must_be_positive(field: str) -> None:
    with pytest.raises(ValidationError):
        _settings(**{field: 0})


def test_alternate_queries_range() -> None:
    assert _settings(search_alternate_queries=0).search_alternate_queries == 0
    with pytest.raises(ValidationError):
        _settings(search_alternate_queries=4)
