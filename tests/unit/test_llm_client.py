"""LLMClient unit tests against httpx.MockTransport (no network)."""

import json

import httpx
import pytest

from app.core.config import Settings
from app.domain.exceptions import (
    LLMException,
    LLMNotConfiguredException,
    LLMResponseException,
)
from app.infrastructure.llm import LLMClient


def _settings(**overrides) -> Settings:
    fields = {"openai_api_key": None, "deepseek_api_key": None, "_env_file": None}
    fields.update(overrides)
    return Settings(**fields)


def _completion(content: str | None) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _client(settings: Settings, handler) -> LLMClient:
    return LLMClient(settings, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


async def test_complete_json_posts_chat_completion_and_parses_reply() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_completion('{"queries": ["a", "b"]}'))

    client = _client(_settings(openai_api_key="sk-openai"), handler)
    result = await client.complete_json("system text", "user text", temperature=0.3)

    assert result == {"queries": ["a", "b"]}
    [request] = seen
    assert str(request.url) == "https://api.openai.com/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-openai"
    body = json.loads(request.content)
    assert body["model"] == "gpt-4o-mini"
    assert body["temperature"] == 0.3
    assert body["response_format"] == {"type": "json_object"}
    assert body["messages"] == [
        {"role": "system", "content": "system text"},
        {"role": "user", "content": "user text"},
    ]


async def test_deepseek_key_takes_precedence() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_completion("[]"))

    settings = _settings(openai_api_key="sk-openai", deepseek_api_key="sk-deepseek")
    await _client(settings, handler).complete_json("s", "u")

    assert str(seen[0].url) == "https://api.deepseek.com/chat/completions"
    assert seen[0].headers["Authorization"] == "Bearer sk-deepseek"
    assert json.loads(seen[0].content)["model"] == "deepseek-chat"


async def test_not_configured_raises_without_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client = _client(_settings(), handler)
    assert client.is_configured() is False
    with pytest.raises(LLMNotConfiguredException):
        await client.complete_json("s", "u")


async def test_http_error_status_raises_llm_exception() -> None:
    client = _client(
        _settings(openai_api_key="sk"), lambda request: httpx.Response(500, text="boom")
    )
    with pytest.raises(LLMException) as exc_info:
        await client.complete_json("s", "u")
    assert exc_info.value.details["status_code"] == 500


async def test_timeout_raises_llm_exception() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    client = _client(_settings(openai_api_key="sk"), handler)
    with pytest.raises(LLMException) as exc_info:
        await client.complete_json("s", "u")
    assert exc_info.value.error_code == "LLM_TIMEOUT"


async def test_connection_error_raises_llm_exception() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = _client(_settings(openai_api_key="sk"), handler)
    with pytest.raises(LLMException):
        await client.complete_json("s", "u")


@pytest.mark.parametrize("content", [None, "", "   ", "not json at all"])
async def test_empty_or_invalid_content_raises_response_exception(content) -> None:
    client = _client(
        _settings(openai_api_key="sk"), lambda request: httpx.Response(200, json=_completion(content))
    )
    with pytest.raises(LLMResponseException):
        await client.complete_json("s", "u")


async def test_missing_choices_raises_response_exception() -> None:
    client = _client(
        _settings(openai_api_key="sk"), lambda request: httpx.Response(200, json={"choices": []})
    )
    with pytest.raises(LLMResponseException):
        await client.complete_json("s", "u")
