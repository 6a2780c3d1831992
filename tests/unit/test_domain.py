"""Domain entity, enum and exception unit tests."""

from datetime import datetime, timezone

import pytest

from app.domain.entities import AuthResult, ForumContext, SearchResult
from app.domain.enums import UserIntent
from app.domain.exceptions import (
    ForumRagException,
    LLMException,
    LLMNotConfiguredException,
    LLMResponseException,
    SqlNotConfiguredException,
    ValidationException,
)


def _result(**overrides) -> SearchResult:
    fields = {
        "post_id": 1,
        "discussion_id": 2,
        "discussion_title": "Title",
        "discussion_slug": "title",
        "post_number": 1,
        "content": "body",
        "author_username": "alice",
        "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
        "is_private": True,
        "score": 1.0,
    }
    fields.update(overrides)
    return SearchResult(**fields)


def test_as_teaser_redacts_content_and_keeps_metadata() -> None:
    teaser = _result().as_teaser("locked")
    assert teaser.content == ""
    assert teaser.is_teaser is True
    assert teaser.teaser_message == "locked"
    assert teaser.discussion_title == "Title"


def test_teaser_with_content_is_rejected() -> None:
    with pytest.raises(ValidationException):
        _result(is_teaser=True, teaser_message="locked")


def test_teaser_without_message_is_rejected() -> None:
    with pytest.raises(ValidationException):
        _result(content="", is_teaser=True)


def test_non_teaser_with_message_is_rejected() -> None:
    with pytest.raises(ValidationException):
        _result(teaser_message="locked")


def test_forum_context_defaults() -> None:
    context = ForumContext(intent=UserIntent.GREETING)
    assert context.search_results == []
    assert context.formatted_context == ""
    assert context.has_results is False


def test_auth_result_anonymous() -> None:
    auth = AuthResult.anonymous(error="Invalid or expired token")
    assert auth.authenticated is False
    assert auth.user is None
    assert auth.error == "Invalid or expired token"


def test_user_intent_values() -> None:
    assert UserIntent.values() == ["forum_search", "general_question", "greeting"]


def test_forum_rag_exception_default_error_code() -> None:
    exc = ForumRagException("Something failed")
    assert exc.error_code == "ForumRagException"
    assert exc.to_dict() == {
        "error": "ForumRagException",
        "message": "Something failed",
        "details": {},
    }


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (ValidationException("bad", field="message"), "VALIDATION_ERROR"),
        (SqlNotConfiguredException(), "SERVICE_UNAVAILABLE"),
        (LLMException("down"), "LLM_ERROR"),
        (LLMNotConfiguredException(), "LLM_NOT_CONFIGURED"),
        (LLMResponseException("invalid JSON", "x" * 500), "LLM_BAD_RESPONSE"),
    ],
)
def test_error_codes(exc: ForumRagException, code: str) -> None:
    assert exc.error_code == code


def test_llm_subclasses_are_llm_exceptions() -> None:
    assert isinstance(LLMNotConfiguredException(), LLMException)
    exc = LLMResponseException("invalid JSON", "x" * 500)
    assert isinstance(exc, LLMException)
    assert len(exc.details["content"]) == 200


def test_validation_exception_details() -> None:
    assert ValidationException("bad", field="message").details == {"field": "message"}
