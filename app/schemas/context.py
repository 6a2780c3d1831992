"""Forum context API schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class ContextRequest(BaseModel):
    """Request body for POST /context."""

    message: str = Field(..., min_length=1, max_length=4000, description="User chat message")


class ContextResultResponse(BaseModel):
    """One ranked forum result, as shown under the chat answer."""

    post_id: int
    title: str
    link: str
    author: str
    date: str = Field(..., description="Short date, e.g. '5 Mar 2025'")
    snippet: str
    is_teaser: bool = False
    teaser_message: str | None = None


class PostSuggestionResponse(BaseModel):
    """Draft discussion offered when nothing relevant was found."""

    title: str
    content: str
    tag: str
    link: str


class ContextUserResponse(BaseModel):
    """Caller identity resolved from the forum session."""

    id: int
    username: str


class ContextResponse(BaseModel):
    """Retrieved forum context plus the system prompt grounded on it."""

    intent: Literal["forum_search", "general_question", "greeting"]
    results: list[ContextResultResponse] = Field(default_factory=list)
    formatted_context: str = ""
    suggestion: PostSuggestionResponse | None = None
    user: ContextUserResponse | None = None
    system_prompt: str
