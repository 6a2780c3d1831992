"""Pydantic request/response schemas for the API."""

from app.schemas.context import (
    ContextRequest,
    ContextResponse,
    ContextResultResponse,
    ContextUserResponse,
    PostSuggestionResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "ContextRequest",
    "ContextResponse",
    "ContextResultResponse",
    "ContextUserResponse",
    "HealthResponse",
    "PostSuggestionResponse",
]
