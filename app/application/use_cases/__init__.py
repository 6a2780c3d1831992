"""Application use cases: one entry point per workflow."""

from app.application.use_cases.forum_context import (
    ForumContextService,
    RetrievalOptions,
    merge_results,
)
from app.application.use_cases.search import SearchService, SearchTerms, clamp_limit

__all__ = [
    "ForumContextService",
    "RetrievalOptions",
    "SearchService",
    "SearchTerms",
    "clamp_limit",
    "merge_results",
]
