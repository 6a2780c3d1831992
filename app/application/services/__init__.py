"""Application services: intent, query expansion, tag matching, reranking, access, formatting."""

from app.application.services.access_filter import (
    apply_access_filter,
    private_discussion_ids,
)
from app.application.services.context_formatter import ContextFormatter, ResultMetadata
from app.application.services.intent_classifier import classify_intent
from app.application.services.post_suggestion import (
    generate_post_suggestion,
    suggest_tag,
    suggest_title,
)
from app.application.services.prompt_builder import SystemPromptBuilder
from app.application.services.query_expander import QueryExpander
from app.application.services.reranker import Reranker
from app.application.services.tag_catalog import TagCacheEntry, TagCatalog
from app.application.services.tag_matcher import TagMatcher

__all__ = [
    "ContextFormatter",
    "QueryExpander",
    "Reranker",
    "ResultMetadata",
    "SystemPromptBuilder",
    "TagCacheEntry",
    "TagCatalog",
    "TagMatcher",
    "apply_access_filter",
    "classify_intent",
    "generate_post_suggestion",
    "private_discussion_ids",
    "suggest_tag",
    "suggest_title",
]
