"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (forum repositories, language model).
"""

from app.application.interfaces import (
    ILanguageModel,
    IPostSearchRepository,
    ISessionRepository,
    ITagRepository,
)
from app.application.services.context_formatter import ContextFormatter
from app.application.services.prompt_builder import SystemPromptBuilder
from app.application.services.tag_catalog import TagCatalog
from app.application.use_cases.forum_context import ForumContextService
from app.application.use_cases.search import SearchService

__all__ = [
    "ContextFormatter",
    "ForumContextService",
    "ILanguageModel",
    "IPostSearchRepository",
    "ISessionRepository",
    "ITagRepository",
    "SearchService",
    "SystemPromptBuilder",
    "TagCatalog",
]
