"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.search_repo import ForumSearchRepository
from app.infrastructure.persistence.repositories.session_repo import SessionRepository
from app.infrastructure.persistence.repositories.tag_repo import TagRepository

__all__ = [
    "ForumSearchRepository",
    "SessionRepository",
    "TagRepository",
]
