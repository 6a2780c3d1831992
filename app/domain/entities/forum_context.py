"""Forum context: the orchestrator's output for one chat message."""

from dataclasses import dataclass, field

from app.domain.entities.search_result import SearchResult
from app.domain.entities.user import AuthenticatedUser
from app.domain.enums import UserIntent


@dataclass(frozen=True)
class PostSuggestion:
    """Draft discussion offered when the forum has nothing relevant yet."""

    title: str
    content: str
    tag: str
    link: str


@dataclass(frozen=True)
class ForumContext:
    """Grounding context for a language-model answer.

    search_results are already reranked and access-filtered;
    formatted_context is empty exactly when there are no results.
    """

    intent: UserIntent
    search_results: list[SearchResult] = field(default_factory=list)
    formatted_context: str = ""
    suggestion: PostSuggestion | None = None
    user: AuthenticatedUser | None = None

    @property
    def has_results(self) -> bool:
        return bool(self.search_results)
