"""Search result domain entity: one ranked forum excerpt."""

from dataclasses import dataclass, replace
from datetime import datetime

from app.domain.exceptions import ValidationException


@dataclass(frozen=True)
class SearchResult:
    """A single forum post returned by a retrieval tier.

    Constructed fresh per query and never persisted. Scores are only
    comparable within one retrieval tier. A teaser is a redacted private
    result: its content is always empty (redaction is never partial).
    """

    post_id: int
    discussion_id: int
    discussion_title: str
    discussion_slug: str
    post_number: int
    content: str
    author_username: str
    created_at: datetime
    is_private: bool
    score: float
    author_display_name: str | None = None
    tag_ids: tuple[int, ...] = ()
    tag_names: tuple[str, ...] = ()
    is_teaser: bool = False
    teaser_message: str | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Enforce the teaser invariant. Raises ValidationException if violated."""
        if self.is_teaser and self.content:
            raise ValidationException(
                "Teaser results must not carry content", field="content"
            )
        if self.is_teaser and not self.teaser_message:
            raise ValidationException(
                "Teaser results require a teaser message", field="teaser_message"
            )
        if not self.is_teaser and self.teaser_message is not None:
            raise ValidationException(
                "Only teaser results carry a teaser message", field="teaser_message"
            )

    def as_teaser(self, message: str) -> "SearchResult":
        """Return a redacted copy: content removed, teaser flag and message set."""
        return replace(self, content="", is_teaser=True, teaser_message=message)
