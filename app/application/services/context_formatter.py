"""Rendering of ranked results into language-model grounding context."""

from __future__ import annotations

from dataclasses import dataclass

from app.core.constants import CONTEXT_SNIPPET_CHARS, ELLIPSIS, RESULT_SNIPPET_CHARS
from app.domain.entities import SearchResult
from app.shared.utils.datetime import format_short_date
from app.shared.utils.sanitization import truncate


@dataclass(frozen=True)
class ResultMetadata:
    """Per-result metadata for the API layer (link cards under the answer)."""

    post_id: int
    title: str
    link: str
    author: str
    date: str
    snippet: str
    is_teaser: bool
    teaser_message: str | None


class ContextFormatter:
    """Formats results as numbered blocks with permalinks.

    Permalinks point at the discussion; replies (post number > 1) add a
    #post-N anchor, the opening post needs none.
    """

    def __init__(self, forum_url: str) -> None:
        self.forum_url = forum_url.rstrip("/")

    def post_link(self, discussion_id: int, post_number: int) -> str:
        """Direct link to a post."""
        base = f"{self.forum_url}/discussions/{discussion_id}"
        if post_number > 1:
            return f"{base}#post-{post_number}"
        return base

    def format(self, results: list[SearchResult]) -> str:
        """Render results; empty input renders as "" (no grounding available)."""
        if not results:
            return ""
        blocks = []
        for i, r in enumerate(results, start=1):
            body = r.teaser_message if r.is_teaser else truncate(
                r.content, CONTEXT_SNIPPET_CHARS, ELLIPSIS
            )
            blocks.append(
                f'[{i}] "{r.discussion_title}"\n'
                f"By: @{r.author_username} | Date: {format_short_date(r.created_at)}\n"
                f'Content: "{body}"\n'
                f"Link: {self.post_link(r.discussion_id, r.post_number)}"
            )
        return "\n\n".join(blocks)

    def describe(self, results: list[SearchResult]) -> list[ResultMetadata]:
        """Per-result link, author, date and short snippet."""
        return [
            ResultMetadata(
                post_id=r.post_id,
                title=r.discussion_title,
                link=self.post_link(r.discussion_id, r.post_number),
                author=r.author_username,
                date=format_short_date(r.created_at),
                snippet=truncate(r.content, RESULT_SNIPPET_CHARS, ELLIPSIS),
                is_teaser=r.is_teaser,
                teaser_message=r.teaser_message,
            )
            for r in results
        ]
