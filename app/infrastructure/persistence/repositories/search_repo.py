"""Forum post search repository. Uses MySQL FULLTEXT and LIKE on the forum schema."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.constants import (
    POST_TYPE_COMMENT,
    SCORE_RECENT_POST,
    SCORE_SUBSTRING_MATCH,
    SCORE_TAG_MATCH,
    UNKNOWN_AUTHOR,
)
from app.domain.entities import SearchResult
from app.shared.utils.datetime import ensure_utc
from app.shared.utils.sanitization import clean_html


def row_to_result(
    row: Mapping[str, Any],
    score: float,
    tag_ids: tuple[int, ...] = (),
    tag_names: tuple[str, ...] = (),
) -> SearchResult:
    """Map one post row to a SearchResult (content stripped of markup)."""
    return SearchResult(
        post_id=int(row["post_id"]),
        discussion_id=int(row["discussion_id"]),
        discussion_title=row["discussion_title"] or "",
        discussion_slug=row["discussion_slug"] or "",
        post_number=int(row["post_number"] or 1),
        content=clean_html(row["content"]),
        author_username=row["username"] or UNKNOWN_AUTHOR,
        author_display_name=row["nickname"] or None,
        created_at=ensure_utc(row["created_at"]),
        is_private=bool(row["is_private"]),
        score=score,
        tag_ids=tag_ids,
        tag_names=tag_names,
    )


class ForumSearchRepository:
    """Read-only post retrieval over posts/discussions/users/tags.

    Every query is limited to approved, visible comment posts in visible,
    public discussions. table_prefix is validated by Settings before it is
    interpolated into table names.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        table_prefix: str = "flarum_",
    ) -> None:
        self.session_factory = session_factory
        self.prefix = table_prefix

    def _select(self, extra_columns: str = "", extra_joins: str = "") -> str:
        p = self.prefix
        return f"""
            SELECT p.id AS post_id, p.discussion_id,
                   d.title AS discussion_title, d.slug AS discussion_slug,
                   p.number AS post_number, p.content,
                   u.username, u.nickname,
                   p.created_at, d.is_private{extra_columns}
            FROM {p}posts p
            JOIN {p}discussions d ON p.discussion_id = d.id
            {extra_joins}
            LEFT JOIN {p}users u ON p.user_id = u.id
            WHERE p.hidden_at IS NULL
              AND d.hidden_at IS NULL
              AND p.is_approved = 1
              AND p.type = :post_type
              AND d.is_private = 0
        """

    async def _fetch(self, sql: str, params: dict[str, Any]) -> list[Mapping[str, Any]]:
        async with self.session_factory() as session:
            r = await session.execute(
                text(sql), {"post_type": POST_TYPE_COMMENT, **params}
            )
            return list(r.mappings().all())

    @staticmethod
    def _like_clause(column: str, like_patterns: list[str], prefix: str) -> tuple[str, dict[str, str]]:
        """OR-joined LOWER(column) LIKE :prefixN ESCAPE '\\' clause and its params."""
        params = {f"{prefix}{i}": pattern for i, pattern in enumerate(like_patterns)}
        clause = " OR ".join(
            f"LOWER({column}) LIKE :{name} ESCAPE '\\\\'" for name in params
        )
        return clause, params

    async def fulltext_search(
        self, fulltext_query: str, like_patterns: list[str], limit: int
    ) -> list[SearchResult]:
        """Natural-language FULLTEXT relevance on content OR'd with substring patterns.

        Rows that qualified only via substring have zero relevance and get
        the substring score instead.
        """
        like_clause, params = self._like_clause("p.content", like_patterns, "content")
        match = "MATCH(p.content) AGAINST(:q IN NATURAL LANGUAGE MODE)"
        condition = f"({match} OR {like_clause})" if like_clause else match
        sql = (
            self._select(extra_columns=f", {match} AS relevance")
            + f" AND {condition} ORDER BY relevance DESC LIMIT :limit"
        )
        rows = await self._fetch(sql, {"q": fulltext_query, "limit": limit, **params})
        return [
            row_to_result(row, float(row["relevance"] or 0) or SCORE_SUBSTRING_MATCH)
            for row in rows
        ]

    async def substring_search(
        self, like_patterns: list[str], limit: int
    ) -> list[SearchResult]:
        """Substring match on content or discussion title, newest first."""
        if not like_patterns:
            return []
        content_clause, content_params = self._like_clause(
            "p.content", like_patterns, "content"
        )
        title_clause, title_params = self._like_clause("d.title", like_patterns, "title")
        sql = (
            self._select()
            + f" AND ({content_clause} OR {title_clause})"
            + " ORDER BY p.created_at DESC LIMIT :limit"
        )
        rows = await self._fetch(
            sql, {"limit": limit, **content_params, **title_params}
        )
        return [row_to_result(row, SCORE_SUBSTRING_MATCH) for row in rows]

    async def recent_opening_posts(self, limit: int) -> list[SearchResult]:
        """Most recent opening posts (post number 1)."""
        sql = self._select() + " AND p.number = 1 ORDER BY p.created_at DESC LIMIT :limit"
        rows = await self._fetch(sql, {"limit": limit})
        return [row_to_result(row, SCORE_RECENT_POST) for row in rows]

    async def posts_by_tag(self, tag_slug: str, limit: int) -> list[SearchResult]:
        """Opening posts of discussions carrying the tag, newest first."""
        p = self.prefix
        sql = (
            self._select(
                extra_columns=", t.id AS tag_id, t.name AS tag_name",
                extra_joins=(
                    f"JOIN {p}discussion_tag dt ON d.id = dt.discussion_id\n"
                    f"            JOIN {p}tags t ON dt.tag_id = t.id"
                ),
            )
            + " AND t.slug = :slug AND p.number = 1"
            + " ORDER BY p.created_at DESC LIMIT :limit"
        )
        rows = await self._fetch(sql, {"slug": tag_slug, "limit": limit})
        return [
            row_to_result(
                row,
                SCORE_TAG_MATCH,
                tag_ids=(int(row["tag_id"]),),
                tag_names=(row["tag_name"],),
            )
            for row in rows
        ]
