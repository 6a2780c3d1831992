"""Tag repository: the forum's visible tag taxonomy."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.domain.entities import TagInfo


class TagRepository:
    """Loads non-hidden tags in the forum's display order."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        table_prefix: str = "flarum_",
    ) -> None:
        self.session_factory = session_factory
        self.prefix = table_prefix

    async def list_visible_tags(self) -> list[TagInfo]:
        stmt = text(f"""
            SELECT t.id, t.name, t.slug, t.description
            FROM {self.prefix}tags t
            WHERE t.is_hidden = 0
            ORDER BY t.position ASC, t.id ASC
        """)
        async with self.session_factory() as session:
            r = await session.execute(stmt)
            rows = r.mappings().all()
        return [
            TagInfo(
                id=int(row["id"]),
                name=row["name"],
                slug=row["slug"],
                description=row["description"] or None,
            )
            for row in rows
        ]
