"""Session repository: forum access tokens, group membership and private-discussion recipients."""

from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy import bindparam, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.constants import SESSION_MAX_IDLE_DAYS
from app.domain.entities import AuthenticatedUser, AuthResult
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class SessionRepository:
    """Resolves forum session tokens and private-discussion access.

    A token is valid when its last activity is unknown or within the idle
    window. The forum stores naive UTC timestamps, so the cutoff is bound
    as a naive UTC value.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        table_prefix: str = "flarum_",
    ) -> None:
        self.session_factory = session_factory
        self.prefix = table_prefix

    async def validate_session(self, token: str | None) -> AuthResult:
        if not token:
            return AuthResult.anonymous()
        p = self.prefix
        cutoff = utc_now().replace(tzinfo=None) - timedelta(days=SESSION_MAX_IDLE_DAYS)
        token_stmt = text(f"""
            SELECT t.user_id, u.username, u.nickname
            FROM {p}access_tokens t
            JOIN {p}users u ON t.user_id = u.id
            WHERE t.token = :token
              AND (t.last_activity_at IS NULL OR t.last_activity_at > :cutoff)
            LIMIT 1
        """)
        groups_stmt = text(f"SELECT group_id FROM {p}group_user WHERE user_id = :user_id")
        try:
            async with self.session_factory() as session:
                r = await session.execute(token_stmt, {"token": token, "cutoff": cutoff})
                row = r.mappings().first()
                if row is None:
                    return AuthResult.anonymous(error="Invalid or expired token")
                g = await session.execute(groups_stmt, {"user_id": row["user_id"]})
                group_ids = frozenset(int(gid) for gid in g.scalars().all())
        except Exception:
            logger.exception("Session validation failed")
            return AuthResult.anonymous(error="Authentication service error")
        user = AuthenticatedUser(
            id=int(row["user_id"]),
            username=row["username"],
            group_ids=group_ids,
            nickname=row["nickname"] or None,
        )
        return AuthResult(authenticated=True, user=user)

    async def accessible_private_discussions(
        self, user: AuthenticatedUser, discussion_ids: set[int]
    ) -> set[int]:
        """Discussions where the user, or one of the user's groups, is an active recipient.

        Raises on database errors; callers treat that as no access.
        """
        if not discussion_ids:
            return set()
        recipient = "r.user_id = :user_id"
        params: dict = {"ids": sorted(discussion_ids), "user_id": user.id}
        bind = [bindparam("ids", expanding=True)]
        if user.group_ids:
            recipient += " OR r.group_id IN :group_ids"
            params["group_ids"] = sorted(user.group_ids)
            bind.append(bindparam("group_ids", expanding=True))
        stmt = text(f"""
            SELECT DISTINCT r.discussion_id
            FROM {self.prefix}recipients r
            WHERE r.discussion_id IN :ids
              AND r.removed_at IS NULL
              AND ({recipient})
        """).bindparams(*bind)
        async with self.session_factory() as session:
            r = await session.execute(stmt, params)
            return {int(did) for did in r.scalars().all()}
