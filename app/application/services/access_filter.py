"""Access filtering: redact private-discussion results the caller may not read."""

from __future__ import annotations

from collections.abc import Collection

from app.core.constants import TEASER_NO_ACCESS, TEASER_SIGN_IN
from app.domain.entities import AuthenticatedUser, SearchResult


def private_discussion_ids(results: list[SearchResult]) -> set[int]:
    """Discussion ids of the private results (the set that needs an access lookup)."""
    return {r.discussion_id for r in results if r.is_private}


def apply_access_filter(
    results: list[SearchResult],
    user: AuthenticatedUser | None,
    accessible_discussion_ids: Collection[int] = (),
) -> list[SearchResult]:
    """Return results with unreadable private content replaced by teasers.

    Same length and order as the input. Public results are returned as the
    same objects. A private result survives only for an authenticated user
    whose access to its discussion was confirmed (recipient directly or via
    a group); anything else becomes a teaser with empty content.

    Args:
        results: Ranked results.
        user: Caller identity, None when anonymous.
        accessible_discussion_ids: Private discussions the user may read.

    Returns:
        Filtered list.
    """
    filtered: list[SearchResult] = []
    for result in results:
        if not result.is_private:
            filtered.append(result)
        elif user is None:
            filtered.append(result.as_teaser(TEASER_SIGN_IN))
        elif result.discussion_id in accessible_discussion_ids:
            filtered.append(result)
        else:
            filtered.append(result.as_teaser(TEASER_NO_ACCESS))
    return filtered
