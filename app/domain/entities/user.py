"""Caller identity as resolved by the session authorizer."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AuthenticatedUser:
    """A signed-in forum user. Read-only input to the retrieval pipeline."""

    id: int
    username: str
    group_ids: frozenset[int] = field(default_factory=frozenset)
    nickname: str | None = None


@dataclass(frozen=True)
class AuthResult:
    """Outcome of validating a session token.

    error is set only when validation was attempted and failed
    (unknown/expired token or authorizer outage).
    """

    authenticated: bool
    user: AuthenticatedUser | None = None
    error: str | None = None

    @classmethod
    def anonymous(cls, error: str | None = None) -> "AuthResult":
        """Unauthenticated result, optionally with the reason."""
        return cls(authenticated=False, user=None, error=error)
