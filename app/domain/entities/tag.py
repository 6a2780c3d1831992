"""Tag taxonomy entry."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TagInfo:
    """One visible forum tag, as loaded by the tag catalog."""

    id: int
    name: str
    slug: str
    description: str | None = None
