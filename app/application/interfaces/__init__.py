"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IPostSearchRepository,
    ISessionRepository,
    ITagRepository,
)
from app.application.interfaces.services import ILanguageModel

__all__ = [
    "ILanguageModel",
    "IPostSearchRepository",
    "ISessionRepository",
    "ITagRepository",
]
