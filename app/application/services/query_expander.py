"""Query expansion: alternative phrasings of a search query via the language model."""

from __future__ import annotations

import logging
from typing import Any

from app.application.interfaces.services import ILanguageModel
from app.core.constants import QUERY_EXPANSION_MAX
from app.domain.exceptions import LLMException

logger = logging.getLogger(__name__)

EXPANSION_SYSTEM_PROMPT = """You are a search query optimizer.
Generate 2-3 alternative search queries for the user's input to improve retrieval.
Focus on:
- Synonyms (e.g., "startup" -> "entrepreneurship")
- Related concepts (e.g., "coding" -> "programming", "software development")
- Removing conversational noise (e.g., "tell me about..." -> "")

Return ONLY a JSON object of the form {"queries": ["...", "..."]}."""


def _extract_queries(payload: Any) -> list[str]:
    """Pull candidate strings from {"queries": [...]} or a bare JSON array."""
    if isinstance(payload, dict):
        payload = payload.get("queries")
    if not isinstance(payload, list):
        return []
    return [item.strip() for item in payload if isinstance(item, str) and item.strip()]


class QueryExpander:
    """Expands a query into up to three alternates.

    Expansion is strictly additive: the original query is always element 0
    and any failure (no credential, transport error, malformed reply) yields
    just [query].
    """

    def __init__(self, llm: ILanguageModel) -> None:
        self.llm = llm

    async def expand(self, query: str) -> list[str]:
        """Return [query, *alternates], de-duplicated, at most 4 entries."""
        if not query.strip() or not self.llm.is_configured():
            return [query]
        try:
            payload = await self.llm.complete_json(
                EXPANSION_SYSTEM_PROMPT, query, temperature=0.3
            )
        except LLMException as e:
            logger.warning("Query expansion failed, using original query: %s", e.message)
            return [query]
        except Exception:
            logger.exception("Unexpected query expansion error, using original query")
            return [query]

        expanded = list(dict.fromkeys([query, *_extract_queries(payload)]))
        return expanded[:QUERY_EXPANSION_MAX]
