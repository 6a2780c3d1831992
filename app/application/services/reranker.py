"""LLM reranking of a small candidate pool."""

from __future__ import annotations

import logging
from typing import Any

from app.application.interfaces.services import ILanguageModel
from app.core.constants import RERANK_SNIPPET_CHARS
from app.domain.entities import SearchResult
from app.domain.exceptions import LLMException

logger = logging.getLogger(__name__)


def _build_system_prompt(top_k: int) -> str:
    return f"""You are a Relevance Reranking Evaluator.
Given a user query and a list of forum posts, select the indices of the posts that are RELEVANT to the query.
Rank them from most relevant to least.

Rules:
1. Return JSON: {{ "relevant_indices": [2, 0, 4] }}
2. Exclude clearly irrelevant posts.
3. If minimal relevance, include it anyway.
4. Max {top_k} indices."""


def _build_user_prompt(query: str, candidates: list[SearchResult]) -> str:
    posts = "\n\n".join(
        f"[{i}] Title: {c.discussion_title}\nSnippet: {c.content[:RERANK_SNIPPET_CHARS]}"
        for i, c in enumerate(candidates)
    )
    return f'Query: "{query}"\n\nPosts:\n{posts}'


def _extract_indices(payload: Any, size: int) -> list[int]:
    """Valid, unique, in-range integer indices in the model's order."""
    if not isinstance(payload, dict):
        return []
    raw = payload.get("relevant_indices")
    if not isinstance(raw, list):
        return []
    seen: dict[int, None] = {}
    for item in raw:
        # bool is an int subclass; true/false are not indices
        if isinstance(item, bool) or not isinstance(item, int):
            continue
        if 0 <= item < size:
            seen.setdefault(item, None)
    return list(seen)


class Reranker:
    """Narrows and reorders candidates by model-judged relevance.

    Can only narrow: the result never exceeds top_k. A reply with no usable
    indices is treated as a silent model failure, not as "nothing is
    relevant", and falls back to the incoming score order.
    """

    def __init__(self, llm: ILanguageModel) -> None:
        self.llm = llm

    async def rerank(
        self, query: str, candidates: list[SearchResult], top_k: int
    ) -> list[SearchResult]:
        """Return at most top_k candidates, most relevant first."""
        if top_k <= 0:
            return []
        if len(candidates) <= 1:
            return candidates
        fallback = candidates[:top_k]
        if not self.llm.is_configured():
            return fallback
        try:
            payload = await self.llm.complete_json(
                _build_system_prompt(top_k),
                _build_user_prompt(query, candidates),
                temperature=0.0,
            )
        except LLMException as e:
            logger.warning("Reranking failed, keeping score order: %s", e.message)
            return fallback
        except Exception:
            logger.exception("Unexpected reranking error, keeping score order")
            return fallback

        indices = _extract_indices(payload, len(candidates))
        if not indices:
            logger.info(
                "Reranker returned no usable indices for %d candidates, keeping score order",
                len(candidates),
            )
            return fallback
        return [candidates[i] for i in indices[:top_k]]
