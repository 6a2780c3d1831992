"""Tag routing: map a query to at most three catalog tags via the language model."""

from __future__ import annotations

import logging
from typing import Any

from app.application.interfaces.services import ILanguageModel
from app.core.constants import TAG_MATCH_MAX
from app.domain.entities import TagInfo
from app.domain.exceptions import LLMException

logger = logging.getLogger(__name__)


def _build_system_prompt(tags: list[TagInfo]) -> str:
    tag_lines = "\n".join(
        f"- {t.name} (Slug: {t.slug}): {t.description or 'No description'}"
        for t in tags
    )
    return f"""You are a strict tag routing assistant.
Your goal is to map a user query to the most relevant forum tags from the provided list.

Available Tags:
{tag_lines}

Rules:
1. Return ONLY a JSON object of the form {{"tags": ["professional", "jobs-freelance"]}}, most relevant first.
2. If no tag is relevant, return {{"tags": []}}.
3. Be intelligent: Map concepts to their semantic tags (e.g. "dating" -> "confession").
4. Max {TAG_MATCH_MAX} tags. Only choose if highly relevant. Example: "python error" -> "programming"."""


def _extract_slugs(payload: Any) -> list[str]:
    if isinstance(payload, dict):
        payload = payload.get("tags")
    if not isinstance(payload, list):
        return []
    return [item for item in payload if isinstance(item, str)]


class TagMatcher:
    """Selects relevant tags for a query.

    Slugs the model invents are dropped, so the result is always a subset
    of the catalog it was given. Tag retrieval only boosts recall, so every
    failure returns [].
    """

    def __init__(self, llm: ILanguageModel) -> None:
        self.llm = llm

    async def match(self, query: str, available_tags: list[TagInfo]) -> list[TagInfo]:
        """Return up to three tags from available_tags in the model's relevance order."""
        if not query.strip() or not available_tags:
            return []
        if not self.llm.is_configured():
            logger.debug("No language model configured, skipping tag matching")
            return []
        try:
            payload = await self.llm.complete_json(
                _build_system_prompt(available_tags), query, temperature=0.0
            )
        except LLMException as e:
            logger.warning("Tag matching failed: %s", e.message)
            return []
        except Exception:
            logger.exception("Unexpected tag matching error")
            return []

        by_slug = {t.slug: t for t in available_tags}
        matched: list[TagInfo] = []
        for slug in dict.fromkeys(_extract_slugs(payload)):
            tag = by_slug.get(slug)
            if tag is None:
                logger.debug("Dropping unknown tag slug from model: %r", slug)
                continue
            matched.append(tag)
            if len(matched) == TAG_MATCH_MAX:
                break
        return matched
