"""Language-model adapters."""

from app.infrastructure.llm.client import LLMClient

__all__ = ["LLMClient"]
