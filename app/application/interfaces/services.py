"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol


# Language model interface
class ILanguageModel(Protocol):
    """Protocol for a chat-completion model constrained to JSON output.

    complete_json raises LLMNotConfiguredException when no credential is
    set and LLMException (or a subclass) on transport, status, timeout or
    parse failures. Callers check is_configured() first to avoid the call.
    """

    def is_configured(self) -> bool:
        """Return True if a provider credential is available."""

    async def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.0,
    ) -> Any:
        """Send a system/user message pair and return the parsed JSON reply."""
