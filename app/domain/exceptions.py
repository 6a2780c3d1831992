"""Domain exceptions for the forum retrieval service.

Defines the few failures that may cross a layer boundary. Retrieval
components convert upstream failures into default values, so most of
these are raised by infrastructure and caught by the application layer;
only ValidationException is expected to reach the presentation layer,
which maps it to an HTTP response in exception handlers.
"""

from typing import Any


class ForumRagException(Exception):
    """Base exception for all application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, provider).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ForumRagException):
    """Raised when input validation fails (e.g. missing or non-string message)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class SqlNotConfiguredException(ForumRagException):
    """Raised when an operation requires the forum database but DATABASE_URL is unset."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires the forum database, which is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class LLMException(ForumRagException):
    """Raised when a language-model call fails (transport, HTTP status, timeout)."""

    def __init__(
        self,
        message: str,
        error_code: str = "LLM_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


class LLMNotConfiguredException(LLMException):
    """Raised when no language-model credential is configured."""

    def __init__(self) -> None:
        super().__init__(
            "No language-model API key configured (set DEEPSEEK_API_KEY or OPENAI_API_KEY)",
            "LLM_NOT_CONFIGURED",
        )


class LLMResponseException(LLMException):
    """Raised when the model answers but the payload is empty or not valid JSON."""

    def __init__(self, reason: str, content: str | None = None) -> None:
        """Initialize with reason and a truncated copy of the raw content.

        Args:
            reason: Why the response was rejected (e.g. 'invalid JSON').
            content: Raw message content, truncated to 200 chars in details.
        """
        details: dict[str, Any] = {"reason": reason}
        if content:
            details["content"] = content[:200]
        super().__init__(
            f"Malformed language-model response: {reason}",
            "LLM_BAD_RESPONSE",
            details,
        )
