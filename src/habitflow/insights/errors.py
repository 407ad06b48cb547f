"""Error types for the insight module.

Custom exceptions for text-generation requests and insight refreshes.
"""


class InsightError(Exception):
    """Base exception for insight-related errors."""

    pass


class MissingCredentialError(InsightError):
    """Raised when no API key is configured for text generation."""

    pass


class GenerationError(InsightError):
    """Raised when the text-generation API call fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize generation error.

        Args:
            message: Error message.
            status_code: HTTP status code if available.
        """
        super().__init__(message)
        self.status_code = status_code


class InsightParseError(InsightError):
    """Raised when a generated insight bundle is not valid JSON of the expected shape."""

    pass


class NoHabitsError(InsightError):
    """Raised when insights are requested manually without any habits."""

    pass


__all__ = [
    "GenerationError",
    "InsightError",
    "InsightParseError",
    "MissingCredentialError",
    "NoHabitsError",
]
