"""Mock language model for testing.

Provides a controllable stand-in for the cloud model in unit tests and
offline runs.
"""

from .errors import GenerationError
from .model import LLMResponse


class MockLanguageModel:
    """Mock language model returning preset responses."""

    def __init__(self, response: str = "This is a mock response.") -> None:
        """Initialize mock language model."""
        self._response_text = response
        self._error_message: str | None = None
        self._calls: list[tuple[str, bool]] = []

    def set_response(self, text: str) -> None:
        """Set the response to return on next generation.

        Args:
            text: Text to return
        """
        self._response_text = text
        self._error_message = None

    def set_error(self, message: str) -> None:
        """Set an error to raise on next generation.

        Args:
            message: Error message
        """
        self._error_message = message

    def generate(self, prompt: str, json_output: bool = False) -> LLMResponse:
        """Return preset response."""
        self._calls.append((prompt, json_output))

        if self._error_message:
            raise GenerationError(self._error_message)

        return LLMResponse(
            text=self._response_text,
            tokens_used=len(prompt.split()) + len(self._response_text.split()),
            model="mock-model",
            latency_ms=0,
        )

    @property
    def call_count(self) -> int:
        """Get number of generate calls."""
        return len(self._calls)

    @property
    def last_prompt(self) -> str | None:
        """Prompt of the most recent call."""
        return self._calls[-1][0] if self._calls else None

    @property
    def last_json_output(self) -> bool | None:
        """Whether the most recent call asked for JSON."""
        return self._calls[-1][1] if self._calls else None


__all__ = ["MockLanguageModel"]
