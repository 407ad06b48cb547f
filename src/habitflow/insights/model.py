"""Language model protocol and data classes.

Defines the interface the insight coach uses for text generation.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass
class LLMResponse:
    """Response from language model.

    Attributes:
        text: Generated response text
        tokens_used: Number of tokens consumed
        model: Model identifier
        latency_ms: Response latency in milliseconds
    """

    text: str
    tokens_used: int
    model: str
    latency_ms: int


class LanguageModel(Protocol):
    """Interface for language model inference."""

    def generate(self, prompt: str, json_output: bool = False) -> LLMResponse:
        """Generate a response for a prompt.

        Args:
            prompt: Free-form instruction text
            json_output: Constrain the response to a single JSON object

        Returns:
            LLMResponse with generated text

        Raises:
            InsightError: If generation fails
        """
        ...


__all__ = ["LLMResponse", "LanguageModel"]
