"""Text generation using the Anthropic Claude API.

Provides the cloud language model behind daily tips and insight bundles.
"""

import logging
import os
import time
from dataclasses import dataclass
from typing import Any

import anthropic

from .errors import GenerationError, MissingCredentialError
from .model import LLMResponse

logger = logging.getLogger(__name__)

JSON_INSTRUCTION = (
    "Respond with a single valid JSON object and nothing else. "
    "Do not wrap it in Markdown code fences."
)


@dataclass
class CloudLLMConfig:
    """Configuration for the cloud language model."""

    api_key: str
    model: str = "claude-3-haiku-20240307"
    max_tokens: int = 1024
    temperature: float = 0.7
    timeout_seconds: float = 30.0

    @classmethod
    def from_env(cls, **overrides: Any) -> "CloudLLMConfig":
        """Create config from environment variables.

        Args:
            **overrides: Field values replacing the defaults (model, max_tokens...).

        Returns:
            CloudLLMConfig with API key from environment.

        Raises:
            MissingCredentialError: If ANTHROPIC_API_KEY is not set.
        """
        api_key = os.environ.get("ANTHROPIC_API_KEY", "").strip()
        if not api_key:
            raise MissingCredentialError(
                "ANTHROPIC_API_KEY environment variable is not set. "
                "Set it to use AI tips and insights."
            )
        return cls(api_key=api_key, **overrides)


class CloudLanguageModel:
    """Language model backed by the Claude Messages API."""

    def __init__(self, config: CloudLLMConfig) -> None:
        """Initialize the cloud language model.

        Args:
            config: Cloud LLM configuration.
        """
        self._config = config
        self._client = anthropic.Anthropic(
            api_key=config.api_key,
            timeout=config.timeout_seconds,
        )

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self._config.model

    def generate(self, prompt: str, json_output: bool = False) -> LLMResponse:
        """Generate a response using the cloud API.

        Args:
            prompt: User prompt.
            json_output: Ask for a bare JSON object.

        Returns:
            LLMResponse with generated text.

        Raises:
            MissingCredentialError: If the API key is rejected.
            GenerationError: If the request fails or returns no text.
        """
        kwargs: dict[str, Any] = {
            "model": self._config.model,
            "max_tokens": self._config.max_tokens,
            "temperature": self._config.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

        if json_output:
            kwargs["system"] = JSON_INSTRUCTION

        start_time = time.time()
        try:
            response = self._client.messages.create(**kwargs)
        except anthropic.AuthenticationError as e:
            raise MissingCredentialError(
                "Invalid API key. Please check your ANTHROPIC_API_KEY."
            ) from e
        except anthropic.APITimeoutError as e:
            raise GenerationError(
                f"Request timed out after {self._config.timeout_seconds} seconds."
            ) from e
        except anthropic.APIConnectionError as e:
            raise GenerationError(f"Failed to connect to Claude API: {e}") from e
        except anthropic.APIStatusError as e:
            raise GenerationError(f"API error: {e.message}", status_code=e.status_code) from e
        latency_ms = int((time.time() - start_time) * 1000)

        if not response.content:
            raise GenerationError("Claude API returned an empty response")

        logger.debug(f"Generated {response.usage.output_tokens} tokens in {latency_ms}ms")
        return LLMResponse(
            text=response.content[0].text,
            tokens_used=response.usage.input_tokens + response.usage.output_tokens,
            model=self._config.model,
            latency_ms=latency_ms,
        )


__all__ = ["CloudLLMConfig", "CloudLanguageModel", "JSON_INSTRUCTION"]
