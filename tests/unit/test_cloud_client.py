"""Unit tests for the Claude-backed language model."""

import os
from unittest.mock import MagicMock, patch

import anthropic
import pytest

from habitflow.insights.client import JSON_INSTRUCTION, CloudLanguageModel, CloudLLMConfig
from habitflow.insights.errors import GenerationError, MissingCredentialError


def make_response(text: str = "Response") -> MagicMock:
    response = MagicMock()
    response.content = [MagicMock(text=text)]
    response.usage.input_tokens = 10
    response.usage.output_tokens = 5
    return response


def with_real_errors(mock_anthropic: MagicMock) -> None:
    """Keep the SDK's exception classes on a patched module."""
    mock_anthropic.AuthenticationError = anthropic.AuthenticationError
    mock_anthropic.APITimeoutError = anthropic.APITimeoutError
    mock_anthropic.APIConnectionError = anthropic.APIConnectionError
    mock_anthropic.APIStatusError = anthropic.APIStatusError


class TestCloudLLMConfig:
    """Tests for CloudLLMConfig data class."""

    def test_default_values(self) -> None:
        """Test CloudLLMConfig default values."""
        config = CloudLLMConfig(api_key="test-key")

        assert config.model == "claude-3-haiku-20240307"
        assert config.max_tokens == 1024
        assert config.temperature == 0.7

    def test_from_env(self) -> None:
        """Test creating config from environment variable."""
        with patch.dict(os.environ, {"ANTHROPIC_API_KEY": "env-key"}):
            config = CloudLLMConfig.from_env(max_tokens=256)

        assert config.api_key == "env-key"
        assert config.max_tokens == 256

    def test_from_env_missing_key(self) -> None:
        """Test error when API key is missing."""
        env_without_key = {k: v for k, v in os.environ.items() if k != "ANTHROPIC_API_KEY"}
        with (
            patch.dict(os.environ, env_without_key, clear=True),
            pytest.raises(MissingCredentialError, match="ANTHROPIC_API_KEY"),
        ):
            CloudLLMConfig.from_env()

    def test_from_env_blank_key(self) -> None:
        """Test a whitespace key counts as missing."""
        with (
            patch.dict(os.environ, {"ANTHROPIC_API_KEY": "  "}),
            pytest.raises(MissingCredentialError),
        ):
            CloudLLMConfig.from_env()


class TestCloudLanguageModel:
    """Tests for CloudLanguageModel class."""

    @patch("habitflow.insights.client.anthropic")
    def test_generate_response(self, mock_anthropic: MagicMock) -> None:
        """Test generating response from Claude API."""
        mock_client = MagicMock()
        mock_client.messages.create.return_value = make_response("Keep going! 🚀")
        mock_anthropic.Anthropic.return_value = mock_client

        model = CloudLanguageModel(CloudLLMConfig(api_key="test-key"))
        result = model.generate("Tip please")

        assert result.text == "Keep going! 🚀"
        assert result.tokens_used == 15
        assert result.model == "claude-3-haiku-20240307"
        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["messages"] == [{"role": "user", "content": "Tip please"}]
        assert kwargs["max_tokens"] == 1024
        assert "system" not in kwargs

    @patch("habitflow.insights.client.anthropic")
    def test_json_output_adds_instruction(self, mock_anthropic: MagicMock) -> None:
        """Test JSON mode is requested through the system prompt."""
        mock_client = MagicMock()
        mock_client.messages.create.return_value = make_response("{}")
        mock_anthropic.Anthropic.return_value = mock_client

        model = CloudLanguageModel(CloudLLMConfig(api_key="test-key"))
        model.generate("Analyze", json_output=True)

        assert mock_client.messages.create.call_args.kwargs["system"] == JSON_INSTRUCTION
        assert not hasattr(model, "set_system_prompt")

    @patch("habitflow.insights.client.anthropic")
    def test_empty_content(self, mock_anthropic: MagicMock) -> None:
        """Test an empty response raises GenerationError."""
        mock_client = MagicMock()
        response = make_response()
        response.content = []
        mock_client.messages.create.return_value = response
        mock_anthropic.Anthropic.return_value = mock_client

        model = CloudLanguageModel(CloudLLMConfig(api_key="test-key"))
        with pytest.raises(GenerationError, match="empty"):
            model.generate("Test")

    @patch("habitflow.insights.client.anthropic")
    def test_connection_error_mapped(self, mock_anthropic: MagicMock) -> None:
        """Test connection failures become GenerationError."""
        with_real_errors(mock_anthropic)
        mock_client = MagicMock()
        mock_client.messages.create.side_effect = anthropic.APIConnectionError(request=MagicMock())
        mock_anthropic.Anthropic.return_value = mock_client

        model = CloudLanguageModel(CloudLLMConfig(api_key="test-key"))
        with pytest.raises(GenerationError, match="connect"):
            model.generate("Test")

    @patch("habitflow.insights.client.anthropic")
    def test_timeout_mapped(self, mock_anthropic: MagicMock) -> None:
        """Test timeouts become GenerationError."""
        with_real_errors(mock_anthropic)
        mock_client = MagicMock()
        mock_client.messages.create.side_effect = anthropic.APITimeoutError(request=MagicMock())
        mock_anthropic.Anthropic.return_value = mock_client

        model = CloudLanguageModel(CloudLLMConfig(api_key="test-key", timeout_seconds=5.0))
        with pytest.raises(GenerationError, match="timed out"):
            model.generate("Test")

    def test_model_name(self) -> None:
        """Test model name comes from config."""
        model = CloudLanguageModel(CloudLLMConfig(api_key="test-key", model="claude-test"))
        assert model.model_name == "claude-test"
