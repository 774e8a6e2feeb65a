"""Tests for aic.llm package."""

import os
import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

import aic
from aic.config import Config
from aic.llm import (
    LLMError,
    LLMResult,
    MissingAPIKeyError,
    OpenAIProvider,
    generate_commit_message,
    get_provider,
)
from aic.llm.openai_provider import build_client_base_url
from aic.llm.parsing import clean_commit_message


def _completion(content, prompt_tokens=120, completion_tokens=12, model="gpt-3.5-turbo"):
    """Build a fake chat completion response."""
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    response.usage = MagicMock(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens)
    response.model = model
    return response


@pytest.fixture
def mock_openai(mocker):
    """Patch the OpenAI client class used by the provider."""
    mock_cls = mocker.patch("aic.llm.openai_provider.OpenAI")
    client = mock_cls.return_value
    client.chat.completions.create.return_value = _completion(
        "feat: improve greeting message with username support"
    )
    return mock_cls


class TestCleanCommitMessage:
    """Tests for clean_commit_message function."""

    def test_strips_whitespace(self):
        """Test surrounding whitespace is removed."""
        assert clean_commit_message("\n  fix: typo  \n") == "fix: typo"

    def test_removes_markdown_fence(self):
        """Test a wrapping code fence is removed."""
        raw = "```text\nfeat: add x\n\n1. Detail\n```"
        assert clean_commit_message(raw) == "feat: add x\n\n1. Detail"

    def test_keeps_inner_content(self):
        """Test that a message not starting with a fence is unchanged."""
        raw = "docs: explain ```code``` usage"
        assert clean_commit_message(raw) == raw


class TestBuildClientBaseUrl:
    """Tests for build_client_base_url function."""

    def test_appends_version_prefix(self):
        """Test /v1 is appended to the service root."""
        assert build_client_base_url("https://api.openai.com") == "https://api.openai.com/v1"

    def test_strips_trailing_slash(self):
        """Test trailing slashes are removed before appending."""
        assert build_client_base_url("https://api.example.com/") == "https://api.example.com/v1"

    def test_keeps_existing_version_prefix(self):
        """Test a URL already ending in /v1 is not doubled."""
        assert build_client_base_url("http://localhost:8080/v1/") == "http://localhost:8080/v1"


class TestGetApiKey:
    """Tests for API token lookup."""

    def test_configured_token_wins(self):
        """Test the configured token is preferred over environment."""
        provider = OpenAIProvider(api_token="configured")
        with patch.dict(os.environ, {"AIC_API_TOKEN": "env"}, clear=True):
            assert provider.get_api_key() == "configured"

    def test_falls_back_to_aic_env_var(self):
        """Test AIC_API_TOKEN is used when nothing is configured."""
        provider = OpenAIProvider()
        with patch.dict(os.environ, {"AIC_API_TOKEN": "aic-env", "OPENAI_API_KEY": "openai-env"}, clear=True):
            assert provider.get_api_key() == "aic-env"

    def test_falls_back_to_openai_env_var(self):
        """Test OPENAI_API_KEY is the last fallback."""
        provider = OpenAIProvider()
        with patch.dict(os.environ, {"OPENAI_API_KEY": "openai-env"}, clear=True):
            assert provider.get_api_key() == "openai-env"

    def test_missing_api_key_raises_error(self):
        """Test that a missing token raises MissingAPIKeyError with instructions."""
        provider = OpenAIProvider()
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(MissingAPIKeyError) as exc_info:
                provider.get_api_key()

        assert "aic config set api_token" in str(exc_info.value)


class TestOpenAIProvider:
    """Tests for OpenAIProvider."""

    def test_defaults(self):
        """Test default URL and model."""
        provider = OpenAIProvider()
        assert provider.api_base_url == "https://api.openai.com"
        assert provider.model == "gpt-3.5-turbo"
        assert provider.endpoint == "https://api.openai.com/v1/chat/completions"

    def test_generate_returns_message(self, mock_openai, sample_diff):
        """Test a successful generation."""
        provider = OpenAIProvider(api_token="test_token", model="gpt-3.5-turbo")

        result = provider.generate(sample_diff)

        assert isinstance(result, LLMResult)
        assert result.message == "feat: improve greeting message with username support"
        assert result.model == "gpt-3.5-turbo"
        assert result.input_tokens == 120
        assert result.output_tokens == 12

    def test_generate_sends_prompts_and_auth(self, mock_openai, sample_diff):
        """Test the client is configured and called with the prompt pair."""
        provider = OpenAIProvider(
            api_token="test_token",
            api_base_url="https://api.example.com",
            model="test-model",
            system_prompt="You are a helpful assistant.",
            user_prompt="Diff:\n{diff}",
        )

        provider.generate(sample_diff)

        client_kwargs = mock_openai.call_args.kwargs
        assert client_kwargs["api_key"] == "test_token"
        assert client_kwargs["base_url"] == "https://api.example.com/v1"

        create_kwargs = mock_openai.return_value.chat.completions.create.call_args.kwargs
        assert create_kwargs["model"] == "test-model"
        assert create_kwargs["messages"] == [
            {"role": "system", "content": "You are a helpful assistant."},
            {"role": "user", "content": f"Diff:\n{sample_diff}"},
        ]

    def test_generate_cleans_fenced_response(self, mock_openai):
        """Test that a fenced response is unwrapped."""
        mock_openai.return_value.chat.completions.create.return_value = _completion(
            "```\nfix: handle empty input\n```"
        )
        provider = OpenAIProvider(api_token="test_token")

        result = provider.generate("diff")

        assert result.message == "fix: handle empty input"
        assert result.raw_response == "```\nfix: handle empty input\n```"

    def test_no_choices_raises(self, mock_openai):
        """Test that an empty choices list is an error."""
        response = _completion("unused")
        response.choices = []
        mock_openai.return_value.chat.completions.create.return_value = response
        provider = OpenAIProvider(api_token="test_token")

        with pytest.raises(LLMError) as exc_info:
            provider.generate("diff")

        assert "No response from API" in str(exc_info.value)

    def test_empty_content_raises(self, mock_openai):
        """Test that an empty message is an error."""
        mock_openai.return_value.chat.completions.create.return_value = _completion(None)
        provider = OpenAIProvider(api_token="test_token")

        with pytest.raises(LLMError):
            provider.generate("diff")

    def test_fence_only_content_raises(self, mock_openai):
        """Test that a reply that is only a code fence is treated as empty."""
        mock_openai.return_value.chat.completions.create.return_value = _completion("```\n```")
        provider = OpenAIProvider(api_token="test_token")

        with pytest.raises(LLMError) as exc_info:
            provider.generate("diff")

        assert "No response from API" in str(exc_info.value)

    def test_missing_usage_reports_zero_tokens(self, mock_openai):
        """Test servers that omit usage are tolerated."""
        response = _completion("chore: bump version")
        response.usage = None
        mock_openai.return_value.chat.completions.create.return_value = response
        provider = OpenAIProvider(api_token="test_token")

        result = provider.generate("diff")

        assert result.input_tokens == 0
        assert result.output_tokens == 0

    def test_api_status_error(self, mock_openai):
        """Test that an HTTP error carries status and body."""
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        response = httpx.Response(401, text="Unauthorized", request=request)
        mock_openai.return_value.chat.completions.create.side_effect = openai.AuthenticationError(
            "Unauthorized", response=response, body=None
        )
        provider = OpenAIProvider(api_token="invalid_token")

        with pytest.raises(LLMError) as exc_info:
            provider.generate("some diff")

        message = str(exc_info.value)
        assert "API request failed" in message
        assert "401" in message
        assert "Unauthorized" in message

    def test_connection_error_names_endpoint(self, mock_openai):
        """Test that connection failures mention the endpoint."""
        request = httpx.Request("POST", "http://localhost:1/v1/chat/completions")
        mock_openai.return_value.chat.completions.create.side_effect = openai.APIConnectionError(
            request=request
        )
        provider = OpenAIProvider(api_token="test_token", api_base_url="http://localhost:1")

        with pytest.raises(LLMError) as exc_info:
            provider.generate("diff")

        assert "http://localhost:1/v1/chat/completions" in str(exc_info.value)

    def test_missing_token_raises_before_request(self, mock_openai):
        """Test that no request is made without a token."""
        provider = OpenAIProvider()

        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(MissingAPIKeyError):
                provider.generate("diff")

        mock_openai.return_value.chat.completions.create.assert_not_called()

    def test_ping(self, mock_openai):
        """Test that ping sends a single user message."""
        mock_openai.return_value.chat.completions.create.return_value = _completion("pong")
        provider = OpenAIProvider(api_token="test_token")

        result = provider.ping()

        assert result.message == "pong"
        messages = mock_openai.return_value.chat.completions.create.call_args.kwargs["messages"]
        assert len(messages) == 1
        assert messages[0]["role"] == "user"


class TestGetProvider:
    """Tests for the get_provider factory and generate_commit_message."""

    def test_provider_from_config(self):
        """Test the provider picks up merged config values."""
        config = Config(
            api_token="token",
            api_base_url="https://api.example.com",
            model="custom-model",
            system_prompt="system",
            user_prompt="user {diff}",
        )

        provider = get_provider(config)

        assert isinstance(provider, OpenAIProvider)
        assert provider.api_token == "token"
        assert provider.api_base_url == "https://api.example.com"
        assert provider.model == "custom-model"
        assert provider.system_prompt == "system"
        assert provider.user_prompt == "user {diff}"

    def test_provider_defaults_from_empty_config(self):
        """Test defaults apply for unset values."""
        provider = get_provider(Config())
        assert provider.model == "gpt-3.5-turbo"
        assert provider.api_base_url == "https://api.openai.com"

    def test_generate_commit_message(self, mock_openai, sample_diff):
        """Test the module-level entry point."""
        result = generate_commit_message(sample_diff, Config(api_token="token"))
        assert result.message.startswith("feat:")


class TestDotenvLoading:
    """Tests for reading a .env file from the working directory."""

    def test_env_file_in_working_directory_is_loaded(self, temp_dir):
        """Test that a script run from a directory with .env picks up its token."""
        work = temp_dir / "work"
        work.mkdir()
        (work / ".env").write_text("AIC_API_TOKEN=from-dotenv\n")
        script = temp_dir / "show_token.py"
        script.write_text(
            "import os\n"
            "import aic.llm\n"
            "print(os.environ.get('AIC_API_TOKEN'))\n"
        )
        env = {
            k: v for k, v in os.environ.items()
            if k not in ("AIC_API_TOKEN", "OPENAI_API_KEY")
        }
        package_root = str(Path(aic.__file__).resolve().parent.parent)
        env["PYTHONPATH"] = os.pathsep.join(filter(None, [package_root, env.get("PYTHONPATH")]))

        result = subprocess.run(
            [sys.executable, str(script)],
            cwd=work,
            env=env,
            capture_output=True,
            text=True,
        )

        assert result.returncode == 0, result.stderr
        assert result.stdout.strip() == "from-dotenv"
