"""OpenAI-compatible chat completion provider.

Works with any service that implements the OpenAI chat completions API
(POST <api_base_url>/v1/chat/completions with a bearer token).
"""

import logging

import openai
from openai import OpenAI

from aic.config import DEFAULT_API_BASE_URL, DEFAULT_MODEL
from aic.llm.base import BaseLLMProvider, LLMResult
from aic.llm.exceptions import LLMError
from aic.llm.parsing import clean_commit_message
from aic.prompts import DEFAULT_SYSTEM_PROMPT, DEFAULT_USER_PROMPT, build_messages

logger = logging.getLogger(__name__)

# Seconds to wait for the API before giving up
REQUEST_TIMEOUT = 60.0


def build_client_base_url(api_base_url: str) -> str:
    """Turn the configured API base URL into the client base URL.

    The configured URL is the service root (https://api.openai.com); the
    client expects the versioned prefix, so /v1 is appended unless present.

    Args:
        api_base_url: The configured API base URL.

    Returns:
        The base URL passed to the OpenAI client.
    """
    base = api_base_url.rstrip("/")
    if base.endswith("/v1"):
        return base
    return f"{base}/v1"


class OpenAIProvider(BaseLLMProvider):
    """Chat completion provider for OpenAI and OpenAI-compatible APIs."""

    def __init__(
        self,
        api_token: str | None = None,
        api_base_url: str | None = None,
        model: str | None = None,
        system_prompt: str | None = None,
        user_prompt: str | None = None,
    ):
        """Initialize the provider.

        Args:
            api_token: The configured API token (environment fallbacks apply).
            api_base_url: Service root URL. Defaults to https://api.openai.com.
            model: The model to use. Defaults to gpt-3.5-turbo.
            system_prompt: System prompt. Defaults to the built-in prompt.
            user_prompt: User prompt template with a {diff} placeholder.
        """
        self.api_token = api_token
        self.api_base_url = api_base_url or DEFAULT_API_BASE_URL
        self.model = model or DEFAULT_MODEL
        self.system_prompt = system_prompt or DEFAULT_SYSTEM_PROMPT
        self.user_prompt = user_prompt or DEFAULT_USER_PROMPT

    @property
    def endpoint(self) -> str:
        """The chat completions endpoint requests are sent to."""
        return f"{build_client_base_url(self.api_base_url)}/chat/completions"

    def get_api_key(self) -> str:
        """Get the API token from configuration or environment.

        Returns:
            The API token string.

        Raises:
            MissingAPIKeyError: If no token is found.
        """
        return self._get_api_key_with_fallback(self.api_token)

    def _create_client(self) -> OpenAI:
        return OpenAI(
            api_key=self.get_api_key(),
            base_url=build_client_base_url(self.api_base_url),
            timeout=REQUEST_TIMEOUT,
        )

    def _complete(self, messages: list[dict]) -> LLMResult:
        client = self._create_client()

        logger.debug("POST %s (model=%s)", self.endpoint, self.model)
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=messages,
            )
        except openai.APIStatusError as e:
            raise LLMError(f"API request failed ({e.status_code}): {e.response.text}")
        except openai.APIConnectionError as e:
            raise LLMError(f"Failed to send request to API at {self.endpoint}: {e}")
        except openai.OpenAIError as e:
            raise LLMError(f"API call failed: {e}")

        if not response.choices:
            raise LLMError("No response from API")

        raw_response = response.choices[0].message.content or ""
        message = clean_commit_message(raw_response)
        if not message:
            raise LLMError("No response from API")

        input_tokens = response.usage.prompt_tokens if response.usage else 0
        output_tokens = response.usage.completion_tokens if response.usage else 0
        logger.debug("Token usage: %d input / %d output", input_tokens, output_tokens)

        return LLMResult(
            message=message,
            model=response.model or self.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            raw_response=raw_response,
        )

    def generate(self, diff: str) -> LLMResult:
        """Generate a commit message for the staged diff.

        Args:
            diff: The staged diff.

        Returns:
            An LLMResult containing the commit message and metadata.

        Raises:
            MissingAPIKeyError: If the API token is not set.
            LLMError: For other LLM-related errors.
        """
        messages = build_messages(self.system_prompt, self.user_prompt, diff)
        return self._complete(messages)

    def ping(self) -> LLMResult:
        """Send a one-line request to check the token, URL and model."""
        return self._complete([{"role": "user", "content": "Reply with the single word: pong"}])
