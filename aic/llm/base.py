"""Base classes and shared utilities for LLM providers."""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass

from aic.llm.exceptions import MissingAPIKeyError

# Environment variables checked when no api_token is configured, in order
API_TOKEN_ENV_VARS = ("AIC_API_TOKEN", "OPENAI_API_KEY")


@dataclass
class LLMResult:
    """Result from an LLM generation call, including token usage."""

    message: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    raw_response: str = ""


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    def generate(self, diff: str) -> LLMResult:
        """Generate a commit message from the staged diff.

        Args:
            diff: The staged diff.

        Returns:
            An LLMResult containing the commit message and metadata.

        Raises:
            MissingAPIKeyError: If the API token is not set.
            LLMError: For other LLM-related errors.
        """
        pass

    @abstractmethod
    def ping(self) -> LLMResult:
        """Send a minimal request to verify the connection settings.

        Raises:
            MissingAPIKeyError: If the API token is not set.
            LLMError: If the request fails.
        """
        pass

    def _get_api_key_with_fallback(self, configured: str | None) -> str:
        """Get the API token, falling back to environment variables.

        Checks in order:
        1. The api_token configuration value
        2. AIC_API_TOKEN
        3. OPENAI_API_KEY

        Args:
            configured: The api_token from the merged configuration.

        Returns:
            The API token string.

        Raises:
            MissingAPIKeyError: If the API token is not found.
        """
        if configured:
            return configured

        for env_var_name in API_TOKEN_ENV_VARS:
            api_key = os.getenv(env_var_name)
            if api_key:
                return api_key

        raise MissingAPIKeyError(
            "API token not found. Set it using:\n"
            "  1. Run: aic config set api_token YOUR_TOKEN\n"
            f"  2. Environment variable: export {API_TOKEN_ENV_VARS[0]}=your_token_here"
        )
