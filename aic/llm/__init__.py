"""LLM provider module for aic.

This module provides the interface to the completion API. Settings come
from the merged aic configuration.
"""

from dotenv import find_dotenv, load_dotenv

from aic.config import Config
from aic.llm.base import BaseLLMProvider, LLMResult
from aic.llm.exceptions import LLMError, MissingAPIKeyError
from aic.llm.openai_provider import OpenAIProvider

# Load environment variables from a .env file in or above the working directory
load_dotenv(find_dotenv(usecwd=True))


def get_provider(config: Config) -> BaseLLMProvider:
    """Get an LLM provider configured from the merged settings.

    Args:
        config: The effective configuration.

    Returns:
        An OpenAI-compatible provider instance.
    """
    return OpenAIProvider(
        api_token=config.get_api_token(),
        api_base_url=config.get_api_base_url(),
        model=config.get_model(),
        system_prompt=config.get_system_prompt(),
        user_prompt=config.get_user_prompt(),
    )


def generate_commit_message(diff: str, config: Config) -> LLMResult:
    """Generate a commit message for the staged diff.

    This is the main entry point for generating commit messages.

    Args:
        diff: The staged diff.
        config: The effective configuration.

    Returns:
        An LLMResult containing the commit message and token usage.

    Raises:
        MissingAPIKeyError: If the API token is not set.
        LLMError: For other LLM-related errors.
    """
    provider = get_provider(config)
    return provider.generate(diff)


# Export commonly used items
__all__ = [
    "BaseLLMProvider",
    "LLMError",
    "MissingAPIKeyError",
    "LLMResult",
    "OpenAIProvider",
    "get_provider",
    "generate_commit_message",
]
