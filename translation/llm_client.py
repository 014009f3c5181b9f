"""
Translation LLM Client

Module-specific LLM client for the translation service.
Uses BaseLLMClient with translation-specific configuration.
"""

from core import BaseLLMClient, LLMConfig
from .config import (
    TRANSLATION_API_URL,
    TRANSLATION_MODEL,
    TRANSLATION_MAX_TOKENS,
    TRANSLATION_CONNECTION_TIMEOUT,
    TRANSLATION_CONNECTION_POOL_LIMIT,
)


def build_translation_client(api_key: str) -> BaseLLMClient:
    """
    Create a BaseLLMClient configured for word translation.

    Args:
        api_key: Bearer credential for the upstream API

    Returns:
        A client with its own (lazily created) connection pool
    """
    config = LLMConfig(
        api_key=api_key,
        api_url=TRANSLATION_API_URL,
        model=TRANSLATION_MODEL,
        max_tokens=TRANSLATION_MAX_TOKENS,
        timeout=TRANSLATION_CONNECTION_TIMEOUT,
        pool_limit=TRANSLATION_CONNECTION_POOL_LIMIT,
        task_name="translate"
    )
    return BaseLLMClient(config)
