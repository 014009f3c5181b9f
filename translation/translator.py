"""
Core translation logic using LLM.
"""
from typing import Optional, Protocol

from core import BaseLLMClient
from logs import get_llm_logger
from .llm_client import build_translation_client
from .prompts import get_translation_prompt

logger = get_llm_logger(__name__)


class WordTranslator(Protocol):
    """
    Collaborator the HTTP layer depends on.

    translate() returns the generated text or raises core.UpstreamError.
    """

    async def translate(self, word: str) -> str:
        ...

    async def close(self) -> None:
        ...


class Translator:
    """Translator backed by the upstream chat-completion API."""

    def __init__(self, client: BaseLLMClient):
        self.client = client

    @classmethod
    def from_api_key(cls, api_key: str) -> "Translator":
        return cls(build_translation_client(api_key))

    @property
    def model(self) -> str:
        return self.client.config.model

    async def close(self) -> None:
        await self.client.close()

    async def translate(self, word: str, task: Optional[str] = None) -> str:
        """
        Translate a word or phrase to Chinook Jargon.

        Args:
            word: Word or phrase to translate
            task: Task identifier for logging

        Returns:
            Translated text (or a related word / explanation)

        Raises:
            UpstreamError: If the upstream call fails
        """
        logger.info(f"[TRANSLATOR] Translating {len(word)} chars | model={self.model}")

        translation = await self.client.generate_text_with_logging(
            prompt=get_translation_prompt(word),
            task=task or "translate"
        )

        logger.info(f"[TRANSLATOR] Translation complete | output_chars={len(translation)}")
        return translation
