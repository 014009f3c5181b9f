"""
Base LLM Client

Provides the chat-completion client used by the translation relay.

Features:
- OpenAI-compatible /v1/chat/completions backend with bearer authentication
- Connection pooling per instance
- Request/response logging
- Error mapping: every upstream failure surfaces as UpstreamError

Usage:
    config = LLMConfig(
        api_key="sk-...",
        model="gpt-4",
        max_tokens=100,
        task_name="translate"
    )

    client = BaseLLMClient(config)
    response = await client.generate_text_with_logging(prompt)
"""

import time
import asyncio
import aiohttp
from dataclasses import dataclass
from typing import Optional, Dict, Any

from logs.logging_config import (
    get_llm_logger,
    log_llm_request,
    log_llm_response,
)

logger = get_llm_logger("llm_client")

OPENAI_CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"


class UpstreamError(RuntimeError):
    """
    Raised when the upstream completion API cannot produce a result.

    Covers network failures, timeouts, non-2xx responses and malformed
    response bodies. The message is meant for operators, never for clients.
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


@dataclass
class LLMConfig:
    """
    Configuration for an LLM client instance.

    Example:
        translation_config = LLMConfig(
            api_key="sk-...",
            model="gpt-4",
            max_tokens=100,
            timeout=30,
            task_name="translate"
        )
    """
    api_key: str

    # Endpoint
    api_url: str = OPENAI_CHAT_COMPLETIONS_URL

    # Model settings
    model: str = "gpt-4"
    max_tokens: int = 100

    # Connection settings
    timeout: int = 30
    pool_limit: int = 20

    # Logging identifier
    task_name: str = "unknown"

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary (API key omitted)."""
        return {
            "api_url": self.api_url,
            "model": self.model,
            "max_tokens": self.max_tokens,
            "timeout": self.timeout,
            "pool_limit": self.pool_limit,
            "task_name": self.task_name,
        }


class BaseLLMClient:
    """
    Chat-completion client with its own pooled aiohttp session.

    Example:
        client = BaseLLMClient(LLMConfig(api_key="sk-..."))
        text = await client.generate_text_with_logging("Translate 'friend'")
        await client.close()
    """

    def __init__(self, config: LLMConfig):
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None

        logger.debug(
            f"[{config.task_name.upper()}_LLM] Initialized | config={config.to_dict()}"
        )

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session for this instance."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            connector = aiohttp.TCPConnector(
                limit=self.config.pool_limit,
                limit_per_host=self.config.pool_limit
            )
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                connector=connector
            )
            logger.debug(f"[{self.config.task_name.upper()}_LLM] Session created")
        return self._session

    async def close(self):
        """Close this instance's session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
            logger.debug(f"[{self.config.task_name.upper()}_LLM] Session closed")

    async def generate_text_with_logging(
        self,
        prompt: str,
        model: str = None,
        max_tokens: int = None,
        task: str = None,
    ) -> str:
        """
        Generate text from the upstream API with full logging.

        Args:
            prompt: The user message sent to the model
            model: Override model (uses config.model if not specified)
            max_tokens: Override max_tokens (uses config.max_tokens if not specified)
            task: Override task name for logging (uses config.task_name if not specified)

        Returns:
            Generated text response

        Raises:
            UpstreamError: On any upstream failure
        """
        model_name = model or self.config.model
        max_tok = max_tokens if max_tokens is not None else self.config.max_tokens
        task_name = task or self.config.task_name

        request_id = log_llm_request(
            model=model_name,
            task=task_name,
            prompt=prompt,
            max_tokens=max_tok
        )

        start_time = time.time()

        try:
            response = await self._call_chat_completions(prompt, model_name, max_tok)
        except UpstreamError as e:
            log_llm_response(
                request_id=request_id,
                model=model_name,
                response="",
                latency_ms=(time.time() - start_time) * 1000,
                status="error",
                error_message=str(e)
            )
            raise

        log_llm_response(
            request_id=request_id,
            model=model_name,
            response=response,
            latency_ms=(time.time() - start_time) * 1000,
            status="success"
        )
        return response

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

    async def _call_chat_completions(
        self,
        prompt: str,
        model: str,
        max_tokens: int
    ) -> str:
        """
        POST a single-message chat completion and return the first choice's content.

        Args:
            prompt: The prompt text
            model: Model name
            max_tokens: Maximum tokens to generate

        Returns:
            Generated text
        """
        url = self.config.api_url
        tag = f"[{self.config.task_name.upper()}_LLM]"

        payload = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens
        }

        logger.debug(f"{tag} Calling chat completions | url={url} | model={model}")

        try:
            session = await self.get_session()
            async with session.post(url, json=payload, headers=self._headers()) as r:
                if r.status >= 400:
                    detail = await r.text(errors="replace")
                    logger.error(f"{tag} Upstream returned HTTP {r.status} | model={model} | body={detail}")
                    raise UpstreamError(f"Upstream returned HTTP {r.status}", status=r.status)
                response_data = await r.json(content_type=None)

        except asyncio.TimeoutError:
            logger.error(f"{tag} Upstream timeout after {self.config.timeout}s | model={model}")
            raise UpstreamError(f"{self.config.task_name.title()} LLM request timed out.")

        except aiohttp.ClientError as e:
            logger.error(f"{tag} Upstream request failed | model={model} | error={e}")
            raise UpstreamError(f"{self.config.task_name.title()} LLM service unavailable: {e}")

        except ValueError as e:
            logger.error(f"{tag} Upstream returned invalid JSON | model={model} | error={e}")
            raise UpstreamError("Upstream returned invalid JSON")

        return self._extract_content(response_data)

    def _extract_content(self, response_data: Any) -> str:
        """Pull choices[0].message.content out of a completion response."""
        try:
            content = response_data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.error(
                f"[{self.config.task_name.upper()}_LLM] Unexpected response shape | "
                f"body={response_data!r}"
            )
            raise UpstreamError("Upstream response missing choices[0].message.content")

        if not isinstance(content, str):
            logger.error(
                f"[{self.config.task_name.upper()}_LLM] Non-text message content | "
                f"content={content!r}"
            )
            raise UpstreamError("Upstream message content is not text")

        return content.strip()
