"""
Tests for core/llm_client_base.py - upstream chat-completion client.
"""
import json
import asyncio

import aiohttp
import pytest
from unittest.mock import patch, MagicMock, AsyncMock

from core import BaseLLMClient, LLMConfig, UpstreamError


API_URL = "https://api.example.com/v1/chat/completions"


def completion(content):
    return {"id": "chatcmpl-1", "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


def make_session(status=200, json_data=None, text="", json_side_effect=None):
    """Build a mock aiohttp session whose post() works as an async context manager."""
    response = MagicMock()
    response.status = status
    response.text = AsyncMock(return_value=text)
    response.json = AsyncMock(return_value=json_data, side_effect=json_side_effect)

    session = MagicMock()
    session.post.return_value.__aenter__.return_value = response
    session.post.return_value.__aexit__.return_value = False
    return session


@pytest.fixture
def client():
    return BaseLLMClient(LLMConfig(
        api_key="sk-test",
        api_url=API_URL,
        model="gpt-4",
        max_tokens=100,
        timeout=30,
        task_name="translate",
    ))


class TestLLMConfig:

    def test_defaults(self):
        config = LLMConfig(api_key="sk-test")

        assert config.api_url == "https://api.openai.com/v1/chat/completions"
        assert config.model == "gpt-4"
        assert config.max_tokens == 100
        assert config.timeout == 30

    def test_to_dict_omits_api_key(self):
        data = LLMConfig(api_key="sk-test").to_dict()

        assert "api_key" not in data
        assert "sk-test" not in json.dumps(data)


class TestGenerateText:

    @pytest.mark.asyncio
    async def test_sends_chat_completion_request(self, client):
        session = make_session(json_data=completion("tillicum"))

        with patch.object(client, "get_session", AsyncMock(return_value=session)):
            await client.generate_text_with_logging('Translate "friend"')

        session.post.assert_called_once_with(
            API_URL,
            json={
                "model": "gpt-4",
                "messages": [{"role": "user", "content": 'Translate "friend"'}],
                "max_tokens": 100,
            },
            headers={"Authorization": "Bearer sk-test", "Content-Type": "application/json"},
        )

    @pytest.mark.asyncio
    async def test_returns_first_choice_content(self, client):
        data = completion("  tillicum\n")
        data["choices"].append({"message": {"content": "second"}})
        session = make_session(json_data=data)

        with patch.object(client, "get_session", AsyncMock(return_value=session)):
            result = await client.generate_text_with_logging("prompt")

        assert result == "tillicum"

    @pytest.mark.asyncio
    async def test_overrides(self, client):
        session = make_session(json_data=completion("ok"))

        with patch.object(client, "get_session", AsyncMock(return_value=session)):
            await client.generate_text_with_logging("prompt", model="gpt-4o", max_tokens=5)

        payload = session.post.call_args.kwargs["json"]
        assert payload["model"] == "gpt-4o"
        assert payload["max_tokens"] == 5


class TestUpstreamErrors:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 429, 500, 503])
    async def test_non_success_status(self, client, status):
        session = make_session(status=status, text='{"error": {"message": "nope"}}')

        with patch.object(client, "get_session", AsyncMock(return_value=session)):
            with pytest.raises(UpstreamError) as exc_info:
                await client.generate_text_with_logging("prompt")

        assert exc_info.value.status == status

    @pytest.mark.asyncio
    async def test_non_utf8_error_body_keeps_status(self, client):
        session = make_session(status=502)
        response = session.post.return_value.__aenter__.return_value
        response.text = AsyncMock(side_effect=lambda errors="strict": b"\xff\xfe gateway".decode("utf-8", errors))

        with patch.object(client, "get_session", AsyncMock(return_value=session)):
            with pytest.raises(UpstreamError, match="HTTP 502") as exc_info:
                await client.generate_text_with_logging("prompt")

        assert exc_info.value.status == 502
        response.text.assert_awaited_once_with(errors="replace")

    @pytest.mark.asyncio
    async def test_timeout(self, client):
        session = MagicMock()
        session.post.side_effect = asyncio.TimeoutError()

        with patch.object(client, "get_session", AsyncMock(return_value=session)):
            with pytest.raises(UpstreamError, match="timed out"):
                await client.generate_text_with_logging("prompt")

    @pytest.mark.asyncio
    async def test_connection_error(self, client):
        session = MagicMock()
        session.post.side_effect = aiohttp.ClientConnectionError("connection refused")

        with patch.object(client, "get_session", AsyncMock(return_value=session)):
            with pytest.raises(UpstreamError, match="unavailable"):
                await client.generate_text_with_logging("prompt")

    @pytest.mark.asyncio
    async def test_invalid_json(self, client):
        session = make_session(json_side_effect=json.JSONDecodeError("Expecting value", "<html>", 0))

        with patch.object(client, "get_session", AsyncMock(return_value=session)):
            with pytest.raises(UpstreamError, match="invalid JSON"):
                await client.generate_text_with_logging("prompt")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", [
        {},
        {"choices": []},
        {"choices": [{}]},
        {"choices": [{"message": {}}]},
        {"choices": "oops"},
        ["not", "a", "dict"],
        None,
    ])
    async def test_malformed_shape(self, client, data):
        session = make_session(json_data=data)

        with patch.object(client, "get_session", AsyncMock(return_value=session)):
            with pytest.raises(UpstreamError):
                await client.generate_text_with_logging("prompt")

    @pytest.mark.asyncio
    async def test_non_text_content(self, client):
        session = make_session(json_data=completion(None))

        with patch.object(client, "get_session", AsyncMock(return_value=session)):
            with pytest.raises(UpstreamError, match="not text"):
                await client.generate_text_with_logging("prompt")


class TestSession:

    @pytest.mark.asyncio
    async def test_session_reused_and_closed(self, client):
        session = await client.get_session()

        try:
            assert await client.get_session() is session
            assert session.timeout.total == 30
        finally:
            await client.close()

        assert session.closed
        assert client._session is None

    @pytest.mark.asyncio
    async def test_close_without_session(self, client):
        await client.close()

        assert client._session is None
