"""
Pytest configuration and shared fixtures for relay tests.
"""
import os
import sys
import json
import pytest
from unittest.mock import MagicMock, AsyncMock

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from config import RelayConfig

TEST_API_KEY = "sk-test-secret-key"
ALLOWED_ORIGINS = frozenset({"https://olympusmultimedia.com", "http://olympusmultimedia.com"})
DICTIONARY = {"friend": "tillicum", "water": "chuck", "talk": "wawa"}


@pytest.fixture
def dictionary_bytes():
    return json.dumps(DICTIONARY, indent=2).encode("utf-8")


@pytest.fixture
def static_root(tmp_path, dictionary_bytes):
    """Create a static directory with the dictionary and one extra asset."""
    root = tmp_path / "static"
    root.mkdir()
    (root / "chinookwords.json").write_bytes(dictionary_bytes)
    (root / "index.html").write_text("<h1>Chinook Jargon</h1>")
    return root


@pytest.fixture
def relay_config(static_root):
    return RelayConfig(
        api_key=TEST_API_KEY,
        port=3000,
        allowed_origins=ALLOWED_ORIGINS,
        static_root=static_root,
    )


@pytest.fixture
def fake_translator():
    """Upstream collaborator double; succeeds with 'tillicum' by default."""
    translator = MagicMock()
    translator.translate = AsyncMock(return_value="tillicum")
    translator.close = AsyncMock()
    return translator


@pytest.fixture
def make_client(fake_translator):
    """Build a TestClient for an arbitrary config."""
    from main import create_app

    clients = []

    def _make(config):
        client = TestClient(create_app(config, translator=fake_translator))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def test_client(make_client, relay_config):
    return make_client(relay_config)
