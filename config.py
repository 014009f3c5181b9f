"""
Global Configuration

Shared settings for the translation relay.
Module-specific settings are in each module's config.py file.

All settings can be overridden via environment variables or a .env file.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Mapping, Optional

from dotenv import load_dotenv

# Load .env file before any os.getenv() calls
load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent

# =========================
# Server Defaults
# =========================

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_STATIC_ROOT = PROJECT_ROOT / "static"

# HTTPS and HTTP forms of the frontend site
DEFAULT_ALLOWED_ORIGINS = (
    "https://olympusmultimedia.com",
    "http://olympusmultimedia.com",
)

# Environment variable holding the upstream bearer credential
API_KEY_ENV_VAR = "OPENAI_API_KEY"


class ConfigurationError(RuntimeError):
    """Raised when the relay cannot be configured from its environment."""


@dataclass(frozen=True)
class RelayConfig:
    """
    Immutable relay configuration handed to the application factory.

    Attributes:
        api_key: Bearer credential for the upstream completion API
        port: Listening port
        allowed_origins: Origins echoed back in Access-Control-Allow-Origin
        static_root: Directory served for static assets
        host: Bind address
    """
    api_key: str
    port: int = DEFAULT_PORT
    allowed_origins: FrozenSet[str] = field(default_factory=lambda: frozenset(DEFAULT_ALLOWED_ORIGINS))
    static_root: Path = DEFAULT_STATIC_ROOT
    host: str = DEFAULT_HOST

    def __repr__(self) -> str:
        return (
            f"RelayConfig(api_key='***', port={self.port}, "
            f"allowed_origins={sorted(self.allowed_origins)}, "
            f"static_root='{self.static_root}', host='{self.host}')"
        )


def parse_origins(value: Optional[str]) -> FrozenSet[str]:
    """Parse a comma-separated origin list, falling back to the defaults."""
    if not value or not value.strip():
        return frozenset(DEFAULT_ALLOWED_ORIGINS)
    return frozenset(origin.strip() for origin in value.split(",") if origin.strip())


def load_relay_config(environ: Optional[Mapping[str, str]] = None) -> RelayConfig:
    """
    Build the relay configuration from the environment.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        RelayConfig

    Raises:
        ConfigurationError: If the API key is missing or the port is not an integer
    """
    env = os.environ if environ is None else environ

    api_key = (env.get(API_KEY_ENV_VAR) or "").strip()
    if not api_key:
        raise ConfigurationError(f"Missing {API_KEY_ENV_VAR} in environment or .env file")

    raw_port = env.get("RELAY_PORT", str(DEFAULT_PORT))
    try:
        port = int(raw_port)
    except ValueError:
        raise ConfigurationError(f"RELAY_PORT must be an integer, got '{raw_port}'")

    return RelayConfig(
        api_key=api_key,
        port=port,
        allowed_origins=parse_origins(env.get("ALLOWED_ORIGINS")),
        static_root=Path(env.get("STATIC_ROOT") or DEFAULT_STATIC_ROOT),
        host=env.get("RELAY_HOST", DEFAULT_HOST),
    )
