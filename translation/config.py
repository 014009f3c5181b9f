"""
Translation Configuration

Module-specific settings for Chinook Jargon translation.
"""
import os

# =========================
# Upstream API
# =========================

TRANSLATION_API_URL = os.getenv("TRANSLATION_API_URL", "https://api.openai.com/v1/chat/completions")

# =========================
# Model Settings
# =========================

TRANSLATION_MODEL = os.getenv("TRANSLATION_MODEL", "gpt-4")
TRANSLATION_MAX_TOKENS = int(os.getenv("TRANSLATION_MAX_TOKENS", "100"))

# =========================
# Connection Settings
# =========================

TRANSLATION_CONNECTION_TIMEOUT = int(os.getenv("TRANSLATION_CONNECTION_TIMEOUT", "30"))
TRANSLATION_CONNECTION_POOL_LIMIT = int(os.getenv("TRANSLATION_CONNECTION_POOL_LIMIT", "20"))

# =========================
# Static Dictionary
# =========================

DICTIONARY_FILENAME = "chinookwords.json"

# =========================
# Client-facing Messages
# =========================

MISSING_INPUT_FIELD = "input word"
TRANSLATION_ERROR_MESSAGE = "Error fetching AI translation."
INVALID_BODY_MESSAGE = "Invalid request body."
