"""
Logging setup for the translation relay.

Provides:
- Console and rotating file handlers
- Request ID propagation via contextvars
- Structured request/response log lines for upstream LLM calls
"""
import uuid
import logging
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import (
    LOG_LEVEL,
    LOG_TO_FILE,
    LOG_OUTPUT_DIR,
    LOG_MAX_BYTES,
    LOG_BACKUP_COUNT,
    LOG_PREVIEW_LENGTH,
    LOG_DATE_FORMAT,
    LOG_DETAILED_FORMAT,
    LOG_SIMPLE_FORMAT,
    LOG_FILE_REQUESTS,
    LOG_FILE_ERRORS,
    LLM_LOGGER_NAME,
)

LOG_DIR = Path(LOG_OUTPUT_DIR)

_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


# =========================
# Request Context
# =========================

def generate_request_id() -> str:
    return str(uuid.uuid4())


def get_request_id() -> Optional[str]:
    return _request_id.get()


class RequestContext:
    """
    Context manager binding a request ID to every log line emitted inside it.

    Example:
        with RequestContext() as request_id:
            logger.info("handled")
    """

    def __init__(self, request_id: Optional[str] = None):
        self.request_id = request_id or generate_request_id()
        self._token = None

    def __enter__(self) -> str:
        self._token = _request_id.set(self.request_id)
        return self.request_id

    def __exit__(self, exc_type, exc, tb):
        _request_id.reset(self._token)
        return False


class RequestIdFilter(logging.Filter):
    """Inject the current request ID into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get() or "-"
        return True


# =========================
# Setup
# =========================

def setup_llm_logging(
    level: str = LOG_LEVEL,
    log_dir: Optional[Path] = None,
    to_file: bool = LOG_TO_FILE,
) -> logging.Logger:
    """
    Configure the relay logger.

    Args:
        level: Log level name
        log_dir: Directory for rotating log files (defaults to LOG_DIR)
        to_file: Whether to add file handlers

    Returns:
        The configured relay logger
    """
    logger = logging.getLogger(LLM_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    request_filter = RequestIdFilter()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_SIMPLE_FORMAT, LOG_DATE_FORMAT))
    console.addFilter(request_filter)
    logger.addHandler(console)

    if to_file:
        target_dir = Path(log_dir or LOG_DIR)
        target_dir.mkdir(parents=True, exist_ok=True)

        requests_handler = RotatingFileHandler(
            target_dir / LOG_FILE_REQUESTS,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        requests_handler.setFormatter(logging.Formatter(LOG_DETAILED_FORMAT, LOG_DATE_FORMAT))
        requests_handler.addFilter(request_filter)
        logger.addHandler(requests_handler)

        errors_handler = RotatingFileHandler(
            target_dir / LOG_FILE_ERRORS,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        errors_handler.setLevel(logging.ERROR)
        errors_handler.setFormatter(logging.Formatter(LOG_DETAILED_FORMAT, LOG_DATE_FORMAT))
        errors_handler.addFilter(request_filter)
        logger.addHandler(errors_handler)

    return logger


def get_llm_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the relay logger, or a child of it."""
    if name:
        return logging.getLogger(f"{LLM_LOGGER_NAME}.{name}")
    return logging.getLogger(LLM_LOGGER_NAME)


# =========================
# LLM Call Logging
# =========================

def _preview(text: str) -> str:
    text = (text or "").replace("\n", " ")
    if len(text) > LOG_PREVIEW_LENGTH:
        return text[:LOG_PREVIEW_LENGTH] + "..."
    return text


def log_llm_request(
    model: str,
    task: str,
    prompt: str,
    max_tokens: int,
) -> str:
    """
    Log an outgoing LLM request.

    Returns:
        The request ID the call is logged under
    """
    request_id = get_request_id() or generate_request_id()
    get_llm_logger("llm").info(
        f"[LLM_REQUEST] request_id={request_id} | model={model} | task={task} | "
        f"max_tokens={max_tokens} | prompt_chars={len(prompt)} | prompt={_preview(prompt)}"
    )
    return request_id


def log_llm_response(
    request_id: str,
    model: str,
    response: str,
    latency_ms: float,
    status: str,
    error_message: Optional[str] = None,
) -> None:
    """Log the outcome of an LLM request."""
    logger = get_llm_logger("llm")
    if status == "success":
        logger.info(
            f"[LLM_RESPONSE] request_id={request_id} | model={model} | status={status} | "
            f"latency_ms={latency_ms:.1f} | response_chars={len(response)} | "
            f"response={_preview(response)}"
        )
    else:
        logger.error(
            f"[LLM_RESPONSE] request_id={request_id} | model={model} | status={status} | "
            f"latency_ms={latency_ms:.1f} | error={error_message}"
        )
