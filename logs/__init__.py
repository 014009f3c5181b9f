"""
Logs Module

Provides:
- Logging configuration for the relay and its upstream LLM calls
- Request/Response logging
- Request ID context tracking
"""

from .logging_config import (
    setup_llm_logging,
    get_llm_logger,
    log_llm_request,
    log_llm_response,
    RequestContext,
    RequestIdFilter,
    get_request_id,
    generate_request_id,
    LOG_DIR,
)

__all__ = [
    "setup_llm_logging",
    "get_llm_logger",
    "log_llm_request",
    "log_llm_response",
    "RequestContext",
    "RequestIdFilter",
    "get_request_id",
    "generate_request_id",
    "LOG_DIR",
]
