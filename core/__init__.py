"""
Core Module

Shared infrastructure components:
- LLM client base class
- Validators
- CORS middleware
"""

from .llm_client_base import BaseLLMClient, LLMConfig, UpstreamError
from .validators import validate_required_field
from .cors import AllowListCORSMiddleware

__all__ = [
    "BaseLLMClient",
    "LLMConfig",
    "UpstreamError",
    "validate_required_field",
    "AllowListCORSMiddleware",
]
