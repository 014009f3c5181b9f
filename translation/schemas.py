"""
Pydantic schemas for translation API.
"""
from pydantic import BaseModel, Field
from typing import Optional


class TranslationRequest(BaseModel):
    """Request for a single word or phrase translation."""
    input_word: Optional[str] = Field(None, alias="inputWord", description="Word or phrase to translate")


class TranslationResponse(BaseModel):
    """Successful translation."""
    translation: str = Field(..., description="Upstream-generated translation")


class ErrorResponse(BaseModel):
    """Uniform error envelope."""
    error: str = Field(..., description="Human-readable error message")
