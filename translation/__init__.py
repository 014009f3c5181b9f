"""
Translation Service Module

Provides Chinook Jargon translation using an upstream LLM.
"""

from .service import router
from .translator import Translator, WordTranslator

__all__ = ["router", "Translator", "WordTranslator"]
