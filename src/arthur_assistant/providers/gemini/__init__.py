"""Expose the Gemini provider and its content adapter."""

from .core import GeminiProvider, DEFAULT_MODEL
from .adapter import GeminiContentAdapter

__all__ = ["GeminiProvider", "GeminiContentAdapter", "DEFAULT_MODEL"]
