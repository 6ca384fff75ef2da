"""Model provider implementations, one sub-package per vendor."""

from .anthropic_api import AnthropicProvider
from .openai_api import OpenAIProvider
from .gemini import GeminiProvider

__all__ = ["AnthropicProvider", "OpenAIProvider", "GeminiProvider"]
