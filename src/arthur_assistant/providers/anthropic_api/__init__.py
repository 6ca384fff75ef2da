"""Expose the Anthropic provider and its message adapter."""

from .core import AnthropicProvider, DEFAULT_MODEL
from .adapter import AnthropicMessageAdapter

__all__ = ["AnthropicProvider", "AnthropicMessageAdapter", "DEFAULT_MODEL"]
