"""Re-export the provider interface and the response models shared by all providers."""

from .base import ModelProvider, ProviderResponse, Usage

__all__ = [
    "ModelProvider",
    "ProviderResponse",
    "Usage",
]
