"""Export the exception hierarchy used across tools, providers and the chat endpoint."""

from .exceptions import (
    ArthurError,
    LLMToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolExecutionError,
    ToolValidationError,
    ConfirmationRequiredError,
    RequestValidationError,
    ConfigurationError,
    ProviderError,
    ProviderOverloadedError,
    ProviderAuthenticationError,
    ModelNotFoundError,
    RateLimitedError,
    ProviderRequestError,
)
from .classify import (
    classify_provider_error,
    OVERLOADED_MESSAGE,
    AUTHENTICATION_MESSAGE,
    MODEL_NOT_FOUND_MESSAGE,
    RATE_LIMIT_MESSAGE,
    DEFAULT_MESSAGE,
)

__all__ = [
    "ArthurError",
    "LLMToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
    "ConfirmationRequiredError",
    "RequestValidationError",
    "ConfigurationError",
    "ProviderError",
    "ProviderOverloadedError",
    "ProviderAuthenticationError",
    "ModelNotFoundError",
    "RateLimitedError",
    "ProviderRequestError",
    "classify_provider_error",
    "OVERLOADED_MESSAGE",
    "AUTHENTICATION_MESSAGE",
    "MODEL_NOT_FOUND_MESSAGE",
    "RATE_LIMIT_MESSAGE",
    "DEFAULT_MESSAGE",
]
