"""
Custom exception classes for the Arthur assistant.

This module defines the hierarchy used across the package: tool errors raised
while registering, validating, authorising and executing tools, provider errors
raised when the model provider rejects or fails a request, and request errors
raised for malformed inbound calls. Provider and request errors carry the HTTP
status the chat endpoint answers with.
"""

from typing import Any, Dict, Optional


class ArthurError(Exception):
    """Base exception for all errors raised by the package."""

    pass


class LLMToolError(ArthurError):
    """Base exception for all tool-related errors."""

    pass


class ToolRegistrationError(LLMToolError):
    """Raised when there is an error registering a tool."""

    pass


class ToolNotFoundError(LLMToolError):
    """Raised when a requested tool is not found in the registry."""

    pass


class ToolValidationError(LLMToolError):
    """Raised when tool parameters or definition are invalid."""

    pass


class ToolExecutionError(LLMToolError):
    """Raised when a tool fails during execution.

    Attributes:
        error_type: Short machine-readable kind, e.g. ``validation`` or ``not_found``.
        details: Optional structured details reported back to the model.
    """

    def __init__(self, message: str, error_type: str = "execution_failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_type = error_type
        self.details = details or {}


class ConfirmationRequiredError(ToolExecutionError):
    """Raised when a write operation is requested without an explicit user confirmation."""

    def __init__(self, message: str):
        super().__init__(message, error_type="confirmation_required")


class RequestValidationError(ArthurError):
    """Raised when an inbound chat request is malformed."""

    status_code = 400


class ConfigurationError(ArthurError):
    """Raised when the settings do not allow building a provider."""


class ProviderError(ArthurError):
    """Raised when the model provider fails a request.

    Attributes:
        status_code: HTTP status the endpoint responds with.
        retryable: Whether the user may simply try again later.
    """

    status_code = 500
    retryable = False

    def __init__(self, message: str, original_exc: Optional[BaseException] = None):
        super().__init__(message)
        self.original_exc = original_exc
        if original_exc is not None:
            self.__cause__ = original_exc


class ProviderOverloadedError(ProviderError):
    """The provider is overloaded or out of capacity upstream."""

    status_code = 503
    retryable = True


class ProviderAuthenticationError(ProviderError):
    """The provider rejected the configured credentials."""

    status_code = 401


class ModelNotFoundError(ProviderError):
    """The configured model identifier is unknown to the provider."""

    status_code = 404


class RateLimitedError(ProviderError):
    """Too many requests were sent with the configured credentials."""

    status_code = 429
    retryable = True


class ProviderRequestError(ProviderError):
    """Any other provider failure."""

    pass
