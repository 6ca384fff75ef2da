"""Translate provider SDK failures into the package's provider error taxonomy."""

from typing import Optional

from .exceptions import (
    ModelNotFoundError,
    ProviderAuthenticationError,
    ProviderError,
    ProviderOverloadedError,
    ProviderRequestError,
    RateLimitedError,
)
from ..logger import get_logger

logger = get_logger(__name__)

OVERLOADED_MESSAGE = (
    "The AI service is currently experiencing high traffic. Please wait a moment and try again."
)
AUTHENTICATION_MESSAGE = (
    "API authentication failed. Please check that the provider API key is configured correctly."
)
MODEL_NOT_FOUND_MESSAGE = "The AI model could not be found. Please check that you're using a valid model name."
RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please wait a moment before trying again."
DEFAULT_MESSAGE = "An error occurred while processing your request"


def _status_code_of(exc: BaseException) -> Optional[int]:
    status = getattr(exc, "status_code", None)
    if status is None:
        # google-genai reports the HTTP status as ``code``
        status = getattr(exc, "code", None)
    return status if isinstance(status, int) else None


def classify_provider_error(exc: BaseException) -> ProviderError:
    """Wrap a provider exception in the matching ``ProviderError`` subclass.

    The SDK status code wins when present; otherwise the message is inspected
    the same way, in the order overloaded, authentication, unknown model and
    rate limit.

    Args:
        exc: The exception raised by the provider SDK.

    Returns:
        A provider error carrying a user-facing message and the original exception.
    """
    if isinstance(exc, ProviderError):
        return exc

    status = _status_code_of(exc)
    text = str(exc)
    lowered = text.lower()

    if status == 529 or status == 503 or "overloaded" in lowered or "529" in text:
        error: ProviderError = ProviderOverloadedError(OVERLOADED_MESSAGE, exc)
    elif status == 401 or "401" in text or "authentication" in lowered:
        error = ProviderAuthenticationError(AUTHENTICATION_MESSAGE, exc)
    elif status == 404 or "404" in text or "model_not_found" in lowered:
        error = ModelNotFoundError(MODEL_NOT_FOUND_MESSAGE, exc)
    elif status == 429 or "rate_limit" in lowered or "rate limit" in lowered or "429" in text:
        error = RateLimitedError(RATE_LIMIT_MESSAGE, exc)
    else:
        error = ProviderRequestError(text or DEFAULT_MESSAGE, exc)

    logger.debug(f"Classified {type(exc).__name__} as {type(error).__name__}.")
    return error
