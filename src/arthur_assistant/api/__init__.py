"""The framework-independent chat endpoint."""

from .endpoint import ChatEndpoint, MISSING_IDS_MESSAGE
from .models import ChatRequest, ChatResponseBody, ErrorBody, HttpResponse

__all__ = ["ChatEndpoint", "MISSING_IDS_MESSAGE", "ChatRequest", "ChatResponseBody", "ErrorBody", "HttpResponse"]
