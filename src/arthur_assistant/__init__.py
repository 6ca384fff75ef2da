"""Arthur - a conversational assistant for managing organization records through tool calls."""

from .core import (
    ArthurError,
    ConfigurationError,
    ProviderError,
    RequestValidationError,
    OrchestrationLoop,
    RequestContext,
    FinalAnswer,
    Transcript,
    UserTurn,
    AssistantTurn,
    ToolResultTurn,
    ToolRegistry,
    ToolSpec,
    HandlerToolExecutor,
    ModelProvider,
    Usage,
    get_logger,
    setup_logging,
)
from .api import ChatEndpoint, HttpResponse
from .catalog import build_instructions, build_registry
from .providers import AnthropicProvider, OpenAIProvider, GeminiProvider
from .config import Settings, build_assistant, build_provider

__all__ = [
    "ArthurError",
    "ConfigurationError",
    "ProviderError",
    "RequestValidationError",
    "OrchestrationLoop",
    "RequestContext",
    "FinalAnswer",
    "Transcript",
    "UserTurn",
    "AssistantTurn",
    "ToolResultTurn",
    "ToolRegistry",
    "ToolSpec",
    "HandlerToolExecutor",
    "ModelProvider",
    "Usage",
    "get_logger",
    "setup_logging",
    "ChatEndpoint",
    "HttpResponse",
    "build_instructions",
    "build_registry",
    "AnthropicProvider",
    "OpenAIProvider",
    "GeminiProvider",
    "Settings",
    "build_assistant",
    "build_provider",
]
