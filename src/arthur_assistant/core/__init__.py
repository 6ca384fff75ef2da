"""Public exports for the provider-agnostic core: turns, tools, confirmation and the loop."""

from .base import ModelProvider, ProviderResponse, Usage
from .tools import (
    ToolRegistry,
    ToolSpec,
    OperationCategory,
    ToolCallRequest,
    ToolCallResult,
    ToolExecutor,
    HandlerToolExecutor,
    SchemaValidator,
)
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
    classify_provider_error,
)
from .logger import get_logger, setup_logging
from .messages import BaseTurn, UserTurn, AssistantTurn, ToolResultTurn, Transcript
from .confirmation import ConfirmationGate, ConversationPhase, ReplyKind, classify_reply
from .orchestration import OrchestrationLoop, RequestContext, FinalAnswer

__all__ = [
    "ModelProvider",
    "ProviderResponse",
    "Usage",
    "ToolRegistry",
    "ToolSpec",
    "OperationCategory",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolExecutor",
    "HandlerToolExecutor",
    "SchemaValidator",
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
    "classify_provider_error",
    "get_logger",
    "setup_logging",
    "BaseTurn",
    "UserTurn",
    "AssistantTurn",
    "ToolResultTurn",
    "Transcript",
    "ConfirmationGate",
    "ConversationPhase",
    "ReplyKind",
    "classify_reply",
    "OrchestrationLoop",
    "RequestContext",
    "FinalAnswer",
]
