from .models import ToolSpec, OperationCategory, ToolCallRequest, ToolCallResult
from .registry import ToolRegistry
from .schema import SchemaValidator, build_parameters_schema
from .executor import ToolExecutor, HandlerToolExecutor
from .arguments import build_call

__all__ = [
    "ToolSpec",
    "OperationCategory",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolRegistry",
    "SchemaValidator",
    "build_parameters_schema",
    "ToolExecutor",
    "HandlerToolExecutor",
    "build_call",
]
