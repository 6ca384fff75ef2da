"""Tool-related data models."""

from .models import ToolSpec, OperationCategory
from .tool_call import ToolCallRequest, ToolCallResult

__all__ = ["ToolSpec", "OperationCategory", "ToolCallRequest", "ToolCallResult"]
