"""Data models for tool execution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents a normalized tool call request from a provider response.

    ``call_id`` correlates the request with its result and must be echoed back verbatim.
    ``argument_error`` is set when the provider sent arguments that could not be decoded.
    """

    call_id: str
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    argument_error: Optional[str] = None


@dataclass(frozen=True)
class ToolCallResult:
    """Represents the outcome of executing a tool call.

    ``response`` is either ``{"result": ...}`` or ``{"error": ..., "error_type": ...}``.
    """

    call_id: str
    name: str
    response: Dict[str, Any]

    @property
    def is_error(self) -> bool:
        return "error" in self.response

    @classmethod
    def success(cls, request: ToolCallRequest, payload: Any) -> "ToolCallResult":
        return cls(call_id=request.call_id, name=request.name, response={"result": payload})

    @classmethod
    def failure(
        cls, request: ToolCallRequest, message: str, error_type: str, details: Optional[Dict[str, Any]] = None
    ) -> "ToolCallResult":
        response: Dict[str, Any] = {"error": message, "error_type": error_type}
        if details:
            response["details"] = details
        return cls(call_id=request.call_id, name=request.name, response=response)
