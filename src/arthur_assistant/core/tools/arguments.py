"""Normalization of raw tool arguments sent by providers."""

import json
from typing import Any, Dict

from .models import ToolCallRequest


def build_call(call_id: str, name: str, raw_args: Any) -> ToolCallRequest:
    """Create a tool call request, decoding its arguments into a dictionary.

    Handles JSON strings, mappings, or None values. Arguments that cannot be
    decoded are recorded on the request so the loop can report them back to
    the model instead of running the tool.

    Args:
        call_id: Provider id of the call.
        name: Name of the requested tool.
        raw_args: The raw arguments (dict, string, or None).

    Returns:
        The normalized request.
    """
    if raw_args is None or raw_args == "":
        return ToolCallRequest(call_id=call_id, name=name)

    if isinstance(raw_args, dict):
        return ToolCallRequest(call_id=call_id, name=name, arguments=raw_args)

    if isinstance(raw_args, str):
        try:
            parsed = json.loads(raw_args)
        except json.JSONDecodeError as exc:
            return ToolCallRequest(
                call_id=call_id, name=name, argument_error=f"Failed to decode function arguments: {exc}"
            )
        if parsed is None:
            return ToolCallRequest(call_id=call_id, name=name)
        if not isinstance(parsed, dict):
            return ToolCallRequest(
                call_id=call_id, name=name, argument_error="Function arguments must decode to a JSON object."
            )
        return ToolCallRequest(call_id=call_id, name=name, arguments=parsed)

    try:
        arguments: Dict[str, Any] = dict(raw_args)
    except (TypeError, ValueError) as exc:
        return ToolCallRequest(call_id=call_id, name=name, argument_error=f"Invalid function arguments: {exc}")
    return ToolCallRequest(call_id=call_id, name=name, arguments=arguments)
