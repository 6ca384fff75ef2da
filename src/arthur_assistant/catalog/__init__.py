"""The organization tool catalogue and the assistant's instructions."""

from .tools import CATALOGUE, CONTEXT_FIELDS, ToolArgs, build_registry
from .instructions import build_instructions, describe_operation

__all__ = ["CATALOGUE", "CONTEXT_FIELDS", "ToolArgs", "build_registry", "build_instructions", "describe_operation"]
