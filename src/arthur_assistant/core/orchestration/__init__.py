"""The orchestration loop and its request/answer models."""

from .loop import (
    OrchestrationLoop,
    RequestContext,
    FinalAnswer,
    InstructionBuilder,
    FALLBACK_MESSAGE,
    ROUND_LIMIT_MESSAGE,
    INTERNAL_ERROR_MESSAGE,
)

__all__ = [
    "OrchestrationLoop",
    "RequestContext",
    "FinalAnswer",
    "InstructionBuilder",
    "FALLBACK_MESSAGE",
    "ROUND_LIMIT_MESSAGE",
    "INTERNAL_ERROR_MESSAGE",
]
