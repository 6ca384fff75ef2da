"""Expose provider-agnostic turn types and the transcript shared by every provider."""

from .models import BaseTurn, UserTurn, AssistantTurn, ToolResultTurn, Turn, Transcript

__all__ = [
    "BaseTurn",
    "UserTurn",
    "AssistantTurn",
    "ToolResultTurn",
    "Turn",
    "Transcript",
]
