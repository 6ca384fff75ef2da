"""Confirmation protocol: reply classification, phase inference and the write gate."""

from .replies import ReplyKind, classify_reply
from .gate import ConfirmationGate, ConversationPhase, infer_phase, looks_like_summary

__all__ = [
    "ReplyKind",
    "classify_reply",
    "ConfirmationGate",
    "ConversationPhase",
    "infer_phase",
    "looks_like_summary",
]
