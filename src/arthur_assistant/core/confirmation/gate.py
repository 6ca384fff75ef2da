"""Structural enforcement of the confirmation protocol.

The instructions ask the model to gather, summarise, wait for a confirmation
and only then execute. The gate makes the last two steps hold even when the
model does not follow them: a write-classified tool call runs only when the
latest user turn confirms a summary, and only in one dispatch round.
"""

from enum import Enum
from typing import Iterable, Optional

from .replies import ReplyKind, classify_reply
from ..exceptions import ConfirmationRequiredError
from ..logger import get_logger
from ..messages import AssistantTurn, ToolResultTurn, Transcript, UserTurn
from ..tools import ToolRegistry, ToolSpec

logger = get_logger(__name__)


class ConversationPhase(str, Enum):
    GATHERING = "gathering"
    SUMMARIZING = "summarizing"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    EXECUTING = "executing"
    REPORTING = "reporting"


def looks_like_summary(text: Optional[str]) -> bool:
    """A confirmation summary is rendered as a markdown table of fields and values."""
    if not text:
        return False
    rows = [line for line in text.splitlines() if line.strip().startswith("|")]
    return len(rows) >= 3


def infer_phase(transcript: Transcript) -> ConversationPhase:
    """Phase the conversation is in when the latest user turn arrives."""
    last_user = transcript.last_user_turn()
    if last_user is None:
        return ConversationPhase.GATHERING

    # Only a reply to a summary can confirm; a "sure" to a question is still gathering.
    prompt = transcript.assistant_text_before_last_user()
    if not looks_like_summary(prompt):
        return ConversationPhase.GATHERING

    reply = classify_reply(last_user.content)
    if reply is ReplyKind.CHANGE:
        return ConversationPhase.GATHERING
    if reply is ReplyKind.AFFIRMATIVE:
        return ConversationPhase.EXECUTING
    return ConversationPhase.AWAITING_CONFIRMATION


class ConfirmationGate:
    """Per-request authorisation of write-classified tool calls."""

    def __init__(self, transcript: Transcript, registry: ToolRegistry, enforce: bool = True) -> None:
        """Derive the confirmation state from the inbound transcript.

        Args:
            transcript: The conversation as received for this request.
            registry: Registry used to tell read tools from write tools.
            enforce: When False, refusals are only logged.
        """
        self._registry = registry
        self._enforce = enforce
        self.phase = infer_phase(transcript)
        self.writes_executed = False
        self.reads_executed = False

        confirmed = self.phase is ConversationPhase.EXECUTING
        self._confirmed = confirmed and not self._write_already_ran(transcript)
        if confirmed and not self._confirmed:
            self.phase = ConversationPhase.REPORTING
            logger.info("Confirmation already consumed by an earlier write in this conversation.")

    @property
    def confirmed(self) -> bool:
        return self._confirmed

    def _write_already_ran(self, transcript: Transcript) -> bool:
        # Results after the latest user turn belong to the confirmation being checked
        answered = set()
        for turn in reversed(transcript.turns):
            if isinstance(turn, UserTurn):
                break
            if isinstance(turn, ToolResultTurn):
                answered.update(r.call_id for r in turn.results)
            elif isinstance(turn, AssistantTurn):
                for call in turn.tool_calls:
                    if call.call_id in answered and self._is_write(call.name):
                        return True
        return False

    def _is_write(self, name: str) -> bool:
        spec = self._registry.tools.get(name)
        return spec is not None and spec.is_write

    def authorize(self, spec: ToolSpec) -> None:
        """Check that the tool may run now.

        Raises:
            ConfirmationRequiredError: If a write tool is requested without a live confirmation.
        """
        if not spec.is_write or self._confirmed:
            return

        msg = (
            f"'{spec.name}' changes organization data and was not executed. "
            "Show the user a summary of the change and wait for them to confirm before calling it."
        )
        if not self._enforce:
            logger.warning(f"Unconfirmed write '{spec.name}' allowed because enforcement is off.")
            return
        logger.warning(f"Refused unconfirmed write call to '{spec.name}' (phase: {self.phase.value}).")
        raise ConfirmationRequiredError(msg)

    def close_round(self, executed: Iterable[ToolSpec]) -> None:
        """Record the tools that ran in a dispatch round.

        A round with at least one write consumes the confirmation.
        """
        for spec in executed:
            if spec.is_write:
                self.writes_executed = True
            else:
                self.reads_executed = True

        if self.writes_executed and self._confirmed:
            self._confirmed = False
            self.phase = ConversationPhase.REPORTING
            logger.info("Confirmed write round finished; further writes need a new confirmation.")

    def phase_after(self, answer: str) -> ConversationPhase:
        """Phase the conversation is left in by the final answer of this request."""
        if self.writes_executed:
            return ConversationPhase.REPORTING
        if looks_like_summary(answer):
            return ConversationPhase.AWAITING_CONFIRMATION
        if self.reads_executed:
            return ConversationPhase.REPORTING
        return ConversationPhase.GATHERING
