"""Provider-agnostic conversation turns and the transcript that threads them."""

import json
from abc import ABC
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from pydantic import BaseModel, Field

from ..exceptions import RequestValidationError
from ..tools.models import ToolCallRequest, ToolCallResult


class BaseTurn(ABC, BaseModel):
    """Base model for a turn exchanged with the model.

    Attributes:
        role: Who produced the turn.
    """

    role: str


class UserTurn(BaseTurn):
    """Free text typed by the end user."""

    role: str = "user"
    content: str


class AssistantTurn(BaseTurn):
    """Text produced by the model, optionally carrying tool call requests."""

    role: str = "assistant"
    content: str = ""
    tool_calls: List[ToolCallRequest] = Field(default_factory=list)


class ToolResultTurn(BaseTurn):
    """The full set of tool results answering the preceding assistant turn."""

    role: str = "tool_result"
    results: List[ToolCallResult]


Turn = Union[UserTurn, AssistantTurn, ToolResultTurn]


class Transcript:
    """Ordered, append-only sequence of turns for one request.

    The transcript is the only conversational state. It is rebuilt from the
    inbound request every time and never persisted here.
    """

    def __init__(self, turns: Optional[Sequence[Turn]] = None) -> None:
        self._turns: List[Turn] = list(turns or [])

    def append(self, turn: Turn) -> None:
        self._turns.append(turn)

    def copy(self) -> "Transcript":
        return Transcript(self._turns)

    @property
    def turns(self) -> List[Turn]:
        return list(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def __getitem__(self, index: int) -> Turn:
        return self._turns[index]

    def last_user_turn(self) -> Optional[UserTurn]:
        """Return the most recent turn typed by the user, if any."""
        for turn in reversed(self._turns):
            if isinstance(turn, UserTurn):
                return turn
        return None

    def assistant_text_before_last_user(self) -> Optional[str]:
        """Return the assistant text the latest user turn is answering.

        Tool-call-only assistant turns are skipped; they carry no text the user saw.
        """
        seen_user = False
        for turn in reversed(self._turns):
            if isinstance(turn, UserTurn):
                if seen_user:
                    return None
                seen_user = True
            elif seen_user and isinstance(turn, AssistantTurn) and turn.content.strip():
                return turn.content
        return None

    def pending_calls(self) -> List[ToolCallRequest]:
        """Return tool call requests that have not received a result yet."""
        answered = {r.call_id for turn in self._turns if isinstance(turn, ToolResultTurn) for r in turn.results}
        return [
            call
            for turn in self._turns
            if isinstance(turn, AssistantTurn)
            for call in turn.tool_calls
            if call.call_id not in answered
        ]

    @classmethod
    def from_wire(cls, messages: Any) -> "Transcript":
        """Build a transcript from the ``messages`` array of an inbound request.

        Each message is ``{"role": ..., "content": ...}`` where content is either a
        string or a list of content blocks (``text``, ``tool_use``, ``tool_result``).
        Assistant messages with neither text nor tool calls are dropped.

        Raises:
            RequestValidationError: If the array or one of its messages is malformed.
        """
        if not isinstance(messages, list):
            raise RequestValidationError("messages must be a list")

        transcript = cls()
        call_names: Dict[str, str] = {}
        for index, message in enumerate(messages):
            if not isinstance(message, dict):
                raise RequestValidationError(f"messages[{index}] must be an object")
            role = message.get("role")
            content = message.get("content")

            if role == "user":
                transcript.append(_user_turn_from_wire(index, content, call_names))
            elif role == "assistant":
                turn = _assistant_turn_from_wire(index, content)
                if not turn.content.strip() and not turn.tool_calls:
                    # Providers reject empty assistant messages
                    continue
                call_names.update({c.call_id: c.name for c in turn.tool_calls})
                transcript.append(turn)
            elif role == "tool_result":
                transcript.append(_tool_result_turn_from_wire(index, content, call_names))
            else:
                raise RequestValidationError(f"messages[{index}] has unsupported role {role!r}")

        if not transcript.last_user_turn():
            raise RequestValidationError("messages must contain at least one user message")
        return transcript


def _blocks(index: int, content: Any) -> List[Dict[str, Any]]:
    if not isinstance(content, list) or not all(isinstance(b, dict) for b in content):
        raise RequestValidationError(f"messages[{index}].content must be a string or a list of blocks")
    return content


def _user_turn_from_wire(index: int, content: Any, call_names: Dict[str, str]) -> Turn:
    if isinstance(content, str):
        return UserTurn(content=content)

    blocks = _blocks(index, content)
    if any(b.get("type") == "tool_result" for b in blocks):
        return _tool_result_turn_from_wire(index, blocks, call_names)
    text = "".join(b.get("text", "") for b in blocks if b.get("type") == "text")
    return UserTurn(content=text)


def _assistant_turn_from_wire(index: int, content: Any) -> AssistantTurn:
    if isinstance(content, str):
        return AssistantTurn(content=content)
    if content is None:
        return AssistantTurn()

    text_parts: List[str] = []
    calls: List[ToolCallRequest] = []
    for block in _blocks(index, content):
        if block.get("type") == "text":
            text_parts.append(block.get("text", ""))
        elif block.get("type") == "tool_use":
            if not block.get("id") or not block.get("name"):
                raise RequestValidationError(f"messages[{index}] has a tool_use block without id or name")
            calls.append(ToolCallRequest(call_id=block["id"], name=block["name"], arguments=block.get("input") or {}))
    return AssistantTurn(content="".join(text_parts), tool_calls=calls)


def _tool_result_turn_from_wire(index: int, content: Any, call_names: Dict[str, str]) -> ToolResultTurn:
    results: List[ToolCallResult] = []
    for block in _blocks(index, content):
        call_id = block.get("tool_use_id") or block.get("tool_call_id")
        if not call_id:
            continue
        name = block.get("name") or call_names.get(call_id, "unknown_tool")
        results.append(ToolCallResult(call_id=call_id, name=name, response=_decode_result(block)))
    if not results:
        raise RequestValidationError(f"messages[{index}] carries no tool results")
    return ToolResultTurn(results=results)


def _decode_result(block: Dict[str, Any]) -> Dict[str, Any]:
    if isinstance(block.get("response"), dict):
        return block["response"]

    raw = block.get("content")
    if isinstance(raw, list):
        raw = "".join(part.get("text", "") for part in raw if isinstance(part, dict))
    if isinstance(raw, str):
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError:
            decoded = raw
    else:
        decoded = raw

    if isinstance(decoded, dict) and ("result" in decoded or "error" in decoded):
        return decoded
    if block.get("is_error"):
        return {"error": decoded, "error_type": "execution_failed"}
    return {"result": decoded}
