import json
from typing import Any, Dict, List, Sequence

from anthropic.types import Message

from arthur_assistant.core import AssistantTurn, ProviderResponse, ToolResultTurn, ToolSpec, Transcript, UserTurn, Usage
from arthur_assistant.core.tools import build_call


class AnthropicMessageAdapter:
    """Converts between the generic transcript and the Anthropic Messages API format."""

    @staticmethod
    def tool_object(tools: Sequence[ToolSpec]) -> List[Dict[str, Any]]:
        """Render the tool catalogue as Anthropic tool definitions.

        Args:
            tools: The tools the model may request.

        Returns:
            A list of ``{"name", "description", "input_schema"}`` dictionaries.
        """
        return [
            {"name": spec.name, "description": spec.description, "input_schema": spec.parameters} for spec in tools
        ]

    @staticmethod
    def to_provider_messages(transcript: Transcript) -> List[Dict[str, Any]]:
        """Convert the transcript into Anthropic messages.

        Tool results travel in a ``user`` message made of ``tool_result`` blocks.

        Args:
            transcript: The conversation so far.

        Returns:
            The ``messages`` parameter for ``messages.create``.
        """
        messages: List[Dict[str, Any]] = []
        for turn in transcript:
            if isinstance(turn, UserTurn):
                messages.append({"role": "user", "content": turn.content})
            elif isinstance(turn, AssistantTurn):
                if not turn.tool_calls:
                    messages.append({"role": "assistant", "content": turn.content})
                    continue
                blocks: List[Dict[str, Any]] = []
                if turn.content:
                    blocks.append({"type": "text", "text": turn.content})
                blocks.extend(
                    {"type": "tool_use", "id": call.call_id, "name": call.name, "input": call.arguments}
                    for call in turn.tool_calls
                )
                messages.append({"role": "assistant", "content": blocks})
            elif isinstance(turn, ToolResultTurn):
                messages.append(
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "tool_result",
                                "tool_use_id": result.call_id,
                                "content": json.dumps(result.response, indent=2, default=str),
                                "is_error": result.is_error,
                            }
                            for result in turn.results
                        ],
                    }
                )
        return messages

    @staticmethod
    def from_provider(raw: Message) -> ProviderResponse[Message]:
        """Convert an Anthropic message into the generic response.

        Args:
            raw: The message returned by ``messages.create``.

        Returns:
            Text, tool calls and usage of the round-trip.
        """
        text_parts: List[str] = []
        calls = []
        for block in raw.content or []:
            if block.type == "text":
                text_parts.append(block.text)
            elif block.type == "tool_use":
                calls.append(build_call(block.id, block.name, block.input))

        usage = Usage()
        if raw.usage is not None:
            usage = Usage(input_tokens=raw.usage.input_tokens or 0, output_tokens=raw.usage.output_tokens or 0)

        return ProviderResponse(
            text="".join(text_parts),
            tool_calls=calls,
            usage=usage,
            stop_reason=raw.stop_reason,
            raw=raw,
        )
