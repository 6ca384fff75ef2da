import json
from typing import Any, Dict, List, Sequence

from openai.types.chat import ChatCompletion, ChatCompletionToolParam

from arthur_assistant.core import AssistantTurn, ProviderResponse, ToolResultTurn, ToolSpec, Transcript, UserTurn, Usage
from arthur_assistant.core.tools import build_call


class OpenAIMessageAdapter:
    """Converts between the generic transcript and the Chat Completions format."""

    @staticmethod
    def tool_object(tools: Sequence[ToolSpec]) -> List[ChatCompletionToolParam]:
        """
        Generates a list of tool definitions suitable for the OpenAI API.

        Returns:
            A list of ``{"type": "function", "function": {...}}`` dictionaries.
        """
        return [
            {
                "type": "function",
                "function": {
                    "name": spec.name,
                    "description": spec.description,
                    "parameters": spec.parameters or {"type": "object", "properties": {}},
                },
            }
            for spec in tools
        ]

    @staticmethod
    def to_provider_messages(transcript: Transcript, instructions: str) -> List[Dict[str, Any]]:
        """
        Converts the transcript to OpenAI message dictionaries.

        The instructions become the leading system message and every tool result
        becomes its own ``tool`` message.

        Args:
            transcript: The conversation so far.
            instructions: The system instructions.

        Returns:
            List of OpenAI message dictionaries.
        """
        messages: List[Dict[str, Any]] = [{"role": "system", "content": instructions}]
        for turn in transcript:
            if isinstance(turn, UserTurn):
                messages.append({"role": "user", "content": turn.content})
            elif isinstance(turn, AssistantTurn):
                openai_msg: Dict[str, Any] = {"role": "assistant", "content": turn.content or None}
                if turn.tool_calls:
                    openai_msg["tool_calls"] = [
                        {
                            "id": call.call_id,
                            "type": "function",
                            "function": {"name": call.name, "arguments": json.dumps(call.arguments, default=str)},
                        }
                        for call in turn.tool_calls
                    ]
                messages.append(openai_msg)
            elif isinstance(turn, ToolResultTurn):
                messages.extend(
                    {
                        "role": "tool",
                        "tool_call_id": result.call_id,
                        "content": json.dumps(result.response, default=str),
                    }
                    for result in turn.results
                )
        return messages

    @staticmethod
    def from_provider(raw: ChatCompletion) -> ProviderResponse[ChatCompletion]:
        """Extract text, tool calls and usage from a chat completion.

        Args:
            raw: The chat completion response from OpenAI.

        Returns:
            The normalized response.
        """
        usage = Usage()
        if raw.usage is not None:
            usage = Usage(input_tokens=raw.usage.prompt_tokens or 0, output_tokens=raw.usage.completion_tokens or 0)

        if not raw.choices:
            return ProviderResponse(usage=usage, raw=raw)

        choice = raw.choices[0]
        calls = [
            build_call(tool_call.id, tool_call.function.name, tool_call.function.arguments)
            for tool_call in choice.message.tool_calls or []
            if tool_call.type == "function"
        ]
        return ProviderResponse(
            text=choice.message.content or "",
            tool_calls=calls,
            usage=usage,
            stop_reason=choice.finish_reason,
            raw=raw,
        )
