"""Translate between the generic transcript and Gemini contents."""

import uuid
from typing import List, Optional, Sequence

from google.genai import types
from google.genai.types import GenerateContentResponse

from arthur_assistant.core import AssistantTurn, ProviderResponse, ToolResultTurn, ToolSpec, Transcript, UserTurn, Usage
from arthur_assistant.core.tools import build_call
from .schema_sanitizer import sanitize


class GeminiContentAdapter:
    """Adapter for Gemini tool handling."""

    @staticmethod
    def tool_object(tools: Sequence[ToolSpec]) -> Optional[types.Tool]:
        """
        Generates a ``types.Tool`` containing one function declaration per tool.

        Returns:
            The Gemini tool, or None if there are no tools.
        """
        if not tools:
            return None

        declarations = [
            types.FunctionDeclaration(
                name=spec.name,
                description=spec.description,
                parameters_json_schema=sanitize(spec.parameters),
            )
            if spec.parameters
            else types.FunctionDeclaration(name=spec.name, description=spec.description)
            for spec in tools
        ]
        return types.Tool(function_declarations=declarations)

    @staticmethod
    def to_provider_contents(transcript: Transcript) -> List[types.Content]:
        """
        Converts the transcript to Gemini ``Content`` objects.

        Assistant turns use the ``model`` role; tool results are sent as
        ``function_response`` parts of a ``user`` content.
        """
        contents: List[types.Content] = []
        for turn in transcript:
            if isinstance(turn, UserTurn):
                contents.append(types.Content(role="user", parts=[types.Part(text=turn.content)]))
            elif isinstance(turn, AssistantTurn):
                parts: List[types.Part] = []
                if turn.content:
                    parts.append(types.Part(text=turn.content))
                parts.extend(
                    types.Part(function_call=types.FunctionCall(id=call.call_id, name=call.name, args=call.arguments))
                    for call in turn.tool_calls
                )
                if parts:
                    contents.append(types.Content(role="model", parts=parts))
            elif isinstance(turn, ToolResultTurn):
                contents.append(
                    types.Content(
                        role="user",
                        parts=[
                            types.Part(
                                function_response=types.FunctionResponse(
                                    id=result.call_id, name=result.name, response=result.response
                                )
                            )
                            for result in turn.results
                        ],
                    )
                )
        return contents

    @staticmethod
    def from_provider(raw: GenerateContentResponse) -> ProviderResponse[GenerateContentResponse]:
        """Extract text, function calls and usage from a Gemini response."""
        parts: List[types.Part] = []
        finish_reason = None
        if raw.candidates:
            candidate = raw.candidates[0]
            finish_reason = str(candidate.finish_reason) if candidate.finish_reason else None
            if candidate.content and candidate.content.parts:
                parts = list(candidate.content.parts)

        text = "".join(p.text for p in parts if p.text and not p.thought)
        calls = [
            # Gemini does not always assign call ids
            build_call(p.function_call.id or f"call_{uuid.uuid4().hex[:12]}", p.function_call.name or "", p.function_call.args)
            for p in parts
            if p.function_call
        ]

        usage = Usage()
        if raw.usage_metadata is not None:
            usage = Usage(
                input_tokens=raw.usage_metadata.prompt_token_count or 0,
                output_tokens=raw.usage_metadata.candidates_token_count or 0,
            )

        return ProviderResponse(text=text, tool_calls=calls, usage=usage, stop_reason=finish_reason, raw=raw)
