import asyncio
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import pytest

from arthur_assistant.catalog import build_instructions, build_registry
from arthur_assistant.core import (
    AssistantTurn,
    HandlerToolExecutor,
    ModelProvider,
    OrchestrationLoop,
    ProviderResponse,
    RequestContext,
    ToolCallRequest,
    ToolRegistry,
    ToolSpec,
    Transcript,
    Usage,
    UserTurn,
)

EVENT_SUMMARY = (
    "Perfect! Here's what I'm about to create:\n\n"
    "### 📅 NEW EVENT\n\n"
    "| Field | Value |\n"
    "|-------|-------|\n"
    "| Event Name | Spring Party |\n"
    "| Start Time | March 20, 2025 at 7:00 PM |\n"
    "| End Time | March 20, 2025 at 11:00 PM |\n\n"
    "Does everything look correct?"
)

EVENT_ARGS: Dict[str, Any] = {
    "organization_id": "org-1",
    "created_by": "user-1",
    "title": "Spring Party",
    "start_time": "2025-03-20T19:00:00",
    "end_time": "2025-03-20T23:00:00",
}


class ScriptedProvider(ModelProvider[Any]):
    """Replays queued responses and records every transcript it was sent."""

    def __init__(self, responses: Sequence[Union[ProviderResponse[Any], Exception]]) -> None:
        super().__init__(model_name="scripted")
        self._responses = list(responses)
        self.transcripts: List[Transcript] = []
        self.instructions: List[str] = []

    @property
    def calls(self) -> int:
        return len(self.transcripts)

    async def _complete_impl(
        self, transcript: Transcript, instructions: str, tools: Sequence[ToolSpec]
    ) -> ProviderResponse[Any]:
        self.transcripts.append(transcript.copy())
        self.instructions.append(instructions)
        if not self._responses:
            raise AssertionError("ScriptedProvider ran out of responses")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def text(message: str, input_tokens: int = 10, output_tokens: int = 5) -> ProviderResponse[Any]:
    return ProviderResponse(text=message, usage=Usage(input_tokens=input_tokens, output_tokens=output_tokens))


def calls(*requests: ToolCallRequest, input_tokens: int = 10, output_tokens: int = 5) -> ProviderResponse[Any]:
    return ProviderResponse(
        tool_calls=list(requests), usage=Usage(input_tokens=input_tokens, output_tokens=output_tokens)
    )


def confirmed_transcript(reply: str = "yes") -> Transcript:
    return Transcript(
        [
            UserTurn(content="Create an event called Spring Party on March 20th from 7pm to 11pm"),
            AssistantTurn(content=EVENT_SUMMARY),
            UserTurn(content=reply),
        ]
    )


@pytest.fixture
def registry() -> ToolRegistry:
    return build_registry()


@pytest.fixture
def context() -> RequestContext:
    return RequestContext(organization_id="org-1", user_id="user-1", today=date(2025, 3, 1))


@pytest.fixture
def make_loop(registry: ToolRegistry) -> Callable[..., OrchestrationLoop]:
    def factory(
        provider: ModelProvider[Any],
        handlers: Optional[Dict[str, Callable[..., Any]]] = None,
        executor: Any = None,
        **kwargs: Any,
    ) -> OrchestrationLoop:
        return OrchestrationLoop(
            provider=provider,
            registry=registry,
            executor=executor or HandlerToolExecutor(registry, handlers or {}, tool_timeout=1.0),
            instructions=build_instructions,
            **kwargs,
        )

    return factory


@pytest.fixture
def recorded_events() -> List[Dict[str, Any]]:
    return []


@pytest.fixture
def event_handlers(recorded_events: List[Dict[str, Any]]) -> Dict[str, Callable[..., Any]]:
    async def create_event(**kwargs: Any) -> Dict[str, Any]:
        await asyncio.sleep(0)
        recorded_events.append(kwargs)
        return {"event_id": f"evt-{len(recorded_events)}", "title": kwargs["title"]}

    def list_events(organization_id: str, upcoming_only: bool = False) -> List[Dict[str, Any]]:
        return [{"event_id": "evt-0", "title": "Kickoff"}]

    return {"create_event": create_event, "list_events": list_events}
