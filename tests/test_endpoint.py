from typing import Any, Callable, Dict, List

import pytest

from arthur_assistant.api import MISSING_IDS_MESSAGE, ChatEndpoint
from arthur_assistant.core import OrchestrationLoop, ToolCallRequest, ToolExecutionError
from arthur_assistant.core.exceptions import RATE_LIMIT_MESSAGE
from conftest import EVENT_ARGS, EVENT_SUMMARY, ScriptedProvider, calls, text


def payload(messages: List[Dict[str, Any]], **overrides: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"messages": messages, "organizationId": "org-1", "userId": "user-1"}
    body.update(overrides)
    return body


@pytest.mark.parametrize(
    "body",
    [
        payload([{"role": "user", "content": "hi"}], organizationId=None),
        payload([{"role": "user", "content": "hi"}], organizationId=""),
        payload([{"role": "user", "content": "hi"}], userId=None),
        {"messages": [{"role": "user", "content": "hi"}]},
    ],
)
@pytest.mark.asyncio
async def test_missing_ids_return_400_without_provider_calls(
    make_loop: Callable[..., OrchestrationLoop], body: Dict[str, Any]
) -> None:
    provider = ScriptedProvider([text("should not be used")])
    endpoint = ChatEndpoint(make_loop(provider))

    response = await endpoint.handle(body)

    assert response.status_code == 400
    assert response.body == {"error": MISSING_IDS_MESSAGE}
    assert provider.calls == 0


@pytest.mark.asyncio
async def test_malformed_messages_return_400(make_loop: Callable[..., OrchestrationLoop]) -> None:
    provider = ScriptedProvider([])
    endpoint = ChatEndpoint(make_loop(provider))

    for body in (payload([{"role": "robot", "content": "beep"}]), payload([]), "not json", {"messages": "x"}):
        response = await endpoint.handle(body)
        assert response.status_code == 400
        assert "error" in response.body
    assert provider.calls == 0


@pytest.mark.asyncio
async def test_success_returns_message_and_usage(make_loop: Callable[..., OrchestrationLoop]) -> None:
    provider = ScriptedProvider([text("Hi! How can I help?", input_tokens=100, output_tokens=20)])
    endpoint = ChatEndpoint(make_loop(provider))

    response = await endpoint.handle(payload([{"role": "user", "content": "Hello"}]))

    assert response.status_code == 200
    assert response.body == {
        "message": "Hi! How can I help?",
        "usage": {"input_tokens": 100, "output_tokens": 20},
    }


@pytest.mark.asyncio
async def test_tool_error_still_returns_200(make_loop: Callable[..., OrchestrationLoop]) -> None:
    async def create_event(**kwargs: Any) -> None:
        raise ToolExecutionError("Event overlaps with Gala", "conflict")

    provider = ScriptedProvider(
        [
            calls(ToolCallRequest(call_id="w", name="create_event", arguments=dict(EVENT_ARGS))),
            text("I couldn't create the event because it overlaps with the Gala."),
        ]
    )
    endpoint = ChatEndpoint(make_loop(provider, handlers={"create_event": create_event}))

    response = await endpoint.handle(
        payload(
            [
                {"role": "user", "content": "Create Spring Party on March 20th from 7pm to 11pm"},
                {"role": "assistant", "content": EVENT_SUMMARY},
                {"role": "user", "content": "yes"},
            ]
        )
    )

    assert response.status_code == 200
    assert "overlaps" in response.body["message"]
    assert provider.calls == 2


@pytest.mark.asyncio
async def test_provider_error_maps_to_status(make_loop: Callable[..., OrchestrationLoop]) -> None:
    provider = ScriptedProvider([Exception("rate_limit_error: too many requests")])
    endpoint = ChatEndpoint(make_loop(provider))

    response = await endpoint.handle(payload([{"role": "user", "content": "Hello"}]))

    assert response.status_code == 429
    assert response.body == {"error": RATE_LIMIT_MESSAGE}


@pytest.mark.asyncio
async def test_round_limit_is_still_a_200(make_loop: Callable[..., OrchestrationLoop]) -> None:
    list_call = ToolCallRequest(call_id="r", name="list_members", arguments={"organization_id": "org-1"})
    provider = ScriptedProvider([calls(list_call), calls(list_call)])
    endpoint = ChatEndpoint(make_loop(provider, handlers={"list_members": lambda organization_id: []}, max_rounds=1))

    response = await endpoint.handle(payload([{"role": "user", "content": "Who is here?"}]))

    assert response.status_code == 200
    assert response.body["usage"] == {"input_tokens": 20, "output_tokens": 10}
