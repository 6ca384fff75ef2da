import asyncio
import itertools
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from arthur_assistant import ConfigurationError, Settings, build_assistant, setup_logging

ORGANIZATION_ID = "org-demo"
USER_ID = "user-1"

_ids = itertools.count(1)
events: List[Dict[str, Any]] = []
members: List[Dict[str, Any]] = [
    {"user_id": USER_ID, "name": "Demo Admin", "role": "admin", "payment_class": None},
]


def list_members(organization_id: str) -> List[Dict[str, Any]]:
    return members


def list_events(organization_id: str, upcoming_only: bool = False) -> List[Dict[str, Any]]:
    if not upcoming_only:
        return events
    now = datetime.now()
    return [e for e in events if e["start_time"] > now]


def create_event(
    organization_id: str,
    created_by: str,
    title: str,
    start_time: datetime,
    end_time: datetime,
    location: Optional[str] = None,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    event = {
        "event_id": f"evt-{next(_ids)}",
        "title": title,
        "start_time": start_time,
        "end_time": end_time,
        "location": location,
        "description": description,
    }
    events.append(event)
    return event


def delete_event(organization_id: str, event_id: str) -> Dict[str, Any]:
    for event in events:
        if event["event_id"] == event_id:
            events.remove(event)
            return {"deleted": event_id}
    raise LookupError(f"No event with id {event_id}.")


async def main() -> None:
    """
    Chat with the assistant in the terminal. Only member and event tools are backed
    by in-memory handlers; the rest answer that they are not available.
    """
    setup_logging()
    print("Welcome to the Arthur CLI chat!")

    try:
        endpoint = build_assistant(
            Settings.from_env(),
            handlers={
                "list_members": list_members,
                "list_events": list_events,
                "create_event": create_event,
                "delete_event": delete_event,
            },
        )
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    messages: List[Dict[str, Any]] = []

    print("\nStart chatting! Type 'exit' or 'quit' to stop.")
    while True:
        user_input = input("\nYou: ").strip()
        if user_input.lower() in ["exit", "quit"]:
            print("Goodbye!")
            break

        if not user_input:
            continue

        messages.append({"role": "user", "content": user_input})
        response = await endpoint.handle(
            {"messages": messages, "organizationId": ORGANIZATION_ID, "userId": USER_ID}
        )
        if response.status_code != 200:
            print(f"Error {response.status_code}: {response.body['error']}")
            messages.pop()
            continue

        print(f"Arthur: {response.body['message']}")
        messages.append({"role": "assistant", "content": response.body["message"]})


if __name__ == "__main__":
    asyncio.run(main())
