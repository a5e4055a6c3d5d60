"""Event tools - fire and list user events."""
from typing import Annotated, Any, Optional
import logging

from pydantic import Field

from ...consul_client import ConsulClient
from ...formatters import decode_value, listing
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


@Tool(
    "fire-event",
    "Fire a new event",
    operation="firing event",
    identifier="name",
    render="Fired event: {result[ID]}",
)
async def fire_event(
    client: ConsulClient,
    name: Annotated[str, Field(description="Name of the event")],
    payload: Annotated[str, Field(description="Event payload")] = "",
) -> Any:
    """Fire a user event through the gossip pool; the payload is sent as the body."""
    return await client.event_fire(name, payload or "")


def _event_line(event: dict[str, Any]) -> str:
    # Payloads come back base64 encoded
    payload = event.get("Payload")
    payload = decode_value(payload) if payload else None
    return f"ID: {event.get('ID')}, Name: {event.get('Name')}, Payload: {payload or 'None'}"


@Tool(
    "list-events",
    "List all events",
    operation="listing events",
    render=listing("Events", _event_line),
    empty="No events found",
)
async def list_events(
    client: ConsulClient,
    name: Annotated[Optional[str], Field(description="Filter events by name")] = None,
) -> Any:
    """List the recent events the local agent has seen, optionally by name."""
    return await client.event_list(name)
