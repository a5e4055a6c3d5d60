"""Session tools - list, create and destroy Consul sessions."""
from typing import Annotated, Any, Literal, Optional
import logging

from pydantic import Field

from ...consul_client import ConsulClient
from ...formatters import format_session, listing
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


@Tool(
    "list-sessions",
    "List all sessions in Consul",
    operation="listing sessions",
    render=listing("Sessions", format_session),
    empty="No sessions found",
)
async def list_sessions(client: ConsulClient) -> Any:
    """List every active session in the datacenter."""
    return await client.session_list()


@Tool(
    "create-session",
    "Create a new session in Consul",
    operation="creating session",
    identifier="name",
    render="Created session: {result[ID]}",
)
async def create_session(
    client: ConsulClient,
    name: Annotated[str, Field(description="Human-readable name of the session")] = "",
    node: Annotated[Optional[str], Field(description="Node to bind the session to (defaults to the agent's node)")] = None,
    ttl: Annotated[Optional[str], Field(description="Session TTL between 10s and 86400s (e.g., '30s')")] = None,
    behavior: Annotated[Optional[Literal["release", "delete"]], Field(description="What happens to held locks when the session is invalidated")] = None,
    lockDelay: Annotated[Optional[str], Field(description="Lock delay (e.g., '15s')")] = None,
    checks: Annotated[Optional[list[str]], Field(description="Health check IDs the session depends on")] = None,
) -> Any:
    """
    Create a session.

    Every setting is optional; Consul defaults to the agent's node, the
    serfHealth check, a 15s lock delay and the release behavior.

    Returns:
        dict: {"ID": <session id>}
    """
    definition: dict[str, Any] = {}
    if name:
        definition["Name"] = name
    if node is not None:
        definition["Node"] = node
    if ttl is not None:
        definition["TTL"] = ttl
    if behavior is not None:
        definition["Behavior"] = behavior
    if lockDelay is not None:
        definition["LockDelay"] = lockDelay
    if checks is not None:
        definition["Checks"] = checks
    return await client.session_create(definition)


@Tool(
    "destroy-session",
    "Destroy a session in Consul",
    operation="destroying session with ID",
    identifier="id",
    render="Successfully destroyed session with ID: {id}",
    failure="Failed to destroy session with ID: {id}",
)
async def destroy_session(
    client: ConsulClient,
    id: Annotated[str, Field(description="ID of the session to destroy")],
) -> Any:
    """Invalidate a session, releasing or deleting the keys it holds."""
    return await client.session_destroy(id)
