"""Network area tools (Consul Enterprise)."""
from typing import Annotated, Any
import logging

from pydantic import Field

from ...consul_client import ConsulClient
from ...formatters import listing
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


@Tool(
    "join-network-area",
    "Create a network area joining a peer datacenter",
    operation="joining network area",
    identifier="datacenter",
    render="Joined network area: {result[ID]}",
)
async def join_network_area(
    client: ConsulClient,
    datacenter: Annotated[str, Field(description="Peer datacenter to join")],
    address: Annotated[str, Field(description="Address of a server in the peer datacenter")],
) -> Any:
    """
    Create a network area with a peer datacenter.

    Args:
        datacenter: Name of the peer datacenter
        address: Server address the area keeps retrying to join

    Returns:
        dict: {"ID": <area id>}
    """
    return await client.area_create({"PeerDatacenter": datacenter, "RetryJoin": [address]})


def _area_line(area: dict[str, Any]) -> str:
    retry_join = ", ".join(area.get("RetryJoin") or []) or "None"
    return f"ID: {area.get('ID')}, Peer Datacenter: {area.get('PeerDatacenter')}, Retry Join: {retry_join}"


@Tool(
    "list-network-areas",
    "List all network areas",
    operation="listing network areas",
    render=listing("Network Areas", _area_line),
    empty="No network areas found",
)
async def list_network_areas(client: ConsulClient) -> Any:
    """List the network areas of this datacenter."""
    return await client.area_list()
