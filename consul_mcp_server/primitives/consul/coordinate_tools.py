"""Network coordinate tools."""
import json
import logging
from typing import Annotated, Any

from pydantic import Field

from ...consul_client import ConsulClient
from ...formatters import listing
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


def _coordinate_line(entry: dict[str, Any]) -> str:
    return (
        f"Node: {entry.get('Node')}, "
        f"Segment: {entry.get('Segment') or 'None'}, "
        f"Coord: {json.dumps(entry.get('Coord'))}"
    )


@Tool(
    "get-node-coordinates",
    "Get network coordinates for a node",
    operation="getting coordinates for node",
    identifier="node",
    render=listing("Coordinates for {node}", _coordinate_line),
    empty="No coordinates found for node: {node}",
)
async def get_node_coordinates(
    client: ConsulClient,
    node: Annotated[str, Field(description="Name of the node")],
) -> Any:
    """
    Network coordinates of a node, one entry per network segment.

    Returns:
        list | None: None when Consul has no coordinates for the node yet
    """
    return await client.coordinate_node(node)
