"""Prepared query tools - create and execute prepared queries."""
from typing import Annotated, Any, Optional
import logging

from pydantic import Field

from ...consul_client import ConsulClient
from ...formatters import json_block
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)

DEFAULT_NEAREST_N = 3


@Tool(
    "create-prepared-query",
    "Create a new prepared query",
    operation="creating prepared query",
    identifier="name",
    render="Created prepared query: {result[ID]}",
)
async def create_prepared_query(
    client: ConsulClient,
    name: Annotated[str, Field(description="Name of the prepared query")],
    service: Annotated[str, Field(description="Service to query")],
    nearestN: Annotated[Optional[int], Field(description="Number of nearest nodes to return")] = None,
    datacenters: Annotated[Optional[list[str]], Field(description="Datacenters to query")] = None,
) -> Any:
    """
    Create a service query with datacenter failover.

    Args:
        name: Query name
        service: Service the query resolves
        nearestN: Number of nearest datacenters to fail over to (default 3)
        datacenters: Fixed failover datacenters, tried after the nearest ones

    Returns:
        dict: {"ID": <query id>}
    """
    return await client.query_create({
        "Name": name,
        "Service": {
            "Service": service,
            "Failover": {
                "NearestN": nearestN or DEFAULT_NEAREST_N,
                "Datacenters": datacenters or [],
            },
        },
    })


@Tool(
    "execute-prepared-query",
    "Execute a prepared query",
    operation="executing prepared query",
    identifier="id",
    render=json_block("Query results"),
)
async def execute_prepared_query(
    client: ConsulClient,
    id: Annotated[str, Field(description="ID of the prepared query")],
) -> Any:
    """Run a prepared query by ID or name."""
    return await client.query_execute(id)
