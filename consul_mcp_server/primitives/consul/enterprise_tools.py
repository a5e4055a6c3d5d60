"""Consul Enterprise tools - license, namespaces and admin partitions."""
from typing import Annotated, Any
import logging

from pydantic import Field

from ...consul_client import ConsulClient
from ...formatters import json_block, listing
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


def _named_line(entry: dict[str, Any]) -> str:
    return f"Name: {entry.get('Name')}, Description: {entry.get('Description') or 'None'}"


def _definition(name: str, description: str) -> dict[str, Any]:
    definition = {"Name": name}
    if description:
        definition["Description"] = description
    return definition


# ------------------------------------------------------------------------------
# License
# ------------------------------------------------------------------------------

@Tool(
    "get-license",
    "Get the Consul Enterprise license",
    operation="getting license",
    render=json_block("License"),
)
async def get_license(client: ConsulClient) -> Any:
    """The current license. Community edition agents answer 404."""
    return await client.license_get()


@Tool(
    "put-license",
    "Apply a Consul Enterprise license",
    operation="updating license",
    render="License updated successfully",
)
async def put_license(
    client: ConsulClient,
    license: Annotated[str, Field(description="License text")],
) -> Any:
    """Upload a license; the text is sent as the request body."""
    return await client.license_put(license)


# ------------------------------------------------------------------------------
# Namespaces
# ------------------------------------------------------------------------------

@Tool(
    "create-namespace",
    "Create a new namespace",
    operation="creating namespace",
    identifier="name",
    render="Created namespace: {result[Name]}",
)
async def create_namespace(
    client: ConsulClient,
    name: Annotated[str, Field(description="Name of the namespace")],
    description: Annotated[str, Field(description="Description of the namespace")] = "",
) -> Any:
    """Create a namespace and return Consul's record of it."""
    return await client.namespace_create(_definition(name, description))


@Tool(
    "list-namespaces",
    "List all namespaces",
    operation="listing namespaces",
    render=listing("Namespaces", _named_line),
    empty="No namespaces found",
)
async def list_namespaces(client: ConsulClient) -> Any:
    return await client.namespaces()


# ------------------------------------------------------------------------------
# Admin partitions
# ------------------------------------------------------------------------------

@Tool(
    "create-partition",
    "Create a new admin partition",
    operation="creating partition",
    identifier="name",
    render="Created partition: {result[Name]}",
)
async def create_partition(
    client: ConsulClient,
    name: Annotated[str, Field(description="Name of the partition")],
    description: Annotated[str, Field(description="Description of the partition")] = "",
) -> Any:
    """Create an admin partition and return Consul's record of it."""
    return await client.partition_create(_definition(name, description))


@Tool(
    "list-partitions",
    "List all admin partitions",
    operation="listing partitions",
    render=listing("Partitions", _named_line),
    empty="No partitions found",
)
async def list_partitions(client: ConsulClient) -> Any:
    return await client.partitions()
