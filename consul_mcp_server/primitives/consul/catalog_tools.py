"""Catalog tools - services and nodes known to the cluster catalog."""
from typing import Annotated, Any, Mapping
import logging

from pydantic import Field

from ...consul_client import ConsulClient
from ...formatters import format_catalog_node, listing
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


def _render_catalog_services(result: Mapping[str, list[str]], arguments: Mapping[str, Any]) -> str:
    lines = [f"{name}: {', '.join(tags or []) or 'No tags'}" for name, tags in result.items()]
    return "Catalog services:\n\n" + "\n".join(lines)


@Tool(
    "list-catalog-services",
    "List all services in the catalog",
    operation="listing catalog services",
    render=_render_catalog_services,
    empty="No services found in the catalog",
)
async def list_catalog_services(client: ConsulClient) -> Any:
    """Map of service name to the union of its tags across instances."""
    return await client.catalog_services()


@Tool(
    "get-catalog-service",
    "Get information about a specific service from the catalog",
    operation="getting information for service",
    identifier="service",
    render=listing("Service information for {service}", format_catalog_node),
    empty="No information found for service: {service}",
)
async def get_catalog_service(
    client: ConsulClient,
    service: Annotated[str, Field(description="Name of the service to get information for")],
) -> Any:
    """
    List the catalog entries of a service, one per instance.

    Args:
        service: Service name

    Returns:
        list: Catalog nodes with Service* fields filled in
    """
    return await client.catalog_service(service)


@Tool(
    "get-catalog-nodes",
    "Get nodes from the catalog",
    operation="getting catalog nodes",
    render=listing("Catalog nodes", format_catalog_node),
    empty="No nodes found in the catalog",
)
async def get_catalog_nodes(client: ConsulClient) -> Any:
    """List every node registered in the catalog."""
    return await client.catalog_nodes()
