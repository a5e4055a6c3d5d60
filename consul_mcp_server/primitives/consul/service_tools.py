"""Agent service tools - list, register and deregister services on the local agent."""
from typing import Annotated, Any, Mapping, Optional
import logging

from pydantic import Field

from ...consul_client import ConsulClient
from ...formatters import format_service, listing
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


@Tool(
    "get-services",
    "Get running services",
    operation="getting services",
    render=listing("List of services", format_service),
    empty="No services found",
)
async def get_services(client: ConsulClient) -> Any:
    """
    List the services registered with the local agent.

    Returns:
        list: Service records (the values of /v1/agent/services)
    """
    services = await client.agent_services()
    return list((services or {}).values())


def _registered(result: Any, arguments: Mapping[str, Any]) -> str:
    service_id = arguments["id"] or arguments["name"]
    return f"Successfully registered service: {arguments['name']} with ID: {service_id}"


@Tool(
    "register-service",
    "Register a service with Consul",
    operation="registering service",
    identifier="name",
    render=_registered,
)
async def register_service(
    client: ConsulClient,
    name: Annotated[str, Field(description="Name of the service to register")],
    id: Annotated[Optional[str], Field(description="ID of the service (defaults to name if not provided)")] = None,
    port: Annotated[Optional[int], Field(description="Port the service is running on")] = None,
    address: Annotated[Optional[str], Field(description="Address the service is running on")] = None,
    tags: Annotated[Optional[list[str]], Field(description="Tags to associate with the service")] = None,
) -> Any:
    """
    Register a service with the local agent.

    Args:
        name: Service name
        id: Service ID, defaults to the name
        port: Service port
        address: Service address, defaults to the agent's address
        tags: Service tags

    Only the optional fields that were given are sent, so Consul applies
    its own defaults for the rest.
    """
    definition: dict[str, Any] = {"Name": name, "ID": id or name}
    if port is not None:
        definition["Port"] = port
    if address is not None:
        definition["Address"] = address
    if tags is not None:
        definition["Tags"] = tags
    logger.debug("Registering service %s", definition)
    return await client.agent_service_register(definition)


@Tool(
    "deregister-service",
    "Deregister a service from Consul",
    operation="deregistering service with ID",
    identifier="id",
    render="Successfully deregistered service with ID: {id}",
)
async def deregister_service(
    client: ConsulClient,
    id: Annotated[str, Field(description="ID of the service to deregister")],
) -> Any:
    """Remove a service from the local agent. Unknown IDs are a Consul error."""
    return await client.agent_service_deregister(id)
