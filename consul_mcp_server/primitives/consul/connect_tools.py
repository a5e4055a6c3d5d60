"""Service mesh tools - intentions and the Connect CA."""
from typing import Annotated, Any, Literal
import logging

from pydantic import Field

from ...consul_client import ConsulClient
from ...formatters import json_block, listing
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


@Tool(
    "create-intention",
    "Create or update an intention between two services",
    operation="creating intention",
    identifier="source",
    render="Created intention: {source} -> {destination} ({action})",
    failure="Failed to create intention: {source} -> {destination}",
)
async def create_intention(
    client: ConsulClient,
    source: Annotated[str, Field(description="Source service name")],
    destination: Annotated[str, Field(description="Destination service name")],
    action: Annotated[Literal["allow", "deny"], Field(description="Whether to allow or deny the connection")],
    description: Annotated[str, Field(description="Description of the intention")] = "",
) -> Any:
    """
    Create or replace the intention from source to destination.

    Returns:
        bool: Consul's answer; False means the intention was not written
    """
    definition: dict[str, Any] = {"Action": action}
    if description:
        definition["Description"] = description
    return await client.intention_upsert(source, destination, definition)


def _intention_line(intention: dict[str, Any]) -> str:
    return (
        f"ID: {intention.get('ID') or 'None'}, "
        f"Source: {intention.get('SourceName')}, "
        f"Destination: {intention.get('DestinationName')}, "
        f"Action: {intention.get('Action')}"
    )


@Tool(
    "list-intentions",
    "List all intentions",
    operation="listing intentions",
    render=listing("Intentions", _intention_line),
    empty="No intentions found",
)
async def list_intentions(client: ConsulClient) -> Any:
    """List every intention. Config-entry intentions have an empty ID."""
    return await client.intentions()


@Tool(
    "get-ca-configuration",
    "Get the Connect CA configuration",
    operation="getting Connect CA configuration",
    render=json_block("Connect CA Configuration"),
)
async def get_ca_configuration(client: ConsulClient) -> Any:
    return await client.ca_configuration()


@Tool(
    "set-ca-configuration",
    "Update the Connect CA configuration",
    operation="updating Connect CA configuration",
    identifier="provider",
    render="Updated Connect CA configuration with provider: {provider}",
)
async def set_ca_configuration(
    client: ConsulClient,
    provider: Annotated[str, Field(description="CA provider (e.g., 'consul', 'vault')")],
    config: Annotated[dict[str, Any], Field(description="Provider-specific configuration")],
) -> Any:
    """
    Replace the Connect CA configuration.

    Args:
        provider: CA provider name
        config: Provider settings, passed through as the Config object
    """
    logger.info("Updating Connect CA configuration, provider %s", provider)
    await client.ca_set_configuration({"Provider": provider, "Config": config})
    return True
