"""Agent tools - cluster members, agent self/config and configuration reload."""
from typing import Any
import logging

from ...consul_client import ConsulClient
from ...formatters import json_block, listing
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


def _member_line(member: dict[str, Any]) -> str:
    return (
        f"Name: {member.get('Name')}, "
        f"Address: {member.get('Address')}, "
        f"Status: {member.get('Status')}"
    )


@Tool(
    "get-agent-members",
    "Get agent members",
    operation="getting agent members",
    render=listing("Agent Members", _member_line),
    empty="No agent members found",
)
async def get_agent_members(client: ConsulClient) -> Any:
    """List the gossip pool members seen by the local agent."""
    return await client.agent_members()


@Tool(
    "reload-agent",
    "Reload agent configuration",
    operation="reloading agent configuration",
    render="Agent configuration reloaded successfully",
)
async def reload_agent(client: ConsulClient) -> Any:
    """Ask the local agent to reload its configuration files."""
    logger.info("Reloading Consul agent configuration")
    return await client.agent_reload()


@Tool(
    "get-agent-self",
    "Get agent self information",
    operation="getting agent self",
    render=json_block("Agent Self"),
)
async def get_agent_self(client: ConsulClient) -> Any:
    """Return the full /v1/agent/self document."""
    return await client.agent_self()


@Tool(
    "get-agent-config",
    "Get agent configuration",
    operation="getting agent configuration",
    render=json_block("Agent Configuration"),
    empty="No agent configuration found",
)
async def get_agent_config(client: ConsulClient) -> Any:
    """
    Return the running configuration of the local agent.

    Consul has no dedicated endpoint for this; it is the "Config" section
    of /v1/agent/self.
    """
    info = await client.agent_self()
    return (info or {}).get("Config")
