"""Operator tools - Raft and Autopilot configuration."""
from typing import Any
import logging

from ...consul_client import ConsulClient
from ...formatters import json_block, listing
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


def _server_line(server: dict[str, Any]) -> str:
    leader = str(bool(server.get("Leader"))).lower()
    voter = str(bool(server.get("Voter"))).lower()
    return (
        f"ID: {server.get('ID')}, Address: {server.get('Address')}, "
        f"Leader: {leader}, Voter: {voter}"
    )


@Tool(
    "get-raft-configuration",
    "Get the current Raft configuration",
    operation="getting Raft configuration",
    render=listing("Raft Configuration", _server_line),
    empty="No Raft configuration found",
)
async def get_raft_configuration(client: ConsulClient) -> Any:
    """The servers of the current Raft configuration."""
    configuration = await client.raft_configuration()
    return configuration.get("Servers") if configuration else None


@Tool(
    "get-autopilot-configuration",
    "Get the current Autopilot configuration",
    operation="getting Autopilot configuration",
    render=json_block("Autopilot Configuration"),
)
async def get_autopilot_configuration(client: ConsulClient) -> Any:
    return await client.autopilot_configuration()
