"""Cluster status tools - raft leader and peers."""
from typing import Any
import logging

from ...consul_client import ConsulClient
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


@Tool(
    "get-leader",
    "Get the current Raft leader",
    operation="getting cluster leader",
    render="Current leader: {result}",
    empty="No cluster leader found",
)
async def get_leader(client: ConsulClient) -> Any:
    """Address of the Raft leader; an empty string while no leader is elected."""
    return await client.status_leader()


def _render_peers(result: list[str], arguments: Any) -> str:
    return "Current peers:\n\n" + "\n".join(result)


@Tool(
    "get-peers",
    "Get the current Raft peers",
    operation="getting cluster peers",
    render=_render_peers,
    empty="No peers found",
)
async def get_peers(client: ConsulClient) -> Any:
    """Addresses of the Raft peers in the datacenter."""
    return await client.status_peers()
