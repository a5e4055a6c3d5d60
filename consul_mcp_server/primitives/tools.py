# primitives/tools.py
"""Central tool registration module."""

from typing import Any

from ..consul_client import ConsulClient
from ..tool_decorator import register_tools

# Import all Consul tools (this triggers @Tool registration at import time)
from . import consul  # noqa: F401


def register_all_tools(
    mcp: Any,  # FastMCP instance
    client: ConsulClient,
) -> None:
    """Register all MCP tools with the server.

    Args:
        mcp: FastMCP server instance
        client: Consul client shared by every tool handler
    """
    register_tools(mcp, client)
