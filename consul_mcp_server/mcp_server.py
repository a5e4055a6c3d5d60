"""MCP server exposing the Consul HTTP API.

This module builds the FastMCP instance, opens the shared Consul client and
runs one of the two transports.

Architecture:
    - stdio transport (default): the MCP client launches this process and
      speaks the protocol over stdin/stdout
    - HTTP transport: FastMCP's streamable HTTP app (starlette) served by uvicorn
    - One ConsulClient (httpx.AsyncClient) is opened at start, shared by every
      tool handler and closed when the transport returns
"""

import logging
from typing import Optional

import httpx
import uvicorn
from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from . import __version__
from .config import Config
from .consul_client import ConsulClient
from .primitives import register_all_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "consul-mcp"

_LOOPBACK_HOSTS = ("127.0.0.1", "localhost", "::1")


class McpServer:
    """MCP server bound to one Consul agent.

    Attributes:
        _config: Server configuration (Consul address, transport, HTTP host/port)
        _transport: Optional httpx transport handed to the Consul client
    """

    def __init__(
        self,
        config: Config,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize MCP server.

        Args:
            config: Server configuration
            transport: httpx transport for the Consul client (tests only)
        """
        self._config = config
        self._transport = transport

    def build(self, client: ConsulClient) -> FastMCP:
        """Create the FastMCP instance with every tool bound to client."""
        mcp = FastMCP(
            SERVER_NAME,
            host=self._config.http_host,
            port=self._config.http_port,
            transport_security=self._security_settings(),
        )
        register_all_tools(mcp, client)
        return mcp

    async def run(self) -> None:
        """Open the Consul client and serve until the transport stops."""
        logger.info(
            "consul-mcp %s: Consul at %s, %s transport",
            __version__,
            self._config.consul_url,
            self._config.mode,
        )
        async with ConsulClient(self._config, transport=self._transport) as client:
            mcp = self.build(client)
            if self._config.mode == "http":
                await self._run_http_mode(mcp)
            else:
                await self._run_stdio_mode(mcp)

    def _security_settings(self) -> TransportSecuritySettings:
        # DNS rebinding protection only makes sense for a loopback listener;
        # behind a proxy or in a container the Host header is not predictable
        if self._config.http_host in _LOOPBACK_HOSTS:
            return TransportSecuritySettings(
                enable_dns_rebinding_protection=True,
                allowed_hosts=["127.0.0.1:*", "localhost:*", "[::1]:*"],
                allowed_origins=["http://127.0.0.1:*", "http://localhost:*", "http://[::1]:*"],
            )
        return TransportSecuritySettings(enable_dns_rebinding_protection=False)

    async def _run_stdio_mode(self, mcp: FastMCP) -> None:
        await mcp.run_stdio_async()

    async def _run_http_mode(self, mcp: FastMCP) -> None:
        """Run with SDK's built-in HTTP transport.

        Uses FastMCP's streamable_http_app() which returns a Starlette ASGI app
        configured with the MCP protocol handlers. The app is served via uvicorn.

        Args:
            mcp: Configured FastMCP server instance with tools defined
        """
        app = mcp.streamable_http_app()

        config = uvicorn.Config(
            app,
            host=self._config.http_host,
            port=self._config.http_port,
            log_level="warning",
        )
        server = uvicorn.Server(config)
        logger.info(
            "Serving MCP on http://%s:%d%s",
            self._config.http_host,
            self._config.http_port,
            mcp.settings.streamable_http_path,
        )
        await server.serve()
