"""Shared fixtures: a fake Consul agent and tool handlers bound to it."""
from __future__ import annotations

from typing import Any

import pytest
import pytest_asyncio

# Importing the primitives package registers every @Tool
import consul_mcp_server.primitives  # noqa: F401
from consul_mcp_server.config import Config
from consul_mcp_server.consul_client import ConsulClient
from consul_mcp_server.tool_decorator import build_handler

from .fake_consul import FakeConsul


@pytest.fixture
def consul() -> FakeConsul:
    """A fresh in-memory Consul agent."""
    return FakeConsul()


@pytest_asyncio.fixture
async def client(consul):
    """ConsulClient talking to the fake agent."""
    async with ConsulClient(Config(), transport=consul.transport) as client:
        yield client


@pytest.fixture
def call_tool(client):
    """Call a tool handler by name and return its text."""
    async def call(tool: str, /, **arguments: Any) -> str:
        return await build_handler(tool, client)(**arguments)
    return call
