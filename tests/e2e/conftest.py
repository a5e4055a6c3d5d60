"""E2E test configuration and fixtures.

These tests drive a running consul-mcp-server in http mode, backed by a real
Consul agent, through the MCP Inspector CLI. They only run when
CONSUL_MCP_E2E=1, e.g.:

    consul agent -dev &
    consul-mcp-server --transport http --http-port 3141 &
    CONSUL_MCP_E2E=1 pytest tests/e2e
"""
from __future__ import annotations

import os
import time
import uuid

import pytest

# Configuration
ENABLED = os.environ.get("CONSUL_MCP_E2E", "0") == "1"
MAX_WAIT_SECONDS = int(os.environ.get("E2E_MAX_WAIT", "60"))

if not ENABLED:
    collect_ignore_glob = ["test_*.py"]


def unique_id() -> str:
    """Short unique suffix for names created by a test."""
    return uuid.uuid4().hex[:8]


@pytest.fixture(scope="session", autouse=True)
def wait_for_server():
    """Wait for MCP server to be ready before running tests."""
    from .helpers import SERVER_URL, run_inspector

    print(f"\nWaiting for MCP server at {SERVER_URL}...")

    for attempt in range(MAX_WAIT_SECONDS):
        try:
            result = run_inspector("tools/list")
            if "tools" in result:
                print(f"Server ready after {attempt + 1}s")
                return
        except (RuntimeError, OSError):
            pass
        time.sleep(1)

    pytest.fail(f"MCP server not ready after {MAX_WAIT_SECONDS}s")
