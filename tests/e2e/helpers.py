"""Helper functions for E2E tests using MCP Inspector CLI."""
from __future__ import annotations

import json
import os
import subprocess
from typing import Any

SERVER_URL = os.environ.get("MCP_SERVER_URL", "http://localhost:3141/mcp")


def run_inspector(method: str, **kwargs) -> dict[str, Any]:
    """Run MCP Inspector CLI and return parsed JSON response.

    Args:
        method: MCP method (e.g., "tools/list", "tools/call")
        **kwargs: Additional arguments (tool_name, tool_args)

    Returns:
        Parsed JSON response from the server.

    Raises:
        RuntimeError: If CLI fails or returns invalid JSON.
    """
    cmd = [
        "npx", "@modelcontextprotocol/inspector", "--cli",
        SERVER_URL,
        "--transport", "http",
        "--method", method,
    ]

    if "tool_name" in kwargs:
        cmd.extend(["--tool-name", kwargs["tool_name"]])

    if "tool_args" in kwargs:
        for key, value in kwargs["tool_args"].items():
            # Serialize complex types as JSON for MCP CLI
            if isinstance(value, (dict, list, bool)):
                value = json.dumps(value)
            cmd.extend(["--tool-arg", f"{key}={value}"])

    result = subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        timeout=30,
    )

    if result.returncode != 0:
        raise RuntimeError(f"Inspector failed: {result.stderr}")

    try:
        return json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise RuntimeError(f"Invalid JSON response: {result.stdout}") from e


def call_tool(name: str, args: dict[str, Any] | None = None) -> str:
    """Call an MCP tool and return its text.

    Args:
        name: Tool name (e.g., "get-kv")
        args: Tool arguments as dict

    Returns:
        The text of the single content block.
    """
    result = run_inspector(
        "tools/call",
        tool_name=name,
        tool_args=args or {},
    )
    content = result.get("content", [])
    assert len(content) == 1, f"Expected one content block, got: {result}"
    return content[0]["text"]


def list_tools() -> list[dict[str, Any]]:
    """List all available MCP tools."""
    result = run_inspector("tools/list")
    return result.get("tools", [])
