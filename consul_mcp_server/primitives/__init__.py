# primitives/__init__.py
"""MCP primitives module - tools."""

from .tools import register_all_tools


__all__ = ["register_all_tools"]
