"""MCP server exposing the Consul HTTP API as tools."""

__version__ = "0.1.0"
