"""Configuration management for the Consul MCP server.

This module provides the configuration dataclass and the loader that reads
settings from the process environment.
"""

import os
from dataclasses import dataclass, asdict
from typing import Literal, Mapping, Optional


# Environment variable for each configurable field
ENV_VARS: dict[str, str] = {
    "consul_host": "CONSUL_HOST",
    "consul_port": "CONSUL_PORT",
    "consul_scheme": "CONSUL_SCHEME",
    "consul_token": "CONSUL_HTTP_TOKEN",
    "consul_datacenter": "CONSUL_DATACENTER",
    "mode": "MCP_TRANSPORT",
    "http_host": "MCP_HTTP_HOST",
    "http_port": "MCP_HTTP_PORT",
    "log_level": "LOG_LEVEL",
}

_INT_FIELDS = ("consul_port", "http_port")


@dataclass
class Config:
    """
    Server configuration.

    All fields have sensible defaults - the server talks to a local Consul
    agent over stdio without any configuration.
    """

    # Consul agent address
    consul_host: str = "localhost"
    consul_port: int = 8500
    consul_scheme: Literal["http", "https"] = "http"

    # Sent as X-Consul-Token when non-empty
    consul_token: str = ""

    # Sent as the dc query parameter when non-empty
    consul_datacenter: str = ""

    # MCP transport
    mode: Literal["stdio", "http"] = "stdio"

    # HTTP settings (only used in http mode)
    http_host: str = "127.0.0.1"
    http_port: int = 8000

    # General
    log_level: str = "INFO"

    @property
    def consul_url(self) -> str:
        """Base URL of the Consul HTTP API."""
        return f"{self.consul_scheme}://{self.consul_host}:{self.consul_port}"

    def is_valid_for_mode(self) -> tuple[bool, str]:
        """
        Check if config is valid for current mode.

        Returns:
            Tuple of (is_valid, error_message). If valid, error_message is empty string.

        Examples:
            >>> Config(mode="http", http_port=80).is_valid_for_mode()
            (True, '')

            >>> Config(consul_port=70000).is_valid_for_mode()
            (False, 'Consul port must be between 1 and 65535')
        """
        if not (1 <= self.consul_port <= 65535):
            return False, "Consul port must be between 1 and 65535"
        if self.consul_scheme not in ("http", "https"):
            return False, f"Unknown Consul scheme: {self.consul_scheme}"
        if self.mode == "stdio":
            return True, ""
        if self.mode == "http":
            if not (1 <= self.http_port <= 65535):
                return False, "Port must be between 1 and 65535"
            return True, ""
        return False, f"Unknown mode: {self.mode}"

    def to_dict(self) -> dict:
        """Convert to a plain dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """
        Create from dict, using defaults for missing keys.

        Only includes keys that are actual dataclass fields, ignoring
        any extra keys in the input dict.

        Examples:
            >>> Config.from_dict({"consul_port": 8501})
            Config(consul_host='localhost', consul_port=8501, ...)

            >>> Config.from_dict({"unknown_field": "ignored"})
            Config(consul_host='localhost', ...)  # Uses all defaults
        """
        return cls(
            **{k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Load config from environment variables, using defaults for unset ones.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Raises:
            ValueError: If an integer setting cannot be parsed.
        """
        if environ is None:
            environ = os.environ

        data: dict = {}
        for field_name, env_var in ENV_VARS.items():
            raw = environ.get(env_var)
            if raw is None or raw == "":
                continue
            if field_name in _INT_FIELDS:
                try:
                    data[field_name] = int(raw)
                except ValueError:
                    raise ValueError(f"{env_var} must be an integer, got {raw!r}") from None
            else:
                data[field_name] = raw
        return cls.from_dict(data)
