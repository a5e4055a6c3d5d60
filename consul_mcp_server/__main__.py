"""Command-line entry point: ``consul-mcp-server`` / ``python -m consul_mcp_server``."""

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from .config import Config
from .mcp_server import McpServer

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="consul-mcp-server",
        description="MCP server for the Consul HTTP API. "
        "Consul connection settings are read from CONSUL_* environment variables.",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        help="MCP transport (default: MCP_TRANSPORT or stdio).",
    )
    parser.add_argument("--http-host", help="Bind address in http mode.")
    parser.add_argument("--http-port", type=int, help="Port in http mode.")
    parser.add_argument(
        "--log-level",
        help="Logging level (DEBUG, INFO, etc). Logs go to stderr.",
    )
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Environment settings with command-line overrides applied."""
    data = Config.from_env().to_dict()
    overrides = {
        "mode": args.transport,
        "http_host": args.http_host,
        "http_port": args.http_port,
        "log_level": args.log_level,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})
    return Config.from_dict(data)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(args)
    except ValueError as e:
        print(f"consul-mcp-server: {e}", file=sys.stderr)
        return 2

    # stdout carries the stdio protocol, so logs go to stderr only
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )

    valid, error = config.is_valid_for_mode()
    if not valid:
        logger.error("Invalid configuration: %s", error)
        return 2

    try:
        asyncio.run(McpServer(config).run())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
