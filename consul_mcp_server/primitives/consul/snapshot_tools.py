"""Snapshot tools - save and restore the Consul server state.

The snapshot file is read or written on the machine running this server.
A file that cannot be read or written is a tool error, not a Consul error.
"""
from typing import Annotated, Any
import logging

import anyio
from pydantic import Field

from ...consul_client import ConsulClient
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


@Tool(
    "save-snapshot",
    "Save a snapshot of the Consul server state to a file",
    operation="saving snapshot",
    identifier="path",
    render="Saved snapshot to {path} ({result} bytes)",
)
async def save_snapshot(
    client: ConsulClient,
    path: Annotated[str, Field(description="File to write the snapshot to")],
) -> Any:
    """
    Download a snapshot and write it to path.

    Nothing is written when the download fails.

    Returns:
        int: Size of the snapshot in bytes
    """
    data = await client.snapshot_save()
    await anyio.Path(path).write_bytes(data)
    logger.info("Saved %d byte snapshot to %s", len(data), path)
    return len(data)


@Tool(
    "restore-snapshot",
    "Restore the Consul server state from a snapshot file",
    operation="restoring snapshot",
    identifier="path",
    render="Restored snapshot from {path}",
)
async def restore_snapshot(
    client: ConsulClient,
    path: Annotated[str, Field(description="Snapshot file to restore from")],
) -> Any:
    """
    Upload the snapshot at path, replacing the cluster state.

    Raises:
        OSError: If the file cannot be read (nothing is sent to Consul)
    """
    data = await anyio.Path(path).read_bytes()
    await client.snapshot_restore(data)
    logger.info("Restored %d byte snapshot from %s", len(data), path)
    return True
