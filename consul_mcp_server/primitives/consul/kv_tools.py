"""KV store tools - get, list, put, delete and transactional access to Consul KV."""
from typing import Annotated, Any, Literal, Mapping, Optional
import logging

from pydantic import BaseModel, Field

from ...consul_client import ConsulClient
from ...formatters import format_kv_pair, json_block, single
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


class KVOperation(BaseModel):
    """One operation inside a KV transaction."""
    operation: Literal["set", "delete", "get"]
    key: str
    value: Optional[str] = Field(default=None, description="Value to write (set only)")


@Tool(
    "get-kv",
    "Get a value from the KV store",
    operation="getting value for key",
    identifier="key",
    render=single(format_kv_pair),
    empty="No value found for key: {key}",
)
async def get_kv(
    client: ConsulClient,
    key: Annotated[str, Field(description="Key to get from the KV store")],
) -> Any:
    """Return the KV pair at key, or None when the key does not exist."""
    return await client.kv_get(key)


def _with_prefix(arguments: Mapping[str, Any]) -> str:
    prefix = arguments.get("prefix")
    return f" with prefix: {prefix}" if prefix else ""


def _render_keys(result: list[str], arguments: Mapping[str, Any]) -> str:
    return f"Keys in KV store{_with_prefix(arguments)}:\n\n" + "\n".join(result)


def _no_keys(result: Any, arguments: Mapping[str, Any]) -> str:
    return f"No keys found{_with_prefix(arguments)}"


def _listing_keys(arguments: Mapping[str, Any]) -> str:
    return "listing keys with prefix" if arguments.get("prefix") else "listing keys"


@Tool(
    "list-kv",
    "List keys in the KV store",
    operation=_listing_keys,
    identifier="prefix",
    render=_render_keys,
    empty=_no_keys,
)
async def list_kv(
    client: ConsulClient,
    prefix: Annotated[str, Field(description="Prefix to filter keys by")] = "",
) -> Any:
    """List the keys under prefix (every key when prefix is empty)."""
    return await client.kv_keys(prefix or "")


@Tool(
    "put-kv",
    "Put a value in the KV store",
    operation="putting value for key",
    identifier="key",
    render="Successfully put value for key: {key}",
    failure="Failed to put value for key: {key}",
)
async def put_kv(
    client: ConsulClient,
    key: Annotated[str, Field(description="Key to put in the KV store")],
    value: Annotated[str, Field(description="Value to put in the KV store")],
) -> Any:
    """
    Write value to key.

    Returns:
        bool: Consul's answer; False means the write was not applied
    """
    return await client.kv_put(key, value)


@Tool(
    "delete-kv",
    "Delete a key from the KV store",
    operation="deleting key",
    identifier="key",
    render="Successfully deleted key: {key}",
    failure="Failed to delete key: {key}",
)
async def delete_kv(
    client: ConsulClient,
    key: Annotated[str, Field(description="Key to delete from the KV store")],
) -> Any:
    """Delete key. Deleting a missing key succeeds."""
    return await client.kv_delete(key)


@Tool(
    "kv-transaction",
    "Perform a KV transaction",
    operation="performing KV transaction",
    render=json_block("Transaction Result"),
)
async def kv_transaction(
    client: ConsulClient,
    operations: Annotated[list[KVOperation], Field(description="List of operations to perform")],
) -> Any:
    """
    Apply KV operations atomically through /v1/txn.

    Args:
        operations: Operations in order. A failed get rolls back the whole
            transaction and Consul answers 409.

    Returns:
        dict: Consul's Results/Errors document
    """
    logger.debug("KV transaction with %d operations", len(operations))
    return await client.txn([op.model_dump() for op in operations])
