"""ACL token tools."""
from typing import Annotated, Any, Optional
import logging

from pydantic import Field

from ...consul_client import ConsulClient
from ...formatters import listing
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


@Tool(
    "create-acl-token",
    "Create a new ACL token",
    operation="creating ACL token",
    identifier="name",
    render="Created ACL token: {result[AccessorID]}",
)
async def create_acl_token(
    client: ConsulClient,
    name: Annotated[str, Field(description="Name (description) of the ACL token")],
    policies: Annotated[Optional[list[str]], Field(description="Names of the ACL policies to attach")] = None,
    local: Annotated[bool, Field(description="Restrict the token to the local datacenter")] = False,
) -> Any:
    """
    Create a token through the /v1/acl/token API.

    Args:
        name: Stored as the token's Description
        policies: Policy names to link
        local: Create a datacenter-local token instead of a global one
    """
    definition: dict[str, Any] = {"Description": name, "Local": local}
    if policies:
        definition["Policies"] = [{"Name": policy} for policy in policies]
    return await client.acl_token_create(definition)


def _token_line(token: dict[str, Any]) -> str:
    scope = "local" if token.get("Local") else "global"
    return f"ID: {token.get('AccessorID')}, Name: {token.get('Description') or 'None'}, Type: {scope}"


@Tool(
    "list-acl-tokens",
    "List all ACL tokens",
    operation="listing ACL tokens",
    render=listing("ACL Tokens", _token_line),
    empty="No ACL tokens found",
)
async def list_acl_tokens(client: ConsulClient) -> Any:
    return await client.acl_tokens()
