from typing import Any, Callable, Mapping, Optional, Union
import inspect
import logging

from .consul_client import ConsulClient, ConsulError
from .handler_wrappers import BackendError, _error_handler

logger = logging.getLogger(__name__)

# Global registry storing all tools registered via @Tool decorator
# Key: tool name, Value: dict with the tool definition and original (unbound) function
_registry: dict[str, dict[str, Any]] = {}

# A message is either a str.format template filled from the tool arguments
# plus {result}, or a callable taking (result, arguments)
Message = Union[str, Callable[[Any, Mapping[str, Any]], str]]


# ------------------------------------------------------------------------------
# Tool - Decorator class that registers functions as MCP tools
# ------------------------------------------------------------------------------
# Usage:
#   @Tool(
#       "get-kv",
#       "Get a value from the KV store",
#       operation="getting value for key",
#       identifier="key",
#       render=single(format_kv_pair),
#       empty="No value found for key: {key}",
#   )
#   async def get_kv(client: ConsulClient, key: Annotated[str, Field(...)]) -> Any:
#       return await client.kv_get(key)
#
# The decorated function makes exactly one Consul call and returns its
# result. Everything else is declared:
#   - name: Unique tool identifier exposed to MCP clients (kebab-case)
#   - description: Shown to AI to understand when/how to use the tool
#   - operation: Used in the error text, "Error <operation>[: <identifier>]".
#     A callable taking the arguments may word it per call
#   - identifier: Argument whose value is appended to the error text
#   - render: Message for a successful result
#   - empty: Message when the result is None or an empty collection
#   - failure: Message when Consul answers false (KV put/delete, session destroy)
#
# The first parameter must be named client; the remaining parameters become
# the tool's input schema. The client is bound per server by register_tools().
# ------------------------------------------------------------------------------
class Tool:
    def __init__(
        self,
        name: str,
        description: str,
        handler: Optional[Callable[..., Any]] = None,
        *,
        operation: Union[str, Callable[[Mapping[str, Any]], str]],
        render: Message,
        identifier: Optional[str] = None,
        empty: Optional[Message] = None,
        failure: Optional[Message] = None,
    ):
        self.name = name
        self.description = description
        self.operation = operation
        self.render = render
        self.identifier = identifier
        self.empty = empty
        self.failure = failure

        # Support both @Tool(...) decorator and Tool(..., handler=fn) direct call
        if handler is not None:
            self._register(handler)

    # Called when used as @Tool(...) decorator
    def __call__(self, func: Callable[..., Any]) -> Callable[..., Any]:
        self._register(func)
        return func  # Return original so it can be called directly for testing

    def _register(self, func: Callable[..., Any]) -> None:
        # Prevent duplicate registration (would cause confusing behavior)
        if self.name in _registry:
            raise ValueError(f"Tool already registered: {self.name}")

        sig = inspect.signature(func)
        params = list(sig.parameters.values())
        if not params or params[0].name != "client":
            raise TypeError(f"Tool {self.name}: first parameter must be 'client'")
        if self.identifier is not None and self.identifier not in sig.parameters:
            raise TypeError(f"Tool {self.name}: unknown identifier argument {self.identifier!r}")

        # Schema signature: everything after client, returning text
        schema_sig = sig.replace(parameters=params[1:], return_annotation=str)

        _registry[self.name] = {
            "name": self.name,
            "description": self.description,
            "operation": self.operation,
            "identifier": self.identifier,
            "render": self.render,
            "empty": self.empty,
            "failure": self.failure,
            "signature": schema_sig,
            "original": func,
        }


def get_tool(name: str) -> dict[str, Any]:
    """Get a registered tool definition. Raises KeyError if not found."""
    if name not in _registry:
        raise KeyError(f"Unknown tool: {name}")
    return dict(_registry[name])


def tool_names() -> list[str]:
    return list(_registry)


def _is_empty(result: Any) -> bool:
    if result is None:
        return True
    if isinstance(result, (str, list, tuple, dict)):
        return len(result) == 0
    return False


def _render(message: Message, result: Any, arguments: Mapping[str, Any]) -> str:
    if callable(message):
        return message(result, arguments)
    return message.format(result=result, **arguments)


# ------------------------------------------------------------------------------
# _dispatch - The one handler body shared by every tool
# ------------------------------------------------------------------------------
# 1. Call the tool function (one Consul request)
# 2. ConsulError -> BackendError(operation, identifier value)
# 3. False result with a failure message -> failure text
# 4. Empty result with an empty message -> empty text
# 5. Otherwise -> rendered result
# ------------------------------------------------------------------------------
async def _dispatch(meta: dict[str, Any], client: ConsulClient, arguments: dict[str, Any]) -> str:
    try:
        result = await meta["original"](client, **arguments)
    except ConsulError as e:
        identifier = arguments.get(meta["identifier"]) if meta["identifier"] else None
        operation = meta["operation"]
        if callable(operation):
            operation = operation(arguments)
        raise BackendError(operation, identifier) from e

    if meta["failure"] is not None and result is False:
        return _render(meta["failure"], result, arguments)
    if meta["empty"] is not None and _is_empty(result):
        return _render(meta["empty"], result, arguments)
    return _render(meta["render"], result, arguments)


# ------------------------------------------------------------------------------
# build_handler - Bind one tool to a Consul client
# ------------------------------------------------------------------------------
# Returns an async function taking the tool arguments as keywords. Omitted
# optional arguments are filled from the declared defaults, so messages can
# always refer to every argument. The handler carries the schema signature
# (client removed) for FastMCP to build the input schema from.
# ------------------------------------------------------------------------------
def build_handler(name: str, client: ConsulClient) -> Callable[..., Any]:
    meta = get_tool(name)
    sig: inspect.Signature = meta["signature"]

    async def handler(**kwargs: Any) -> str:
        bound = sig.bind(**kwargs)
        bound.apply_defaults()
        return await _dispatch(meta, client, dict(bound.arguments))

    wrapped = _error_handler(handler)

    # Copy metadata for MCP introspection
    original = meta["original"]
    wrapped.__name__ = original.__name__
    wrapped.__doc__ = original.__doc__
    wrapped.__signature__ = sig  # type: ignore[attr-defined]
    annotations = {
        k: v for k, v in getattr(original, "__annotations__", {}).items() if k != "client"
    }
    annotations["return"] = str
    wrapped.__annotations__ = annotations
    return wrapped


# ------------------------------------------------------------------------------
# register_tools - Create MCP tools from registry
# ------------------------------------------------------------------------------
# Called once at server startup with the server's Consul client.
# ------------------------------------------------------------------------------
def register_tools(mcp: Any, client: ConsulClient) -> None:
    for name, meta in _registry.items():
        _make_mcp_tool(mcp, name, meta["description"], build_handler(name, client))
    logger.info("Registered %d tools", len(_registry))


def _make_mcp_tool(mcp: Any, name: str, description: str, handler: Callable[..., Any]) -> None:
    # Register with FastMCP; handlers return a single text block
    mcp.tool(name=name, description=description, structured_output=False)(handler)
