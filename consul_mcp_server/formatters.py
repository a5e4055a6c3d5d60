"""Text renderers for Consul records.

Each entity renderer emits one ``Field: value`` line per field followed by a
``---`` separator. Missing or falsy fields render as a placeholder.
"""

import base64
import binascii
import json
from typing import Any, Callable, Iterable, Mapping

UNKNOWN = "Unknown"
SEPARATOR = "---"

Renderer = Callable[[Any, Mapping[str, Any]], str]


def _or(value: Any, placeholder: str = UNKNOWN) -> Any:
    return value if value else placeholder


def _join(values: Any, placeholder: str, sep: str = ", ") -> str:
    if not values:
        return placeholder
    return sep.join(str(v) for v in values)


def decode_value(value: str) -> str:
    """Decode a base64 value from Consul, returning it unchanged if that fails."""
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return value


# ------------------------------------------------------------------------------
# Entity renderers
# ------------------------------------------------------------------------------

def format_service(service: Mapping[str, Any]) -> str:
    return "\n".join([
        f"ID: {_or(service.get('ID'))}",
        f"Port: {_or(service.get('Port'))}",
        f"Service: {_or(service.get('Service'))}",
        f"Tags: {_join(service.get('Tags'), UNKNOWN, sep=',')}",
        SEPARATOR,
    ])


def format_health_check(check: Mapping[str, Any]) -> str:
    return "\n".join([
        f"Node: {_or(check.get('Node'))}",
        f"CheckID: {_or(check.get('CheckID'))}",
        f"Name: {_or(check.get('Name'))}",
        f"Status: {_or(check.get('Status'))}",
        f"ServiceName: {_or(check.get('ServiceName'))}",
        f"Output: {_or(check.get('Output'), 'No output')}",
        SEPARATOR,
    ])


def format_catalog_node(node: Mapping[str, Any]) -> str:
    return "\n".join([
        f"Node: {_or(node.get('Node'))}",
        f"Address: {_or(node.get('Address'))}",
        f"ServiceID: {_or(node.get('ServiceID'))}",
        f"ServiceName: {_or(node.get('ServiceName'))}",
        f"ServicePort: {_or(node.get('ServicePort'))}",
        f"ServiceTags: {_join(node.get('ServiceTags'), 'None')}",
        SEPARATOR,
    ])


def format_kv_pair(pair: Mapping[str, Any]) -> str:
    """Render a KV pair, decoding its base64 value.

    A value that is not valid base64 (or not UTF-8 once decoded) is shown
    exactly as Consul returned it.
    """
    raw = pair.get("Value")
    value = "No value" if raw is None else decode_value(raw)
    return "\n".join([
        f"Key: {_or(pair.get('Key'))}",
        f"Value: {value}",
        f"Flags: {pair.get('Flags') or 0}",
        f"Last Modified Index: {_or(pair.get('ModifyIndex'))}",
        SEPARATOR,
    ])


def format_session(session: Mapping[str, Any]) -> str:
    return "\n".join([
        f"ID: {_or(session.get('ID'))}",
        f"Name: {_or(session.get('Name'))}",
        f"Node: {_or(session.get('Node'))}",
        f"Checks: {_join(session.get('Checks'), 'None')}",
        f"LockDelay: {_or(session.get('LockDelay'))}",
        f"Behavior: {_or(session.get('Behavior'))}",
        f"TTL: {_or(session.get('TTL'))}",
        SEPARATOR,
    ])


def format_json(data: Any) -> str:
    return json.dumps(data, indent=2)


# ------------------------------------------------------------------------------
# Tool renderers
# ------------------------------------------------------------------------------
# Build the render= callables used by @Tool. Headers are str.format templates
# filled from the tool arguments, e.g. "Health checks for service {service}".
# ------------------------------------------------------------------------------

def single(item: Callable[[Any], str]) -> Renderer:
    """Render the result itself with an entity renderer."""
    def render(result: Any, arguments: Mapping[str, Any]) -> str:
        return item(result)
    return render


def listing(header: str, item: Callable[[Any], str]) -> Renderer:
    """Render "<header>:" followed by one rendered block per item."""
    def render(result: Iterable[Any], arguments: Mapping[str, Any]) -> str:
        body = "\n".join(item(entry) for entry in result)
        return f"{header.format(**arguments)}:\n\n{body}"
    return render


def json_block(header: str) -> Renderer:
    """Render "<header>:" followed by the result as indented JSON."""
    def render(result: Any, arguments: Mapping[str, Any]) -> str:
        return f"{header.format(**arguments)}:\n\n{format_json(result)}"
    return render
