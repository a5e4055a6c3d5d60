"""Async client for the Consul HTTP API.

Every method issues exactly one request against the agent configured in
:class:`~consul_mcp_server.config.Config` and returns the decoded JSON body.
Lookups that Consul answers with 404 (missing KV key, empty key prefix)
return None instead of raising.

The client is created once at server start and shared by all tool handlers.
No handler reconfigures it.
"""

import base64
import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from .config import Config

logger = logging.getLogger(__name__)


class ConsulError(Exception):
    """A Consul request failed (non-2xx response or transport error)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _params(**values: Any) -> dict[str, Any]:
    """Drop unset query parameters (httpx would send them as empty strings)."""
    params: dict[str, Any] = {}
    for key, value in values.items():
        if value is None or value is False or value == "":
            continue
        params[key] = "true" if value is True else value
    return params


def _segment(value: str) -> str:
    return quote(value, safe="/")


class ConsulClient:
    """Thin wrapper around httpx.AsyncClient for the Consul /v1 API."""

    def __init__(
        self,
        config: Config,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Server configuration (Consul address, token, datacenter)
            transport: Optional httpx transport, used by tests to stand in
                for a Consul agent
        """
        self._config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def base_url(self) -> str:
        return self._config.consul_url

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {}
            if self._config.consul_token:
                headers["X-Consul-Token"] = self._config.consul_token
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                params=_params(dc=self._config.consul_datacenter),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ConsulClient":
        await self._get_client()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
        content: Optional[bytes] = None,
        allow_404: bool = False,
        raw: bool = False,
    ) -> Any:
        client = await self._get_client()
        try:
            response = await client.request(
                method, path, params=params, json=json, content=content
            )
        except httpx.HTTPError as e:
            raise ConsulError(f"{method} {path} failed: {e}") from e

        if allow_404 and response.status_code == 404:
            return None
        if response.is_error:
            raise ConsulError(
                f"{method} {path} returned {response.status_code}: {response.text.strip()}",
                status_code=response.status_code,
            )
        if raw:
            return response.content
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ConsulError(f"{method} {path} returned invalid JSON") from e

    # =========================================================================
    # Agent
    # =========================================================================

    async def agent_services(self) -> dict[str, Any]:
        return await self._request("GET", "/v1/agent/services")

    async def agent_service_register(self, definition: dict[str, Any]) -> None:
        await self._request("PUT", "/v1/agent/service/register", json=definition)

    async def agent_service_deregister(self, service_id: str) -> None:
        await self._request("PUT", f"/v1/agent/service/deregister/{_segment(service_id)}")

    async def agent_checks(self) -> dict[str, Any]:
        return await self._request("GET", "/v1/agent/checks")

    async def agent_check_register(self, definition: dict[str, Any]) -> None:
        await self._request("PUT", "/v1/agent/check/register", json=definition)

    async def agent_check_deregister(self, check_id: str) -> None:
        await self._request("PUT", f"/v1/agent/check/deregister/{_segment(check_id)}")

    async def agent_members(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/v1/agent/members")

    async def agent_self(self) -> dict[str, Any]:
        return await self._request("GET", "/v1/agent/self")

    async def agent_reload(self) -> None:
        await self._request("PUT", "/v1/agent/reload")

    # =========================================================================
    # Health and catalog
    # =========================================================================

    async def health_service(
        self, service: str, tag: Optional[str] = None, passing: bool = False
    ) -> list[dict[str, Any]]:
        return await self._request(
            "GET",
            f"/v1/health/service/{_segment(service)}",
            params=_params(tag=tag, passing=passing),
        )

    async def catalog_services(self) -> dict[str, list[str]]:
        return await self._request("GET", "/v1/catalog/services")

    async def catalog_service(self, service: str) -> list[dict[str, Any]]:
        return await self._request("GET", f"/v1/catalog/service/{_segment(service)}")

    async def catalog_nodes(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/v1/catalog/nodes")

    # =========================================================================
    # KV store
    # =========================================================================

    async def kv_get(self, key: str) -> Optional[dict[str, Any]]:
        """Return the KV pair stored at key, or None when it does not exist."""
        pairs = await self._request("GET", f"/v1/kv/{_segment(key)}", allow_404=True)
        if not pairs:
            return None
        return pairs[0]

    async def kv_keys(self, prefix: str = "") -> Optional[list[str]]:
        return await self._request(
            "GET", f"/v1/kv/{_segment(prefix)}", params={"keys": "true"}, allow_404=True
        )

    async def kv_put(self, key: str, value: str) -> bool:
        return await self._request(
            "PUT", f"/v1/kv/{_segment(key)}", content=value.encode("utf-8")
        )

    async def kv_delete(self, key: str) -> bool:
        return await self._request("DELETE", f"/v1/kv/{_segment(key)}")

    async def txn(self, operations: list[dict[str, Any]]) -> dict[str, Any]:
        """Run KV operations atomically.

        Args:
            operations: Items with "operation" (set/delete/get), "key" and
                optional "value". Values are base64 encoded for the wire.
        """
        payload = []
        for op in operations:
            kv: dict[str, Any] = {"Verb": op["operation"], "Key": op["key"]}
            if op.get("value") is not None:
                kv["Value"] = base64.b64encode(op["value"].encode("utf-8")).decode("ascii")
            payload.append({"KV": kv})
        return await self._request("PUT", "/v1/txn", json=payload)

    # =========================================================================
    # Sessions
    # =========================================================================

    async def session_list(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/v1/session/list")

    async def session_create(self, definition: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", "/v1/session/create", json=definition)

    async def session_destroy(self, session_id: str) -> bool:
        return await self._request("PUT", f"/v1/session/destroy/{_segment(session_id)}")

    # =========================================================================
    # ACL
    # =========================================================================

    async def acl_token_create(self, definition: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", "/v1/acl/token", json=definition)

    async def acl_tokens(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/v1/acl/tokens")

    # =========================================================================
    # Events
    # =========================================================================

    async def event_fire(self, name: str, payload: str = "") -> dict[str, Any]:
        return await self._request(
            "PUT", f"/v1/event/fire/{_segment(name)}", content=payload.encode("utf-8")
        )

    async def event_list(self, name: Optional[str] = None) -> list[dict[str, Any]]:
        return await self._request("GET", "/v1/event/list", params=_params(name=name))

    # =========================================================================
    # Prepared queries
    # =========================================================================

    async def query_create(self, definition: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/v1/query", json=definition)

    async def query_execute(self, query_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/v1/query/{_segment(query_id)}/execute")

    # =========================================================================
    # Status and coordinates
    # =========================================================================

    async def status_leader(self) -> str:
        return await self._request("GET", "/v1/status/leader")

    async def status_peers(self) -> list[str]:
        return await self._request("GET", "/v1/status/peers")

    async def coordinate_node(self, node: str) -> Optional[list[dict[str, Any]]]:
        return await self._request(
            "GET", f"/v1/coordinate/node/{_segment(node)}", allow_404=True
        )

    # =========================================================================
    # Operator
    # =========================================================================

    async def raft_configuration(self) -> dict[str, Any]:
        return await self._request("GET", "/v1/operator/raft/configuration")

    async def autopilot_configuration(self) -> dict[str, Any]:
        return await self._request("GET", "/v1/operator/autopilot/configuration")

    async def area_create(self, definition: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/v1/operator/area", json=definition)

    async def area_list(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/v1/operator/area")

    async def license_get(self) -> dict[str, Any]:
        return await self._request("GET", "/v1/operator/license")

    async def license_put(self, license_text: str) -> dict[str, Any]:
        return await self._request(
            "PUT", "/v1/operator/license", content=license_text.encode("utf-8")
        )

    # =========================================================================
    # Snapshots
    # =========================================================================

    async def snapshot_save(self) -> bytes:
        return await self._request("GET", "/v1/snapshot", raw=True)

    async def snapshot_restore(self, data: bytes) -> None:
        await self._request("PUT", "/v1/snapshot", content=data)

    # =========================================================================
    # Connect
    # =========================================================================

    async def intention_upsert(
        self, source: str, destination: str, definition: dict[str, Any]
    ) -> bool:
        return await self._request(
            "PUT",
            "/v1/connect/intentions/exact",
            params={"source": source, "destination": destination},
            json=definition,
        )

    async def intentions(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/v1/connect/intentions")

    async def ca_configuration(self) -> dict[str, Any]:
        return await self._request("GET", "/v1/connect/ca/configuration")

    async def ca_set_configuration(self, definition: dict[str, Any]) -> None:
        await self._request("PUT", "/v1/connect/ca/configuration", json=definition)

    # =========================================================================
    # Namespaces and partitions (Consul Enterprise)
    # =========================================================================

    async def namespace_create(self, definition: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", "/v1/namespace", json=definition)

    async def namespaces(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/v1/namespaces")

    async def partition_create(self, definition: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", "/v1/partition", json=definition)

    async def partitions(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/v1/partitions")
