"""Health check tools - agent check registration and service health queries."""
from typing import Annotated, Any, Mapping, Optional
import logging

from pydantic import Field

from ...consul_client import ConsulClient
from ...formatters import format_health_check, json_block, listing
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)


def _registered(result: Any, arguments: Mapping[str, Any]) -> str:
    check_id = arguments["id"] or arguments["name"]
    return f"Successfully registered health check: {arguments['name']} with ID: {check_id}"


@Tool(
    "register-health-check",
    "Register a health check with Consul",
    operation="registering health check",
    identifier="name",
    render=_registered,
)
async def register_health_check(
    client: ConsulClient,
    name: Annotated[str, Field(description="Name of the health check")],
    id: Annotated[Optional[str], Field(description="ID of the health check (defaults to name if not provided)")] = None,
    serviceId: Annotated[Optional[str], Field(description="ID of the service to associate the check with")] = None,
    notes: Annotated[Optional[str], Field(description="Notes about the health check")] = None,
    ttl: Annotated[Optional[str], Field(description="Time to live for the check (e.g., '10s', '1m')")] = None,
    http: Annotated[Optional[str], Field(description="HTTP endpoint to check")] = None,
    interval: Annotated[Optional[str], Field(description="Interval for the check (e.g., '10s', '1m')")] = None,
    timeout: Annotated[Optional[str], Field(description="Timeout for the check (e.g., '5s', '30s')")] = None,
) -> Any:
    """
    Register a TTL or HTTP check with the local agent.

    Args:
        name: Check name
        id: Check ID, defaults to the name
        serviceId: Service the check belongs to
        notes: Free-form notes
        ttl: TTL for a check updated by the application
        http: URL polled by the agent
        interval: Poll interval, sent only together with http
        timeout: Request timeout
    """
    definition: dict[str, Any] = {"Name": name, "ID": id or name}
    if serviceId is not None:
        definition["ServiceID"] = serviceId
    if notes is not None:
        definition["Notes"] = notes
    if ttl is not None:
        definition["TTL"] = ttl
    if http is not None:
        definition["HTTP"] = http
        # interval only applies to HTTP checks
        if interval is not None:
            definition["Interval"] = interval
    elif interval is not None:
        logger.debug("Ignoring interval for non-HTTP check %s", name)
    if timeout is not None:
        definition["Timeout"] = timeout
    return await client.agent_check_register(definition)


@Tool(
    "deregister-health-check",
    "Deregister a health check from Consul",
    operation="deregistering health check with ID",
    identifier="id",
    render="Successfully deregistered health check with ID: {id}",
)
async def deregister_health_check(
    client: ConsulClient,
    id: Annotated[str, Field(description="ID of the health check to deregister")],
) -> Any:
    """Remove a check from the local agent."""
    return await client.agent_check_deregister(id)


@Tool(
    "get-agent-checks",
    "Get all health checks registered with the local agent",
    operation="getting agent health checks",
    render=listing("Agent health checks", format_health_check),
    empty="No agent health checks found",
)
async def get_agent_checks(client: ConsulClient) -> Any:
    """List the checks registered with the local agent."""
    checks = await client.agent_checks()
    return list((checks or {}).values())


@Tool(
    "get-health-checks",
    "Get health checks for a service",
    operation="getting health checks for service",
    identifier="service",
    render=listing("Health checks for service {service}", format_health_check),
    empty="No health checks found for service: {service}",
)
async def get_health_checks(
    client: ConsulClient,
    service: Annotated[str, Field(description="Name of the service to get health checks for")],
) -> Any:
    """
    Collect the checks of every instance of a service.

    /v1/health/service returns one entry per instance, each carrying its
    node and service checks; the entries are flattened into one list.
    """
    entries = await client.health_service(service)
    return [check for entry in entries or [] for check in entry.get("Checks") or []]


@Tool(
    "get-health-service",
    "Get system health service",
    operation="getting system health service",
    identifier="name",
    render=json_block("System Health service {name}"),
)
async def get_health_service(
    client: ConsulClient,
    name: Annotated[str, Field(description="Name of the service")],
    tag: Annotated[str, Field(description="filter by tag")] = "",
    passing: Annotated[bool, Field(description="restrict to passing checks")] = False,
) -> Any:
    """Raw health entries for a service, optionally filtered by tag and passing state."""
    return await client.health_service(name, tag=tag, passing=passing)
