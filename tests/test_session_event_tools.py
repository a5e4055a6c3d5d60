"""Tests for session, event, ACL and prepared query tools."""
from __future__ import annotations

import json

import pytest


class TestSessions:
    """Tests for create-session, list-sessions and destroy-session."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, consul, call_tool):
        """A created session is listed with its settings."""
        text = await call_tool("create-session", name="lock", ttl="30s", behavior="delete")
        session_id = next(iter(consul.sessions))
        assert text == f"Created session: {session_id}"
        assert consul.last_json() == {"Name": "lock", "TTL": "30s", "Behavior": "delete"}

        listing = await call_tool("list-sessions")
        assert listing == (
            "Sessions:\n\n"
            f"ID: {session_id}\nName: lock\nNode: node-1\nChecks: serfHealth\n"
            "LockDelay: 15000000000\nBehavior: delete\nTTL: 30s\n---"
        )

    @pytest.mark.asyncio
    async def test_create_without_arguments(self, consul, call_tool):
        """All session settings are optional."""
        text = await call_tool("create-session")
        assert text.startswith("Created session: ")
        assert consul.last_json() == {}

    @pytest.mark.asyncio
    async def test_create_failure(self, consul, call_tool):
        """A failed create reports the operation."""
        consul.fail_with = 500
        assert await call_tool("create-session") == "Error creating session"
        assert await call_tool("create-session", name="lock") == "Error creating session: lock"

    @pytest.mark.asyncio
    async def test_no_sessions(self, call_tool):
        """No sessions yields the empty message."""
        assert await call_tool("list-sessions") == "No sessions found"

    @pytest.mark.asyncio
    async def test_destroy(self, consul, call_tool):
        """Destroying a session removes it."""
        await call_tool("create-session", name="lock")
        session_id = next(iter(consul.sessions))
        assert await call_tool("destroy-session", id=session_id) == (
            f"Successfully destroyed session with ID: {session_id}"
        )
        assert await call_tool("list-sessions") == "No sessions found"

    @pytest.mark.asyncio
    async def test_destroy_rejected(self, consul, call_tool):
        """Consul answering false yields the failure message."""
        consul.respond("PUT", "/v1/session/destroy/abc", False)
        assert await call_tool("destroy-session", id="abc") == "Failed to destroy session with ID: abc"


class TestEvents:
    """Tests for fire-event and list-events."""

    @pytest.mark.asyncio
    async def test_fire_and_list(self, consul, call_tool):
        """Fired events are listed with decoded payloads."""
        text = await call_tool("fire-event", name="deploy", payload="v2")
        event_id = consul.events[0]["ID"]
        assert text == f"Fired event: {event_id}"
        assert await call_tool("list-events") == f"Events:\n\nID: {event_id}, Name: deploy, Payload: v2"

    @pytest.mark.asyncio
    async def test_no_payload(self, consul, call_tool):
        """An event without payload shows None."""
        await call_tool("fire-event", name="ping")
        assert await call_tool("list-events") == (
            f"Events:\n\nID: {consul.events[0]['ID']}, Name: ping, Payload: None"
        )

    @pytest.mark.asyncio
    async def test_filter_by_name(self, call_tool):
        """list-events filters by name."""
        await call_tool("fire-event", name="deploy")
        await call_tool("fire-event", name="ping")
        text = await call_tool("list-events", name="ping")
        assert "Name: ping" in text
        assert "Name: deploy" not in text

    @pytest.mark.asyncio
    async def test_no_events(self, call_tool):
        """No events yields the empty message."""
        assert await call_tool("list-events") == "No events found"


class TestAclTokens:
    """Tests for create-acl-token and list-acl-tokens."""

    @pytest.mark.asyncio
    async def test_create(self, consul, call_tool):
        """The token is created with its policies."""
        consul.respond("PUT", "/v1/acl/token", {"AccessorID": "acc-1", "SecretID": "sec-1"})
        text = await call_tool("create-acl-token", name="ci", policies=["read-only"])
        assert text == "Created ACL token: acc-1"
        assert consul.last_json() == {
            "Description": "ci",
            "Local": False,
            "Policies": [{"Name": "read-only"}],
        }

    @pytest.mark.asyncio
    async def test_list(self, consul, call_tool):
        """Tokens are listed with their scope."""
        consul.respond("GET", "/v1/acl/tokens", [
            {"AccessorID": "acc-1", "Description": "ci", "Local": False},
            {"AccessorID": "acc-2", "Description": "", "Local": True},
        ])
        assert await call_tool("list-acl-tokens") == (
            "ACL Tokens:\n\n"
            "ID: acc-1, Name: ci, Type: global\n"
            "ID: acc-2, Name: None, Type: local"
        )

    @pytest.mark.asyncio
    async def test_acl_disabled(self, consul, call_tool):
        """A cluster without ACLs reports the operation."""
        consul.respond("GET", "/v1/acl/tokens", "ACL support disabled", status=401)
        assert await call_tool("list-acl-tokens") == "Error listing ACL tokens"
        consul.respond("PUT", "/v1/acl/token", "ACL support disabled", status=401)
        assert await call_tool("create-acl-token", name="ci") == "Error creating ACL token: ci"


class TestPreparedQueries:
    """Tests for create-prepared-query and execute-prepared-query."""

    @pytest.mark.asyncio
    async def test_create_defaults(self, consul, call_tool):
        """nearestN defaults to 3 and datacenters to none."""
        consul.respond("POST", "/v1/query", {"ID": "q-1"})
        assert await call_tool("create-prepared-query", name="web-near", service="web") == (
            "Created prepared query: q-1"
        )
        assert consul.last_json() == {
            "Name": "web-near",
            "Service": {"Service": "web", "Failover": {"NearestN": 3, "Datacenters": []}},
        }

    @pytest.mark.asyncio
    async def test_create_with_failover(self, consul, call_tool):
        """Failover settings are passed through."""
        consul.respond("POST", "/v1/query", {"ID": "q-2"})
        await call_tool("create-prepared-query", name="q", service="web", nearestN=1, datacenters=["dc2"])
        assert consul.last_json()["Service"]["Failover"] == {"NearestN": 1, "Datacenters": ["dc2"]}

    @pytest.mark.asyncio
    async def test_execute(self, consul, call_tool):
        """Results are rendered as JSON."""
        result = {"Service": "web", "Nodes": [], "Datacenter": "dc1", "Failovers": 0}
        consul.respond("GET", "/v1/query/q-1/execute", result)
        assert await call_tool("execute-prepared-query", id="q-1") == (
            "Query results:\n\n" + json.dumps(result, indent=2)
        )

    @pytest.mark.asyncio
    async def test_execute_unknown(self, call_tool):
        """An unknown query reports its ID."""
        assert await call_tool("execute-prepared-query", id="nope") == "Error executing prepared query: nope"
