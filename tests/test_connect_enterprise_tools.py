"""Tests for Connect (intentions, CA) and Enterprise tools."""
from __future__ import annotations

import json

import pytest


class TestIntentions:
    """Tests for create-intention and list-intentions."""

    @pytest.mark.asyncio
    async def test_create(self, consul, call_tool):
        """The intention is upserted by source and destination."""
        consul.respond("PUT", "/v1/connect/intentions/exact", True)
        text = await call_tool("create-intention", source="web", destination="db", action="allow",
                               description="web may talk to db")
        assert text == "Created intention: web -> db (allow)"
        assert consul.last_json() == {"Action": "allow", "Description": "web may talk to db"}

    @pytest.mark.asyncio
    async def test_create_rejected(self, consul, call_tool):
        """Consul answering false yields the failure message."""
        consul.respond("PUT", "/v1/connect/intentions/exact", False)
        assert await call_tool("create-intention", source="web", destination="db", action="deny") == (
            "Failed to create intention: web -> db"
        )

    @pytest.mark.asyncio
    async def test_list(self, consul, call_tool):
        """Intentions are listed one per line."""
        consul.respond("GET", "/v1/connect/intentions", [
            {"ID": "", "SourceName": "web", "DestinationName": "db", "Action": "allow"},
        ])
        assert await call_tool("list-intentions") == (
            "Intentions:\n\nID: None, Source: web, Destination: db, Action: allow"
        )

    @pytest.mark.asyncio
    async def test_list_empty(self, consul, call_tool):
        """No intentions yields the empty message."""
        consul.respond("GET", "/v1/connect/intentions", [])
        assert await call_tool("list-intentions") == "No intentions found"


class TestConnectCa:
    """Tests for get-ca-configuration and set-ca-configuration."""

    @pytest.mark.asyncio
    async def test_get(self, consul, call_tool):
        """The CA configuration is rendered as JSON."""
        ca = {"Provider": "consul", "Config": {"LeafCertTTL": "72h"}}
        consul.respond("GET", "/v1/connect/ca/configuration", ca)
        assert await call_tool("get-ca-configuration") == (
            "Connect CA Configuration:\n\n" + json.dumps(ca, indent=2)
        )

    @pytest.mark.asyncio
    async def test_set(self, consul, call_tool):
        """Provider and config are sent together."""
        consul.respond("PUT", "/v1/connect/ca/configuration")
        text = await call_tool("set-ca-configuration", provider="consul", config={"LeafCertTTL": "24h"})
        assert text == "Updated Connect CA configuration with provider: consul"
        assert consul.last_json() == {"Provider": "consul", "Config": {"LeafCertTTL": "24h"}}

    @pytest.mark.asyncio
    async def test_set_failure(self, consul, call_tool):
        """A rejected update names the provider."""
        consul.fail_with = 400
        assert await call_tool("set-ca-configuration", provider="vault", config={}) == (
            "Error updating Connect CA configuration: vault"
        )


class TestLicense:
    """Tests for get-license and put-license."""

    @pytest.mark.asyncio
    async def test_get(self, consul, call_tool):
        """The license is rendered as JSON."""
        license_info = {"Valid": True, "License": {"product": "consul"}}
        consul.respond("GET", "/v1/operator/license", license_info)
        assert await call_tool("get-license") == "License:\n\n" + json.dumps(license_info, indent=2)

    @pytest.mark.asyncio
    async def test_put(self, consul, call_tool):
        """The license text is uploaded as the request body."""
        consul.respond("PUT", "/v1/operator/license", {"Valid": True})
        assert await call_tool("put-license", license="02MV4UU43BK5") == "License updated successfully"
        assert consul.last_request().content == b"02MV4UU43BK5"

    @pytest.mark.asyncio
    async def test_community_edition(self, call_tool):
        """Without Enterprise the operation is reported."""
        assert await call_tool("get-license") == "Error getting license"


class TestNamespacesPartitions:
    """Tests for namespace and partition tools."""

    @pytest.mark.asyncio
    async def test_create_namespace(self, consul, call_tool):
        """The created namespace name is reported."""
        consul.respond("PUT", "/v1/namespace", {"Name": "team-a", "Description": "Team A"})
        assert await call_tool("create-namespace", name="team-a", description="Team A") == (
            "Created namespace: team-a"
        )
        assert consul.last_json() == {"Name": "team-a", "Description": "Team A"}

    @pytest.mark.asyncio
    async def test_list_namespaces(self, consul, call_tool):
        """Namespaces are listed with descriptions."""
        consul.respond("GET", "/v1/namespaces", [
            {"Name": "default", "Description": "Builtin Default Namespace"},
            {"Name": "team-a"},
        ])
        assert await call_tool("list-namespaces") == (
            "Namespaces:\n\n"
            "Name: default, Description: Builtin Default Namespace\n"
            "Name: team-a, Description: None"
        )

    @pytest.mark.asyncio
    async def test_namespaces_unsupported(self, call_tool):
        """Without Enterprise the namespace is named in the error."""
        assert await call_tool("list-namespaces") == "Error listing namespaces"
        assert await call_tool("create-namespace", name="team-a") == "Error creating namespace: team-a"

    @pytest.mark.asyncio
    async def test_partitions(self, consul, call_tool):
        """Partitions are created and listed."""
        consul.respond("PUT", "/v1/partition", {"Name": "eu"})
        assert await call_tool("create-partition", name="eu") == "Created partition: eu"
        assert consul.last_json() == {"Name": "eu"}
        consul.respond("GET", "/v1/partitions", [{"Name": "eu", "Description": "Europe"}])
        assert await call_tool("list-partitions") == "Partitions:\n\nName: eu, Description: Europe"

    @pytest.mark.asyncio
    async def test_no_partitions(self, consul, call_tool):
        """No partitions yields the empty message."""
        consul.respond("GET", "/v1/partitions", [])
        assert await call_tool("list-partitions") == "No partitions found"
