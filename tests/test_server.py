"""Tests for the MCP server surface - tools over an in-memory client, health route."""

import json

import pytest
from fastmcp import Client

from partcompat_mcp import __version__, compatibility
from partcompat_mcp.server import app, health, mcp


@pytest.fixture(autouse=True)
def no_default_profile(monkeypatch):
    monkeypatch.setattr(compatibility, "DEFAULT_PROFILE", None)


async def call(tool: str, arguments: dict | None = None) -> dict:
    async with Client(mcp) as client:
        result = await client.call_tool(tool, arguments or {})
    return json.loads(result.content[0].text)


class TestTools:
    """Tool calls through the MCP protocol."""

    @pytest.mark.asyncio
    async def test_check_compatibility(self):
        result = await call("check_compatibility", {
            "component_type": "capacitor",
            "original_specs": {"capacitance": "100nF", "voltage": "25V", "dielectric": "X7R"},
            "candidate_specs": {"capacitance": "100nF", "voltage": "50V", "dielectric": "X5R"},
        })
        assert result["score"] == 0.0
        assert result["vetoed_by"] == ["dielectric"]

    @pytest.mark.asyncio
    async def test_check_compatibility_unknown_type(self):
        result = await call("check_compatibility", {
            "component_type": "widget",
            "original_specs": {},
            "candidate_specs": {},
        })
        assert "Unknown component type" in result["error"]

    @pytest.mark.asyncio
    async def test_list_component_types(self):
        result = await call("list_component_types")
        assert "resistor" in result["component_types"]
        assert [p["name"] for p in result["profiles"]] == [
            "design_phase",
            "replacement",
            "cost_optimization",
            "performance_upgrade",
            "emergency_sourcing",
        ]

    @pytest.mark.asyncio
    async def test_get_component_type(self):
        result = await call("get_component_type", {"component_type": "mosfet"})
        assert result["component_type"] == "mosfet"
        critical = [s["spec"] for s in result["specs"] if s["critical"]]
        assert critical == ["voltageRating", "currentRating", "channel"]

    @pytest.mark.asyncio
    async def test_get_component_type_unknown(self):
        result = await call("get_component_type", {"component_type": "widget"})
        assert "error" in result
        assert "mosfet" in result["supported_types"]

    @pytest.mark.asyncio
    async def test_get_version(self):
        result = await call("get_version")
        assert result == {"service": "partcompat-mcp", "version": __version__, "status": "healthy"}


class TestHealth:
    """Health check route."""

    @pytest.mark.asyncio
    async def test_health(self):
        response = await health(None)
        assert response.status_code == 200
        assert json.loads(response.body) == {
            "status": "healthy",
            "service": "partcompat-mcp",
            "version": __version__,
        }

    def test_route_registered(self):
        paths = [getattr(route, "path", None) for route in app.routes]
        assert "/health" in paths
