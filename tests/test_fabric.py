"""
Tests for the fabric application and its protocol shells.

Tests cover:
- FabricApp metadata, discovery and calls
- FastAPI HTTP surface
- MCP tools/list and tools/call handlers
"""

import json

import mcp.types as types
import pytest
from fastapi.testclient import TestClient

from sandfly_fabric.app import APP_NAME, FabricApp, create_fabric
from sandfly_fabric.app.dependencies import get_fabric
from sandfly_fabric.app.main import app
from sandfly_fabric.app.mcp_server import MCPToolHandlers, ToolInvocationError, create_mcp_server
from sandfly_fabric.config import load_settings
from sandfly_fabric.tools import UnknownToolError
from sandfly_fabric.tools.sandfly import TOOL_SPECS


@pytest.fixture
def fabric(client):
    return create_fabric(client=client)


@pytest.fixture
def http(fabric):
    app.dependency_overrides[get_fabric] = lambda: fabric
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# FabricApp Tests
# =============================================================================


class TestFabricApp:
    """Tests for FabricApp."""

    def test_metadata(self, fabric):
        assert fabric.name == APP_NAME == "sandfly-fabric"
        assert fabric.version == "0.1.0"
        assert "Sandfly" in fabric.description

    def test_lists_every_tool(self, fabric):
        assert len(fabric.list_tools()) == len(TOOL_SPECS)
        assert len(fabric.tools) == len(TOOL_SPECS)

    def test_built_from_settings(self):
        settings = load_settings(
            {
                "SANDFLY_HOST": "https://sandfly.test/",
                "SANDFLY_USERNAME": "admin",
                "SANDFLY_PASSWORD": "s3cret",
                "SANDFLY_VERIFY_SSL": "false",
            }
        )

        fabric = create_fabric(settings=settings)

        assert isinstance(fabric, FabricApp)
        assert fabric.client.config.base_url == "https://sandfly.test"
        assert fabric.client.config.verify_ssl is False

    @pytest.mark.asyncio
    async def test_call(self, fabric, stub):
        stub.route("GET", "/v4/system/license", json={"customer": "acme"})

        result = await fabric.call("sandfly_get_license", {})

        assert not result.is_error
        assert json.loads(result.text) == {"customer": "acme"}

    @pytest.mark.asyncio
    async def test_call_unknown_tool(self, fabric):
        result = await fabric.call("sandfly_nope", {})

        assert result.is_error
        assert result.text == "Unknown tool: sandfly_nope"

    def test_get_required_unknown(self, fabric):
        with pytest.raises(UnknownToolError, match="Unknown tool: sandfly_nope"):
            fabric.get_required("sandfly_nope")

    @pytest.mark.asyncio
    async def test_resolve_and_invoke(self, fabric, stub):
        stub.route("GET", "/v4/sandflies", json=[{"name": "recon_ssh"}])

        tool = fabric.resolve("sandfly_list_sandflies")

        assert await fabric.invoke(tool, None) == [{"name": "recon_ssh"}]

    @pytest.mark.asyncio
    async def test_health(self, fabric, stub):
        stub.route("GET", "/v4/system/version", json={"version": "5.1.0"})

        report = await fabric.health()

        assert report.app == "sandfly-fabric"
        assert report.is_healthy


# =============================================================================
# HTTP Surface Tests
# =============================================================================


class TestHTTPSurface:
    """Tests for the FastAPI application."""

    def test_root(self, http):
        response = http.get("/")

        assert response.status_code == 200
        assert response.json()["service"] == "sandfly-fabric"

    def test_list_tools(self, http):
        tools = http.get("/tools").json()["tools"]

        assert len(tools) == len(TOOL_SPECS)
        assert tools[0]["name"] == "sandfly_get_version"
        assert "inputSchema" in tools[0]

    def test_call_tool(self, http, stub):
        stub.route("GET", "/v4/hosts/h1", json={"uuid": "h1"})

        response = http.post("/tools/sandfly_get_host", json={"host_id": "h1"})

        assert response.status_code == 200
        body = response.json()
        assert body["structuredContent"] == {"uuid": "h1"}
        assert "isError" not in body

    def test_call_tool_without_body(self, http, stub):
        stub.route("GET", "/v4/system/config", json={"mode": "default"})

        response = http.post("/tools/sandfly_get_config")

        assert response.json()["structuredContent"] == {"mode": "default"}

    def test_call_tool_failure(self, http, stub):
        stub.route("GET", "/v4/hosts/h9", status_code=404, text="host not found")

        body = http.post("/tools/sandfly_get_host", json={"host_id": "h9"}).json()

        assert body["isError"] is True
        assert "host not found" in body["content"][0]["text"]

    def test_unknown_tool(self, http):
        response = http.post("/tools/sandfly_nope", json={})

        assert response.status_code == 404
        assert response.json()["detail"] == "Unknown tool: sandfly_nope"

    def test_health(self, http, stub):
        stub.route("GET", "/v4/system/version", status_code=503, text="maintenance")

        response = http.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "unavailable"


# =============================================================================
# MCP Server Tests
# =============================================================================


class TestMCPHandlers:
    """Tests for the MCP tool handlers."""

    @pytest.mark.asyncio
    async def test_list_tools(self, fabric):
        tools = await MCPToolHandlers(fabric).list_tools()

        assert [tool.name for tool in tools] == [spec.name for spec in TOOL_SPECS]
        version = tools[0]
        assert version.inputSchema == {"type": "object", "properties": {}}
        assert version.annotations.readOnlyHint is True

    @pytest.mark.asyncio
    async def test_call_tool(self, fabric, stub):
        stub.route("GET", "/v4/system/version", json={"version": "5.1.0"})

        (content,) = await MCPToolHandlers(fabric).call_tool("sandfly_get_version", {})

        assert content.type == "text"
        assert json.loads(content.text) == {"version": "5.1.0"}

    @pytest.mark.asyncio
    async def test_call_unknown_tool(self, fabric):
        with pytest.raises(ToolInvocationError, match="Unknown tool: sandfly_nope"):
            await MCPToolHandlers(fabric).call_tool("sandfly_nope", {})

    @pytest.mark.asyncio
    async def test_call_tool_failure(self, fabric, stub):
        stub.login_status = 401

        with pytest.raises(ToolInvocationError, match="Sandfly auth failed"):
            await MCPToolHandlers(fabric).call_tool("sandfly_list_hosts", None)

    def test_create_server(self, fabric):
        server = create_mcp_server(fabric)

        assert server.name == "sandfly-fabric"

    def test_server_registers_tool_handlers(self, fabric):
        server = create_mcp_server(fabric)

        assert types.ListToolsRequest in server.request_handlers
        assert types.CallToolRequest in server.request_handlers
