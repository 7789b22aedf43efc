"""
Tests for the tool protocol and registry.

Tests cover:
- ToolResult construction and serialization
- Tool.execute error envelope
- ToolRegistry registration, discovery and invocation
"""

import pytest

from sandfly_fabric.tools import (
    Tool,
    ToolAnnotations,
    ToolRegistry,
    ToolRegistryError,
    ToolResult,
    UnknownToolError,
)


# =============================================================================
# Test Tools
# =============================================================================


class EchoTool(Tool):
    """Returns its arguments."""

    def __init__(self, name: str = "echo"):
        self._name = name
        self.calls = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return "Echo the arguments back"

    @property
    def input_schema(self) -> dict:
        return {"type": "object", "properties": {"value": {"type": "string"}}}

    @property
    def annotations(self) -> ToolAnnotations:
        return ToolAnnotations(read_only_hint=True, destructive_hint=False)

    async def run(self, arguments):
        self.calls.append(arguments)
        return {"echo": arguments}


class FailingTool(EchoTool):
    async def run(self, arguments):
        raise RuntimeError("remote exploded")


class BadSchemaTool(EchoTool):
    @property
    def input_schema(self) -> dict:
        return {"type": "array"}


# =============================================================================
# ToolResult Tests
# =============================================================================


class TestToolResult:
    """Tests for ToolResult."""

    def test_from_value_pretty_prints_json(self):
        result = ToolResult.from_value({"ok": True})

        assert result.text == '{\n  "ok": true\n}'
        assert result.structured_content == {"ok": True}
        assert not result.is_error

    def test_error_keeps_message(self):
        result = ToolResult.error("Unknown tool: nope")

        assert result.is_error
        assert result.text == "Unknown tool: nope"

    def test_to_dict(self):
        assert ToolResult.error("boom").to_dict() == {
            "content": [{"type": "text", "text": "boom"}],
            "isError": True,
        }
        assert ToolResult.from_value([1]).to_dict()["structuredContent"] == [1]


class TestToolAnnotations:
    """Tests for ToolAnnotations."""

    def test_defaults_serialize_empty(self):
        assert ToolAnnotations().to_dict() == {}

    def test_read_hints(self):
        annotations = ToolAnnotations(
            read_only_hint=True,
            destructive_hint=False,
            idempotent_hint=True,
            open_world_hint=True,
        )

        assert annotations.to_dict() == {
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        }


# =============================================================================
# Tool Tests
# =============================================================================


class TestTool:
    """Tests for the Tool base class."""

    @pytest.mark.asyncio
    async def test_execute_wraps_value(self):
        result = await EchoTool().execute({"value": "x"})

        assert result.structured_content == {"echo": {"value": "x"}}

    @pytest.mark.asyncio
    async def test_execute_reports_failure_in_result(self):
        result = await FailingTool().execute({})

        assert result.is_error
        assert result.text == "remote exploded"

    def test_to_schema(self):
        schema = EchoTool().to_schema()

        assert schema == {
            "name": "echo",
            "description": "Echo the arguments back",
            "inputSchema": {"type": "object", "properties": {"value": {"type": "string"}}},
            "annotations": {"readOnlyHint": True, "destructiveHint": False},
        }


# =============================================================================
# ToolRegistry Tests
# =============================================================================


class TestToolRegistry:
    """Tests for ToolRegistry."""

    def test_register_and_resolve(self):
        registry = ToolRegistry()
        tool = EchoTool()
        registry.register(tool)

        assert registry.resolve("echo") is tool
        assert "echo" in registry
        assert len(registry) == 1

    def test_resolve_unknown_returns_none(self):
        assert ToolRegistry().resolve("nonexistent") is None

    def test_get_required_unknown_raises(self):
        with pytest.raises(UnknownToolError, match="Unknown tool: nonexistent"):
            ToolRegistry().get_required("nonexistent")

    def test_duplicate_registration_rejected(self):
        registry = ToolRegistry()
        registry.register(EchoTool())

        with pytest.raises(ToolRegistryError, match="already registered"):
            registry.register(EchoTool())

    def test_invalid_schema_rejected(self):
        with pytest.raises(ToolRegistryError, match="type: 'object'"):
            ToolRegistry().register(BadSchemaTool())

    def test_listing_keeps_registration_order(self):
        registry = ToolRegistry()
        for name in ("b", "a", "c"):
            registry.register(EchoTool(name))

        assert registry.list_names() == ["b", "a", "c"]
        assert [schema["name"] for schema in registry.list_schemas()] == ["b", "a", "c"]
        assert [tool.name for tool in registry] == ["b", "a", "c"]

    def test_schemas_do_not_expose_actions(self):
        registry = ToolRegistry()
        registry.register(EchoTool())

        (schema,) = registry.list_schemas()
        assert set(schema) == {"name", "description", "inputSchema", "annotations"}

    @pytest.mark.asyncio
    async def test_invoke_passes_arguments_through(self):
        registry = ToolRegistry()
        tool = EchoTool()
        registry.register(tool)

        # Unknown keys are not stripped or validated
        result = await registry.invoke(tool, {"value": 1, "extra": True})

        assert result == {"echo": {"value": 1, "extra": True}}

    @pytest.mark.asyncio
    async def test_invoke_without_arguments(self):
        registry = ToolRegistry()
        tool = EchoTool()
        registry.register(tool)

        await registry.invoke(tool, None)

        assert tool.calls == [{}]

    @pytest.mark.asyncio
    async def test_invoke_propagates_errors(self):
        registry = ToolRegistry()
        tool = FailingTool()
        registry.register(tool)

        with pytest.raises(RuntimeError, match="remote exploded"):
            await registry.invoke(tool, {})

    @pytest.mark.asyncio
    async def test_call_unknown_tool(self):
        result = await ToolRegistry().call("sandfly_nope", {})

        assert result.is_error
        assert result.text == "Unknown tool: sandfly_nope"

    @pytest.mark.asyncio
    async def test_call_failure_becomes_error_result(self):
        registry = ToolRegistry()
        registry.register(FailingTool())

        result = await registry.call("echo", {})

        assert result.is_error
        assert result.text == "remote exploded"
