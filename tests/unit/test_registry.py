"""Unit tests for tool registration and dispatch."""

import pytest
from pydantic import Field

from mcp_planner.tools.base import ConfigurationError, ToolContext
from mcp_planner.tools.envelope import create_safe_tool
from mcp_planner.tools.registry import ToolRegistry, register_tools


def make_echo(name="echo"):
    return create_safe_tool(name, "Echo back", {"msg": (str, Field(min_length=1))}, lambda args, ctx: args.msg)


@pytest.mark.asyncio
async def test_object_and_positional_registration_behave_the_same():
    spec = make_echo()
    by_object = ToolRegistry()
    by_object.tool(spec)
    positional = ToolRegistry()
    positional.add_tool(spec.name, spec.description, spec.schema, lambda args, ctx: args.msg)

    for args in ({"msg": "hi"}, {"msg": ""}, {}):
        a = await by_object.call_tool("echo", args, ToolContext())
        b = await positional.call_tool("echo", args, ToolContext())
        assert a.is_error == b.is_error
        assert a.text == b.text
    assert by_object.list_tools() == positional.list_tools()


def test_mapping_registration():
    spec = make_echo()
    registry = ToolRegistry()
    registry.tool({"name": spec.name, "description": spec.description, "schema": spec.schema, "handler": spec.handler})
    assert "echo" in registry


def test_mapping_registration_missing_fields():
    registry = ToolRegistry()
    with pytest.raises(ConfigurationError, match="handler"):
        registry.tool({"name": "x", "description": "d", "schema": {}})


@pytest.mark.parametrize(
    "name, description, schema, handler",
    [
        (42, "d", {}, lambda a, c: "ok"),
        ("x", None, {}, lambda a, c: "ok"),
        ("x", "d", None, lambda a, c: "ok"),
        ("x", "d", {}, None),
        ("x", "d", {}, "not callable"),
        ("x", "d", "not a schema", lambda a, c: "ok"),
    ],
)
def test_malformed_positional_registration_fails_fast(name, description, schema, handler):
    registry = ToolRegistry()
    with pytest.raises(ConfigurationError):
        registry.tool(name, description, schema, handler)
    assert len(registry) == 0


def test_duplicate_names_are_rejected():
    registry = ToolRegistry()
    registry.tool(make_echo())
    with pytest.raises(ConfigurationError, match="already registered"):
        registry.tool(make_echo())


def test_register_tools_accepts_one_or_many():
    registry = ToolRegistry()
    register_tools(registry, make_echo("a"))
    register_tools(registry, [make_echo("b"), make_echo("c")])
    assert registry.names() == ["a", "b", "c"]


def test_list_tools_exposes_json_schema():
    registry = ToolRegistry()
    registry.tool(make_echo())
    (descriptor,) = registry.list_tools()
    assert descriptor["name"] == "echo"
    assert descriptor["description"] == "Echo back"
    assert descriptor["inputSchema"]["type"] == "object"
    assert descriptor["inputSchema"]["required"] == ["msg"]
    assert descriptor["inputSchema"]["properties"]["msg"]["minLength"] == 1


@pytest.mark.asyncio
async def test_unknown_tool_yields_error_result():
    registry = ToolRegistry()
    result = await registry.call_tool("missing", {})
    assert result.is_error is True
    assert result.metadata["errorType"] == "ToolNotFound"
    assert "missing" in result.text


@pytest.mark.asyncio
async def test_positional_raw_handler_fault_becomes_error_result():
    def explode(args, ctx):
        raise ValueError("boom")

    registry = ToolRegistry()
    registry.add_tool("explode", "Always fails", {}, explode)
    result = await registry.call_tool("explode", {})
    assert result.is_error is True
    assert result.metadata["errorType"] == "ValueError"
    assert result.text == "Error in tool explode: boom"


@pytest.mark.asyncio
async def test_positional_raw_handler_is_validated_before_running():
    calls = []

    def record(args, ctx):
        calls.append(args)
        return "ran"

    registry = ToolRegistry()
    registry.add_tool("record", "Records calls", {"msg": str}, record)
    result = await registry.call_tool("record", {})
    assert result.is_error is True
    assert result.metadata["errorType"] == "ValidationError"
    assert calls == []


@pytest.mark.asyncio
async def test_positional_sync_handler_returning_string():
    registry = ToolRegistry()
    registry.add_tool("ok", "Says ok", {}, lambda args, ctx: "ok")
    result = await registry.call_tool("ok", {})
    assert result.is_error is False
    assert result.text == "ok"


@pytest.mark.asyncio
async def test_mapping_registration_wraps_raw_handler():
    registry = ToolRegistry()
    registry.tool({"name": "ok", "description": "Says ok", "schema": {}, "handler": lambda args, ctx: "ok"})
    result = await registry.call_tool("ok", None)
    assert result.text == "ok"
