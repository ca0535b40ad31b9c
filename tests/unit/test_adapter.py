"""Unit tests for the MCP SDK adapter."""

import mcp.types as types
import pytest

from mcp_planner.mcp.adapter import MCPAdapter, to_call_tool_result
from mcp_planner.server import build_registry
from mcp_planner.storage.memory import InMemoryPlanStore
from mcp_planner.tools.base import ImageContent, TextContent, ToolContext, ToolResult


@pytest.fixture
def adapter():
    store = InMemoryPlanStore()
    return MCPAdapter(build_registry(), context_factory=lambda rid: ToolContext(request_id=rid, store=store))


def test_build_registry_registers_all_tools():
    registry = build_registry()
    assert len(registry) == 12
    assert "create_plan" in registry and "sql_query" in registry


def test_manifest_uses_wire_field_names(adapter):
    tools = {t["name"]: t for t in adapter.export_mcp_manifest()["tools"]}
    assert "planId" in tools["get_detailed_plan"]["inputSchema"]["properties"]
    assert tools["get_all_plans"]["inputSchema"]["properties"] == {}


def test_handlers_registered_on_sdk_server(adapter):
    assert types.ListToolsRequest in adapter.server.request_handlers
    assert types.CallToolRequest in adapter.server.request_handlers


@pytest.mark.asyncio
async def test_list_tools_returns_sdk_tools(adapter):
    tools = await adapter.list_tools()
    assert len(tools) == 12
    assert all(isinstance(t, types.Tool) for t in tools)
    by_name = {t.name: t for t in tools}
    assert "planId" in by_name["get_detailed_plan"].inputSchema["properties"]


@pytest.mark.asyncio
async def test_call_tool_returns_call_tool_result(adapter):
    result = await adapter.call_tool("get_detailed_plan", {"planId": 42})
    assert isinstance(result, types.CallToolResult)
    assert result.isError is False
    assert result.content[0].type == "text"
    assert result.content[0].text == "Plan not found"


@pytest.mark.asyncio
async def test_validation_failure_is_an_error_result(adapter):
    result = await adapter.call_tool("sql_query", {})
    assert result.isError is True
    assert result.meta["errorType"] == "ValidationError"


@pytest.mark.asyncio
async def test_unknown_tool_is_an_error_result(adapter):
    result = await adapter.call_tool("no_such_tool", None)
    assert result.isError is True
    assert result.meta["errorType"] == "ToolNotFound"


@pytest.mark.asyncio
async def test_context_factory_receives_request_id():
    seen = []

    def make_context(request_id):
        seen.append(request_id)
        return ToolContext(request_id=request_id, store=InMemoryPlanStore())

    adapter = MCPAdapter(build_registry(), context_factory=make_context)
    await adapter.call_tool("get_all_plans", {})
    assert len(seen) == 1 and seen[0]


def test_non_text_blocks_convert_to_sdk_content():
    result = ToolResult(
        content=[ImageContent(data="aGk=", mime_type="image/png"), TextContent(text="caption")],
    )
    converted = to_call_tool_result(result)
    assert isinstance(converted.content[0], types.ImageContent)
    assert converted.content[0].mimeType == "image/png"
    assert converted.content[1].text == "caption"
    assert converted.meta is None
