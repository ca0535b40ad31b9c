"""MCP adapter: expose the tool registry through the MCP SDK server."""

from __future__ import annotations

import uuid
from typing import Any, Callable

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from mcp_planner.tools.base import ImageContent, ResourceContent, ToolContext, ToolResult
from mcp_planner.tools.registry import ToolRegistry
from mcp_planner.utils.logging import get_logger

logger = get_logger(__name__)

ContextFactory = Callable[[str], ToolContext]


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    """Map a ToolResult onto the SDK result; metadata travels as ``_meta``."""
    content: list[Any] = []
    for block in result.content:
        if isinstance(block, ImageContent):
            content.append(types.ImageContent(type="image", data=block.data, mimeType=block.mime_type))
        elif isinstance(block, ResourceContent):
            content.append(types.EmbeddedResource.model_validate({"type": "resource", "resource": block.resource}))
        else:
            content.append(types.TextContent(type="text", text=block.text))
    return types.CallToolResult(content=content, isError=result.is_error, _meta=result.metadata)


class MCPAdapter:
    """
    Adapter that serves the registry over MCP.

    Protocol framing, the handshake and request routing belong to the SDK
    ``Server``; this class only answers ``tools/list`` and ``tools/call``.
    Tool failures come back as results with ``isError`` set.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        context_factory: ContextFactory | None = None,
        server_name: str = "mcp-planner",
        server_version: str = "0.0.1",
    ) -> None:
        self.registry = registry
        self.context_factory = context_factory or (lambda request_id: ToolContext(request_id=request_id))
        self.server_name = server_name
        self.server_version = server_version
        self.server: Server = Server(server_name, version=server_version)
        self.server.list_tools()(self.list_tools)
        # Arguments are validated by each tool's own envelope.
        self.server.call_tool(validate_input=False)(self.call_tool)

    def export_mcp_manifest(self) -> dict[str, Any]:
        """Export tools in MCP format (name, description, inputSchema)."""
        return {"tools": self.registry.list_tools()}

    async def list_tools(self) -> list[types.Tool]:
        return [types.Tool(**descriptor) for descriptor in self.registry.list_tools()]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        context = self.context_factory(self._request_id())
        result = await self.registry.call_tool(name, arguments or {}, context)
        return to_call_tool_result(result)

    def _request_id(self) -> str:
        try:
            return str(self.server.request_context.request_id)
        except LookupError:
            return str(uuid.uuid4())


async def serve_stdio(adapter: MCPAdapter) -> None:
    """Serve the adapter on stdin/stdout until the client disconnects."""
    logger.info("mcp_stdio_started", server=adapter.server_name)
    async with stdio_server() as (read_stream, write_stream):
        await adapter.server.run(read_stream, write_stream, adapter.server.create_initialization_options())
    logger.info("mcp_stdio_stopped")
