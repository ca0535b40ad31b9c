"""MCP transport adapter."""

from mcp_planner.mcp.adapter import MCPAdapter, serve_stdio

__all__ = ["MCPAdapter", "serve_stdio"]
