"""Tool envelope, registry and built-in tools."""

from mcp_planner.tools.base import (
    ConfigurationError,
    TextContent,
    ToolContext,
    ToolContractError,
    ToolResult,
    ToolSpec,
    error_response,
    text_response,
)
from mcp_planner.tools.envelope import create_safe_tool, safe_tool
from mcp_planner.tools.registry import ToolRegistry, register_tools

__all__ = [
    "ConfigurationError",
    "TextContent",
    "ToolContext",
    "ToolContractError",
    "ToolRegistry",
    "ToolResult",
    "ToolSpec",
    "create_safe_tool",
    "error_response",
    "register_tools",
    "safe_tool",
    "text_response",
]
