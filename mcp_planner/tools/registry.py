"""Tool registry: name -> ToolSpec binding and dispatch."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Callable

from mcp_planner.tools.base import ConfigurationError, ToolContext, ToolResult, ToolSpec, error_response
from mcp_planner.tools.envelope import create_safe_tool
from mcp_planner.tools.schema import build_input_model
from mcp_planner.utils.logging import get_logger

logger = get_logger(__name__)

_SPEC_KEYS = ("name", "description", "schema", "handler")


class ToolRegistry:
    """
    Registry for tools, written at startup and read-only afterwards.

    Tools can be registered positionally or as a single self-describing object;
    both funnel into the same binding routine. Handlers that did not come from
    ``create_safe_tool`` are wrapped on the way in, so every dispatch goes
    through validation and fault handling.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.tool(echo_tool)
        >>> registry.add_tool("echo2", "Echo back", {"msg": str}, echo_tool.handler)
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}

    def add_tool(
        self,
        name: str,
        description: str,
        schema: Any,
        handler: Callable[..., Any],
    ) -> None:
        """
        Register a tool from four positional parts.

        Raises:
            ConfigurationError: If any part is missing or mistyped, or the name is taken.
        """
        if not isinstance(name, str):
            raise ConfigurationError("Tool name must be a string when not using object syntax")
        if not name:
            raise ConfigurationError("Tool name must not be empty")
        if not description or not isinstance(description, str):
            raise ConfigurationError(f"Description is required for tool {name!r}")
        if schema is None:
            raise ConfigurationError(f"Schema is required for tool {name!r}")
        if handler is None:
            raise ConfigurationError(f"Handler is required for tool {name!r}")
        if not callable(handler):
            raise ConfigurationError(f"Handler for tool {name!r} must be callable")
        input_model = getattr(handler, "__tool_input_model__", None)
        if input_model is None:
            # Plain handlers get the same validation and fault handling as create_safe_tool output.
            self._bind(create_safe_tool(name, description, schema, handler))
            return
        build_input_model(name, schema)
        self._bind(
            ToolSpec(
                name=name,
                description=description,
                schema=schema,
                handler=handler,
                input_model=input_model,
            )
        )

    def tool(
        self,
        name_or_spec: str | ToolSpec | Mapping[str, Any],
        description: str | None = None,
        schema: Any = None,
        handler: Callable[..., Any] | None = None,
    ) -> None:
        """Register either a ToolSpec / ``{name, description, schema, handler}`` mapping or the positional form."""
        if isinstance(name_or_spec, ToolSpec):
            self.add_tool(name_or_spec.name, name_or_spec.description, name_or_spec.schema, name_or_spec.handler)
            return
        if isinstance(name_or_spec, Mapping):
            missing = [key for key in _SPEC_KEYS if key not in name_or_spec]
            if missing:
                raise ConfigurationError(f"Tool object is missing fields: {', '.join(missing)}")
            self.add_tool(*(name_or_spec[key] for key in _SPEC_KEYS))
            return
        self.add_tool(name_or_spec, description, schema, handler)  # type: ignore[arg-type]

    def _bind(self, spec: ToolSpec) -> None:
        if spec.name in self._tools:
            raise ConfigurationError(f"Tool {spec.name!r} is already registered")
        self._tools[spec.name] = spec
        logger.debug("tool_registered", tool_name=spec.name)

    def get(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def list_tools(self) -> list[dict[str, Any]]:
        """Return tool descriptors (name, description, JSON Schema of the input)."""
        tools = []
        for spec in self._tools.values():
            input_schema = spec.input_model.model_json_schema() if spec.input_model else {"type": "object"}
            input_schema.pop("title", None)
            tools.append({
                "name": spec.name,
                "description": spec.description,
                "inputSchema": input_schema,
            })
        return tools

    async def call_tool(
        self,
        name: str,
        arguments: Mapping[str, Any] | None,
        context: ToolContext | None = None,
    ) -> ToolResult:
        """Dispatch a call by name. Unknown names yield an error result."""
        spec = self._tools.get(name)
        if spec is None:
            logger.warning("tool_not_found", tool_name=name)
            return error_response(f"Unknown tool: {name}", {"errorType": "ToolNotFound"})
        return await spec.handler(arguments or {}, context or ToolContext())


def register_tools(registry: ToolRegistry, tools: ToolSpec | Iterable[ToolSpec]) -> None:
    """Register one ToolSpec or an ordered sequence of them."""
    if isinstance(tools, ToolSpec):
        tools = [tools]
    for spec in tools:
        registry.tool(spec)
