"""Schema-validated handler wrapper.

``create_safe_tool`` turns a handler that may return a string or a
``ToolResult`` into a finished ``ToolSpec`` whose handler validates its input
first, always returns a ``ToolResult`` and never raises.
"""

from __future__ import annotations

import inspect
import time
import traceback
from collections.abc import Mapping
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from mcp_planner.tools.base import (
    ConfigurationError,
    TextContent,
    ToolContext,
    ToolContractError,
    ToolResult,
    ToolSpec,
    now_iso,
    text_response,
)
from mcp_planner.tools.schema import build_input_model
from mcp_planner.utils.logging import get_logger

logger = get_logger(__name__)

RawToolHandler = Callable[[Any, ToolContext], Any]


def validation_result(error: ValidationError) -> ToolResult:
    """Project a pydantic ValidationError into an error result, one entry per violated field."""
    violations = [
        {"path": [str(part) for part in err["loc"]], "message": err["msg"]}
        for err in error.errors()
    ]
    summary = ", ".join(f"{'.'.join(v['path'])}: {v['message']}" for v in violations)
    return ToolResult(
        content=[TextContent(text=f"Validation error: {summary}")],
        is_error=True,
        metadata={
            "errorType": "ValidationError",
            "validationErrors": violations,
            "timestamp": now_iso(),
        },
    )


def execution_result(tool_name: str, error: BaseException) -> ToolResult:
    """Project a handler fault into an error result."""
    return ToolResult(
        content=[TextContent(text=f"Error in tool {tool_name}: {error}")],
        is_error=True,
        metadata={
            "errorType": type(error).__name__ or "UnknownError",
            "timestamp": now_iso(),
            "stack": "".join(traceback.format_exception(type(error), error, error.__traceback__)),
        },
    )


def normalize_result(result: Any) -> ToolResult:
    """
    Coerce a handler's return value into a ToolResult.

    Strings are wrapped in a single text block, ToolResult instances pass
    through untouched and mappings are parsed as the wire shape.

    Raises:
        ToolContractError: For None or any other type.
    """
    if isinstance(result, ToolResult):
        return result
    if isinstance(result, str):
        return text_response(result)
    if isinstance(result, Mapping):
        try:
            return ToolResult.model_validate(result)
        except ValidationError as e:
            raise ToolContractError(f"Handler returned a malformed result: {e}") from e
    raise ToolContractError(
        f"Handler must return a string or a ToolResult, got {type(result).__name__}"
    )


def create_safe_tool(
    name: str,
    description: str,
    schema: Any,
    handler: RawToolHandler,
) -> ToolSpec:
    """
    Wrap ``handler`` with validation and error handling.

    Args:
        name: Caller-facing tool name.
        description: Human-readable description.
        schema: Field mapping or pydantic model (see ``build_input_model``).
        handler: ``handler(args, context)``, sync or async, returning a string
            or a ToolResult. ``args`` is an instance of the input model.

    Returns:
        A ToolSpec whose handler takes ``(raw_args, context)``.

    Raises:
        ConfigurationError: If the declaration itself is malformed.

    Example:
        >>> echo = create_safe_tool("echo", "Echo back", {"msg": str}, lambda args, ctx: args.msg)
    """
    if not isinstance(name, str) or not name:
        raise ConfigurationError("Tool name must be a non-empty string")
    if not callable(handler):
        raise ConfigurationError(f"Handler for tool {name!r} must be callable")
    input_model = build_input_model(name, schema)

    async def wrapped(raw_args: Any, context: ToolContext | None = None) -> ToolResult:
        start = time.perf_counter()
        context = context if context is not None else ToolContext()
        try:
            args: BaseModel = input_model.model_validate({} if raw_args is None else raw_args)
        except ValidationError as e:
            logger.warning("tool_validation_failed", tool_name=name, error_count=e.error_count())
            return validation_result(e)

        try:
            result = handler(args, context)
            if inspect.isawaitable(result):
                result = await result
            normalized = normalize_result(result)
        except Exception as e:
            logger.exception("tool_error", tool_name=name, error=str(e))
            return execution_result(name, e)

        logger.info(
            "tool_executed",
            tool_name=name,
            is_error=normalized.is_error,
            execution_time_ms=(time.perf_counter() - start) * 1000,
        )
        return normalized

    wrapped.__name__ = f"{name}_safe"
    wrapped.__doc__ = description
    wrapped.__tool_input_model__ = input_model  # type: ignore[attr-defined]
    return ToolSpec(
        name=name,
        description=description,
        schema=schema,
        handler=wrapped,
        input_model=input_model,
    )


def safe_tool(name: str, description: str, schema: Any) -> Callable[[RawToolHandler], ToolSpec]:
    """Decorator form of ``create_safe_tool``; the decorated name becomes the ToolSpec."""

    def decorator(fn: RawToolHandler) -> ToolSpec:
        return create_safe_tool(name, description, schema, fn)

    return decorator
