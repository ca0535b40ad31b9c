"""Turn declarative input schemas into pydantic models."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, create_model

from mcp_planner.tools.base import ConfigurationError


def _model_name(tool_name: str) -> str:
    parts = re.split(r"[^0-9a-zA-Z]+", tool_name)
    return "".join(p[:1].upper() + p[1:] for p in parts if p) + "Input"


def build_input_model(tool_name: str, schema: Any) -> type[BaseModel]:
    """
    Return the pydantic model that validates a tool's arguments.

    ``schema`` is either a BaseModel subclass, used as is, or a mapping of
    field name to a type (required field) or to a ``(type, default)`` /
    ``(type, Field(...))`` tuple. An empty mapping yields a model with no fields.
    Mapping schemas validate in strict mode, so values are never coerced
    (``"42"`` is not an int); wrap a field in ``Annotated[T, Strict(False)]``
    to opt out, e.g. for enums given by value.

    Raises:
        ConfigurationError: If the schema has neither shape.
    """
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return schema
    if not isinstance(schema, Mapping):
        raise ConfigurationError(
            f"Schema for tool {tool_name!r} must be a mapping or a pydantic model, got {type(schema).__name__}"
        )
    fields: dict[str, Any] = {}
    for field_name, definition in schema.items():
        if not isinstance(field_name, str) or not field_name:
            raise ConfigurationError(f"Schema for tool {tool_name!r} has an invalid field name: {field_name!r}")
        if isinstance(definition, tuple):
            if len(definition) != 2:
                raise ConfigurationError(
                    f"Field {field_name!r} of tool {tool_name!r} must be a type or a (type, default) pair"
                )
            fields[field_name] = definition
        else:
            fields[field_name] = (definition, ...)
    try:
        return create_model(_model_name(tool_name), __config__=ConfigDict(strict=True), **fields)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid schema for tool {tool_name!r}: {e}") from e
