"""Plain-text rendering of structured records for tool responses."""

from __future__ import annotations

import json
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError, to_jsonable_python


class JSONFormattingError(Exception):
    """Raised when a value cannot be rendered as text."""


def _jsonable(data: Any) -> Any:
    if data is None:
        raise JSONFormattingError("Input cannot be None")
    if not isinstance(data, (dict, list, tuple, BaseModel)):
        raise JSONFormattingError("Input must be a mapping, a list or a model")
    try:
        return to_jsonable_python(data)
    except PydanticSerializationError as e:
        raise JSONFormattingError(f"Failed to serialize: {e}") from e


def readable(data: Any) -> str:
    """
    Render a mapping, list or model as indented ``key: value`` text.

    Raises:
        JSONFormattingError: If the input is None, a scalar, or not serializable.
    """
    payload = _jsonable(data)
    return yaml.safe_dump(
        payload,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    ).rstrip("\n")


def to_compact_string(data: Any) -> str:
    """Single-line JSON."""
    return json.dumps(_jsonable(data), separators=(",", ":"))


def to_pretty_string(data: Any, spaces: int = 2) -> str:
    """Indented JSON."""
    return json.dumps(_jsonable(data), indent=spaces)
