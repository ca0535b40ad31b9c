"""Tool result schema and base types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Annotated, Any, Awaitable, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from mcp_planner.storage.base import PlanStore
    from mcp_planner.storage.database import QueryDatabase


class ConfigurationError(Exception):
    """Malformed tool declaration or registration. Raised at startup, never caught per call."""


class ToolContractError(TypeError):
    """A handler returned something other than a string or a structured result."""


class TextContent(BaseModel):
    """A single text content block."""

    type: Literal["text"] = "text"
    text: str


class ImageContent(BaseModel):
    """Base64-encoded image block."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["image"] = "image"
    data: str
    mime_type: str = Field(alias="mimeType")


class ResourceContent(BaseModel):
    """Embedded resource block; the resource body is kept as sent."""

    type: Literal["resource"] = "resource"
    resource: dict[str, Any]


ContentBlock = Annotated[Union[TextContent, ImageContent, ResourceContent], Field(discriminator="type")]


class ToolResult(BaseModel):
    """
    Normalized result of every tool call, success or failure.

    Attributes:
        content: Ordered content blocks.
        is_error: Serialized as ``isError``; callers tell failures apart by this flag alone.
        metadata: Optional extras (errorType, validationErrors, timestamp, stack, ...).
    """

    model_config = ConfigDict(populate_by_name=True)

    content: list[ContentBlock] = Field(default_factory=list)
    is_error: bool = Field(default=False, alias="isError")
    metadata: dict[str, Any] | None = None

    @property
    def text(self) -> str:
        """Text of the first text block, or an empty string."""
        for block in self.content:
            if isinstance(block, TextContent):
                return block.text
        return ""

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready response shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass
class ToolContext:
    """
    Per-call metadata handed to every handler.

    Persistence is threaded through here rather than held in module globals,
    so tests can pass an in-memory store.
    """

    request_id: str | None = None
    store: PlanStore | None = None
    database: QueryDatabase | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def require_store(self) -> PlanStore:
        if self.store is None:
            raise RuntimeError("No plan store configured for this call")
        return self.store

    def require_database(self) -> QueryDatabase:
        if self.database is None:
            raise RuntimeError("No query database configured for this call")
        return self.database


WrappedHandler = Callable[[Any, ToolContext], Awaitable[ToolResult]]


@dataclass(frozen=True)
class ToolSpec:
    """A finished, self-describing tool: what the registry binds by name."""

    name: str
    description: str
    schema: Any
    handler: WrappedHandler
    input_model: type[BaseModel] | None = None


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def text_response(text: str) -> ToolResult:
    """Wrap plain text as a successful result."""
    return ToolResult(content=[TextContent(text=text)])


def error_response(message: str, metadata: dict[str, Any] | None = None) -> ToolResult:
    """Build an error result; ``metadata`` is merged after the timestamp."""
    return ToolResult(
        content=[TextContent(text=message)],
        is_error=True,
        metadata={"timestamp": now_iso(), **(metadata or {})},
    )
