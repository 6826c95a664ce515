"""
pvemcp Tool Models

Definitions consumed by the tool gate. A ToolDefinition is static data
from the catalog: name, description, minimum tier, category, input
model, annotations and the async handler. The gate never mutates it.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from pvemcp.core.models import AccessTier, ToolCategory

if TYPE_CHECKING:
    from pvemcp.client import PveClient


class NoInput(BaseModel):
    """Input model for tools that take no arguments."""


class ToolAnnotations(BaseModel):
    """Behaviour hints exposed to MCP clients.

    Unset hints fall back to defaults derived from the tool's tier:
    read-only tools are read-only, nothing is destructive unless declared.
    """

    read_only: bool | None = None
    destructive: bool | None = None


ToolHandler = Callable[["PveClient", Any], Awaitable[str]]


@dataclass(frozen=True)
class ToolDefinition:
    """A capability offered by the catalog."""

    name: str
    description: str
    tier: AccessTier
    category: ToolCategory
    handler: ToolHandler
    input_model: type[BaseModel] = NoInput
    annotations: ToolAnnotations = field(default_factory=ToolAnnotations)

    @property
    def read_only_hint(self) -> bool:
        if self.annotations.read_only is not None:
            return self.annotations.read_only
        return self.tier == AccessTier.READ_ONLY

    @property
    def destructive_hint(self) -> bool:
        return bool(self.annotations.destructive)

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema for the input model, as sent to MCP clients."""
        schema = self.input_model.model_json_schema()
        schema.setdefault("properties", {})
        schema.pop("title", None)
        return schema


@dataclass
class ToolResult:
    """Outcome of one tool call: text plus an error flag."""

    content: str
    is_error: bool = False
