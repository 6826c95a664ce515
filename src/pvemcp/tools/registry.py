"""
pvemcp Tool Registry

The tool gate. Each catalog definition is checked once at startup
against the process's access tier and category allow-list; admitted
tools are stored by name together with a wrapped executor.

The wrapper is the only place tool failures are handled: whatever a
handler raises (backend rejection, network failure, bad input) comes
back as a ToolResult with is_error=True and sanitized text. A failing
tool call never propagates out of the registry.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from pvemcp.core.models import AccessTier
from pvemcp.exceptions import ToolInputError
from pvemcp.logging import get_logger
from pvemcp.sanitizer import sanitize
from pvemcp.tools.models import ToolDefinition, ToolResult

if TYPE_CHECKING:
    from pvemcp.client import PveClient

logger = get_logger("pvemcp.tools")

ToolExecutor = Callable[[dict[str, Any] | None], Awaitable[ToolResult]]


def admit(
    definition: ToolDefinition,
    tier: AccessTier,
    categories: Iterable[str] | None = None,
) -> bool:
    """Decide whether a tool is exposed at all.

    True iff the tool's minimum tier is <= the process tier AND the
    allow-list is empty/None or contains the tool's category.
    """
    if not tier.allows(definition.tier):
        return False
    allowed = set(categories or ())
    if allowed and definition.category.value not in allowed:
        return False
    return True


def wrap_handler(definition: ToolDefinition, client: PveClient) -> ToolExecutor:
    """Build the executor for an admitted tool.

    Validates arguments against the tool's input model, runs the handler
    and converts any exception into a sanitized error result.
    """

    async def execute(arguments: dict[str, Any] | None = None) -> ToolResult:
        start = time.monotonic()
        try:
            try:
                args = definition.input_model.model_validate(arguments or {})
            except ValidationError as e:
                raise ToolInputError(definition.name, _summarize_validation(e)) from None
            text = await definition.handler(client, args)
            return ToolResult(content=sanitize(str(text)))
        except Exception as e:
            message = sanitize(str(e)) or type(e).__name__
            logger.warning(
                "Tool '%s' failed: %s",
                definition.name,
                message,
                extra={
                    "tool_name": definition.name,
                    "duration_ms": round((time.monotonic() - start) * 1000, 1),
                },
            )
            return ToolResult(content=message, is_error=True)

    return execute


class RegisteredTool:
    """An admitted tool bound to its wrapped executor."""

    def __init__(self, definition: ToolDefinition, executor: ToolExecutor):
        self.definition = definition
        self.executor = executor

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def tier(self) -> AccessTier:
        return self.definition.tier

    @property
    def category(self) -> str:
        return self.definition.category.value


class ToolRegistry:
    """Name-indexed set of admitted tools.

    Filled once at startup; there is no unregistration. Lookups and
    executions after startup only read the mapping.
    """

    def __init__(
        self,
        client: PveClient,
        tier: AccessTier,
        categories: Iterable[str] | None = None,
    ) -> None:
        self._client = client
        self._tier = tier
        self._categories = tuple(categories) if categories else None
        self._tools: dict[str, RegisteredTool] = {}

    @property
    def tier(self) -> AccessTier:
        return self._tier

    @property
    def categories(self) -> tuple[str, ...] | None:
        return self._categories

    def register(self, definition: ToolDefinition) -> bool:
        """Admit and register a tool. Returns False if it was filtered out.

        Raises ValueError if a tool with the same name is already registered.
        """
        if not admit(definition, self._tier, self._categories):
            if not self._tier.allows(definition.tier):
                logger.debug(
                    "Skipping tool '%s' (requires %s, running in %s mode)",
                    definition.name,
                    definition.tier.value,
                    self._tier.value,
                )
            else:
                logger.debug(
                    "Skipping tool '%s' (category '%s' not in allowed categories)",
                    definition.name,
                    definition.category.value,
                )
            return False

        if definition.name in self._tools:
            raise ValueError(f"Tool '{definition.name}' is already registered")

        self._tools[definition.name] = RegisteredTool(
            definition, wrap_handler(definition, self._client)
        )
        logger.debug(
            "Registered tool: %s [%s]",
            definition.name,
            definition.category.value,
            extra={"tool_name": definition.name, "tier": definition.tier.value},
        )
        return True

    def register_all(self, definitions: Iterable[ToolDefinition]) -> int:
        """Register every admissible definition. Returns how many were admitted."""
        return sum(1 for d in definitions if self.register(d))

    def get(self, name: str) -> RegisteredTool | None:
        return self._tools.get(name)

    def get_all(self) -> list[RegisteredTool]:
        return list(self._tools.values())

    async def execute(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Run a registered tool. Unknown names yield an error result."""
        tool = self._tools.get(name)
        if tool is None:
            return ToolResult(content=f"Unknown tool: {sanitize(name)}", is_error=True)
        return await tool.executor(arguments)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools


def _summarize_validation(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "input"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
