"""
Shared building blocks for catalog modules.

Most PVE tools follow one of two shapes:

- read: GET a path built from the arguments, return pretty-printed JSON
- action: POST/PUT/DELETE a path, send the remaining arguments as the
  body, return a one-line confirmation (often with the task UPID)

read_tool() and action_tool() build ToolDefinitions for those shapes.
Tools that do something else define their handler explicitly.
"""

from __future__ import annotations

import json
from string import Formatter
from typing import TYPE_CHECKING, Any, Literal
from urllib.parse import quote, urlencode

from pydantic import BaseModel, ConfigDict, Field

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.tools.models import NoInput, ToolAnnotations, ToolDefinition

if TYPE_CHECKING:
    from pvemcp.client import PveClient

RrdTimeframe = Literal["hour", "day", "week", "month", "year"]


# ─── Input models ────────────────────────────────────────────

class PveInput(BaseModel):
    """Base for tool inputs. Hyphenated PVE parameters use aliases."""

    model_config = ConfigDict(populate_by_name=True)


class NodeInput(PveInput):
    node: str = Field(description="The node name")


class VmInput(NodeInput):
    vmid: int = Field(description="The VM ID")


class ContainerInput(NodeInput):
    vmid: int = Field(description="The container ID")


# ─── Encoding helpers ────────────────────────────────────────

def dump(data: Any) -> str:
    """Pretty-print a backend payload for the caller."""
    return json.dumps(data, indent=2)


def _pve_value(value: Any) -> Any:
    # PVE expects booleans as 1/0
    if isinstance(value, bool):
        return 1 if value else 0
    return value


def pve_body(args: BaseModel, exclude: set[str] | None = None) -> dict[str, Any]:
    """Request body from the set arguments, booleans as 1/0."""
    data = args.model_dump(exclude_none=True, by_alias=True, exclude=exclude or set())
    return {k: _pve_value(v) for k, v in data.items()}


def query(params: dict[str, Any]) -> str:
    """`?a=1&b=2` from the non-None params, or "" when there are none."""
    pairs = {k: _pve_value(v) for k, v in params.items() if v is not None}
    return f"?{urlencode(pairs)}" if pairs else ""


def segment(value: Any) -> str:
    """URL-encode one path segment (UPIDs, user ids and SIDs contain ':' '@' '!')."""
    return quote(str(value), safe="")


def path_fields(template: str) -> set[str]:
    return {name for _, name, _, _ in Formatter().parse(template) if name}


def build_path(template: str, args: BaseModel) -> str:
    values = {name: segment(getattr(args, name)) for name in path_fields(template)}
    return template.format(**values)


# ─── Definition factories ────────────────────────────────────

def read_tool(
    name: str,
    description: str,
    category: ToolCategory,
    path: str,
    input_model: type[BaseModel] = NoInput,
    params: tuple[str, ...] = (),
) -> ToolDefinition:
    """GET `path` (formatted from the arguments) and return JSON.

    Fields listed in `params` are sent as query parameters when set.
    """

    async def handler(client: PveClient, args: BaseModel) -> str:
        url = build_path(path, args) + query({p: getattr(args, p) for p in params})
        return dump(await client.get(url))

    return ToolDefinition(
        name=name,
        description=description,
        tier=AccessTier.READ_ONLY,
        category=category,
        handler=handler,
        input_model=input_model,
    )


def action_tool(
    name: str,
    description: str,
    category: ToolCategory,
    tier: AccessTier,
    method: Literal["POST", "PUT", "DELETE"],
    path: str,
    message: str,
    input_model: type[BaseModel] = NoInput,
    send_body: bool = True,
    destructive: bool = False,
) -> ToolDefinition:
    """Call `method path` and return `message` formatted with the arguments.

    The body holds every set argument that is not a path field; DELETE
    requests never carry one. `{task}` in the message is replaced by
    whatever the backend returned (usually a UPID).
    """
    in_path = path_fields(path)

    async def handler(client: PveClient, args: BaseModel) -> str:
        url = build_path(path, args)
        body = pve_body(args, exclude=in_path) if send_body and method != "DELETE" else None
        data = await client.request(method, url, body)
        return message.format(**args.model_dump(), task=data)

    return ToolDefinition(
        name=name,
        description=description,
        tier=tier,
        category=category,
        handler=handler,
        input_model=input_model,
        annotations=ToolAnnotations(destructive=True) if destructive else ToolAnnotations(),
    )
