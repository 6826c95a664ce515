"""Pool tools: resource pools and their members."""

from __future__ import annotations

from pydantic import Field

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.tools.catalog._common import PveInput, action_tool, read_tool

POOLS = ToolCategory.POOLS


class PoolInput(PveInput):
    poolid: str = Field(description="The pool ID")


class PoolCreateInput(PoolInput):
    comment: str | None = Field(default=None, description="Pool comment/description")


class PoolUpdateInput(PoolCreateInput):
    vms: str | None = Field(
        default=None, description="Comma-separated list of VMIDs to add/remove"
    )
    storage: str | None = Field(
        default=None, description="Comma-separated list of storage IDs to add/remove"
    )
    delete: bool | None = Field(
        default=None,
        description="Remove specified VMs/storage from pool instead of adding",
    )


POOL_TOOLS = [
    read_tool("pve_list_pools", "List all resource pools in the cluster", POOLS, "/pools"),
    read_tool(
        "pve_get_pool",
        "Get detailed information about a resource pool including its members",
        POOLS,
        "/pools/{poolid}",
        PoolInput,
    ),
    action_tool(
        "pve_create_pool",
        "Create a new resource pool",
        POOLS,
        AccessTier.FULL,
        "POST",
        "/pools",
        "Pool '{poolid}' created successfully.",
        PoolCreateInput,
    ),
    action_tool(
        "pve_update_pool",
        "Update a resource pool: add or remove VMs/containers and storage from the pool",
        POOLS,
        AccessTier.FULL,
        "PUT",
        "/pools/{poolid}",
        "Pool '{poolid}' updated successfully.",
        PoolUpdateInput,
    ),
    action_tool(
        "pve_delete_pool",
        "Delete a resource pool (pool must be empty)",
        POOLS,
        AccessTier.FULL,
        "DELETE",
        "/pools/{poolid}",
        "Pool '{poolid}' deleted successfully.",
        PoolInput,
        destructive=True,
    ),
]
