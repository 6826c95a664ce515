"""HA tools: high-availability resource management."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.tools.catalog._common import PveInput, action_tool, read_tool

HA = ToolCategory.HA

HaState = Literal["started", "stopped", "enabled", "disabled", "ignored"]


class HaListInput(PveInput):
    type: Literal["vm", "ct"] | None = Field(default=None, description="Filter by resource type")


class HaResourceInput(PveInput):
    sid: str = Field(description="The HA resource SID (e.g. vm:100, ct:200)")


class HaResourceSettings(HaResourceInput):
    group: str | None = Field(default=None, description="HA group name")
    max_relocate: int | None = Field(
        default=None, description="Maximum number of relocate attempts (default: 1)"
    )
    max_restart: int | None = Field(
        default=None, description="Maximum number of restart attempts (default: 1)"
    )
    state: HaState | None = Field(
        default=None, description="Requested HA state (default: started)"
    )
    comment: str | None = Field(default=None, description="Resource comment")


HA_TOOLS = [
    # Read-only
    read_tool(
        "pve_list_ha_resources",
        "List all HA-managed resources in the cluster",
        HA,
        "/cluster/ha/resources",
        HaListInput,
        params=("type",),
    ),
    read_tool(
        "pve_get_ha_resource",
        "Get the HA configuration for a specific resource. SID format: type:vmid (e.g. vm:100)",
        HA,
        "/cluster/ha/resources/{sid}",
        HaResourceInput,
    ),
    # Full
    action_tool(
        "pve_create_ha_resource",
        "Add a VM or container to HA management. SID format: type:vmid (e.g. vm:100)",
        HA,
        AccessTier.FULL,
        "POST",
        "/cluster/ha/resources",
        "HA resource '{sid}' created successfully.",
        HaResourceSettings,
    ),
    action_tool(
        "pve_update_ha_resource",
        "Update the HA configuration for an existing managed resource",
        HA,
        AccessTier.FULL,
        "PUT",
        "/cluster/ha/resources/{sid}",
        "HA resource '{sid}' updated successfully.",
        HaResourceSettings,
    ),
    action_tool(
        "pve_delete_ha_resource",
        "Remove a VM or container from HA management (does not delete the VM/container itself)",
        HA,
        AccessTier.FULL,
        "DELETE",
        "/cluster/ha/resources/{sid}",
        "HA resource '{sid}' removed from HA management.",
        HaResourceInput,
        destructive=True,
    ),
]
