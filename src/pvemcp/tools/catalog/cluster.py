"""Cluster tools: status, resources, options and cluster-wide information."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.tools.catalog._common import PveInput, action_tool, read_tool
from pvemcp.tools.models import NoInput, ToolDefinition

CLUSTER = ToolCategory.CLUSTER


class ResourceFilterInput(PveInput):
    type: Literal["vm", "storage", "node", "sdn"] | None = Field(
        default=None, description="Filter by resource type"
    )


class ClusterLogInput(PveInput):
    max: int | None = Field(default=None, description="Maximum number of log entries to return")


class ClusterOptionsInput(PveInput):
    keyboard: str | None = Field(default=None, description="Default keyboard layout for VNC")
    language: str | None = Field(default=None, description="Default GUI language")
    console: Literal["applet", "vv", "html5", "xtermjs"] | None = Field(
        default=None, description="Default console viewer"
    )
    http_proxy: str | None = Field(default=None, description="HTTP proxy configuration")
    migration_unsecure: bool | None = Field(
        default=None, description="Allow insecure migration"
    )


async def _next_vmid(client, args: NoInput) -> str:
    data = await client.get("/cluster/nextid")
    return f"Next available VMID: {data}"


CLUSTER_TOOLS = [
    # Read-only
    read_tool(
        "pve_get_cluster_status",
        "Get the current cluster status including node membership and quorum",
        CLUSTER,
        "/cluster/status",
    ),
    read_tool(
        "pve_list_cluster_resources",
        "List all cluster resources (VMs, containers, storage, nodes) with optional type filter",
        CLUSTER,
        "/cluster/resources",
        ResourceFilterInput,
        params=("type",),
    ),
    ToolDefinition(
        name="pve_get_next_vmid",
        description="Get the next available VMID in the cluster",
        tier=AccessTier.READ_ONLY,
        category=CLUSTER,
        handler=_next_vmid,
    ),
    read_tool(
        "pve_get_cluster_log",
        "Get recent cluster log entries",
        CLUSTER,
        "/cluster/log",
        ClusterLogInput,
        params=("max",),
    ),
    read_tool(
        "pve_get_cluster_options",
        "Get cluster-wide datacenter options",
        CLUSTER,
        "/cluster/options",
    ),
    read_tool(
        "pve_list_cluster_backup_info",
        "List guests that are not covered by any backup job",
        CLUSTER,
        "/cluster/backup-info/not-backed-up",
    ),
    read_tool(
        "pve_get_cluster_ha_status",
        "Get the current HA manager status",
        CLUSTER,
        "/cluster/ha/status/current",
    ),
    read_tool(
        "pve_list_cluster_replication",
        "List all replication jobs in the cluster",
        CLUSTER,
        "/cluster/replication",
    ),
    # Full
    action_tool(
        "pve_update_cluster_options",
        "Update cluster-wide datacenter options",
        CLUSTER,
        AccessTier.FULL,
        "PUT",
        "/cluster/options",
        "Cluster options updated successfully.",
        ClusterOptionsInput,
    ),
]
