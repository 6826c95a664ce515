"""LXC container tools: list, status, config, snapshots, power actions and lifecycle."""

from __future__ import annotations

from pydantic import Field

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.tools.catalog._common import (
    ContainerInput,
    NodeInput,
    RrdTimeframe,
    action_tool,
    query,
    read_tool,
    segment,
)
from pvemcp.tools.models import ToolAnnotations, ToolDefinition

LXC = ToolCategory.LXC

POWER_ACTIONS = [
    ("start", "Start"),
    ("stop", "Stop (immediate)"),
    ("shutdown", "Gracefully shut down"),
    ("reboot", "Reboot"),
    ("suspend", "Suspend (freeze)"),
    ("resume", "Resume (unfreeze)"),
]


class ContainerRrdInput(ContainerInput):
    timeframe: RrdTimeframe = Field(description="Time frame for the RRD data")


class ContainerCreateInput(ContainerInput):
    ostemplate: str = Field(
        description="OS template (e.g. local:vztmpl/debian-12-standard_12.2-1_amd64.tar.zst)"
    )
    hostname: str | None = Field(default=None, description="Container hostname")
    memory: int | None = Field(default=None, description="Memory in MB (default: 512)")
    swap: int | None = Field(default=None, description="Swap size in MB (default: 512)")
    cores: int | None = Field(default=None, description="Number of CPU cores (default: 1)")
    rootfs: str | None = Field(
        default=None, description="Root filesystem config (e.g. local-lvm:8)"
    )
    net0: str | None = Field(
        default=None, description="Network config (e.g. name=eth0,bridge=vmbr0,ip=dhcp)"
    )
    password: str | None = Field(default=None, description="Root password for the container")
    unprivileged: bool | None = Field(
        default=None, description="Create as unprivileged container (default: false)"
    )
    start: bool | None = Field(default=None, description="Start container after creation")
    ssh_public_keys: str | None = Field(
        default=None,
        serialization_alias="ssh-public-keys",
        description="SSH public keys to add to the container",
    )
    storage: str | None = Field(default=None, description="Target storage for rootfs")


class ContainerDeleteInput(ContainerInput):
    purge: bool | None = Field(
        default=None,
        description="Remove from all related configurations (e.g. backup jobs, HA)",
    )
    force: bool | None = Field(default=None, description="Force destruction even if running")
    destroy_unreferenced_disks: bool | None = Field(
        default=None,
        alias="destroy-unreferenced-disks",
        description="Delete unreferenced disks owned by the container",
    )


class ContainerConfigInput(ContainerInput):
    hostname: str | None = Field(default=None, description="Container hostname")
    memory: int | None = Field(default=None, description="Memory in MB")
    swap: int | None = Field(default=None, description="Swap size in MB")
    cores: int | None = Field(default=None, description="Number of CPU cores")
    description: str | None = Field(default=None, description="Container description")
    onboot: bool | None = Field(default=None, description="Start on boot")
    net0: str | None = Field(default=None, description="Network device config")


class ContainerCloneInput(ContainerInput):
    node: str = Field(description="The source node name")
    vmid: int = Field(description="The source container ID")
    newid: int = Field(description="The new container ID for the clone")
    hostname: str | None = Field(default=None, description="Hostname for the cloned container")
    target: str | None = Field(
        default=None, description="Target node for the clone (default: same node)"
    )
    full: bool | None = Field(
        default=None, description="Full clone (true) or linked clone (false)"
    )
    description: str | None = Field(
        default=None, description="Description for the cloned container"
    )
    snapname: str | None = Field(default=None, description="Snapshot name to clone from")
    storage: str | None = Field(default=None, description="Target storage for full clone")


class ContainerSnapshotCreateInput(ContainerInput):
    snapname: str = Field(description="Name for the snapshot")
    description: str | None = Field(default=None, description="Description for the snapshot")


class ContainerSnapshotDeleteInput(ContainerInput):
    snapname: str = Field(description="Name of the snapshot to delete")


class ContainerSnapshotRollbackInput(ContainerInput):
    snapname: str = Field(description="Name of the snapshot to rollback to")


async def _delete_container(client, args: ContainerDeleteInput) -> str:
    qs = query({
        "purge": True if args.purge else None,
        "force": True if args.force else None,
        "destroy-unreferenced-disks": True if args.destroy_unreferenced_disks else None,
    })
    data = await client.delete(f"/nodes/{segment(args.node)}/lxc/{args.vmid}{qs}")
    return f"Container {args.vmid} deletion initiated on node {args.node}. Task: {data}"


def _power_tool(action: str, description: str) -> ToolDefinition:
    return action_tool(
        f"pve_{action}_lxc_container",
        f"{description} an LXC container",
        LXC,
        AccessTier.READ_EXECUTE,
        "POST",
        f"/nodes/{{node}}/lxc/{{vmid}}/status/{action}",
        f"Container {{vmid}} {action} initiated on node {{node}}. Task: {{task}}",
        ContainerInput,
        send_body=False,
    )


LXC_TOOLS = [
    # Read-only
    read_tool(
        "pve_list_lxc_containers",
        "List all LXC containers on a specific node",
        LXC,
        "/nodes/{node}/lxc",
        NodeInput,
    ),
    read_tool(
        "pve_get_lxc_status",
        "Get the current status of an LXC container including CPU, memory, and disk usage",
        LXC,
        "/nodes/{node}/lxc/{vmid}/status/current",
        ContainerInput,
    ),
    read_tool(
        "pve_get_lxc_config",
        "Get the configuration of an LXC container",
        LXC,
        "/nodes/{node}/lxc/{vmid}/config",
        ContainerInput,
    ),
    read_tool(
        "pve_get_lxc_rrddata",
        "Get RRD statistics (CPU, memory, disk, network) for an LXC container over a time period",
        LXC,
        "/nodes/{node}/lxc/{vmid}/rrddata",
        ContainerRrdInput,
        params=("timeframe",),
    ),
    read_tool(
        "pve_list_lxc_snapshots",
        "List all snapshots of an LXC container",
        LXC,
        "/nodes/{node}/lxc/{vmid}/snapshot",
        ContainerInput,
    ),
    # Read-execute
    *[_power_tool(action, description) for action, description in POWER_ACTIONS],
    # Full
    action_tool(
        "pve_create_lxc_container",
        "Create a new LXC container",
        LXC,
        AccessTier.FULL,
        "POST",
        "/nodes/{node}/lxc",
        "Container {vmid} creation initiated on node {node}. Task: {task}",
        ContainerCreateInput,
    ),
    ToolDefinition(
        name="pve_delete_lxc_container",
        description=(
            "Delete an LXC container and all its data. The container must be stopped first."
        ),
        tier=AccessTier.FULL,
        category=LXC,
        handler=_delete_container,
        input_model=ContainerDeleteInput,
        annotations=ToolAnnotations(destructive=True),
    ),
    action_tool(
        "pve_update_lxc_config",
        "Update the configuration of an LXC container",
        LXC,
        AccessTier.FULL,
        "PUT",
        "/nodes/{node}/lxc/{vmid}/config",
        "Container {vmid} configuration updated on node {node}.",
        ContainerConfigInput,
    ),
    action_tool(
        "pve_clone_lxc_container",
        "Clone an LXC container to create a new container from it",
        LXC,
        AccessTier.FULL,
        "POST",
        "/nodes/{node}/lxc/{vmid}/clone",
        "Container {vmid} clone to ID {newid} initiated. Task: {task}",
        ContainerCloneInput,
    ),
    action_tool(
        "pve_create_lxc_snapshot",
        "Create a snapshot of an LXC container",
        LXC,
        AccessTier.FULL,
        "POST",
        "/nodes/{node}/lxc/{vmid}/snapshot",
        "Snapshot '{snapname}' creation initiated for container {vmid}. Task: {task}",
        ContainerSnapshotCreateInput,
    ),
    action_tool(
        "pve_delete_lxc_snapshot",
        "Delete a snapshot of an LXC container",
        LXC,
        AccessTier.FULL,
        "DELETE",
        "/nodes/{node}/lxc/{vmid}/snapshot/{snapname}",
        "Snapshot '{snapname}' deletion initiated for container {vmid}. Task: {task}",
        ContainerSnapshotDeleteInput,
        destructive=True,
    ),
    action_tool(
        "pve_rollback_lxc_snapshot",
        "Rollback an LXC container to a previous snapshot state",
        LXC,
        AccessTier.FULL,
        "POST",
        "/nodes/{node}/lxc/{vmid}/snapshot/{snapname}/rollback",
        "Rollback to snapshot '{snapname}' initiated for container {vmid}. Task: {task}",
        ContainerSnapshotRollbackInput,
        send_body=False,
        destructive=True,
    ),
]
