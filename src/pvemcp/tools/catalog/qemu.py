"""QEMU VM tools: list, status, config, snapshots, power actions and lifecycle."""

from __future__ import annotations

from pydantic import Field

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.tools.catalog._common import (
    NodeInput,
    RrdTimeframe,
    VmInput,
    action_tool,
    query,
    read_tool,
    segment,
)
from pvemcp.tools.models import ToolAnnotations, ToolDefinition

QEMU = ToolCategory.QEMU

# (action, description prefix)
POWER_ACTIONS = [
    ("start", "Start"),
    ("stop", "Stop (immediate)"),
    ("shutdown", "Gracefully shut down"),
    ("reboot", "Reboot"),
    ("suspend", "Suspend"),
    ("resume", "Resume"),
    ("reset", "Reset (hard)"),
]


class VmRrdInput(VmInput):
    timeframe: RrdTimeframe = Field(description="Time frame for the RRD data")


class VmMigrateInput(VmInput):
    node: str = Field(description="The source node name")
    target: str = Field(description="The target node name")
    online: bool | None = Field(
        default=None, description="Perform an online (live) migration (default: false)"
    )


class VmCreateInput(VmInput):
    name: str | None = Field(default=None, description="VM name")
    memory: int | None = Field(default=None, description="Memory in MB (default: 512)")
    cores: int | None = Field(default=None, description="Number of CPU cores (default: 1)")
    sockets: int | None = Field(default=None, description="Number of CPU sockets (default: 1)")
    ostype: str | None = Field(default=None, description="OS type (e.g. l26, win10, other)")
    ide2: str | None = Field(
        default=None, description="IDE device config (e.g. local:iso/image.iso,media=cdrom)"
    )
    scsi0: str | None = Field(default=None, description="SCSI disk config (e.g. local-lvm:32)")
    net0: str | None = Field(default=None, description="Network config (e.g. virtio,bridge=vmbr0)")
    scsihw: str | None = Field(
        default=None, description="SCSI controller type (e.g. virtio-scsi-pci)"
    )
    boot: str | None = Field(default=None, description="Boot order (e.g. order=scsi0;ide2;net0)")
    start: bool | None = Field(default=None, description="Start VM after creation")


class VmDeleteInput(VmInput):
    purge: bool | None = Field(
        default=None,
        description="Remove from all related configurations (e.g. backup jobs, HA)",
    )
    destroy_unreferenced_disks: bool | None = Field(
        default=None,
        alias="destroy-unreferenced-disks",
        description="Delete unreferenced disks owned by the VM",
    )


class VmConfigInput(VmInput):
    name: str | None = Field(default=None, description="VM name")
    memory: int | None = Field(default=None, description="Memory in MB")
    cores: int | None = Field(default=None, description="Number of CPU cores")
    sockets: int | None = Field(default=None, description="Number of CPU sockets")
    description: str | None = Field(default=None, description="VM description")
    onboot: bool | None = Field(default=None, description="Start on boot")
    net0: str | None = Field(default=None, description="Network device config")
    scsi0: str | None = Field(default=None, description="SCSI disk config")


class VmCloneInput(VmInput):
    node: str = Field(description="The source node name")
    vmid: int = Field(description="The source VM ID")
    newid: int = Field(description="The new VM ID for the clone")
    name: str | None = Field(default=None, description="Name for the cloned VM")
    target: str | None = Field(
        default=None, description="Target node for the clone (default: same node)"
    )
    full: bool | None = Field(
        default=None, description="Full clone (true) or linked clone (false)"
    )
    description: str | None = Field(default=None, description="Description for the cloned VM")
    snapname: str | None = Field(default=None, description="Snapshot name to clone from")
    storage: str | None = Field(default=None, description="Target storage for full clone")


class VmSnapshotCreateInput(VmInput):
    snapname: str = Field(description="Name for the snapshot")
    description: str | None = Field(default=None, description="Description for the snapshot")
    vmstate: bool | None = Field(default=None, description="Include VM RAM state in snapshot")


class VmSnapshotDeleteInput(VmInput):
    snapname: str = Field(description="Name of the snapshot to delete")


class VmSnapshotRollbackInput(VmInput):
    snapname: str = Field(description="Name of the snapshot to rollback to")


async def _delete_vm(client, args: VmDeleteInput) -> str:
    # PVE only looks at these flags when set, so false values are left out.
    qs = query({
        "purge": True if args.purge else None,
        "destroy-unreferenced-disks": True if args.destroy_unreferenced_disks else None,
    })
    data = await client.delete(f"/nodes/{segment(args.node)}/qemu/{args.vmid}{qs}")
    return f"VM {args.vmid} deletion initiated on node {args.node}. Task: {data}"


def _power_tool(action: str, description: str) -> ToolDefinition:
    return action_tool(
        f"pve_{action}_qemu_vm",
        f"{description} a QEMU virtual machine",
        QEMU,
        AccessTier.READ_EXECUTE,
        "POST",
        f"/nodes/{{node}}/qemu/{{vmid}}/status/{action}",
        f"VM {{vmid}} {action} initiated on node {{node}}. Task: {{task}}",
        VmInput,
        send_body=False,
    )


QEMU_TOOLS = [
    # Read-only
    read_tool(
        "pve_list_qemu_vms",
        "List all QEMU virtual machines on a specific node",
        QEMU,
        "/nodes/{node}/qemu",
        NodeInput,
    ),
    read_tool(
        "pve_get_qemu_status",
        "Get the current status of a QEMU VM including CPU, memory, disk, and network usage",
        QEMU,
        "/nodes/{node}/qemu/{vmid}/status/current",
        VmInput,
    ),
    read_tool(
        "pve_get_qemu_config",
        "Get the configuration of a QEMU VM",
        QEMU,
        "/nodes/{node}/qemu/{vmid}/config",
        VmInput,
    ),
    read_tool(
        "pve_get_qemu_rrddata",
        "Get RRD statistics (CPU, memory, disk, network) for a QEMU VM over a time period",
        QEMU,
        "/nodes/{node}/qemu/{vmid}/rrddata",
        VmRrdInput,
        params=("timeframe",),
    ),
    read_tool(
        "pve_list_qemu_snapshots",
        "List all snapshots of a QEMU VM",
        QEMU,
        "/nodes/{node}/qemu/{vmid}/snapshot",
        VmInput,
    ),
    # Read-execute
    *[_power_tool(action, description) for action, description in POWER_ACTIONS],
    action_tool(
        "pve_migrate_qemu_vm",
        "Migrate a QEMU VM to another node in the cluster",
        QEMU,
        AccessTier.READ_EXECUTE,
        "POST",
        "/nodes/{node}/qemu/{vmid}/migrate",
        "VM {vmid} migration to {target} initiated. Task: {task}",
        VmMigrateInput,
    ),
    # Full
    action_tool(
        "pve_create_qemu_vm",
        "Create a new QEMU virtual machine",
        QEMU,
        AccessTier.FULL,
        "POST",
        "/nodes/{node}/qemu",
        "VM {vmid} creation initiated on node {node}. Task: {task}",
        VmCreateInput,
    ),
    ToolDefinition(
        name="pve_delete_qemu_vm",
        description="Delete a QEMU virtual machine and all its data. The VM must be stopped first.",
        tier=AccessTier.FULL,
        category=QEMU,
        handler=_delete_vm,
        input_model=VmDeleteInput,
        annotations=ToolAnnotations(destructive=True),
    ),
    action_tool(
        "pve_update_qemu_config",
        "Update the configuration of a QEMU VM",
        QEMU,
        AccessTier.FULL,
        "PUT",
        "/nodes/{node}/qemu/{vmid}/config",
        "VM {vmid} configuration updated on node {node}.",
        VmConfigInput,
    ),
    action_tool(
        "pve_clone_qemu_vm",
        "Clone a QEMU VM to create a new VM from it",
        QEMU,
        AccessTier.FULL,
        "POST",
        "/nodes/{node}/qemu/{vmid}/clone",
        "VM {vmid} clone to VMID {newid} initiated. Task: {task}",
        VmCloneInput,
    ),
    action_tool(
        "pve_create_qemu_snapshot",
        "Create a snapshot of a QEMU VM",
        QEMU,
        AccessTier.FULL,
        "POST",
        "/nodes/{node}/qemu/{vmid}/snapshot",
        "Snapshot '{snapname}' creation initiated for VM {vmid}. Task: {task}",
        VmSnapshotCreateInput,
    ),
    action_tool(
        "pve_delete_qemu_snapshot",
        "Delete a snapshot of a QEMU VM",
        QEMU,
        AccessTier.FULL,
        "DELETE",
        "/nodes/{node}/qemu/{vmid}/snapshot/{snapname}",
        "Snapshot '{snapname}' deletion initiated for VM {vmid}. Task: {task}",
        VmSnapshotDeleteInput,
        destructive=True,
    ),
    action_tool(
        "pve_rollback_qemu_snapshot",
        "Rollback a QEMU VM to a previous snapshot state",
        QEMU,
        AccessTier.FULL,
        "POST",
        "/nodes/{node}/qemu/{vmid}/snapshot/{snapname}/rollback",
        "Rollback to snapshot '{snapname}' initiated for VM {vmid}. Task: {task}",
        VmSnapshotRollbackInput,
        send_body=False,
        destructive=True,
    ),
]
