"""Backup tools: scheduled backup jobs and on-demand vzdump runs."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.tools.catalog._common import NodeInput, PveInput, action_tool, read_tool

BACKUP = ToolCategory.BACKUP

BackupMode = Literal["snapshot", "suspend", "stop"]
Compression = Literal["0", "gzip", "lzo", "zstd"]
MailNotification = Literal["always", "failure"]


class BackupJobInput(PveInput):
    id: str = Field(description="The backup job ID")


class BackupOptions(PveInput):
    vmid: str | None = Field(
        default=None, description="Comma-separated list of VMIDs to back up (omit for all)"
    )
    storage: str | None = Field(default=None, description="Target storage for the backup")
    mode: BackupMode | None = Field(
        default=None, description="Backup mode (default: snapshot)"
    )
    compress: Compression | None = Field(default=None, description="Compression algorithm")
    mailnotification: MailNotification | None = Field(
        default=None, description="When to send email notification"
    )
    mailto: str | None = Field(
        default=None, description="Email address for backup notifications"
    )


class RunBackupInput(BackupOptions, NodeInput):
    pass


class BackupJobCreateInput(BackupOptions):
    schedule: str | None = Field(
        default=None,
        description="Backup schedule in cron-like format or PVE calendar event",
    )
    enabled: bool | None = Field(
        default=None, description="Enable the backup job (default: true)"
    )
    node: str | None = Field(default=None, description="Restrict to specific node")
    pool: str | None = Field(default=None, description="Backup all VMs in this pool")
    maxfiles: int | None = Field(
        default=None, description="Maximum number of backup files per VM (0 = unlimited)"
    )


BACKUP_TOOLS = [
    # Read-only
    read_tool(
        "pve_list_backup_jobs",
        "List all scheduled backup jobs in the cluster",
        BACKUP,
        "/cluster/backup",
    ),
    read_tool(
        "pve_get_backup_job",
        "Get the configuration of a specific backup job",
        BACKUP,
        "/cluster/backup/{id}",
        BackupJobInput,
    ),
    # Read-execute
    action_tool(
        "pve_run_backup",
        "Run an immediate backup (vzdump) of one or more VMs/containers on a node",
        BACKUP,
        AccessTier.READ_EXECUTE,
        "POST",
        "/nodes/{node}/vzdump",
        "Backup initiated on node {node}. Task: {task}",
        RunBackupInput,
    ),
    # Full
    action_tool(
        "pve_create_backup_job",
        "Create a new scheduled backup job",
        BACKUP,
        AccessTier.FULL,
        "POST",
        "/cluster/backup",
        "Backup job created successfully.",
        BackupJobCreateInput,
    ),
    action_tool(
        "pve_delete_backup_job",
        "Delete a scheduled backup job",
        BACKUP,
        AccessTier.FULL,
        "DELETE",
        "/cluster/backup/{id}",
        "Backup job '{id}' deleted successfully.",
        BackupJobInput,
        destructive=True,
    ),
]
