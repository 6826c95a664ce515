"""Storage tools: list, status, content and CRUD for PVE storage backends."""

from __future__ import annotations

from pydantic import Field

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.tools.catalog._common import NodeInput, PveInput, action_tool, read_tool

STORAGE = ToolCategory.STORAGE


class StorageTypeFilterInput(PveInput):
    type: str | None = Field(
        default=None,
        description="Filter by storage type (e.g. dir, lvm, nfs, zfspool, cephfs)",
    )


class StorageInput(PveInput):
    storage: str = Field(description="The storage ID")


class NodeStorageListInput(NodeInput):
    content: str | None = Field(
        default=None,
        description="Filter by content type (e.g. images, rootdir, iso, vztmpl, backup)",
    )


class NodeStorageInput(NodeInput):
    storage: str = Field(description="The storage ID")


class StorageContentInput(NodeStorageInput):
    content: str | None = Field(
        default=None,
        description="Filter by content type (e.g. images, iso, vztmpl, backup, rootdir)",
    )


class StorageCreateInput(StorageInput):
    type: str = Field(description="Storage type (e.g. dir, lvm, nfs, zfspool, cifs, cephfs, rbd)")
    content: str | None = Field(
        default=None,
        description="Allowed content types, comma-separated (e.g. images,rootdir,iso)",
    )
    path: str | None = Field(default=None, description="Filesystem path (for dir, nfs types)")
    server: str | None = Field(
        default=None, description="Server address (for nfs, cifs, cephfs types)"
    )
    export: str | None = Field(default=None, description="NFS export path")
    vgname: str | None = Field(default=None, description="LVM volume group name")
    pool: str | None = Field(default=None, description="ZFS/Ceph pool name")
    nodes: str | None = Field(
        default=None, description="Comma-separated list of nodes where storage is available"
    )
    shared: bool | None = Field(
        default=None, description="Whether the storage is shared across nodes"
    )


class StorageUpdateInput(StorageInput):
    content: str | None = Field(default=None, description="Allowed content types, comma-separated")
    nodes: str | None = Field(
        default=None, description="Comma-separated list of nodes where storage is available"
    )
    shared: bool | None = Field(
        default=None, description="Whether the storage is shared across nodes"
    )
    disable: bool | None = Field(default=None, description="Disable the storage")


class StorageDeleteInput(PveInput):
    storage: str = Field(description="The storage ID to delete")


STORAGE_TOOLS = [
    # Read-only
    read_tool(
        "pve_list_storage",
        "List all configured storage backends in the cluster",
        STORAGE,
        "/storage",
        StorageTypeFilterInput,
        params=("type",),
    ),
    read_tool(
        "pve_get_storage_config",
        "Get the configuration of a specific storage backend",
        STORAGE,
        "/storage/{storage}",
        StorageInput,
    ),
    read_tool(
        "pve_list_node_storage",
        "List available storage on a specific node with usage information",
        STORAGE,
        "/nodes/{node}/storage",
        NodeStorageListInput,
        params=("content",),
    ),
    read_tool(
        "pve_get_storage_status",
        "Get the status and usage of a specific storage on a node",
        STORAGE,
        "/nodes/{node}/storage/{storage}/status",
        NodeStorageInput,
    ),
    read_tool(
        "pve_list_storage_content",
        "List the content (disk images, ISOs, templates, backups) of a specific storage on a node",
        STORAGE,
        "/nodes/{node}/storage/{storage}/content",
        StorageContentInput,
        params=("content",),
    ),
    # Full
    action_tool(
        "pve_create_storage",
        "Create a new storage backend in the cluster",
        STORAGE,
        AccessTier.FULL,
        "POST",
        "/storage",
        "Storage '{storage}' (type: {type}) created successfully.",
        StorageCreateInput,
    ),
    action_tool(
        "pve_update_storage",
        "Update the configuration of an existing storage backend",
        STORAGE,
        AccessTier.FULL,
        "PUT",
        "/storage/{storage}",
        "Storage '{storage}' updated successfully.",
        StorageUpdateInput,
    ),
    action_tool(
        "pve_delete_storage",
        "Delete a storage backend configuration from the cluster",
        STORAGE,
        AccessTier.FULL,
        "DELETE",
        "/storage/{storage}",
        "Storage '{storage}' deleted successfully.",
        StorageDeleteInput,
        destructive=True,
    ),
]
