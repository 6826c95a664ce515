"""
pvemcp Tool Catalog

Every tool the server knows about, grouped by category. The catalog is
static data: which of these a process actually exposes is decided by the
registry from the configured tier and categories.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pvemcp.tools.catalog.access import ACCESS_TOOLS
from pvemcp.tools.catalog.backup import BACKUP_TOOLS
from pvemcp.tools.catalog.cluster import CLUSTER_TOOLS
from pvemcp.tools.catalog.firewall import FIREWALL_TOOLS
from pvemcp.tools.catalog.ha import HA_TOOLS
from pvemcp.tools.catalog.lxc import LXC_TOOLS
from pvemcp.tools.catalog.network import NETWORK_TOOLS
from pvemcp.tools.catalog.nodes import NODE_TOOLS
from pvemcp.tools.catalog.pools import POOL_TOOLS
from pvemcp.tools.catalog.qemu import QEMU_TOOLS
from pvemcp.tools.catalog.storage import STORAGE_TOOLS
from pvemcp.tools.catalog.tasks import TASK_TOOLS
from pvemcp.tools.models import ToolDefinition

if TYPE_CHECKING:
    from pvemcp.tools.registry import ToolRegistry

ALL_TOOLS: list[ToolDefinition] = [
    *NODE_TOOLS,
    *QEMU_TOOLS,
    *LXC_TOOLS,
    *STORAGE_TOOLS,
    *CLUSTER_TOOLS,
    *ACCESS_TOOLS,
    *POOL_TOOLS,
    *NETWORK_TOOLS,
    *FIREWALL_TOOLS,
    *BACKUP_TOOLS,
    *TASK_TOOLS,
    *HA_TOOLS,
]


def register_all_tools(registry: ToolRegistry) -> int:
    """Walk the whole catalog through the registry once.

    Returns the number of tools admitted.
    """
    return registry.register_all(ALL_TOOLS)


__all__ = ["ALL_TOOLS", "register_all_tools"]
