"""
pvemcp Core Data Models

Shared enums used by configuration, the tool gate and the catalog.
This module must have no internal dependencies.
"""

from enum import Enum


# ─── Enums ───────────────────────────────────────────────────

class AccessTier(str, Enum):
    """Trust tier controlling which tools are registered at startup.

    Totally ordered: READ_ONLY < READ_EXECUTE < FULL. A process running at
    tier T exposes every tool whose minimum tier is <= T.
    """
    READ_ONLY = "read-only"
    READ_EXECUTE = "read-execute"
    FULL = "full"

    @property
    def level(self) -> int:
        return _TIER_LEVELS[self]

    def allows(self, required: "AccessTier") -> bool:
        """True when a process at this tier may use a tool requiring `required`."""
        return required.level <= self.level


_TIER_LEVELS = {
    AccessTier.READ_ONLY: 0,
    AccessTier.READ_EXECUTE: 1,
    AccessTier.FULL: 2,
}


class ToolCategory(str, Enum):
    """Tool categories, one per Proxmox VE API area."""
    NODES = "nodes"
    QEMU = "qemu"
    LXC = "lxc"
    STORAGE = "storage"
    CLUSTER = "cluster"
    ACCESS = "access"
    POOLS = "pools"
    NETWORK = "network"
    FIREWALL = "firewall"
    BACKUP = "backup"
    TASKS = "tasks"
    HA = "ha"


VALID_CATEGORIES: list[str] = [c.value for c in ToolCategory]
