"""Network tools: list, get and CRUD for node network interfaces."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.tools.catalog._common import NodeInput, action_tool, read_tool

NETWORK = ToolCategory.NETWORK

InterfaceType = Literal[
    "bridge", "bond", "eth", "alias", "vlan",
    "OVSBridge", "OVSBond", "OVSPort", "OVSIntPort",
]
InterfaceTypeFilter = Literal[
    "bridge", "bond", "eth", "alias", "vlan",
    "OVSBridge", "OVSBond", "OVSPort", "OVSIntPort",
    "any_bridge", "any_local_bridge",
]

RELOAD_HINT = "Apply changes with a node network reload."


class NetworkListInput(NodeInput):
    type: InterfaceTypeFilter | None = Field(
        default=None, description="Filter by interface type"
    )


class InterfaceInput(NodeInput):
    iface: str = Field(description="The interface name (e.g. vmbr0, eth0)")


class InterfaceSettings(InterfaceInput):
    type: InterfaceType = Field(description="Interface type")
    address: str | None = Field(
        default=None, description="IPv4 address (CIDR notation or plain)"
    )
    netmask: str | None = Field(default=None, description="IPv4 netmask")
    gateway: str | None = Field(default=None, description="Default gateway")
    bridge_ports: str | None = Field(default=None, description="Bridge ports (e.g. eno1)")
    bridge_vlan_aware: bool | None = Field(
        default=None, description="Enable VLAN awareness on bridge"
    )
    autostart: bool | None = Field(
        default=None, description="Automatically start interface on boot"
    )
    comments: str | None = Field(default=None, description="Comments for the interface")


NETWORK_TOOLS = [
    # Read-only
    read_tool(
        "pve_list_networks",
        "List all network interfaces on a specific node",
        NETWORK,
        "/nodes/{node}/network",
        NetworkListInput,
        params=("type",),
    ),
    read_tool(
        "pve_get_network",
        "Get the configuration of a specific network interface on a node",
        NETWORK,
        "/nodes/{node}/network/{iface}",
        InterfaceInput,
    ),
    # Full
    action_tool(
        "pve_create_network",
        "Create a new network interface on a node",
        NETWORK,
        AccessTier.FULL,
        "POST",
        "/nodes/{node}/network",
        f"Network interface '{{iface}}' created on node {{node}}. {RELOAD_HINT}",
        InterfaceSettings,
    ),
    action_tool(
        "pve_update_network",
        "Update the configuration of a network interface on a node",
        NETWORK,
        AccessTier.FULL,
        "PUT",
        "/nodes/{node}/network/{iface}",
        f"Network interface '{{iface}}' updated on node {{node}}. {RELOAD_HINT}",
        InterfaceSettings,
    ),
    action_tool(
        "pve_delete_network",
        "Delete a network interface configuration on a node",
        NETWORK,
        AccessTier.FULL,
        "DELETE",
        "/nodes/{node}/network/{iface}",
        f"Network interface '{{iface}}' deleted on node {{node}}. {RELOAD_HINT}",
        InterfaceInput,
        destructive=True,
    ),
]
