"""Firewall tools: cluster-level firewall options, rules, aliases and IP sets."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.tools.catalog._common import PveInput, action_tool, read_tool

FIREWALL = ToolCategory.FIREWALL

Policy = Literal["ACCEPT", "REJECT", "DROP"]
RuleAction = Literal["ACCEPT", "DROP", "REJECT"]


class FirewallOptionsInput(PveInput):
    enable: bool | None = Field(
        default=None, description="Enable or disable the cluster firewall"
    )
    policy_in: Policy | None = Field(default=None, description="Default input policy")
    policy_out: Policy | None = Field(default=None, description="Default output policy")
    log_ratelimit: str | None = Field(
        default=None,
        description="Log rate limit (e.g. 'enable=1,rate=1/second,burst=5')",
    )


class RuleMatch(PveInput):
    source: str | None = Field(default=None, description="Source address/CIDR or alias")
    dest: str | None = Field(default=None, description="Destination address/CIDR or alias")
    proto: str | None = Field(default=None, description="Protocol (e.g. tcp, udp, icmp)")
    dport: str | None = Field(default=None, description="Destination port or port range")
    sport: str | None = Field(default=None, description="Source port or port range")
    comment: str | None = Field(default=None, description="Rule comment")


class RuleCreateInput(RuleMatch):
    action: RuleAction = Field(description="Rule action")
    type: Literal["in", "out", "group"] = Field(description="Rule type (direction)")
    enable: bool | None = Field(default=None, description="Enable the rule (default: true)")
    pos: int | None = Field(default=None, description="Position in the rule list (0-based)")


class RuleUpdateInput(RuleMatch):
    pos: int = Field(description="Rule position (0-based index)")
    action: RuleAction | None = Field(default=None, description="Rule action")
    enable: bool | None = Field(default=None, description="Enable or disable the rule")


class RulePositionInput(PveInput):
    pos: int = Field(description="Rule position (0-based index) to delete")


FIREWALL_TOOLS = [
    # Read-only
    read_tool(
        "pve_get_firewall_options",
        "Get the cluster-level firewall options",
        FIREWALL,
        "/cluster/firewall/options",
    ),
    read_tool(
        "pve_list_firewall_rules",
        "List all cluster-level firewall rules",
        FIREWALL,
        "/cluster/firewall/rules",
    ),
    read_tool(
        "pve_list_firewall_aliases",
        "List all cluster-level firewall aliases (named IP/CIDR entries)",
        FIREWALL,
        "/cluster/firewall/aliases",
    ),
    read_tool(
        "pve_list_firewall_ipsets",
        "List all cluster-level firewall IP sets",
        FIREWALL,
        "/cluster/firewall/ipset",
    ),
    # Full
    action_tool(
        "pve_update_firewall_options",
        "Update the cluster-level firewall options (e.g. enable/disable firewall)",
        FIREWALL,
        AccessTier.FULL,
        "PUT",
        "/cluster/firewall/options",
        "Cluster firewall options updated successfully.",
        FirewallOptionsInput,
    ),
    action_tool(
        "pve_create_firewall_rule",
        "Create a new cluster-level firewall rule",
        FIREWALL,
        AccessTier.FULL,
        "POST",
        "/cluster/firewall/rules",
        "Cluster firewall rule created successfully.",
        RuleCreateInput,
    ),
    action_tool(
        "pve_update_firewall_rule",
        "Update an existing cluster-level firewall rule by position",
        FIREWALL,
        AccessTier.FULL,
        "PUT",
        "/cluster/firewall/rules/{pos}",
        "Cluster firewall rule at position {pos} updated successfully.",
        RuleUpdateInput,
    ),
    action_tool(
        "pve_delete_firewall_rule",
        "Delete a cluster-level firewall rule by position",
        FIREWALL,
        AccessTier.FULL,
        "DELETE",
        "/cluster/firewall/rules/{pos}",
        "Cluster firewall rule at position {pos} deleted successfully.",
        RulePositionInput,
        destructive=True,
    ),
]
