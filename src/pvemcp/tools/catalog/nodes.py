"""Node tools: status, info, services and service control for cluster nodes."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.tools.catalog._common import NodeInput, action_tool, read_tool

NODES = ToolCategory.NODES


class SyslogInput(NodeInput):
    start: int | None = Field(default=None, description="Start line number (default: 0)")
    limit: int | None = Field(
        default=None, description="Max number of log entries to return (default: 50)"
    )


class ServiceCommandInput(NodeInput):
    service: str = Field(description="The service name (e.g. pveproxy, pvedaemon)")
    command: Literal["start", "stop", "restart", "reload"] = Field(
        description="The action to perform on the service"
    )


NODE_TOOLS = [
    # Read-only
    read_tool("pve_list_nodes", "List all nodes in the Proxmox VE cluster", NODES, "/nodes"),
    read_tool(
        "pve_get_node_status",
        "Get detailed status of a specific node including CPU, memory, uptime, and load",
        NODES,
        "/nodes/{node}/status",
        NodeInput,
    ),
    read_tool(
        "pve_get_node_version",
        "Get the PVE version information for a specific node",
        NODES,
        "/nodes/{node}/version",
        NodeInput,
    ),
    read_tool(
        "pve_get_node_dns",
        "Get DNS settings for a specific node",
        NODES,
        "/nodes/{node}/dns",
        NodeInput,
    ),
    read_tool(
        "pve_get_node_time",
        "Get time and timezone information for a specific node",
        NODES,
        "/nodes/{node}/time",
        NodeInput,
    ),
    read_tool(
        "pve_get_node_syslog",
        "Get system log entries from a specific node",
        NODES,
        "/nodes/{node}/syslog",
        SyslogInput,
        params=("start", "limit"),
    ),
    read_tool(
        "pve_list_node_services",
        "List all system services and their status on a specific node",
        NODES,
        "/nodes/{node}/services",
        NodeInput,
    ),
    # Read-execute
    action_tool(
        "pve_manage_node_service",
        "Start, stop, restart, or reload a system service on a specific node",
        NODES,
        AccessTier.READ_EXECUTE,
        "POST",
        "/nodes/{node}/services/{service}/{command}",
        "Service {service} {command} initiated on node {node}. Task: {task}",
        ServiceCommandInput,
        send_body=False,
    ),
]
