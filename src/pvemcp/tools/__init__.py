"""
pvemcp Tool System

Every PVE operation is a tool. Tools are declared in the catalog and
pass through the registry before the MCP layer can see them:

    Catalog → ToolRegistry (tier + category gate) → MCP list_tools / call_tool

Components:
- ToolDefinition: static description of a tool plus its async handler
- ToolRegistry: admits definitions and wraps handlers with validation,
  error capture and output sanitizing
- ALL_TOOLS: the full catalog across every category
"""

from pvemcp.tools.catalog import ALL_TOOLS, register_all_tools
from pvemcp.tools.models import NoInput, ToolAnnotations, ToolDefinition, ToolResult
from pvemcp.tools.registry import RegisteredTool, ToolRegistry, admit

__all__ = [
    "ALL_TOOLS",
    "NoInput",
    "RegisteredTool",
    "ToolAnnotations",
    "ToolDefinition",
    "ToolRegistry",
    "ToolResult",
    "admit",
    "register_all_tools",
]
