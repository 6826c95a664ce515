"""
pvemcp: Proxmox VE tools over the Model Context Protocol

Usage:
    from pvemcp.config import load_config
    from pvemcp.client import create_client
    from pvemcp.tools import ToolRegistry, register_all_tools

    config = load_config()
    client = create_client(config)
    registry = ToolRegistry(client, config.access_tier, config.categories)
    register_all_tools(registry)

Or just run `pvemcp` with PVE_BASE_URL, PVE_TOKEN_ID and PVE_TOKEN_SECRET set.
"""

__version__ = "1.0.0"

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.exceptions import (
    ConfigError,
    PveAuthenticationError,
    PveConnectionError,
    PveError,
    PveMcpError,
    ToolExecutionError,
    ToolInputError,
)

__all__ = [
    "__version__",
    # Models
    "AccessTier",
    "ToolCategory",
    # Exceptions
    "ConfigError",
    "PveAuthenticationError",
    "PveConnectionError",
    "PveError",
    "PveMcpError",
    "ToolExecutionError",
    "ToolInputError",
]
