"""
pvemcp Configuration

Reads the process environment into an immutable AppConfig.

Required: PVE_BASE_URL, PVE_TOKEN_ID, PVE_TOKEN_SECRET
Optional: PVE_ACCESS_TIER (default: full), PVE_CATEGORIES,
          PVE_VERIFY_SSL (default: true), MCP_TRANSPORT (default: stdio),
          MCP_HOST, MCP_PORT, DEBUG
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pvemcp.core.models import VALID_CATEGORIES, AccessTier
from pvemcp.exceptions import ConfigError
from pvemcp.logging import get_logger

logger = get_logger("pvemcp.config")

REQUIRED_VARS = ("PVE_BASE_URL", "PVE_TOKEN_ID", "PVE_TOKEN_SECRET")


class AppConfig(BaseModel):
    """Validated process configuration. Frozen for the process lifetime."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    token_id: str
    token_secret: str = Field(repr=False)
    access_tier: AccessTier = AccessTier.FULL
    categories: tuple[str, ...] | None = None
    verify_ssl: bool = True
    transport: Literal["stdio", "http"] = "stdio"
    http_host: str = "127.0.0.1"
    http_port: int = Field(default=3000, ge=1, le=65535)
    debug: bool = False


def parse_access_tier(value: str | None) -> AccessTier:
    """Map PVE_ACCESS_TIER to a tier. Anything unrecognised means full."""
    if value == AccessTier.READ_ONLY.value:
        return AccessTier.READ_ONLY
    if value == AccessTier.READ_EXECUTE.value:
        return AccessTier.READ_EXECUTE
    return AccessTier.FULL


def parse_categories(value: str | None) -> tuple[str, ...] | None:
    """Parse a comma-separated category allow-list.

    Unknown names are dropped with a warning. Returns None (no filter)
    when nothing valid remains.
    """
    if not value:
        return None
    categories = [c.strip() for c in value.split(",") if c.strip()]

    invalid = [c for c in categories if c not in VALID_CATEGORIES]
    if invalid:
        logger.warning(
            "Ignoring unknown categories: %s. Valid: %s",
            ", ".join(invalid),
            ", ".join(VALID_CATEGORIES),
        )

    valid = tuple(c for c in categories if c in VALID_CATEGORIES)
    return valid or None


def load_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    """Load and validate configuration from environment variables.

    Raises ConfigError naming the missing variables. Values are never
    included in the message.
    """
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_VARS if not env.get(name)]
    if missing:
        raise ConfigError(
            f"Missing required environment variables: {', '.join(missing)}. "
            "Set these variables to connect to your Proxmox VE instance.",
            missing=missing,
        )

    transport = env.get("MCP_TRANSPORT", "stdio") or "stdio"
    if transport not in ("stdio", "http"):
        raise ConfigError(f"Invalid MCP_TRANSPORT '{transport}'. Use 'stdio' or 'http'.")

    port_raw = env.get("MCP_PORT", "3000") or "3000"
    try:
        port = int(port_raw)
    except ValueError:
        raise ConfigError(f"Invalid MCP_PORT '{port_raw}': must be an integer") from None

    try:
        return AppConfig(
            base_url=env["PVE_BASE_URL"].rstrip("/"),
            token_id=env["PVE_TOKEN_ID"],
            token_secret=env["PVE_TOKEN_SECRET"],
            access_tier=parse_access_tier(env.get("PVE_ACCESS_TIER")),
            categories=parse_categories(env.get("PVE_CATEGORIES")),
            verify_ssl=env.get("PVE_VERIFY_SSL") != "false",
            transport=transport,
            http_host=env.get("MCP_HOST") or "127.0.0.1",
            http_port=port,
            debug=bool(env.get("DEBUG")),
        )
    except ValidationError as e:
        # Only field locations are reported; pydantic's message could echo values.
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ConfigError(f"Invalid configuration for: {fields}") from None
