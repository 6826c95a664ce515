"""
pvemcp Custom Exceptions

Structured exception hierarchy for the Proxmox VE MCP server.
All pvemcp-specific exceptions inherit from PveMcpError.

Exception hierarchy:
    PveMcpError
    +-- ConfigError                 (missing or invalid settings, fatal at startup)
    +-- PveError                    (backend call failed, optional HTTP status)
    |   +-- PveAuthenticationError  (401/403 from the backend)
    |   +-- PveConnectionError      (network failure or request timeout)
    +-- ToolInputError              (arguments rejected by a tool's input contract)
    +-- ToolExecutionError          (a tool call ended in an error result)

PveError messages are sanitized at construction, so an instance can be
logged or returned to a caller without further scrubbing.
"""

from __future__ import annotations

from pvemcp.sanitizer import sanitize


class PveMcpError(Exception):
    """Base exception for all pvemcp errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class ConfigError(PveMcpError):
    """Raised when required configuration is missing or invalid.

    Messages name environment variables only, never their values.
    """

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message, details={"missing": missing or []})
        self.missing = missing or []


class PveError(PveMcpError):
    """Raised when a Proxmox VE API call fails.

    Carries the HTTP status code when the backend answered at all.
    """

    def __init__(self, message: str, status_code: int | None = None, details: dict | None = None):
        super().__init__(
            sanitize(message),
            details={"status_code": status_code, **(details or {})},
        )
        self.status_code = status_code


class PveAuthenticationError(PveError):
    """Raised when the backend rejects the API token (401/403)."""

    pass


class PveConnectionError(PveError):
    """Raised when the backend is unreachable or the request timed out."""

    pass


class ToolInputError(PveMcpError):
    """Raised when tool arguments fail validation against the input model."""

    def __init__(self, tool_name: str, message: str, details: dict | None = None):
        super().__init__(
            f"Invalid input for tool '{tool_name}': {message}",
            details={"tool_name": tool_name, **(details or {})},
        )
        self.tool_name = tool_name


class ToolExecutionError(PveMcpError):
    """Raised toward the MCP layer when a tool call produced an error result.

    The message is the already-sanitized error text from the registry.
    """

    def __init__(self, tool_name: str, message: str):
        super().__init__(message, details={"tool_name": tool_name})
        self.tool_name = tool_name
