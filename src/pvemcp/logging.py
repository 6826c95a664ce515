"""
pvemcp Structured Logging

Provides a configured logger for pvemcp using stdlib logging with
structured context.

All output goes to stderr. stdout carries the MCP JSON-RPC stream when
the stdio transport is active, so nothing may ever be printed there.
Every formatted line is passed through the sanitizer before it is written.

Usage:
    from pvemcp.logging import get_logger

    logger = get_logger("pvemcp.client")
    logger.info("Request sent", extra={"method": "GET", "path": "/nodes"})

For production, configure with JSON output:
    from pvemcp.logging import configure_logging
    configure_logging(json_output=True, level="INFO")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from pvemcp.sanitizer import sanitize

_EXTRA_KEYS = (
    "tool_name",
    "category",
    "tier",
    "method",
    "path",
    "status_code",
    "duration_ms",
)


class PveFormatter(logging.Formatter):
    """Structured, sanitizing log formatter.

    Outputs either human-readable or JSON format depending on configuration.
    """

    def __init__(self, json_output: bool = False):
        super().__init__()
        self._json_output = json_output

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in _EXTRA_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if self._json_output:
            return sanitize(json.dumps(log_data, default=str))

        extra_keys = {
            k: v
            for k, v in log_data.items()
            if k not in ("timestamp", "level", "logger", "message", "exception")
        }
        extra_str = ""
        if extra_keys:
            extra_str = " | " + " ".join(f"{k}={v}" for k, v in extra_keys.items())

        line = (
            f"[{log_data['timestamp']}] {record.levelname:8s} "
            f"{record.name}: {log_data['message']}{extra_str}"
        )
        if "exception" in log_data:
            line += "\n" + log_data["exception"]
        return sanitize(line)


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
) -> None:
    """Configure pvemcp logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: If True, output JSON lines.
    """
    root_logger = logging.getLogger("pvemcp")
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(PveFormatter(json_output=json_output))
    root_logger.addHandler(handler)

    root_logger.propagate = False


def get_logger(name: str = "pvemcp") -> logging.Logger:
    """Get a pvemcp logger instance."""
    return logging.getLogger(name)


configure_logging()
