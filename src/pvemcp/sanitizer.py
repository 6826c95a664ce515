"""
pvemcp Secret Registry & Sanitizer

Every piece of text that can leave the process (tool error results,
log lines, startup diagnostics) passes through sanitize() first.

The registry is append-only: the API token id and secret are registered
once at startup, before the first outbound request, and only read after
that. Reads take no lock; appends are serialized.

Usage:
    from pvemcp.sanitizer import register_secret, sanitize

    register_secret(config.token_secret)
    safe = sanitize(f"request failed: {detail}")
"""

from __future__ import annotations

import re
import threading

REDACTED = "[REDACTED]"

_TOKEN_PARAM_RE = re.compile(r"(PVEAPIToken)=\S+", re.IGNORECASE)
_AUTH_HEADER_RE = re.compile(r"(authorization):\s*\S+", re.IGNORECASE)


class SecretRegistry:
    """Append-only list of literal strings that must never be emitted."""

    def __init__(self) -> None:
        self._secrets: tuple[str, ...] = ()
        self._lock = threading.Lock()

    def register(self, secret: str) -> None:
        """Add a secret. Empty strings are ignored; duplicates are harmless."""
        if not secret:
            return
        with self._lock:
            self._secrets = self._secrets + (secret,)

    def sanitize(self, text: str) -> str:
        """Return text with registered secrets and auth material redacted.

        Literal secrets are replaced first, then the structural patterns:
        ``PVEAPIToken=<anything>`` and ``Authorization: <value>`` (both
        case-insensitive). Applying this twice gives the same result as once.
        """
        if not isinstance(text, str):
            text = str(text)
        for secret in self._secrets:
            # replacing a piece of the marker would rewrite earlier redactions
            if secret in REDACTED:
                continue
            text = text.replace(secret, REDACTED)
        text = _TOKEN_PARAM_RE.sub(rf"\1={REDACTED}", text)
        text = _AUTH_HEADER_RE.sub(rf"\1: {REDACTED}", text)
        return text

    def clear(self) -> None:
        """Drop all secrets. Only used by tests."""
        with self._lock:
            self._secrets = ()

    def __len__(self) -> int:
        return len(self._secrets)

    def __contains__(self, secret: str) -> bool:
        return secret in self._secrets


_registry = SecretRegistry()


def get_registry() -> SecretRegistry:
    """Return the process-wide secret registry."""
    return _registry


def register_secret(secret: str) -> None:
    _registry.register(secret)


def sanitize(text: str) -> str:
    """Sanitize text against the process-wide registry."""
    return _registry.sanitize(text)
