"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from RustProxyUserError.

Programming errors and bugs should NOT inherit from RustProxyUserError —
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Sequence


class RustProxyUserError(Exception):
    """
    Base class for all user-facing errors in rustproxy.

    These errors indicate problems that the user can fix:
    an unknown mirror alias, a malformed URL, etc.
    """
    pass


class UnknownProxy(RustProxyUserError):
    """Value is neither a known alias nor an http(s) URL."""

    def __init__(self, value: str, available: Sequence[str]) -> None:
        self.value = value
        self.available = list(available)
        lines = [
            f"Unknown proxy name or invalid URL: '{value}'.",
            "Available predefined proxy names:",
            *(f"  - {name}" for name in self.available),
            "Or provide a custom URL starting with http:// or https://.",
        ]
        super().__init__("\n".join(lines))


__all__ = ["RustProxyUserError", "UnknownProxy"]
