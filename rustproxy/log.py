from __future__ import annotations

import logging
import os

_TRUTHY = {"1", "true", "yes", "on"}

_LOG = logging.getLogger("rustproxy")


def debug_enabled() -> bool:
    val = os.environ.get("RUSTPROXY_DEBUG", "")
    return val.strip().lower() in _TRUTHY


def setup_logging_once() -> None:
    """
    Настраивает корневой логгер пакета ровно один раз:
    stderr, формат «[LEVEL] message», DEBUG при RUSTPROXY_DEBUG.
    """
    if getattr(setup_logging_once, "_inited", False):
        return
    setup_logging_once._inited = True  # type: ignore[attr-defined]
    level = logging.DEBUG if debug_enabled() else logging.INFO
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        fmt = logging.Formatter("[%(levelname)s] %(message)s")
        h.setFormatter(fmt)
        _LOG.addHandler(h)


__all__ = ["setup_logging_once", "debug_enabled"]
