"""
Editing of the Cargo config: install / remove the crates.io mirror redirection.

Both operations follow the same scheme: strip every key this tool owns, then
(for `set`) insert a fresh redirection block. The owned key set is fixed, so
there is nothing to merge and repeated runs converge to the same document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.exceptions import TOMLKitError

from . import paths
from .fs import backup_file
from .proxies import alias_for_url, resolve_proxy
from .status_schema import StatusReport
from .toml_rt import consolidate_table, ensure_table, rewrite_toml_rt

_LOG = logging.getLogger(__name__)

# Name of the source/registry this tool manages
MANAGED_SOURCE = "mirror"
# Tables written by older releases; removed on every edit
LEGACY_SOURCES = ("rsproxy", "rsproxy-sparse")
LEGACY_REGISTRIES = ("rsproxy",)

CRATES_IO = "crates-io"
REPLACE_WITH = "replace-with"
GIT_FETCH_WITH_CLI = "git-fetch-with-cli"


@dataclass(frozen=True)
class EditResult:
    config_path: Path
    existed: bool
    changed: bool
    backup_path: Optional[Path] = None
    url: Optional[str] = None


# ----------------------------- Document transforms ----------------------------- #

def _table(container: Mapping, key: str) -> Optional[MutableMapping]:
    val = container.get(key)
    return val if isinstance(val, MutableMapping) else None


def _drop_keys(container: MutableMapping, keys) -> bool:
    removed = False
    for key in keys:
        if key in container:
            del container[key]
            removed = True
    return removed


def _prune_if_empty(parent: MutableMapping, key: str) -> None:
    child = _table(parent, key)
    if child is not None and len(child) == 0:
        del parent[key]


def remove_proxy_config(doc: MutableMapping) -> bool:
    """
    Strips the redirection block from `doc` in place.

    Containers emptied by the removal are dropped; containers that still hold
    user content are left alone. Tables split across the file are merged first.
    Returns True when anything was removed.
    """
    changed = False
    for key in ("source", "registries", "net"):
        consolidate_table(doc, key)

    source = _table(doc, "source")
    if source is not None:
        source_changed = False
        crates_io = _table(source, CRATES_IO)
        if crates_io is not None and _drop_keys(crates_io, [REPLACE_WITH]):
            source_changed = True
            _prune_if_empty(source, CRATES_IO)
        if _drop_keys(source, [MANAGED_SOURCE, *LEGACY_SOURCES]):
            source_changed = True
        if source_changed:
            changed = True
            _prune_if_empty(doc, "source")

    registries = _table(doc, "registries")
    if registries is not None and _drop_keys(registries, [MANAGED_SOURCE, *LEGACY_REGISTRIES]):
        changed = True
        _prune_if_empty(doc, "registries")

    net = _table(doc, "net")
    if net is not None and _drop_keys(net, [GIT_FETCH_WITH_CLI]):
        changed = True
        _prune_if_empty(doc, "net")

    return changed


def add_proxy_config(doc: MutableMapping, url: str) -> None:
    """
    Inserts the redirection block pointing at `url`:

        [source.crates-io]
        replace-with = "mirror"

        [source.mirror]
        registry = "<url>"

        [registries.mirror]
        index = "<url>"

        [net]
        git-fetch-with-cli = true

    Expects a document already cleaned by remove_proxy_config().
    """
    source = ensure_table(doc, "source", super_table=True)
    crates_io = ensure_table(source, CRATES_IO)
    crates_io[REPLACE_WITH] = MANAGED_SOURCE
    mirror = ensure_table(source, MANAGED_SOURCE)
    mirror["registry"] = url

    registries = ensure_table(doc, "registries", super_table=True)
    registry = ensure_table(registries, MANAGED_SOURCE)
    registry["index"] = url

    net = ensure_table(doc, "net")
    net[GIT_FETCH_WITH_CLI] = True


# ----------------------------- Operations ----------------------------- #

def set_proxy(name_or_url: str, *, config_path: Optional[Path] = None) -> EditResult:
    """
    Points crates.io at the mirror given by alias or URL.

    Raises:
        UnknownProxy: before any file is touched.
        OSError: backup or write failures.
    """
    url = resolve_proxy(name_or_url)
    path = config_path or paths.config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    existed = path.exists()
    backup = None
    if existed:
        backup = backup_file(path)
        _LOG.debug("Backed up %s to %s", path, backup)

    def _transform(doc: TOMLDocument) -> bool:
        if remove_proxy_config(doc):
            _LOG.debug("Removed previous proxy configuration from %s", path)
        add_proxy_config(doc, url)
        return True

    rewrite_toml_rt(path, _transform)
    _LOG.debug("Wrote proxy configuration for %s to %s", url, path)

    return EditResult(config_path=path, existed=existed, changed=True, backup_path=backup, url=url)


def clear_proxy(*, config_path: Optional[Path] = None) -> EditResult:
    """
    Removes the redirection block. A missing config file is a successful no-op.

    The file is only rewritten when something was actually removed, so an
    unparseable config is backed up but never replaced by an empty document.
    """
    path = config_path or paths.config_path()
    if not path.exists():
        return EditResult(config_path=path, existed=False, changed=False)

    backup = backup_file(path)
    _LOG.debug("Backed up %s to %s", path, backup)

    changed = rewrite_toml_rt(path, remove_proxy_config)
    if not changed:
        _LOG.debug("No proxy configuration in %s; file left unchanged", path)

    return EditResult(config_path=path, existed=True, changed=changed, backup_path=backup)


def _str_or_none(val: Any) -> Optional[str]:
    return val if isinstance(val, str) else None


def read_status(*, config_path: Optional[Path] = None) -> StatusReport:
    """Read-only view of the current redirection. Never raises on bad content."""
    path = config_path or paths.config_path()
    report = StatusReport(config_path=str(path), exists=path.exists())
    if not report.exists:
        return report

    try:
        doc: TOMLDocument = tomlkit.parse(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, TOMLKitError) as e:
        report.error = str(e)
        return report

    data = doc.unwrap()
    source = data.get("source")
    source = source if isinstance(source, dict) else {}
    crates_io = source.get(CRATES_IO)
    replace_with = _str_or_none(crates_io.get(REPLACE_WITH)) if isinstance(crates_io, dict) else None

    url = None
    if replace_with is not None:
        target = source.get(replace_with)
        if isinstance(target, dict):
            url = _str_or_none(target.get("registry"))

    net = data.get("net")
    git_fetch = net.get(GIT_FETCH_WITH_CLI) if isinstance(net, dict) else None

    report.replace_with = replace_with
    report.url = url
    report.active = replace_with is not None and url is not None
    report.alias = alias_for_url(url) if url else None
    report.git_fetch_with_cli = git_fetch if isinstance(git_fetch, bool) else None
    return report


__all__ = [
    "EditResult",
    "MANAGED_SOURCE",
    "set_proxy",
    "clear_proxy",
    "read_status",
    "remove_proxy_config",
    "add_proxy_config",
]
