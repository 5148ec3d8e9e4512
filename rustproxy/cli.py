from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

from .editor import clear_proxy, read_status, set_proxy
from .errors import RustProxyUserError
from .log import setup_logging_once
from .proxies import PREDEFINED_PROXIES
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="rustproxy",
        description="CLI tool to set and clear Rust proxy configurations",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--config",
        metavar="PATH",
        help="path to config.toml (default: $CARGO_HOME/config.toml or ~/.cargo/config.toml)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_set = sub.add_parser("set-proxy", help="Set proxy configuration")
    sp_set.add_argument(
        "proxy",
        help="proxy name (" + ", ".join(e.name for e in PREDEFINED_PROXIES) + ") or custom http(s):// URL",
    )

    sub.add_parser("clear-proxy", help="Clear proxy configuration")
    sub.add_parser("list", help="Predefined proxies (JSON)")
    sub.add_parser("status", help="Current proxy configuration (JSON)")

    return p


def _emit_json(obj: Any) -> None:
    """Machine-readable answer of `list` / `status`: one compact JSON line on stdout."""
    sys.stdout.write(json.dumps(obj, ensure_ascii=False) + "\n")


def _config_arg(ns: argparse.Namespace) -> Optional[Path]:
    raw = getattr(ns, "config", None)
    return Path(raw).expanduser() if raw else None


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    setup_logging_once()
    cfg = _config_arg(ns)

    try:
        if ns.cmd == "set-proxy":
            res = set_proxy(ns.proxy, config_path=cfg)
            if res.backup_path is not None:
                sys.stdout.write(f"Existing configuration backed up to {res.backup_path}\n")
            sys.stdout.write(
                f"Proxy configuration set to {res.url}, config file located at {res.config_path}\n"
            )
            return 0

        if ns.cmd == "clear-proxy":
            res = clear_proxy(config_path=cfg)
            if not res.existed:
                sys.stdout.write("Configuration file does not exist. Nothing to clear.\n")
                return 0
            sys.stdout.write(f"Existing configuration backed up to {res.backup_path}\n")
            if res.changed:
                sys.stdout.write("Proxy configuration has been successfully cleared.\n")
            else:
                sys.stdout.write("No proxy configuration found. File left unchanged.\n")
            return 0

        if ns.cmd == "list":
            data = {"proxies": [e.model_dump() for e in PREDEFINED_PROXIES]}
            _emit_json(data)
            return 0

        if ns.cmd == "status":
            report = read_status(config_path=cfg)
            _emit_json(report.model_dump(mode="json", by_alias=True))
            return 0

    except RustProxyUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except OSError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
