"""
Shared test infrastructure for rustproxy.

Modules:
- file_utils: Utilities for creating config files
- cli_utils: Running the CLI as a subprocess
"""

from .file_utils import write, write_toml
from .cli_utils import run_cli, jload

__all__ = [
    "write",
    "write_toml",
    "run_cli",
    "jload",
]
