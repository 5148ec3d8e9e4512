from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StatusReport(BaseModel):
    """Snapshot of the mirror redirection found in config.toml (`rustproxy status`)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    config_path: str
    exists: bool
    active: bool = False
    replace_with: Optional[str] = None
    url: Optional[str] = None
    alias: Optional[str] = None
    git_fetch_with_cli: Optional[bool] = None
    error: Optional[str] = None


__all__ = ["StatusReport"]
