"""
Known crates.io mirrors and alias resolution.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from .errors import UnknownProxy


class ProxyEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    url: str


PREDEFINED_PROXIES: tuple[ProxyEntry, ...] = (
    ProxyEntry(name="rsproxy", url="https://rsproxy.cn/crates.io-index/"),
    ProxyEntry(name="ustc", url="https://mirrors.ustc.edu.cn/crates.io-index/"),
    ProxyEntry(name="tuna", url="https://mirrors.tuna.tsinghua.edu.cn/crates.io-index/"),
    ProxyEntry(name="aliyun", url="https://mirrors.aliyun.com/crates.io-index/"),
)

_URL_PREFIXES = ("http://", "https://")


def proxy_names() -> List[str]:
    return [p.name for p in PREDEFINED_PROXIES]


def find_proxy(name: str) -> Optional[ProxyEntry]:
    """Case-insensitive alias lookup."""
    key = name.strip().lower()
    for p in PREDEFINED_PROXIES:
        if p.name == key:
            return p
    return None


def alias_for_url(url: str) -> Optional[str]:
    """Reverse lookup used by `status`; trailing slashes are not significant."""
    norm = url.rstrip("/")
    for p in PREDEFINED_PROXIES:
        if p.url.rstrip("/") == norm:
            return p.name
    return None


def resolve_proxy(name_or_url: str) -> str:
    """
    Alias → URL, or a raw http(s) URL as-is.

    Raises:
        UnknownProxy: neither a known alias nor a URL with an http(s) scheme and host.
    """
    entry = find_proxy(name_or_url)
    if entry is not None:
        return entry.url
    value = name_or_url.strip()
    if value.startswith(_URL_PREFIXES) and value.split("://", 1)[1]:
        return value
    raise UnknownProxy(name_or_url, proxy_names())


__all__ = ["ProxyEntry", "PREDEFINED_PROXIES", "proxy_names", "find_proxy", "alias_for_url", "resolve_proxy"]
