from .editor import EditResult, clear_proxy, read_status, set_proxy
from .errors import RustProxyUserError, UnknownProxy
from .proxies import PREDEFINED_PROXIES, ProxyEntry, resolve_proxy

__all__ = [
    "EditResult",
    "set_proxy",
    "clear_proxy",
    "read_status",
    "RustProxyUserError",
    "UnknownProxy",
    "PREDEFINED_PROXIES",
    "ProxyEntry",
    "resolve_proxy",
]
