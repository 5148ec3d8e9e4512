import pytest

from rustproxy.errors import RustProxyUserError, UnknownProxy
from rustproxy.proxies import PREDEFINED_PROXIES, alias_for_url, find_proxy, proxy_names, resolve_proxy


def test_predefined_table_has_four_known_aliases():
    assert proxy_names() == ["rsproxy", "ustc", "tuna", "aliyun"]
    assert all(p.url.startswith("https://") for p in PREDEFINED_PROXIES)


@pytest.mark.parametrize("name, url", [
    ("rsproxy", "https://rsproxy.cn/crates.io-index/"),
    ("ustc", "https://mirrors.ustc.edu.cn/crates.io-index/"),
    ("tuna", "https://mirrors.tuna.tsinghua.edu.cn/crates.io-index/"),
    ("aliyun", "https://mirrors.aliyun.com/crates.io-index/"),
])
def test_resolve_known_alias(name, url):
    assert resolve_proxy(name) == url


def test_alias_lookup_is_case_insensitive_and_trims():
    assert resolve_proxy("USTC") == "https://mirrors.ustc.edu.cn/crates.io-index/"
    assert find_proxy("  Tuna ").name == "tuna"


@pytest.mark.parametrize("url", [
    "https://example.com/index/",
    "http://localhost:8080/crates.io-index",
])
def test_raw_url_is_accepted_as_is(url):
    assert resolve_proxy(url) == url


@pytest.mark.parametrize("bad", ["nope", "ftp://mirror.example/", "https://", "mirrors.ustc.edu.cn", ""])
def test_unknown_value_raises_with_available_aliases(bad):
    with pytest.raises(UnknownProxy) as ei:
        resolve_proxy(bad)
    err = ei.value
    assert isinstance(err, RustProxyUserError)
    assert err.value == bad
    assert err.available == proxy_names()
    msg = str(err)
    for name in proxy_names():
        assert f"  - {name}" in msg
    assert "http:// or https://" in msg


def test_alias_for_url_ignores_trailing_slash():
    assert alias_for_url("https://rsproxy.cn/crates.io-index") == "rsproxy"
    assert alias_for_url("https://example.com/index/") is None
