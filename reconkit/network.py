"""HTTP helpers and IP address arithmetic."""

from __future__ import annotations

import ipaddress
import warnings
from collections.abc import Iterator, Mapping
from http.cookiejar import Cookie
from urllib.parse import urlsplit

import requests
from requests.auth import HTTPBasicAuth
from requests.structures import CaseInsensitiveDict

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_14_2) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/72.0.3626.119 Safari/537.36"
)
ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
ACCEPT_LANG = "en-US,en;q=0.8"

_TIMEOUT = 30

_session = requests.Session()
_session.verify = False

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address
IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


def request_web_page(
    url: str,
    body: str | bytes | None = None,
    headers: Mapping[str, str] | None = None,
    uid: str = "",
    secret: str = "",
) -> str:
    """Fetch a page and return its body; POST is used when a body is given.

    Raises requests.HTTPError for any status outside 2xx and the usual
    requests exceptions for transport failures.
    """
    method = "POST" if body is not None else "GET"
    request_headers = CaseInsensitiveDict(
        {"User-Agent": USER_AGENT, "Accept": ACCEPT, "Accept-Language": ACCEPT_LANG}
    )
    if headers:
        request_headers.update(headers)
    auth = HTTPBasicAuth(uid, secret) if uid and secret else None

    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        response = _session.request(
            method, url, data=body, headers=request_headers, auth=auth, timeout=_TIMEOUT
        )
    if not 200 <= response.status_code < 300:
        raise requests.HTTPError(f"{response.status_code} {response.reason}", response=response)
    return response.text


def _cookies_for(url: str) -> Iterator[Cookie]:
    parts = urlsplit(url)
    host = (parts.hostname or "").lower()
    path = parts.path or "/"
    for cookie in _session.cookies:
        domain = cookie.domain.lstrip(".").lower()
        if not domain or (host != domain and not host.endswith("." + domain)):
            continue
        if not path.startswith(cookie.path or "/"):
            continue
        if cookie.secure and parts.scheme != "https":
            continue
        yield cookie


def copy_cookies(src: str, dest: str) -> None:
    """Copy the cookies that apply to the src URL over to the dest URL's host."""
    dest_host = urlsplit(dest).hostname
    if not dest_host:
        return
    for cookie in list(_cookies_for(src)):
        _session.cookies.set(cookie.name, cookie.value, domain=dest_host, path="/")


def check_cookie(url: str, cookie_name: str) -> bool:
    """Report whether a cookie with this name would be sent to the URL."""
    return any(cookie.name == cookie_name for cookie in _cookies_for(url))


def _address(ip: str | IPAddress) -> IPAddress:
    addr = ip if isinstance(ip, (ipaddress.IPv4Address, ipaddress.IPv6Address)) else ipaddress.ip_address(ip)
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


def _network(cidr: str | IPNetwork) -> IPNetwork:
    if isinstance(cidr, (ipaddress.IPv4Network, ipaddress.IPv6Network)):
        return cidr
    return ipaddress.ip_network(cidr, strict=False)


def net_hosts(cidr: str | IPNetwork) -> list[IPAddress]:
    """Return every address of the netblock except the network and broadcast ones."""
    return list(_network(cidr))[1:-1]


def net_first_last(cidr: str | IPNetwork) -> tuple[IPAddress, IPAddress]:
    """Return the first and last address of the netblock."""
    network = _network(cidr)
    return network.network_address, network.broadcast_address


def is_ipv4(ip: str | IPAddress) -> bool:
    """True for IPv4 addresses, IPv4-mapped IPv6 addresses included."""
    return _address(ip).version == 4


def is_ipv6(ip: str | IPAddress) -> bool:
    """True for IPv6 addresses that are not IPv4-mapped."""
    return _address(ip).version == 6


def range_hosts(start: str | IPAddress | None, end: str | IPAddress | None) -> list[IPAddress]:
    """Return all addresses from start to end inclusive; empty unless end > start."""
    if start is None or end is None:
        return []
    first, last = _address(start), _address(end)
    if first.version != last.version or last <= first:
        return []
    return [first + step for step in range(int(last) - int(first) + 1)]


def cidr_subset(cidr: str | IPNetwork, addr: str | IPAddress, num: int) -> list[IPAddress]:
    """Return up to num addresses of the netblock centred on addr."""
    network = _network(cidr)
    address = _address(addr)
    if address not in network:
        return [address]

    offset = max(num // 2, 0)
    first = max(int(address) - offset, int(network.network_address))
    last = min(int(address) + offset, int(network.broadcast_address))
    if first == last:
        return [address]
    kind = type(address)
    return range_hosts(kind(first), kind(last))


def reverse_ip(ip: str) -> str:
    """Reverse the dot-separated parts of an address."""
    return ".".join(reversed(ip.split(".")))


def ipv6_nibble_format(ip: str) -> str:
    """Reverse the characters of an IPv6 address and join them with dots."""
    return ".".join(reversed(ip))


def hex_string(data: bytes) -> str:
    """Return the lower-case hexadecimal form of the bytes."""
    return bytes(data).hex()