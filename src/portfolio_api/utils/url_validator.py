"""Outbound URL guard for the job-description scraper.

A caller-supplied URL is opened by a headless browser running inside our
network, so it must not reach loopback, private ranges, or cloud metadata
endpoints.

Playwright resolves the hostname again when it navigates, so a DNS
rebinding attack can still slip past this check.
"""

from __future__ import annotations

import ipaddress
import socket
from urllib.parse import urlparse

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

ALLOWED_SCHEMES = frozenset({"http", "https"})
INTERNAL_HOSTNAMES = frozenset({"localhost", "localhost.localdomain", "metadata.google.internal"})
METADATA_ADDRESSES = frozenset(
    {
        ipaddress.ip_address("169.254.169.254"),
        ipaddress.ip_address("fd00:ec2::254"),
    }
)


class SSRFError(ValueError):
    """The URL points at an address the scraper must not contact."""


def is_internal_address(addr: IPAddress) -> bool:
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        addr = addr.ipv4_mapped
    return addr in METADATA_ADDRESSES or not addr.is_global or addr.is_multicast


def _resolve(hostname: str) -> list[IPAddress]:
    try:
        infos = socket.getaddrinfo(hostname, None, proto=socket.IPPROTO_TCP)
    except socket.gaierror as exc:
        raise ValueError(f"Cannot resolve hostname {hostname!r}: {exc}") from exc
    return [ipaddress.ip_address(info[4][0]) for info in infos]


def validate_url(url: str) -> str:
    """Return ``url`` unchanged if the scraper may open it.

    Raises ``ValueError`` for malformed or unresolvable URLs and
    ``SSRFError`` (a ``ValueError``) for internal targets.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"Unsupported URL scheme: {parsed.scheme!r}")
    host = (parsed.hostname or "").lower()
    if not host:
        raise ValueError(f"No hostname in URL: {url!r}")
    if host in INTERNAL_HOSTNAMES or host.endswith(".localhost"):
        raise SSRFError(f"Blocked internal hostname: {host!r}")

    try:
        candidates = [ipaddress.ip_address(host)]
    except ValueError:
        candidates = _resolve(host)

    blocked = [addr for addr in candidates if is_internal_address(addr)]
    if blocked:
        raise SSRFError(f"{host!r} resolves to blocked address {blocked[0]}")
    return url
