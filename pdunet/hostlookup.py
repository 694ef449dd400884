"""Host name resolution for IPv4 and IPv6 (including IPv4-mapped) addresses."""

from __future__ import annotations

import socket
import sys
from collections.abc import Iterable

NOT_FOUND = "(IP not found)"

DEFAULT_DEMO_HOSTS = (
    "www.google.com",
    "ipv6.google.com",
    "my.calpoly.edu",
    "does not exist",
)


class LookupError_(OSError):
    """Raised when a host name cannot be resolved."""


def _strip_scope(host: str) -> str:
    return host.split("%", 1)[0]


def _resolve(host_name: str, family: int, flags: int) -> str:
    try:
        infos = socket.getaddrinfo(host_name, None, family, 0, 0, flags)
    except socket.gaierror as exc:
        raise LookupError_(
            f"Error getaddrinfo (host: {host_name}): {exc.strerror or exc}"
        ) from exc
    if not infos:
        raise LookupError_(f"Error getaddrinfo (host: {host_name}): no address")
    # Only the first address of the list is used.
    return _strip_scope(infos[0][4][0])


def lookup_ipv4(host_name: str) -> bytes:
    """Return the first IPv4 address of a host as 4 packed bytes."""
    host = _resolve(host_name, socket.AF_INET, 0)
    return socket.inet_pton(socket.AF_INET, host)


def lookup_ipv6(host_name: str) -> bytes:
    """Return the first IPv6 (or IPv4-mapped) address of a host as 16 packed bytes."""
    flags = getattr(socket, "AI_V4MAPPED", 0) | getattr(socket, "AI_ALL", 0)
    host = _resolve(host_name, socket.AF_INET6, flags)
    return socket.inet_pton(socket.AF_INET6, host)


def format_ipv4(address: bytes | None) -> str:
    """Render a packed IPv4 address, or a marker when there is none."""
    if address is None:
        return NOT_FOUND
    return socket.inet_ntop(socket.AF_INET, address)


def format_ipv6(address: bytes | None) -> str:
    """Render a packed IPv6 address, or a marker when there is none."""
    if address is None:
        return NOT_FOUND
    return socket.inet_ntop(socket.AF_INET6, address)


def format_sockaddr(address: tuple) -> str:
    """Render the host part of a socket address tuple in canonical form."""
    host = _strip_scope(address[0])
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    return socket.inet_ntop(family, socket.inet_pton(family, host))


def print_ip_info(address: tuple) -> None:
    """Print the IP address and port of a socket address tuple."""
    print(f"IP: {format_sockaddr(address)} Port: {address[1]}")


def lookup_report(host_name: str) -> list[str]:
    """Resolve a host both ways and return one line per address found.

    Resolution failures are reported on standard error.
    """
    lines = []
    try:
        lines.append(f"IPV6 Host: {host_name} IP: {format_ipv6(lookup_ipv6(host_name))} ")
    except LookupError_ as exc:
        print(exc, file=sys.stderr)
    try:
        lines.append(f"IPv4 Host: {host_name} IP: {format_ipv4(lookup_ipv4(host_name))} ")
    except LookupError_ as exc:
        print(exc, file=sys.stderr)
    return lines


def run_lookup_demo(host_names: Iterable[str] = DEFAULT_DEMO_HOSTS) -> None:
    """Print the lookup report of each host, followed by a blank line."""
    for host_name in host_names:
        for line in lookup_report(host_name):
            print(line)
        print()