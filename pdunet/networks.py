"""TCP and UDP socket setup for IPv6 (dual stack) clients and servers."""

from __future__ import annotations

import socket
from collections.abc import Iterator
from contextlib import contextmanager

from pdunet.hostlookup import LookupError_, format_ipv6, format_sockaddr, lookup_ipv6

LISTEN_BACKLOG = 10


class NetworkError(OSError):
    """Raised when a socket cannot be set up."""


@contextmanager
def _checked(label: str, sock: socket.socket | None = None) -> Iterator[None]:
    try:
        yield
    except OSError as exc:
        if sock is not None:
            sock.close()
        if isinstance(exc, NetworkError):
            raise
        raise NetworkError(f"{label}: {exc}") from exc


def _atoi(text: str | int) -> int:
    if isinstance(text, int):
        return text
    text = text.lstrip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for char in text:
        if not char.isdigit():
            break
        digits += char
    return sign * int(digits) if digits else 0


def _new_socket(kind: int, label: str) -> socket.socket:
    with _checked(label):
        sock = socket.socket(socket.AF_INET6, kind)
    try:
        sock.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 0)
    except (OSError, AttributeError):
        pass
    return sock


def _server_address(host_name: str, port: int) -> tuple[str, tuple[str, int, int, int]]:
    try:
        address = lookup_ipv6(host_name)
    except LookupError_ as exc:
        raise NetworkError(str(exc)) from exc
    ip_string = format_ipv6(address)
    return ip_string, (ip_string, port, 0, 0)


def tcp_server_setup(server_port: int) -> socket.socket:
    """Open, bind and listen on a TCP socket; port 0 lets the system choose."""
    sock = _new_socket(socket.SOCK_STREAM, "socket call")
    with _checked("bind call", sock):
        sock.bind(("::", server_port))
    with _checked("getsockname call", sock):
        port = sock.getsockname()[1]
    with _checked("listen call", sock):
        sock.listen(LISTEN_BACKLOG)
    print(f"Server Port Number {port} ")
    return sock


def tcp_accept(server_socket: socket.socket) -> socket.socket:
    """Wait for a client and return its connected socket."""
    with _checked("accept call"):
        client, address = server_socket.accept()
    print(
        f"Client accepted. Socket: {client.fileno()},  "
        f"Client IP: {format_sockaddr(address)} Client Port Number: {address[1]}"
    )
    return client


def tcp_client_setup(server_name: str, server_port: str | int) -> socket.socket:
    """Connect a TCP socket to the named server and port."""
    port = _atoi(server_port)
    sock = _new_socket(socket.SOCK_STREAM, "socket call")
    try:
        ip_string, address = _server_address(server_name, port)
    except NetworkError:
        sock.close()
        raise
    with _checked("connect call", sock):
        sock.connect(address)
    print(
        f"Connected to {server_name} via socket: {sock.fileno()} "
        f"IP: {ip_string} Port Number: {port}"
    )
    return sock


def udp_server_setup(server_port: int) -> socket.socket:
    """Open and bind a UDP socket; port 0 lets the system choose."""
    sock = _new_socket(socket.SOCK_DGRAM, "socket() call error")
    with _checked("bind() call error", sock):
        sock.bind(("::", server_port))
    print(f"Server using Port #: {sock.getsockname()[1]}")
    return sock


def udp_client_to_server(
    host_name: str, server_port: int
) -> tuple[socket.socket, tuple[str, int, int, int]]:
    """Open a UDP socket and return it with the server's socket address."""
    sock = _new_socket(socket.SOCK_DGRAM, "socket() call error")
    try:
        ip_string, address = _server_address(host_name, server_port)
    except NetworkError:
        sock.close()
        raise
    print(f"Server info - IP: {ip_string} Port: {server_port} ")
    return sock, address