"""Echo server: accepts clients and sends every PDU it receives back."""

from __future__ import annotations

import re
import socket
import sys
from typing import TextIO

from pdunet.networks import NetworkError, tcp_accept, tcp_server_setup
from pdunet.pdu import MAXBUF, PDUError, recv_pdu, send_pdu
from pdunet.pollset import POLL_WAIT_FOREVER, PollSet

PROG = "server"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _message_text(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


class EchoServer:
    """Polls a listening socket and its clients, echoing PDUs back."""

    def __init__(self, server_socket: socket.socket, out: TextIO | None = None) -> None:
        self.server_socket = server_socket
        self.out = out
        self.poll_set = PollSet()
        self.poll_set.add(server_socket)
        self.clients: dict[int, socket.socket] = {}

    def _print(self, text: str) -> None:
        print(text, file=self.out if self.out is not None else sys.stdout)

    def add_new_socket(self) -> socket.socket:
        """Accept a waiting client and start watching it."""
        client = tcp_accept(self.server_socket)
        self.poll_set.add(client)
        self.clients[client.fileno()] = client
        self._print(f"New client connected | Socket: {client.fileno()}")
        return client

    def recv_from_client(self, client_socket: socket.socket) -> bytes:
        """Receive one PDU from a client and echo it back.

        Returns the payload, or b'' when the client has gone, in which
        case the client is forgotten and its socket closed.
        """
        fd = client_socket.fileno()
        data = recv_pdu(client_socket, MAXBUF)
        if data:
            text = _message_text(data)
            self._print(f"Socket {fd} | Bytes recv: {len(data)} | Message: {text}")
            sent = send_pdu(client_socket, data)
            self._print(f"Socket: {fd} | Bytes sent: {sent} | Message: {text}")
        else:
            self.poll_set.remove(client_socket)
            self.clients.pop(fd, None)
            client_socket.close()
            self._print(f"Socket: {fd} | Connection closed by other side")
        return data

    def handle_ready(self, fd: int) -> None:
        """Act on a descriptor reported ready by the poll set."""
        if fd == self.server_socket.fileno():
            self.add_new_socket()
        else:
            self.recv_from_client(self.clients[fd])

    def serve_forever(self) -> None:
        """Handle clients until interrupted."""
        while True:
            fd = self.poll_set.poll(POLL_WAIT_FOREVER)
            if fd is not None:
                self.handle_ready(fd)


def parse_port(argv: list[str]) -> int:
    """Return the port from the optional single argument; 0 when absent.

    Raises ValueError when more than one argument is given.
    """
    if len(argv) > 1:
        raise ValueError(f"Usage {PROG} [optional port number]")
    if not argv:
        return 0
    match = _LEADING_INT.match(argv[0])
    return int(match.group(1)) if match else 0


def main(argv: list[str] | None = None) -> int:
    """Run the echo server; returns the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        port = parse_port(args)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    try:
        server_socket = tcp_server_setup(port)
    except NetworkError as exc:
        print(exc, file=sys.stderr)
        return 1
    with server_socket:
        try:
            EchoServer(server_socket).serve_forever()
        except KeyboardInterrupt:
            return 0
        except PDUError as exc:
            print(exc, file=sys.stderr)
            return 1
    return 0