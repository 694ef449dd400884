"""Interactive client: sends lines typed on standard input as PDUs."""

from __future__ import annotations

import socket
import sys
from typing import IO, TextIO

from pdunet.networks import NetworkError, tcp_client_setup
from pdunet.pdu import MAXBUF, PDUError, recv_pdu, send_pdu
from pdunet.pollset import POLL_WAIT_FOREVER, PollSet

PROG = "cclient"


class UsageError(Exception):
    """Raised when the command line is not host-name port-number."""


def _message_text(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _out(out: TextIO | None) -> TextIO:
    return out if out is not None else sys.stdout


def read_message(stream: IO) -> bytes:
    """Read one line (at most MAXBUF - 1 characters) as a NUL-terminated message.

    Raises EOFError at the end of the stream.
    """
    line = stream.readline(MAXBUF - 1)
    if not line:
        raise EOFError("end of input")
    if isinstance(line, str):
        line = line.encode("utf-8")
    if line.endswith(b"\n"):
        line = line[:-1]
    return line[: MAXBUF - 1] + b"\0"


def send_to_server(sock: socket.socket, stream: IO, out: TextIO | None = None) -> int:
    """Read a message from the stream, send it as a PDU and return its length."""
    out = _out(out)
    data = read_message(stream)
    text = _message_text(data)
    print(f"Read: {text} | String len: {len(data)} (including null)", file=out)
    sent = send_pdu(sock, data)
    print(f"Socket: {sock.fileno()} | Bytes sent: {sent} | Message: {text}", file=out)
    return sent


def process_msg_from_server(sock: socket.socket, out: TextIO | None = None) -> bytes:
    """Receive one PDU from the server; b'' means the server has gone."""
    out = _out(out)
    data = recv_pdu(sock, MAXBUF)
    if data:
        print(
            f"Socket {sock.fileno()} | Bytes recv: {len(data)} | "
            f"Message: {_message_text(data)}",
            file=out,
        )
    else:
        print("Server terminated", file=out)
    return data


def check_args(argv: list[str]) -> tuple[str, str]:
    """Return (host name, port) from the arguments."""
    if len(argv) != 2:
        raise UsageError(f"usage: {PROG} host-name port-number ")
    return argv[0], argv[1]


def client_control(sock: socket.socket, stream: IO, out: TextIO | None = None) -> None:
    """Relay input lines to the server and print replies.

    Returns when the server closes the connection or the input ends.
    """
    out = _out(out)
    stream_fd = stream.fileno()
    poll_set = PollSet()
    poll_set.add(stream_fd)
    poll_set.add(sock)
    while True:
        out.write("Enter data: ")
        out.flush()
        fd = poll_set.poll(POLL_WAIT_FOREVER)
        if fd is None:
            continue
        if fd == stream_fd:
            try:
                send_to_server(sock, stream, out)
            except EOFError:
                return
        elif not process_msg_from_server(sock, out):
            return


def main(argv: list[str] | None = None) -> int:
    """Run the client; returns the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        host, port = check_args(args)
    except UsageError as exc:
        print(exc)
        return 1
    try:
        sock = tcp_client_setup(host, port)
    except NetworkError as exc:
        print(exc, file=sys.stderr)
        return 1
    with sock:
        try:
            client_control(sock, sys.stdin, sys.stdout)
        except KeyboardInterrupt:
            return 0
        except (OSError, PDUError) as exc:
            print(exc, file=sys.stderr)
            return 1
    return 0