"""Length-prefixed PDUs over stream sockets.

Each PDU starts with a 2-byte big-endian length that counts the header too.
"""

from __future__ import annotations

import socket
import struct

PDU_HEADER_SIZE = 2
MAX_PDU_LENGTH = 0xFFFF
MAXBUF = 1024

_HEADER = struct.Struct("!H")


class PDUError(Exception):
    """Raised when a PDU cannot be built or does not fit the buffer."""


def encode_pdu(data: bytes) -> bytes:
    """Return data prefixed with its PDU length header."""
    length = len(data) + PDU_HEADER_SIZE
    if length > MAX_PDU_LENGTH:
        raise PDUError(f"PDU too long: {length} bytes")
    return _HEADER.pack(length) + bytes(data)


def safe_recv(sock: socket.socket, length: int, flags: int = 0) -> bytes:
    """Receive up to length bytes; a reset connection reads as closed (b'')."""
    try:
        return sock.recv(length, flags)
    except ConnectionResetError:
        return b""


def safe_send(sock: socket.socket, data: bytes, flags: int = 0) -> int:
    """Send all of data and return the number of bytes sent."""
    sock.sendall(data, flags)
    return len(data)


def send_pdu(sock: socket.socket, data: bytes) -> int:
    """Send data as one PDU and return the payload length."""
    safe_send(sock, encode_pdu(data))
    return len(data)


def recv_pdu(sock: socket.socket, buffer_size: int = MAXBUF) -> bytes:
    """Receive one PDU and return its payload; b'' means the peer closed.

    Raises PDUError when the PDU is longer than buffer_size.
    """
    header = safe_recv(sock, PDU_HEADER_SIZE, socket.MSG_WAITALL)
    if len(header) < PDU_HEADER_SIZE:
        print("recvPDU: connection closed")
        return b""
    (length,) = _HEADER.unpack(header)
    if length > buffer_size:
        raise PDUError(f"recvPDU: buffer too small ({length} > {buffer_size})")
    payload_length = length - PDU_HEADER_SIZE
    if payload_length <= 0:
        return b""
    return safe_recv(sock, payload_length, socket.MSG_WAITALL)