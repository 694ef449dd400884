# pdunet

A small TCP/UDP networking toolkit built around a simple framed message
format (a PDU): every message is sent as a 2-byte big-endian length,
counting the header itself, followed by the payload.

It ships with:

- an echo server (`pdunet-server`) that polls its listening socket and
  every connected client, and sends each received PDU back to its sender;
- an interactive client (`pdunet-client`) that reads lines from standard
  input, sends each one as a PDU and prints whatever the server returns;
- helper modules for your own programs:
  - `pdunet.pdu`: `encode_pdu`, `send_pdu`, `recv_pdu`, `safe_send`,
    `safe_recv`, and the `PDUError` exception;
  - `pdunet.networks`: `tcp_server_setup`, `tcp_accept`,
    `tcp_client_setup`, `udp_server_setup`, `udp_client_to_server`, and
    the `NetworkError` exception;
  - `pdunet.pollset`: `PollSet`, a set of descriptors watched for input
    whose `poll()` returns the lowest ready descriptor (or `None` on
    timeout);
  - `pdunet.hostlookup`: IPv4/IPv6 (including IPv4-mapped) host lookup
    (`lookup_ipv4`, `lookup_ipv6`), address formatting (`format_ipv4`,
    `format_ipv6`, `format_sockaddr`), and `lookup_report` /
    `run_lookup_demo` for printing what a host resolves to.

`PollSet` is built on `select.poll`, so the package needs a POSIX system.

## Installation

```
pip install .
```

## Running the echo server

```
pdunet-server [port]
```

Without a port the operating system picks one; the server prints the port
it is listening on. Sockets are IPv6 and, where the system allows it, accept
IPv4 clients too. When a client disconnects its socket is closed and
forgotten. The server runs until interrupted with Ctrl-C. Giving more than
one argument prints a usage line and exits with status 1; so does a PDU
larger than 1024 bytes.

## Running the client

```
pdunet-client HOST PORT
```

Type a line and press Enter. The line is sent with a trailing NUL byte,
and the server's echo is printed. When the server goes away the client
prints `Server terminated` and exits; it also exits at the end of its input.

## Using the PDU helpers

```python
import socket
from pdunet.pdu import encode_pdu, send_pdu, recv_pdu

assert encode_pdu(b"hi") == b"\x00\x04hi"

a, b = socket.socketpair()
send_pdu(a, b"hello\0")
print(recv_pdu(b, 1024))   # b'hello\x00'
```

`recv_pdu` returns an empty `bytes` object when the peer has closed the
connection, and raises `PDUError` when the announced PDU is larger than
the buffer size you allow. `encode_pdu` raises `PDUError` when the PDU
would not fit in the 2-byte length.

## What it does not do

The UDP helpers only open sockets; there is no UDP server or client
command. Host lookups are available as functions only, not as a command.

## Running the tests

```
pip install .[test]
pytest
```