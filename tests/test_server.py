import io
import socket

import pytest

from pdunet.pdu import encode_pdu, recv_pdu
from pdunet.server import EchoServer, main, parse_port


@pytest.fixture
def listener():
    sock = socket.create_server(("127.0.0.1", 0))
    yield sock
    sock.close()


def test_parse_port_default_is_zero():
    assert parse_port([]) == 0


def test_parse_port_reads_number():
    assert parse_port(["8080"]) == 8080


def test_parse_port_stops_at_non_digit():
    assert parse_port(["12abc"]) == 12


def test_parse_port_non_numeric_is_zero():
    assert parse_port(["abc"]) == 0


def test_parse_port_too_many_arguments():
    with pytest.raises(ValueError):
        parse_port(["1", "2"])


def test_main_usage_error_returns_failure():
    assert main(["1", "2"]) == 1


def test_recv_from_client_echoes(listener):
    a, b = socket.socketpair()
    out = io.StringIO()
    server = EchoServer(listener, out=out)
    try:
        b.sendall(encode_pdu(b"hello\0"))
        data = server.recv_from_client(a)
        assert data == b"hello\0"
        assert recv_pdu(b) == b"hello\0"
        assert "Bytes recv: 6 | Message: hello" in out.getvalue()
        assert "Bytes sent: 6" in out.getvalue()
    finally:
        a.close()
        b.close()


def test_recv_from_client_closed_connection(listener):
    a, b = socket.socketpair()
    out = io.StringIO()
    server = EchoServer(listener, out=out)
    server.poll_set.add(a)
    assert len(server.poll_set) == 2
    b.close()
    assert server.recv_from_client(a) == b""
    assert "Connection closed by other side" in out.getvalue()
    assert len(server.poll_set) == 1


def test_handle_ready_accepts_and_echoes(listener):
    out = io.StringIO()
    server = EchoServer(listener, out=out)
    client = socket.create_connection(listener.getsockname())
    try:
        server.handle_ready(listener.fileno())
        assert len(server.poll_set) == 2
        assert len(server.clients) == 1
        assert "New client connected" in out.getvalue()

        client.sendall(encode_pdu(b"hi\0"))
        fd = server.poll_set.poll(2000)
        assert fd in server.clients
        server.handle_ready(fd)
        assert recv_pdu(client) == b"hi\0"
    finally:
        client.close()
        for sock in list(server.clients.values()):
            sock.close()


def test_handle_ready_removes_departed_client(listener):
    out = io.StringIO()
    server = EchoServer(listener, out=out)
    client = socket.create_connection(listener.getsockname())
    server.handle_ready(listener.fileno())
    client.close()
    fd = server.poll_set.poll(2000)
    server.handle_ready(fd)
    assert server.clients == {}
    assert len(server.poll_set) == 1