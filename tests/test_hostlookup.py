import pytest

from pdunet.hostlookup import (
    NOT_FOUND,
    LookupError_,
    format_ipv4,
    format_ipv6,
    format_sockaddr,
    lookup_ipv4,
    lookup_ipv6,
    lookup_report,
    print_ip_info,
    run_lookup_demo,
)


def test_format_none_gives_marker():
    assert format_ipv4(None) == "(IP not found)"
    assert format_ipv6(None) == NOT_FOUND


def test_format_ipv4_packed():
    assert format_ipv4(b"\x7f\x00\x00\x01") == "127.0.0.1"


def test_lookup_ipv4_numeric_round_trip():
    address = lookup_ipv4("127.0.0.1")
    assert len(address) == 4
    assert format_ipv4(address) == "127.0.0.1"


def test_lookup_ipv6_numeric():
    address = lookup_ipv6("::1")
    assert address == bytes(15) + b"\x01"
    assert format_ipv6(address) == "::1"


@pytest.mark.parametrize("lookup", [lookup_ipv4, lookup_ipv6])
def test_unknown_host_raises(lookup):
    with pytest.raises(LookupError_, match="does not exist"):
        lookup("does not exist")


def test_format_sockaddr_normalises():
    assert format_sockaddr(("0:0:0:0:0:0:0:1", 80, 0, 0)) == "::1"
    assert format_sockaddr(("127.0.0.1", 80)) == "127.0.0.1"


def test_print_ip_info(capsys):
    print_ip_info(("::1", 4242, 0, 0))
    assert capsys.readouterr().out == "IP: ::1 Port: 4242\n"


def test_lookup_report_ipv4_line():
    lines = lookup_report("127.0.0.1")
    assert "IPv4 Host: 127.0.0.1 IP: 127.0.0.1 " in lines


def test_lookup_report_unknown_host(capsys):
    assert lookup_report("does not exist") == []
    assert "Error getaddrinfo (host: does not exist)" in capsys.readouterr().err


def test_run_lookup_demo_prints_blank_line_per_host(capsys):
    run_lookup_demo(["does not exist", "does not exist"])
    assert capsys.readouterr().out == "\n\n"