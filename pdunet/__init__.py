"""Length-prefixed PDU messaging over TCP with a polling echo server and client."""

__version__ = "0.1.0"
__all__ = ["client", "hostlookup", "networks", "pdu", "pollset", "server"]