"""
Utility functions for tracker communication.
"""
import string
import struct
from ipaddress import IPv4Address
from typing import List, NamedTuple

from ..exceptions import MalformedPeerListLength

# 4-byte IPv4 address + 2-byte big-endian port
PEER_SIZE = 6
_PEER_STRUCT = struct.Struct(">4sH")

_ALPHANUMERIC = frozenset((string.ascii_letters + string.digits).encode())


class Peer(NamedTuple):
    """A peer address as handed out by a tracker."""
    ip: IPv4Address
    port: int

    def __str__(self):
        return f"{self.ip}:{self.port}"


def compact_to_peers(blob: bytes) -> List[Peer]:
    """
    Decodes a compact peer list (6 bytes per peer: 4 for IP, 2 for port)
    into Peers, in input order.
    """
    if len(blob) % PEER_SIZE != 0:
        raise MalformedPeerListLength(len(blob))

    return [
        Peer(IPv4Address(ip_bytes), port)
        for ip_bytes, port in _PEER_STRUCT.iter_unpack(bytes(blob))
    ]


def percent_encode(data: bytes) -> str:
    """%HH-escapes every byte that is not an ASCII letter or digit."""
    return ''.join(
        chr(byte) if byte in _ALPHANUMERIC else f'%{byte:02X}'
        for byte in data
    )
