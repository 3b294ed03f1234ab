from ipaddress import IPv4Address

import pytest

from torrentcore.bencode import encode
from torrentcore.exceptions import (
    InvalidField,
    MalformedPeerListLength,
    MissingField,
    TrackerFailure,
    UnexpectedEof,
)
from torrentcore.tracker.http_tracker import peers_from_response
from torrentcore.tracker.utils import Peer, compact_to_peers

# One peer  : 1.2.3.4:6881   (6881 = 0x1AE1)
PEERS_SINGLE = bytes([1, 2, 3, 4, 0x1A, 0xE1])

# Two peers : 1.1.1.1:80  |  8.8.8.8:6881
PEERS_TWO = bytes([
    1, 1, 1, 1, 0x00, 0x50,
    8, 8, 8, 8, 0x1A, 0xE1,
])


def test_compact_empty():
    assert compact_to_peers(b"") == []


def test_compact_single_peer():
    peers = compact_to_peers(PEERS_SINGLE)
    assert peers == [Peer(IPv4Address("1.2.3.4"), 6881)]
    assert str(peers[0]) == "1.2.3.4:6881"


def test_compact_multiple_peers_keep_order():
    peers = compact_to_peers(PEERS_TWO)
    assert len(peers) == 2
    assert peers[0].ip == IPv4Address("1.1.1.1")
    assert peers[0].port == 80
    assert peers[1].ip == IPv4Address("8.8.8.8")
    assert peers[1].port == 6881


def test_compact_peer_unpacks_as_tuple():
    ip, port = compact_to_peers(PEERS_SINGLE)[0]
    assert (str(ip), port) == ("1.2.3.4", 6881)


@pytest.mark.parametrize("length", [1, 5, 7, 13])
def test_compact_malformed_length_fails(length):
    with pytest.raises(MalformedPeerListLength) as exc:
        compact_to_peers(b"\x7f" * length)
    assert exc.value.length == length
    assert str(length) in str(exc.value)
    assert "malformed" in str(exc.value).lower()


def test_response_compact_peers():
    peers = peers_from_response(b"d5:peers6:\x01\x02\x03\x04\x1A\xe1e")
    assert peers == [Peer(IPv4Address("1.2.3.4"), 6881)]


def test_response_ignores_other_keys():
    body = encode({b"interval": 1800, b"complete": 3, b"peers": PEERS_TWO})
    assert len(peers_from_response(body)) == 2


def test_response_non_compact_peers():
    body = encode({b"peers": [
        {b"ip": b"10.0.0.1", b"peer id": b"x" * 20, b"port": 51413},
        {b"ip": b"tracker.example", b"port": 1},
        {b"ip": b"::1", b"port": 2},
        {b"ip": b"10.0.0.2", b"port": 70000},
    ]})
    assert peers_from_response(body) == [Peer(IPv4Address("10.0.0.1"), 51413)]


def test_response_failure_reason():
    with pytest.raises(TrackerFailure) as exc:
        peers_from_response(b"d14:failure reason9:not founde")
    assert exc.value.reason == "not found"


def test_response_missing_peers():
    with pytest.raises(MissingField) as exc:
        peers_from_response(b"d8:intervali1800ee")
    assert exc.value.field == "peers"


def test_response_bad_peers_type():
    with pytest.raises(InvalidField):
        peers_from_response(b"d5:peersi1ee")


def test_response_malformed_compact_peers():
    with pytest.raises(MalformedPeerListLength):
        peers_from_response(b"d5:peers5:\x01\x02\x03\x04\x1Ae")


def test_response_truncated():
    with pytest.raises(UnexpectedEof):
        peers_from_response(b"d5:peers")
