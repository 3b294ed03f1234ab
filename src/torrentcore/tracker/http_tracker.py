import logging
from ipaddress import AddressValueError, IPv4Address
from typing import List, Optional
from urllib.parse import urlsplit, urlunsplit

from ..bencode import BencodeDict, BencodeInt, BencodeList, BencodeString, decode
from ..exceptions import InvalidAnnounceUrl, InvalidField, MissingField, TrackerFailure
from .utils import Peer, compact_to_peers, percent_encode

logger = logging.getLogger(__name__)

DEFAULT_PORT = 6881
PEER_ID_LEN = 20


def parse_announce_url(announce: str):
    """Splits an announce URL, which must be absolute (scheme and host)."""
    try:
        parts = urlsplit(announce)
    except ValueError as exc:
        raise InvalidAnnounceUrl(announce) from exc
    if not parts.scheme or not parts.netloc:
        raise InvalidAnnounceUrl(announce)
    return parts


def build_tracker_url(torrent, peer_id: bytes, port: int = DEFAULT_PORT,
                      url: Optional[str] = None) -> str:
    """
    Builds the announce request URL for ``torrent`` (anything with
    announce, info_hash and length). The announce URL's query, if any, is
    replaced; ``url`` overrides the announce URL, e.g. for announce-list
    entries.
    """
    if len(peer_id) != PEER_ID_LEN:
        raise ValueError("peer_id must be 20 bytes")
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"port out of range: {port}")

    announce = url if url is not None else torrent.announce
    parts = parse_announce_url(announce)

    params = [
        ("info_hash", percent_encode(torrent.info_hash)),
        ("peer_id", percent_encode(peer_id)),
        ("port", str(port)),
        ("uploaded", "0"),
        ("downloaded", "0"),
        ("compact", "1"),
        ("left", str(torrent.length)),
    ]
    query = "&".join(f"{k}={v}" for k, v in params)

    path = parts.path
    if not path and parts.scheme.lower() in ("http", "https"):
        path = "/"

    full_url = urlunsplit((parts.scheme, parts.netloc, path, query, parts.fragment))
    logger.debug("Announce URL: %s", full_url)
    return full_url


def _non_compact_peers(entries: BencodeList) -> List[Peer]:
    peers = []
    for peer_dict_b in entries.value:
        if not isinstance(peer_dict_b, BencodeDict):
            continue
        ip_b = peer_dict_b.get(b"ip")
        port_b = peer_dict_b.get(b"port")
        if not isinstance(ip_b, BencodeString) or not isinstance(port_b, BencodeInt):
            continue
        if not 0 <= port_b.value <= 0xFFFF:
            continue
        try:
            ip = IPv4Address(ip_b.value.decode("ascii"))
        except (UnicodeDecodeError, AddressValueError):
            logger.debug("Skipping non-IPv4 peer entry %r", ip_b.value)
            continue
        peers.append(Peer(ip, port_b.value))
    return peers


def peers_from_response(body: bytes) -> List[Peer]:
    """
    Extracts the peer list from a tracker's bencoded announce response.
    Only 'failure reason' and 'peers' are looked at.
    """
    root = decode(body)
    if not isinstance(root, BencodeDict):
        raise InvalidField("<root>", "tracker response must be a dictionary")

    failure = root.get(b"failure reason")
    if failure is not None:
        if isinstance(failure, BencodeString):
            raise TrackerFailure(failure.value.decode("utf-8", errors="replace"))
        raise TrackerFailure(repr(failure))

    peers_field = root.get(b"peers")
    if peers_field is None:
        raise MissingField("peers")

    if isinstance(peers_field, BencodeString):
        peers = compact_to_peers(peers_field.value)
    elif isinstance(peers_field, BencodeList):
        peers = _non_compact_peers(peers_field)
    else:
        raise InvalidField("peers", "expected a byte string or a list")

    logger.debug("Tracker returned %d peers", len(peers))
    return peers
