"""
torrentcore: .torrent metadata decoding, info hashing, tracker announce URLs
and compact peer lists.
"""
import logging

from .bencode import decode, encode
from .exceptions import (
    DecodeError,
    InvalidAnnounceUrl,
    TorrentCoreError,
    TrackerFailure,
    ValidationError,
)
from .torrent import MetaInfo, TorrentFile, TorrentMetadata, hash_info, split_piece_hashes
from .tracker import Peer, TrackerClient, build_tracker_url, compact_to_peers, peers_from_response

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "decode",
    "encode",
    "MetaInfo",
    "TorrentMetadata",
    "TorrentFile",
    "hash_info",
    "split_piece_hashes",
    "Peer",
    "TrackerClient",
    "build_tracker_url",
    "compact_to_peers",
    "peers_from_response",
    "TorrentCoreError",
    "DecodeError",
    "ValidationError",
    "InvalidAnnounceUrl",
    "TrackerFailure",
]
