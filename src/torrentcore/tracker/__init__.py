"""
Tracker package: announce URL building and tracker response decoding.
"""
from .http_tracker import DEFAULT_PORT, build_tracker_url, peers_from_response
from .tracker_client import TrackerClient
from .utils import PEER_SIZE, Peer, compact_to_peers, percent_encode

__all__ = [
    'build_tracker_url',
    'peers_from_response',
    'TrackerClient',
    'Peer',
    'compact_to_peers',
    'percent_encode',
    'DEFAULT_PORT',
    'PEER_SIZE',
]
