"""
Torrent package: metadata decoding, info hashing and the torrent descriptor.
"""
from .metainfo import MetaInfo, TorrentMetadata, encode_info, hash_info
from .pieces import HASH_LEN, split_piece_hashes
from .torrent_file import TorrentFile

__all__ = [
    'MetaInfo',
    'TorrentMetadata',
    'TorrentFile',
    'encode_info',
    'hash_info',
    'split_piece_hashes',
    'HASH_LEN',
]
