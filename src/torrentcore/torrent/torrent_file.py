import hashlib
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..tracker.http_tracker import DEFAULT_PORT, build_tracker_url
from .metainfo import TorrentMetadata, hash_info
from .pieces import HASH_LEN, split_piece_hashes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TorrentFile:
    """
    Immutable torrent descriptor handed to the download engine.

    Build it with from_metadata(), from_bytes() or open(); info_hash is
    always derived from the info dictionary.
    """
    announce: str
    info_hash: bytes
    piece_hashes: Tuple[bytes, ...]
    piece_length: int
    length: int
    name: str
    announce_list: Tuple[Tuple[str, ...], ...] = ()
    private: bool = False
    comment: Optional[str] = None
    created_by: Optional[str] = None
    creation_date: Optional[int] = None
    encoding: Optional[str] = None

    def __post_init__(self):
        if len(self.info_hash) != HASH_LEN:
            raise ValueError("info_hash must be 20 bytes")

    @classmethod
    def from_metadata(cls, meta: TorrentMetadata) -> "TorrentFile":
        info = meta.info
        if info.raw is not None:
            # exact bytes from the file, extra info keys included
            info_hash = hashlib.sha1(info.raw).digest()
            source = "raw info dictionary"
        else:
            info_hash = hash_info(info)
            source = "canonical encoding"
        logger.debug("info_hash %s computed from %s", info_hash.hex(), source)

        return cls(
            announce=meta.announce,
            info_hash=info_hash,
            piece_hashes=tuple(split_piece_hashes(info.pieces)),
            piece_length=info.piece_length,
            length=info.length,
            name=info.name,
            announce_list=meta.announce_list,
            private=info.private,
            comment=meta.comment,
            created_by=meta.created_by,
            creation_date=meta.creation_date,
            encoding=meta.encoding,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "TorrentFile":
        return cls.from_metadata(TorrentMetadata.from_bytes(data))

    @classmethod
    def open(cls, path) -> "TorrentFile":
        return cls.from_metadata(TorrentMetadata.open(path))

    # ------------------ PIECES ------------------

    @property
    def num_pieces(self) -> int:
        return len(self.piece_hashes)

    @property
    def last_piece_length(self) -> int:
        if not self.piece_hashes:
            return 0
        return (self.length % self.piece_length) or self.piece_length

    def piece_size(self, index: int) -> int:
        """Byte size of piece ``index``; only the last piece may be short."""
        if not 0 <= index < self.num_pieces:
            raise IndexError(f"piece index {index} out of range")
        if index == self.num_pieces - 1:
            return self.last_piece_length
        return self.piece_length

    # ------------------ TRACKER ------------------

    def build_tracker_url(self, peer_id: bytes, port: int = DEFAULT_PORT) -> str:
        return build_tracker_url(self, peer_id, port)

    def __repr__(self):
        return (
            f"TorrentFile(name={self.name!r}, length={self.length}, pieces={self.num_pieces}, "
            f"info_hash={self.info_hash.hex()}, announce={self.announce!r})"
        )
