"""
Decoding of .torrent metadata into MetaInfo / TorrentMetadata records,
plus the canonical re-encoding of the info dictionary and its SHA-1 hash.
"""
import hashlib
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

from ..bencode import BencodeDict, BencodeInt, BencodeList, BencodeString, DictCursor
from ..bencode.encoder import encode_fields
from ..exceptions import InvalidField, InvalidUtf8, MissingField

logger = logging.getLogger(__name__)


# --------------------------
# Field extraction helpers
# --------------------------

def _require(d: BencodeDict, key: bytes):
    value = d.get(key)
    if value is None:
        raise MissingField(key.decode())
    return value


def _as_int(value, key: bytes) -> int:
    if not isinstance(value, BencodeInt):
        raise InvalidField(key.decode(), "expected an integer")
    return value.value


def _as_bytes(value, key: bytes) -> bytes:
    if not isinstance(value, BencodeString):
        raise InvalidField(key.decode(), "expected a byte string")
    return value.value


def _as_text(value, key: bytes) -> str:
    raw = _as_bytes(value, key)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidUtf8(key.decode()) from exc


def _optional_text(d: BencodeDict, key: bytes) -> Optional[str]:
    value = d.get(key)
    return None if value is None else _as_text(value, key)


def _announce_list(d: BencodeDict) -> Tuple[Tuple[str, ...], ...]:
    ann_list_b = d.get(b"announce-list")
    if ann_list_b is None:
        return ()
    if not isinstance(ann_list_b, BencodeList):
        raise InvalidField("announce-list", "expected a list of tiers")

    tiers = []
    for tier in ann_list_b.value:
        if not isinstance(tier, BencodeList):
            raise InvalidField("announce-list", "each tier must be a list")
        urls = tuple(_as_text(u, b"announce-list") for u in tier.value)
        if urls:
            tiers.append(urls)
    return tuple(tiers)


# --------------------------
# Info dictionary
# --------------------------

@dataclass(frozen=True)
class MetaInfo:
    """The single-file info dictionary of a torrent."""
    name: str
    piece_length: int
    length: int
    pieces: bytes
    private: bool = False
    # Verbatim bencoded info dictionary, when decoded from a document.
    # A plain dataclasses.replace() copy keeps it; use with_fields() instead.
    raw: Optional[bytes] = field(default=None, compare=False, repr=False)

    def with_fields(self, **changes) -> "MetaInfo":
        """Copy with some fields changed. The copy drops ``raw``, so it hashes canonically."""
        return replace(self, raw=None, **changes)

    def __post_init__(self):
        if self.piece_length < 1:
            raise InvalidField("piece length", f"must be >= 1, got {self.piece_length}")
        if self.length < 0:
            raise InvalidField("length", f"must be >= 0, got {self.length}")

    @classmethod
    def from_bencode(cls, info: BencodeDict, raw: Optional[bytes] = None) -> "MetaInfo":
        if not isinstance(info, BencodeDict):
            raise InvalidField("info", "expected a dictionary")

        pieces = _as_bytes(_require(info, b"pieces"), b"pieces")
        piece_length = _as_int(_require(info, b"piece length"), b"piece length")
        length = _as_int(_require(info, b"length"), b"length")
        name = _as_text(_require(info, b"name"), b"name")

        private_b = info.get(b"private")
        private = private_b is not None and _as_int(private_b, b"private") == 1

        return cls(
            name=name,
            piece_length=piece_length,
            length=length,
            pieces=pieces,
            private=private,
            raw=raw,
        )

    def to_bencode(self) -> bytes:
        return encode_info(self)


def encode_info(info: MetaInfo) -> bytes:
    """
    Bencodes the four known info fields in fixed ascending key order:
    length, name, piece length, pieces. Other keys are not included.
    """
    return encode_fields([
        (b"length", info.length),
        (b"name", info.name),
        (b"piece length", info.piece_length),
        (b"pieces", info.pieces),
    ])


def hash_info(info: MetaInfo) -> bytes:
    """SHA-1 digest of the canonical info encoding."""
    return hashlib.sha1(encode_info(info)).digest()


# --------------------------
# Whole torrent
# --------------------------

@dataclass(frozen=True)
class TorrentMetadata:
    """Decoded top-level torrent dictionary."""
    announce: str
    info: MetaInfo
    announce_list: Tuple[Tuple[str, ...], ...] = ()
    comment: Optional[str] = None
    created_by: Optional[str] = None
    creation_date: Optional[int] = None
    encoding: Optional[str] = None

    @classmethod
    def from_bencode(cls, root: BencodeDict, info_raw: Optional[bytes] = None) -> "TorrentMetadata":
        """
        Builds the record from a decoded root dictionary. ``info_raw`` is the
        verbatim info dictionary slice, if the caller has it.
        """
        if not isinstance(root, BencodeDict):
            raise InvalidField("<root>", "torrent must be a dictionary")

        announce = _as_text(_require(root, b"announce"), b"announce")
        info = MetaInfo.from_bencode(_require(root, b"info"), raw=info_raw)

        date_b = root.get(b"creation date")
        creation_date = None if date_b is None else _as_int(date_b, b"creation date")

        return cls(
            announce=announce,
            info=info,
            announce_list=_announce_list(root),
            comment=_optional_text(root, b"comment"),
            created_by=_optional_text(root, b"created by"),
            creation_date=creation_date,
            encoding=_optional_text(root, b"encoding"),
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "TorrentMetadata":
        """Decodes a whole .torrent document, keeping the raw info bytes."""
        if data[:1] not in (b"d", b""):
            raise InvalidField("<root>", "torrent must be a dictionary")
        cursor = DictCursor(data)
        root = {}
        info_raw = None

        for key, value in cursor:
            root[key] = value
            if key == b"info":
                start, end = cursor.last_span
                info_raw = cursor.data[start:end]

        meta = cls.from_bencode(BencodeDict(root), info_raw=info_raw)
        logger.debug(
            "Decoded torrent %r: %d bytes, piece length %d",
            meta.info.name, meta.info.length, meta.info.piece_length,
        )
        return meta

    @classmethod
    def open(cls, path) -> "TorrentMetadata":
        """Reads and decodes a .torrent file. OSError propagates unchanged."""
        raw = Path(path).read_bytes()
        logger.debug("Read %d bytes from %s", len(raw), path)
        return cls.from_bytes(raw)
