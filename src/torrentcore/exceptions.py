"""
Exception hierarchy for torrentcore.

Every error raised by the decoders and builders derives from
TorrentCoreError, so callers can catch the whole family at once or pick
the specific failure they care about.
"""
from typing import Any, Dict, Optional


class TorrentCoreError(Exception):
    """Base exception for all torrentcore errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


# --------------------------
# Decoding
# --------------------------

class DecodeError(TorrentCoreError):
    """Input bytes could not be turned into a torrent record."""


class BencodeDecodeError(DecodeError):
    """Malformed bencode input."""

    def __init__(self, message: str, position: Optional[int] = None):
        details = {"position": position} if position is not None else None
        super().__init__(message, details)
        self.position = position


class UnexpectedEof(BencodeDecodeError):
    """Input ended in the middle of a token."""


class InvalidLength(BencodeDecodeError):
    """Byte string length prefix is malformed or runs past the input."""


class InvalidInteger(BencodeDecodeError):
    """Integer token is not a canonical signed 64-bit decimal."""


class InvalidDictionaryKey(BencodeDecodeError):
    """Dictionary key is not a byte string, or repeats."""


class InvalidToken(BencodeDecodeError):
    """A value starts with a byte that opens no bencode token."""


class TrailingData(BencodeDecodeError):
    """Bytes remain after the top-level value."""


class NestingTooDeep(BencodeDecodeError):
    """Lists/dictionaries nest deeper than the decoder allows."""


class MissingField(DecodeError):
    """A required metadata key is absent."""

    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field!r}")
        self.field = field


class InvalidField(DecodeError):
    """A metadata key holds the wrong shape or an out-of-range value."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid field {field!r}: {reason}")
        self.field = field
        self.reason = reason


class InvalidUtf8(DecodeError):
    """A text field is not valid UTF-8."""

    def __init__(self, field: str):
        super().__init__(f"Field {field!r} is not valid UTF-8")
        self.field = field


# --------------------------
# Validation
# --------------------------

class ValidationError(TorrentCoreError):
    """Decoded data has an impossible length."""

    def __init__(self, message: str, length: int):
        super().__init__(message, {"length": length})
        self.length = length


class MalformedPieceLength(ValidationError):
    """The pieces blob is not a whole number of 20-byte hashes."""

    def __init__(self, length: int):
        super().__init__(
            f"Received malformed pieces: length {length} is not a multiple of 20",
            length,
        )


class MalformedPeerListLength(ValidationError):
    """The compact peer blob is not a whole number of 6-byte entries."""

    def __init__(self, length: int):
        super().__init__(
            f"Received malformed peers list: length {length} is not a multiple of 6",
            length,
        )


# --------------------------
# Tracker
# --------------------------

class InvalidAnnounceUrl(TorrentCoreError):
    """The announce string is not an absolute URL."""

    def __init__(self, announce: str):
        super().__init__(f"Invalid announce URL: {announce}")
        self.announce = announce


class TrackerFailure(TorrentCoreError):
    """The tracker answered with a 'failure reason'."""

    def __init__(self, reason: str):
        super().__init__(f"Tracker error: {reason}")
        self.reason = reason
