"""
Bencode decoder for BitTorrent metainfo and tracker responses.
"""
import re

from ..exceptions import (
    BencodeDecodeError,
    InvalidDictionaryKey,
    InvalidInteger,
    InvalidLength,
    InvalidToken,
    NestingTooDeep,
    TrailingData,
    UnexpectedEof,
)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString

# Lists/dicts may nest this deep before the input is rejected
MAX_DEPTH = 256

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
# Digits in the widest int64 magnitude
INT64_MAX_DIGITS = len(str(INT64_MAX))

_INT_RE = re.compile(rb"-?(0|[1-9][0-9]*)")


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into BencodeInt/String/List/Dict values.
    """
    def __init__(self, data: bytes, max_depth: int = MAX_DEPTH):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Cannot decode object of type {type(data)}")
        self.data = bytes(data)
        self.max_depth = max_depth
        self.i = 0  # cursor index

    def decode(self):
        """Main decode entry point. Decodes the entire Bencoded data."""
        result = self._parse_value(0)
        if self.i != len(self.data):
            raise TrailingData(
                f"{len(self.data) - self.i} trailing bytes after value", self.i
            )
        return result

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _peek(self):
        if self.i >= len(self.data):
            raise UnexpectedEof("Unexpected end of input", self.i)
        return self.data[self.i:self.i+1]

    def _consume(self, n=1):
        """Moves cursor forward by n bytes and returns the consumed chunk."""
        chunk = self.data[self.i:self.i+n]
        self.i += n
        return chunk

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self, depth: int):
        ch = self._peek()

        if ch == b'i':
            return self._parse_int()

        if ch.isdigit():  # Bencode strings start with length, which is a digit
            return self._parse_string()

        if ch == b'l':
            return self._parse_list(depth)

        if ch == b'd':
            return self._parse_dict(depth)

        raise InvalidToken(f"Invalid token at index {self.i}: {ch!r}", self.i)

    def _parse_int(self):
        """Parses an integer from the Bencoded data."""
        start = self.i
        self._consume(1)  # skip 'i'

        end_pos = self.data.find(b'e', self.i)
        if end_pos == -1:
            raise UnexpectedEof("Unterminated integer", start)

        number_bytes = self.data[self.i:end_pos]
        if not _INT_RE.fullmatch(number_bytes) or number_bytes == b"-0":
            raise InvalidInteger(f"Invalid integer format: {number_bytes!r}", start)
        if len(number_bytes.lstrip(b"-")) > INT64_MAX_DIGITS:
            raise InvalidInteger("Integer out of 64-bit range", start)

        num = int(number_bytes)
        if not INT64_MIN <= num <= INT64_MAX:
            raise InvalidInteger(f"Integer out of 64-bit range: {num}", start)

        self.i = end_pos + 1  # skip 'e'
        return BencodeInt(num)

    def _parse_string(self):
        """Parses a byte string from the Bencoded data."""
        start = self.i
        # read length until ':'
        colon = self.data.find(b':', self.i)
        if colon == -1:
            if self.data[self.i:].isdigit():
                raise UnexpectedEof("Unterminated string length", start)
            raise InvalidLength("Invalid string length", start)

        length_bytes = self.data[self.i:colon]
        if not length_bytes.isdigit():
            raise InvalidLength(f"Invalid string length: {length_bytes!r}", start)
        if len(length_bytes) > len(str(len(self.data))):
            raise InvalidLength("String length exceeds input size", start)

        length = int(length_bytes)
        if colon + 1 + length > len(self.data):
            raise InvalidLength(
                f"String length {length} exceeds remaining "
                f"{len(self.data) - colon - 1} bytes",
                start,
            )

        self.i = colon + 1
        return BencodeString(self._consume(length))

    def _parse_key(self, seen: set) -> bytes:
        """Parses a dictionary key, which MUST be a byte string."""
        start = self.i
        if not self._peek().isdigit():
            raise InvalidDictionaryKey(
                f"Dictionary key at index {start} is not a byte string", start
            )
        key = self._parse_string().value
        if key in seen:
            raise InvalidDictionaryKey(f"Duplicate dictionary key {key!r}", start)
        seen.add(key)
        return key

    def _enter(self, depth: int):
        if depth >= self.max_depth:
            raise NestingTooDeep(f"Nesting deeper than {self.max_depth} levels", self.i)

    def _parse_list(self, depth: int):
        """Parses a list from the Bencoded data."""
        self._enter(depth)
        self._consume(1)  # skip 'l'
        items = []

        while self._peek() != b'e':
            items.append(self._parse_value(depth + 1))

        self._consume(1)  # skip 'e'
        return BencodeList(items)

    def _parse_dict(self, depth: int):
        """Parses a dictionary from the Bencoded data."""
        self._enter(depth)
        self._consume(1)  # skip 'd'
        obj = {}
        seen = set()

        while self._peek() != b'e':
            key = self._parse_key(seen)
            obj[key] = self._parse_value(depth + 1)

        self._consume(1)  # skip 'e'
        return BencodeDict(obj)


class DictCursor:
    """
    Walks a top-level bencoded dictionary one (key, value) pair at a time.

    After each pair, ``last_span`` holds the (start, end) offsets of that
    value in the input, so the verbatim bytes can be sliced out; this is how
    the info dictionary is hashed exactly as it appears in the file.
    """
    def __init__(self, data: bytes, max_depth: int = MAX_DEPTH):
        self._decoder = BencodeDecoder(data, max_depth)
        self._seen = set()
        self._done = False
        self.last_span = None

        if self._decoder._peek() != b'd':
            raise BencodeDecodeError("Expected a dictionary at index 0", 0)
        self._decoder._consume(1)  # skip 'd'

    @property
    def data(self) -> bytes:
        return self._decoder.data

    def next_pair(self):
        """Returns the next (key, value) pair, or None once the dict ends."""
        if self._done:
            return None

        dec = self._decoder
        if dec._peek() == b'e':
            dec._consume(1)
            self._done = True
            if dec.i != len(dec.data):
                raise TrailingData(
                    f"{len(dec.data) - dec.i} trailing bytes after value", dec.i
                )
            return None

        key = dec._parse_key(self._seen)
        start = dec.i
        value = dec._parse_value(1)
        self.last_span = (start, dec.i)
        return key, value

    def __iter__(self):
        while True:
            pair = self.next_pair()
            if pair is None:
                return
            yield pair


def decode(data: bytes):
    """
    Convenience function to decode Bencoded data.
    """
    return BencodeDecoder(data).decode()
