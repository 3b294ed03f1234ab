"""
Data structures for representing Bencoded types.

A bencode value is exactly one of four shapes. They share no base
class: BencodeValue is the union, and callers pick a shape apart with
isinstance().
"""
from typing import Union

__all__ = [
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "BencodeValue",
]


class BencodeInt:
    """Represents a Bencoded integer."""
    __slots__ = ("value",)

    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, BencodeInt):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash((BencodeInt, self.value))

    def __repr__(self):
        return f"BencodeInt({self.value})"


class BencodeString:
    """Represents a Bencoded byte string."""
    __slots__ = ("value",)

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError("BencodeString requires bytes.")
        self.value = bytes(value)

    def __eq__(self, other):
        if not isinstance(other, BencodeString):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash((BencodeString, self.value))

    def __repr__(self):
        return f"BencodeString({self.value!r})"


class BencodeList:
    """Represents a Bencoded list."""
    __slots__ = ("value",)

    def __init__(self, value: list):
        if not isinstance(value, list):
            raise TypeError("BencodeList requires a list.")
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, BencodeList):
            return NotImplemented
        return self.value == other.value

    __hash__ = None

    def __repr__(self):
        return f"BencodeList({self.value!r})"


class BencodeDict:
    """Represents a Bencoded dictionary. Key order is parse order."""
    __slots__ = ("value",)

    def __init__(self, value: dict):
        if not isinstance(value, dict):
            raise TypeError("BencodeDict requires a dict.")
        # keys must be bytes (bencode requirement)
        for k in value.keys():
            if not isinstance(k, (bytes, bytearray)):
                raise TypeError("BencodeDict keys must be bytes.")
        self.value = value

    def get(self, key: bytes, default=None):
        return self.value.get(key, default)

    def __contains__(self, key):
        return key in self.value

    def __eq__(self, other):
        if not isinstance(other, BencodeDict):
            return NotImplemented
        return self.value == other.value

    __hash__ = None

    def __repr__(self):
        return f"BencodeDict({self.value!r})"


BencodeValue = Union[BencodeInt, BencodeString, BencodeList, BencodeDict]

# Concrete shapes for isinstance() checks
BENCODE_TYPES = (BencodeInt, BencodeString, BencodeList, BencodeDict)
