"""
Bencode encoder for BitTorrent metainfo and tracker requests.
"""
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString


def encode(obj) -> bytes:
    """Encodes a Python object or Bencode value into bencoded bytes."""

    if isinstance(obj, bool):
        raise TypeError("Cannot bencode a bool")

    if isinstance(obj, (int, BencodeInt)):
        value = obj if isinstance(obj, int) else obj.value
        return encode_int(value)

    if isinstance(obj, str):
        return encode_str(obj)

    if isinstance(obj, (bytes, bytearray, BencodeString)):
        value = obj.value if isinstance(obj, BencodeString) else bytes(obj)
        return encode_bytes(value)

    if isinstance(obj, (list, tuple, BencodeList)):
        value = obj.value if isinstance(obj, BencodeList) else obj
        return encode_list(value)

    if isinstance(obj, (dict, BencodeDict)):
        value = obj if isinstance(obj, dict) else obj.value
        return encode_dict(value)

    raise TypeError(f"Cannot bencode object of type {type(obj)}")


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return f"i{n}e".encode()


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return str(len(b)).encode() + b":" + b


def encode_str(s: str) -> bytes:
    """Encodes a string as its UTF-8 bytes (e.g., 4:spam)."""
    return encode_bytes(s.encode("utf-8"))


def encode_list(lst) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    encoded_items = b''.join(encode(x) for x in lst)
    return b"l" + encoded_items + b"e"


def _key_to_bytes(k) -> bytes:
    return k if isinstance(k, bytes) else k.encode("utf-8")


def encode_dict(d: dict) -> bytes:
    """Encodes a dictionary with keys in ascending byte order (e.g., d3:cow3:mooe)."""
    parts = [b"d"]
    for key in sorted(d.keys(), key=_key_to_bytes):
        parts.append(encode_bytes(_key_to_bytes(key)))
        parts.append(encode(d[key]))
    parts.append(b"e")
    return b"".join(parts)


def encode_fields(fields) -> bytes:
    """
    Encodes (key, value) pairs as a dictionary in exactly the given order.

    Used where the key order is fixed by the caller rather than sorted.
    """
    parts = [b"d"]
    for key, value in fields:
        parts.append(encode_bytes(_key_to_bytes(key)))
        parts.append(encode(value))
    parts.append(b"e")
    return b"".join(parts)
