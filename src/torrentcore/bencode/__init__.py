"""
Bencode package for encoding and decoding BitTorrent data.
"""
from .decoder import MAX_DEPTH, BencodeDecoder, DictCursor, decode
from .encoder import encode, encode_fields
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeValue

__all__ = [
    'decode',
    'encode',
    'encode_fields',
    'BencodeDecoder',
    'DictCursor',
    'MAX_DEPTH',
    'BencodeInt',
    'BencodeString',
    'BencodeList',
    'BencodeDict',
    'BencodeValue',
]
