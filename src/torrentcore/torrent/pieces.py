"""
Splitting of the concatenated 'pieces' blob into per-piece SHA-1 hashes.
"""
from typing import List

from ..exceptions import MalformedPieceLength

# SHA-1 digest size
HASH_LEN = 20


def split_piece_hashes(pieces: bytes) -> List[bytes]:
    """
    Splits the raw 'pieces' string into 20-byte hashes, index = piece index.
    Raises MalformedPieceLength if the blob is not a whole number of hashes.
    """
    if len(pieces) % HASH_LEN != 0:
        raise MalformedPieceLength(len(pieces))
    return [bytes(pieces[i:i+HASH_LEN]) for i in range(0, len(pieces), HASH_LEN)]
