"""
Entropy mixing:
Packs raw measurement bits and stretches them with SHA-256 into 32-bit words.
"""

from __future__ import annotations

import hashlib
from typing import List


def bits_to_bytes(bits: List[int]) -> bytes:
    """
    Pack a list of bits [0,1,1,0,...] into bytes (8 bits per byte, MSB first).
    If bits length is not a multiple of 8, pad with zeros at the end.
    """
    if not bits:
        return b""

    pad_len = (8 - (len(bits) % 8)) % 8
    bits_padded = list(bits) + [0] * pad_len

    byte_values = []
    for i in range(0, len(bits_padded), 8):
        byte = 0
        for bit in bits_padded[i : i + 8]:
            byte = (byte << 1) | (bit & 1)
        byte_values.append(byte)

    return bytes(byte_values)


def bytes_to_words(data: bytes) -> List[int]:
    """
    Split bytes into big-endian unsigned 32-bit words.
    A trailing partial word is dropped.
    """
    usable = len(data) - (len(data) % 4)
    return [
        int.from_bytes(data[i : i + 4], "big")
        for i in range(0, usable, 4)
    ]


def expand_to_words(seed: bytes, count: int, rounds: int = 1) -> List[int]:
    """
    Turn a seed into ``count`` 32-bit words.

    - Hash the seed ``rounds`` times with SHA-256 to mix it.
    - Stretch the digest in counter mode: sha256(digest || counter),
      8 words per block.
    """
    if count <= 0:
        return []

    digest = seed
    for _ in range(max(1, rounds)):
        digest = hashlib.sha256(digest).digest()

    stream = bytearray()
    counter = 0
    while len(stream) < count * 4:
        stream += hashlib.sha256(digest + counter.to_bytes(8, "big")).digest()
        counter += 1

    return bytes_to_words(bytes(stream))[:count]
