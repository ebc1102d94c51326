"""
Record cipher and checksum shared by the Gen 8/9 PKX formats.

Stored record layout:
  - 0x00: encryption constant (4 bytes, never encrypted)
  - 0x04: sanity placeholder (2 bytes)
  - 0x06: checksum (2 bytes)
  - 0x08: four equal-size blocks, shuffled and keyed
  - optional trailing party stats, keyed on their own

Decryption:
  1. XOR every 16-bit little-endian word after the header with the high
     half of an LCG seeded by the encryption constant.
  2. Unshuffle the four blocks. The on-disk order is one of 24
     permutations, chosen by bits 13-17 of the encryption constant.

Encryption runs the same two steps in reverse with the inverse
permutation. Nothing here raises on malformed input: bad bytes decode to
other bad bytes.
"""

import struct
import logging
from typing import List, Sequence

from ..core.reader import ByteReader

logger = logging.getLogger(__name__)

# ── Constants ──────────────────────────────────────────────────────────────────

HEADER_SIZE   = 8           # EC + sanity + checksum, stored in the clear
BLOCK_COUNT   = 4           # Shuffled blocks after the header
LCG_MULT      = 0x41C64E6D
LCG_ADD       = 0x00006073

# Block order lookup (shuffle value 0-31). Row N lists, for each output
# block, which input block it is copied from. Rows 24-31 repeat rows 0-7
# so the 5-bit shuffle value indexes directly.
BLOCK_POSITION: List[Sequence[int]] = [
    (0, 1, 2, 3), (0, 1, 3, 2), (0, 2, 1, 3), (0, 3, 1, 2),
    (0, 2, 3, 1), (0, 3, 2, 1), (1, 0, 2, 3), (1, 0, 3, 2),
    (2, 0, 1, 3), (3, 0, 1, 2), (2, 0, 3, 1), (3, 0, 2, 1),
    (1, 2, 0, 3), (1, 3, 0, 2), (2, 1, 0, 3), (3, 1, 0, 2),
    (2, 3, 0, 1), (3, 2, 0, 1), (1, 2, 3, 0), (1, 3, 2, 0),
    (2, 1, 3, 0), (3, 1, 2, 0), (2, 3, 1, 0), (3, 2, 1, 0),

    (0, 1, 2, 3), (0, 1, 3, 2), (0, 2, 1, 3), (0, 3, 1, 2),
    (0, 2, 3, 1), (0, 3, 2, 1), (1, 0, 2, 3), (1, 0, 3, 2),
]

# BLOCK_POSITION_INVERT[sv] is the row that undoes BLOCK_POSITION[sv]
BLOCK_POSITION_INVERT: List[int] = [
    0, 1, 2, 4, 3, 5, 6, 7, 12, 18, 13, 19, 8, 10, 14, 20,
    16, 22, 9, 11, 15, 21, 17, 23,
    0, 1, 2, 4, 3, 5, 6, 7,
]


# ── Keystream ──────────────────────────────────────────────────────────────────

def get_shuffle_value(encryption_constant: int) -> int:
    """Block shuffle selector: bits 13-17 of the encryption constant."""
    return (encryption_constant >> 13) & 31


def crypt_array(data: bytearray, start: int, end: int, seed: int) -> None:
    """
    XOR the 16-bit words in data[start:end] with the LCG keystream, in place.

    A trailing odd byte is left untouched. The transform is its own
    inverse for a given seed.
    """
    end = min(end, len(data))
    for i in range(start, end - 1, 2):
        seed = (LCG_MULT * seed + LCG_ADD) & 0xFFFFFFFF
        word = struct.unpack_from('<H', data, i)[0]
        struct.pack_into('<H', data, i, word ^ (seed >> 16))


def crypt_pkm(data: bytearray, encryption_constant: int, block_size: int) -> None:
    """Key the block region, then any party stats, each from a fresh seed."""
    end = HEADER_SIZE + BLOCK_COUNT * block_size
    crypt_array(data, HEADER_SIZE, end, encryption_constant)
    if len(data) > end:
        crypt_array(data, end, len(data), encryption_constant)


# ── Block shuffle ──────────────────────────────────────────────────────────────

def shuffle_array(data: bytes, shuffle_value: int, block_size: int) -> bytearray:
    """
    Reorder the four blocks after the header.

    Output block N is input block BLOCK_POSITION[shuffle_value][N]. The
    header and anything after the blocks are copied as-is.
    """
    out = bytearray(data)
    order = BLOCK_POSITION[shuffle_value]
    for block, source in enumerate(order):
        src = HEADER_SIZE + source * block_size
        dst = HEADER_SIZE + block * block_size
        out[dst:dst + block_size] = data[src:src + block_size]
    return out


def _has_blocks(data: bytes, block_size: int) -> bool:
    return len(data) >= HEADER_SIZE + BLOCK_COUNT * block_size


# ── Public API ─────────────────────────────────────────────────────────────────

def decrypt(data: bytes, block_size: int) -> bytes:
    """Obfuscated -> clear. Returns a new buffer."""
    ec = ByteReader(data).read_le(0x00, 32)
    sv = get_shuffle_value(ec)
    logger.debug(f"Decrypting {len(data)}-byte record (ec=0x{ec:08X}, sv={sv})")

    work = bytearray(data)
    crypt_pkm(work, ec, block_size)
    if not _has_blocks(work, block_size):
        logger.debug(f"Record too short to unshuffle: {len(work)} bytes")
        return bytes(work)
    return bytes(shuffle_array(work, sv, block_size))


def encrypt(data: bytes, block_size: int) -> bytes:
    """Clear -> obfuscated. Exact inverse of decrypt()."""
    ec = ByteReader(data).read_le(0x00, 32)
    sv = get_shuffle_value(ec)
    logger.debug(f"Encrypting {len(data)}-byte record (ec=0x{ec:08X}, sv={sv})")

    if _has_blocks(data, block_size):
        work = shuffle_array(data, BLOCK_POSITION_INVERT[sv], block_size)
    else:
        logger.debug(f"Record too short to shuffle: {len(data)} bytes")
        work = bytearray(data)
    crypt_pkm(work, ec, block_size)
    return bytes(work)


def is_encrypted(data: bytes, sentinels: Sequence[int]) -> bool:
    """
    True if any sentinel word is nonzero.

    Sentinel offsets hold zero in every clear record, while the keystream
    makes them nonzero in practically every obfuscated one.
    """
    reader = ByteReader(data)
    return any(reader.read_le(offset, 16) != 0 for offset in sentinels)


def calculate_checksum(region: bytes) -> int:
    """Sum of 16-bit little-endian words, truncated to 16 bits."""
    total = 0
    for i in range(0, len(region) - 1, 2):
        total += struct.unpack_from('<H', region, i)[0]
    return total & 0xFFFF
