"""
Gen 9 (Scarlet / Violet) PKX record support.

PK9 Structure:
  - 328 bytes stored (box) size
  - 8 byte clear header: encryption constant, sanity, checksum
  - 4 blocks of 80 bytes, shuffled and keyed by the encryption constant
  - Checksum covers everything after the header

Obfuscation is detected from the sentinel words at 0x70 and 0x110,
which are always zero in a clear record.
"""

from typing import Tuple

from ..core.pkx import Pkx
from ..core.types import AbilityNumber, Gender, Language, Nature, Stats

NAME_LENGTH = 26    # 12 UTF-16 characters + terminator


class PK9(Pkx):
    """A Scarlet/Violet record."""

    STORED_SIZE          = 328
    BLOCK_SIZE           = 80
    ENCRYPTION_SENTINELS = (0x70, 0x110)

    # ── Header ─────────────────────────────────────────────────────────────────

    @property
    def encryption_constant(self) -> int:
        return self._reader.read_le(0x00, 32)

    @property
    def sanity(self) -> int:
        return self._reader.read_le(0x04, 16)

    @property
    def checksum(self) -> int:
        return self._reader.read_le(0x06, 16)

    # ── Block A ────────────────────────────────────────────────────────────────

    @property
    def species(self) -> int:
        return self._reader.read_le(0x08, 16)

    @property
    def held_item(self) -> int:
        return self._reader.read_le(0x0A, 16)

    @property
    def tid(self) -> int:
        return self._reader.read_le(0x0C, 16)

    @property
    def sid(self) -> int:
        return self._reader.read_le(0x0E, 16)

    @property
    def exp(self) -> int:
        return self._reader.read_le(0x10, 32)

    @property
    def ability(self) -> int:
        return self._reader.read(0x14, 16)

    @property
    def ability_number(self) -> AbilityNumber:
        # Bits 0-2; higher bits are unrelated flags
        return AbilityNumber(self._reader.read(0x16) & 7)

    @property
    def pid(self) -> int:
        return self._reader.read_le(0x1C, 32)

    @property
    def nature(self) -> Nature:
        return Nature(self._reader.read(0x20))

    @property
    def minted_nature(self) -> Nature:
        return Nature(self._reader.read(0x21))

    @property
    def gender(self) -> Gender:
        # Bit 0 is the fateful encounter flag, bits 1-2 the gender
        return Gender((self._reader.read(0x22) >> 1) & 3)

    @property
    def evs(self) -> Stats:
        read = self._reader.read
        return Stats(
            hp=read(0x26),
            attack=read(0x27),
            defense=read(0x28),
            speed=read(0x29),
            special_attack=read(0x2A),
            special_defense=read(0x2B),
        )

    # ── Block B ────────────────────────────────────────────────────────────────

    @property
    def nickname(self) -> str:
        return self._reader.read_string(0x58, NAME_LENGTH)

    @property
    def move1(self) -> int:
        return self._reader.read(0x72, 16)

    @property
    def move2(self) -> int:
        return self._reader.read(0x74, 16)

    @property
    def move3(self) -> int:
        return self._reader.read(0x76, 16)

    @property
    def move4(self) -> int:
        return self._reader.read(0x78, 16)

    @property
    def move_pp(self) -> Tuple[int, int, int, int]:
        read = self._reader.read
        return (read(0x7A), read(0x7B), read(0x7C), read(0x7D))

    @property
    def iv32(self) -> int:
        return self._reader.read_le(0x8C, 32)

    # ── Block C ────────────────────────────────────────────────────────────────

    @property
    def ht_name(self) -> str:
        return self._reader.read_string(0xA8, NAME_LENGTH)

    @property
    def language(self) -> Language:
        return Language(self._reader.read(0xC3))

    @property
    def current_handler(self) -> int:
        return self._reader.read(0xC4)

    @property
    def ht_friendship(self) -> int:
        return self._reader.read(0xC8)

    # ── Block D ────────────────────────────────────────────────────────────────

    @property
    def ot_name(self) -> str:
        return self._reader.read_string(0xF8, NAME_LENGTH)

    @property
    def ot_friendship(self) -> int:
        return self._reader.read(0x112)
