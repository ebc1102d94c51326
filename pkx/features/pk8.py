"""
Gen 8 (Sword / Shield) PKX record support.

Same 328-byte stored size, 80-byte blocks and cipher as PK9. The layouts
differ in the gender bits of 0x22 and the language offset.
"""

from typing import Tuple

from ..core.pkx import Pkx
from ..core.types import AbilityNumber, Gender, Language, Nature, Stats

NAME_LENGTH = 26


class PK8(Pkx):
    """A Sword/Shield record."""

    STORED_SIZE          = 328
    BLOCK_SIZE           = 80
    ENCRYPTION_SENTINELS = (0x70, 0x110)

    @property
    def encryption_constant(self) -> int:
        return self._reader.read_le(0x00, 32)

    @property
    def sanity(self) -> int:
        return self._reader.read_le(0x04, 16)

    @property
    def checksum(self) -> int:
        return self._reader.read_le(0x06, 16)

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
        # Bit 3 is the favorite mark, bit 4 Gigantamax
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
        # Bits 2-3
        return Gender((self._reader.read(0x22) >> 2) & 3)

    @property
    def evs(self) -> Stats:
        read = self._reader.read
        return Stats(hp=read(0x26), attack=read(0x27), defense=read(0x28),
                     speed=read(0x29), special_attack=read(0x2A),
                     special_defense=read(0x2B))

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

    @property
    def ht_name(self) -> str:
        return self._reader.read_string(0xA8, NAME_LENGTH)

    @property
    def current_handler(self) -> int:
        return self._reader.read(0xC4)

    @property
    def ht_friendship(self) -> int:
        return self._reader.read(0xC8)

    @property
    def language(self) -> Language:
        return Language(self._reader.read(0xE2))

    @property
    def ot_name(self) -> str:
        return self._reader.read_string(0xF8, NAME_LENGTH)

    @property
    def ot_friendship(self) -> int:
        return self._reader.read(0x112)
