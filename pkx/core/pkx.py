"""
Field contract shared by every PKX record format.

A concrete format (one per game generation) supplies its sizes and the
raw field reads. Everything derived from those fields (shininess, IVs,
hidden power, validity) is computed here, once, from the same formulas
the games use.

Records wrap an immutable clear buffer and read from it on every access.
Nothing is decoded up front and nothing is cached.
"""

import struct
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from ..config import CodecConfig
from ..features import poke_crypto
from .reader import ByteReader
from .types import AbilityNumber, Gender, HiddenPower, Language, Nature, Stats

logger = logging.getLogger(__name__)

P = TypeVar('P', bound='Pkx')


class RecordSizeError(ValueError):
    """Buffer length does not match the record format's stored size."""


class Pkx(ABC):
    """Abstract PKX record: a clear buffer plus typed field access."""

    STORED_SIZE: int = 0
    BLOCK_SIZE: int = 0
    CHECKSUM_OFFSET: int = 0x06
    CHECKSUM_START: int = poke_crypto.HEADER_SIZE
    ENCRYPTION_SENTINELS: Tuple[int, ...] = ()

    def __init__(self, data: Optional[bytes] = None):
        """
        Wrap an already-clear buffer.

        Args:
            data: Exactly STORED_SIZE bytes, or None for the empty record

        Raises:
            RecordSizeError: if data has the wrong length
        """
        if data is None:
            data = bytes(self.STORED_SIZE)
        if len(data) != self.STORED_SIZE:
            raise RecordSizeError(
                f"{type(self).__name__} needs {self.STORED_SIZE} bytes, got {len(data)}")
        self._data = bytes(data)
        self._reader = ByteReader(self._data)

    # ── Construction ───────────────────────────────────────────────────────────

    @classmethod
    def new(cls: Type[P], data: bytes) -> P:
        """Wrap data, decrypting it first if it looks obfuscated."""
        if len(data) == cls.STORED_SIZE and cls.is_encrypted(data):
            data = cls.decrypt(data)
        return cls(data)

    @classmethod
    def new_or_default(cls: Type[P], data: bytes) -> P:
        """
        Like new(), but a size mismatch yields the empty record.

        The empty record is all zero bytes, so callers can tell it apart
        with `is_empty`. With CodecConfig strict size enabled the
        RecordSizeError propagates instead.
        """
        try:
            record = cls.new(data)
        except RecordSizeError as e:
            if CodecConfig.strict_size():
                raise
            logger.warning(f"{e}; using empty record")
            return cls()
        if not record.is_valid:
            logger.debug(f"{cls.__name__} checksum/sanity mismatch "
                         f"(stored 0x{record.checksum:04X}, "
                         f"calculated 0x{record.calculate_checksum():04X})")
        return record

    @classmethod
    def is_encrypted(cls, data: bytes) -> bool:
        return poke_crypto.is_encrypted(data, cls.ENCRYPTION_SENTINELS)

    @classmethod
    def decrypt(cls, data: bytes) -> bytes:
        return poke_crypto.decrypt(data, cls.BLOCK_SIZE)

    @classmethod
    def encrypt(cls, data: bytes) -> bytes:
        return poke_crypto.encrypt(data, cls.BLOCK_SIZE)

    def get_encrypted(self) -> bytes:
        """This record in its obfuscated on-disk form."""
        return self.encrypt(self._data)

    @property
    def data(self) -> bytes:
        """The clear buffer."""
        return self._data

    def refresh_checksum(self: P) -> P:
        """Return a copy of this record with its checksum field recalculated."""
        buf = bytearray(self._data)
        struct.pack_into('<H', buf, self.CHECKSUM_OFFSET, self.calculate_checksum())
        return type(self)(bytes(buf))

    # ── Raw fields (per format) ────────────────────────────────────────────────

    @property
    @abstractmethod
    def encryption_constant(self) -> int: ...

    @property
    @abstractmethod
    def sanity(self) -> int: ...

    @property
    @abstractmethod
    def checksum(self) -> int: ...

    @property
    @abstractmethod
    def species(self) -> int: ...

    @property
    @abstractmethod
    def held_item(self) -> int: ...

    @property
    @abstractmethod
    def tid(self) -> int: ...

    @property
    @abstractmethod
    def sid(self) -> int: ...

    @property
    @abstractmethod
    def exp(self) -> int: ...

    @property
    @abstractmethod
    def ability(self) -> int: ...

    @property
    @abstractmethod
    def ability_number(self) -> AbilityNumber: ...

    @property
    @abstractmethod
    def pid(self) -> int: ...

    @property
    @abstractmethod
    def nature(self) -> Nature: ...

    @property
    @abstractmethod
    def minted_nature(self) -> Nature: ...

    @property
    @abstractmethod
    def gender(self) -> Gender: ...

    @property
    @abstractmethod
    def evs(self) -> Stats: ...

    @property
    @abstractmethod
    def nickname(self) -> str: ...

    @property
    @abstractmethod
    def move1(self) -> int: ...

    @property
    @abstractmethod
    def move2(self) -> int: ...

    @property
    @abstractmethod
    def move3(self) -> int: ...

    @property
    @abstractmethod
    def move4(self) -> int: ...

    @property
    @abstractmethod
    def move_pp(self) -> Tuple[int, int, int, int]: ...

    @property
    @abstractmethod
    def iv32(self) -> int: ...

    @property
    @abstractmethod
    def ht_name(self) -> str: ...

    @property
    @abstractmethod
    def language(self) -> Language: ...

    @property
    @abstractmethod
    def current_handler(self) -> int: ...

    @property
    @abstractmethod
    def ht_friendship(self) -> int: ...

    @property
    @abstractmethod
    def ot_name(self) -> str: ...

    @property
    @abstractmethod
    def ot_friendship(self) -> int: ...

    # ── Derived values ─────────────────────────────────────────────────────────

    @property
    def tsv(self) -> int:
        """Trainer shiny value."""
        return (self.tid ^ self.sid) >> 4

    @property
    def psv(self) -> int:
        """Personality shiny value."""
        pid = self.pid
        return ((pid >> 16) ^ (pid & 0xFFFF)) >> 4

    @property
    def is_shiny(self) -> bool:
        # Species 0 is an empty slot; its zeroed PID/TID would otherwise match
        if self.species == 0:
            return False
        return self.psv == self.tsv

    @property
    def ivs(self) -> Stats:
        # Packed order is hp, atk, def, spe, spa, spd (5 bits each)
        iv32 = self.iv32
        return Stats(
            hp=iv32 & 0x1F,
            attack=(iv32 >> 5) & 0x1F,
            defense=(iv32 >> 10) & 0x1F,
            speed=(iv32 >> 15) & 0x1F,
            special_attack=(iv32 >> 20) & 0x1F,
            special_defense=(iv32 >> 25) & 0x1F,
        )

    @property
    def is_egg(self) -> bool:
        return bool((self.iv32 >> 30) & 1)

    @property
    def is_nicknamed(self) -> bool:
        return bool((self.iv32 >> 31) & 1)

    @property
    def hidden_power_num(self) -> int:
        """Hidden power type index 0-15 from the low bit of each IV."""
        ivs = self.ivs
        bits = ((ivs.hp & 1)
                | (ivs.attack & 1) << 1
                | (ivs.defense & 1) << 2
                | (ivs.speed & 1) << 3
                | (ivs.special_attack & 1) << 4
                | (ivs.special_defense & 1) << 5)
        return bits * 15 // 63

    @property
    def hidden_power(self) -> HiddenPower:
        return HiddenPower(self.hidden_power_num)

    @property
    def moves(self) -> Tuple[int, int, int, int]:
        return (self.move1, self.move2, self.move3, self.move4)

    @property
    def current_friendship(self) -> int:
        """Friendship toward whoever currently holds the record."""
        if self.current_handler == 0:
            return self.ot_friendship
        return self.ht_friendship

    def calculate_checksum(self) -> int:
        return poke_crypto.calculate_checksum(self._data[self.CHECKSUM_START:self.STORED_SIZE])

    @property
    def is_valid(self) -> bool:
        return self.sanity == 0 and self.checksum == self.calculate_checksum()

    @property
    def is_empty(self) -> bool:
        """True for the all-zero default record."""
        return not any(self._data)

    # ── Conversions ────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        return {
            'format':              type(self).__name__.lower(),
            'encryption_constant': self.encryption_constant,
            'species':             self.species,
            'nickname':            self.nickname,
            'held_item':           self.held_item,
            'tid':                 self.tid,
            'sid':                 self.sid,
            'pid':                 self.pid,
            'exp':                 self.exp,
            'ability':             self.ability,
            'ability_number':      self.ability_number.name.lower(),
            'nature':              self.nature.name.lower(),
            'minted_nature':       self.minted_nature.name.lower(),
            'gender':              self.gender.name.lower(),
            'language':            self.language.name.lower(),
            'moves':               list(self.moves),
            'move_pp':             list(self.move_pp),
            'ivs':                 self.ivs.to_dict(),
            'evs':                 self.evs.to_dict(),
            'hidden_power':        self.hidden_power.name.lower(),
            'is_shiny':            self.is_shiny,
            'is_egg':              self.is_egg,
            'ot_name':             self.ot_name,
            'ht_name':             self.ht_name,
            'current_handler':     self.current_handler,
            'current_friendship':  self.current_friendship,
            'checksum':            self.checksum,
            'is_valid':            self.is_valid,
        }

    def __bytes__(self) -> bytes:
        return self._data

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._data))

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(species={self.species}, "
                f"pid=0x{self.pid:08X}, valid={self.is_valid})")
