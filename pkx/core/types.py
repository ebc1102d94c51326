"""
Typed values decoded from PKX records.

Raw bytes in a record can hold anything, so every enum here maps an
unknown raw value to its INVALID member instead of raising.
"""

from typing import Dict
from dataclasses import dataclass, asdict
from enum import Enum


class _TotalEnum(Enum):
    """Enum whose lookup by raw value never fails."""

    @classmethod
    def _missing_(cls, value):
        return cls.INVALID


class Nature(_TotalEnum):
    """Natures in game index order."""
    HARDY   = 0
    LONELY  = 1
    BRAVE   = 2
    ADAMANT = 3
    NAUGHTY = 4
    BOLD    = 5
    DOCILE  = 6
    RELAXED = 7
    IMPISH  = 8
    LAX     = 9
    TIMID   = 10
    HASTY   = 11
    SERIOUS = 12
    JOLLY   = 13
    NAIVE   = 14
    MODEST  = 15
    MILD    = 16
    QUIET   = 17
    BASHFUL = 18
    RASH    = 19
    CALM    = 20
    GENTLE  = 21
    SASSY   = 22
    CAREFUL = 23
    QUIRKY  = 24
    INVALID = 25


class Gender(_TotalEnum):
    MALE       = 0
    FEMALE     = 1
    GENDERLESS = 2
    INVALID    = 3


class AbilityNumber(_TotalEnum):
    """Which of the species' ability slots the record's ability came from."""
    INVALID = 0
    FIRST   = 1
    SECOND  = 2
    HIDDEN  = 4


class Language(_TotalEnum):
    INVALID   = 0
    JAPANESE  = 1
    ENGLISH   = 2
    FRENCH    = 3
    ITALIAN   = 4
    GERMAN    = 5
    SPANISH   = 7
    KOREAN    = 8
    CHINESE_S = 9
    CHINESE_T = 10


class HiddenPower(_TotalEnum):
    """Hidden Power types, indexed by the 0-15 hidden power number."""
    FIGHTING = 0
    FLYING   = 1
    POISON   = 2
    GROUND   = 3
    ROCK     = 4
    BUG      = 5
    GHOST    = 6
    STEEL    = 7
    FIRE     = 8
    WATER    = 9
    GRASS    = 10
    ELECTRIC = 11
    PSYCHIC  = 12
    ICE      = 13
    DRAGON   = 14
    DARK     = 15
    INVALID  = 16


@dataclass(frozen=True)
class Stats:
    """One value per stat, used for both IVs and EVs."""
    hp: int = 0
    attack: int = 0
    defense: int = 0
    special_attack: int = 0
    special_defense: int = 0
    speed: int = 0

    @property
    def total(self) -> int:
        return (self.hp + self.attack + self.defense +
                self.special_attack + self.special_defense + self.speed)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)
