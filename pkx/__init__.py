"""
pkx: codec for Gen 8/9 creature records.

Converts between the obfuscated on-disk record form and the clear form,
validates checksums, and exposes typed fields through the `Pkx` contract.
"""

from typing import Dict, Type

from .config import CodecConfig
from .core import (
    AbilityNumber, ByteReader, Gender, HiddenPower, Language, Nature,
    Pkx, RecordSizeError, Stats,
)
from .features.pk8 import PK8
from .features.pk9 import PK9

__version__ = "1.0.0"

# Format name -> record class. Choosing the format is the caller's job.
RECORD_FORMATS: Dict[str, Type[Pkx]] = {
    'pk8': PK8,
    'pk9': PK9,
}

CodecConfig.apply_log_level()

__all__ = [
    'AbilityNumber', 'ByteReader', 'CodecConfig', 'Gender', 'HiddenPower',
    'Language', 'Nature', 'PK8', 'PK9', 'Pkx', 'RECORD_FORMATS',
    'RecordSizeError', 'Stats',
]
