from .reader import ByteReader
from .types import AbilityNumber, Gender, HiddenPower, Language, Nature, Stats
from .pkx import Pkx, RecordSizeError
