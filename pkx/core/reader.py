"""
Fixed-offset integer access over an immutable byte buffer.

Every read is total: an offset that falls outside the buffer yields 0
instead of raising, so a record layout can be read field by field even
when the bytes behind it are short or garbage.
"""

import struct
from typing import Dict

# Width in bits -> struct format character
_WIDTH_FORMATS: Dict[int, str] = {
    8:  'B',
    16: 'H',
    32: 'I',
}


class ByteReader:
    """Endian-aware reader over a bytes-like buffer. Never mutates it."""

    def __init__(self, data: bytes):
        self._data = data

    def __len__(self) -> int:
        return len(self._data)

    def read(self, offset: int, width: int = 8) -> int:
        """Read an unsigned integer in the host's native byte order."""
        return self._unpack('=', offset, width)

    def read_le(self, offset: int, width: int = 8) -> int:
        """Read an unsigned little-endian integer."""
        return self._unpack('<', offset, width)

    def read_string(self, offset: int, length: int) -> str:
        """
        Read a UTF-16LE string of at most `length` bytes.

        Stops at the first 0x0000 code unit. Undecodable units become
        U+FFFD rather than failing the read.
        """
        if offset < 0 or offset >= len(self._data):
            return ""
        raw = self._data[offset:offset + length]
        chars = []
        for i in range(0, len(raw) - 1, 2):
            unit = raw[i:i + 2]
            if unit == b'\x00\x00':
                break
            chars.append(unit)
        return b''.join(chars).decode('utf-16-le', errors='replace')

    def _unpack(self, order: str, offset: int, width: int) -> int:
        try:
            fmt = order + _WIDTH_FORMATS[width]
        except KeyError:
            raise ValueError(f"Unsupported read width: {width} bits") from None
        if offset < 0:
            return 0
        try:
            return struct.unpack_from(fmt, self._data, offset)[0]
        except struct.error:
            return 0
