"""Packing of signed 2D grid coordinates into a single integer cell key.

x lives in the high 16 bits and y in the low 16 bits of a signed 32-bit
integer. Each axis covers [-32768, 32767]; values outside that range wrap
modulo 65536 instead of raising, so (32768, 0) and (-32768, 0) share a key.
Callers doing pattern placement arithmetic near the edges get the wrapped
cell, which keeps keys bit-compatible with saved snapshots.
"""

from typing import Tuple

MIN_COORD = -32768
MAX_COORD = 32767

_MASK16 = 0xFFFF
_SIGN16 = 0x8000
_SIGN32 = 0x80000000


def _signed16(value: int) -> int:
    value &= _MASK16
    return value - 0x10000 if value & _SIGN16 else value


def encode(x: int, y: int) -> int:
    """Pack (x, y) into a signed 32-bit key."""
    key = ((x & _MASK16) << 16) | (y & _MASK16)
    if key & _SIGN32:
        key -= 1 << 32
    return key


def decode(key: int) -> Tuple[int, int]:
    """Unpack a key produced by encode() back into (x, y)."""
    return _signed16(key >> 16), _signed16(key)
