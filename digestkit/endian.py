"""
Endian Codec

Conversions between byte strings and fixed-width unsigned words in either
byte order. The hash engines use these to load message blocks and to
serialize their chaining state.

Features:
- Single-word reads/writes at an offset (32 and 64 bit, BE and LE)
- Bulk block <-> word list conversion via struct
"""

import struct
from typing import Iterable, Tuple

from .errors import OutOfRangeError, SizeError


# ============================================================================
# Constants
# ============================================================================

BIG = 'big'
LITTLE = 'little'

_STRUCT_ORDER = {BIG: '>', LITTLE: '<'}
_STRUCT_CODE = {4: 'I', 8: 'Q'}


def _check_order(byteorder: str) -> str:
    try:
        return _STRUCT_ORDER[byteorder]
    except KeyError:
        raise OutOfRangeError(
            "byteorder", byteorder, detail="'big' or 'little'"
        ) from None


def _check_width(width: int) -> str:
    try:
        return _STRUCT_CODE[width]
    except KeyError:
        raise OutOfRangeError("width", width, detail="4 or 8") from None


def _read(buf: bytes, pos: int, width: int, byteorder: str) -> int:
    end = pos + width
    if pos < 0 or end > len(buf):
        raise SizeError("buffer", f">={end}", len(buf))
    return int.from_bytes(buf[pos:end], byteorder)


def u32_from_bytes_be(buf: bytes, pos: int = 0) -> int:
    """Read a big-endian 32-bit word starting at `pos`."""
    return _read(buf, pos, 4, BIG)


def u32_from_bytes_le(buf: bytes, pos: int = 0) -> int:
    """Read a little-endian 32-bit word starting at `pos`."""
    return _read(buf, pos, 4, LITTLE)


def u64_from_bytes_be(buf: bytes, pos: int = 0) -> int:
    """Read a big-endian 64-bit word starting at `pos`."""
    return _read(buf, pos, 8, BIG)


def u64_from_bytes_le(buf: bytes, pos: int = 0) -> int:
    """Read a little-endian 64-bit word starting at `pos`."""
    return _read(buf, pos, 8, LITTLE)


def u32_to_bytes_be(value: int) -> bytes:
    return (value & 0xFFFFFFFF).to_bytes(4, BIG)


def u32_to_bytes_le(value: int) -> bytes:
    return (value & 0xFFFFFFFF).to_bytes(4, LITTLE)


def u64_to_bytes_be(value: int) -> bytes:
    return (value & 0xFFFFFFFFFFFFFFFF).to_bytes(8, BIG)


def u64_to_bytes_le(value: int) -> bytes:
    return (value & 0xFFFFFFFFFFFFFFFF).to_bytes(8, LITTLE)


def words_from_bytes(buf: bytes, count: int, width: int = 4,
                     byteorder: str = BIG) -> Tuple[int, ...]:
    """
    Unpack `count` unsigned words of `width` bytes from the start of `buf`.

    Args:
        buf: Source bytes (at least count * width long)
        count: Number of words to read
        width: Word width in bytes (4 or 8)
        byteorder: 'big' or 'little'

    Returns:
        Tuple of word integers

    Raises:
        SizeError: If buf is too short
    """
    fmt = f"{_check_order(byteorder)}{count}{_check_width(width)}"
    needed = count * width
    if len(buf) < needed:
        raise SizeError("buffer", f">={needed}", len(buf))
    return struct.unpack_from(fmt, buf)


def words_to_bytes(words: Iterable[int], width: int = 4,
                   byteorder: str = BIG) -> bytes:
    """Pack words into bytes, each truncated to `width` bytes."""
    words = tuple(words)
    mask = (1 << (8 * width)) - 1
    fmt = f"{_check_order(byteorder)}{len(words)}{_check_width(width)}"
    return struct.pack(fmt, *(w & mask for w in words))
