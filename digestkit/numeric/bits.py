"""
Word-Level Bit Primitives

Shift, rotate and modular add on Python ints treated as fixed-width
unsigned words. The generic functions (rotl, rotr, shl, shr) validate the
amount and back the WideUint types; the fixed-width helpers (rotl32,
rotr64, add32, ...) skip validation and are meant for compression loops
whose amounts are compile-time constants.
"""

from ..errors import EnforceTypeError, OutOfRangeError


# ============================================================================
# Constants
# ============================================================================

MASK_8 = 0xFF
MASK_32 = 0xFFFFFFFF
MASK_64 = 0xFFFFFFFFFFFFFFFF


def mask(width: int) -> int:
    """All-ones mask for a word of `width` bits."""
    return (1 << width) - 1


def check_amount(by, width: int) -> int:
    """
    Validate a shift/rotate amount for a `width`-bit word.

    Amounts 0..width inclusive are accepted; `width` itself is an identity
    rotate and a zeroing shift.

    Raises:
        EnforceTypeError: If `by` is not an int (bool is rejected)
        OutOfRangeError: If `by` is outside 0..width
    """
    if isinstance(by, bool) or not isinstance(by, int):
        raise EnforceTypeError("by", "int", by)
    if by < 0 or by > width:
        raise OutOfRangeError("by", by, 0, width)
    return by


# ============================================================================
# Validated generic operations
# ============================================================================

def shl(value: int, by: int, width: int) -> int:
    """Logical left shift within `width` bits."""
    check_amount(by, width)
    return (value << by) & mask(width)


def shr(value: int, by: int, width: int) -> int:
    """Logical right shift within `width` bits."""
    check_amount(by, width)
    return (value & mask(width)) >> by


def rotl(value: int, by: int, width: int) -> int:
    """Rotate left within `width` bits."""
    check_amount(by, width)
    by %= width
    m = mask(width)
    value &= m
    return ((value << by) | (value >> (width - by))) & m


def rotr(value: int, by: int, width: int) -> int:
    """Rotate right within `width` bits."""
    check_amount(by, width)
    by %= width
    m = mask(width)
    value &= m
    return ((value >> by) | (value << (width - by))) & m


# ============================================================================
# Unchecked fixed-width helpers (hot loops)
# ============================================================================

def rotl32(x: int, n: int) -> int:
    return ((x << n) | (x >> (32 - n))) & MASK_32


def rotr32(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & MASK_32


def rotl64(x: int, n: int) -> int:
    return ((x << n) | (x >> (64 - n))) & MASK_64


def rotr64(x: int, n: int) -> int:
    return ((x >> n) | (x << (64 - n))) & MASK_64


def add32(*terms: int) -> int:
    """Sum of the terms modulo 2**32."""
    return sum(terms) & MASK_32


def add64(*terms: int) -> int:
    """Sum of the terms modulo 2**64."""
    return sum(terms) & MASK_64
