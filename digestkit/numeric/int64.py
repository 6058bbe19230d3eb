"""
Signed 64-bit Integer

Two's-complement 64-bit value. The raw bit pattern is stored unsigned;
`negative` reads the most significant bit. Bitwise operations act on the
pattern, add/sub wrap like a machine register, right shift is arithmetic
(sign-filling). Multiplication is not provided.
"""

from ..errors import EnforceTypeError, NotSupportedError, OutOfRangeError, SizeError
from . import bits


# ============================================================================
# Constants
# ============================================================================

MIN_INT = -(1 << 63)
MAX_INT = (1 << 63) - 1
_SIGN_BIT = 1 << 63


def _check_bytes(value) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise EnforceTypeError("data", "bytes-like", value)
    return bytes(value)


class Int64:
    """
    Immutable two's-complement signed 64-bit integer.

    Example:
        >>> Int64.from_int(-1).to_bytes_be().hex()
        'ffffffffffffffff'
        >>> Int64.from_int(-8).r_shift(1).to_int()
        -4
    """

    __slots__ = ('_bits',)

    BITS = 64
    BYTES = 8

    def __init__(self, value: int = 0):
        if isinstance(value, bool) or not isinstance(value, int):
            raise EnforceTypeError("value", "int", value)
        if value < MIN_INT or value > MAX_INT:
            raise OutOfRangeError("value", value, MIN_INT, MAX_INT)
        self._bits = value & bits.MASK_64

    @classmethod
    def _make(cls, pattern: int) -> 'Int64':
        obj = object.__new__(cls)
        obj._bits = pattern & bits.MASK_64
        return obj

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_int(cls, value: int) -> 'Int64':
        """Build from a Python int in [-2**63, 2**63)."""
        return cls(value)

    @classmethod
    def from_limbs(cls, *limbs: int) -> 'Int64':
        """
        Build from 32-bit limbs, least significant first.

        Unspecified high limbs take the sign of the last given limb.
        """
        if len(limbs) > 2:
            raise SizeError("limbs", "<=2", len(limbs))
        if not limbs:
            return cls._make(0)
        low = limbs[0] & bits.MASK_32
        if len(limbs) == 2:
            high = limbs[1] & bits.MASK_32
        else:
            high = bits.MASK_32 if low >> 31 else 0
        return cls._make((high << 32) | low)

    @classmethod
    def from_bytes_be(cls, data: bytes) -> 'Int64':
        data = _check_bytes(data)
        if len(data) != cls.BYTES:
            raise SizeError("data", cls.BYTES, len(data))
        return cls._make(int.from_bytes(data, 'big'))

    @classmethod
    def from_bytes_le(cls, data: bytes) -> 'Int64':
        data = _check_bytes(data)
        if len(data) != cls.BYTES:
            raise SizeError("data", cls.BYTES, len(data))
        return cls._make(int.from_bytes(data, 'little'))

    @classmethod
    def from_min_bytes_be(cls, data: bytes) -> 'Int64':
        """Sign-extending inverse of to_min_bytes_be."""
        data = _check_bytes(data)
        if not 1 <= len(data) <= cls.BYTES:
            raise SizeError("data", f"1..{cls.BYTES}", len(data))
        return cls(int.from_bytes(data, 'big', signed=True))

    @classmethod
    def zero(cls) -> 'Int64':
        return cls._make(0)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def negative(self) -> bool:
        return bool(self._bits & _SIGN_BIT)

    def to_int(self) -> int:
        return self._bits - (1 << 64) if self._bits & _SIGN_BIT else self._bits

    def __int__(self) -> int:
        return self.to_int()

    @property
    def limbs(self):
        return (self._bits & bits.MASK_32, self._bits >> 32)

    def to_bytes_be(self) -> bytes:
        return self._bits.to_bytes(8, 'big')

    def to_bytes_le(self) -> bytes:
        return self._bits.to_bytes(8, 'little')

    def to_min_bytes_be(self) -> bytes:
        """
        Shortest big-endian two's-complement encoding.

        Redundant 0x00 (positive) or 0xFF (negative) leading bytes are
        dropped, but never one whose removal would flip the sign bit of
        the new leading byte.
        """
        raw = self.to_bytes_be()
        fill = 0xFF if self.negative else 0x00
        start = 0
        while start < 7 and raw[start] == fill and (raw[start + 1] & 0x80) == (fill & 0x80):
            start += 1
        return raw[start:]

    # ------------------------------------------------------------------
    # Bitwise / shifts
    # ------------------------------------------------------------------

    def _other(self, other) -> int:
        if type(other) is not Int64:
            raise EnforceTypeError("operand", "Int64", other)
        return other._bits

    def xor(self, other: 'Int64') -> 'Int64':
        return self._make(self._bits ^ self._other(other))

    def or_(self, other: 'Int64') -> 'Int64':
        return self._make(self._bits | self._other(other))

    def and_(self, other: 'Int64') -> 'Int64':
        return self._make(self._bits & self._other(other))

    def not_(self) -> 'Int64':
        return self._make(~self._bits)

    def l_shift(self, by: int) -> 'Int64':
        return self._make(bits.shl(self._bits, by, 64))

    def r_shift(self, by: int) -> 'Int64':
        """Arithmetic right shift; shifting by 64 leaves 0 or -1."""
        bits.check_amount(by, 64)
        return self._make(self.to_int() >> by)

    def l_rot(self, by: int) -> 'Int64':
        return self._make(bits.rotl(self._bits, by, 64))

    def r_rot(self, by: int) -> 'Int64':
        return self._make(bits.rotr(self._bits, by, 64))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: 'Int64') -> 'Int64':
        return self._make(self._bits + self._other(other))

    def sub(self, other: 'Int64') -> 'Int64':
        return self._make(self._bits - self._other(other))

    def neg(self) -> 'Int64':
        return self._make(-self._bits)

    def abs(self) -> 'Int64':
        """Absolute value; abs(MIN_INT) wraps to MIN_INT."""
        return self.neg() if self.negative else self

    def mul(self, other: 'Int64') -> 'Int64':
        raise NotSupportedError("Int64 does not support multiplication")

    # ------------------------------------------------------------------
    # Comparison (signed)
    # ------------------------------------------------------------------

    def eq(self, other: 'Int64') -> bool:
        return self._bits == self._other(other)

    def gt(self, other: 'Int64') -> bool:
        self._other(other)
        return self.to_int() > other.to_int()

    def gte(self, other: 'Int64') -> bool:
        self._other(other)
        return self.to_int() >= other.to_int()

    def lt(self, other: 'Int64') -> bool:
        self._other(other)
        return self.to_int() < other.to_int()

    def lte(self, other: 'Int64') -> bool:
        self._other(other)
        return self.to_int() <= other.to_int()

    __xor__ = xor
    __or__ = or_
    __and__ = and_
    __invert__ = not_
    __lshift__ = l_shift
    __rshift__ = r_shift
    __add__ = add
    __sub__ = sub
    __neg__ = neg
    __mul__ = mul

    def __eq__(self, other) -> bool:
        if type(other) is not Int64:
            return NotImplemented
        return self._bits == other._bits

    def __lt__(self, other) -> bool:
        if type(other) is not Int64:
            return NotImplemented
        return self.to_int() < other.to_int()

    def __le__(self, other) -> bool:
        if type(other) is not Int64:
            return NotImplemented
        return self.to_int() <= other.to_int()

    def __gt__(self, other) -> bool:
        if type(other) is not Int64:
            return NotImplemented
        return self.to_int() > other.to_int()

    def __ge__(self, other) -> bool:
        if type(other) is not Int64:
            return NotImplemented
        return self.to_int() >= other.to_int()

    def __hash__(self) -> int:
        return hash(('Int64', self._bits))

    def __repr__(self) -> str:
        return f"Int64({self.to_int()})"
