"""
Fixed-Width Unsigned Integers

Value types that behave exactly like N-bit unsigned machine words for
N in {32, 64, 128, 256, 512}. Every result is reduced modulo 2**N: add
and sub discard the final carry/borrow, mul discards partial products
above N bits, shifts drop the bits pushed out.

Components:
- WideUint: shared implementation, parameterised by the class attribute BITS
- U32, U64, U128, U256, U512: concrete widths
- WideUintMut: in-place variant for hot loops (obtained with .mut())

The magnitude is kept as a single masked Python int. A little-endian
32-bit limb view is available through `limbs` / `from_limbs()` for code
that thinks in words.
"""

from typing import Tuple, Type, TypeVar

from ..errors import EnforceTypeError, OutOfRangeError, SizeError
from . import bits


T = TypeVar('T', bound='WideUint')


def _check_int(noun: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EnforceTypeError(noun, "int", value)
    return value


def _check_bytes(noun: str, value) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise EnforceTypeError(noun, "bytes-like", value)
    return bytes(value)


class WideUint:
    """
    Immutable N-bit unsigned integer.

    Subclasses only set BITS. Binary operations require both operands to
    be the same class; mixing widths raises EnforceTypeError.

    Example:
        >>> a = U64.from_int(0xFFFFFFFFFFFFFFFF)
        >>> a.add(U64.from_int(2))
        U64(0000000000000001)
        >>> U32.from_int(0x80000000).l_rot(1).to_int()
        1
    """

    __slots__ = ('_value',)

    BITS = 0

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.BITS:
            cls.BYTES = cls.BITS // 8
            cls.LIMBS = (cls.BITS + 31) // 32
            cls.MASK = (1 << cls.BITS) - 1

    def __init__(self, value: int = 0):
        _check_int("value", value)
        if value < 0 or value > self.MASK:
            raise OutOfRangeError("value", value, 0, self.MASK)
        self._value = value

    @classmethod
    def _make(cls: Type[T], value: int) -> T:
        # Trusted path: value is already reduced
        obj = object.__new__(cls)
        obj._value = value
        return obj

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_int(cls: Type[T], value: int) -> T:
        """
        Build from a Python int in [0, 2**N).

        Raises:
            EnforceTypeError: If value is not an int (bool included)
            OutOfRangeError: If value is negative or too large
        """
        return cls(value)

    @classmethod
    def wrap(cls: Type[T], value: int) -> T:
        """Build from any int, reducing it modulo 2**N."""
        _check_int("value", value)
        return cls._make(value & cls.MASK)

    @classmethod
    def from_limbs(cls: Type[T], *limbs: int) -> T:
        """
        Build from 32-bit limbs, least significant first.

        Each limb is truncated to 32 bits; missing high limbs are zero.

        Raises:
            SizeError: If more than ceil(N/32) limbs are given
        """
        if len(limbs) > cls.LIMBS:
            raise SizeError("limbs", f"<={cls.LIMBS}", len(limbs))
        value = 0
        for i, limb in enumerate(limbs):
            value |= (_check_int("limb", limb) & bits.MASK_32) << (32 * i)
        return cls._make(value & cls.MASK)

    @classmethod
    def from_bytes_be(cls: Type[T], data: bytes) -> T:
        """Build from exactly N/8 big-endian bytes (else SizeError)."""
        data = _check_bytes("data", data)
        if len(data) != cls.BYTES:
            raise SizeError("data", cls.BYTES, len(data))
        return cls._make(int.from_bytes(data, 'big'))

    @classmethod
    def from_bytes_le(cls: Type[T], data: bytes) -> T:
        """Build from exactly N/8 little-endian bytes (else SizeError)."""
        data = _check_bytes("data", data)
        if len(data) != cls.BYTES:
            raise SizeError("data", cls.BYTES, len(data))
        return cls._make(int.from_bytes(data, 'little'))

    @classmethod
    def from_min_bytes_be(cls: Type[T], data: bytes) -> T:
        """Inverse of to_min_bytes_be: accepts 1..N/8 big-endian bytes."""
        data = _check_bytes("data", data)
        if not 1 <= len(data) <= cls.BYTES:
            raise SizeError("data", f"1..{cls.BYTES}", len(data))
        return cls._make(int.from_bytes(data, 'big'))

    @classmethod
    def zero(cls: Type[T]) -> T:
        return cls._make(0)

    @classmethod
    def max(cls: Type[T]) -> T:
        return cls._make(cls.MASK)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def to_int(self) -> int:
        return self._value

    def __int__(self) -> int:
        return self._value

    @property
    def limbs(self) -> Tuple[int, ...]:
        """32-bit limbs, least significant first."""
        v = self._value
        return tuple((v >> (32 * i)) & bits.MASK_32 for i in range(self.LIMBS))

    @property
    def low(self) -> int:
        """Least significant 32-bit limb."""
        return self._value & bits.MASK_32

    @property
    def high(self) -> int:
        """Most significant 32-bit limb."""
        return (self._value >> (32 * (self.LIMBS - 1))) & bits.MASK_32

    def get_byte(self, index: int = 0) -> int:
        """Byte `index`, counting from the least significant byte."""
        _check_int("index", index)
        if index < 0 or index >= self.BYTES:
            raise OutOfRangeError("index", index, 0, self.BYTES - 1)
        return (self._value >> (8 * index)) & bits.MASK_8

    def count_ones(self) -> int:
        return bin(self._value).count('1')

    def to_bytes_be(self) -> bytes:
        return self._value.to_bytes(self.BYTES, 'big')

    def to_bytes_le(self) -> bytes:
        return self._value.to_bytes(self.BYTES, 'little')

    def to_min_bytes_be(self) -> bytes:
        """Big-endian bytes without leading zero bytes (at least one byte)."""
        return self._value.to_bytes(max(1, (self._value.bit_length() + 7) // 8), 'big')

    def hex(self) -> str:
        """Zero-padded big-endian hex, upper case."""
        return self.to_bytes_be().hex().upper()

    def mut(self) -> 'WideUintMut':
        """Independent mutable copy of this value."""
        return WideUintMut(type(self), self._value)

    # ------------------------------------------------------------------
    # Bitwise
    # ------------------------------------------------------------------

    def _other(self, other) -> int:
        if type(other) is not type(self):
            raise EnforceTypeError("operand", type(self).__name__, other)
        return other._value

    def xor(self: T, other: T) -> T:
        return self._make(self._value ^ self._other(other))

    def or_(self: T, other: T) -> T:
        return self._make(self._value | self._other(other))

    def and_(self: T, other: T) -> T:
        return self._make(self._value & self._other(other))

    def not_(self: T) -> T:
        return self._make(self._value ^ self.MASK)

    def l_shift(self: T, by: int) -> T:
        return self._make(bits.shl(self._value, by, self.BITS))

    def r_shift(self: T, by: int) -> T:
        return self._make(bits.shr(self._value, by, self.BITS))

    def l_rot(self: T, by: int) -> T:
        return self._make(bits.rotl(self._value, by, self.BITS))

    def r_rot(self: T, by: int) -> T:
        return self._make(bits.rotr(self._value, by, self.BITS))

    # ------------------------------------------------------------------
    # Arithmetic (mod 2**N)
    # ------------------------------------------------------------------

    def add(self: T, other: T) -> T:
        return self._make((self._value + self._other(other)) & self.MASK)

    def sub(self: T, other: T) -> T:
        return self._make((self._value - self._other(other)) & self.MASK)

    def mul(self: T, other: T) -> T:
        return self._make((self._value * self._other(other)) & self.MASK)

    def neg(self: T) -> T:
        """Two's-complement negation (0 - self)."""
        return self._make(-self._value & self.MASK)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def eq(self, other) -> bool:
        return self._value == self._other(other)

    equals = eq

    def gt(self, other) -> bool:
        return self._value > self._other(other)

    def gte(self, other) -> bool:
        return self._value >= self._other(other)

    def lt(self, other) -> bool:
        return self._value < self._other(other)

    def lte(self, other) -> bool:
        return self._value <= self._other(other)

    # Constant-time variants: one subtraction/xor and a mask, no branching
    # on the operand values.

    def ct_eq(self, other) -> bool:
        diff = self._value ^ self._other(other)
        return bool(((diff - 1) >> self.BITS) & 1)

    def ct_lt(self, other) -> bool:
        return bool(((self._value - self._other(other)) >> self.BITS) & 1)

    def ct_gt(self, other) -> bool:
        return bool(((self._other(other) - self._value) >> self.BITS) & 1)

    def ct_lte(self, other) -> bool:
        return not self.ct_gt(other)

    def ct_gte(self, other) -> bool:
        return not self.ct_lt(other)

    def ct_select(self: T, other: T, use_other: bool) -> T:
        """Return `other` when use_other is true, else self, without branching."""
        sel = -int(bool(use_other)) & self.MASK
        return self._make((self._other(other) & sel) | (self._value & ~sel & self.MASK))

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------

    __xor__ = xor
    __or__ = or_
    __and__ = and_
    __invert__ = not_
    __lshift__ = l_shift
    __rshift__ = r_shift
    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __neg__ = neg

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value < other._value

    def __le__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value <= other._value

    def __gt__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value > other._value

    def __ge__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value >= other._value

    def __hash__(self) -> int:
        return hash((self.BITS, self._value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.hex()})"

    __str__ = hex


class U32(WideUint):
    """32-bit unsigned integer."""
    __slots__ = ()
    BITS = 32


class U64(WideUint):
    """64-bit unsigned integer."""
    __slots__ = ()
    BITS = 64


class U128(WideUint):
    """128-bit unsigned integer."""
    __slots__ = ()
    BITS = 128


class U256(WideUint):
    """256-bit unsigned integer."""
    __slots__ = ()
    BITS = 256


class U512(WideUint):
    """512-bit unsigned integer."""
    __slots__ = ()
    BITS = 512


# ============================================================================
# Mutable variant
# ============================================================================

class WideUintMut:
    """
    Mutable N-bit unsigned integer.

    Every *_eq method updates the value in place and returns self so calls
    can be chained. Operands are immutable values of the same width (or
    other mutable values of the same width). freeze() returns an
    independent immutable copy; nothing is shared.

    Example:
        >>> acc = U64.zero().mut()
        >>> acc.add_eq(U64.from_int(5)).l_shift_eq(1).freeze().to_int()
        10
    """

    __slots__ = ('_kind', '_value')

    def __init__(self, kind: Type[WideUint], value: int = 0):
        if not (isinstance(kind, type) and issubclass(kind, WideUint) and kind.BITS):
            raise EnforceTypeError("kind", "WideUint subclass", kind)
        self._kind = kind
        self._value = kind(value).to_int()

    @property
    def kind(self) -> Type[WideUint]:
        return self._kind

    @property
    def bits(self) -> int:
        return self._kind.BITS

    def _other(self, other) -> int:
        if isinstance(other, WideUintMut):
            if other._kind is self._kind:
                return other._value
        elif type(other) is self._kind:
            return other.to_int()
        raise EnforceTypeError("operand", self._kind.__name__, other)

    def freeze(self) -> WideUint:
        return self._kind._make(self._value)

    def clone(self) -> 'WideUintMut':
        return WideUintMut(self._kind, self._value)

    def to_int(self) -> int:
        return self._value

    def set(self, other) -> 'WideUintMut':
        self._value = self._other(other)
        return self

    def zero(self) -> 'WideUintMut':
        self._value = 0
        return self

    def xor_eq(self, other) -> 'WideUintMut':
        self._value ^= self._other(other)
        return self

    def or_eq(self, other) -> 'WideUintMut':
        self._value |= self._other(other)
        return self

    def and_eq(self, other) -> 'WideUintMut':
        self._value &= self._other(other)
        return self

    def not_eq(self) -> 'WideUintMut':
        self._value ^= self._kind.MASK
        return self

    def l_shift_eq(self, by: int) -> 'WideUintMut':
        self._value = bits.shl(self._value, by, self._kind.BITS)
        return self

    def r_shift_eq(self, by: int) -> 'WideUintMut':
        self._value = bits.shr(self._value, by, self._kind.BITS)
        return self

    def l_rot_eq(self, by: int) -> 'WideUintMut':
        self._value = bits.rotl(self._value, by, self._kind.BITS)
        return self

    def r_rot_eq(self, by: int) -> 'WideUintMut':
        self._value = bits.rotr(self._value, by, self._kind.BITS)
        return self

    def add_eq(self, other) -> 'WideUintMut':
        self._value = (self._value + self._other(other)) & self._kind.MASK
        return self

    def sub_eq(self, other) -> 'WideUintMut':
        self._value = (self._value - self._other(other)) & self._kind.MASK
        return self

    def mul_eq(self, other) -> 'WideUintMut':
        self._value = (self._value * self._other(other)) & self._kind.MASK
        return self

    def __eq__(self, other) -> bool:
        if isinstance(other, WideUintMut):
            return self._kind is other._kind and self._value == other._value
        if type(other) is self._kind:
            return self._value == other.to_int()
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"{self._kind.__name__}Mut({self.freeze().hex()})"
