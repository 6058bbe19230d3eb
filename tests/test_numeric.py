"""
Unit tests for the fixed-width integer layer.

Tests:
- WideUint construction and byte round trips
- Shifts and rotates, including the full-width amount
- Modular arithmetic (add/sub/mul against an independent limb multiplier)
- Plain and constant-time comparisons
- Mutable variant
- Int64
"""

import random

import pytest

from digestkit.errors import (
    EnforceTypeError, NotSupportedError, OutOfRangeError, SizeError,
)
from digestkit.numeric import Int64, U32, U64, U128, U256, U512, WideUintMut, bits


ALL_WIDTHS = [U32, U64, U128, U256, U512]


def _random_values(kind, count=20, seed=1234):
    rng = random.Random(seed + kind.BITS)
    values = [0, 1, kind.MASK, kind.MASK - 1, 1 << (kind.BITS - 1)]
    values.extend(rng.getrandbits(kind.BITS) for _ in range(count))
    return [kind.from_int(v) for v in values]


def _schoolbook_mul(a: int, b: int, width: int) -> int:
    """Reference multiply over 16-bit half-limbs, keeping only `width` bits."""
    n = width // 16
    a16 = [(a >> (16 * i)) & 0xFFFF for i in range(n)]
    b16 = [(b >> (16 * i)) & 0xFFFF for i in range(n)]
    out = [0] * n
    for i in range(n):
        carry = 0
        for j in range(n - i):
            cur = out[i + j] + a16[i] * b16[j] + carry
            out[i + j] = cur & 0xFFFF
            carry = cur >> 16
    result = 0
    for i, half in enumerate(out):
        result |= half << (16 * i)
    return result


class TestConstruction:
    """Building WideUint values."""

    @pytest.mark.parametrize("kind", ALL_WIDTHS)
    def test_from_int_bounds(self, kind):
        """0 and 2**N - 1 are accepted."""
        assert kind.from_int(0).to_int() == 0
        assert kind.from_int(kind.MASK).to_int() == kind.MASK

    @pytest.mark.parametrize("kind", ALL_WIDTHS)
    def test_from_int_rejects_out_of_range(self, kind):
        """Negative values and 2**N are rejected."""
        with pytest.raises(OutOfRangeError):
            kind.from_int(-1)
        with pytest.raises(OutOfRangeError):
            kind.from_int(1 << kind.BITS)

    @pytest.mark.parametrize("value", [1.0, "1", None, True])
    def test_from_int_rejects_non_int(self, value):
        """Floats, strings, None and bools are not integers here."""
        with pytest.raises(EnforceTypeError):
            U64.from_int(value)

    def test_error_is_builtin_compatible(self):
        """Range errors are ValueErrors, type errors are TypeErrors."""
        with pytest.raises(ValueError):
            U32.from_int(-5)
        with pytest.raises(TypeError):
            U32.from_int(2.5)

    def test_wrap_reduces(self):
        """wrap() reduces any int modulo 2**N."""
        assert U32.wrap(-1) == U32.max()
        assert U32.wrap(1 << 32) == U32.zero()
        assert U64.wrap((1 << 64) + 5).to_int() == 5

    def test_from_limbs_little_endian(self):
        """Limbs are least significant first; missing limbs are zero."""
        assert U64.from_limbs(1, 2).to_int() == 0x0000000200000001
        assert U128.from_limbs(0xdeadbeef).to_int() == 0xdeadbeef

    def test_from_limbs_truncates_each_limb(self):
        """Each limb is truncated to 32 bits."""
        assert U64.from_limbs(0x1_0000_0001, 0).to_int() == 1

    def test_from_limbs_too_many(self):
        """More limbs than the width holds is a SizeError."""
        with pytest.raises(SizeError):
            U64.from_limbs(1, 2, 3)

    def test_limbs_view(self):
        """limbs mirrors from_limbs."""
        v = U64.from_int(0x0123456789abcdef)
        assert v.limbs == (0x89abcdef, 0x01234567)
        assert v.low == 0x89abcdef
        assert v.high == 0x01234567
        assert U256.from_limbs(*range(8)).limbs == tuple(range(8))


class TestBytes:
    """Byte serialization."""

    @pytest.mark.parametrize("kind", ALL_WIDTHS)
    def test_round_trip_be(self, kind):
        """from_bytes_be(to_bytes_be(x)) == x."""
        for v in _random_values(kind):
            assert kind.from_bytes_be(v.to_bytes_be()) == v

    @pytest.mark.parametrize("kind", ALL_WIDTHS)
    def test_round_trip_le(self, kind):
        """from_bytes_le(to_bytes_le(x)) == x."""
        for v in _random_values(kind):
            assert kind.from_bytes_le(v.to_bytes_le()) == v

    def test_byte_order(self):
        """BE puts the most significant byte first, LE the least."""
        v = U32.from_int(0x01020304)
        assert v.to_bytes_be() == b'\x01\x02\x03\x04'
        assert v.to_bytes_le() == b'\x04\x03\x02\x01'

    @pytest.mark.parametrize("length", [0, 7, 9, 16])
    def test_wrong_length(self, length):
        """Anything but exactly N/8 bytes is a SizeError."""
        with pytest.raises(SizeError):
            U64.from_bytes_be(b'\x00' * length)
        with pytest.raises(SizeError):
            U64.from_bytes_le(b'\x00' * length)

    def test_from_bytes_rejects_str(self):
        """Text is not bytes."""
        with pytest.raises(EnforceTypeError):
            U32.from_bytes_be("abcd")

    @pytest.mark.parametrize("value, expected", [
        (0, b'\x00'),
        (1, b'\x01'),
        (0xff, b'\xff'),
        (0x100, b'\x01\x00'),
        (0xFFFFFFFFFFFFFFFF, b'\xff' * 8),
    ])
    def test_min_bytes(self, value, expected):
        """Leading zero bytes are dropped, but at least one byte remains."""
        assert U64.from_int(value).to_min_bytes_be() == expected
        assert U64.from_min_bytes_be(expected).to_int() == value

    def test_get_byte(self):
        """get_byte counts from the least significant byte."""
        v = U32.from_int(0x11223344)
        assert [v.get_byte(i) for i in range(4)] == [0x44, 0x33, 0x22, 0x11]
        with pytest.raises(OutOfRangeError):
            v.get_byte(4)

    def test_hex_and_repr(self):
        """hex() is zero padded upper case."""
        assert U32.from_int(0xab).hex() == "000000AB"
        assert repr(U32.from_int(1)) == "U32(00000001)"


class TestShiftRotate:
    """Shifts and rotates."""

    @pytest.mark.parametrize("kind", ALL_WIDTHS)
    def test_zero_amount_is_identity(self, kind):
        """Shifting or rotating by 0 leaves the value unchanged."""
        for v in _random_values(kind, 5):
            assert v.l_shift(0) == v
            assert v.r_shift(0) == v
            assert v.l_rot(0) == v
            assert v.r_rot(0) == v

    @pytest.mark.parametrize("kind", ALL_WIDTHS)
    def test_full_width(self, kind):
        """By N: rotates are identity, shifts clear the value."""
        for v in _random_values(kind, 5):
            assert v.l_rot(kind.BITS) == v
            assert v.r_rot(kind.BITS) == v
            assert v.l_shift(kind.BITS) == kind.zero()
            assert v.r_shift(kind.BITS) == kind.zero()

    @pytest.mark.parametrize("by", [-1, 65, 128])
    def test_amount_out_of_range(self, by):
        """Amounts outside 0..N raise OutOfRangeError."""
        v = U64.from_int(1)
        for op in (v.l_shift, v.r_shift, v.l_rot, v.r_rot):
            with pytest.raises(OutOfRangeError):
                op(by)

    def test_amount_must_be_int(self):
        """A float amount raises EnforceTypeError."""
        with pytest.raises(EnforceTypeError):
            U64.from_int(1).l_shift(1.0)

    def test_rotate_wraps_bits(self):
        """Bits leaving one end re-enter at the other."""
        assert U32.from_int(0x80000000).l_rot(1).to_int() == 1
        assert U32.from_int(1).r_rot(1).to_int() == 0x80000000
        assert U64.from_int(0x0123456789abcdef).l_rot(8).to_int() == 0x23456789abcdef01

    @pytest.mark.parametrize("kind", ALL_WIDTHS)
    def test_rotate_inverse(self, kind):
        """r_rot(k) undoes l_rot(k)."""
        rng = random.Random(99)
        for v in _random_values(kind, 5):
            k = rng.randrange(kind.BITS + 1)
            assert v.l_rot(k).r_rot(k) == v

    def test_shift_drops_bits(self):
        """Shifted-out bits are lost."""
        assert U32.from_int(0xF0000001).l_shift(4).to_int() == 0x00000010
        assert U32.from_int(0xF0000001).r_shift(4).to_int() == 0x0F000000

    def test_operators(self):
        """<< and >> map to the shifts."""
        v = U64.from_int(3)
        assert (v << 2).to_int() == 12
        assert (v >> 1).to_int() == 1


class TestArithmetic:
    """Modular add/sub/mul and bitwise identities."""

    @pytest.mark.parametrize("kind", ALL_WIDTHS)
    def test_add_wraps(self, kind):
        """max + 1 == 0, the carry out of the top is discarded."""
        one = kind.from_int(1)
        assert kind.max().add(one) == kind.zero()

    @pytest.mark.parametrize("kind", ALL_WIDTHS)
    def test_sub_wraps(self, kind):
        """0 - 1 == max."""
        assert kind.zero().sub(kind.from_int(1)) == kind.max()

    @pytest.mark.parametrize("kind", ALL_WIDTHS)
    def test_add_commutative(self, kind):
        """a + b == b + a."""
        values = _random_values(kind, 6)
        for a in values:
            for b in values:
                assert a.add(b) == b.add(a)

    @pytest.mark.parametrize("kind", ALL_WIDTHS)
    def test_add_sub_inverse(self, kind):
        """(a + b) - b == a."""
        values = _random_values(kind, 6)
        for a, b in zip(values, reversed(values)):
            assert a.add(b).sub(b) == a

    @pytest.mark.parametrize("kind", ALL_WIDTHS)
    def test_mul_matches_schoolbook(self, kind):
        """mul agrees with a 16-bit half-limb schoolbook multiplier."""
        values = _random_values(kind, 8)
        for a, b in zip(values, values[1:] + values[:1]):
            expected = _schoolbook_mul(a.to_int(), b.to_int(), kind.BITS)
            assert a.mul(b).to_int() == expected

    def test_mul_discards_high_product(self):
        """Only the low N bits of the product survive."""
        a = U32.from_int(0x10000)
        assert a.mul(a) == U32.zero()
        assert U32.max().mul(U32.max()).to_int() == 1

    @pytest.mark.parametrize("kind", ALL_WIDTHS)
    def test_xor_identities(self, kind):
        """a ^ a == 0 and a ^ ~a == max."""
        for a in _random_values(kind, 5):
            assert a.xor(a) == kind.zero()
            assert a.xor(a.not_()) == kind.max()

    def test_neg(self):
        """neg is 0 - a."""
        assert U32.from_int(1).neg() == U32.max()
        assert U32.zero().neg() == U32.zero()

    def test_operator_forms(self):
        """Operators match the named methods."""
        a, b = U64.from_int(0xF0), U64.from_int(0x3C)
        assert (a ^ b) == a.xor(b)
        assert (a | b) == a.or_(b)
        assert (a & b) == a.and_(b)
        assert (~a) == a.not_()
        assert (a + b) == a.add(b)
        assert (a - b) == a.sub(b)
        assert (a * b) == a.mul(b)

    def test_mixed_widths_rejected(self):
        """Operands of different widths raise EnforceTypeError."""
        with pytest.raises(EnforceTypeError):
            U32.from_int(1).add(U64.from_int(1))
        with pytest.raises(EnforceTypeError):
            U32.from_int(1).xor(1)

    def test_count_ones(self):
        """count_ones is the population count."""
        assert U64.max().count_ones() == 64
        assert U32.from_int(0b1011).count_ones() == 3


class TestComparison:
    """Plain and constant-time comparisons."""

    PAIRS = [(0, 0), (0, 1), (1, 0), (5, 5), (0xFFFFFFFF, 0), (0x7FFFFFFF, 0x80000000)]

    @pytest.mark.parametrize("a, b", PAIRS)
    def test_plain(self, a, b):
        """eq/gt/gte/lt/lte match int comparisons."""
        x, y = U32.from_int(a), U32.from_int(b)
        assert x.eq(y) == (a == b)
        assert x.gt(y) == (a > b)
        assert x.gte(y) == (a >= b)
        assert x.lt(y) == (a < b)
        assert x.lte(y) == (a <= b)
        assert (x < y) == (a < b)
        assert (x >= y) == (a >= b)

    @pytest.mark.parametrize("a, b", PAIRS)
    def test_constant_time_agrees(self, a, b):
        """ct_* results equal the plain comparisons."""
        x, y = U32.from_int(a), U32.from_int(b)
        assert x.ct_eq(y) == x.eq(y)
        assert x.ct_gt(y) == x.gt(y)
        assert x.ct_gte(y) == x.gte(y)
        assert x.ct_lt(y) == x.lt(y)
        assert x.ct_lte(y) == x.lte(y)

    @pytest.mark.parametrize("kind", ALL_WIDTHS)
    def test_constant_time_random(self, kind):
        """ct_* agree with plain comparisons across every width."""
        values = _random_values(kind, 6)
        for a in values:
            for b in values:
                assert a.ct_eq(b) == a.eq(b)
                assert a.ct_lt(b) == a.lt(b)
                assert a.ct_gt(b) == a.gt(b)

    def test_ct_select(self):
        """ct_select picks the other value only when asked."""
        a, b = U64.from_int(1), U64.from_int(2)
        assert a.ct_select(b, True) == b
        assert a.ct_select(b, False) == a

    def test_widths_never_equal(self):
        """Values of different widths do not compare equal."""
        assert U32.from_int(5) != U64.from_int(5)

    def test_hashable(self):
        """Equal values hash equally."""
        assert len({U64.from_int(7), U64.from_int(7), U64.from_int(8)}) == 2


class TestMutable:
    """WideUintMut in-place operations."""

    def test_mut_is_a_copy(self):
        """Mutating the mutable variant does not touch the source value."""
        v = U64.from_int(10)
        m = v.mut()
        m.add_eq(U64.from_int(1))
        assert v.to_int() == 10
        assert m.to_int() == 11

    def test_freeze_is_a_copy(self):
        """freeze() returns an immutable snapshot."""
        m = U32.zero().mut()
        frozen = m.freeze()
        m.not_eq()
        assert frozen == U32.zero()
        assert m.freeze() == U32.max()

    def test_chained_ops_match_immutable(self):
        """The *_eq methods compute the same as their immutable twins."""
        a, b = U64.from_int(0x0123456789abcdef), U64.from_int(0xfedcba9876543210)
        m = a.mut().xor_eq(b).l_rot_eq(13).add_eq(b).mul_eq(a).r_shift_eq(3)
        assert m.freeze() == a.xor(b).l_rot(13).add(b).mul(a).r_shift(3)

    def test_remaining_ops(self):
        """or/and/sub/l_shift/r_rot/set/zero."""
        m = WideUintMut(U32, 0xF0)
        m.or_eq(U32.from_int(0x0F)).and_eq(U32.from_int(0x3C))
        assert m.to_int() == 0x3C
        m.sub_eq(U32.from_int(0x3D))
        assert m.freeze() == U32.max()
        m.set(U32.from_int(1)).l_shift_eq(31).r_rot_eq(31)
        assert m.to_int() == 1
        assert m.zero().to_int() == 0

    def test_rejects_other_width(self):
        """Operands must have the same width."""
        with pytest.raises(EnforceTypeError):
            U32.zero().mut().add_eq(U64.zero())

    def test_range_checked(self):
        """Amounts are validated like the immutable type."""
        with pytest.raises(OutOfRangeError):
            U32.zero().mut().l_rot_eq(33)


class TestInt64:
    """Signed 64-bit integer."""

    def test_bounds(self):
        """[-2**63, 2**63) is accepted, anything else rejected."""
        assert Int64.from_int(-(1 << 63)).to_int() == -(1 << 63)
        assert Int64.from_int((1 << 63) - 1).to_int() == (1 << 63) - 1
        with pytest.raises(OutOfRangeError):
            Int64.from_int(1 << 63)
        with pytest.raises(OutOfRangeError):
            Int64.from_int(-(1 << 63) - 1)

    def test_two_complement_bytes(self):
        """-1 is all ones; round trips through both byte orders."""
        assert Int64.from_int(-1).to_bytes_be() == b'\xff' * 8
        for value in (-1, 0, 1, -12345678901, 98765432109):
            v = Int64.from_int(value)
            assert Int64.from_bytes_be(v.to_bytes_be()) == v
            assert Int64.from_bytes_le(v.to_bytes_le()) == v

    def test_wrong_length(self):
        """Eight bytes exactly."""
        with pytest.raises(SizeError):
            Int64.from_bytes_be(b'\x00' * 4)

    @pytest.mark.parametrize("value, expected", [
        (0, b'\x00'),
        (127, b'\x7f'),
        (128, b'\x00\x80'),
        (255, b'\x00\xff'),
        (256, b'\x01\x00'),
        (-1, b'\xff'),
        (-128, b'\x80'),
        (-129, b'\xff\x7f'),
    ])
    def test_min_bytes_keeps_sign(self, value, expected):
        """Redundant sign bytes are dropped without flipping the sign."""
        v = Int64.from_int(value)
        assert v.to_min_bytes_be() == expected
        assert Int64.from_min_bytes_be(expected) == v

    def test_negative_flag(self):
        """negative reads the top bit."""
        assert Int64.from_int(-5).negative
        assert not Int64.from_int(5).negative

    def test_arithmetic_shift(self):
        """r_shift fills with the sign bit."""
        assert Int64.from_int(-8).r_shift(1).to_int() == -4
        assert Int64.from_int(-1).r_shift(64).to_int() == -1
        assert Int64.from_int(8).r_shift(64).to_int() == 0
        with pytest.raises(OutOfRangeError):
            Int64.from_int(1).r_shift(65)

    def test_wrapping_add(self):
        """MAX + 1 wraps to MIN."""
        top = Int64.from_int((1 << 63) - 1)
        assert top.add(Int64.from_int(1)).to_int() == -(1 << 63)
        assert Int64.from_int(3).sub(Int64.from_int(5)).to_int() == -2

    def test_abs(self):
        """abs of a negative value."""
        assert Int64.from_int(-5).abs().to_int() == 5
        assert Int64.from_int(5).abs().to_int() == 5

    def test_signed_comparison(self):
        """Negative values sort below positive ones."""
        neg, pos = Int64.from_int(-1), Int64.from_int(1)
        assert neg.lt(pos) and neg < pos
        assert pos.gt(neg) and pos >= neg
        assert neg.lte(neg) and neg.gte(neg)

    def test_from_limbs_sign_extends(self):
        """A single negative limb sign-extends."""
        assert Int64.from_limbs(0xFFFFFFFF).to_int() == -1
        assert Int64.from_limbs(5).to_int() == 5
        assert Int64.from_limbs(0, 1).to_int() == 1 << 32

    def test_mul_not_supported(self):
        """Multiplication raises NotSupportedError."""
        with pytest.raises(NotSupportedError):
            Int64.from_int(2).mul(Int64.from_int(3))
        with pytest.raises(NotImplementedError):
            Int64.from_int(2) * Int64.from_int(3)


class TestBits:
    """Word-level helpers used by the engines."""

    def test_fixed_rotates_match_generic(self):
        """rotl32/rotr64 agree with the validated versions."""
        rng = random.Random(7)
        for _ in range(50):
            x32, x64 = rng.getrandbits(32), rng.getrandbits(64)
            n32, n64 = rng.randrange(1, 32), rng.randrange(1, 64)
            assert bits.rotl32(x32, n32) == bits.rotl(x32, n32, 32)
            assert bits.rotr32(x32, n32) == bits.rotr(x32, n32, 32)
            assert bits.rotl64(x64, n64) == bits.rotl(x64, n64, 64)
            assert bits.rotr64(x64, n64) == bits.rotr(x64, n64, 64)

    def test_modular_add(self):
        """add32/add64 wrap."""
        assert bits.add32(0xFFFFFFFF, 2) == 1
        assert bits.add64(bits.MASK_64, bits.MASK_64) == bits.MASK_64 - 1

    def test_check_amount(self):
        """Validated amount range is 0..width."""
        assert bits.check_amount(32, 32) == 32
        with pytest.raises(OutOfRangeError):
            bits.check_amount(33, 32)
        with pytest.raises(EnforceTypeError):
            bits.check_amount(True, 32)
