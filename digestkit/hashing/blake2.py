"""
BLAKE2 Hash Family (RFC 7693)

- BLAKE2b: 64-bit words, 128-byte blocks, 12 rounds, digests of 1..64 bytes
- BLAKE2s: 32-bit words, 64-byte blocks, 10 rounds, digests of 1..32 bytes

Both support native keying (MAC mode), salt and personalization. The
parameter block is xored into the IV (the SHA-512 / SHA-256 IV). A key is
zero-padded to a full block and absorbed as the first message block.

BLAKE2 has no length suffix: the final block is zero-filled and flagged
as last, so the context always holds back its most recent full block
until more data arrives or the digest is requested.
"""

from dataclasses import dataclass
from typing import ClassVar, Tuple

from ..endian import LITTLE, words_from_bytes, words_to_bytes
from ..errors import EnforceTypeError, OutOfRangeError, SizeError
from ..numeric import U32, U64
from .base import StreamingHash
from .padding import blake2_pad
from .sha2 import IV256, IV512


# ============================================================================
# Constants
# ============================================================================

SIGMA = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
    (11, 8, 12, 0, 5, 2, 15, 13, 10, 14, 3, 6, 7, 1, 9, 4),
    (7, 9, 3, 1, 13, 12, 11, 14, 2, 6, 5, 10, 4, 0, 15, 8),
    (9, 0, 5, 7, 2, 4, 10, 15, 14, 1, 11, 12, 6, 8, 3, 13),
    (2, 12, 6, 10, 0, 11, 8, 3, 4, 13, 7, 5, 15, 14, 1, 9),
    (12, 5, 1, 15, 14, 13, 4, 10, 0, 7, 6, 3, 9, 2, 8, 11),
    (13, 11, 7, 14, 12, 1, 3, 9, 5, 0, 15, 4, 8, 6, 2, 10),
    (6, 15, 14, 9, 11, 3, 0, 8, 12, 2, 13, 7, 1, 4, 10, 5),
    (10, 2, 8, 4, 7, 6, 1, 5, 15, 11, 9, 14, 3, 12, 13, 0),
)

# G is applied to the four columns, then the four diagonals
G_SCHEDULE = (
    (0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15),
    (0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14),
)

BLAKE2B_BLOCK_SIZE = 128
BLAKE2B_ROUNDS = 12
BLAKE2B_ROTATIONS = (32, 24, 16, 63)

BLAKE2S_BLOCK_SIZE = 64
BLAKE2S_ROUNDS = 10
BLAKE2S_ROTATIONS = (16, 12, 8, 7)


# ============================================================================
# Parameter blocks
# ============================================================================

def _check_uint(noun: str, value, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EnforceTypeError(noun, "int", value)
    if value < low or value > high:
        raise OutOfRangeError(noun, value, low, high)


def _check_bytes(noun: str, value) -> None:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise EnforceTypeError(noun, "bytes-like", value)


@dataclass(frozen=True)
class Blake2bParams:
    """
    BLAKE2b parameter block.

    Salt and personalization are either empty or exactly SALT_SIZE bytes.
    All fields are validated on construction.

    Raises:
        OutOfRangeError: digest_size or a tree parameter out of range
        SizeError: key, salt or personalization of the wrong length
    """
    digest_size: int = 64
    key: bytes = b''
    salt: bytes = b''
    personalization: bytes = b''
    fanout: int = 1
    depth: int = 1
    leaf_length: int = 0
    node_offset: int = 0
    node_depth: int = 0
    inner_length: int = 0

    MAX_DIGEST_SIZE: ClassVar[int] = 64
    MAX_KEY_SIZE: ClassVar[int] = 64
    SALT_SIZE: ClassVar[int] = 16
    NODE_OFFSET_BITS: ClassVar[int] = 64

    def __post_init__(self):
        _check_uint("digest_size", self.digest_size, 1, self.MAX_DIGEST_SIZE)
        for noun in ('key', 'salt', 'personalization'):
            _check_bytes(noun, getattr(self, noun))
        if len(self.key) > self.MAX_KEY_SIZE:
            raise SizeError("key", f"0..{self.MAX_KEY_SIZE}", len(self.key))
        if len(self.salt) not in (0, self.SALT_SIZE):
            raise SizeError("salt", f"0 or {self.SALT_SIZE}", len(self.salt))
        if len(self.personalization) not in (0, self.SALT_SIZE):
            raise SizeError("personalization", f"0 or {self.SALT_SIZE}",
                            len(self.personalization))
        _check_uint("fanout", self.fanout, 0, 255)
        _check_uint("depth", self.depth, 1, 255)
        _check_uint("leaf_length", self.leaf_length, 0, 0xFFFFFFFF)
        _check_uint("node_offset", self.node_offset, 0, (1 << self.NODE_OFFSET_BITS) - 1)
        _check_uint("node_depth", self.node_depth, 0, 255)
        _check_uint("inner_length", self.inner_length, 0, self.MAX_DIGEST_SIZE)
        # Keys are stored as immutable bytes so params can be shared
        object.__setattr__(self, 'key', bytes(self.key))
        object.__setattr__(self, 'salt', bytes(self.salt))
        object.__setattr__(self, 'personalization', bytes(self.personalization))

    def _salt_field(self) -> bytes:
        return self.salt or b'\x00' * self.SALT_SIZE

    def _person_field(self) -> bytes:
        return self.personalization or b'\x00' * self.SALT_SIZE

    def to_bytes(self) -> bytes:
        """Render the 64-byte parameter block."""
        return (
            bytes((self.digest_size, len(self.key), self.fanout, self.depth))
            + U32.from_int(self.leaf_length).to_bytes_le()
            + U64.from_int(self.node_offset).to_bytes_le()
            + bytes((self.node_depth, self.inner_length))
            + b'\x00' * 14
            + self._salt_field()
            + self._person_field()
        )

    def __repr__(self) -> str:
        # Never show the key
        return (f"{type(self).__name__}(digest_size={self.digest_size}, "
                f"key=<{len(self.key)} bytes>, salt={self.salt!r}, "
                f"personalization={self.personalization!r})")


@dataclass(frozen=True, repr=False)
class Blake2sParams(Blake2bParams):
    """BLAKE2s parameter block (32 bytes, 48-bit node offset, 8-byte salt)."""
    digest_size: int = 32

    MAX_DIGEST_SIZE: ClassVar[int] = 32
    MAX_KEY_SIZE: ClassVar[int] = 32
    SALT_SIZE: ClassVar[int] = 8
    NODE_OFFSET_BITS: ClassVar[int] = 48

    def to_bytes(self) -> bytes:
        """Render the 32-byte parameter block."""
        return (
            bytes((self.digest_size, len(self.key), self.fanout, self.depth))
            + U32.from_int(self.leaf_length).to_bytes_le()
            + U64.from_int(self.node_offset).to_bytes_le()[:6]
            + bytes((self.node_depth, self.inner_length))
            + self._salt_field()
            + self._person_field()
        )


# ============================================================================
# Compression
# ============================================================================

def _blake2_compress(h: Tuple[int, ...], block: bytes, counter: int, last: bool,
                     iv: Tuple[int, ...], word_size: int, rounds: int,
                     rotations: Tuple[int, int, int, int]) -> Tuple[int, ...]:
    block_size = 16 * word_size
    if len(block) != block_size:
        raise SizeError("block", block_size, len(block))
    width = 8 * word_size
    mask = (1 << width) - 1
    r1, r2, r3, r4 = rotations
    l1, l2, l3, l4 = (width - r for r in rotations)

    m = words_from_bytes(block, 16, word_size, LITTLE)
    v = list(h) + list(iv)
    v[12] ^= counter & mask
    v[13] ^= (counter >> width) & mask
    if last:
        v[14] ^= mask

    for r in range(rounds):
        s = SIGMA[r % 10]
        for i, (a, b, c, d) in enumerate(G_SCHEDULE):
            x = m[s[2 * i]]
            y = m[s[2 * i + 1]]
            va = (v[a] + v[b] + x) & mask
            vd = v[d] ^ va
            vd = ((vd >> r1) | (vd << l1)) & mask
            vc = (v[c] + vd) & mask
            vb = v[b] ^ vc
            vb = ((vb >> r2) | (vb << l2)) & mask
            va = (va + vb + y) & mask
            vd ^= va
            vd = ((vd >> r3) | (vd << l3)) & mask
            vc = (vc + vd) & mask
            vb ^= vc
            vb = ((vb >> r4) | (vb << l4)) & mask
            v[a], v[b], v[c], v[d] = va, vb, vc, vd

    return tuple(h[i] ^ v[i] ^ v[i + 8] for i in range(8))


def compress_b(state: Tuple[int, ...], block: bytes, counter: int,
               last: bool = False) -> Tuple[int, ...]:
    """
    BLAKE2b compression of one 128-byte block.

    Args:
        state: Chaining value (8 64-bit words)
        block: 128 bytes
        counter: Bytes absorbed so far, including this block
        last: True for the final block

    Returns:
        New chaining value
    """
    return _blake2_compress(state, block, counter, last, IV512, 8,
                            BLAKE2B_ROUNDS, BLAKE2B_ROTATIONS)


def compress_s(state: Tuple[int, ...], block: bytes, counter: int,
               last: bool = False) -> Tuple[int, ...]:
    """BLAKE2s compression of one 64-byte block."""
    return _blake2_compress(state, block, counter, last, IV256, 4,
                            BLAKE2S_ROUNDS, BLAKE2S_ROTATIONS)


# ============================================================================
# Streaming contexts
# ============================================================================

class _Blake2(StreamingHash):
    _defer_last_block = True

    _params_type = Blake2bParams
    _iv: Tuple[int, ...] = IV512
    _word_size = 8

    def __init__(self, data: bytes = b'', *, params=None, **kwargs):
        if params is None:
            params = self._params_type(**kwargs)
        elif kwargs:
            raise TypeError("pass either params or keyword arguments, not both")
        elif type(params) is not self._params_type:
            raise EnforceTypeError("params", self._params_type.__name__, params)
        self._params = params
        self.digest_size = params.digest_size
        p = words_from_bytes(params.to_bytes(), 8, self._word_size, LITTLE)
        self._h0 = tuple(i ^ w for i, w in zip(self._iv, p))
        self._key_block = blake2_pad(params.key, self.block_size) if params.key else b''
        super().__init__(data)

    @property
    def params(self):
        return self._params

    def _initial_state(self):
        return self._h0

    def _after_reset(self) -> None:
        # Keyed mode: the padded key is the first block
        if self._key_block:
            self._buffer = bytearray(self._key_block)
            self._length = self.block_size
            self._prefix_length = self.block_size

    def _compress_block(self, state, block, counter, last):
        raise NotImplementedError

    def _compress(self, state, block, counter):
        return self._compress_block(state, block, counter, False)

    def _finish(self, state, tail, total_length):
        final = blake2_pad(tail, self.block_size)
        state = self._compress_block(state, final, total_length, True)
        return words_to_bytes(state, self._word_size, LITTLE)[:self.digest_size]


class Blake2b(_Blake2):
    """Streaming BLAKE2b context."""

    name = 'blake2b'
    digest_size = 64
    block_size = BLAKE2B_BLOCK_SIZE

    _params_type = Blake2bParams
    _iv = IV512
    _word_size = 8

    def _compress_block(self, state, block, counter, last):
        return compress_b(state, block, counter, last)


class Blake2s(_Blake2):
    """Streaming BLAKE2s context."""

    name = 'blake2s'
    digest_size = 32
    block_size = BLAKE2S_BLOCK_SIZE

    _params_type = Blake2sParams
    _iv = IV256
    _word_size = 4

    def _compress_block(self, state, block, counter, last):
        return compress_s(state, block, counter, last)


def blake2b(data: bytes, **params) -> bytes:
    """Compute a BLAKE2b digest; keyword arguments are Blake2bParams fields."""
    return Blake2b(data, **params).sum()


def blake2s(data: bytes, **params) -> bytes:
    """Compute a BLAKE2s digest; keyword arguments are Blake2sParams fields."""
    return Blake2s(data, **params).sum()


if __name__ == "__main__":
    # RFC 7693 Appendix A/B
    test_cases = [
        (blake2b, b"abc",
         "ba80a53f981c4d0d6a2797b69f12f6e94c212f14685ac4b74b12bb6fdbffa2d1"
         "7d87c5392aab792dc252d5de4533cc9518d38aa8dbf1925ab92386edd4009923"),
        (blake2s, b"abc",
         "508c5e8c327c14e2e1a72ba34eeb452f37458b209ed63a294d999b4c86675982"),
    ]

    print("BLAKE2 Implementation Test")
    print("=" * 60)
    all_passed = True
    for fn, data, expected in test_cases:
        result = fn(data).hex()
        passed = result == expected
        all_passed = all_passed and passed
        print(f"{'PASS' if passed else 'FAIL'}  {fn.__name__}({data!r})")
    print("=" * 60)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")
