"""
MD4 Hash Implementation (RFC 1320)

128-bit digest over 64-byte blocks with little-endian word I/O.
MD4 is broken (collisions are trivial to produce) and is provided for
interoperability with legacy formats only.

Components:
- Padding: md_pad (0x80, zeros, 64-bit LE bit length)
- Compression: 3 rounds x 16 steps over four 32-bit registers
- Output: 4 words, little-endian
"""

from typing import Tuple

from ..endian import LITTLE, words_from_bytes
from ..errors import SizeError
from ..numeric.bits import MASK_32, rotl32
from .base import MerkleDamgardHash
from .padding import md_pad


# ============================================================================
# Constants
# ============================================================================

BLOCK_SIZE = 64
DIGEST_SIZE = 16

IV = (0x67452301, 0xefcdab89, 0x98badcfe, 0x10325476)

# Additive constants for rounds 2 and 3 (sqrt(2), sqrt(3))
K2 = 0x5a827999
K3 = 0x6ed9eba1

R1_SHIFTS = (3, 7, 11, 19)
R2_SHIFTS = (3, 5, 9, 13)
R3_SHIFTS = (3, 9, 11, 15)

R2_ORDER = (0, 4, 8, 12, 1, 5, 9, 13, 2, 6, 10, 14, 3, 7, 11, 15)
R3_ORDER = (0, 8, 4, 12, 2, 10, 6, 14, 1, 9, 5, 13, 3, 11, 7, 15)


def _f(x: int, y: int, z: int) -> int:
    """Selection: if x then y else z."""
    return z ^ (x & (y ^ z))


def _g(x: int, y: int, z: int) -> int:
    """Majority."""
    return ((x | y) & z) | (x & y)


def _h(x: int, y: int, z: int) -> int:
    return x ^ y ^ z


def compress(state: Tuple[int, ...], block: bytes) -> Tuple[int, ...]:
    """
    Apply the MD4 compression function to one 64-byte block.

    Args:
        state: Chaining value (4 32-bit words)
        block: Exactly 64 message bytes

    Returns:
        New chaining value; `state` is not modified

    Raises:
        SizeError: If block is not 64 bytes
    """
    if len(block) != BLOCK_SIZE:
        raise SizeError("block", BLOCK_SIZE, len(block))
    x = words_from_bytes(block, 16, 4, LITTLE)
    a, b, c, d = state

    # Each step updates the first register, then the roles rotate
    # (abcd -> dabc) so the next step updates what was d.
    for i in range(16):
        a = rotl32((a + _f(b, c, d) + x[i]) & MASK_32, R1_SHIFTS[i & 3])
        a, b, c, d = d, a, b, c
    for i in range(16):
        a = rotl32((a + _g(b, c, d) + x[R2_ORDER[i]] + K2) & MASK_32, R2_SHIFTS[i & 3])
        a, b, c, d = d, a, b, c
    for i in range(16):
        a = rotl32((a + _h(b, c, d) + x[R3_ORDER[i]] + K3) & MASK_32, R3_SHIFTS[i & 3])
        a, b, c, d = d, a, b, c

    return (
        (state[0] + a) & MASK_32,
        (state[1] + b) & MASK_32,
        (state[2] + c) & MASK_32,
        (state[3] + d) & MASK_32,
    )


class Md4(MerkleDamgardHash):
    """Streaming MD4 context."""

    name = 'md4'
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    _pad = staticmethod(md_pad)
    _word_size = 4
    _byteorder = LITTLE

    def _initial_state(self) -> Tuple[int, ...]:
        return IV

    def _compress(self, state, block, counter):
        return compress(state, block)


def md4(data: bytes) -> bytes:
    """
    Compute the MD4 hash of the input data.

    Example:
        >>> md4(b"abc").hex()
        'a448017aaf21d8525fc10ae87aa6729d'
    """
    return Md4(data).sum()


def md4_hex(data: bytes) -> str:
    return md4(data).hex()


# Self-test when run directly
if __name__ == "__main__":
    # Test vectors from RFC 1320
    test_cases = [
        (b"", "31d6cfe0d16ae931b73c59d7e0c089c0"),
        (b"a", "bde52cb31de33e46245e05fbdbd6fb24"),
        (b"abc", "a448017aaf21d8525fc10ae87aa6729d"),
        (b"message digest", "d9130a8164549fe818874806e1c7014b"),
    ]

    print("MD4 Implementation Test")
    print("=" * 60)

    all_passed = True
    for data, expected in test_cases:
        result = md4_hex(data)
        passed = result == expected
        all_passed = all_passed and passed
        print(f"{'PASS' if passed else 'FAIL'}  {data!r} -> {result}")

    print("=" * 60)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")
