"""
MD5 Hash Implementation (RFC 1321)

128-bit digest over 64-byte blocks, little-endian word I/O, sharing the
MD4 padding. Four rounds of 16 steps with sine-derived additive constants.
"""

import math
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

# K[i] = floor(|sin(i + 1)| * 2**32)
K = tuple(int(abs(math.sin(i + 1)) * 2 ** 32) & MASK_32 for i in range(64))

SHIFTS = (
    (7, 12, 17, 22),
    (5, 9, 14, 20),
    (4, 11, 16, 23),
    (6, 10, 15, 21),
)


def compress(state: Tuple[int, ...], block: bytes) -> Tuple[int, ...]:
    """Apply the MD5 compression function to one 64-byte block."""
    if len(block) != BLOCK_SIZE:
        raise SizeError("block", BLOCK_SIZE, len(block))
    m = words_from_bytes(block, 16, 4, LITTLE)
    a, b, c, d = state

    for i in range(64):
        rnd = i >> 4
        if rnd == 0:
            f = d ^ (b & (c ^ d))
            g = i
        elif rnd == 1:
            f = c ^ (d & (b ^ c))
            g = (5 * i + 1) & 15
        elif rnd == 2:
            f = b ^ c ^ d
            g = (3 * i + 5) & 15
        else:
            f = c ^ (b | (~d & MASK_32))
            g = (7 * i) & 15
        f = (f + a + K[i] + m[g]) & MASK_32
        a, d, c = d, c, b
        b = (b + rotl32(f, SHIFTS[rnd][i & 3])) & MASK_32

    return (
        (state[0] + a) & MASK_32,
        (state[1] + b) & MASK_32,
        (state[2] + c) & MASK_32,
        (state[3] + d) & MASK_32,
    )


class Md5(MerkleDamgardHash):
    """Streaming MD5 context."""

    name = 'md5'
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    _pad = staticmethod(md_pad)
    _word_size = 4
    _byteorder = LITTLE

    def _initial_state(self) -> Tuple[int, ...]:
        return IV

    def _compress(self, state, block, counter):
        return compress(state, block)


def md5(data: bytes) -> bytes:
    """Compute the MD5 hash of the input data."""
    return Md5(data).sum()


def md5_hex(data: bytes) -> str:
    return md5(data).hex()


if __name__ == "__main__":
    test_cases = [
        (b"", "d41d8cd98f00b204e9800998ecf8427e"),
        (b"abc", "900150983cd24fb0d6963f7d28e17f72"),
        (b"message digest", "f96b697d7cb7938d525a2f31aaf161d0"),
    ]

    print("MD5 Implementation Test")
    print("=" * 60)
    all_passed = True
    for data, expected in test_cases:
        result = md5_hex(data)
        passed = result == expected
        all_passed = all_passed and passed
        print(f"{'PASS' if passed else 'FAIL'}  {data!r} -> {result}")
    print("=" * 60)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")
