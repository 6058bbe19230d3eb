"""
SHA-1 Hash Implementation (FIPS 180-4)

160-bit digest, 64-byte blocks, big-endian word I/O and the SHA-256
padding. 80 steps over a 16-word rolling message schedule.
"""

from typing import Tuple

from ..endian import BIG, words_from_bytes
from ..errors import SizeError
from ..numeric.bits import MASK_32, rotl32
from .base import MerkleDamgardHash
from .padding import sha2_32_pad


# ============================================================================
# Constants
# ============================================================================

BLOCK_SIZE = 64
DIGEST_SIZE = 20

IV = (0x67452301, 0xefcdab89, 0x98badcfe, 0x10325476, 0xc3d2e1f0)

K = (0x5a827999, 0x6ed9eba1, 0x8f1bbcdc, 0xca62c1d6)


def compress(state: Tuple[int, ...], block: bytes) -> Tuple[int, ...]:
    """Apply the SHA-1 compression function to one 64-byte block."""
    if len(block) != BLOCK_SIZE:
        raise SizeError("block", BLOCK_SIZE, len(block))
    w = list(words_from_bytes(block, 16, 4, BIG))
    a, b, c, d, e = state

    for i in range(80):
        if i >= 16:
            w[i & 15] = rotl32(
                w[(i - 3) & 15] ^ w[(i - 8) & 15] ^ w[(i - 14) & 15] ^ w[i & 15], 1
            )
        if i < 20:
            f = d ^ (b & (c ^ d))
        elif i < 40:
            f = b ^ c ^ d
        elif i < 60:
            f = (b & c) | (d & (b | c))
        else:
            f = b ^ c ^ d
        t = (rotl32(a, 5) + f + e + K[i // 20] + w[i & 15]) & MASK_32
        e, d, c, b, a = d, c, rotl32(b, 30), a, t

    return tuple((s + v) & MASK_32 for s, v in zip(state, (a, b, c, d, e)))


class Sha1(MerkleDamgardHash):
    """Streaming SHA-1 context."""

    name = 'sha1'
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    _pad = staticmethod(sha2_32_pad)
    _word_size = 4
    _byteorder = BIG

    def _initial_state(self) -> Tuple[int, ...]:
        return IV

    def _compress(self, state, block, counter):
        return compress(state, block)


def sha1(data: bytes) -> bytes:
    """Compute the SHA-1 hash of the input data."""
    return Sha1(data).sum()


def sha1_hex(data: bytes) -> str:
    return sha1(data).hex()
