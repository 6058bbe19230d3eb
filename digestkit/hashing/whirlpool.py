"""
Whirlpool Hash Implementation (ISO/IEC 10118-3)

512-bit digest over 64-byte blocks. A dedicated 10-round block cipher W
keyed by the chaining value, run in Miyaguchi-Preneel mode:

    H' = W_H(M) ^ H ^ M

Components:
- S-box: the 256-byte substitution table
- Circulant table C[t][x]: S-box output times the MDS row
  (1, 1, 4, 1, 8, 5, 2, 9) in GF(2^8) mod x^8+x^4+x^3+x^2+1, rotated
  right by 8t bits for column t
- Round constants: diagonal bytes of the circulant table
- Padding: whirlpool_pad (0x80, zeros, 256-bit BE bit length)

The tables are derived once, at import time.
"""

import logging
from typing import List, Tuple

from ..endian import BIG, words_from_bytes
from ..errors import SizeError
from ..numeric import U64
from .base import MerkleDamgardHash
from .padding import whirlpool_pad


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

BLOCK_SIZE = 64
DIGEST_SIZE = 64
ROUNDS = 10

# Reduction polynomial x^8 + x^4 + x^3 + x^2 + 1
GF_POLY = 0x11d

SBOX = bytes((
    0x18, 0x23, 0xc6, 0xe8, 0x87, 0xb8, 0x01, 0x4f, 0x36, 0xa6, 0xd2, 0xf5, 0x79, 0x6f, 0x91, 0x52,
    0x60, 0xbc, 0x9b, 0x8e, 0xa3, 0x0c, 0x7b, 0x35, 0x1d, 0xe0, 0xd7, 0xc2, 0x2e, 0x4b, 0xfe, 0x57,
    0x15, 0x77, 0x37, 0xe5, 0x9f, 0xf0, 0x4a, 0xda, 0x58, 0xc9, 0x29, 0x0a, 0xb1, 0xa0, 0x6b, 0x85,
    0xbd, 0x5d, 0x10, 0xf4, 0xcb, 0x3e, 0x05, 0x67, 0xe4, 0x27, 0x41, 0x8b, 0xa7, 0x7d, 0x95, 0xd8,
    0xfb, 0xee, 0x7c, 0x66, 0xdd, 0x17, 0x47, 0x9e, 0xca, 0x2d, 0xbf, 0x07, 0xad, 0x5a, 0x83, 0x33,
    0x63, 0x02, 0xaa, 0x71, 0xc8, 0x19, 0x49, 0xd9, 0xf2, 0xe3, 0x5b, 0x88, 0x9a, 0x26, 0x32, 0xb0,
    0xe9, 0x0f, 0xd5, 0x80, 0xbe, 0xcd, 0x34, 0x48, 0xff, 0x7a, 0x90, 0x5f, 0x20, 0x68, 0x1a, 0xae,
    0xb4, 0x54, 0x93, 0x22, 0x64, 0xf1, 0x73, 0x12, 0x40, 0x08, 0xc3, 0xec, 0xdb, 0xa1, 0x8d, 0x3d,
    0x97, 0x00, 0xcf, 0x2b, 0x76, 0x82, 0xd6, 0x1b, 0xb5, 0xaf, 0x6a, 0x50, 0x45, 0xf3, 0x30, 0xef,
    0x3f, 0x55, 0xa2, 0xea, 0x65, 0xba, 0x2f, 0xc0, 0xde, 0x1c, 0xfd, 0x4d, 0x92, 0x75, 0x06, 0x8a,
    0xb2, 0xe6, 0x0e, 0x1f, 0x62, 0xd4, 0xa8, 0x96, 0xf9, 0xc5, 0x25, 0x59, 0x84, 0x72, 0x39, 0x4c,
    0x5e, 0x78, 0x38, 0x8c, 0xd1, 0xa5, 0xe2, 0x61, 0xb3, 0x21, 0x9c, 0x1e, 0x43, 0xc7, 0xfc, 0x04,
    0x51, 0x99, 0x6d, 0x0d, 0xfa, 0xdf, 0x7e, 0x24, 0x3b, 0xab, 0xce, 0x11, 0x8f, 0x4e, 0xb7, 0xeb,
    0x3c, 0x81, 0x94, 0xf7, 0xb9, 0x13, 0x2c, 0xd3, 0xe7, 0x6e, 0xc4, 0x03, 0x56, 0x44, 0x7f, 0xa9,
    0x2a, 0xbb, 0xc1, 0x53, 0xdc, 0x0b, 0x9d, 0x6c, 0x31, 0x74, 0xf6, 0x46, 0xac, 0x89, 0x14, 0xe1,
    0x16, 0x3a, 0x69, 0x09, 0x70, 0xb6, 0xd0, 0xed, 0xcc, 0x42, 0x98, 0xa4, 0x28, 0x5c, 0xf8, 0x86,
))

IV = (0,) * 8


# ============================================================================
# Table construction
# ============================================================================

def _gf_double(v: int) -> int:
    """Multiply by x in GF(2^8)."""
    v <<= 1
    if v & 0x100:
        v ^= GF_POLY
    return v


def _build_circulant() -> Tuple[Tuple[int, ...], ...]:
    """C[t][x] for t in 0..7; column t is column 0 rotated right by 8t."""
    c0: List[U64] = []
    for x in range(256):
        v1 = SBOX[x]
        v2 = _gf_double(v1)
        v4 = _gf_double(v2)
        v5 = v4 ^ v1
        v8 = _gf_double(v4)
        v9 = v8 ^ v1
        c0.append(U64.from_bytes_be(bytes((v1, v1, v4, v1, v8, v5, v2, v9))))
    columns = [c0]
    for t in range(1, 8):
        columns.append([v.r_rot(8) for v in columns[t - 1]])
    return tuple(tuple(v.to_int() for v in col) for col in columns)


def _build_round_constants(table) -> Tuple[int, ...]:
    """rc[r] takes its byte j (from the top) from C[j][SBOX index 8r + j]."""
    constants = []
    for r in range(ROUNDS):
        rc = 0
        for j in range(8):
            byte_mask = 0xff << (56 - 8 * j)
            rc |= table[j][8 * r + j] & byte_mask
        constants.append(rc)
    return tuple(constants)


C = _build_circulant()
RC = _build_round_constants(C)
logger.debug("Whirlpool tables built: %d circulant entries, %d round constants",
             8 * 256, len(RC))


def _mix(words: List[int]) -> List[int]:
    """Apply SubBytes, ShiftColumns and MixRows through the circulant table."""
    c0, c1, c2, c3, c4, c5, c6, c7 = C
    return [
        c0[words[i] >> 56]
        ^ c1[(words[(i - 1) & 7] >> 48) & 0xff]
        ^ c2[(words[(i - 2) & 7] >> 40) & 0xff]
        ^ c3[(words[(i - 3) & 7] >> 32) & 0xff]
        ^ c4[(words[(i - 4) & 7] >> 24) & 0xff]
        ^ c5[(words[(i - 5) & 7] >> 16) & 0xff]
        ^ c6[(words[(i - 6) & 7] >> 8) & 0xff]
        ^ c7[words[(i - 7) & 7] & 0xff]
        for i in range(8)
    ]


def compress(state: Tuple[int, ...], block: bytes) -> Tuple[int, ...]:
    """
    Whirlpool compression of one 64-byte block.

    Args:
        state: Chaining value (8 64-bit words)
        block: 64 message bytes (read as big-endian words)

    Returns:
        New chaining value
    """
    if len(block) != BLOCK_SIZE:
        raise SizeError("block", BLOCK_SIZE, len(block))
    m = words_from_bytes(block, 8, 8, BIG)
    key = list(state)
    s = [mi ^ ki for mi, ki in zip(m, key)]

    for r in range(ROUNDS):
        key = _mix(key)
        key[0] ^= RC[r]
        s = [v ^ k for v, k in zip(_mix(s), key)]

    return tuple(h ^ v ^ mi for h, v, mi in zip(state, s, m))


class Whirlpool(MerkleDamgardHash):
    """Streaming Whirlpool context."""

    name = 'whirlpool'
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    _pad = staticmethod(whirlpool_pad)
    _word_size = 8
    _byteorder = BIG

    def _initial_state(self):
        return IV

    def _compress(self, state, block, counter):
        return compress(state, block)


def whirlpool(data: bytes) -> bytes:
    """Compute the Whirlpool hash of the input data."""
    return Whirlpool(data).sum()


def whirlpool_hex(data: bytes) -> str:
    return whirlpool(data).hex()


if __name__ == "__main__":
    # ISO/IEC 10118-3 test vectors
    test_cases = [
        (b"", "19fa61d75522a4669b44e39c1d2e1726c530232130d407f89afee0964997f7a7"
              "3e83be698b288febcf88e3e03c4f0757ea8964e59b63d93708b138cc42a66eb3"),
        (b"abc", "4e2448a4c6f486bb16b6562c73b4020bf3043e3a731bce721ae1b303d97e6d4c"
                 "7181eebdb6c57e277d0e34957114cbd6c797fc9d95d8b582d225292076d4eef5"),
    ]

    print("Whirlpool Implementation Test")
    print("=" * 60)
    all_passed = True
    for data, expected in test_cases:
        result = whirlpool_hex(data)
        passed = result == expected
        all_passed = all_passed and passed
        print(f"{'PASS' if passed else 'FAIL'}  {data!r}")
    print("=" * 60)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")
