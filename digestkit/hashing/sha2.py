"""
SHA-2 Hash Family (FIPS 180-4)

Both SHA-2 widths built from the same round structure:
- SHA-224 / SHA-256: 32-bit words, 64-byte blocks, 64 rounds
- SHA-384 / SHA-512 / SHA-512/t: 64-bit words, 128-byte blocks, 80 rounds

Components:
- Padding: sha2_32_pad / sha2_64_pad (64-bit or 128-bit BE bit length)
- Message Schedule: expands 16 words to 64 (or 80)
- Compression: copy-returning, state tuples are never mutated
- SHA-512/t: IV derived by hashing "SHA-512/t" under the SHA-512 IV
  xored with 0xa5a5...a5 (memoized)
"""

import logging
from functools import lru_cache
from typing import List, Tuple

from ..endian import BIG, words_from_bytes
from ..errors import EnforceTypeError, OutOfRangeError, SizeError
from ..numeric.bits import MASK_32, MASK_64, rotr32, rotr64
from .base import MerkleDamgardHash
from .padding import sha2_32_pad, sha2_64_pad


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

# Round constants: first 64 bits of the fractional parts of the cube roots
# of the first 80 primes
K512 = (
    0x428a2f98d728ae22, 0x7137449123ef65cd, 0xb5c0fbcfec4d3b2f, 0xe9b5dba58189dbbc,
    0x3956c25bf348b538, 0x59f111f1b605d019, 0x923f82a4af194f9b, 0xab1c5ed5da6d8118,
    0xd807aa98a3030242, 0x12835b0145706fbe, 0x243185be4ee4b28c, 0x550c7dc3d5ffb4e2,
    0x72be5d74f27b896f, 0x80deb1fe3b1696b1, 0x9bdc06a725c71235, 0xc19bf174cf692694,
    0xe49b69c19ef14ad2, 0xefbe4786384f25e3, 0x0fc19dc68b8cd5b5, 0x240ca1cc77ac9c65,
    0x2de92c6f592b0275, 0x4a7484aa6ea6e483, 0x5cb0a9dcbd41fbd4, 0x76f988da831153b5,
    0x983e5152ee66dfab, 0xa831c66d2db43210, 0xb00327c898fb213f, 0xbf597fc7beef0ee4,
    0xc6e00bf33da88fc2, 0xd5a79147930aa725, 0x06ca6351e003826f, 0x142929670a0e6e70,
    0x27b70a8546d22ffc, 0x2e1b21385c26c926, 0x4d2c6dfc5ac42aed, 0x53380d139d95b3df,
    0x650a73548baf63de, 0x766a0abb3c77b2a8, 0x81c2c92e47edaee6, 0x92722c851482353b,
    0xa2bfe8a14cf10364, 0xa81a664bbc423001, 0xc24b8b70d0f89791, 0xc76c51a30654be30,
    0xd192e819d6ef5218, 0xd69906245565a910, 0xf40e35855771202a, 0x106aa07032bbd1b8,
    0x19a4c116b8d2d0c8, 0x1e376c085141ab53, 0x2748774cdf8eeb99, 0x34b0bcb5e19b48a8,
    0x391c0cb3c5c95a63, 0x4ed8aa4ae3418acb, 0x5b9cca4f7763e373, 0x682e6ff3d6b2b8a3,
    0x748f82ee5defb2fc, 0x78a5636f43172f60, 0x84c87814a1f0ab72, 0x8cc702081a6439ec,
    0x90befffa23631e28, 0xa4506cebde82bde9, 0xbef9a3f7b2c67915, 0xc67178f2e372532b,
    0xca273eceea26619c, 0xd186b8c721c0c207, 0xeada7dd6cde0eb1e, 0xf57d4f7fee6ed178,
    0x06f067aa72176fba, 0x0a637dc5a2c898a6, 0x113f9804bef90dae, 0x1b710b35131c471b,
    0x28db77f523047d84, 0x32caab7b40c72493, 0x3c9ebe0a15c9bebc, 0x431d67c49c100d4c,
    0x4cc5d4becb3e42b6, 0x597f299cfc657e2a, 0x5fcb6fab3ad6faec, 0x6c44198c4a475817,
)

# SHA-256 uses the first 32 bits of the same cube roots
K256 = tuple(k >> 32 for k in K512[:64])

# Initial hash values: fractional parts of the square roots of the first
# 8 primes (SHA-512) and of the 9th-16th primes (SHA-384)
IV512 = (
    0x6a09e667f3bcc908, 0xbb67ae8584caa73b, 0x3c6ef372fe94f82b, 0xa54ff53a5f1d36f1,
    0x510e527fade682d1, 0x9b05688c2b3e6c1f, 0x1f83d9abfb41bd6b, 0x5be0cd19137e2179,
)
IV384 = (
    0xcbbb9d5dc1059ed8, 0x629a292a367cd507, 0x9159015a3070dd17, 0x152fecd8f70e5939,
    0x67332667ffc00b31, 0x8eb44a8768581511, 0xdb0c2e0d64f98fa7, 0x47b5481dbefa4fa4,
)
IV256 = tuple(h >> 32 for h in IV512)
IV224 = tuple(h & MASK_32 for h in IV384)

SHA512_T_XOR = 0xa5a5a5a5a5a5a5a5


# ============================================================================
# SHA-224 / SHA-256 (32-bit words)
# ============================================================================

def _sigma0_32(x: int) -> int:
    """Lowercase sigma 0: used in message schedule."""
    return rotr32(x, 7) ^ rotr32(x, 18) ^ (x >> 3)


def _sigma1_32(x: int) -> int:
    """Lowercase sigma 1: used in message schedule."""
    return rotr32(x, 17) ^ rotr32(x, 19) ^ (x >> 10)


def _schedule_32(words: Tuple[int, ...]) -> List[int]:
    """
    Expand 16 words into 64 words for the message schedule.

    For i from 16 to 63:
        W[i] = s1(W[i-2]) + W[i-7] + s0(W[i-15]) + W[i-16]
    """
    w = list(words)
    for i in range(16, 64):
        w.append((_sigma1_32(w[i - 2]) + w[i - 7] + _sigma0_32(w[i - 15]) + w[i - 16]) & MASK_32)
    return w


def compress256(state: Tuple[int, ...], block: bytes) -> Tuple[int, ...]:
    """
    Perform 64 rounds of SHA-256 compression on one 64-byte block.

    Args:
        state: Current hash state (8 32-bit words)
        block: 64 message bytes

    Returns:
        Updated hash state
    """
    if len(block) != 64:
        raise SizeError("block", 64, len(block))
    w = _schedule_32(words_from_bytes(block, 16, 4, BIG))
    a, b, c, d, e, f, g, h = state

    for i in range(64):
        s1 = rotr32(e, 6) ^ rotr32(e, 11) ^ rotr32(e, 25)
        ch = g ^ (e & (f ^ g))
        t1 = (h + s1 + ch + K256[i] + w[i]) & MASK_32
        s0 = rotr32(a, 2) ^ rotr32(a, 13) ^ rotr32(a, 22)
        maj = ((a ^ b) & c) ^ (a & b)
        t2 = (s0 + maj) & MASK_32
        h, g, f, e, d, c, b, a = g, f, e, (d + t1) & MASK_32, c, b, a, (t1 + t2) & MASK_32

    return tuple((s + v) & MASK_32 for s, v in zip(state, (a, b, c, d, e, f, g, h)))


# ============================================================================
# SHA-384 / SHA-512 (64-bit words)
# ============================================================================

def _sigma0_64(x: int) -> int:
    return rotr64(x, 1) ^ rotr64(x, 8) ^ (x >> 7)


def _sigma1_64(x: int) -> int:
    return rotr64(x, 19) ^ rotr64(x, 61) ^ (x >> 6)


def compress512(state: Tuple[int, ...], block: bytes) -> Tuple[int, ...]:
    """Perform 80 rounds of SHA-512 compression on one 128-byte block."""
    if len(block) != 128:
        raise SizeError("block", 128, len(block))
    w = list(words_from_bytes(block, 16, 8, BIG))
    for i in range(16, 80):
        w.append((_sigma1_64(w[i - 2]) + w[i - 7] + _sigma0_64(w[i - 15]) + w[i - 16]) & MASK_64)
    a, b, c, d, e, f, g, h = state

    for i in range(80):
        s1 = rotr64(e, 14) ^ rotr64(e, 18) ^ rotr64(e, 41)
        ch = g ^ (e & (f ^ g))
        t1 = (h + s1 + ch + K512[i] + w[i]) & MASK_64
        s0 = rotr64(a, 28) ^ rotr64(a, 34) ^ rotr64(a, 39)
        maj = ((a ^ b) & c) ^ (a & b)
        t2 = (s0 + maj) & MASK_64
        h, g, f, e, d, c, b, a = g, f, e, (d + t1) & MASK_64, c, b, a, (t1 + t2) & MASK_64

    return tuple((s + v) & MASK_64 for s, v in zip(state, (a, b, c, d, e, f, g, h)))


@lru_cache(maxsize=None, typed=True)
def sha512_t_iv(t: int) -> Tuple[int, ...]:
    """
    Derive the SHA-512/t initial value (FIPS 180-4 section 5.3.6).

    Args:
        t: Output length in bits; a multiple of 8 in 8..504, not 384

    Returns:
        8 64-bit words

    Raises:
        OutOfRangeError: If t is not a permitted output length
    """
    if isinstance(t, bool) or not isinstance(t, int):
        raise EnforceTypeError("t", "int", t)
    if t < 8 or t > 504 or t % 8 or t == 384:
        raise OutOfRangeError("t", t, detail="a multiple of 8 in 8..504 other than 384")

    state = tuple(h ^ SHA512_T_XOR for h in IV512)
    label = f"SHA-512/{t}".encode('ascii')
    padded = sha2_64_pad(label, len(label))
    for i in range(0, len(padded), 128):
        state = compress512(state, padded[i:i + 128])
    logger.debug("Derived SHA-512/%d initial value", t)
    return state


# ============================================================================
# Streaming contexts
# ============================================================================

class _Sha2_32(MerkleDamgardHash):
    block_size = 64
    _pad = staticmethod(sha2_32_pad)
    _word_size = 4
    _byteorder = BIG

    def _compress(self, state, block, counter):
        return compress256(state, block)


class _Sha2_64(MerkleDamgardHash):
    block_size = 128
    _pad = staticmethod(sha2_64_pad)
    _word_size = 8
    _byteorder = BIG

    def _compress(self, state, block, counter):
        return compress512(state, block)


class Sha224(_Sha2_32):
    name = 'sha224'
    digest_size = 28

    def _initial_state(self):
        return IV224


class Sha256(_Sha2_32):
    name = 'sha256'
    digest_size = 32

    def _initial_state(self):
        return IV256


class Sha384(_Sha2_64):
    name = 'sha384'
    digest_size = 48

    def _initial_state(self):
        return IV384


class Sha512(_Sha2_64):
    name = 'sha512'
    digest_size = 64

    def _initial_state(self):
        return IV512


class Sha512t(_Sha2_64):
    """
    SHA-512/t for any permitted output length t (in bits).

    Example:
        >>> Sha512t(256, b"abc").hexdigest()[:16]
        '53048e2681941ef9'
    """

    def __init__(self, t: int, data: bytes = b''):
        self._iv = sha512_t_iv(t)
        self._t = t
        self.digest_size = t // 8
        self.name = f'sha512_{t}'
        super().__init__(data)

    @property
    def t(self) -> int:
        return self._t

    def _initial_state(self):
        return self._iv


class Sha512_224(Sha512t):
    def __init__(self, data: bytes = b''):
        super().__init__(224, data)


class Sha512_256(Sha512t):
    def __init__(self, data: bytes = b''):
        super().__init__(256, data)


# ============================================================================
# One-shot helpers
# ============================================================================

def sha224(data: bytes) -> bytes:
    return Sha224(data).sum()


def sha256(data: bytes) -> bytes:
    """
    Compute the SHA-256 hash of the input data.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return Sha256(data).sum()


def sha256_hex(data: bytes) -> str:
    return sha256(data).hex()


def sha384(data: bytes) -> bytes:
    return Sha384(data).sum()


def sha512(data: bytes) -> bytes:
    return Sha512(data).sum()


def sha512_224(data: bytes) -> bytes:
    return Sha512_224(data).sum()


def sha512_256(data: bytes) -> bytes:
    return Sha512_256(data).sum()


# Self-test when run directly
if __name__ == "__main__":
    # Test vectors from NIST
    test_cases = [
        (sha256, b"", "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"),
        (sha256, b"abc", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
        (sha224, b"abc", "23097d223405d8228642a477bda255b32aadbce4bda0b3f7e36c9da7"),
        (sha512, b"abc",
         "ddaf35a193617abacc417349ae20413112e6fa4e89a97ea20a9eeee64b55d39a"
         "2192992a274fc1a836ba3c23a3feebbd454d4423643ce80e2a9ac94fa54ca49f"),
    ]

    print("SHA-2 Implementation Test")
    print("=" * 60)

    all_passed = True
    for fn, data, expected in test_cases:
        result = fn(data).hex()
        passed = result == expected
        all_passed = all_passed and passed
        print(f"{'PASS' if passed else 'FAIL'}  {fn.__name__}({data!r})")

    print("=" * 60)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")
