# Hashing Module
"""
Block hash engines sharing one padding/streaming discipline:
- MD4, MD5, SHA-1
- RIPEMD-128/160/256/320
- SHA-224, SHA-256, SHA-384, SHA-512, SHA-512/t
- Whirlpool
- BLAKE2b, BLAKE2s (keyed, salted, personalized)
- Registry: new(), hash_bytes(), hash_stream()
"""

from .base import HashState, MerkleDamgardHash, StreamingHash
from .blake2 import Blake2b, Blake2bParams, Blake2s, Blake2sParams, blake2b, blake2s
from .md4 import Md4, md4, md4_hex
from .md5 import Md5, md5, md5_hex
from .ripemd import RipeMd128, RipeMd160, RipeMd256, RipeMd320
from .ripemd import ripemd128, ripemd160, ripemd256, ripemd320
from .sha1 import Sha1, sha1, sha1_hex
from .sha2 import (
    Sha224, Sha256, Sha384, Sha512, Sha512t, Sha512_224, Sha512_256,
    sha224, sha256, sha256_hex, sha384, sha512, sha512_224, sha512_256,
    sha512_t_iv,
)
from .whirlpool import Whirlpool, whirlpool, whirlpool_hex
from .registry import (
    CHUNK_SIZE, HASH_ALGORITHMS, algorithms_available, hash_bytes,
    hash_stream, new,
)

__all__ = [
    # Context
    'HashState', 'StreamingHash', 'MerkleDamgardHash',
    # MD family
    'Md4', 'md4', 'md4_hex', 'Md5', 'md5', 'md5_hex', 'Sha1', 'sha1', 'sha1_hex',
    # RIPEMD
    'RipeMd128', 'RipeMd160', 'RipeMd256', 'RipeMd320',
    'ripemd128', 'ripemd160', 'ripemd256', 'ripemd320',
    # SHA-2
    'Sha224', 'Sha256', 'Sha384', 'Sha512', 'Sha512t', 'Sha512_224', 'Sha512_256',
    'sha224', 'sha256', 'sha256_hex', 'sha384', 'sha512', 'sha512_224', 'sha512_256',
    'sha512_t_iv',
    # Whirlpool
    'Whirlpool', 'whirlpool', 'whirlpool_hex',
    # BLAKE2
    'Blake2b', 'Blake2bParams', 'Blake2s', 'Blake2sParams', 'blake2b', 'blake2s',
    # Registry
    'CHUNK_SIZE', 'HASH_ALGORITHMS', 'algorithms_available', 'hash_bytes',
    'hash_stream', 'new',
]
