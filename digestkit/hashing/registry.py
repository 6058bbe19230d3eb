"""
Hash Algorithm Registry

Look up a streaming hash by name and hash byte strings or binary streams
with it.

Features:
- Case-insensitive names; '-' is ignored and '/' reads as '_'
  ("SHA-512/256" == "sha512_256", "RIPEMD-160" == "ripemd160")
- "sha512_<t>" for any permitted SHA-512/t output length
- Stream hashing in CHUNK_SIZE reads
"""

import logging
import re
from typing import BinaryIO, Callable, Dict, Tuple

from ..errors import EnforceTypeError, OutOfRangeError, UnknownAlgorithmError
from .base import StreamingHash
from .blake2 import Blake2b, Blake2s
from .md4 import Md4
from .md5 import Md5
from .ripemd import RipeMd128, RipeMd160, RipeMd256, RipeMd320
from .sha1 import Sha1
from .sha2 import Sha224, Sha256, Sha384, Sha512, Sha512_224, Sha512_256, Sha512t
from .whirlpool import Whirlpool


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

CHUNK_SIZE = 65536  # 64 KB per read

HASH_ALGORITHMS: Dict[str, Callable[..., StreamingHash]] = {
    'md4': Md4,
    'md5': Md5,
    'sha1': Sha1,
    'ripemd128': RipeMd128,
    'ripemd160': RipeMd160,
    'ripemd256': RipeMd256,
    'ripemd320': RipeMd320,
    'sha224': Sha224,
    'sha256': Sha256,
    'sha384': Sha384,
    'sha512': Sha512,
    'sha512_224': Sha512_224,
    'sha512_256': Sha512_256,
    'whirlpool': Whirlpool,
    'blake2b': Blake2b,
    'blake2s': Blake2s,
}

_SHA512_T = re.compile(r'^sha512_(\d+)$')


def normalize_name(name: str) -> str:
    """Canonical registry key for an algorithm name."""
    if not isinstance(name, str):
        raise EnforceTypeError("name", "str", name)
    return name.strip().lower().replace('-', '').replace('/', '_')


def algorithms_available() -> Tuple[str, ...]:
    """Sorted names of every registered algorithm."""
    return tuple(sorted(HASH_ALGORITHMS))


def new(name: str, data: bytes = b'', **params) -> StreamingHash:
    """
    Create a streaming hash context by name.

    Args:
        name: Algorithm name, e.g. "md4", "SHA-512/256", "blake2b"
        data: Optional initial data
        **params: Algorithm parameters (BLAKE2 digest_size, key, salt, ...)

    Returns:
        A fresh StreamingHash

    Raises:
        UnknownAlgorithmError: If no algorithm has that name

    Example:
        >>> new("md5", b"abc").hexdigest()
        '900150983cd24fb0d6963f7d28e17f72'
    """
    key = normalize_name(name)
    factory = HASH_ALGORITHMS.get(key)
    if factory is None:
        match = _SHA512_T.match(key)
        if match is None:
            raise UnknownAlgorithmError(name, algorithms_available())
        logger.debug("Creating hash context: sha512/%s", match.group(1))
        return Sha512t(int(match.group(1)), data, **params)

    logger.debug("Creating hash context: %s", key)
    return factory(data, **params)


def hash_bytes(name: str, data: bytes, **params) -> bytes:
    """One-shot digest of `data` with the named algorithm."""
    return new(name, data, **params).sum()


def hash_stream(name: str, stream: BinaryIO, chunk_size: int = CHUNK_SIZE,
                **params) -> bytes:
    """
    Hash a binary stream (open file, BytesIO) read in chunks.

    Args:
        name: Algorithm name
        stream: Object with a binary read() method
        chunk_size: Bytes per read

    Returns:
        Digest of everything read until EOF

    Raises:
        EnforceTypeError: If stream has no read() method
        UnknownAlgorithmError: If no algorithm has that name

    Example:
        >>> with open("large_file.bin", "rb") as f:
        ...     digest = hash_stream("sha256", f)
    """
    if not hasattr(stream, 'read'):
        raise EnforceTypeError("stream", "binary readable object", stream)
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
        raise EnforceTypeError("chunk_size", "int", chunk_size)
    if chunk_size < 1:
        raise OutOfRangeError("chunk_size", chunk_size, 1)

    hasher = new(name, **params)
    total = 0
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        hasher.update(chunk)
        total += len(chunk)

    logger.debug("%s hashed %d bytes from stream", hasher.name, total)
    return hasher.finalize()
