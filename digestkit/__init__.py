# digestkit
"""
Fixed-width integer arithmetic and block hash functions in pure Python.

Subpackages:
- numeric: U32/U64/U128/U256/U512 value types, mutable variant, Int64
- hashing: MD4, MD5, SHA-1, RIPEMD, SHA-2, Whirlpool, BLAKE2 and a registry
"""

from .errors import (
    ContextFinalizedError, DigestKitError, EnforceTypeError, NotSupportedError,
    OutOfRangeError, SizeError, UnknownAlgorithmError,
)

__version__ = "1.0.0"

__all__ = [
    'ContextFinalizedError', 'DigestKitError', 'EnforceTypeError',
    'NotSupportedError', 'OutOfRangeError', 'SizeError', 'UnknownAlgorithmError',
    '__version__',
]
