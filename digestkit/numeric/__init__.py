# Numeric Module
"""
Fixed-width integer primitives:
- Word-level shift/rotate/add helpers
- WideUint value types (U32, U64, U128, U256, U512) and their mutable variant
- Int64 two's-complement integer
"""

from . import bits
from .wideint import WideUint, WideUintMut, U32, U64, U128, U256, U512
from .int64 import Int64

__all__ = [
    'bits',
    # Unsigned
    'WideUint', 'WideUintMut',
    'U32', 'U64', 'U128', 'U256', 'U512',
    # Signed
    'Int64',
]
