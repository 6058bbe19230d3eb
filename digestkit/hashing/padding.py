"""
Message Padding

Finalization framing for the block hashes. Each function takes the
unprocessed tail (shorter than one block) and the total number of bytes
ever written, and returns one or two whole blocks ready for compression.

Padding rules (Merkle-Damgard family):
1. Append the terminator byte 0x80
2. Append zeros until exactly `length_size` bytes remain in the block
   (spilling into an extra block when the tail leaves no room)
3. Append the total message length in bits, reduced modulo the field width

| Function         | Block | Length field                 |
|------------------|-------|------------------------------|
| md_pad           | 64    | 64-bit, little-endian        |
| sha2_32_pad      | 64    | 64-bit, big-endian           |
| sha2_64_pad      | 128   | 128-bit, big-endian          |
| whirlpool_pad    | 64    | 256-bit, big-endian          |
| blake2_pad       | any   | none (zero fill only)        |
"""

from ..errors import OutOfRangeError, SizeError
from ..numeric import U64, U128, U256


# ============================================================================
# Constants
# ============================================================================

TERMINATOR = b'\x80'

_LENGTH_TYPES = {8: U64, 16: U128, 32: U256}


def merkle_damgard_pad(tail: bytes, total_length: int, block_size: int,
                       length_size: int, byteorder: str) -> bytes:
    """
    Generic length-suffixed padding.

    Args:
        tail: Bytes not yet compressed (len < block_size)
        total_length: Total number of message bytes (tail included)
        block_size: Block size in bytes
        length_size: Width of the bit-length field in bytes (8, 16 or 32)
        byteorder: 'big' or 'little' for the length field

    Returns:
        Padded tail, a multiple of block_size long

    Raises:
        SizeError: If the tail is not shorter than one block
        OutOfRangeError: If total_length is negative or the field width
            is unsupported
    """
    if len(tail) >= block_size:
        raise SizeError("tail", f"<{block_size}", len(tail))
    if total_length < 0:
        raise OutOfRangeError("total_length", total_length, 0)
    try:
        length_type = _LENGTH_TYPES[length_size]
    except KeyError:
        raise OutOfRangeError("length_size", length_size, detail="8, 16 or 32") from None

    bit_length = length_type.wrap(total_length * 8)
    if byteorder == 'little':
        length_field = bit_length.to_bytes_le()
    else:
        length_field = bit_length.to_bytes_be()

    # Room left after the terminator; not enough means an extra block
    zeros = (block_size - length_size - len(tail) - 1) % block_size
    return bytes(tail) + TERMINATOR + b'\x00' * zeros + length_field


def md_pad(tail: bytes, total_length: int) -> bytes:
    """MD4/MD5/RIPEMD padding: 64-byte blocks, 64-bit LE bit length."""
    return merkle_damgard_pad(tail, total_length, 64, 8, 'little')


def sha2_32_pad(tail: bytes, total_length: int) -> bytes:
    """SHA-1/SHA-224/SHA-256 padding: 64-byte blocks, 64-bit BE bit length."""
    return merkle_damgard_pad(tail, total_length, 64, 8, 'big')


def sha2_64_pad(tail: bytes, total_length: int) -> bytes:
    """SHA-384/SHA-512 padding: 128-byte blocks, 128-bit BE bit length."""
    return merkle_damgard_pad(tail, total_length, 128, 16, 'big')


def whirlpool_pad(tail: bytes, total_length: int) -> bytes:
    """Whirlpool padding: 64-byte blocks, 256-bit BE bit length."""
    return merkle_damgard_pad(tail, total_length, 64, 32, 'big')


def blake2_pad(tail: bytes, block_size: int) -> bytes:
    """
    BLAKE2 final block: zero-fill to a full block, no terminator.

    The tail may be a complete block (BLAKE2 holds back its last full
    block) but never longer; an empty tail yields one zero block.
    """
    if len(tail) > block_size:
        raise SizeError("tail", f"<={block_size}", len(tail))
    return bytes(tail) + b'\x00' * (block_size - len(tail))
