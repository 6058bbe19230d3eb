"""
Streaming Hash Context

Shared buffering and lifecycle for every block hash in digestkit.
A context moves EMPTY -> ACCUMULATING -> FINALIZED; reset() brings it
back to EMPTY from anywhere.

Components:
- HashState: lifecycle enum
- StreamingHash: block buffer, byte counter, update/sum/finalize/reset
- MerkleDamgardHash: StreamingHash with length-suffixed padding and
  word serialization of the chaining state

Engines plug in through three hooks:
- _initial_state() -> tuple of words
- _compress(state, block, counter) -> new tuple of words (pure)
- _finish(state, tail, total_length) -> digest bytes (pure)

Because the hooks never mutate their inputs, sum() can produce a digest
from the live state without disturbing the stream.
"""

import copy
from enum import Enum
from typing import Callable, Optional, Tuple

from ..endian import words_to_bytes
from ..errors import ContextFinalizedError, EnforceTypeError
from .padding import md_pad


class HashState(Enum):
    """Lifecycle of a hash context."""
    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"


class StreamingHash:
    """
    Incremental hash context.

    Input is buffered until a whole block is available; block-aligned
    input is compressed straight from the caller's buffer. Engines that
    must see their final block at finalization (BLAKE2) set
    `_defer_last_block` so a full block is only compressed once more
    data follows it.

    Example:
        >>> h = Md4()
        >>> h.update(b"a").update(b"bc").hexdigest()
        'a448017aaf21d8525fc10ae87aa6729d'
    """

    name = ''
    digest_size = 0
    block_size = 0

    _defer_last_block = False

    def __init__(self, data: bytes = b''):
        self.reset()
        if data:
            self.update(data)

    # ------------------------------------------------------------------
    # Engine hooks
    # ------------------------------------------------------------------

    def _initial_state(self) -> Tuple[int, ...]:
        raise NotImplementedError

    def _compress(self, state: Tuple[int, ...], block: bytes,
                  counter: int) -> Tuple[int, ...]:
        """Compress one block; `counter` is bytes compressed including it."""
        raise NotImplementedError

    def _finish(self, state: Tuple[int, ...], tail: bytes,
                total_length: int) -> bytes:
        raise NotImplementedError

    def _after_reset(self) -> None:
        """Called at the end of reset() (e.g. to absorb a key block)."""
        pass

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> HashState:
        return self._status

    @property
    def length(self) -> int:
        """Number of message bytes written since the last reset."""
        return self._length - self._prefix_length

    def reset(self) -> 'StreamingHash':
        """Restore the initial value and discard all buffered input."""
        self._state = self._initial_state()
        self._buffer = bytearray()
        self._length = 0
        self._prefix_length = 0
        self._digest: Optional[bytes] = None
        self._status = HashState.EMPTY
        self._after_reset()
        return self

    def update(self, data: bytes) -> 'StreamingHash':
        """
        Absorb more message bytes.

        Args:
            data: bytes, bytearray or memoryview

        Returns:
            self, so calls can be chained

        Raises:
            EnforceTypeError: If data is not bytes-like
            ContextFinalizedError: If the context was finalized and not reset
        """
        if self._status is HashState.FINALIZED:
            raise ContextFinalizedError(
                f"{self.name} context is finalized; call reset() first"
            )
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise EnforceTypeError("data", "bytes-like", data)

        view = memoryview(data)
        # cast() only works on C-contiguous views; strided slices are copied
        view = view.cast('B') if view.c_contiguous else memoryview(view.tobytes())
        n = len(view)
        if n == 0:
            return self

        bs = self.block_size
        defer = self._defer_last_block
        state = self._state
        buf = self._buffer
        processed = self._length - len(buf)
        pos = 0

        # Top up a partially filled buffer first
        if buf:
            pos = min(bs - len(buf), n)
            buf += view[:pos]
            if len(buf) == bs and (pos < n or not defer):
                processed += bs
                state = self._compress(state, bytes(buf), processed)
                buf.clear()

        # Whole blocks straight from the input
        while n - pos > bs or (n - pos == bs and not defer):
            processed += bs
            state = self._compress(state, view[pos:pos + bs], processed)
            pos += bs

        if pos < n:
            buf += view[pos:]

        self._state = state
        self._length += n
        self._status = HashState.ACCUMULATING
        return self

    def sum(self) -> bytes:
        """
        Digest of everything written so far.

        Does not change the context: more data may be written afterwards
        and the stream continues as if sum() had not been called.
        """
        if self._digest is not None:
            return self._digest
        return self._finish(self._state, bytes(self._buffer), self._length)

    digest = sum

    def hexdigest(self) -> str:
        return self.sum().hex()

    def finalize(self) -> bytes:
        """
        Produce the digest and close the context.

        Repeated calls return the same bytes. update() raises until
        reset() is called.
        """
        if self._digest is None:
            self._digest = self.sum()
            self._status = HashState.FINALIZED
        return self._digest

    def copy(self) -> 'StreamingHash':
        """Independent clone; updating one does not affect the other."""
        other = copy.copy(self)
        other._buffer = bytearray(self._buffer)
        return other

    def new_empty(self) -> 'StreamingHash':
        """Fresh context with the same parameters (key, digest size, ...)."""
        return self.copy().reset()

    def __repr__(self) -> str:
        return f"<{self.name} {self._status.value} length={self.length}>"


class MerkleDamgardHash(StreamingHash):
    """
    Block hash finished by length-suffixed padding.

    Subclasses set `_pad` (one of the padding functions), `_word_size`
    and `_byteorder`; the digest is the serialized chaining state
    truncated to digest_size.
    """

    _pad: Callable[[bytes, int], bytes] = staticmethod(md_pad)
    _word_size = 4
    _byteorder = 'little'

    def _serialize(self, state: Tuple[int, ...]) -> bytes:
        out = words_to_bytes(state, self._word_size, self._byteorder)
        return out[:self.digest_size]

    def _finish(self, state: Tuple[int, ...], tail: bytes,
                total_length: int) -> bytes:
        padded = self._pad(tail, total_length)
        bs = self.block_size
        for i in range(0, len(padded), bs):
            state = self._compress(state, padded[i:i + bs], total_length)
        return self._serialize(state)
