"""pool.py - Append-only string arena addressed by byte offsets"""

from __future__ import annotations

from typing import NamedTuple
from uuid import uuid4

import numpy as np
from numpy.typing import NDArray

from .config import POOL_MIN_CAPACITY, TERMINATOR, TEXT_ENCODING
from .exceptions import PreconditionViolation
from .logger import get_logger

logger = get_logger(__name__)


class TextHandle(NamedTuple):
    """Byte offset of a string, bound to the pool that issued it."""

    pool_id: int
    offset: int


class StringPool:
    """
    StringPool: NUL-terminated text stored back to back in one byte buffer.

    - intern() appends and returns a TextHandle; identical strings are stored again.
    - Capacity doubles (starting at POOL_MIN_CAPACITY) when an append would overflow.
    - Growth copies the used prefix, so every issued offset stays valid.
    - Nothing is ever freed or compacted while the pool is alive.
    """

    def __init__(self) -> None:
        self.id: int = uuid4().int
        self._buffer: NDArray[np.uint8] = np.zeros(0, dtype=np.uint8)
        self._fill: int = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> StringPool:
        """Rebuild a pool from its serialized prefix; capacity equals fill."""
        data = bytes(data)
        if data and data[-1] != TERMINATOR:
            raise PreconditionViolation("Pool bytes do not end with a terminator")
        pool = cls()
        pool._buffer = np.frombuffer(bytes(data), dtype=np.uint8).copy()
        pool._fill = len(data)
        return pool

    @property
    def fill(self) -> int:
        return self._fill

    @property
    def capacity(self) -> int:
        return len(self._buffer)

    def __len__(self) -> int:
        return self._fill

    def to_bytes(self) -> bytes:
        return self._buffer[: self._fill].tobytes()

    @staticmethod
    def encode(text: str | bytes) -> bytes:
        """Validate text for storage and return its encoded bytes."""
        encoded = text.encode(TEXT_ENCODING) if isinstance(text, str) else bytes(text)
        if not encoded:
            raise PreconditionViolation("Cannot intern empty text")
        if TERMINATOR in encoded:
            raise PreconditionViolation(f"Text {text!r} contains a NUL byte")
        return encoded

    def intern(self, text: str | bytes) -> TextHandle:
        encoded = self.encode(text)
        size = len(encoded) + 1
        self._reserve(self._fill + size)
        start = self._fill
        end = start + len(encoded)
        self._buffer[start:end] = np.frombuffer(encoded, dtype=np.uint8)
        self._buffer[end] = TERMINATOR
        self._fill += size
        return TextHandle(self.id, start)

    def _reserve(self, needed: int) -> None:
        capacity = self.capacity
        if needed <= capacity:
            return
        while needed > capacity:
            capacity = POOL_MIN_CAPACITY if capacity == 0 else capacity * 2
        grown = np.zeros(capacity, dtype=np.uint8)
        grown[: self._fill] = self._buffer[: self._fill]
        self._buffer = grown
        logger.debug(f"[StringPool] Grew buffer to {capacity} bytes (fill={self._fill})")

    def is_string_start(self, offset: int) -> bool:
        """True if offset is the first byte of a stored string."""
        if not 0 <= offset < self._fill:
            return False
        return offset == 0 or int(self._buffer[offset - 1]) == TERMINATOR

    def handle_at(self, offset: int) -> TextHandle:
        if not self.is_string_start(offset):
            raise PreconditionViolation(f"Offset {offset} is not the start of a pooled string")
        return TextHandle(self.id, offset)

    def offset_of(self, handle: TextHandle) -> int:
        """Unwrap a handle, rejecting ones this pool did not issue."""
        if not isinstance(handle, TextHandle) or handle.pool_id != self.id:
            raise PreconditionViolation(f"Handle {handle!r} was not issued by this pool")
        if not self.is_string_start(handle.offset):
            raise PreconditionViolation(
                f"Handle offset {handle.offset} is not the start of a pooled string"
            )
        return handle.offset

    def view(self, handle: TextHandle) -> memoryview:
        """Read-only bytes of the string at handle, without the terminator."""
        offset = self.offset_of(handle)
        segment = self._buffer[offset : self._fill]
        # Every stored string is terminated, so argmax finds the first NUL.
        end = int(np.argmax(segment == TERMINATOR))
        return memoryview(segment[:end]).toreadonly()

    def lookup(self, handle: TextHandle) -> str:
        return bytes(self.view(handle)).decode(TEXT_ENCODING, errors="replace")
