"""Bounded synthetic byte streams."""

from __future__ import annotations

import io
import operator

from .model import InvalidArgumentError
from ..logging import logger


def _coerce_fill(fill: str | bytes | int) -> int:
    """Return `fill` as a byte value in 0..255."""
    if isinstance(fill, str):
        if len(fill) != 1 or ord(fill) > 0xFF:
            raise InvalidArgumentError(f"fill={fill!r}")
        return ord(fill)
    if isinstance(fill, (bytes, bytearray)):
        if len(fill) != 1:
            raise InvalidArgumentError(f"fill={fill!r}")
        return fill[0]
    if isinstance(fill, int) and not isinstance(fill, bool) and 0 <= fill <= 0xFF:
        return fill
    raise InvalidArgumentError(f"fill={fill!r}")


class FixedSizeStream(io.RawIOBase):
    """Forward-only stream yielding `size` copies of one byte, then EOF.

    Nothing is allocated up front; reads fill the caller's buffer from a
    cursor. Not safe for concurrent reads on the same instance.
    """

    def __init__(self, fill: str | bytes | int, size: int):
        super().__init__()
        size = operator.index(size)
        if size < 1:
            raise InvalidArgumentError(f"size={size}")
        self._fill = _coerce_fill(fill)
        self._size = size
        self._position = 0
        logger.debug("FixedSizeStream created: fill=%#04x size=%d", self._fill, size)

    @property
    def fill(self) -> int:
        return self._fill

    @property
    def size(self) -> int:
        return self._size

    @property
    def position(self) -> int:
        return self._position

    @property
    def remaining(self) -> int:
        return self._size - self._position

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed stream")

    def readable(self) -> bool:
        return True

    def read_byte(self) -> int | None:
        """Return the fill byte and advance, or None once the stream is exhausted."""
        self._check_open()
        if self._position >= self._size:
            return None
        self._position += 1
        return self._fill

    def readinto(self, b) -> int:
        self._check_open()
        n = min(len(b), self._size - self._position)
        if n <= 0:
            return 0
        with memoryview(b) as view, view.cast("B") as m:
            m[:n] = bytes((self._fill,)) * n
        self._position += n
        return n

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(fill={self._fill:#04x}, "
                f"size={self._size}, position={self._position})")
