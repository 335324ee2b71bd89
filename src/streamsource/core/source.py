"""The two ways a stream source can hand out streams.

`ExistingStreamSource` always returns the stream it was given, so once a
consumer drains it every later `get_stream()` sees an exhausted stream.
`FactoryStreamSource` builds a fresh stream on every call; construction
errors surface at `get_stream()` rather than when the source is built.
"""

from __future__ import annotations

import functools
from typing import BinaryIO, Callable

from .stream import FixedSizeStream


class ExistingStreamSource:
    """Source that exposes one pre-built stream."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream

    def get_stream(self) -> BinaryIO:
        return self._stream

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._stream!r})"


class FactoryStreamSource:
    """Source that calls a no-argument factory for every stream."""

    def __init__(self, factory: Callable[[], BinaryIO]):
        self._factory = factory

    def get_stream(self) -> BinaryIO:
        return self._factory()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._factory!r})"


def for_stream(stream: BinaryIO) -> ExistingStreamSource:
    """Wrap an already constructed stream."""
    return ExistingStreamSource(stream)


def for_fixed_size(fill: str | bytes | int, size: int) -> FactoryStreamSource:
    """Build a new FixedSizeStream(fill, size) on every get_stream()."""
    return FactoryStreamSource(functools.partial(FixedSizeStream, fill, size))
