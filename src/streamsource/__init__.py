"""streamsource - bounded synthetic byte streams and stream sources for HTTP stubbing."""

import base64
import hashlib

from .core.model import Result, InvalidArgumentError, SourceUnavailableError   # re-export
from .core.stream import FixedSizeStream
from .core.source import ExistingStreamSource, FactoryStreamSource, for_stream, for_fixed_size
from .core.util import iter_chunks
from .io import open_source, open_source_async
from .io.base import DEFAULT_CHUNK_SIZE
from .logging import logger, short_exc


class _Digest:
    """Running sha256 + byte count + optional leading peek."""

    def __init__(self, bytes_peek: int | None):
        self.sha = hashlib.sha256()
        self.count = 0
        self.peek_len = bytes_peek or 0
        self.peek = bytearray()

    def update(self, chunk: bytes) -> None:
        self.sha.update(chunk)
        self.count += len(chunk)
        if len(self.peek) < self.peek_len:
            self.peek.extend(chunk[:self.peek_len - len(self.peek)])

    def result(self, source) -> Result:
        meta = {"source": str(source), "sha256": self.sha.hexdigest()}
        if self.peek_len > 0:
            meta["peek_bytes_b64"] = base64.b64encode(bytes(self.peek)).decode()
        return Result(True, meta, None, self.count)


async def summarize(source, *, bytes_peek: int | None = None, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Result:
    """Read a source (path, URL, stream or source object) to exhaustion asynchronously.

    The stream is closed afterwards, including one passed in directly.
    """
    digest = _Digest(bytes_peek)
    try:
        src = await open_source_async(source)
        stream = await src.get_stream()
        try:
            while chunk := await stream.read(chunk_size):
                digest.update(chunk)
        finally:
            await stream.aclose()
    except (SourceUnavailableError, InvalidArgumentError) as e:
        logger.warning("Summarizing %s failed: %s", source, short_exc(e))
        return Result(False, None, str(e), digest.count)
    return digest.result(source)


def summarize_sync(source, *, bytes_peek: int | None = None, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Result:
    """Synchronous counterpart of summarize(); also closes the stream."""
    digest = _Digest(bytes_peek)
    try:
        stream = open_source(source).get_stream()
        try:
            for chunk in iter_chunks(stream, chunk_size):
                digest.update(chunk)
        finally:
            stream.close()
    except (SourceUnavailableError, InvalidArgumentError) as e:
        logger.warning("Summarizing %s failed: %s", source, short_exc(e))
        return Result(False, None, str(e), digest.count)
    return digest.result(source)


__all__ = [
    "summarize", "summarize_sync",
    "FixedSizeStream", "ExistingStreamSource", "FactoryStreamSource",
    "for_stream", "for_fixed_size",
    "open_source", "open_source_async",
    "Result", "InvalidArgumentError", "SourceUnavailableError",
]
