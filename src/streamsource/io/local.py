"""Local file sources and thread-offloaded async adapters."""

import asyncio
from pathlib import Path
from typing import BinaryIO, Union

from .base import StreamSource, SourceUnavailableError
from ..logging import logger, short_exc


class FileStreamSource:
    """Source that opens the file anew on every get_stream()."""

    def __init__(self, path: Union[Path, str]):
        self.path = Path(path)

    def get_stream(self) -> BinaryIO:
        try:
            stream = open(self.path, 'rb')
        except OSError as e:
            logger.warning("Cannot open %s: %s", self.path, short_exc(e))
            raise SourceUnavailableError(f"Cannot open {self.path}: {e}") from e
        logger.debug("Opened %s", self.path)
        return stream

    def __repr__(self):
        return f"{type(self).__name__}({str(self.path)!r})"


class AsyncStreamAdapter:
    """Asynchronous view of a blocking stream - reads run in a worker thread."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream

    async def read(self, n: int = -1) -> bytes:
        return await asyncio.to_thread(self._stream.read, n)

    async def aclose(self) -> None:
        await asyncio.to_thread(self._stream.close)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


class ThreadedAsyncSource:
    """Asynchronous source wrapping any synchronous StreamSource."""

    def __init__(self, source: StreamSource):
        self._source = source

    async def get_stream(self) -> AsyncStreamAdapter:
        stream = await asyncio.to_thread(self._source.get_stream)
        return AsyncStreamAdapter(stream)

    def __repr__(self):
        return f"{type(self).__name__}({self._source!r})"


def open_local_source(path: Union[Path, str]) -> FileStreamSource:
    """Create a synchronous file source."""
    return FileStreamSource(path)


async def open_local_source_async(path: Union[Path, str]) -> ThreadedAsyncSource:
    """Create an asynchronous file source."""
    return ThreadedAsyncSource(FileStreamSource(path))
