"""Base protocols and shared settings for stream sources."""

from typing import BinaryIO, Protocol, runtime_checkable

from ..core.model import SourceUnavailableError  # noqa: F401  re-export


DEFAULT_CHUNK_SIZE = 64 * 1024  # 64 KB
DEFAULT_CONTENT_TYPE = "application/octet-stream"
HTTP_CONNECT_TIMEOUT = 10.0
HTTP_READ_TIMEOUT = 60.0


@runtime_checkable
class StreamSource(Protocol):
    """Protocol for anything that hands out a readable binary stream on demand."""

    def get_stream(self) -> BinaryIO:
        """Return a stream positioned wherever the source left it.
        Whether repeated calls return the same stream is up to the source.
        """
        ...


@runtime_checkable
class AsyncStream(Protocol):
    """Protocol for asynchronous readable streams."""

    async def read(self, n: int = -1) -> bytes:
        """Return up to `n` bytes (all remaining if n < 0); b"" at end-of-stream."""
        ...

    async def aclose(self) -> None:
        ...


@runtime_checkable
class AsyncStreamSource(Protocol):
    """Protocol for asynchronous stream sources."""

    async def get_stream(self) -> AsyncStream:
        ...
