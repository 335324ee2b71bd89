"""I/O layer for streamsource - hands out byte streams from files, URLs and objects."""

import inspect

# Re-export these for import convenience
from .base import StreamSource, AsyncStream, AsyncStreamSource, SourceUnavailableError
from .local import open_local_source, open_local_source_async, ThreadedAsyncSource
from .http_sync import open_http_source
from .http_async import open_http_source_async
from ..core.source import for_stream


def _is_url(source) -> bool:
    return isinstance(source, str) and source.startswith(('http://', 'https://'))


def _is_async_source(source) -> bool:
    # Both protocols only require `get_stream`, so isinstance() can't tell them apart
    return inspect.iscoroutinefunction(getattr(source, 'get_stream', None))


def open_source(source) -> StreamSource:
    """Factory function to create the appropriate StreamSource for `source`."""
    if isinstance(source, StreamSource):
        if _is_async_source(source):
            raise TypeError(f"{source!r} is asynchronous, use open_source_async()")
        return source

    if hasattr(source, 'read'):  # BinaryIO
        return for_stream(source)

    if _is_url(source):
        return open_http_source(source)
    return open_local_source(source)


async def open_source_async(source) -> AsyncStreamSource:
    """Factory function to create the appropriate AsyncStreamSource for `source`."""
    if _is_async_source(source):
        return source

    if _is_url(source):
        return await open_http_source_async(source)
    return ThreadedAsyncSource(open_source(source))
