"""Serve stream sources as werkzeug response bodies."""

from typing import BinaryIO, Callable, Iterator, Mapping, Optional

from werkzeug import Request, Response
from werkzeug.wsgi import ClosingIterator

from ..core.source import ExistingStreamSource
from ..core.util import iter_chunks
from ..io.base import StreamSource, DEFAULT_CHUNK_SIZE, DEFAULT_CONTENT_TYPE
from ..logging import logger


def _body(stream: BinaryIO, chunk_size: int, close: bool) -> Iterator[bytes]:
    try:
        yield from iter_chunks(stream, chunk_size)
    finally:
        if close:
            stream.close()


def stream_response(
    source: StreamSource,
    *,
    status: int = 200,
    headers: Optional[Mapping[str, str]] = None,
    content_type: str = DEFAULT_CONTENT_TYPE,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Response:
    """Build a streaming response from one `source.get_stream()` call.

    Streams the source created are closed once the body is sent or the
    response is closed, even if the body was never read (HEAD, 204, 304).
    A stream wrapped by ExistingStreamSource belongs to the caller and is
    left open.
    """
    stream = source.get_stream()
    close = not isinstance(source, ExistingStreamSource)

    response_headers = dict(headers or {})
    remaining = getattr(stream, "remaining", None)
    if remaining is not None:
        response_headers.setdefault("Content-Length", str(remaining))

    logger.debug("Serving %r (status=%d, length=%s)", source, status, remaining)
    return Response(
        ClosingIterator(_body(stream, chunk_size, close), [stream.close] if close else None),
        status=status,
        headers=response_headers,
        content_type=content_type,
        direct_passthrough=True,
    )


def source_handler(source: StreamSource, **kwargs) -> Callable[[Request], Response]:
    """Return a request handler serving `source`, for RequestHandler.respond_with_handler()."""
    def handler(request: Request) -> Response:
        return stream_response(source, **kwargs)

    return handler
