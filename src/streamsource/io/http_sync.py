"""Synchronous HTTP stream source using requests."""

import io
from typing import Mapping, Optional

import requests

from .base import SourceUnavailableError, DEFAULT_CHUNK_SIZE, HTTP_CONNECT_TIMEOUT, HTTP_READ_TIMEOUT
from ..logging import logger, short_exc


# Module-level session for connection pooling
_session = None


def _get_session():
    """Get or create the global requests session."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


class HTTPStream(io.RawIOBase):
    """Readable stream over a streamed requests response body."""

    def __init__(self, response: requests.Response, chunk_size: int = DEFAULT_CHUNK_SIZE):
        super().__init__()
        self.response = response
        self.bytes_read = 0
        self._chunks = response.iter_content(chunk_size)
        self._buffer = b""

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self):
        return self.response.headers

    def readable(self):
        return True

    def readinto(self, b):
        while not self._buffer:
            chunk = next(self._chunks, None)
            if chunk is None:
                return 0
            self._buffer = chunk

        n = min(len(b), len(self._buffer))
        b[:n] = self._buffer[:n]
        self._buffer = self._buffer[n:]
        self.bytes_read += n
        return n

    def close(self):
        if not self.closed:
            self.response.close()
        super().close()


class URLStreamSource:
    """Source that issues a fresh GET for every get_stream()."""

    def __init__(self, url: str, *, headers: Optional[Mapping[str, str]] = None,
                 session: Optional[requests.Session] = None, timeout=None):
        self.url = url
        self.headers = dict(headers or {})
        self.requests_made = 0
        self._session = session if session is not None else _get_session()
        self._timeout = timeout if timeout is not None else (HTTP_CONNECT_TIMEOUT, HTTP_READ_TIMEOUT)

    def get_stream(self) -> HTTPStream:
        self.requests_made += 1
        try:
            response = self._session.get(self.url, headers=self.headers, stream=True, timeout=self._timeout)
        except requests.RequestException as e:
            logger.warning("GET %s failed: %s", self.url, short_exc(e))
            raise SourceUnavailableError(f"GET request failed: {e}") from e

        if response.status_code >= 400:
            response.close()
            logger.warning("GET %s returned %d", self.url, response.status_code)
            raise SourceUnavailableError(f"GET request failed with status {response.status_code}")

        logger.debug("GET %s -> %d", self.url, response.status_code)
        return HTTPStream(response)

    def __repr__(self):
        return f"{type(self).__name__}({self.url!r})"


def open_http_source(url: str, **kwargs) -> URLStreamSource:
    """Create a synchronous HTTP stream source."""
    return URLStreamSource(url, **kwargs)
