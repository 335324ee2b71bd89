"""Asynchronous HTTP stream source using httpx."""

import httpx
from typing import Mapping, Optional

from .base import SourceUnavailableError, DEFAULT_CHUNK_SIZE, HTTP_CONNECT_TIMEOUT, HTTP_READ_TIMEOUT
from ..logging import logger, short_exc


# Global async client
_client: Optional[httpx.AsyncClient] = None


def _get_client() -> httpx.AsyncClient:
    """Get or create the global httpx AsyncClient."""
    global _client
    if _client is None:
        _client = httpx.AsyncClient(timeout=httpx.Timeout(HTTP_READ_TIMEOUT, connect=HTTP_CONNECT_TIMEOUT))
    return _client


class HTTPAsyncStream:
    """Asynchronous readable stream over a streamed httpx response."""

    def __init__(self, response: httpx.Response, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.response = response
        self.bytes_read = 0
        self._chunks = response.aiter_bytes(chunk_size)
        self._buffer = b""
        self._eof = False

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self):
        return self.response.headers

    async def _fill(self) -> bool:
        """Pull the next non-empty chunk into the buffer; False at end-of-stream."""
        while not self._buffer and not self._eof:
            try:
                self._buffer = await self._chunks.__anext__()
            except StopAsyncIteration:
                self._eof = True
        return bool(self._buffer)

    async def read(self, n: int = -1) -> bytes:
        if n is None or n < 0:
            parts = []
            while await self._fill():
                parts.append(self._buffer)
                self._buffer = b""
            data = b"".join(parts)
        else:
            if n == 0 or not await self._fill():
                return b""
            data, self._buffer = self._buffer[:n], self._buffer[n:]
        self.bytes_read += len(data)
        return data

    async def aclose(self) -> None:
        await self.response.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


class AsyncURLStreamSource:
    """Asynchronous source that issues a fresh GET for every get_stream()."""

    def __init__(self, url: str, *, headers: Optional[Mapping[str, str]] = None,
                 client: Optional[httpx.AsyncClient] = None):
        self.url = url
        self.headers = dict(headers or {})
        self.requests_made = 0
        self._client = client

    async def get_stream(self) -> HTTPAsyncStream:
        client = self._client if self._client is not None else _get_client()
        self.requests_made += 1
        try:
            request = client.build_request("GET", self.url, headers=self.headers)
            response = await client.send(request, stream=True)
        except httpx.RequestError as e:
            logger.warning("GET %s failed: %s", self.url, short_exc(e))
            raise SourceUnavailableError(f"GET request failed: {e}") from e

        if response.status_code >= 400:
            await response.aclose()
            logger.warning("GET %s returned %d", self.url, response.status_code)
            raise SourceUnavailableError(f"GET request failed with status {response.status_code}")

        logger.debug("GET %s -> %d", self.url, response.status_code)
        return HTTPAsyncStream(response)

    def __repr__(self):
        return f"{type(self).__name__}({self.url!r})"


async def open_http_source_async(url: str, **kwargs) -> AsyncURLStreamSource:
    """Create an asynchronous HTTP stream source."""
    return AsyncURLStreamSource(url, **kwargs)


async def close_global_client():
    """Close the global httpx client. Call this at application shutdown."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
