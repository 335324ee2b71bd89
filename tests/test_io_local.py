"""Tests for local file sources."""

import pytest
import tempfile
from pathlib import Path
import io

from streamsource import FixedSizeStream, InvalidArgumentError, SourceUnavailableError, for_fixed_size
from streamsource.io.local import (
    FileStreamSource, AsyncStreamAdapter, ThreadedAsyncSource,
    open_local_source, open_local_source_async,
)


FIXTURES = Path(__file__).parent / "fixtures"


class TestFileStreamSource:
    """Test synchronous file source."""

    def test_basic_read(self):
        """Test reading a body file."""
        source = FileStreamSource(FIXTURES / "foobar.txt")
        with source.get_stream() as stream:
            assert stream.read() == b"Hello world."

    def test_fresh_stream_per_call(self):
        """Each call opens the file again from the start."""
        test_data = b"0123456789"

        with tempfile.NamedTemporaryFile() as f:
            f.write(test_data)
            f.flush()

            source = FileStreamSource(f.name)
            first = source.get_stream()
            second = source.get_stream()
            try:
                assert first is not second
                assert first.read() == test_data
                assert second.read(5) == b"01234"
            finally:
                first.close()
                second.close()

    def test_missing_file(self):
        """Missing files fail at get_stream time, not construction."""
        source = FileStreamSource("/nonexistent/body.bin")
        with pytest.raises(SourceUnavailableError, match="Cannot open"):
            source.get_stream()

    def test_missing_file_is_ioerror(self):
        """SourceUnavailableError is an IOError."""
        with pytest.raises(IOError):
            FileStreamSource("/nonexistent/body.bin").get_stream()

    def test_factory_function(self):
        """Test factory function."""
        source = open_local_source(str(FIXTURES / "foobar.txt"))
        assert isinstance(source, FileStreamSource)
        assert source.path == FIXTURES / "foobar.txt"


class TestThreadedAsyncSource:
    """Test asynchronous wrappers around sync sources."""

    @pytest.mark.asyncio
    async def test_basic_read(self):
        """Test async read of a file source."""
        source = await open_local_source_async(FIXTURES / "foobar.txt")
        assert isinstance(source, ThreadedAsyncSource)

        stream = await source.get_stream()
        try:
            assert await stream.read(5) == b"Hello"
            assert await stream.read() == b" world."
            assert await stream.read() == b""
        finally:
            await stream.aclose()

    @pytest.mark.asyncio
    async def test_fixed_size(self):
        """Factory sources stay lazy and fresh under the async wrapper."""
        source = ThreadedAsyncSource(for_fixed_size('a', 100))
        async with await source.get_stream() as first:
            assert await first.read() == b"a" * 100
        async with await source.get_stream() as second:
            assert await second.read(10) == b"a" * 10

    @pytest.mark.asyncio
    async def test_invalid_argument_propagates(self):
        """Construction errors surface from get_stream."""
        source = ThreadedAsyncSource(for_fixed_size('a', 0))
        with pytest.raises(InvalidArgumentError):
            await source.get_stream()

    @pytest.mark.asyncio
    async def test_adapter_closes_stream(self):
        """aclose closes the wrapped stream."""
        bio = io.BytesIO(b"abc")
        adapter = AsyncStreamAdapter(bio)
        assert await adapter.read() == b"abc"
        await adapter.aclose()
        assert bio.closed

    @pytest.mark.asyncio
    async def test_adapter_past_end(self):
        """Reading past the end keeps returning b''."""
        adapter = AsyncStreamAdapter(FixedSizeStream('a', 2))
        assert await adapter.read(5) == b"aa"
        assert await adapter.read(5) == b""
        assert await adapter.read(5) == b""
