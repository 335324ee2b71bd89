"""Tests for stream source adapters."""

import io

import pytest

from streamsource import (
    FixedSizeStream, ExistingStreamSource, FactoryStreamSource,
    InvalidArgumentError, for_stream, for_fixed_size,
)
from streamsource.core.util import read_all
from streamsource.io.base import StreamSource


class TestExistingStreamSource:
    """Test the source wrapping a pre-built stream."""

    def test_same_instance(self):
        """Repeated get_stream calls return the same object."""
        stream = FixedSizeStream('a', 10)
        source = for_stream(stream)
        assert isinstance(source, ExistingStreamSource)
        assert source.get_stream() is stream
        assert source.get_stream() is source.get_stream()

    def test_exhausted_after_first_consumer(self):
        """Once drained, later consumers see an exhausted stream."""
        source = for_stream(FixedSizeStream('a', 10))
        assert read_all(source.get_stream()) == b"a" * 10
        again = source.get_stream()
        assert again.read() == b""
        assert again.read_byte() is None

    def test_wraps_any_binary_stream(self):
        """Any readable stream can be wrapped."""
        source = for_stream(io.BytesIO(b"payload"))
        assert source.get_stream().read() == b"payload"

    def test_satisfies_protocol(self):
        """ExistingStreamSource is a StreamSource."""
        assert isinstance(for_stream(io.BytesIO()), StreamSource)


class TestFactoryStreamSource:
    """Test the source that builds a fresh stream per call."""

    def test_fresh_instances(self):
        """Repeated calls yield distinct, independently readable streams."""
        source = for_fixed_size('x', 10)
        first = source.get_stream()
        second = source.get_stream()
        assert first is not second
        assert first.read() == b"x" * 10
        assert second.read() == b"x" * 10

    def test_draining_one_leaves_others_unread(self):
        """Exhausting one stream does not affect the next."""
        source = for_fixed_size('x', 10)
        read_all(source.get_stream())
        fresh = source.get_stream()
        assert fresh.position == 0
        assert fresh.remaining == 10

    @pytest.mark.parametrize("size", [0, -5])
    def test_lazy_invalid_argument(self, size):
        """Bad sizes only fail when a stream is requested."""
        source = for_fixed_size('x', size)
        with pytest.raises(InvalidArgumentError):
            source.get_stream()
        with pytest.raises(InvalidArgumentError):
            source.get_stream()

    def test_eager_construction_fails_immediately(self):
        """Wrapping an existing stream fails at construction, before the source exists."""
        with pytest.raises(InvalidArgumentError):
            for_stream(FixedSizeStream('x', 0))

    def test_custom_factory(self):
        """FactoryStreamSource accepts any no-argument callable."""
        calls = []

        def factory():
            calls.append(1)
            return io.BytesIO(b"abc")

        source = FactoryStreamSource(factory)
        assert calls == []
        assert source.get_stream().read() == b"abc"
        assert source.get_stream().read() == b"abc"
        assert len(calls) == 2

    def test_satisfies_protocol(self):
        """FactoryStreamSource is a StreamSource."""
        assert isinstance(for_fixed_size('x', 1), StreamSource)
