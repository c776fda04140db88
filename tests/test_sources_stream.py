"""Tests for HandleSource and IterableToFile."""

import io

import pytest

from upload_io.sources.stream import HandleSource, IterableToFile


def test_handle_source_reads_into_buffer() -> None:
    """Test reading from a handle with readinto()."""
    source = HandleSource(io.BytesIO(b"0123456789"))
    buffer = bytearray(8)

    assert source.readinto(memoryview(buffer), 4) == 4
    assert bytes(buffer[:4]) == b"0123"


def test_handle_source_with_read_only_handle() -> None:
    """Test reading from a handle that only has read()."""
    source = HandleSource(IterableToFile(iter([b"ab", b"cdef"])))
    buffer = bytearray(8)

    assert source.readinto(memoryview(buffer), 3) == 3
    assert bytes(buffer[:3]) == b"abc"
    assert source.readinto(memoryview(buffer), 8) == 3
    assert source.readinto(memoryview(buffer), 8) == 0


def test_handle_source_rejects_unreadable() -> None:
    """Test that objects without read() are rejected."""
    with pytest.raises(TypeError, match="not a readable handle"):
        HandleSource(object())


def test_handle_source_close() -> None:
    """Test that close() closes the handle once."""
    handle = io.BytesIO(b"abc")
    source = HandleSource(handle)

    source.close()
    source.close()

    assert handle.closed
    assert source.closed
    assert not source.can_rewind()


def test_handle_source_rewind() -> None:
    """Test rewinding a seekable handle to its starting position."""
    handle = io.BytesIO(b"header|body")
    handle.seek(7)
    source = HandleSource(handle)
    buffer = bytearray(8)

    source.readinto(memoryview(buffer), 8)
    source.rewind()

    assert handle.tell() == 7


def test_handle_source_cannot_rewind_unseekable() -> None:
    """Test that a one-way handle cannot be rewound."""
    source = HandleSource(IterableToFile(iter([b"abc"])))

    assert not source.can_rewind()
    with pytest.raises(io.UnsupportedOperation):
        source.rewind()


def test_handle_source_metadata() -> None:
    """Test HandleSource metadata."""
    assert HandleSource(io.BytesIO(b""), size=42).get_metadata() == {
        "size": 42,
        "source_type": "stream",
    }
    assert HandleSource(io.BytesIO(b"")).get_metadata()["size"] is None


def test_iterable_to_file_read_sizes() -> None:
    """Test IterableToFile re-chunking."""
    stream = IterableToFile(iter([b"01", b"2345", b"6789"]))

    assert stream.read(3) == b"012"
    assert stream.read(5) == b"34567"
    assert stream.read() == b"89"
    assert stream.read(1) == b""


def test_iterable_to_file_close_closes_generator() -> None:
    """Test that closing stops the underlying generator."""
    finished = []

    def generate():
        try:
            yield b"abc"
            yield b"def"
        finally:
            finished.append(True)

    stream = IterableToFile(generate())
    assert stream.read(2) == b"ab"

    stream.close()

    assert stream.closed
    assert finished == [True]
    assert stream.read(2) == b""


def test_iterable_to_file_small_reads_over_large_chunks() -> None:
    """Test many small reads draining large chunks."""
    payload = bytes(range(256)) * 64
    stream = IterableToFile(iter([payload[:10000], payload[10000:]]))

    pieces = []
    while piece := stream.read(100):
        pieces.append(piece)

    assert b"".join(pieces) == payload
    assert all(len(piece) == 100 for piece in pieces[:-1])
    assert len(stream.buffer) == 0
