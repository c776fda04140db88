"""Tests for EmptySource and BufferSource."""

from upload_io.sources.memory import BufferSource, EmptySource


def test_empty_source() -> None:
    """Test that EmptySource never produces bytes."""
    source = EmptySource()
    buffer = memoryview(bytearray(8))

    assert source.readinto(buffer, 8) == 0
    assert source.get_metadata() == {"size": 0, "source_type": "empty"}
    assert source.can_rewind()


def test_buffer_source_chunking() -> None:
    """Test that BufferSource hands out the payload in order."""
    source = BufferSource(b"0123456789")
    buffer = bytearray(4)
    view = memoryview(buffer)

    chunks = []
    while (count := source.readinto(view, 4)) > 0:
        chunks.append(bytes(buffer[:count]))

    assert chunks == [b"0123", b"4567", b"89"]
    assert source.offset == 10


def test_buffer_source_encodes_text() -> None:
    """Test that text is encoded once at construction."""
    source = BufferSource("naïve")

    assert source.size == 6
    assert bytes(source.data) == "naïve".encode()


def test_buffer_source_custom_encoding() -> None:
    """Test text encoded with a caller-chosen encoding."""
    source = BufferSource("naïve", encoding="latin-1")

    assert source.size == 5


def test_buffer_source_accepts_bytearray_and_memoryview() -> None:
    """Test other bytes-like payloads."""
    assert BufferSource(bytearray(b"abc")).size == 3
    assert BufferSource(memoryview(b"abcd")).size == 4


def test_buffer_source_rewind() -> None:
    """Test that rewind() restarts from the first byte."""
    source = BufferSource(b"abc")
    buffer = memoryview(bytearray(3))
    source.readinto(buffer, 3)

    source.rewind()

    assert source.offset == 0
    assert source.readinto(buffer, 2) == 2
    assert bytes(buffer[:2]) == b"ab"


def test_buffer_source_metadata() -> None:
    """Test BufferSource metadata."""
    metadata = BufferSource(b"content").get_metadata()

    assert metadata["source_type"] == "buffer"
    assert metadata["size"] == 7
