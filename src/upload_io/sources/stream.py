"""Streaming handle data source implementation."""

from collections.abc import Iterator
import contextlib
import io
import logging
from typing import Any, overload

from typing_extensions import override

from upload_io.sources.base import UploadSource

logger = logging.getLogger(__name__)


class HandleSource(UploadSource):
    """
    Delegate reads to an open, pull-based byte handle.

    The handle only needs ``read(n)``. ``readinto`` is preferred when the
    handle has it, so bytes land straight in the caller's buffer. Total length
    is unknown unless passed in. A handle that returns zero bytes is treated
    as permanently exhausted.
    """

    source_type = "stream"

    def __init__(self, handle: Any, size: int | None = None) -> None:
        """
        Initialize HandleSource.

        Args:
            handle: Readable object exposing ``read(n)``.
            size: Total number of bytes the handle will produce, if known.

        Raises:
            TypeError: If the handle has no ``read`` method.
        """
        if not callable(getattr(handle, "read", None)):
            raise TypeError(f"{type(handle).__name__} object is not a readable handle")

        self.handle = handle
        self.size = size
        self._start = self._tell()

    def _tell(self) -> int | None:
        try:
            if self.handle.seekable():
                return int(self.handle.tell())
        except (AttributeError, OSError, ValueError):
            pass
        return None

    @override
    def readinto(self, destination: memoryview, size: int) -> int:
        target = destination[:size]
        readinto = getattr(self.handle, "readinto", None)
        if readinto is not None:
            count = readinto(target)
            return count or 0

        chunk = self.handle.read(size)
        if not chunk:
            return 0
        count = len(chunk)
        target[:count] = chunk
        return count

    @override
    def get_metadata(self) -> dict[str, Any]:
        return {"size": self.size, "source_type": self.source_type}

    @override
    def can_rewind(self) -> bool:
        return self._start is not None and not self.closed

    @override
    def rewind(self) -> None:
        if not self.can_rewind():
            raise io.UnsupportedOperation(f"{self.source_type} source cannot be rewound")
        self.handle.seek(self._start)

    @override
    def close(self) -> None:
        close = getattr(self.handle, "close", None)
        if close is not None and not self.closed:
            close()
            logger.debug("Closed %s handle", type(self.handle).__name__)

    @property
    @override
    def closed(self) -> bool:
        return bool(getattr(self.handle, "closed", False))


class IterableToFile:
    """Wraps an iterator of bytes as a file-like object with a .read() method."""

    def __init__(self, iterator: Iterator[bytes]) -> None:
        self.iterator = iterator
        self.buffer = bytearray()
        self.closed = False

    @overload
    def read(self) -> bytes: ...
    @overload
    def read(self, size: int) -> bytes: ...

    def read(self, size: int = -1) -> bytes:
        """
        Reads up to 'size' bytes from the stream.
        If size is -1, reads all remaining bytes.
        """
        if self.closed:
            return b""

        while size < 0 or len(self.buffer) < size:
            try:
                self.buffer += next(self.iterator)
            except StopIteration:
                break

        if size < 0 or size > len(self.buffer):
            size = len(self.buffer)
        result = bytes(self.buffer[:size])
        del self.buffer[:size]

        return result

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.buffer.clear()
        close = getattr(self.iterator, "close", None)
        if close is not None:
            # A generator mid-read on another thread cannot be closed; it stops
            # at its next read and is finalized on collection.
            with contextlib.suppress(ValueError):
                close()
