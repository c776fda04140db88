"""Chunked, pausable, cancellable and throttled upload body."""

from collections.abc import Callable, Iterator
import io
import logging
import threading
from typing import Any

from typing_extensions import override

from upload_io.sources import UploadSource, classify
from upload_io.throttle import RateLimiter

logger = logging.getLogger(__name__)

CHUNK_SIZE = 4096


class UploadIO(io.RawIOBase):
    """
    Readable stream that feeds an upload in bounded chunks.

    An UploadIO can be used directly as the request body of an HTTP client:
    the client pulls bytes with ``read``/``readinto`` and the adapter produces
    at most ``chunk_size`` bytes per pull from the wrapped origin. Each
    non-empty chunk is reported to ``on_progress`` with its own size.

    A pull returns zero bytes once the origin is exhausted, when the upload
    was cancelled, or when ``should_cancel`` returns True. ``pause``,
    ``resume`` and ``cancel`` may be called from another thread while a pull
    is in progress.

    Example:
        >>> uploaded_total = 0
        >>> def on_progress(chunk: int) -> None:
        ...     global uploaded_total
        ...     uploaded_total += chunk
        >>> body = UploadIO(b"\\x01" * 8192, 4096, on_progress)
        >>> httpx.post("http://example.com/upload", content=body)
    """

    def __init__(
        self,
        data: Any = None,
        chunk_size: int = CHUNK_SIZE,
        on_progress: Callable[[int], None] | None = None,
        should_cancel: Callable[[], bool] | None = None,
        max_speed: float | None = None,
    ) -> None:
        """
        Initialize the upload stream.

        Args:
            data: Upload origin. Can be:
                - None: nothing to upload
                - bytes, bytearray, memoryview: uploaded as-is
                - str: encoded to UTF-8 once
                - UploadSource instance (e.g. from ``open_source``)
                - Readable handle (open file, socket file, response body)
            chunk_size: Maximum bytes produced per read (default: 4096).
            on_progress: Called with the size of each non-empty chunk.
            should_cancel: Polled before every read; returning True makes the
                read produce zero bytes.
            max_speed: Throughput ceiling in bytes per second (default: unlimited).

        Raises:
            ValueError: If chunk_size or max_speed is not positive.
            TypeError: If data cannot be read from.
        """
        super().__init__()

        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
            raise ValueError(f"chunk_size must be a positive integer, got {chunk_size!r}")

        self.limiter = RateLimiter(max_speed) if max_speed is not None else None
        self.source: UploadSource = classify(data)
        self.chunk_size = chunk_size
        self.on_progress = on_progress
        self.should_cancel = should_cancel

        self._uploaded = 0
        self._paused = False
        self._cancelled = False
        self._aborted = False
        self._state = threading.Condition()

        logger.info(
            "UploadIO initialized (source=%s, chunk_size=%d, max_speed=%s)",
            self.source.source_type,
            chunk_size,
            max_speed,
        )

    @property
    def uploaded(self) -> int:
        """Total bytes produced so far."""
        return self._uploaded

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def aborted(self) -> bool:
        """True once a read was stopped by ``should_cancel`` since the last reset."""
        return self._aborted

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def size(self) -> int | None:
        """Total bytes the origin holds, or None if unknown."""
        return self.source.get_metadata().get("size")

    @property
    def max_speed(self) -> float | None:
        return self.limiter.max_speed if self.limiter is not None else None

    @max_speed.setter
    def max_speed(self, value: float | None) -> None:
        if value is None:
            self.limiter = None
        elif self.limiter is None:
            self.limiter = RateLimiter(value)
        else:
            self.limiter.max_speed = value

    def get_metadata(self) -> dict[str, Any]:
        """
        Get metadata about the upload.

        Returns:
            dict[str, Any]: Source metadata plus the bytes uploaded so far.
        """
        return {**self.source.get_metadata(), "uploaded": self._uploaded}

    @override
    def readable(self) -> bool:
        return True

    @override
    def writable(self) -> bool:
        return True

    @override
    def seekable(self) -> bool:
        return self.source.can_rewind()

    @override
    def readinto(self, buffer: Any) -> int:
        """
        Read the next chunk into ``buffer``.

        This method is called by HTTP clients while sending the body. At most
        ``chunk_size`` bytes are produced per call.

        Returns:
            int: Number of bytes written into ``buffer`` for this chunk (not
            the running total). Zero means there is nothing more to send.

        Raises:
            ValueError: If the stream is closed.
            Exception: Errors raised by the origin handle propagate unchanged.
        """
        if self.closed:
            raise ValueError("I/O operation on closed file.")

        if self._cancelled:
            return 0

        if self.should_cancel is not None and self.should_cancel():
            self._aborted = True
            logger.debug("Upload aborted by should_cancel after %d bytes", self._uploaded)
            return 0

        if not self._wait_while_paused():
            return 0

        destination = memoryview(buffer).cast("B")
        size = min(self.chunk_size, len(destination))

        try:
            count = self.source.readinto(destination, size)
        except Exception:
            if self._cancelled:
                # cancel() closed the handle under this read
                return 0
            logger.exception("Error reading from %s source", self.source.source_type)
            raise

        if count <= 0:
            return 0

        self._uploaded += count

        if self.on_progress is not None:
            self.on_progress(count)

        if self.limiter is not None:
            self.limiter.throttle(count)

        return count

    def _wait_while_paused(self) -> bool:
        """Block while paused. Returns False if the upload was cancelled meanwhile."""
        with self._state:
            if self._paused:
                logger.debug("Upload paused at %d bytes, waiting for resume", self._uploaded)
                self._state.wait_for(lambda: not self._paused or self._cancelled)
            return not self._cancelled

    def iter_chunks(self) -> Iterator[bytes]:
        """
        Yield the upload as a sequence of byte chunks.

        For HTTP clients that accept an iterable body instead of a file object.

        Yields:
            bytes: One chunk per read, each at most ``chunk_size`` bytes.
        """
        buffer = bytearray(self.chunk_size)
        while True:
            count = self.readinto(buffer)
            if not count:
                return
            yield bytes(buffer[:count])

    @override
    def write(self, b: Any) -> int:
        """
        Accept and discard ``b``.

        UploadIO is read-only; ``write`` exists for clients that require a
        bidirectional stream.
        """
        return memoryview(b).nbytes

    def pause(self) -> None:
        """Hold the next read until ``resume`` is called."""
        with self._state:
            self._paused = True
        logger.info("Upload paused")

    def resume(self) -> None:
        """Release a read held by ``pause``."""
        with self._state:
            self._paused = False
            self._state.notify_all()
        logger.info("Upload resumed")

    def cancel(self) -> None:
        """
        Stop the upload.

        Every later read produces zero bytes without touching the origin. A
        streaming handle is closed immediately. Calling cancel again does
        nothing.
        """
        with self._state:
            if self._cancelled:
                return
            self._cancelled = True
            self._state.notify_all()

        self.source.close()
        logger.info("Upload cancelled after %d bytes", self._uploaded)

    def reset(self) -> None:
        """
        Rewind the upload to its first byte.

        The byte counter and throttling window start over and later reads
        produce the origin from the beginning again. Reset does not undo
        ``cancel``.

        Raises:
            io.UnsupportedOperation: If the origin is a handle that cannot seek.
        """
        if not self._cancelled:
            self.source.rewind()

        self._uploaded = 0
        self._aborted = False
        if self.limiter is not None:
            self.limiter.reset()

        logger.info("Upload reset (source=%s)", self.source.source_type)

    @override
    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Only rewinding to the start (``seek(0)``) is supported."""
        if whence == io.SEEK_CUR and offset == 0:
            return self._uploaded
        if whence != io.SEEK_SET or offset != 0:
            raise io.UnsupportedOperation("UploadIO can only seek back to the start")
        self.reset()
        return 0

    @override
    def tell(self) -> int:
        return self._uploaded

    @override
    def close(self) -> None:
        source = getattr(self, "source", None)
        if not self.closed and source is not None and source.owns_handle:
            source.close()
        super().close()
