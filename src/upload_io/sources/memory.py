"""In-memory data sources: absent origin and fully materialized buffers."""

import logging
from typing import Any

from typing_extensions import override

from upload_io.sources.base import UploadSource

logger = logging.getLogger(__name__)


class EmptySource(UploadSource):
    """Source for an absent origin. Every read produces zero bytes."""

    source_type = "empty"

    @override
    def readinto(self, destination: memoryview, size: int) -> int:
        return 0

    @override
    def get_metadata(self) -> dict[str, Any]:
        return {"size": 0, "source_type": self.source_type}

    @override
    def can_rewind(self) -> bool:
        return True

    @override
    def rewind(self) -> None:
        pass


class BufferSource(UploadSource):
    """
    Serve chunks from bytes already held in memory.

    Text is encoded once, up front. The buffer length is fixed at
    construction and the read offset only moves forward until ``rewind``.
    """

    source_type = "buffer"

    def __init__(self, data: bytes | bytearray | memoryview | str, encoding: str = "utf-8") -> None:
        """
        Initialize BufferSource.

        Args:
            data: Bytes-like payload, or text to encode.
            encoding: Encoding applied to text payloads (default: utf-8).
        """
        if isinstance(data, str):
            data = data.encode(encoding)
        self.data = memoryview(data).cast("B")
        self.size = self.data.nbytes
        self.offset = 0

        logger.debug("BufferSource initialized (%d bytes)", self.size)

    @override
    def readinto(self, destination: memoryview, size: int) -> int:
        remaining = self.size - self.offset
        if remaining <= 0:
            return 0

        count = min(size, remaining)
        destination[:count] = self.data[self.offset : self.offset + count]
        self.offset += count
        return count

    @override
    def get_metadata(self) -> dict[str, Any]:
        return {"size": self.size, "source_type": self.source_type}

    @override
    def can_rewind(self) -> bool:
        return True

    @override
    def rewind(self) -> None:
        self.offset = 0
