"""Abstract base class for upload data sources."""

from abc import ABC, abstractmethod
import io
from typing import Any


class UploadSource(ABC):
    """
    Abstract base class for upload data sources.

    A source is one arm of a fixed tagged union (empty, in-memory buffer, or
    streaming handle). It is picked once when an UploadIO is built and
    produces bytes on demand, never more than the caller asks for.
    """

    source_type: str = "unknown"
    owns_handle: bool = False

    @abstractmethod
    def readinto(self, destination: memoryview, size: int) -> int:
        """
        Copy up to ``size`` bytes of the next chunk into ``destination``.

        Args:
            destination: Writable buffer with room for at least ``size`` bytes.
            size: Maximum number of bytes to produce.

        Returns:
            int: Number of bytes written. Zero means the source is exhausted.
        """
        ...

    @abstractmethod
    def get_metadata(self) -> dict[str, Any]:
        """
        Return metadata about the source.

        Returns:
            dict[str, Any]: Metadata dictionary containing:
                - 'size': Total size in bytes, or None if unknown
                - 'source_type': Type of source ('empty', 'buffer', 'stream',
                  'local', 'http', 's3')
        """
        ...

    def can_rewind(self) -> bool:
        """Return True if ``rewind`` can restart the source from its beginning."""
        return False

    def rewind(self) -> None:
        """Restart the source from its beginning."""
        raise io.UnsupportedOperation(f"{self.source_type} source cannot be rewound")

    def close(self) -> None:  # noqa: B027
        """Release any resource held by the source."""

    @property
    def closed(self) -> bool:
        return False
