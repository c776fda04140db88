"""Local file system data source implementation."""

import logging
from pathlib import Path
from typing import Any

from typing_extensions import override

from upload_io.sources.stream import HandleSource

logger = logging.getLogger(__name__)


class LocalFileSource(HandleSource):
    """
    Upload a file from the local file system.

    The file is opened in binary mode and read in bounded chunks, never
    loaded into memory as a whole. The source owns the file handle.
    """

    source_type = "local"
    owns_handle = True

    def __init__(self, file_path: str | Path) -> None:
        """
        Initialize LocalFileSource.

        Args:
            file_path: Path to the local file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the path is not a regular file.
            OSError: If the file cannot be opened.
        """
        self.file_path = Path(file_path)

        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if not self.file_path.is_file():
            raise ValueError(f"Path is not a file: {file_path}")

        try:
            handle = self.file_path.open("rb")
        except Exception as e:
            logger.exception("Error opening file %s: %s", self.file_path, e)
            raise OSError(f"Failed to open file {self.file_path}: {e}") from e

        super().__init__(handle, size=self._stat_size())

        logger.info("LocalFileSource initialized for: %s", self.file_path)

    def _stat_size(self) -> int | None:
        try:
            return self.file_path.stat().st_size
        except OSError:
            return None

    @override
    def get_metadata(self) -> dict[str, Any]:
        """
        Return metadata about the local file.

        Returns:
            dict[str, Any]: Metadata containing file size, source type and path.
        """
        return {
            "size": self.size,
            "source_type": self.source_type,
            "path": str(self.file_path),
        }
