"""HTTP/HTTPS data source implementation."""

from collections.abc import Iterator
import logging
from typing import Any

from typing_extensions import override

from upload_io.sources.stream import HandleSource, IterableToFile

logger = logging.getLogger(__name__)


class HTTPSource(HandleSource):
    """
    Relay the body of a remote HTTP/HTTPS resource.

    Uses httpx to stream the GET response without loading it into memory.
    The response is opened on the first read; closing the source closes the
    response and its connection.
    """

    owns_handle = True
    source_type = "http"

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        auth: tuple[str, str] | None = None,
        timeout: int = 30,
    ) -> None:
        """
        Initialize HTTPSource.

        Args:
            url: HTTP/HTTPS URL of the resource to relay.
            headers: Optional custom HTTP headers.
            auth: Optional tuple of (username, password) for basic auth.
            timeout: Request timeout in seconds (default: 30).

        Raises:
            ImportError: If httpx is not installed.
            ValueError: If URL is invalid.
        """
        try:
            import httpx  # noqa: F401
        except ImportError as e:
            raise ImportError(
                "httpx is required for HTTPSource. Install with: pip install upload-io[http]"
            ) from e

        if not url or not url.startswith(("http://", "https://")):
            raise ValueError("url must be a valid HTTP/HTTPS URL")

        self.url = url
        self.headers = headers or {}
        self.auth = auth
        self.timeout = timeout
        self.content_type: str | None = None
        self._metadata_fetched = False

        super().__init__(IterableToFile(self._iter_body()))

        logger.info("HTTPSource initialized for %s", url)

    def _iter_body(self) -> Iterator[bytes]:
        import httpx

        try:
            with httpx.stream(
                "GET",
                self.url,
                headers=self.headers,
                auth=self.auth,
                timeout=self.timeout,
                follow_redirects=True,
            ) as response:
                response.raise_for_status()

                for chunk in response.iter_bytes():
                    if chunk:
                        yield chunk
        except Exception as e:
            logger.exception("Error reading from %s: %s", self.url, e)
            raise OSError(f"Failed to read from {self.url}: {e}") from e

    @override
    def get_metadata(self) -> dict[str, Any]:
        """
        Return metadata about the HTTP resource.

        Returns:
            dict[str, Any]: Metadata containing content length, type, and source type.
        """
        import httpx

        if self.size is None and not self._metadata_fetched:
            self._metadata_fetched = True
            try:
                response = httpx.head(
                    self.url,
                    headers=self.headers,
                    auth=self.auth,
                    timeout=self.timeout,
                    follow_redirects=True,
                )
                response.raise_for_status()

                size = response.headers.get("content-length")
                self.size = int(size) if size else None
                self.content_type = response.headers.get("content-type")
            except Exception as e:
                logger.warning("Could not retrieve metadata for %s: %s", self.url, e)

        return {
            "size": self.size,
            "type": self.content_type,
            "source_type": self.source_type,
            "url": self.url,
        }
