"""Send an UploadIO as the body of an HTTP request."""

import logging
from typing import Any

from upload_io.upload import UploadIO

logger = logging.getLogger(__name__)


def send(
    url: str,
    upload: UploadIO,
    method: str = "POST",
    headers: dict[str, str] | None = None,
    timeout: float = 30,
    client: Any = None,
) -> Any:
    """
    Stream ``upload`` to ``url`` with httpx.

    The body is pulled from the UploadIO chunk by chunk while the request is
    sent, so progress callbacks, pausing, throttling and cancellation all
    apply. ``Content-Length`` is set when the size of the origin is known;
    otherwise the body is sent with chunked transfer encoding.

    Args:
        url: HTTP/HTTPS URL to send the body to.
        upload: Request body.
        method: HTTP method (default: POST).
        headers: Optional extra request headers.
        timeout: Request timeout in seconds (default: 30).
        client: Optional httpx.Client to send with.

    Returns:
        httpx.Response: The server response, already read.

    Raises:
        ImportError: If httpx is not installed.
        ValueError: If URL is invalid.
        OSError: If the request fails or the server answers with an error status.
    """
    try:
        import httpx
    except ImportError as e:
        raise ImportError(
            "httpx is required to send uploads. Install with: pip install upload-io[http]"
        ) from e

    if not url or not url.startswith(("http://", "https://")):
        raise ValueError("url must be a valid HTTP/HTTPS URL")

    request_headers = dict(headers or {})
    size = upload.size
    if size is not None and not any(k.lower() == "content-length" for k in request_headers):
        request_headers["Content-Length"] = str(size)

    logger.info("Sending %s %s (size=%s)", method, url, size)

    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=timeout)

    try:
        response = client.request(method, url, content=upload, headers=request_headers)
        response.raise_for_status()
    except Exception as e:
        logger.exception("Error sending upload to %s: %s", url, e)
        raise OSError(f"Failed to upload to {url}: {e}") from e
    finally:
        if owns_client:
            client.close()

    logger.info(
        "Upload to %s finished with status %d (%d bytes sent)",
        url,
        response.status_code,
        upload.uploaded,
    )
    return response
