"""Data source abstraction layer for uploads."""

import logging
from typing import Any
from urllib.parse import urlparse

from upload_io.sources.base import UploadSource
from upload_io.sources.http import HTTPSource
from upload_io.sources.local import LocalFileSource
from upload_io.sources.memory import BufferSource, EmptySource
from upload_io.sources.s3 import S3Source
from upload_io.sources.stream import HandleSource, IterableToFile

logger = logging.getLogger(__name__)

__all__ = [
    "BufferSource",
    "EmptySource",
    "HTTPSource",
    "HandleSource",
    "IterableToFile",
    "LocalFileSource",
    "S3Source",
    "UploadSource",
    "classify",
    "open_source",
]


def classify(data: Any) -> UploadSource:
    """
    Classify an upload origin into exactly one source variant.

    Args:
        data: The origin. Can be:
            - None: an empty upload
            - bytes, bytearray, memoryview or str: an in-memory buffer
            - an UploadSource instance: used as-is
            - any object with a ``read`` method: a streaming handle

    Returns:
        UploadSource: The source wrapping the origin.

    Raises:
        TypeError: If the origin cannot be read from.
    """
    if data is None:
        return EmptySource()
    if isinstance(data, UploadSource):
        return data
    if isinstance(data, (bytes, bytearray, memoryview, str)):
        return BufferSource(data)
    if callable(getattr(data, "read", None)):
        return HandleSource(data)

    raise TypeError(
        f"Unsupported upload data type {type(data).__name__}: "
        "expected None, bytes, str or a readable handle"
    )


def open_source(uri: str, **options: Any) -> UploadSource:
    """
    Open a source from a URI string.

    Args:
        uri: Source URI (s3://, http://, https://, or local path)
        **options: Source-specific options:
            - For S3: client
            - For HTTP: headers, auth, timeout
            - For local files: (none)

    Returns:
        UploadSource: Appropriate source implementation

    Raises:
        ValueError: If URI format is not recognized
    """
    parsed = urlparse(uri)

    if parsed.scheme == "s3":
        bucket = parsed.netloc
        key = parsed.path.lstrip("/")

        if not bucket or not key:
            raise ValueError(f"Invalid S3 URI: {uri}. Expected: s3://bucket/key")

        logger.info("Opening S3Source for s3://%s/%s", bucket, key)
        return S3Source(
            bucket=bucket,
            key=key,
            **{k: v for k, v in options.items() if k in ("client",)},
        )

    elif parsed.scheme in ("http", "https"):
        logger.info("Opening HTTPSource for %s", uri)
        return HTTPSource(
            url=uri,
            **{k: v for k, v in options.items() if k in ("headers", "auth", "timeout")},
        )

    else:
        logger.info("Opening LocalFileSource for %s", uri)
        return LocalFileSource(file_path=uri)
