"""AWS S3 data source implementation."""

import logging
from typing import Any

from typing_extensions import override

from upload_io.sources.stream import HandleSource

logger = logging.getLogger(__name__)


class S3Source(HandleSource):
    """
    Upload the body of an AWS S3 object.

    Uses the boto3 S3 client to open the object and reads its streaming body
    in bounded chunks, without loading the object into memory.
    """

    source_type = "s3"
    owns_handle = True

    def __init__(
        self,
        bucket: str,
        key: str,
        client: Any = None,
    ) -> None:
        """
        Initialize S3Source.

        Args:
            bucket: S3 bucket name.
            key: S3 object key (file path).
            client: Boto3 S3 client instance. If None, will create default client.

        Raises:
            ImportError: If boto3 is not installed.
            ValueError: If bucket or key is empty.
            OSError: If the S3 object cannot be opened.
        """
        try:
            import boto3
        except ImportError as e:
            raise ImportError(
                "boto3 is required for S3Source. Install with: pip install upload-io[s3]"
            ) from e

        if not bucket or not key:
            raise ValueError("bucket and key must be non-empty")

        self.bucket = bucket
        self.key = key
        self.client = client or boto3.client("s3")

        try:
            response = self.client.get_object(Bucket=self.bucket, Key=self.key)
        except Exception as e:
            logger.exception("Error opening S3 object s3://%s/%s: %s", self.bucket, self.key, e)
            raise OSError(f"Failed to open S3 object s3://{self.bucket}/{self.key}: {e}") from e

        self.content_type = response.get("ContentType")
        super().__init__(response["Body"], size=response.get("ContentLength"))

        logger.info("S3Source initialized for s3://%s/%s", bucket, key)

    @override
    def get_metadata(self) -> dict[str, Any]:
        """
        Return metadata about the S3 object.

        Returns:
            dict[str, Any]: Metadata containing object size, type, and source type.
        """
        return {
            "size": self.size,
            "type": self.content_type,
            "source_type": self.source_type,
            "bucket": self.bucket,
            "key": self.key,
        }
