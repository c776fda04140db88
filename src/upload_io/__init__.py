"""upload-io: Chunked upload bodies with progress, pause/resume, cancellation and throttling."""

from upload_io.callbacks import ProgressTracker, deadline_predicate
from upload_io.sources import open_source
from upload_io.throttle import RateLimiter
from upload_io.upload import CHUNK_SIZE, UploadIO

__all__ = [
    "CHUNK_SIZE",
    "ProgressTracker",
    "RateLimiter",
    "UploadIO",
    "deadline_predicate",
    "open_source",
]
