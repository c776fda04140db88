"""Ready-made progress and cancellation callbacks."""

from collections.abc import Callable
import logging
import time

logger = logging.getLogger(__name__)


def deadline_predicate(
    seconds: float,
    clock: Callable[[], float] = time.monotonic,
) -> Callable[[], bool]:
    """
    Build a ``should_cancel`` predicate that trips after ``seconds``.

    The clock starts when the predicate is built, not at the first read.

    Args:
        seconds: Time budget for the upload.
        clock: Monotonic clock returning seconds.

    Returns:
        Callable[[], bool]: Predicate returning True once the budget is spent.

    Raises:
        ValueError: If seconds is negative.
    """
    if seconds < 0:
        raise ValueError(f"seconds must be non-negative, got {seconds!r}")

    deadline = clock() + seconds

    def should_cancel() -> bool:
        expired = clock() >= deadline
        if expired:
            logger.debug("Upload deadline of %.1fs reached", seconds)
        return expired

    return should_cancel


class ProgressTracker:
    """
    Progress callback that keeps a running total.

    UploadIO reports the size of each chunk; this turns those reports into a
    cumulative count and, optionally, forwards it to ``report``.
    """

    def __init__(
        self,
        total: int | None = None,
        report: Callable[[int, int | None], None] | None = None,
    ) -> None:
        self.total = total
        self.report = report
        self.uploaded = 0
        self.chunks: list[int] = []

    def __call__(self, chunk: int) -> None:
        self.uploaded += chunk
        self.chunks.append(chunk)
        if self.report is not None:
            self.report(self.uploaded, self.total)

    @property
    def percent(self) -> float | None:
        if not self.total:
            return None
        return 100.0 * self.uploaded / self.total
