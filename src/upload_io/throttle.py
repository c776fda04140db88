"""Bandwidth throttling for chunked uploads."""

from collections.abc import Callable
import logging
import time

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 1.0


class RateLimiter:
    """
    Bound the average throughput of a chunk producer.

    Bytes are accounted in a rolling one-second window. After each chunk the
    caller is held back until the bytes released in the current window fit
    under ``max_speed``. Bursts inside a window are not smoothed: one large
    chunk may use the whole window's budget at once, and nothing carries over
    when a new window starts.
    """

    def __init__(
        self,
        max_speed: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the rate limiter.

        Args:
            max_speed: Ceiling in bytes per second.
            clock: Monotonic clock returning seconds.
            sleep: Function used to suspend the calling thread.

        Raises:
            ValueError: If max_speed is not a positive number.
        """
        self.max_speed = max_speed
        self.clock = clock
        self.sleep = sleep
        self.window_start: float | None = None
        self.bytes_in_window = 0

    @property
    def max_speed(self) -> float:
        return self._max_speed

    @max_speed.setter
    def max_speed(self, value: float) -> None:
        self._max_speed = validate_speed(value)

    def reset(self) -> None:
        """Forget the current accounting window."""
        self.window_start = None
        self.bytes_in_window = 0

    def throttle(self, count: int) -> float:
        """
        Account for ``count`` released bytes and wait if they came too fast.

        Args:
            count: Size of the chunk just produced.

        Returns:
            float: Seconds spent waiting (0.0 if no wait was needed).
        """
        now = self.clock()
        if self.window_start is None or now - self.window_start >= WINDOW_SECONDS:
            self.window_start = now
            self.bytes_in_window = 0

        elapsed = now - self.window_start
        self.bytes_in_window += count

        wait = self.bytes_in_window / self.max_speed - elapsed
        if wait <= 0:
            return 0.0

        logger.debug(
            "Throttling for %.3fs (%d bytes in window, limit %.0f B/s)",
            wait,
            self.bytes_in_window,
            self.max_speed,
        )
        self.sleep(wait)
        return wait


def validate_speed(value: float) -> float:
    """Return ``value`` as a float, rejecting anything that is not a positive number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value > 0:
        raise ValueError(f"max_speed must be a positive number, got {value!r}")
    return float(value)
