"""Tests for RateLimiter and throttled uploads."""

import time

import pytest

from upload_io.throttle import RateLimiter
from upload_io.upload import UploadIO


class FakeClock:
    """Clock whose sleep() advances time instantly."""

    def __init__(self) -> None:
        self.now = 100.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def test_rate_limiter_waits_for_budget() -> None:
    """Test that each chunk waits until the window's bytes fit the ceiling."""
    clock = FakeClock()
    limiter = RateLimiter(1000, clock=clock, sleep=clock.sleep)

    assert limiter.throttle(250) == pytest.approx(0.25)
    assert limiter.throttle(250) == pytest.approx(0.25)
    assert limiter.bytes_in_window == 500
    assert clock.now == pytest.approx(100.5)


def test_rate_limiter_no_wait_when_slow() -> None:
    """Test that chunks arriving slower than the ceiling are not delayed."""
    clock = FakeClock()
    limiter = RateLimiter(1000, clock=clock, sleep=clock.sleep)

    limiter.throttle(100)
    clock.now += 0.5
    assert limiter.throttle(100) == 0.0
    assert clock.sleeps == [pytest.approx(0.1)]


def test_rate_limiter_window_rolls_over() -> None:
    """Test that the accounting window restarts after one second."""
    clock = FakeClock()
    limiter = RateLimiter(1000, clock=clock, sleep=clock.sleep)

    limiter.throttle(1000)
    assert clock.now == pytest.approx(101.0)

    limiter.throttle(500)
    assert limiter.window_start == pytest.approx(101.0)
    assert limiter.bytes_in_window == 500
    assert clock.now == pytest.approx(101.5)


def test_rate_limiter_large_chunk_uses_whole_budget() -> None:
    """Test that a chunk bigger than the ceiling waits out its full share."""
    clock = FakeClock()
    limiter = RateLimiter(1000, clock=clock, sleep=clock.sleep)

    assert limiter.throttle(3000) == pytest.approx(3.0)


def test_rate_limiter_reset() -> None:
    """Test that reset() forgets the current window."""
    clock = FakeClock()
    limiter = RateLimiter(1000, clock=clock, sleep=clock.sleep)
    limiter.throttle(500)

    limiter.reset()

    assert limiter.window_start is None
    assert limiter.bytes_in_window == 0


@pytest.mark.parametrize("max_speed", [0, -1, float("nan"), "fast", None])
def test_rate_limiter_rejects_invalid_speed(max_speed: object) -> None:
    """Test that the ceiling must be a positive number."""
    with pytest.raises(ValueError, match="max_speed must be a positive number"):
        RateLimiter(max_speed)  # type: ignore[arg-type]


def test_throttled_upload_average_speed() -> None:
    """Test that a throttled upload converges to the configured ceiling."""
    clock = FakeClock()
    upload = UploadIO(b"\x01" * 40960, 4096, max_speed=10240)
    upload.limiter = RateLimiter(10240, clock=clock, sleep=clock.sleep)

    start = clock.now
    assert upload.read() == b"\x01" * 40960

    assert clock.now - start == pytest.approx(40960 / 10240)


def test_throttled_upload_wall_clock() -> None:
    """Test throughput against the real clock."""
    size = 40960
    max_speed = 204800
    upload = UploadIO(b"\x01" * size, 4096, max_speed=max_speed)
    buffer = bytearray(4096)

    start = time.monotonic()
    while upload.readinto(buffer):
        pass
    elapsed = time.monotonic() - start

    assert elapsed == pytest.approx(size / max_speed, rel=0.15)


def test_reset_clears_throttle_window() -> None:
    """Test that UploadIO.reset() also resets the limiter."""
    clock = FakeClock()
    upload = UploadIO(b"\x01" * 100, 50, max_speed=1000)
    upload.limiter = RateLimiter(1000, clock=clock, sleep=clock.sleep)
    upload.read()

    upload.reset()

    assert upload.limiter.bytes_in_window == 0
    assert upload.limiter.window_start is None
