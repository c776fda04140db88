"""Tests for ready-made callbacks."""

import pytest

from upload_io.callbacks import ProgressTracker, deadline_predicate
from upload_io.upload import UploadIO


def test_deadline_predicate_trips_after_budget() -> None:
    """Test that the predicate turns True once the time budget is spent."""
    now = [10.0]
    should_cancel = deadline_predicate(5, clock=lambda: now[0])

    assert not should_cancel()
    now[0] = 14.9
    assert not should_cancel()
    now[0] = 15.0
    assert should_cancel()


def test_deadline_predicate_rejects_negative() -> None:
    """Test that a negative budget is rejected."""
    with pytest.raises(ValueError, match="non-negative"):
        deadline_predicate(-1)


def test_deadline_predicate_stops_upload() -> None:
    """Test an upload cut short by a time budget."""
    now = [0.0]
    upload = UploadIO(b"\x01" * 100, 10, should_cancel=deadline_predicate(1, clock=lambda: now[0]))
    buffer = bytearray(10)

    assert upload.readinto(buffer) == 10
    now[0] = 2.0
    assert upload.readinto(buffer) == 0
    assert upload.uploaded == 10


def test_progress_tracker_accumulates() -> None:
    """Test that the tracker turns chunk sizes into a running total."""
    reports: list[tuple[int, int | None]] = []
    tracker = ProgressTracker(total=8192, report=lambda done, total: reports.append((done, total)))

    upload = UploadIO(b"\x01" * 8192, 4096, tracker)
    upload.read()

    assert tracker.uploaded == 8192 == upload.uploaded
    assert tracker.chunks == [4096, 4096]
    assert reports == [(4096, 8192), (8192, 8192)]
    assert tracker.percent == 100.0


def test_progress_tracker_without_total() -> None:
    """Test that percent is unknown without a total."""
    tracker = ProgressTracker()
    tracker(10)

    assert tracker.uploaded == 10
    assert tracker.percent is None
