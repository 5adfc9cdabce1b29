import io
import time

import pytest

from mplayer.timing import NoteRateLogger, delay_100ns, time_100ns


def test_time_is_monotonic():
    first = time_100ns()
    second = time_100ns()
    assert second >= first


def test_delay_waits_at_least_requested():
    start = time_100ns()
    delay_100ns(200_000)
    assert time_100ns() - start >= 200_000


@pytest.mark.parametrize("delay", [0, -5_000_000])
def test_non_positive_delay_returns_quickly(delay):
    start = time_100ns()
    delay_100ns(delay)
    assert time_100ns() - start < 5_000_000


def test_increment_counts():
    logger = NoteRateLogger(1.0, io.StringIO())
    for _ in range(5):
        logger.increment()
    assert logger.count == 5


def _wait_for(out, text, timeout=5.0):
    deadline = time.monotonic() + timeout
    while text not in out.getvalue() and time.monotonic() < deadline:
        time.sleep(0.01)


def test_logger_reports_and_resets():
    out = io.StringIO()
    logger = NoteRateLogger(0.05, out)
    for _ in range(3):
        logger.increment()
    with logger:
        _wait_for(out, "Notes per second")
    lines = out.getvalue().splitlines()
    assert lines[0] == "mplayer: Notes per second: 3"
    assert all(line == "mplayer: Notes per second: 0" for line in lines[1:])
    assert logger.count == 0


def test_logger_stops_reporting_after_exit():
    out = io.StringIO()
    with NoteRateLogger(0.02, out):
        _wait_for(out, "Notes per second")
    before = out.getvalue()
    time.sleep(0.1)
    assert out.getvalue() == before


def test_logger_cannot_start_twice():
    logger = NoteRateLogger(0.05, io.StringIO())
    logger.start()
    try:
        with pytest.raises(RuntimeError):
            logger.start()
    finally:
        logger.stop()


@pytest.mark.parametrize("interval", [0, -1.0])
def test_logger_rejects_bad_interval(interval):
    with pytest.raises(ValueError):
        NoteRateLogger(interval)