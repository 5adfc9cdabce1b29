"""Monotonic clock in 100 ns units, delays, and a notes-per-second reporter."""

from __future__ import annotations

import sys
import threading
import time
from types import TracebackType
from typing import TextIO


def time_100ns() -> int:
    """Current monotonic time in units of 100 nanoseconds."""
    return time.monotonic_ns() // 100


def delay_100ns(delay: int) -> None:
    """Sleep for ``delay`` units of 100 nanoseconds; non-positive delays return at once."""
    if delay > 0:
        time.sleep(delay / 10_000_000)


class NoteRateLogger:
    """Background thread printing how many notes were counted each interval."""

    def __init__(self, interval: float = 1.0, stream: TextIO | None = None) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self._stream = stream
        self._count = 0
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def count(self) -> int:
        """Notes counted since the last report."""
        with self._lock:
            return self._count

    def increment(self) -> None:
        """Count one note."""
        with self._lock:
            self._count += 1

    def start(self) -> None:
        """Start reporting in a background thread."""
        if self._thread is not None:
            raise RuntimeError("logger already started")
        self._thread = threading.Thread(
            target=self._run, name="note-rate-logger", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop reporting and wait for the thread to finish."""
        self._stopped.set()
        if self._thread is not None:
            self._thread.join()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            with self._lock:
                count, self._count = self._count, 0
            stream = sys.stdout if self._stream is None else self._stream
            print(f"mplayer: Notes per second: {count}", file=stream, flush=True)

    def __enter__(self) -> NoteRateLogger:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()