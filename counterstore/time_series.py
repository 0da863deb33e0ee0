"""Per-second event counts over a sliding window of Unix time.

Thin timestamp-flavoured facade over CounterRingBuffer: the external index
is Unix epoch seconds, one slot per second.  The store never rewinds, so
timestamps handed to increment_at() must be non-decreasing.

State lives in process memory only and is lost on restart.
"""

import time
from typing import Callable

from counterstore.config import StoreConfig
from counterstore.counter_buffer import CounterRingBuffer
from counterstore.errors import (
    InvalidTimestamp,
    InvalidWindowSize,
    is_integer,
)

DEFAULT_WINDOW_SECONDS = 300


def _validate_timestamp(timestamp) -> None:
    if not is_integer(timestamp):
        raise InvalidTimestamp(
            f"Invalid timestamp: {timestamp!r}", {"timestamp": timestamp}
        )


class TimeSeriesStore:

    def __init__(
        self,
        window_seconds: int = DEFAULT_WINDOW_SECONDS,
        thread_safe: bool = True,
        clock: Callable[[], float] | None = None,
        name: str = "default",
    ):
        if not is_integer(window_seconds) or window_seconds <= 0:
            raise InvalidWindowSize(
                f"Invalid time series size: {window_seconds!r}",
                {"window_seconds": window_seconds},
            )
        # None means "look up time.time on each call" so tests can patch it.
        self._clock = clock
        self._buffer = CounterRingBuffer(
            capacity=window_seconds, default_value=0,
            thread_safe=thread_safe, name=name,
        )

    @classmethod
    def from_config(cls, config: StoreConfig, clock: Callable[[], float] | None = None):
        return cls(config.window_seconds, config.thread_safe, clock, config.name)

    @property
    def window_seconds(self) -> int:
        return self._buffer.capacity

    @property
    def index(self) -> int:
        """Most recent second that has been incremented (0 before the first)."""
        return self._buffer.index

    @property
    def name(self) -> str:
        return self._buffer.name

    def current_unix_time(self) -> int:
        return int((self._clock or time.time)())

    def increment(self) -> int:
        """Count one event at the current second."""
        return self.increment_at(self.current_unix_time())

    def increment_at(self, timestamp: int) -> int:
        """Count one event at ``timestamp``. Returns that second's new count.

        For producers that report late (e.g. after batching).  Calls must
        still arrive in chronological order: an older timestamp than the
        latest one raises RewindRejected.
        """
        _validate_timestamp(timestamp)
        return self._buffer.increment_at(timestamp)

    def read(self, timestamp: int) -> int:
        """Count stored for a single second."""
        _validate_timestamp(timestamp)
        return self._buffer.read(timestamp)

    def read_timeframe(self, start_timestamp: int, end_timestamp: int) -> list[int]:
        """Per-second counts from start to end inclusive, oldest first.

        An end in the future is clamped to the latest incremented second.
        """
        _validate_timestamp(start_timestamp)
        _validate_timestamp(end_timestamp)
        return self._buffer.read_range(start_timestamp, end_timestamp)

    def sum_since(self, start_timestamp: int) -> int:
        """Total events from ``start_timestamp`` up to now."""
        return sum(self.read_timeframe(start_timestamp, self.current_unix_time()))

    def __repr__(self) -> str:
        return (
            f"TimeSeriesStore(name={self.name!r}, "
            f"window_seconds={self.window_seconds}, index={self.index})"
        )
