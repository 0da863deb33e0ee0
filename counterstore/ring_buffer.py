"""Fixed-capacity ring buffer addressed by an ever-increasing external index.

Callers address slots by an external index (a Unix timestamp, a sequence
number, ...).  Physical slot = index % capacity.  Only the last
``capacity`` indices are readable: older ones are evicted, newer ones are
not reached yet.

Moving the index forward gap-fills every slot that became addressable with
the default value, so a slot never leaks data from the index that occupied
it one lap earlier.  The cost is paid once per advance and is bounded by
capacity, never by how far the index jumped.
"""

import logging
import threading
from contextlib import nullcontext
from typing import Callable, Generic, TypeVar

from counterstore.errors import (
    IndexEvicted,
    IndexNotReached,
    InvalidAdvanceAmount,
    InvalidCapacity,
    InvalidIndex,
    RewindRejected,
    is_integer,
)
from counterstore.metrics import StoreMetrics, claim_store_name

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CAPACITY = 1000


class IndexedRingBuffer(Generic[T]):
    """Ring buffer keyed by a monotonically non-decreasing integer index.

    With ``thread_safe=True`` every operation runs under one re-entrant
    lock, so the whole "compare, gap-fill, move index, write" sequence is
    atomic and readers never see a half-reset range.  ``lock`` is public so
    callers can hold it across several calls.  With ``thread_safe=False``
    the lock is a no-op and the buffer must be owned by a single thread.

    ``name`` labels metrics and log lines and should be unique per buffer;
    a reused name is logged at DEBUG and shares the other buffer's series.
    """

    __slots__ = (
        "name",
        "lock",
        "thread_safe",
        "_capacity",
        "_default",
        "_storage",
        "_index",
        "_metrics",
    )

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        default_value: T = None,
        thread_safe: bool = True,
        name: str = "default",
    ):
        if not is_integer(capacity) or capacity <= 0:
            raise InvalidCapacity(
                f"Invalid buffer capacity: {capacity!r}", {"capacity": capacity}
            )
        if not claim_store_name(name):
            logger.debug("store=%s name already in use; metrics series are shared", name)
        self.name = name
        self.thread_safe = thread_safe
        self.lock = threading.RLock() if thread_safe else nullcontext()
        self._capacity = capacity
        self._default = default_value
        # Filled up front: slots outside the initial window are reset
        # again before they become readable anyway.
        self._storage: list[T] = [default_value] * capacity
        self._index = 0
        self._metrics = StoreMetrics(name)
        self._metrics.index.set(0)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def index(self) -> int:
        return self._index

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def default_value(self) -> T:
        return self._default

    # ------------------------------------------------------------------
    # Index motion
    # ------------------------------------------------------------------

    def set_index(self, target: int) -> None:
        """Move the current index to ``target``, gap-filling skipped slots.

        No-op when ``target`` equals the current index.  Raises
        RewindRejected (state untouched) when it is lower.
        """
        if not is_integer(target):
            raise InvalidIndex(f"Invalid index: {target!r} is not an integer")
        with self.lock:
            self._move_to(target)

    def advance(self, count: int = 1) -> None:
        """Move the index forward by ``count`` positions (count >= 1)."""
        if not is_integer(count) or count <= 0:
            raise InvalidAdvanceAmount(
                f"Invalid advance amount: {count!r}", {"count": count}
            )
        with self.lock:
            self._move_to(self._index + count)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def append(self, value: T) -> None:
        """Advance one position, then store ``value`` there."""
        with self.lock:
            self._move_to(self._index + 1)
            self._storage[self._index % self._capacity] = value

    def insert(self, value: T) -> None:
        """Overwrite the value at the current index without moving it."""
        with self.lock:
            self._storage[self._index % self._capacity] = value

    def update(self, fn: Callable[[T], T]) -> T:
        """Replace the current value with ``fn(current)`` atomically.

        Returns the new value.
        """
        with self.lock:
            slot = self._index % self._capacity
            value = fn(self._storage[slot])
            self._storage[slot] = value
            return value

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read(self, index: int) -> T:
        """Return the value stored at external ``index``."""
        if not is_integer(index):
            raise InvalidIndex(f"Invalid index: {index!r} is not an integer")
        with self.lock:
            self._check_window(index)
            return self._storage[index % self._capacity]

    def read_range(self, start_index: int, end_index: int) -> list[T]:
        """Return values for ``start_index..end_index`` inclusive, oldest first.

        A future ``end_index`` is clamped to the current index: those slots
        can't hold data yet.  ``start_index`` must not be evicted.  Returns []
        when the (clamped) end precedes the start, so a range lying entirely
        after the current index is empty rather than an error.
        """
        if not is_integer(start_index):
            raise InvalidIndex(f"Invalid index: {start_index!r} is not an integer")
        if not is_integer(end_index):
            raise InvalidIndex(f"Invalid index: {end_index!r} is not an integer")

        with self.lock:
            self._check_evicted(start_index)
            end_index = min(end_index, self._index)
            if start_index > end_index:
                return []

            first = start_index % self._capacity
            last = end_index % self._capacity
            if first <= last:
                return self._storage[first:last + 1]
            # Range crosses the physical end of the array.
            return self._storage[first:] + self._storage[:last + 1]

    def snapshot(self) -> tuple[int, list[T]]:
        """Return ``(index, values)`` for the whole retained window."""
        with self.lock:
            return self._index, self.read_range(
                self._index - self._capacity + 1, self._index
            )

    def __len__(self) -> int:
        return self._capacity

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"capacity={self._capacity}, index={self._index})"
        )

    # ------------------------------------------------------------------
    # Internals (caller holds the lock)
    # ------------------------------------------------------------------

    def _move_to(self, target: int) -> None:
        if target == self._index:
            return
        if target < self._index:
            self._metrics.rewinds.inc()
            logger.debug(
                "store=%s rejected rewind %d -> %d", self.name, self._index, target
            )
            raise RewindRejected(
                f"Invalid index ({target}): rewind not allowed",
                {"current_index": self._index, "target": target},
            )

        delta = target - self._index
        prev_slot = self._index % self._capacity
        self._index = target
        new_slot = target % self._capacity

        if delta >= self._capacity:
            # Every retained index changed: wipe the whole ring.
            self._storage[:] = [self._default] * self._capacity
            reset = self._capacity
            logger.debug("store=%s full window reset at index %d", self.name, target)
        else:
            # Slots (prev_slot, new_slot], walking forward around the ring.
            first = (prev_slot + 1) % self._capacity
            if first <= new_slot:
                self._storage[first:new_slot + 1] = [self._default] * (new_slot + 1 - first)
            else:
                self._storage[first:] = [self._default] * (self._capacity - first)
                self._storage[:new_slot + 1] = [self._default] * (new_slot + 1)
            reset = delta

        self._metrics.slots_reset.inc(reset)
        self._metrics.index.set(target)

    def _check_window(self, index: int) -> None:
        if index > self._index:
            self._metrics.not_reached.inc()
            logger.debug("store=%s read of unreached index %d", self.name, index)
            raise IndexNotReached(
                f"Invalid index ({index}): beyond range",
                {"current_index": self._index, "index": index},
            )
        self._check_evicted(index)

    def _check_evicted(self, index: int) -> None:
        if index <= self._index - self._capacity:
            self._metrics.evicted.inc()
            logger.debug("store=%s read of evicted index %d", self.name, index)
            raise IndexEvicted(
                f"Invalid index ({index}): below range",
                {"current_index": self._index, "index": index},
            )
