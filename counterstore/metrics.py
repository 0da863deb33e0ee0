"""Prometheus instrumentation for counter stores.

Every Counter/Gauge below auto-registers itself in the global REGISTRY on
import.  The library never starts an HTTP server; the host application
exposes the registry however it already exposes metrics.

All series carry a ``store`` label so several stores in one process stay
distinguishable.  Names must be unique per store: reusing one merges the
series of both stores.
"""

import threading

from prometheus_client import Counter, Gauge

# ---------------------------------------------------------------------------
# Write path
# ---------------------------------------------------------------------------
increments_total = Counter(
    "counterstore_increments_total",
    "Total increments applied to the current slot",
    ["store"],
)
slots_reset_total = Counter(
    "counterstore_slots_reset_total",
    "Slots gap-filled with the default value on index advance",
    ["store"],
)
current_index = Gauge(
    "counterstore_current_index",
    "Highest external index the buffer has advanced to",
    ["store"],
)

# ---------------------------------------------------------------------------
# Rejections
# ---------------------------------------------------------------------------
rewinds_rejected_total = Counter(
    "counterstore_rewinds_rejected_total",
    "Index motions rejected because they would rewind the buffer",
    ["store"],
)
out_of_window_reads_total = Counter(
    "counterstore_out_of_window_reads_total",
    "Reads rejected because the index is outside the retained window",
    ["store", "reason"],
)


class StoreMetrics:
    """Label-bound children for one store, resolved once at construction."""

    __slots__ = ("increments", "slots_reset", "index", "rewinds", "evicted", "not_reached")

    def __init__(self, store: str):
        self.increments = increments_total.labels(store=store)
        self.slots_reset = slots_reset_total.labels(store=store)
        self.index = current_index.labels(store=store)
        self.rewinds = rewinds_rejected_total.labels(store=store)
        self.evicted = out_of_window_reads_total.labels(store=store, reason="evicted")
        self.not_reached = out_of_window_reads_total.labels(store=store, reason="not_reached")


# Store names seen so far in this process.
_claimed_names: set[str] = set()
_claimed_lock = threading.Lock()


def claim_store_name(store: str) -> bool:
    """Record ``store`` as in use. Returns False if it was already taken.

    Two stores sharing a name share every series above, and the
    current-index gauge then tracks whichever store moved last.
    """
    with _claimed_lock:
        if store in _claimed_names:
            return False
        _claimed_names.add(store)
        return True
