# In-memory, fixed-capacity counters indexed by an ever-increasing integer
# (usually Unix seconds).  Nothing here touches disk or the network.

from counterstore.config import StoreConfig, load_config
from counterstore.counter_buffer import CounterRingBuffer
from counterstore.errors import (
    CounterStoreError,
    IndexEvicted,
    IndexNotReached,
    IndexOutOfWindow,
    InvalidAdvanceAmount,
    InvalidCapacity,
    InvalidIndex,
    InvalidTimestamp,
    InvalidValue,
    InvalidWindowSize,
    RewindRejected,
)
from counterstore.ring_buffer import IndexedRingBuffer
from counterstore.time_series import TimeSeriesStore

__all__ = [
    "CounterRingBuffer",
    "CounterStoreError",
    "IndexEvicted",
    "IndexNotReached",
    "IndexOutOfWindow",
    "IndexedRingBuffer",
    "InvalidAdvanceAmount",
    "InvalidCapacity",
    "InvalidIndex",
    "InvalidTimestamp",
    "InvalidValue",
    "InvalidWindowSize",
    "RewindRejected",
    "StoreConfig",
    "TimeSeriesStore",
    "load_config",
]
