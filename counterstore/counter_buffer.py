"""Integer counter ring buffer.

Wraps an IndexedRingBuffer[int] rather than subclassing it: the wrapper
only adds value validation and in-place increment, and forwards the
index/read API unchanged.
"""

from counterstore.errors import InvalidValue, is_integer
from counterstore.metrics import StoreMetrics
from counterstore.ring_buffer import DEFAULT_CAPACITY, IndexedRingBuffer


def _validate(value) -> None:
    if not is_integer(value):
        raise InvalidValue(f"Invalid value: {value!r} is not an integer", {"value": value})


def _validate_amount(amount) -> None:
    if not is_integer(amount) or amount <= 0:
        raise InvalidValue(f"Invalid increment amount: {amount!r}", {"amount": amount})


class CounterRingBuffer:
    """Ring buffer of integer counts with an atomic ``increment``."""

    __slots__ = ("_buffer", "_metrics")

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        default_value: int = 0,
        thread_safe: bool = True,
        name: str = "default",
    ):
        _validate(default_value)
        self._buffer: IndexedRingBuffer[int] = IndexedRingBuffer(
            capacity, default_value, thread_safe=thread_safe, name=name
        )
        self._metrics = StoreMetrics(name)

    @property
    def index(self) -> int:
        return self._buffer.index

    @property
    def capacity(self) -> int:
        return self._buffer.capacity

    @property
    def default_value(self) -> int:
        return self._buffer.default_value

    @property
    def name(self) -> str:
        return self._buffer.name

    @property
    def lock(self):
        return self._buffer.lock

    # Index motion and reads carry no value, so they pass straight through.

    def set_index(self, target: int) -> None:
        self._buffer.set_index(target)

    def advance(self, count: int = 1) -> None:
        self._buffer.advance(count)

    def read(self, index: int) -> int:
        return self._buffer.read(index)

    def read_range(self, start_index: int, end_index: int) -> list[int]:
        return self._buffer.read_range(start_index, end_index)

    def snapshot(self) -> tuple[int, list[int]]:
        return self._buffer.snapshot()

    def append(self, value: int) -> None:
        _validate(value)
        self._buffer.append(value)

    def insert(self, value: int) -> None:
        _validate(value)
        self._buffer.insert(value)

    def increment(self, amount: int = 1) -> int:
        """Add ``amount`` to the count at the current index. Returns the new count."""
        _validate_amount(amount)
        value = self._buffer.update(lambda count: count + amount)
        self._metrics.increments.inc(amount)
        return value

    def increment_at(self, index: int, amount: int = 1) -> int:
        """Move to ``index`` and increment there as one atomic step."""
        _validate_amount(amount)
        with self._buffer.lock:
            self._buffer.set_index(index)
            return self.increment(amount)

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        return (
            f"CounterRingBuffer(name={self.name!r}, "
            f"capacity={self.capacity}, index={self.index})"
        )
