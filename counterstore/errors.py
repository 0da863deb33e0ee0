"""Exception taxonomy for the counter store.

Every failure is caller misuse: raised before any state is touched and
never retried internally.  Each class also inherits the closest builtin
so callers can ``except ValueError`` / ``except IndexError`` if they
don't care about the finer distinction.
"""

from typing import Any


class CounterStoreError(Exception):
    """Base exception for the counter store."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidCapacity(CounterStoreError, ValueError):
    """Buffer size is not a positive integer."""


class InvalidWindowSize(InvalidCapacity):
    """Time series window is not a positive integer number of seconds."""


class InvalidValue(CounterStoreError, TypeError):
    """Non-integer value handed to a counter write."""


class InvalidIndex(CounterStoreError, TypeError):
    """External index is not an integer."""


class InvalidTimestamp(InvalidIndex):
    """Timestamp is not an integer number of Unix seconds."""


class InvalidAdvanceAmount(CounterStoreError, ValueError):
    """Advance count is not a positive integer."""


class RewindRejected(CounterStoreError, ValueError):
    """Index motion would move the buffer backwards."""


class IndexOutOfWindow(CounterStoreError, IndexError):
    """Requested index is outside the retained window."""


class IndexEvicted(IndexOutOfWindow):
    """Requested index is older than the retained window."""


class IndexNotReached(IndexOutOfWindow):
    """Requested index is newer than the current index."""


def is_integer(value) -> bool:
    # bool is an int subclass but never a valid index or count.
    return isinstance(value, int) and not isinstance(value, bool)
