# cachebench/policies/base.py
import numbers
from typing import Any, Callable, Hashable, Optional

ValueFn = Callable[[Hashable], Any]


def no_value(key) -> None:
    return None


class BaseCache:
    """
    Shared surface of the count-based caches: capacity bookkeeping over a
    key -> entry dict. Subclasses implement lookup_update().
    """
    def __init__(self, capacity: int):
        if (not isinstance(capacity, numbers.Integral)
                or isinstance(capacity, bool) or capacity < 0):
            raise ValueError("CAPACITY must be a non-negative integer.")
        self.capacity = int(capacity)
        self.store    = {}          # key -> entry

    def current_size(self) -> int:
        return len(self.store)

    def is_empty(self) -> bool:
        return not self.store

    def is_full(self) -> bool:
        return len(self.store) >= self.capacity

    def get(self, key, default=None):
        """Peek at a resident value without touching policy state."""
        entry = self.store.get(key)
        return default if entry is None else entry.value

    def __len__(self):
        return len(self.store)

    def __contains__(self, key):
        return key in self.store

    def clear(self):
        self.store.clear()

    def lookup_update(self, key, value_fn: Optional[ValueFn] = None) -> bool: ...
