"""
Explicit memo tables.

A Memo wraps a pure function of one hashable argument. Lookups take no lock;
values are computed outside the lock, so a memoized function may recurse
through its own Memo, and stored under the lock with the first value
winning. Tables grow without eviction until clear().
"""

import threading
from typing import Callable, Dict, Generic, Hashable, TypeVar

K = TypeVar('K', bound=Hashable)
V = TypeVar('V')


class Memo(Generic[K, V]):
    """Memo table for a single-argument function."""

    def __init__(self, func: Callable[[K], V]):
        self.func = func
        self._table: Dict[K, V] = {}
        self._lock = threading.Lock()

    def __call__(self, key: K) -> V:
        try:
            return self._table[key]
        except KeyError:
            pass
        value = self.func(key)
        with self._lock:
            return self._table.setdefault(key, value)

    def __contains__(self, key: K) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)

    def clear(self) -> None:
        with self._lock:
            self._table.clear()
