from __future__ import annotations

import threading
from typing import Callable, Dict, Generic, Hashable, Iterable, List, Optional, TypeVar

from ..core.exceptions import ConflictError

T = TypeVar("T")


class MemoryCollection(Generic[T]):
    """Process-local keyed collection for the in-memory backend.

    Each call holds the collection lock, so writes keyed by the same value are
    atomic the way a store's upsert-by-key is.
    """

    def __init__(self, key: Callable[[T], Hashable]):
        self._key = key
        self._items: Dict[Hashable, T] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[T]:
        with self._lock:
            return self._items.get(key)

    def values(self) -> List[T]:
        with self._lock:
            return list(self._items.values())

    def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        return [item for item in self.values() if predicate(item)]

    def insert(self, item: T, *, conflict_message: str) -> None:
        with self._lock:
            key = self._key(item)
            if key in self._items:
                raise ConflictError(conflict_message, existing=self._items[key])
            self._items[key] = item

    def replace(self, item: T) -> bool:
        with self._lock:
            key = self._key(item)
            if key not in self._items:
                return False
            self._items[key] = item
            return True

    def upsert(self, item: T) -> None:
        with self._lock:
            self._items[self._key(item)] = item

    def upsert_many(self, items: Iterable[T]) -> None:
        for item in items:
            self.upsert(item)

    def delete(self, key: Hashable) -> bool:
        with self._lock:
            return self._items.pop(key, None) is not None
