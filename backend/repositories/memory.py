"""
In-memory stores for development and tests.

They honour the same contracts as the SQLAlchemy repositories, including
handing out copies so callers never share objects with the store.
"""
import copy
import threading
from typing import Dict, List, Optional

from domain.errors import StoreFailure
from domain.models import LibraryItem
from repositories.base import CounterStore, ItemStore


class InMemoryItemStore(ItemStore):
    def __init__(self, items: Optional[List[LibraryItem]] = None):
        self._lock = threading.Lock()
        self.rows: Dict[str, LibraryItem] = {}
        for item in items or []:
            self.rows[item.item_id] = copy.deepcopy(item)

    def load_all_items(self) -> List[LibraryItem]:
        with self._lock:
            return [copy.deepcopy(item) for item in self.rows.values()]

    def upsert(self, item: LibraryItem) -> None:
        with self._lock:
            self.rows[item.item_id] = copy.deepcopy(item)

    def delete(self, item: LibraryItem) -> None:
        with self._lock:
            self.rows.pop(item.item_id, None)


class InMemoryCounterStore(CounterStore):
    def __init__(self, counters: Optional[Dict[str, int]] = None):
        self._lock = threading.Lock()
        self.counters: Dict[str, int] = dict(counters or {})

    def get(self, prefix: str) -> Optional[int]:
        with self._lock:
            return self.counters.get(prefix)

    def set(self, prefix: str, sequence: int) -> None:
        with self._lock:
            current = self.counters.get(prefix, 0)
            if sequence < 0 or sequence < current:
                raise StoreFailure(f"Counter {prefix} would move backwards ({current} -> {sequence})")
            self.counters[prefix] = sequence

    def load_all(self) -> Dict[str, int]:
        with self._lock:
            return dict(self.counters)
