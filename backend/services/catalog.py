"""
In-memory catalog kept in step with a backing ItemStore.

Reads are served from memory. Every mutation writes to the store first and
only touches memory once the store call returned, so a failed write leaves
the catalog exactly as it was.
"""
from __future__ import annotations

import copy
import logging
import threading
from typing import Dict, List, Optional

from domain.errors import CatalogError, DuplicateItem, ItemNotFound, ValidationError
from domain.models import LibraryItem
from repositories.base import ItemStore

logger = logging.getLogger(__name__)


class Catalog:
    """Identifier -> item index, loaded once from the store and updated per operation."""

    def __init__(self, store: ItemStore, items: Optional[Dict[str, LibraryItem]] = None):
        self.store = store
        self._items: Dict[str, LibraryItem] = dict(items or {})
        self._lock = threading.RLock()

    @classmethod
    def load(cls, store: ItemStore) -> "Catalog":
        """
        Build a catalog from every item currently in the store.

        A StoreFailure here is left to propagate: without an initial view of
        the store the catalog cannot operate.
        """
        items: Dict[str, LibraryItem] = {}
        for item in store.load_all_items():
            if item.item_id in items:
                logger.warning(
                    "Duplicate identifier %s in store; keeping the last row read", item.item_id
                )
            items[item.item_id] = item
        logger.info("Catalog loaded with %d items", len(items))
        return cls(store, items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def contains(self, item_id: str) -> bool:
        return item_id in self._items

    def get_by_id(self, item_id: str) -> Optional[LibraryItem]:
        """Return a copy of the item, or None if it is not in the catalog."""
        item = self._items.get(item_id)
        return copy.deepcopy(item) if item is not None else None

    def add(self, item: LibraryItem) -> None:
        """
        Raises:
            DuplicateItem: an item with this identifier is already cataloged
            StoreFailure: the store rejected the write; the catalog is unchanged
        """
        with self._lock:
            if item.item_id in self._items:
                raise DuplicateItem(item.item_id)
            stored = copy.deepcopy(item)
            self.store.upsert(stored)
            self._items[item.item_id] = stored
        logger.info("Item added: %s", item)

    def update(self, item: LibraryItem) -> None:
        """
        Raises:
            ItemNotFound: no item with this identifier is cataloged
            ValidationError: the update would change the item's category
            StoreFailure: the store rejected the write; the catalog is unchanged
        """
        with self._lock:
            existing = self._items.get(item.item_id)
            if existing is None:
                raise ItemNotFound(item.item_id)
            if existing.category != item.category:
                raise ValidationError(
                    f"Item {item.item_id} is a {existing.category.value}, not a {item.category.value}"
                )
            stored = copy.deepcopy(item)
            self.store.upsert(stored)
            self._items[item.item_id] = stored
        logger.info("Item updated: %s", item)

    def remove(self, item_id: str) -> bool:
        """
        Remove an item. Returns False when the identifier is not cataloged.

        Raises:
            StoreFailure: the store rejected the delete; the catalog is unchanged
        """
        with self._lock:
            item = self._items.get(item_id)
            if item is None:
                return False
            self.store.delete(item)
            del self._items[item_id]
        logger.info("Item deleted: %s", item)
        return True

    def list_items(self) -> List[LibraryItem]:
        """Snapshot of all items, ordered by identifier."""
        with self._lock:
            return [copy.deepcopy(self._items[key]) for key in sorted(self._items)]

    def flush(self) -> int:
        """
        Re-save every item to the store. Best effort: a failing item is
        logged and skipped. Returns the number of items written.

        Holds the catalog lock throughout, so a concurrent remove cannot be
        undone by a late write.
        """
        written = 0
        with self._lock:
            items = list(self._items.values())
            for item in items:
                try:
                    self.store.upsert(item)
                    written += 1
                except CatalogError as exc:
                    logger.warning("Flush failed for %s: %s", item.item_id, exc)
        logger.info("Flushed %d of %d items", written, len(items))
        return written
