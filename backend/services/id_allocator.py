"""
Identifier allocation for catalog items.

IDs look like ``B100001``: a 2-character category prefix followed by a
sequence number zero-padded to 5 digits. The last number issued per prefix is
kept in a CounterStore so numbering survives restarts and never repeats.
"""
from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from domain.models import ItemCategory
from repositories.base import CounterStore

logger = logging.getLogger(__name__)

SEQUENCE_WIDTH = 5


def format_identifier(prefix: str, sequence: int) -> str:
    return f"{prefix}{sequence:0{SEQUENCE_WIDTH}d}"


class IdAllocator:
    """
    Issues strictly increasing identifiers per category.

    One instance per process, shared by whoever creates items. The counter
    cache is seeded from the store before the first allocation; after that
    the cache is only advanced once the store has accepted the new value.
    """

    def __init__(self, store: CounterStore):
        self.store = store
        self._lock = threading.Lock()
        self._last_used: Optional[Dict[str, int]] = None

    def load(self) -> None:
        """Seed the cache from the counter store. Called lazily by allocate()."""
        with self._lock:
            self._load_locked()

    def _load_locked(self) -> Dict[str, int]:
        if self._last_used is None:
            self._last_used = dict(self.store.load_all())
            logger.debug("Seeded ID counters: %s", self._last_used)
        return self._last_used

    @staticmethod
    def prefix_for(category: Optional[str]) -> str:
        """
        Raises:
            MissingCategory: category is None or blank
            InvalidCategory: category is not supported
        """
        return ItemCategory.parse(category).prefix

    def peek(self, category: Optional[str]) -> int:
        """Return the last sequence issued for a category (0 if none)."""
        prefix = self.prefix_for(category)
        with self._lock:
            return self._load_locked().get(prefix, 0)

    def allocate(self, category: Optional[str]) -> str:
        """
        Issue the next identifier for a category.

        Raises:
            MissingCategory: category is None or blank
            InvalidCategory: category is not supported
            StoreFailure: the new counter value could not be persisted; no
                identifier is issued and the counter is not advanced
        """
        prefix = self.prefix_for(category)
        with self._lock:
            last_used = self._load_locked()
            sequence = last_used.get(prefix, 0) + 1
            self.store.set(prefix, sequence)
            last_used[prefix] = sequence
        identifier = format_identifier(prefix, sequence)
        logger.debug("Allocated identifier %s", identifier)
        return identifier
