"""Abstract interfaces for the catalog's persistence backends.

The catalog and the ID allocator only talk to these, which lets them run on
SQLAlchemy in production and on plain dicts in tests.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from domain.models import LibraryItem


class ItemStore(ABC):
    """Durable storage for library items. Each call must be atomic."""

    @abstractmethod
    def load_all_items(self) -> List[LibraryItem]:
        """Return every stored item."""

    @abstractmethod
    def upsert(self, item: LibraryItem) -> None:
        """Insert the item or overwrite the row with the same ID."""

    @abstractmethod
    def delete(self, item: LibraryItem) -> None:
        """Remove the item's row; missing rows are not an error."""


class CounterStore(ABC):
    """Durable prefix -> last issued sequence number mapping."""

    @abstractmethod
    def get(self, prefix: str) -> Optional[int]:
        """Return the stored sequence, or None if the prefix was never used."""

    @abstractmethod
    def set(self, prefix: str, sequence: int) -> None:
        """Create or overwrite the counter for a prefix."""

    @abstractmethod
    def load_all(self) -> Dict[str, int]:
        """Return every stored counter."""
