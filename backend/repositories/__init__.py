from .items import ItemsRepository
from .counters import CountersRepository
from .memory import InMemoryCounterStore, InMemoryItemStore
from . import models

__all__ = [
    "ItemsRepository",
    "CountersRepository",
    "InMemoryItemStore",
    "InMemoryCounterStore",
    "models",
]
