"""
ID counter repository backed by SQLAlchemy.

One row per identifier prefix holding the last sequence number issued for it.
"""
from typing import Dict, Optional
from sqlalchemy.orm import sessionmaker

from db import SessionLocal
from domain.errors import StoreFailure
from repositories.base import CounterStore
from repositories.models import IdCounterORM
from repositories.session import transaction


class CountersRepository(CounterStore):
    """Durable prefix -> last issued sequence mapping."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory or SessionLocal

    def get(self, prefix: str) -> Optional[int]:
        with transaction(self._session_factory, f"read counter {prefix}") as session:
            orm = session.get(IdCounterORM, prefix)
            return orm.last_used_id if orm else None

    def set(self, prefix: str, sequence: int) -> None:
        """
        Create or overwrite the counter for a prefix.

        Raises:
            StoreFailure: the write failed, or it would lower the stored value
        """
        if sequence < 0:
            raise StoreFailure(f"Counter {prefix} cannot be negative: {sequence}")
        with transaction(self._session_factory, f"save counter {prefix}") as session:
            orm = session.get(IdCounterORM, prefix)
            if orm is None:
                session.add(IdCounterORM(prefix=prefix, last_used_id=sequence))
                return
            if sequence < orm.last_used_id:
                raise StoreFailure(
                    f"Counter {prefix} would move backwards ({orm.last_used_id} -> {sequence})"
                )
            orm.last_used_id = sequence

    def load_all(self) -> Dict[str, int]:
        with transaction(self._session_factory, "load counters") as session:
            return {orm.prefix: orm.last_used_id for orm in session.query(IdCounterORM).all()}
