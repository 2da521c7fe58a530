"""
SQLAlchemy ORM models for persistence.
"""
from sqlalchemy import Column, Integer, String

from db import Base


class LibraryItemORM(Base):
    """One row per catalog item; the variant attribute lives in its own nullable column."""

    __tablename__ = "library_items"

    item_id = Column(String, primary_key=True, index=True)
    category = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    creator = Column(String, nullable=False)
    num_pages = Column(Integer, nullable=True)
    runtime_minutes = Column(Integer, nullable=True)
    issue_number = Column(Integer, nullable=True)
    platform = Column(String, nullable=True)


class IdCounterORM(Base):
    __tablename__ = "id_counters"

    prefix = Column(String(2), primary_key=True)
    last_used_id = Column(Integer, nullable=False, default=0)
