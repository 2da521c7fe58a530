"""
Database setup for the catalog backend.
Provides SQLAlchemy engine/session utilities; SQLite by default, any
SQLAlchemy URL via CATALOG_DATABASE_URL.
"""
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, URL, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from settings import settings


Base = declarative_base()


def make_engine(url: str, echo: bool = False) -> Engine:
    connect_args = {}
    if make_url(url).get_backend_name() == "sqlite":
        # check_same_thread=False allows usage across FastAPI threads
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=echo, connect_args=connect_args)


def sqlite_file(url: URL) -> Optional[Path]:
    """Path of the database file for a file-backed SQLite URL, else None."""
    if url.get_backend_name() != "sqlite":
        return None
    if not url.database or url.database == ":memory:" or url.database.startswith("file:"):
        return None
    return Path(url.database)


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autoflush=False, autocommit=False, expire_on_commit=False)


engine = make_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
SessionLocal = make_session_factory(engine)


def init_db(bind: Optional[Engine] = None) -> None:
    """Create the SQLite directory if needed, then any missing tables."""
    from repositories import models  # noqa: F401  Ensures models are registered

    bind = bind or engine
    db_file = sqlite_file(bind.url)
    if db_file is not None:
        db_file.parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=bind)
