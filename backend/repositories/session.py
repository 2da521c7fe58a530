"""
Transaction helper shared by the SQLAlchemy repositories.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from domain.errors import StoreFailure

logger = logging.getLogger(__name__)


@contextmanager
def transaction(session_factory: sessionmaker, action: str) -> Iterator[Session]:
    """
    Open a session, commit on success, roll back on failure.

    Any SQLAlchemy error is logged and re-raised as StoreFailure so callers
    only deal with the catalog's own error types.
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Store operation failed: %s", action)
        raise StoreFailure(f"Could not {action}: {exc}") from exc
    finally:
        session.close()
