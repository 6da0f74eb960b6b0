from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from vinyl_catalog.infra.db.config import database_url, pool_settings

logger = logging.getLogger(__name__)

# Created on first use so importing the app never needs DATABASE_URL
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """
    Get or create the process-wide engine.

    Pool sizing comes from DB_POOL_SIZE / DB_MAX_OVERFLOW / DB_POOL_RECYCLE;
    pool_pre_ping drops connections the server closed while idle.
    """
    global _engine
    if _engine is None:
        _engine = create_engine(database_url(), pool_pre_ping=True, **pool_settings())
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _session_factory


def dispose_engine() -> None:
    """Close pooled connections and forget the engine (application shutdown)."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
        logger.info("Database engine disposed")
    _engine = None
    _session_factory = None


@contextmanager
def get_session() -> Iterator[Session]:
    """One unit of work: commit on success, roll back on any exception."""
    session = get_session_factory()()

    try:
        yield session
        session.commit()
    except Exception as exc:
        session.rollback()
        logger.info("Session rolled back", extra={"error_type": type(exc).__name__})
        raise
    finally:
        session.close()
