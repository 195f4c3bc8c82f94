"""Database utilities for SQLAlchemy 2.x.

Provides engine/session factories and a session scope context manager.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from todosearch.storage.models import Base

logger = logging.getLogger(__name__)


def get_engine(url: str, *, echo: bool = False) -> Engine:
    """Create a SQLAlchemy engine and make sure the schema exists.

    In-memory SQLite URLs share a single connection so every session sees
    the same database.

    Args:
        url: SQLAlchemy URL, e.g. ``"sqlite:///todosearch.db"``.
        echo: If True, SQL statements are logged (useful for debugging).
    """
    if url.startswith("sqlite") and (":memory:" in url or url.rstrip("/") == "sqlite:"):
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    elif url.startswith("sqlite"):
        engine = create_engine(url, echo=echo, connect_args={"check_same_thread": False})
    else:
        engine = create_engine(url, echo=echo, pool_pre_ping=True)

    Base.metadata.create_all(engine)
    logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))
    return engine


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a sessionmaker bound to the provided engine."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations.

    Commits on success, rolls back on error, and always closes the session.
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
