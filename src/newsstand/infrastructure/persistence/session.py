"""Engine and session factory for the relational store."""

from __future__ import annotations

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from newsstand.domain.exceptions import ConflictError
from newsstand.infrastructure.persistence.models import Base

logger = logging.getLogger(__name__)


def create_store_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """Create the engine and make sure the schema exists.

    SQLite only enforces foreign keys (and so the RESTRICT on sold
    products) when asked to, once per connection.
    """
    engine = create_engine(database_url, echo=echo, **kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _configure_sqlite_connection)

    Base.metadata.create_all(engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


def flush_or_conflict(session: Session) -> None:
    """Flush pending changes, reporting constraint violations as ConflictError.

    The session is rolled back first, so nothing from the failed flush
    remains staged.
    """
    try:
        session.flush()
    except IntegrityError as exc:
        session.rollback()
        logger.warning("Store rejected changes: %s", exc.orig)
        raise ConflictError(
            "Operation conflicts with existing data "
            "(duplicate value or record still in use)"
        ) from exc


def _configure_sqlite_connection(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    # SQLite's own lower() only folds ASCII; product names are Portuguese.
    dbapi_connection.create_function("lower", 1, _lower, deterministic=True)


def _lower(value):
    return value.lower() if isinstance(value, str) else value
