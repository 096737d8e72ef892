"""SQLAlchemy-backed implementation of UnitOfWork.

Each ``with uow:`` block gets its own session. The session is rolled
back (if not committed) and closed on every exit path.
"""

from __future__ import annotations

import logging

from sqlalchemy import event
from sqlalchemy.orm import Session, sessionmaker

from newsstand.domain.repository.unit_of_work import UnitOfWork
from newsstand.infrastructure.persistence.session import flush_or_conflict
from newsstand.infrastructure.persistence.sqlalchemy_product_repository import (
    SqlAlchemyProductRepository,
)
from newsstand.infrastructure.persistence.sqlalchemy_sale_repository import (
    SqlAlchemySaleRepository,
)

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None
        self._rows_affected = 0

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self._rows_affected = 0
        event.listen(self._session, "after_flush", self._count_flushed_rows)
        self.products = SqlAlchemyProductRepository(self._session)
        self.sales = SqlAlchemySaleRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self._session.close()
            self._session = None

    def commit(self) -> int:
        """Flush and commit; return the number of rows written in this unit."""
        flush_or_conflict(self._session)
        self._session.commit()
        affected, self._rows_affected = self._rows_affected, 0
        return affected

    def rollback(self) -> None:
        if self._session is None:
            return
        if self._session.new or self._session.dirty or self._session.deleted:
            logger.info("Rolling back uncommitted changes")
        self._session.rollback()
        self._rows_affected = 0

    # --- Internal helpers -----------------------------------------------------

    def _count_flushed_rows(self, session: Session, flush_context) -> None:
        # new/dirty/deleted still hold the pre-flush state here.
        modified = [obj for obj in session.dirty if session.is_modified(obj)]
        self._rows_affected += len(session.new) + len(modified) + len(session.deleted)
