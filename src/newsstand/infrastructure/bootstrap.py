"""Composition root: builds services on top of the configured store.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from sqlalchemy.orm import sessionmaker

from newsstand.application.dashboard_service import DashboardService
from newsstand.application.product_service import ProductService
from newsstand.application.sale_service import SaleService
from newsstand.infrastructure.persistence.session import (
    create_session_factory,
    create_store_engine,
)
from newsstand.infrastructure.persistence.sqlalchemy_unit_of_work import (
    SqlAlchemyUnitOfWork,
)
from newsstand.infrastructure.settings import get_settings


@lru_cache
def session_factory() -> sessionmaker:
    settings = get_settings()
    if settings.is_sqlite and ":///" in settings.database_url:
        db_path = Path(settings.database_url.split(":///", 1)[1])
        db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_store_engine(settings.database_url, echo=settings.echo_sql)
    return create_session_factory(engine)


def unit_of_work() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory())


def product_service() -> ProductService:
    return ProductService(
        unit_of_work(), low_stock_threshold=get_settings().low_stock_threshold
    )


def sale_service() -> SaleService:
    return SaleService(unit_of_work())


def dashboard_service() -> DashboardService:
    return DashboardService(
        unit_of_work(), low_stock_threshold=get_settings().low_stock_threshold
    )
