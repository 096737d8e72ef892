"""SQLAlchemy-backed implementation of ProductRepository."""

from __future__ import annotations

from sqlalchemy import String, func, or_, select
from sqlalchemy.orm import Session

from newsstand.domain.exceptions import NotFoundError
from newsstand.domain.model.product import Product
from newsstand.domain.model.value_objects import Money
from newsstand.domain.repository.product_repository import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    ProductRepository,
)
from newsstand.infrastructure.persistence.models import ProductRow
from newsstand.infrastructure.persistence.session import flush_or_conflict


class SqlAlchemyProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._session.get(ProductRow, product_id)
        return self._to_domain(row) if row is not None else None

    def get_by_barcode(self, barcode: str) -> Product | None:
        row = self._session.scalars(
            select(ProductRow).where(ProductRow.barcode == barcode).limit(1)
        ).first()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        return self._list(select(ProductRow).order_by(ProductRow.name))

    def list_active(self) -> list[Product]:
        return self._list(
            select(ProductRow)
            .where(ProductRow.active.is_(True))
            .order_by(ProductRow.name)
        )

    def search_by_name(self, term: str) -> list[Product]:
        needle = term.lower()
        return self._list(
            select(ProductRow)
            .where(
                or_(
                    func.lower(ProductRow.name, type_=String).contains(needle, autoescape=True),
                    func.lower(ProductRow.description, type_=String).contains(needle, autoescape=True),
                )
            )
            .order_by(ProductRow.name)
        )

    def list_low_stock(
        self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    ) -> list[Product]:
        return self._list(
            select(ProductRow)
            .where(
                ProductRow.active.is_(True),
                ProductRow.stock_quantity <= threshold,
            )
            .order_by(ProductRow.stock_quantity, ProductRow.name)
        )

    def count_in_stock(self) -> int:
        return self._session.scalar(
            select(func.count())
            .select_from(ProductRow)
            .where(ProductRow.active.is_(True), ProductRow.stock_quantity > 0)
        ) or 0

    def add(self, product: Product) -> None:
        row = ProductRow()
        self._copy_to_row(product, row)
        self._session.add(row)
        flush_or_conflict(self._session)
        product.id = row.id

    def update(self, product: Product) -> None:
        row = self._session.get(ProductRow, product.id)
        if row is None:
            raise NotFoundError(f"Product with ID {product.id} not found")
        self._copy_to_row(product, row)

    def remove(self, product_id: int) -> None:
        row = self._session.get(ProductRow, product_id)
        if row is not None:
            self._session.delete(row)

    # --- Mapping --------------------------------------------------------------

    def _list(self, statement) -> list[Product]:
        return [self._to_domain(row) for row in self._session.scalars(statement)]

    @staticmethod
    def _copy_to_row(product: Product, row: ProductRow) -> None:
        row.name = product.name
        row.description = product.description
        row.price = product.price.amount
        row.currency = product.price.currency
        row.stock_quantity = product.stock_quantity
        row.barcode = product.barcode
        row.created_at = product.created_at
        row.active = product.active

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            description=row.description or "",
            price=Money(row.price, row.currency),
            stock_quantity=row.stock_quantity,
            barcode=row.barcode,
            created_at=row.created_at,
            active=row.active,
        )
