"""SQLAlchemy-backed implementation of SaleRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session, noload, selectinload

from newsstand.domain.exceptions import NotFoundError
from newsstand.domain.model.sale import Sale, SaleItem
from newsstand.domain.model.value_objects import Money, Quantity
from newsstand.domain.repository.sale_repository import SaleRepository
from newsstand.infrastructure.persistence.models import SaleItemRow, SaleRow
from newsstand.infrastructure.persistence.session import flush_or_conflict


class SqlAlchemySaleRepository(SaleRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- SaleRepository interface ---------------------------------------------

    def get_by_id(self, sale_id: int, include_items: bool = True) -> Sale | None:
        row = self._session.scalars(
            self._select(include_items).where(SaleRow.id == sale_id)
        ).first()
        return self._to_domain(row, include_items) if row is not None else None

    def list_all(self, include_items: bool = True) -> list[Sale]:
        return self._list(self._select(include_items), include_items)

    def list_by_period(
        self, start: datetime, end: datetime, include_items: bool = True
    ) -> list[Sale]:
        statement = self._select(include_items).where(
            SaleRow.sold_at >= start, SaleRow.sold_at <= end
        )
        return self._list(statement, include_items)

    def list_by_month(
        self, month: int, year: int, include_items: bool = True
    ) -> list[Sale]:
        start, end = _month_bounds(month, year)
        statement = self._select(include_items).where(
            SaleRow.sold_at >= start, SaleRow.sold_at < end
        )
        return self._list(statement, include_items)

    def count_for_month(self, month: int, year: int) -> int:
        start, end = _month_bounds(month, year)
        return self._session.scalar(
            select(func.count())
            .select_from(SaleRow)
            .where(SaleRow.sold_at >= start, SaleRow.sold_at < end)
        ) or 0

    def total_for_month(self, month: int, year: int) -> Decimal:
        # Summed here: SQLite's SUM works in floating point.
        start, end = _month_bounds(month, year)
        totals = self._session.scalars(
            select(SaleRow.total).where(SaleRow.sold_at >= start, SaleRow.sold_at < end)
        )
        return sum(totals, Decimal("0.00"))

    def add(self, sale: Sale) -> None:
        row = SaleRow(
            sold_at=sale.sold_at,
            total=sale.total.amount,
            note=sale.note,
            items=[self._item_to_row(item) for item in sale.items],
        )
        self._session.add(row)
        flush_or_conflict(self._session)
        self._sync_ids(sale, row)

    def update(self, sale: Sale) -> None:
        row = self._load_for_write(sale.id)
        if row is None:
            raise NotFoundError(f"Sale #{sale.id} not found")

        row.sold_at = sale.sold_at
        row.total = sale.total.amount
        row.note = sale.note

        # Keep rows for surviving items; delete-orphan drops the rest.
        existing = {item_row.id: item_row for item_row in row.items}
        item_rows = []
        for item in sale.items:
            item_row = existing.get(item.id) if item.id is not None else None
            if item_row is None:
                item_row = self._item_to_row(item)
            else:
                item_row.quantity = item.quantity.value
            item_rows.append(item_row)
        row.items = item_rows

        flush_or_conflict(self._session)
        self._sync_ids(sale, row)

    def remove(self, sale_id: int) -> None:
        # Loading the items lets the ORM delete them itself, so commit()
        # counts them too.
        row = self._load_for_write(sale_id)
        if row is not None:
            self._session.delete(row)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _select(include_items: bool):
        loader = selectinload(SaleRow.items) if include_items else noload(SaleRow.items)
        return (
            select(SaleRow)
            .options(loader)
            .order_by(SaleRow.sold_at.desc(), SaleRow.id.desc())
        )

    def _load_for_write(self, sale_id: int) -> SaleRow | None:
        # populate_existing refills an items collection that an earlier
        # header-only read in this session left empty.
        return self._session.scalars(
            self._select(include_items=True)
            .where(SaleRow.id == sale_id)
            .execution_options(populate_existing=True)
        ).first()

    def _list(self, statement, include_items: bool) -> list[Sale]:
        return [
            self._to_domain(row, include_items)
            for row in self._session.scalars(statement)
        ]

    @staticmethod
    def _item_to_row(item: SaleItem) -> SaleItemRow:
        return SaleItemRow(
            product_id=item.product_id,
            product_name=item.product_name,
            unit_price=item.unit_price.amount,
            currency=item.unit_price.currency,
            quantity=item.quantity.value,
        )

    @staticmethod
    def _sync_ids(sale: Sale, row: SaleRow) -> None:
        sale.id = row.id
        for item, item_row in zip(sale.items, row.items):
            item.id = item_row.id
            item.sale_id = row.id

    @staticmethod
    def _to_domain(row: SaleRow, include_items: bool) -> Sale:
        items = None
        if include_items:
            items = [
                SaleItem(
                    id=i.id,
                    product_id=i.product_id,
                    product_name=i.product_name,
                    unit_price=Money(i.unit_price, i.currency),
                    quantity=Quantity(i.quantity),
                    sale_id=row.id,
                )
                for i in row.items
            ]
        return Sale.restore(
            id=row.id,
            sold_at=row.sold_at,
            total=Money(row.total),
            note=row.note,
            items=items,
        )


def _month_bounds(month: int, year: int) -> tuple[datetime, datetime]:
    start = datetime(year, month, 1)
    if month == 12:
        return start, datetime(year + 1, 1, 1)
    return start, datetime(year, month + 1, 1)
