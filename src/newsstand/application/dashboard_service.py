"""Application service: Dashboard (query).

Aggregates stock counts and the current month's sales. The month's sale
count and revenue come from the sale repository; best sellers need the
items, so the month's sales are loaded for those.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from newsstand.application.dto import DashboardDTO, ProductSalesDTO
from newsstand.domain.model.sale import Sale
from newsstand.domain.repository.product_repository import (
    DEFAULT_LOW_STOCK_THRESHOLD,
)
from newsstand.domain.repository.unit_of_work import UnitOfWork

TOP_PRODUCTS_LIMIT = 10


class DashboardService:

    def __init__(
        self,
        uow: UnitOfWork,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._uow = uow
        self._low_stock_threshold = low_stock_threshold

    def get_dashboard_data(self, reference_date: datetime | None = None) -> DashboardDTO:
        """Build the dashboard for the month containing *reference_date*.

        Defaults to the local clock's current month.
        """
        if reference_date is None:
            reference_date = datetime.now()

        with self._uow:
            in_stock = self._uow.products.count_in_stock()
            low_stock = self._uow.products.list_low_stock(self._low_stock_threshold)
            month, year = reference_date.month, reference_date.year
            sales_count = self._uow.sales.count_for_month(month, year)
            sales_total = self._uow.sales.total_for_month(month, year)
            sales = self._uow.sales.list_by_month(month, year)

        return DashboardDTO(
            products_in_stock=in_stock,
            low_stock_products=len(low_stock),
            sales_this_month=sales_count,
            sales_total_this_month=sales_total,
            top_products=top_products(sales),
        )


def top_products(sales: list[Sale], limit: int = TOP_PRODUCTS_LIMIT) -> list[ProductSalesDTO]:
    """Best sellers by quantity, grouped by the name captured on each line.

    Ties keep the order in which the products were first seen.
    """
    quantities: dict[str, int] = {}
    values: dict[str, Decimal] = {}
    for sale in sales:
        for item in sale.items:
            name = item.product_name
            quantities[name] = quantities.get(name, 0) + item.quantity.value
            values[name] = values.get(name, Decimal("0.00")) + item.line_total.amount

    ranked = sorted(quantities, key=lambda name: quantities[name], reverse=True)
    return [
        ProductSalesDTO(
            product_name=name,
            quantity_sold=quantities[name],
            total_value=values[name],
        )
        for name in ranked[:limit]
    ]
