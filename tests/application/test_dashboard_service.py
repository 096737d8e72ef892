"""Tests for the DashboardService read-side aggregation."""

from datetime import datetime
from decimal import Decimal

from newsstand.application.dashboard_service import DashboardService, top_products
from newsstand.domain.model.product import Product
from newsstand.domain.model.sale import Sale
from tests.fakes import FakeUnitOfWork, make_product

MAY_2024 = datetime(2024, 5, 20, 12, 0)


def _sale(when: datetime, *lines: tuple[Product, int]) -> Sale:
    sale = Sale(id=None, sold_at=when)
    for product, qty in lines:
        sale.add_item(product, qty)
    return sale


class TestDashboardCounts:

    def test_stock_counts(self):
        uow = FakeUnitOfWork([
            make_product(1, "A", stock=10),
            make_product(2, "B", stock=3),
            make_product(3, "C", stock=0),
            make_product(4, "D", stock=-1),
            make_product(5, "E", stock=50, active=False),
            make_product(6, "F", stock=2, active=False),
        ])
        data = DashboardService(uow).get_dashboard_data(MAY_2024)
        assert data.products_in_stock == 2        # A, B
        assert data.low_stock_products == 3       # B, C, D

    def test_custom_low_stock_threshold(self):
        uow = FakeUnitOfWork([make_product(1, stock=10), make_product(2, stock=3)])
        data = DashboardService(uow, low_stock_threshold=10).get_dashboard_data(MAY_2024)
        assert data.low_stock_products == 2

    def test_empty_month(self):
        data = DashboardService(FakeUnitOfWork()).get_dashboard_data(MAY_2024)
        assert data.sales_this_month == 0
        assert data.sales_total_this_month == Decimal("0")
        assert data.top_products == []


class TestDashboardSales:

    def test_two_sales_of_the_same_product(self):
        caderno = make_product(1, "Caderno", price="5.00")
        revista = make_product(2, "Revista", price="10.00")
        uow = FakeUnitOfWork(
            [caderno, revista],
            [
                _sale(datetime(2024, 5, 2), (caderno, 2)),
                _sale(datetime(2024, 5, 9), (caderno, 3), (revista, 1)),
            ],
        )

        data = DashboardService(uow).get_dashboard_data(MAY_2024)

        assert data.sales_this_month == 2
        assert data.sales_total_this_month == Decimal("35.00")
        top = data.top_products[0]
        assert top.product_name == "Caderno"
        assert top.quantity_sold == 5
        assert top.total_value == Decimal("25.00")

    def test_other_months_are_ignored(self):
        jornal = make_product(1, "Jornal", price="3.00")
        uow = FakeUnitOfWork(
            [jornal],
            [
                _sale(datetime(2024, 4, 30, 23, 59), (jornal, 1)),
                _sale(datetime(2024, 5, 1, 0, 0), (jornal, 2)),
                _sale(datetime(2023, 5, 15), (jornal, 4)),
                _sale(datetime(2024, 6, 1), (jornal, 8)),
            ],
        )
        data = DashboardService(uow).get_dashboard_data(MAY_2024)
        assert data.sales_this_month == 1
        assert data.sales_total_this_month == Decimal("6.00")

    def test_defaults_to_current_month(self):
        jornal = make_product(1, "Jornal", price="3.00")
        uow = FakeUnitOfWork([jornal], [_sale(datetime.now(), (jornal, 1))])
        assert DashboardService(uow).get_dashboard_data().sales_this_month == 1


class TestTopProducts:

    def test_groups_by_captured_name(self):
        jornal = make_product(1, "Jornal", price="3.00")
        first = _sale(MAY_2024, (jornal, 1))
        jornal.update("Jornal Novo", "", jornal.price)
        second = _sale(MAY_2024, (jornal, 1))

        names = [p.product_name for p in top_products([first, second])]
        assert names == ["Jornal", "Jornal Novo"]

    def test_ties_keep_first_seen_order(self):
        a = make_product(1, "A", price="1.00")
        b = make_product(2, "B", price="1.00")
        c = make_product(3, "C", price="1.00")
        sales = [_sale(MAY_2024, (b, 2), (a, 2), (c, 5))]

        names = [p.product_name for p in top_products(sales)]
        assert names == ["C", "B", "A"]

    def test_limited_to_ten(self):
        products = [make_product(i, f"P{i:02d}", price="1.00") for i in range(1, 13)]
        sale = _sale(MAY_2024, *[(p, p.id) for p in products])

        top = top_products([sale])
        assert len(top) == 10
        assert top[0].product_name == "P12"
        assert top[-1].product_name == "P03"
