"""Integration tests for the ProductService use cases.

Uses the in-memory fake unit of work, no database.
"""

from decimal import Decimal

import pytest

from newsstand.application.product_service import ProductService
from newsstand.domain.exceptions import ConflictError, NotFoundError, ValidationError
from newsstand.domain.model.product import Product
from newsstand.domain.model.sale import Sale
from tests.fakes import FakeUnitOfWork, make_product


def _setup(
    products: list[Product] | None = None,
    sales: list[Sale] | None = None,
) -> tuple[ProductService, FakeUnitOfWork]:
    """Build the service over a fake unit of work, optionally pre-loaded."""
    uow = FakeUnitOfWork(products, sales)
    return ProductService(uow), uow


class TestProductQueries:

    def test_get_by_id(self):
        service, _ = _setup([make_product(1, "Jornal X")])
        dto = service.get_by_id(1)
        assert dto is not None
        assert dto.name == "Jornal X"
        assert dto.price == Decimal("5.50")

    def test_get_unknown_id_returns_none(self):
        service, _ = _setup()
        assert service.get_by_id(999) is None

    def test_list_all_is_ordered_by_name(self):
        service, _ = _setup([
            make_product(1, "Revista"),
            make_product(2, "Almanaque"),
            make_product(3, "Jornal"),
        ])
        assert [p.name for p in service.list_all()] == ["Almanaque", "Jornal", "Revista"]

    def test_list_active_skips_inactive(self):
        service, _ = _setup([
            make_product(1, "Jornal"),
            make_product(2, "Revista", active=False),
        ])
        assert [p.name for p in service.list_active()] == ["Jornal"]

    def test_search_matches_name_or_description(self):
        service, _ = _setup([
            make_product(1, "Jornal X", description="diário"),
            make_product(2, "Revista Y", description="jornalismo semanal"),
            make_product(3, "Caderno"),
        ])
        names = [p.name for p in service.search_by_name("JORNAL")]
        assert names == ["Jornal X", "Revista Y"]

    @pytest.mark.parametrize("term", ["", "   "])
    def test_blank_search_returns_nothing(self, term):
        service, _ = _setup([make_product(1)])
        assert service.search_by_name(term) == []

    def test_list_low_stock_uses_threshold(self):
        service, _ = _setup([
            make_product(1, "A", stock=5),
            make_product(2, "B", stock=6),
            make_product(3, "C", stock=-2),
            make_product(4, "D", stock=0, active=False),
        ])
        assert [p.name for p in service.list_low_stock()] == ["C", "A"]
        assert [p.name for p in service.list_low_stock(threshold=6)] == ["C", "A", "B"]


class TestCreateProduct:

    def test_creates_and_commits(self):
        service, uow = _setup()
        dto = service.create("Jornal X", "", "5.50", 10)
        assert dto.id == 1
        assert dto.price == Decimal("5.50")
        assert dto.stock_quantity == 10
        assert dto.active is True
        assert uow.commits == 1
        assert uow.products.get_by_id(1).name == "Jornal X"

    def test_duplicate_barcode_rejected(self):
        service, uow = _setup()
        service.create("Jornal X", "", "5.50", 10, barcode="123")
        with pytest.raises(ConflictError, match="barcode '123'"):
            service.create("Jornal Y", "", "4.00", 5, barcode="123")
        assert len(uow.products.list_all()) == 1

    def test_products_without_barcode_do_not_conflict(self):
        service, _ = _setup()
        service.create("A", "", "1", 1)
        service.create("B", "", "1", 1, barcode="  ")
        assert len(service.list_all()) == 2

    def test_invalid_product_not_persisted(self):
        service, uow = _setup()
        with pytest.raises(ValidationError):
            service.create("", "", "5.50", 10)
        with pytest.raises(ValidationError):
            service.create("Jornal", "", "-1", 10)
        assert uow.products.list_all() == []
        assert uow.commits == 0

    @pytest.mark.parametrize("price", ["5.555", "Infinity", "NaN", "1e40"])
    def test_price_that_is_not_whole_cents_rejected(self, price):
        service, uow = _setup()
        with pytest.raises(ValidationError):
            service.create("Jornal", "", price, 10)
        assert service.list_all() == []
        assert uow.commits == 0

    def test_price_returned_at_two_places(self):
        service, _ = _setup()
        assert str(service.create("Jornal", "", "5.5", 10).price) == "5.50"


class TestUpdateProduct:

    def test_updates_fields(self):
        service, uow = _setup([make_product(1, "Jornal X", barcode="123")])
        dto = service.update(1, "Jornal Z", "extra", "6.00", "123")
        assert dto.name == "Jornal Z"
        assert dto.price == Decimal("6.00")
        assert uow.products.get_by_id(1).description == "extra"

    def test_unknown_id_rejected(self):
        service, _ = _setup()
        with pytest.raises(NotFoundError, match="999"):
            service.update(999, "Jornal", "", "1.00")

    def test_barcode_taken_by_other_product_rejected(self):
        service, uow = _setup([
            make_product(1, "A", barcode="111"),
            make_product(2, "B", barcode="222"),
        ])
        with pytest.raises(ConflictError):
            service.update(2, "B", "", "1.00", "111")
        assert uow.products.get_by_id(2).barcode == "222"

    def test_infinite_price_rejected(self):
        service, uow = _setup([make_product(1, "Jornal X")])
        with pytest.raises(ValidationError, match="must be a number"):
            service.update(1, "Jornal X", "", "Infinity")
        assert uow.products.get_by_id(1).price.amount == Decimal("5.50")

    def test_keeping_own_barcode_is_allowed(self):
        service, _ = _setup([make_product(1, "A", barcode="111")])
        assert service.update(1, "A2", "", "1.00", "111").barcode == "111"

    def test_invalid_update_leaves_product_unchanged(self):
        service, uow = _setup([make_product(1, "Jornal X")])
        with pytest.raises(ValidationError):
            service.update(1, "X" * 201, "", "1.00")
        assert uow.products.get_by_id(1).name == "Jornal X"


class TestStockAndActivation:

    def test_add_stock(self):
        service, uow = _setup([make_product(1, stock=10)])
        service.add_stock(1, 5)
        assert uow.products.get_by_id(1).stock_quantity == 15

    def test_add_negative_stock_rejected_and_unchanged(self):
        service, uow = _setup([make_product(1, stock=10)])
        with pytest.raises(ValidationError):
            service.add_stock(1, -1)
        assert uow.products.get_by_id(1).stock_quantity == 10
        assert uow.commits == 0

    def test_add_stock_unknown_id_rejected(self):
        service, _ = _setup()
        with pytest.raises(NotFoundError):
            service.add_stock(42, 1)

    def test_activate_and_deactivate(self):
        service, uow = _setup([make_product(1)])
        service.deactivate(1)
        assert uow.products.get_by_id(1).active is False
        service.deactivate(1)
        assert uow.products.get_by_id(1).active is False
        service.activate(1)
        service.activate(1)
        assert uow.products.get_by_id(1).active is True

    @pytest.mark.parametrize("operation", ["activate", "deactivate"])
    def test_activation_unknown_id_rejected(self, operation):
        service, _ = _setup()
        with pytest.raises(NotFoundError):
            getattr(service, operation)(7)


class TestRemoveProduct:

    def test_removes_unsold_product(self):
        service, uow = _setup([make_product(1)])
        service.remove(1)
        assert uow.products.get_by_id(1) is None

    def test_unknown_id_rejected(self):
        service, _ = _setup()
        with pytest.raises(NotFoundError):
            service.remove(3)

    def test_sold_product_cannot_be_removed(self):
        product = make_product(1, "Jornal X")
        sale = Sale.create()
        sale.add_item(product, 1)
        service, uow = _setup([product], [sale])

        with pytest.raises(ConflictError):
            service.remove(1)
        assert uow.products.get_by_id(1) is not None
