"""Unit tests for the Product aggregate."""

from decimal import Decimal

import pytest

from newsstand.domain.exceptions import ValidationError
from newsstand.domain.model.product import Product
from newsstand.domain.model.value_objects import Money


def _make_product(**overrides) -> Product:
    fields = dict(
        name="Jornal X",
        description="Diário",
        price=Money.of("5.50"),
        quantity=10,
        barcode=None,
    )
    fields.update(overrides)
    return Product.create(**fields)


class TestProductCreation:

    @pytest.mark.parametrize(
        "name, description, price, quantity, barcode",
        [
            ("Jornal X", "", "5.50", 10, None),
            ("Revista Y", "Semanal", "0", 0, "789100"),
            ("A" * 200, "limite", "1999.99", 3, "123"),
        ],
    )
    def test_valid_fields_round_trip(self, name, description, price, quantity, barcode):
        product = Product.create(name, description, Money.of(price), quantity, barcode)
        assert product.name == name
        assert product.description == description
        assert product.price == Money.of(price)
        assert product.stock_quantity == quantity
        assert product.barcode == barcode

    def test_new_product_is_active_and_unsaved(self):
        product = _make_product()
        assert product.active is True
        assert product.id is None  # assigned by repository
        assert product.created_at is not None

    def test_missing_description_becomes_empty(self):
        assert _make_product(description=None).description == ""

    def test_blank_barcode_is_dropped(self):
        assert _make_product(barcode="   ").barcode is None


class TestProductValidation:

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, name):
        with pytest.raises(ValidationError, match="name is required"):
            _make_product(name=name)

    def test_name_over_200_chars_rejected(self):
        with pytest.raises(ValidationError, match="200 characters"):
            _make_product(name="A" * 201)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(price=Money.of("-0.01"))

    def test_negative_initial_quantity_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _make_product(quantity=-1)


class TestProductUpdate:

    def test_update_replaces_fields(self):
        product = _make_product(barcode="111")
        product.update("Jornal Z", "Edição extra", Money.of("7.00"), "222")
        assert product.name == "Jornal Z"
        assert product.description == "Edição extra"
        assert product.price.amount == Decimal("7.00")
        assert product.barcode == "222"

    def test_update_with_blank_name_rejected_and_unchanged(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.update(" ", "", Money.of("1"))
        assert product.name == "Jornal X"

    def test_update_with_long_name_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError, match="200 characters"):
            product.update("B" * 201, "", Money.of("1"))


class TestProductStock:

    def test_add_stock(self):
        product = _make_product(quantity=10)
        product.add_stock(5)
        assert product.stock_quantity == 15

    @pytest.mark.parametrize("qty", [0, -1])
    def test_add_non_positive_rejected(self, qty):
        product = _make_product(quantity=10)
        with pytest.raises(ValidationError, match="must be positive"):
            product.add_stock(qty)
        assert product.stock_quantity == 10

    def test_remove_stock_may_go_negative(self):
        product = _make_product(quantity=2)
        product.remove_stock(5)
        assert product.stock_quantity == -3
        assert not product.in_stock

    def test_remove_non_positive_rejected(self):
        product = _make_product(quantity=2)
        with pytest.raises(ValidationError, match="must be positive"):
            product.remove_stock(0)


class TestProductActivation:

    def test_deactivate_then_activate(self):
        product = _make_product()
        product.deactivate()
        assert product.active is False
        product.activate()
        assert product.active is True

    def test_activate_is_idempotent(self):
        product = _make_product()
        product.activate()
        product.activate()
        assert product.active is True

    def test_deactivate_is_idempotent(self):
        product = _make_product()
        product.deactivate()
        product.deactivate()
        assert product.active is False
