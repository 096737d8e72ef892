"""Product aggregate.

Products live independently of sales. Sale items keep their own copy
of the name and price, so editing a product never rewrites history.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from newsstand.domain.exceptions import ValidationError
from newsstand.domain.model.value_objects import Money, Quantity

MAX_NAME_LENGTH = 200


@dataclass
class Product:
    """A product on the newsstand's shelf.

    Use ``Product.create()`` for new products. The ``__init__`` is left
    unvalidated so the repository can reconstitute stored rows as-is.

    ``stock_quantity`` is a signed int: selling before a restock is
    allowed and shows up as negative stock.
    """

    id: int | None
    name: str
    description: str
    price: Money
    stock_quantity: int
    barcode: str | None = None
    created_at: datetime = field(default_factory=datetime.now)
    active: bool = True

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        description: str | None,
        price: Money,
        quantity: int,
        barcode: str | None = None,
    ) -> Product:
        """Create a new active product, enforcing all invariants."""
        _validate_name(name)
        _validate_price(price)
        if quantity < 0:
            raise ValidationError("Initial stock quantity cannot be negative")

        return Product(
            id=None,
            name=name,
            description=description or "",
            price=price,
            stock_quantity=quantity,
            barcode=_normalize_barcode(barcode),
        )

    # --- Mutations ------------------------------------------------------------

    def update(
        self,
        name: str,
        description: str | None,
        price: Money,
        barcode: str | None = None,
    ) -> None:
        """Replace the editable fields.

        Barcode uniqueness is checked by the caller, which can see the
        other products.
        """
        _validate_name(name)
        _validate_price(price)
        self.name = name
        self.description = description or ""
        self.price = price
        self.barcode = _normalize_barcode(barcode)

    def add_stock(self, quantity: int) -> None:
        self.stock_quantity += Quantity(quantity).value

    def remove_stock(self, quantity: int) -> None:
        """Take units out of stock. The result may be negative."""
        self.stock_quantity -= Quantity(quantity).value

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False

    @property
    def in_stock(self) -> bool:
        return self.stock_quantity > 0


def _validate_name(name: str) -> None:
    if not name or not name.strip():
        raise ValidationError("Product name is required")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"Product name cannot exceed {MAX_NAME_LENGTH} characters"
        )


def _validate_price(price: Money) -> None:
    if not isinstance(price, Money):
        raise ValidationError(
            f"Product price must be Money, got {type(price).__name__}"
        )
    if price.amount < 0:
        raise ValidationError("Product price cannot be negative")


def _normalize_barcode(barcode: str | None) -> str | None:
    if barcode is None or not barcode.strip():
        return None
    return barcode.strip()
