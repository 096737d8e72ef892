"""Sale aggregate.

A Sale is an aggregate root that exclusively owns its items. Items are
only added, removed or resized through the Sale, which keeps ``total``
equal to the sum of the line totals at all times.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from newsstand.domain.exceptions import ValidationError
from newsstand.domain.model.product import Product
from newsstand.domain.model.value_objects import Money, Quantity


@dataclass
class SaleItem:
    """One line of a sale.

    Captures the product's name and price when the line is created
    (price lock). Only ``quantity`` can change afterwards.
    """

    id: int | None
    product_id: int
    product_name: str
    unit_price: Money  # locked at sale time
    quantity: Quantity
    sale_id: int | None = None

    @staticmethod
    def from_product(product: Product, quantity: int) -> SaleItem:
        if product.id is None:
            raise ValidationError(
                f"Product '{product.name}' must be saved before it can be sold"
            )
        return SaleItem(
            id=None,
            product_id=product.id,
            product_name=product.name,
            unit_price=product.price,
            quantity=Quantity(quantity),
        )

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    def update_quantity(self, quantity: int) -> None:
        """Change the quantity; the item is untouched if it is invalid."""
        self.quantity = Quantity(quantity)


@dataclass(eq=False)
class Sale:
    """Aggregate root for a newsstand sale.

    Use ``Sale.create()`` for new sales and ``Sale.restore()`` when
    rebuilding a stored one. ``items`` is a read-only snapshot; mutate
    through ``add_item`` / ``remove_item`` / ``change_item_quantity``.
    """

    id: int | None
    sold_at: datetime
    note: str | None = None
    _items: list[SaleItem] = field(default_factory=list, repr=False)
    _total: Money = field(default_factory=Money.zero, repr=False)

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def create(note: str | None = None) -> Sale:
        return Sale(id=None, sold_at=datetime.now(), note=note)

    @staticmethod
    def restore(
        id: int,
        sold_at: datetime,
        total: Money,
        note: str | None = None,
        items: Iterable[SaleItem] | None = None,
    ) -> Sale:
        """Rebuild a stored sale without re-running business rules.

        ``items`` may be omitted when the caller only loaded the sale
        header; the stored total is kept in that case.
        """
        return Sale(
            id=id,
            sold_at=sold_at,
            note=note,
            _items=list(items or []),
            _total=total,
        )

    # --- Items ----------------------------------------------------------------

    @property
    def items(self) -> tuple[SaleItem, ...]:
        return tuple(self._items)

    @property
    def total(self) -> Money:
        return self._total

    def add_item(self, product: Product, quantity: int) -> SaleItem:
        """Append a line for *product*, priced at its current price."""
        if quantity <= 0:
            raise ValidationError("Item quantity must be positive")
        item = SaleItem.from_product(product, quantity)
        item.sale_id = self.id
        self._items.append(item)
        self._recalculate_total()
        return item

    def remove_item(self, item: SaleItem) -> None:
        index = self._index_of(item)
        del self._items[index]
        self._recalculate_total()

    def change_item_quantity(self, item: SaleItem, quantity: int) -> None:
        self._index_of(item)
        item.update_quantity(quantity)
        self._recalculate_total()

    def update_note(self, note: str | None) -> None:
        self.note = note

    # --- Queries --------------------------------------------------------------

    def can_be_finalized(self) -> bool:
        return bool(self._items) and not self._total.is_zero

    # --- Internal helpers -----------------------------------------------------

    def _recalculate_total(self) -> None:
        total = Money.zero()
        for item in self._items:
            total = total + item.line_total
        self._total = total

    def _index_of(self, item: SaleItem) -> int:
        for index, candidate in enumerate(self._items):
            if candidate is item:
                return index
        raise ValidationError(
            f"Item '{item.product_name}' does not belong to this sale"
        )
