"""Application service: Sale use cases.

Orchestrates the flow between repositories and the Sale aggregate.
This is the only place that coordinates multiple aggregates (Product
lookup + Sale creation).
"""

from __future__ import annotations

import logging
from datetime import datetime

from newsstand.application.dto import SaleDTO, SaleItemSpec
from newsstand.domain.exceptions import NotFoundError, ValidationError
from newsstand.domain.model.sale import Sale, SaleItem
from newsstand.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SaleService:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def create(self, item_specs: list[SaleItemSpec], note: str | None = None) -> SaleDTO:
        """Record a new sale.

        Steps:
        1. Resolve each product id (fail if not found).
        2. Add one line per spec; each line snapshots the current price.
        3. Refuse sales that cannot be finalized (no items or zero total).
        4. Persist sale and items, commit once, return a DTO.

        Product stock is left as it is.

        Any failure leaves nothing behind: the unit of work is rolled
        back when the block exits without a commit.
        """
        with self._uow:
            sale = Sale.create(note=note)

            for spec in item_specs:
                product = self._uow.products.get_by_id(spec.product_id)
                if product is None:
                    raise NotFoundError(
                        f"Product with ID {spec.product_id} not found"
                    )
                sale.add_item(product, spec.quantity)

            if not sale.can_be_finalized():
                raise ValidationError(
                    "Sale must contain at least one item and a positive total"
                )

            self._uow.sales.add(sale)
            self._uow.commit()

        logger.info(
            "Recorded sale #%s with %d item(s), total %s",
            sale.id, len(sale.items), sale.total,
        )
        return SaleDTO.from_entity(sale)

    def get_by_id(self, sale_id: int) -> SaleDTO | None:
        with self._uow:
            sale = self._uow.sales.get_by_id(sale_id)
            return SaleDTO.from_entity(sale) if sale else None

    def list_all(self) -> list[SaleDTO]:
        with self._uow:
            return [SaleDTO.from_entity(s) for s in self._uow.sales.list_all()]

    def list_by_period(self, start: datetime, end: datetime) -> list[SaleDTO]:
        if end < start:
            raise ValidationError("Period end must not be before its start")
        with self._uow:
            sales = self._uow.sales.list_by_period(start, end)
            return [SaleDTO.from_entity(s) for s in sales]

    def remove(self, sale_id: int) -> None:
        with self._uow:
            if self._uow.sales.get_by_id(sale_id, include_items=False) is None:
                raise NotFoundError(f"Sale #{sale_id} not found")
            self._uow.sales.remove(sale_id)
            self._uow.commit()

        logger.info("Removed sale #%s", sale_id)

    # --- Editing a recorded sale ----------------------------------------------

    def update_note(self, sale_id: int, note: str | None) -> SaleDTO:
        with self._uow:
            sale = self._get_or_raise(sale_id)
            sale.update_note(note or None)
            self._uow.sales.update(sale)
            self._uow.commit()

        logger.info("Updated note of sale #%s", sale_id)
        return SaleDTO.from_entity(sale)

    def change_item_quantity(self, sale_id: int, item_id: int, quantity: int) -> SaleDTO:
        """Set the quantity of one line; the line keeps its captured price."""
        with self._uow:
            sale = self._get_or_raise(sale_id)
            sale.change_item_quantity(self._find_item(sale, item_id), quantity)
            self._uow.sales.update(sale)
            self._uow.commit()

        logger.info(
            "Changed item #%s of sale #%s to %d, total now %s",
            item_id, sale_id, quantity, sale.total,
        )
        return SaleDTO.from_entity(sale)

    def remove_item(self, sale_id: int, item_id: int) -> SaleDTO:
        """Drop one line from a sale.

        A sale must keep at least one item with a positive total; to undo
        a sale completely, remove the sale itself.
        """
        with self._uow:
            sale = self._get_or_raise(sale_id)
            sale.remove_item(self._find_item(sale, item_id))
            if not sale.can_be_finalized():
                raise ValidationError(
                    f"Sale #{sale_id} must keep at least one item and a positive total"
                )
            self._uow.sales.update(sale)
            self._uow.commit()

        logger.info("Removed item #%s from sale #%s", item_id, sale_id)
        return SaleDTO.from_entity(sale)

    # --- Internal helpers -----------------------------------------------------

    def _get_or_raise(self, sale_id: int) -> Sale:
        sale = self._uow.sales.get_by_id(sale_id)
        if sale is None:
            raise NotFoundError(f"Sale #{sale_id} not found")
        return sale

    @staticmethod
    def _find_item(sale: Sale, item_id: int) -> SaleItem:
        for item in sale.items:
            if item.id == item_id:
                return item
        raise NotFoundError(f"Item #{item_id} not found in sale #{sale.id}")
