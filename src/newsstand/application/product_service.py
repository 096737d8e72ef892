"""Application service: product catalogue and stock use cases.

Each operation runs inside one unit of work. Mutations follow the same
fetch-mutate-persist-commit shape and commit exactly once.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from newsstand.application.dto import ProductDTO
from newsstand.domain.exceptions import ConflictError, NotFoundError
from newsstand.domain.model.product import Product
from newsstand.domain.model.value_objects import Money
from newsstand.domain.repository.product_repository import (
    DEFAULT_LOW_STOCK_THRESHOLD,
)
from newsstand.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ProductService:

    def __init__(
        self,
        uow: UnitOfWork,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._uow = uow
        self._low_stock_threshold = low_stock_threshold

    # --- Queries --------------------------------------------------------------

    def get_by_id(self, product_id: int) -> ProductDTO | None:
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            return ProductDTO.from_entity(product) if product else None

    def list_all(self) -> list[ProductDTO]:
        with self._uow:
            return [ProductDTO.from_entity(p) for p in self._uow.products.list_all()]

    def list_active(self) -> list[ProductDTO]:
        with self._uow:
            return [ProductDTO.from_entity(p) for p in self._uow.products.list_active()]

    def search_by_name(self, term: str) -> list[ProductDTO]:
        """Find products by name or description. A blank term finds nothing."""
        if not term or not term.strip():
            return []
        with self._uow:
            products = self._uow.products.search_by_name(term.strip())
            return [ProductDTO.from_entity(p) for p in products]

    def list_low_stock(self, threshold: int | None = None) -> list[ProductDTO]:
        if threshold is None:
            threshold = self._low_stock_threshold
        with self._uow:
            products = self._uow.products.list_low_stock(threshold)
            return [ProductDTO.from_entity(p) for p in products]

    # --- Commands -------------------------------------------------------------

    def create(
        self,
        name: str,
        description: str | None,
        price: str | int | Decimal,
        quantity: int,
        barcode: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalogue.

        Raises ConflictError if another product already uses *barcode*.
        """
        with self._uow:
            if barcode and barcode.strip():
                existing = self._uow.products.get_by_barcode(barcode.strip())
                if existing is not None:
                    logger.warning("Rejected duplicate barcode %s", barcode)
                    raise ConflictError(
                        f"A product with barcode '{barcode}' already exists"
                    )

            product = Product.create(
                name, description, Money.of(price), quantity, barcode
            )
            self._uow.products.add(product)
            self._uow.commit()

        logger.info("Created product #%s '%s'", product.id, product.name)
        return ProductDTO.from_entity(product)

    def update(
        self,
        product_id: int,
        name: str,
        description: str | None,
        price: str | int | Decimal,
        barcode: str | None = None,
    ) -> ProductDTO:
        with self._uow:
            product = self._get_or_raise(product_id)

            if barcode and barcode.strip() and barcode.strip() != product.barcode:
                existing = self._uow.products.get_by_barcode(barcode.strip())
                if existing is not None and existing.id != product_id:
                    logger.warning("Rejected duplicate barcode %s", barcode)
                    raise ConflictError(
                        f"A product with barcode '{barcode}' already exists"
                    )

            product.update(name, description, Money.of(price), barcode)
            self._uow.products.update(product)
            self._uow.commit()

        logger.info("Updated product #%s", product_id)
        return ProductDTO.from_entity(product)

    def add_stock(self, product_id: int, quantity: int) -> None:
        with self._uow:
            product = self._get_or_raise(product_id)
            product.add_stock(quantity)
            self._uow.products.update(product)
            self._uow.commit()

        logger.info(
            "Added %s to stock of product #%s (now %s)",
            quantity, product_id, product.stock_quantity,
        )

    def activate(self, product_id: int) -> None:
        with self._uow:
            product = self._get_or_raise(product_id)
            product.activate()
            self._uow.products.update(product)
            self._uow.commit()

    def deactivate(self, product_id: int) -> None:
        with self._uow:
            product = self._get_or_raise(product_id)
            product.deactivate()
            self._uow.products.update(product)
            self._uow.commit()

    def remove(self, product_id: int) -> None:
        """Delete a product.

        Products that appear on any sale cannot be deleted; the store
        refuses and ConflictError is raised. Deactivate them instead.
        """
        with self._uow:
            self._get_or_raise(product_id)
            self._uow.products.remove(product_id)
            self._uow.commit()

        logger.info("Removed product #%s", product_id)

    # --- Internal helpers -----------------------------------------------------

    def _get_or_raise(self, product_id: int) -> Product:
        product = self._uow.products.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return product
