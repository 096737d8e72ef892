"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure
layer; tests use in-memory fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from newsstand.domain.model.product import Product

DEFAULT_LOW_STOCK_THRESHOLD = 5


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_barcode(self, barcode: str) -> Product | None:
        """Return the product carrying *barcode*, or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product, ordered by name."""

    @abstractmethod
    def list_active(self) -> list[Product]:
        """Return active products, ordered by name."""

    @abstractmethod
    def search_by_name(self, term: str) -> list[Product]:
        """Return products whose name or description contains *term*."""

    @abstractmethod
    def list_low_stock(
        self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    ) -> list[Product]:
        """Return active products with stock <= *threshold*, lowest first."""

    @abstractmethod
    def count_in_stock(self) -> int:
        """Count active products with positive stock."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Stage a new product. Its ``id`` is assigned by the store."""

    @abstractmethod
    def update(self, product: Product) -> None:
        """Stage changes to an existing product."""

    @abstractmethod
    def remove(self, product_id: int) -> None:
        """Stage deletion of a product.

        The store refuses to delete products referenced by sale items;
        that surfaces as ConflictError no later than commit.
        """
