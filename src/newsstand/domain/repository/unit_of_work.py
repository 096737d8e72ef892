"""Abstract Unit of Work.

Groups the repository calls of one service operation into a single
transaction. Used as a context manager:

    with uow:
        uow.products.add(product)
        uow.commit()

Leaving the block without ``commit()`` discards every staged change.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from newsstand.domain.repository.product_repository import ProductRepository
from newsstand.domain.repository.sale_repository import SaleRepository


class UnitOfWork(ABC):

    products: ProductRepository
    sales: SaleRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> int:
        """Write all staged changes atomically; return the rows affected."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard all staged changes without writing them."""
