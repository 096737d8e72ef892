"""Abstract repository for the Sale aggregate.

Sales are always loaded and saved together with their items unless
``include_items=False`` is passed, in which case only the header
(id, date, total, note) is read.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal

from newsstand.domain.model.sale import Sale


class SaleRepository(ABC):

    @abstractmethod
    def get_by_id(self, sale_id: int, include_items: bool = True) -> Sale | None:
        """Return a sale by its ID, or None if not found."""

    @abstractmethod
    def list_all(self, include_items: bool = True) -> list[Sale]:
        """Return every sale, newest first."""

    @abstractmethod
    def list_by_period(
        self, start: datetime, end: datetime, include_items: bool = True
    ) -> list[Sale]:
        """Return sales with ``start <= sold_at <= end``, newest first."""

    @abstractmethod
    def list_by_month(
        self, month: int, year: int, include_items: bool = True
    ) -> list[Sale]:
        """Return the sales of one calendar month, newest first."""

    @abstractmethod
    def count_for_month(self, month: int, year: int) -> int:
        """Count the sales of one calendar month."""

    @abstractmethod
    def total_for_month(self, month: int, year: int) -> Decimal:
        """Sum the totals of one calendar month's sales."""

    @abstractmethod
    def add(self, sale: Sale) -> None:
        """Stage a new sale and its items."""

    @abstractmethod
    def update(self, sale: Sale) -> None:
        """Stage changes to a stored sale and its items."""

    @abstractmethod
    def remove(self, sale_id: int) -> None:
        """Stage deletion of a sale; its items go with it."""
