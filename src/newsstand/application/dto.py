"""Plain data containers handed out by the application services.

DTOs carry data between the presentation and application layers without
exposing domain entities to the outside world. Money values are plain
Decimals here; formatting is left to the presentation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from newsstand.domain.model.product import Product
from newsstand.domain.model.sale import Sale, SaleItem


@dataclass(frozen=True)
class SaleItemSpec:
    """Input: one line the cashier rang up (product id + quantity)."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class ProductDTO:
    id: int
    name: str
    description: str
    price: Decimal
    stock_quantity: int
    barcode: str | None
    created_at: datetime
    active: bool

    @staticmethod
    def from_entity(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,  # type: ignore[arg-type]
            name=product.name,
            description=product.description,
            price=product.price.amount,
            stock_quantity=product.stock_quantity,
            barcode=product.barcode,
            created_at=product.created_at,
            active=product.active,
        )


@dataclass(frozen=True)
class SaleItemDTO:
    id: int | None
    product_id: int
    product_name: str
    unit_price: Decimal
    quantity: int
    line_total: Decimal

    @staticmethod
    def from_entity(item: SaleItem) -> SaleItemDTO:
        return SaleItemDTO(
            id=item.id,
            product_id=item.product_id,
            product_name=item.product_name,
            unit_price=item.unit_price.amount,
            quantity=item.quantity.value,
            line_total=item.line_total.amount,
        )


@dataclass(frozen=True)
class SaleDTO:
    id: int
    sold_at: datetime
    total: Decimal
    note: str | None
    items: list[SaleItemDTO]

    @staticmethod
    def from_entity(sale: Sale) -> SaleDTO:
        return SaleDTO(
            id=sale.id,  # type: ignore[arg-type]
            sold_at=sale.sold_at,
            total=sale.total.amount,
            note=sale.note,
            items=[SaleItemDTO.from_entity(item) for item in sale.items],
        )


@dataclass(frozen=True)
class ProductSalesDTO:
    """Output: how much of one product was sold in a period."""

    product_name: str
    quantity_sold: int
    total_value: Decimal


@dataclass(frozen=True)
class DashboardDTO:
    products_in_stock: int
    low_stock_products: int
    sales_this_month: int
    sales_total_this_month: Decimal
    top_products: list[ProductSalesDTO]
