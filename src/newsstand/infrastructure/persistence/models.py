"""SQLAlchemy table mappings.

These rows are persistence shapes only; the repositories translate them
to and from the domain dataclasses. Sale items reference their product
by id with ON DELETE RESTRICT, so a sold product can never be deleted.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class ProductRow(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(String(500), nullable=False, default="")
    price = Column(Numeric(18, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="BRL")
    stock_quantity = Column(Integer, nullable=False, default=0)
    barcode = Column(String(50), index=True)
    created_at = Column(DateTime, nullable=False)
    active = Column(Boolean, nullable=False, default=True)


class SaleRow(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sold_at = Column(DateTime, nullable=False, index=True)
    total = Column(Numeric(18, 2), nullable=False)
    note = Column(String(500))

    items = relationship(
        "SaleItemRow",
        cascade="all, delete-orphan",
        order_by="SaleItemRow.id",
        passive_deletes=True,
    )


class SaleItemRow(Base):
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sale_id = Column(
        Integer,
        ForeignKey("sales.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    product_name = Column(String(200), nullable=False)
    unit_price = Column(Numeric(18, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="BRL")
    quantity = Column(Integer, nullable=False)
