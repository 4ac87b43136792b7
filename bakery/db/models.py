"""SQLAlchemy ORM models for the bakery order-management backend.

This module defines the tables read by the forecast engine:
- Reference data (Stores, Products)
- History tables (monthly Sales History, Daily Order History)
- Precomputed inputs (Product Forecasts) and cached outputs (Daily Insight)

Order/approval tables belong to the order workflow and are not mapped here.
"""

from __future__ import annotations

import datetime as dt

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


# =============================================================================
# Reference Tables
# =============================================================================


class Store(Base):
    """Bakery store (loja)."""

    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256))


class Product(Base):
    """Product sold by the bakery.

    Class A products are eligible for forecast-based production and customer
    orders (encomendas); the rest are display-only (vitrine) items.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256))
    is_class_a: Mapped[bool] = mapped_column(Boolean, default=False)
    is_orderable: Mapped[bool] = mapped_column(Boolean, default=True)


# =============================================================================
# History Tables
# =============================================================================


class SalesHistory(Base):
    """Monthly units sold per product.

    One row per product per calendar month; month is the pt-BR 3-letter label
    ("jan", "fev", ... "dez").
    """

    __tablename__ = "sales_history"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), index=True
    )
    year: Mapped[int] = mapped_column(Integer, index=True)
    month: Mapped[str] = mapped_column(String(3))
    total: Mapped[int] = mapped_column(Integer)

    __table_args__ = (
        UniqueConstraint("product_id", "year", "month", name="uq_sales_product_month"),
    )


class DailyOrderHistory(Base):
    """Quantity ordered per product per store each time an order is submitted.

    day_of_week follows 0 = Sunday ... 6 = Saturday.
    """

    __tablename__ = "daily_order_history"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), index=True
    )
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id", ondelete="CASCADE"), index=True)
    order_date: Mapped[dt.date] = mapped_column(Date, index=True)
    quantity_ordered: Mapped[int] = mapped_column(Integer)
    stock_at_time: Mapped[int] = mapped_column(Integer, default=0)
    day_of_week: Mapped[int] = mapped_column(Integer)

    __table_args__ = (
        Index("ix_order_history_product_store_date", "product_id", "store_id", "order_date"),
    )


# =============================================================================
# Forecast inputs / cached outputs
# =============================================================================


class ProductForecast(Base):
    """Precomputed average daily forecast per product (imported externally)."""

    __tablename__ = "product_forecasts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), unique=True
    )
    average_daily_forecast: Mapped[float] = mapped_column(Float)


class DailyInsight(Base):
    """One cached insight text per calendar day."""

    __tablename__ = "daily_insight"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    date: Mapped[dt.date] = mapped_column(Date, unique=True)
    insight: Mapped[str] = mapped_column(Text)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, server_default=func.now())
