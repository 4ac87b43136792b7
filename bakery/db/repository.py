"""Read/write queries against the history tables.

These are the storage operations the forecast engine consumes. Every function
takes the session first and only issues bounded, filtered aggregates so query
cost follows the lookback window rather than the full table size.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import TypedDict

from sqlalchemy import distinct, func, select
from sqlalchemy.orm import Session

from bakery.db.models import DailyOrderHistory, Product, ProductForecast, SalesHistory


@dataclass(frozen=True)
class SalesTotals:
    """Aggregated sales history for one product.

    months_covered counts distinct month labels; record_count counts rows,
    so two years of "jan" rows give months_covered=1 and record_count=2.
    """

    total_units: int = 0
    months_covered: int = 0
    record_count: int = 0


@dataclass(frozen=True)
class OrderAverage:
    """Average quantity ordered over a window and the rows behind it."""

    avg_quantity: float = 0.0
    record_count: int = 0


@dataclass(frozen=True)
class ProductForecastRow:
    """Class A product joined with its (optional) flat forecast."""

    product_id: int
    product_name: str
    forecast: float | None


class OrderHistoryEntry(TypedDict, total=False):
    """One submitted order line to append to daily order history."""

    product_id: int
    store_id: int
    order_date: date
    quantity_ordered: int
    stock_at_time: int
    day_of_week: int


def sunday_based_weekday(d: date) -> int:
    """Weekday with 0 = Sunday ... 6 = Saturday (the stored convention)."""
    return (d.weekday() + 1) % 7


def get_products(
    db: Session, *, is_class_a: bool | None = None, orderable_only: bool = False
) -> list[Product]:
    """List products ordered by id, optionally filtered by classification."""
    stmt = select(Product).order_by(Product.id)

    if is_class_a is not None:
        stmt = stmt.where(Product.is_class_a == is_class_a)

    if orderable_only:
        stmt = stmt.where(Product.is_orderable.is_(True))

    return list(db.execute(stmt).scalars().all())


def get_sales_history_total(
    db: Session, product_id: int, year_from: int, year_to: int | None = None
) -> SalesTotals:
    """Sum monthly sales for a product from year_from to year_to (both inclusive)."""
    stmt = select(
        func.sum(SalesHistory.total),
        func.count(distinct(SalesHistory.month)),
        func.count(SalesHistory.id),
    ).where(SalesHistory.product_id == product_id, SalesHistory.year >= year_from)

    if year_to is not None:
        stmt = stmt.where(SalesHistory.year <= year_to)

    total, months, rows = db.execute(stmt).one()

    return SalesTotals(
        total_units=int(total or 0),
        months_covered=int(months or 0),
        record_count=int(rows or 0),
    )


def get_earliest_order_date(db: Session, store_id: int) -> date | None:
    """First order date recorded for a store, or None when it has no history."""
    stmt = select(func.min(DailyOrderHistory.order_date)).where(
        DailyOrderHistory.store_id == store_id
    )
    return db.execute(stmt).scalar()


def get_order_history_average(
    db: Session, product_id: int, store_id: int, since: date, until: date | None = None
) -> OrderAverage:
    """Average quantity ordered for product×store between since and until (inclusive)."""
    stmt = select(
        func.avg(DailyOrderHistory.quantity_ordered),
        func.count(DailyOrderHistory.id),
    ).where(
        DailyOrderHistory.product_id == product_id,
        DailyOrderHistory.store_id == store_id,
        DailyOrderHistory.order_date >= since,
    )
    if until is not None:
        stmt = stmt.where(DailyOrderHistory.order_date <= until)

    avg_qty, count = db.execute(stmt).one()

    return OrderAverage(avg_quantity=float(avg_qty or 0.0), record_count=int(count or 0))


def get_order_history_by_weekday(
    db: Session, product_id: int, store_id: int, since: date, until: date | None = None
) -> dict[int, float]:
    """Average quantity ordered per weekday (0 = Sunday) between since and until."""
    stmt = (
        select(
            DailyOrderHistory.day_of_week,
            func.avg(DailyOrderHistory.quantity_ordered),
        )
        .where(
            DailyOrderHistory.product_id == product_id,
            DailyOrderHistory.store_id == store_id,
            DailyOrderHistory.order_date >= since,
        )
        .group_by(DailyOrderHistory.day_of_week)
    )
    if until is not None:
        stmt = stmt.where(DailyOrderHistory.order_date <= until)

    return {int(weekday): float(avg or 0.0) for weekday, avg in db.execute(stmt).all()}


def get_product_forecast(db: Session, product_id: int) -> float | None:
    """Flat average daily forecast for a product, or None if not imported."""
    stmt = (
        select(ProductForecast.average_daily_forecast)
        .where(ProductForecast.product_id == product_id)
        .limit(1)
    )
    return db.execute(stmt).scalar()


def get_products_with_forecasts(db: Session) -> list[ProductForecastRow]:
    """Class A products left-joined with their flat forecasts."""
    stmt = (
        select(Product.id, Product.name, ProductForecast.average_daily_forecast)
        .outerjoin(ProductForecast, ProductForecast.product_id == Product.id)
        .where(Product.is_class_a.is_(True))
        .order_by(Product.id)
    )

    return [
        ProductForecastRow(product_id=pid, product_name=name, forecast=forecast)
        for pid, name, forecast in db.execute(stmt).all()
    ]


def insert_daily_order_history(db: Session, records: Iterable[OrderHistoryEntry]) -> int:
    """Append order lines to daily order history.

    Used by the order-submission flow. The caller owns the transaction;
    rows are flushed, not committed.

    Returns:
        Number of rows added

    """
    rows = [
        DailyOrderHistory(
            product_id=rec["product_id"],
            store_id=rec["store_id"],
            order_date=rec["order_date"],
            quantity_ordered=rec["quantity_ordered"],
            stock_at_time=rec.get("stock_at_time", 0),
            day_of_week=rec.get("day_of_week", sunday_based_weekday(rec["order_date"])),
        )
        for rec in records
    ]

    db.add_all(rows)
    db.flush()

    return len(rows)
