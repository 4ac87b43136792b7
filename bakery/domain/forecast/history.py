"""Sales and order history aggregation for production forecasting."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, timedelta

from sqlalchemy.orm import Session

from bakery.db.repository import (
    SalesTotals,
    get_order_history_average,
    get_order_history_by_weekday,
    get_sales_history_total,
)


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (not banker's rounding)."""
    return math.floor(value + 0.5)


def average_daily_sales(totals: SalesTotals, days_per_month: int, *, by_rows: bool = False) -> float:
    """Average daily units from monthly sales totals.

    Args:
        totals: Aggregated sales history
        days_per_month: Days assumed per month (30)
        by_rows: Divide by row count instead of distinct month labels

    Returns:
        Units per day, 0.0 when there is no history

    """
    months = totals.record_count if by_rows else totals.months_covered
    if not totals.total_units or months <= 0 or days_per_month <= 0:
        return 0.0

    return totals.total_units / (months * days_per_month)


def day_of_week_factor(per_weekday: dict[int, float], weekday: int) -> float:
    """Ratio of one weekday's average to the mean of all observed weekdays.

    Returns 1.0 when there is no weekday data, when the weekday was never
    observed, or when the overall mean is zero.
    """
    if not per_weekday:
        return 1.0

    overall = sum(per_weekday.values()) / len(per_weekday)
    if weekday not in per_weekday or overall <= 0:
        return 1.0

    # A zero average for the weekday counts as "no signal"
    return (per_weekday[weekday] or overall) / overall


@dataclass(frozen=True)
class OrderWindowStats:
    """Order history of one product×store over a trailing window."""

    avg_quantity: float = 0.0
    record_count: int = 0
    per_weekday: dict[int, float] = field(default_factory=dict)

    def day_factor(self, weekday: int) -> float:
        return day_of_week_factor(self.per_weekday, weekday)


def sales_totals_for(db: Session, product_id: int, as_of: date, years_back: int) -> SalesTotals:
    """Sales history from (as_of.year - years_back) through as_of.year."""
    return get_sales_history_total(db, product_id, as_of.year - years_back, as_of.year)


def order_window_for(
    db: Session, product_id: int, store_id: int, as_of: date, window_days: int
) -> OrderWindowStats:
    """Average, count and weekday profile over the window_days up to as_of.

    Rows dated after as_of are ignored.
    """
    since = as_of - timedelta(days=window_days)

    avg = get_order_history_average(db, product_id, store_id, since, as_of)
    per_weekday = get_order_history_by_weekday(db, product_id, store_id, since, as_of)

    return OrderWindowStats(
        avg_quantity=avg.avg_quantity,
        record_count=avg.record_count,
        per_weekday=per_weekday,
    )
