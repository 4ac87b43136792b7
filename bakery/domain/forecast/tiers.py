"""Confidence tier selection from the amount of order history a store has."""

from __future__ import annotations

from datetime import date
from enum import Enum

from sqlalchemy.orm import Session

from bakery.db.repository import get_earliest_order_date
from bakery.domain.forecast.params import ForecastParams


class ConfidenceTier(str, Enum):
    """Estimation strategy backing a suggestion."""

    STOCK = "stock"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


def select_tier(days_of_history: int, params: ForecastParams | None = None) -> ConfidenceTier:
    """Pick the estimation strategy.

    < 7 days   -> stock (cold start, sales history only)
    7..89 days -> intermediate
    >= 90 days -> advanced
    """
    p = params or ForecastParams()

    if days_of_history < p.intermediate_min_days:
        return ConfidenceTier.STOCK
    if days_of_history < p.advanced_min_days:
        return ConfidenceTier.INTERMEDIATE
    return ConfidenceTier.ADVANCED


def days_between(earliest: date | None, as_of: date) -> int:
    """Whole days from the first order to as_of; 0 without history."""
    if earliest is None:
        return 0
    return max(0, (as_of - earliest).days)


def days_of_history(db: Session, store_id: int, as_of: date) -> int:
    """Days of order history for a store (computed once per run)."""
    return days_between(get_earliest_order_date(db, store_id), as_of)
