"""Product suggestion service facade."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from datetime import date

from sqlalchemy.orm import Session

from bakery.core.config import local_today
from bakery.core.metrics import (
    forecast_products_skipped_total,
    forecast_run_duration_seconds,
    forecast_suggestions_total,
)
from bakery.db.repository import get_products
from bakery.domain.forecast.calculators import (
    ForecastContext,
    ProductSuggestion,
    calculator_for,
)
from bakery.domain.forecast.params import ForecastParams
from bakery.domain.forecast.reconcile import reconcile_with_stock
from bakery.domain.forecast.tiers import days_of_history, select_tier

logger = logging.getLogger(__name__)


def calculate_product_suggestions(
    db: Session,
    store_id: int,
    current_stock: Mapping[int, int] | None = None,
    *,
    as_of: date | None = None,
    params: ForecastParams | None = None,
) -> list[ProductSuggestion]:
    """Suggest how much of each product a store should order today.

    Args:
        db: Database session
        store_id: Store ID
        current_stock: Stock on hand per product ID (missing = 0)
        as_of: Reference date (default: today in the application timezone)
        params: Heuristic constants (default: from settings)

    Returns:
        One suggestion per orderable product; products without any history
        in the stock tier are omitted, never reported as zero.

    """
    as_of = as_of or local_today()
    params = params or ForecastParams.from_settings()
    current_stock = current_stock or {}

    started = time.perf_counter()

    days = days_of_history(db, store_id, as_of)
    tier = select_tier(days, params)
    ctx = ForecastContext(store_id=store_id, as_of=as_of, days_of_history=days)
    calculator = calculator_for(tier, db, params)

    logger.info(
        "forecast_run_started",
        extra={"store_id": store_id, "as_of": as_of.isoformat(), "days": days, "tier": tier.value},
    )

    suggestions: list[ProductSuggestion] = []

    for product in get_products(db, orderable_only=True):
        suggestion = calculator.suggest(product, ctx)

        if suggestion is None:
            logger.debug("No sales history for product %s, skipping", product.id)
            forecast_products_skipped_total.inc()
            continue

        suggestion.suggestion = reconcile_with_stock(
            suggestion.suggestion, current_stock.get(product.id, 0)
        )
        suggestions.append(suggestion)

    forecast_suggestions_total.labels(tier=tier.value).inc(len(suggestions))
    forecast_run_duration_seconds.observe(time.perf_counter() - started)

    logger.info(
        "forecast_run_finished",
        extra={"store_id": store_id, "suggestions": len(suggestions), "tier": tier.value},
    )

    return suggestions
