"""Per-product suggestion calculators, one strategy per confidence tier.

Each tier has a pure quantity function (unit-testable without a database)
and a calculator class that loads the history it needs and wraps the
result into a ProductSuggestion.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from datetime import date
from typing import ClassVar, Protocol

from sqlalchemy.orm import Session

from bakery.db.repository import sunday_based_weekday
from bakery.domain.forecast.history import (
    OrderWindowStats,
    average_daily_sales,
    order_window_for,
    round_half_up,
    sales_totals_for,
)
from bakery.domain.forecast.params import ForecastParams
from bakery.domain.forecast.tiers import ConfidenceTier

STOCK_LABEL = "Histórico vendas"
ADVANCED_LABEL = "Avançado"

_WEEKDAY_NAMES = ["Domingo", "Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sábado"]


class ProductLike(Protocol):
    id: int
    name: str


@dataclass
class ProductSuggestion:
    """Suggested production/order quantity for one product."""

    product_id: int
    product_name: str
    suggestion: int
    confidence: ConfidenceTier
    confidence_label: str
    days_of_history: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["confidence"] = self.confidence.value
        return data


@dataclass(frozen=True)
class ForecastContext:
    """Per-run inputs shared by every product of one store."""

    store_id: int
    as_of: date
    days_of_history: int

    @property
    def weekday(self) -> int:
        return sunday_based_weekday(self.as_of)


def get_day_of_week_name(weekday: int) -> str:
    """pt-BR weekday name for 0 = Sunday ... 6 = Saturday."""
    if 0 <= weekday < len(_WEEKDAY_NAMES):
        return _WEEKDAY_NAMES[weekday]
    return "Desconhecido"


# =============================================================================
# Pure quantity functions
# =============================================================================


def stock_tier_quantity(avg_daily_sales: float, params: ForecastParams) -> int | None:
    """Cold-start quantity from sales history; None when there is no history."""
    if avg_daily_sales <= 0:
        return None

    quantity = round_half_up(avg_daily_sales * params.stock_safety_margin)
    return max(quantity, params.min_suggestion)


def intermediate_tier_quantity(
    window: OrderWindowStats,
    avg_daily_sales: float,
    weekday: int,
    params: ForecastParams,
) -> int:
    """Order-history quantity, blended with sales when orders are sparse."""
    base = window.avg_quantity

    if window.record_count < params.intermediate_min_records and avg_daily_sales > 0:
        if window.record_count > 0:
            base = (
                window.avg_quantity * params.intermediate_order_weight
                + avg_daily_sales * params.intermediate_sales_weight
            )
        else:
            base = avg_daily_sales

    if not base:
        base = params.intermediate_fallback

    quantity = round_half_up(base * window.day_factor(weekday))
    return max(quantity, params.min_suggestion)


def intermediate_label(record_count: int, days_of_history: int, params: ForecastParams) -> str:
    if record_count >= params.intermediate_min_records:
        return f"{days_of_history} dias"
    return f"Vendas + {days_of_history}d"


def quinzena_factor(day_of_month: int, params: ForecastParams) -> float:
    """Second half of the month (after payday) sells less."""
    return params.quinzena_factor if day_of_month > params.quinzena_cutoff_day else 1.0


def advanced_tier_quantity(
    avg_daily_sales: float,
    avg_orders: float,
    day_factor: float,
    day_of_month: int,
    params: ForecastParams,
) -> int:
    """Weighted sales/orders base adjusted by weekday and half-month."""
    if avg_daily_sales > 0 and avg_orders > 0:
        base = (
            avg_daily_sales * params.advanced_sales_weight
            + avg_orders * params.advanced_order_weight
        )
    elif avg_orders > 0:
        base = avg_orders
    elif avg_daily_sales > 0:
        base = avg_daily_sales
    else:
        base = params.advanced_fallback

    quantity = round_half_up(base * day_factor * quinzena_factor(day_of_month, params))
    return max(quantity, params.min_suggestion)


# =============================================================================
# Strategies
# =============================================================================


class SuggestionCalculator(ABC):
    """Loads history for one product and produces its raw suggestion."""

    tier: ClassVar[ConfidenceTier]

    def __init__(self, db: Session, params: ForecastParams):
        self.db = db
        self.params = params

    def _avg_daily_sales(self, product_id: int, as_of: date, *, by_rows: bool = False) -> float:
        totals = sales_totals_for(self.db, product_id, as_of, self.params.sales_years_back)
        return average_daily_sales(totals, self.params.days_per_month, by_rows=by_rows)

    def _build(self, product: ProductLike, ctx: ForecastContext, quantity: int, label: str):
        return ProductSuggestion(
            product_id=product.id,
            product_name=product.name,
            suggestion=quantity,
            confidence=self.tier,
            confidence_label=label,
            days_of_history=ctx.days_of_history,
        )

    @abstractmethod
    def suggest(self, product: ProductLike, ctx: ForecastContext) -> ProductSuggestion | None:
        """Raw demand suggestion before stock reconciliation."""


class StockCalculator(SuggestionCalculator):
    """Initial mode: sales history only. May return None (no suggestion)."""

    tier = ConfidenceTier.STOCK

    def suggest(self, product: ProductLike, ctx: ForecastContext) -> ProductSuggestion | None:
        quantity = stock_tier_quantity(self._avg_daily_sales(product.id, ctx.as_of), self.params)
        if quantity is None:
            return None
        return self._build(product, ctx, quantity, STOCK_LABEL)


class IntermediateCalculator(SuggestionCalculator):
    """30-day order history, weekday-adjusted, topped up by sales when sparse."""

    tier = ConfidenceTier.INTERMEDIATE

    def suggest(self, product: ProductLike, ctx: ForecastContext) -> ProductSuggestion:
        window = order_window_for(
            self.db, product.id, ctx.store_id, ctx.as_of, self.params.intermediate_window_days
        )

        avg_daily_sales = 0.0
        if window.record_count < self.params.intermediate_min_records:
            avg_daily_sales = self._avg_daily_sales(product.id, ctx.as_of)

        quantity = intermediate_tier_quantity(window, avg_daily_sales, ctx.weekday, self.params)
        label = intermediate_label(window.record_count, ctx.days_of_history, self.params)
        return self._build(product, ctx, quantity, label)


class AdvancedCalculator(SuggestionCalculator):
    """60-day orders + sales history + weekday and half-month adjustment."""

    tier = ConfidenceTier.ADVANCED

    def suggest(self, product: ProductLike, ctx: ForecastContext) -> ProductSuggestion:
        # Advanced mode averages over every monthly row, not distinct labels
        avg_daily_sales = self._avg_daily_sales(product.id, ctx.as_of, by_rows=True)
        window = order_window_for(
            self.db, product.id, ctx.store_id, ctx.as_of, self.params.advanced_window_days
        )

        quantity = advanced_tier_quantity(
            avg_daily_sales,
            window.avg_quantity,
            window.day_factor(ctx.weekday),
            ctx.as_of.day,
            self.params,
        )
        return self._build(product, ctx, quantity, ADVANCED_LABEL)


CALCULATORS: dict[ConfidenceTier, type[SuggestionCalculator]] = {
    ConfidenceTier.STOCK: StockCalculator,
    ConfidenceTier.INTERMEDIATE: IntermediateCalculator,
    ConfidenceTier.ADVANCED: AdvancedCalculator,
}


def calculator_for(tier: ConfidenceTier, db: Session, params: ForecastParams) -> SuggestionCalculator:
    return CALCULATORS[tier](db, params)
