"""Frozen snapshot of the forecast heuristics."""

from __future__ import annotations

from dataclasses import dataclass

from bakery.core.config import Settings, get_settings


@dataclass(frozen=True)
class ForecastParams:
    """Business constants used by the tier selector and calculators."""

    intermediate_min_days: int = 7
    advanced_min_days: int = 90

    min_suggestion: int = 5
    sales_years_back: int = 1
    days_per_month: int = 30

    stock_safety_margin: float = 1.15

    intermediate_window_days: int = 30
    intermediate_min_records: int = 10
    intermediate_order_weight: float = 0.6
    intermediate_sales_weight: float = 0.4
    intermediate_fallback: float = 15

    advanced_window_days: int = 60
    advanced_sales_weight: float = 0.3
    advanced_order_weight: float = 0.7
    advanced_fallback: float = 20
    quinzena_cutoff_day: int = 15
    quinzena_factor: float = 0.9

    recommendation_forecast_share: float = 1.0

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> ForecastParams:
        s = settings or get_settings()
        return cls(
            intermediate_min_days=s.forecast_intermediate_min_days,
            advanced_min_days=s.forecast_advanced_min_days,
            min_suggestion=s.forecast_min_suggestion,
            sales_years_back=s.forecast_sales_years_back,
            days_per_month=s.forecast_days_per_month,
            stock_safety_margin=s.forecast_stock_safety_margin,
            intermediate_window_days=s.forecast_intermediate_window_days,
            intermediate_min_records=s.forecast_intermediate_min_records,
            intermediate_order_weight=s.forecast_intermediate_order_weight,
            intermediate_sales_weight=s.forecast_intermediate_sales_weight,
            intermediate_fallback=s.forecast_intermediate_fallback,
            advanced_window_days=s.forecast_advanced_window_days,
            advanced_sales_weight=s.forecast_advanced_sales_weight,
            advanced_order_weight=s.forecast_advanced_order_weight,
            advanced_fallback=s.forecast_advanced_fallback,
            quinzena_cutoff_day=s.forecast_quinzena_cutoff_day,
            quinzena_factor=s.forecast_quinzena_factor,
            recommendation_forecast_share=s.recommendation_forecast_share,
        )
