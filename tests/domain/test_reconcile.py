"""Tests for stock reconciliation and the simple production formula."""

from __future__ import annotations

import pytest

from bakery.domain.forecast.recommend import calculate_production_suggestion
from bakery.domain.forecast.reconcile import reconcile_with_stock


@pytest.mark.parametrize(
    "raw,stock,expected",
    [
        (35, 0, 35),
        (35, 10, 25),
        (35, 35, 0),
        (35, 50, 0),
        (35, -3, 35),  # negative stock is ignored
        (35, None, 35),
    ],
)
def test_reconcile_with_stock(raw, stock, expected):
    assert reconcile_with_stock(raw, stock) == expected


def test_production_orders_below_forecast():
    """forecast - stock + orders."""
    assert calculate_production_suggestion(100, 20, 50) == 130


def test_production_orders_above_forecast():
    """orders + forecast - stock."""
    assert calculate_production_suggestion(100, 20, 150) == 230


def test_production_never_negative():
    assert calculate_production_suggestion(10, 50, 0) == 0
    assert calculate_production_suggestion(0, 0, 0) == 0


def test_production_rounds_half_up():
    assert calculate_production_suggestion(12.5, 0, 0) == 13


def test_production_forecast_share():
    """Only the display share of the forecast is produced."""
    assert calculate_production_suggestion(100, 0, 0, forecast_share=0.8) == 80
    # Orders are still compared against the full forecast
    assert calculate_production_suggestion(100, 10, 120, forecast_share=0.8) == 190
