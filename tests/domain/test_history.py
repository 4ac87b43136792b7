"""Tests for sales/order history aggregation."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from bakery.db.repository import (
    SalesTotals,
    get_earliest_order_date,
    get_order_history_average,
    get_order_history_by_weekday,
    get_product_forecast,
    get_products,
    get_products_with_forecasts,
    get_sales_history_total,
    insert_daily_order_history,
    sunday_based_weekday,
)
from bakery.domain.forecast.history import (
    OrderWindowStats,
    average_daily_sales,
    day_of_week_factor,
    order_window_for,
    round_half_up,
    sales_totals_for,
)


def test_round_half_up_differs_from_bankers_rounding():
    """.5 always rounds up, unlike round()."""
    assert round_half_up(34.5) == 35
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert round_half_up(0.0) == 0


def test_sunday_based_weekday():
    """0 = Sunday ... 6 = Saturday."""
    assert sunday_based_weekday(date(2026, 10, 18)) == 0  # Sunday
    assert sunday_based_weekday(date(2026, 10, 19)) == 1  # Monday
    assert sunday_based_weekday(date(2026, 10, 24)) == 6  # Saturday


def test_average_daily_sales_uses_distinct_months():
    """total / (months * 30)."""
    totals = SalesTotals(total_units=1800, months_covered=2, record_count=3)

    assert average_daily_sales(totals, 30) == 30.0
    assert average_daily_sales(totals, 30, by_rows=True) == 20.0


def test_average_daily_sales_without_history_is_zero():
    """No months -> 0.0 instead of ZeroDivisionError."""
    assert average_daily_sales(SalesTotals(), 30) == 0.0
    assert average_daily_sales(SalesTotals(total_units=100, months_covered=0), 30) == 0.0
    assert average_daily_sales(SalesTotals(total_units=0, months_covered=3), 30) == 0.0


def test_day_of_week_factor_ratio_to_mean():
    """Today's weekday average over the mean of observed weekdays."""
    per_weekday = {1: 32.0, 3: 48.0}  # mean 40

    assert day_of_week_factor(per_weekday, 3) == pytest.approx(1.2)
    assert day_of_week_factor(per_weekday, 1) == pytest.approx(0.8)


@pytest.mark.parametrize(
    "per_weekday,weekday",
    [
        ({}, 3),  # no data
        ({0: 0.0, 1: 0.0, 2: 0.0}, 1),  # all zero -> mean 0
        ({1: 10.0, 2: 20.0}, 5),  # weekday never observed
        ({1: 0.0, 2: 20.0}, 1),  # today's average is zero
    ],
)
def test_day_of_week_factor_neutral_cases(per_weekday, weekday):
    """Missing or degenerate weekday data gives factor 1.0."""
    assert day_of_week_factor(per_weekday, weekday) == 1.0


def test_order_window_stats_day_factor():
    stats = OrderWindowStats(avg_quantity=40.0, record_count=15, per_weekday={1: 32.0, 3: 48.0})
    assert stats.day_factor(3) == pytest.approx(1.2)


def test_sales_history_total_counts_distinct_month_labels(db, add_product, add_sales):
    """Same month label in two years counts once in months_covered."""
    bolo = add_product("Bolo de Cenoura")
    add_sales(bolo, 2025, {"jan": 600, "fev": 300})
    add_sales(bolo, 2026, {"jan": 900})
    add_sales(bolo, 2024, {"jan": 5000})  # before the lower bound

    totals = get_sales_history_total(db, bolo.id, 2025)

    assert totals == SalesTotals(total_units=1800, months_covered=2, record_count=3)


def test_sales_history_total_no_rows(db, add_product):
    bolo = add_product("Bolo de Milho")
    assert get_sales_history_total(db, bolo.id, 2025) == SalesTotals()


def test_sales_totals_for_uses_previous_year(db, add_product, add_sales):
    """Lower bound is as_of.year - years_back."""
    torta = add_product("Torta Morango")
    add_sales(torta, 2025, {"mar": 300})
    add_sales(torta, 2024, {"mar": 300})

    totals = sales_totals_for(db, torta.id, date(2026, 5, 1), years_back=1)

    assert totals.total_units == 300


def test_earliest_order_date(db, store, add_product, add_orders):
    bolo = add_product("Bolo")
    assert get_earliest_order_date(db, store.id) is None

    add_orders(bolo, store, date(2026, 9, 1), 10)
    add_orders(bolo, store, date(2026, 8, 15), 10)

    assert get_earliest_order_date(db, store.id) == date(2026, 8, 15)


def test_order_history_average_respects_since(db, store, add_product, add_orders):
    bolo = add_product("Bolo")
    add_orders(bolo, store, date(2026, 10, 1), 10, times=2)
    add_orders(bolo, store, date(2026, 10, 10), 40, times=2)
    add_orders(bolo, store, date(2026, 8, 1), 1000)  # outside

    avg = get_order_history_average(db, bolo.id, store.id, date(2026, 9, 14))

    assert avg.avg_quantity == 25.0
    assert avg.record_count == 4


def test_order_history_by_weekday(db, store, add_product, add_orders):
    bolo = add_product("Bolo")
    add_orders(bolo, store, date(2026, 10, 5), 30)  # Monday
    add_orders(bolo, store, date(2026, 10, 12), 50)  # Monday
    add_orders(bolo, store, date(2026, 10, 10), 80)  # Saturday

    per_weekday = get_order_history_by_weekday(db, bolo.id, store.id, date(2026, 9, 1))

    assert per_weekday == {1: 40.0, 6: 80.0}


def test_order_window_for_trailing_window(db, store, add_product, add_orders):
    """Window starts window_days before as_of."""
    as_of = date(2026, 10, 14)
    bolo = add_product("Bolo")
    add_orders(bolo, store, as_of - timedelta(days=30), 20)
    add_orders(bolo, store, as_of - timedelta(days=31), 500)

    window = order_window_for(db, bolo.id, store.id, as_of, 30)

    assert window.record_count == 1
    assert window.avg_quantity == 20.0


def test_insert_daily_order_history_fills_weekday(db, store, add_product):
    bolo = add_product("Bolo")

    added = insert_daily_order_history(
        db,
        [
            {"product_id": bolo.id, "store_id": store.id, "order_date": date(2026, 10, 18), "quantity_ordered": 12},
            {
                "product_id": bolo.id,
                "store_id": store.id,
                "order_date": date(2026, 10, 19),
                "quantity_ordered": 8,
                "stock_at_time": 3,
            },
        ],
    )
    db.commit()

    assert added == 2
    assert get_order_history_by_weekday(db, bolo.id, store.id, date(2026, 10, 1)) == {0: 12.0, 1: 8.0}


def test_get_products_filters(db, add_product):
    bolo = add_product("Bolo", class_a=True)
    massa = add_product("Massa Base", orderable=False)

    assert [p.id for p in get_products(db)] == [bolo.id, massa.id]
    assert [p.id for p in get_products(db, is_class_a=True)] == [bolo.id]
    assert [p.id for p in get_products(db, orderable_only=True)] == [bolo.id]


def test_product_forecasts(db, add_product):
    bolo = add_product("Bolo", class_a=True, forecast=42.5)
    torta = add_product("Torta", class_a=True)
    add_product("Pão", forecast=10)

    assert get_product_forecast(db, bolo.id) == 42.5
    assert get_product_forecast(db, torta.id) is None
    assert [(r.product_name, r.forecast) for r in get_products_with_forecasts(db)] == [
        ("Bolo", 42.5),
        ("Torta", None),
    ]


def test_order_window_ignores_rows_after_as_of(db, store, add_product, add_orders):
    """Orders dated after as_of never enter the window or the weekday profile."""
    as_of = date(2026, 10, 14)
    bolo = add_product("Bolo")
    add_orders(bolo, store, date(2026, 10, 5), 40, times=2)  # Monday
    add_orders(bolo, store, date(2026, 10, 15), 400, times=2)  # Thursday, after as_of

    window = order_window_for(db, bolo.id, store.id, as_of, 30)

    assert window.avg_quantity == 40.0
    assert window.record_count == 2
    assert window.per_weekday == {1: 40.0}


def test_sales_totals_stop_at_as_of_year(db, add_product, add_sales):
    torta = add_product("Torta Morango")
    add_sales(torta, 2025, {"mar": 300})
    add_sales(torta, 2027, {"mar": 9000})

    totals = sales_totals_for(db, torta.id, date(2026, 5, 1), years_back=1)

    assert totals == SalesTotals(total_units=300, months_covered=1, record_count=1)
