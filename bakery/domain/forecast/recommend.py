"""Simple production formula from a flat daily forecast."""

from __future__ import annotations

from bakery.domain.forecast.history import round_half_up


def calculate_production_suggestion(
    forecast: float,
    stock: float,
    orders: float,
    forecast_share: float = 1.0,
) -> int:
    """Production for today from forecast, on-hand stock and encomendas.

    If orders > forecast:
        production = orders + forecast - stock
    Else:
        production = forecast - stock + orders

    forecast_share scales the forecast used for walk-in (vitrine) production;
    the orders comparison always uses the full forecast.

    Args:
        forecast: Average daily forecast (previsão)
        stock: Current stock on hand
        orders: Customer orders (encomendas) for the day
        forecast_share: Portion of the forecast produced for the display

    Returns:
        Suggested production, never negative

    """
    vitrine = forecast * forecast_share

    if orders > forecast:
        # Orders exceed the usual day: cover them first
        production = orders + vitrine - stock
    else:
        production = vitrine - stock + orders

    return max(0, round_half_up(production))
