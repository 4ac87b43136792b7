"""Class A production recommendations from flat forecasts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypedDict

from sqlalchemy.orm import Session

from bakery.core.metrics import recommendations_total
from bakery.db.repository import get_products_with_forecasts
from bakery.domain.forecast.params import ForecastParams
from bakery.domain.forecast.recommend import calculate_production_suggestion


class OrderItemInput(TypedDict):
    """Stock and encomendas entered for one product."""

    stock: int
    orders: int


@dataclass
class ProductRecommendation:
    """Production recommendation for one Class A product."""

    product_id: int
    product_name: str
    forecast: float
    stock: int
    orders: int
    suggested_production: int


def get_product_recommendations(
    db: Session,
    order_items: Mapping[int, OrderItemInput] | None = None,
    *,
    params: ForecastParams | None = None,
) -> list[ProductRecommendation]:
    """Recommend production for every Class A product.

    Products without an imported forecast use forecast 0; products missing
    from order_items use stock 0 and orders 0.
    """
    params = params or ForecastParams.from_settings()
    order_items = order_items or {}

    recommendations: list[ProductRecommendation] = []

    for row in get_products_with_forecasts(db):
        forecast = row.forecast or 0
        item = order_items.get(row.product_id, {"stock": 0, "orders": 0})

        recommendations.append(
            ProductRecommendation(
                product_id=row.product_id,
                product_name=row.product_name,
                forecast=forecast,
                stock=item["stock"],
                orders=item["orders"],
                suggested_production=calculate_production_suggestion(
                    forecast,
                    item["stock"],
                    item["orders"],
                    forecast_share=params.recommendation_forecast_share,
                ),
            )
        )

    recommendations_total.inc(len(recommendations))

    return recommendations
