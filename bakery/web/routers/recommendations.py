"""Class A production recommendation endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from bakery.services.recommendations import get_product_recommendations
from bakery.web.deps import DBSession
from bakery.web.schemas import (
    ProductRecommendationDTO,
    RecommendationRequest,
    RecommendationResponse,
)

router = APIRouter(prefix="/api/v1/recommendations", tags=["recommendations"])


def _response(recommendations) -> RecommendationResponse:
    return RecommendationResponse(
        recommendations=[ProductRecommendationDTO.model_validate(r) for r in recommendations]
    )


@router.post("", response_model=RecommendationResponse)
def post_recommendations(body: RecommendationRequest, db: DBSession):
    """Recommendations for the stock/encomendas entered per product."""
    order_items = {item.product_id: {"stock": item.stock, "orders": item.orders} for item in body.items}
    return _response(get_product_recommendations(db, order_items))


@router.get("", response_model=RecommendationResponse)
def get_recommendations(db: DBSession):
    """Recommendations from forecasts alone (no stock, no encomendas)."""
    return _response(get_product_recommendations(db))
