"""Production suggestion API endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from bakery.core.config import local_today
from bakery.services.suggestions import calculate_product_suggestions
from bakery.web.deps import AppSettings, DBSession
from bakery.web.schemas import PredictionRequest, PredictionResponse, ProductSuggestionDTO

router = APIRouter(prefix="/api/v1/predictions", tags=["predictions"])


@router.post("", response_model=PredictionResponse)
def post_predictions(body: PredictionRequest, db: DBSession, settings: AppSettings):
    """Suggested quantity per product, net of the stock sent in the body.

    Products without enough history are left out of the list.
    """
    store_id = body.store_id or settings.default_store_id

    as_of = body.as_of or local_today(settings)

    suggestions = calculate_product_suggestions(db, store_id, body.stocks, as_of=as_of)

    return PredictionResponse(
        store_id=store_id,
        suggestions=[ProductSuggestionDTO(**s.to_dict()) for s in suggestions],
    )
