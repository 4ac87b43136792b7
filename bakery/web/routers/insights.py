"""Daily insight API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from bakery.core.config import local_today
from bakery.services.insights import cleanup_old_insights, get_today_insight, list_insight_history
from bakery.web.deps import AppSettings, DBSession
from bakery.web.schemas import InsightAction, InsightHistoryResponse, InsightResponse, InsightRow

router = APIRouter(prefix="/api/v1/daily-insight", tags=["insights"])


@router.get("", response_model=InsightResponse)
async def get_daily_insight(db: DBSession, settings: AppSettings):
    """Insight of the day (cached after the first request)."""
    today = local_today(settings)
    insight = await get_today_insight(db, as_of=today, settings=settings)
    return InsightResponse(insight=insight, date=today)


@router.get("/history", response_model=InsightHistoryResponse)
def get_insight_history(db: DBSession, limit: int = Query(30, ge=1, le=365)):
    """Most recent cached insights."""
    rows = list_insight_history(db, limit=limit)
    return InsightHistoryResponse(insights=[InsightRow.model_validate(r) for r in rows])


@router.post("")
def post_insight_action(body: InsightAction, db: DBSession, settings: AppSettings):
    """Maintenance actions. Only "cleanup" is supported."""
    if body.action != "cleanup":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Ação não reconhecida")

    deleted = cleanup_old_insights(db, settings=settings)
    return {
        "success": True,
        "message": f"{deleted} insights antigos removidos",
        "deleted_count": deleted,
    }
