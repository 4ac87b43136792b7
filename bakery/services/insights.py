"""Daily insight service: one cached insight per day."""

from __future__ import annotations

import logging
from datetime import date, timedelta

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bakery.ai.insight import generate_insight_with_ai
from bakery.core.config import Settings, get_settings, local_today
from bakery.core.metrics import insight_requests_total
from bakery.db.models import DailyInsight
from bakery.domain.insight.analysis import analyze_sales_data
from bakery.domain.insight.prompt import build_insight_prompt

logger = logging.getLogger(__name__)


def _cached_insight(db: Session, day: date) -> DailyInsight | None:
    stmt = select(DailyInsight).where(DailyInsight.date == day).limit(1)
    return db.execute(stmt).scalar_one_or_none()


async def get_today_insight(
    db: Session,
    *,
    as_of: date | None = None,
    settings: Settings | None = None,
) -> str:
    """Return the insight for as_of, generating and caching it on first use.

    Two requests racing on the first lookup both generate text, but only one
    insert wins the unique date; the loser re-reads the winner's row.
    """
    as_of = as_of or local_today(settings)

    existing = _cached_insight(db, as_of)
    if existing:
        logger.info("Daily insight cache hit for %s", as_of)
        insight_requests_total.labels(source="cache").inc()
        return existing.insight

    logger.info("Generating daily insight for %s", as_of)

    analysis = analyze_sales_data(db, as_of)
    prompt = build_insight_prompt(analysis, as_of)
    insight = await generate_insight_with_ai(prompt, analysis, settings=settings)

    db.add(DailyInsight(date=as_of, insight=insight))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Daily insight for %s already cached by another request", as_of)
        insight_requests_total.labels(source="race").inc()

        winner = _cached_insight(db, as_of)
        if winner is None:
            raise
        return winner.insight

    return insight


def cleanup_old_insights(
    db: Session,
    *,
    as_of: date | None = None,
    settings: Settings | None = None,
) -> int:
    """Delete cached insights older than the retention window.

    Returns:
        Number of deleted rows

    """
    settings = settings or get_settings()
    as_of = as_of or local_today(settings)
    cutoff = as_of - timedelta(days=settings.insight_retention_days)

    result = db.execute(delete(DailyInsight).where(DailyInsight.date < cutoff))
    db.commit()

    deleted = result.rowcount or 0
    logger.info("Removed %d daily insights older than %s", deleted, cutoff)
    return deleted


def list_insight_history(db: Session, limit: int = 30) -> list[DailyInsight]:
    """Most recent cached insights, newest first."""
    stmt = select(DailyInsight).order_by(DailyInsight.date.desc()).limit(limit)
    return list(db.execute(stmt).scalars().all())
