"""Healthcheck endpoint with database check."""

from __future__ import annotations

import time
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bakery.web.deps import DBSession

router = APIRouter()


@router.get("/healthz")
def healthz(db: DBSession):
    """Health check.

    Returns:
        200 OK when the database answers
        503 Service Unavailable otherwise
    """
    checks = {}
    healthy = True

    try:
        start = time.time()
        db.execute(text("SELECT 1"))
        checks["database"] = {"status": "ok", "latency_ms": round((time.time() - start) * 1000, 2)}
    except SQLAlchemyError as e:
        checks["database"] = {"status": "error", "error": str(e)}
        healthy = False

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": checks,
        },
    )
