"""FastAPI application for the bakery forecasting backend."""

from __future__ import annotations

import time

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from bakery.core.config import get_settings
from bakery.core.logging import get_logger, get_request_id, set_request_id, setup_logging
from bakery.core.metrics import app_info, app_uptime_seconds
from bakery.web.middleware import PrometheusMiddleware, RequestIdMiddleware
from bakery.web.routers import healthcheck, insights, predictions, recommendations

VERSION = "0.1.0"

_settings = get_settings()
setup_logging(level=_settings.log_level, file_path=_settings.log_file_path)

log = get_logger("bakery.web")

APP_START_TIME = time.time()

app = FastAPI(
    title="Bakery Forecast API",
    version=VERSION,
    description="Production suggestions, Class A recommendations and daily insights",
)

app.add_middleware(PrometheusMiddleware)
app.add_middleware(RequestIdMiddleware)

app_info.labels(version=VERSION).set(1)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions (storage failures included) as 500."""
    request_id = get_request_id() or set_request_id()

    log.error(
        "unhandled_exception",
        extra={
            "path": str(request.url.path),
            "method": request.method,
            "error": str(exc),
            "error_type": type(exc).__name__,
        },
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_server_error",
            "request_id": request_id,
        },
    )


app.include_router(healthcheck.router, tags=["Monitoring"])
app.include_router(predictions.router)
app.include_router(recommendations.router)
app.include_router(insights.router)


@app.get("/health")
def health():
    """Basic health check for monitoring."""
    return {"status": "healthy"}


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint."""
    app_uptime_seconds.set(time.time() - APP_START_TIME)
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
