"""FastAPI middleware."""

from __future__ import annotations

from bakery.web.middleware.prometheus import PrometheusMiddleware, RequestIdMiddleware

__all__ = ["PrometheusMiddleware", "RequestIdMiddleware"]
