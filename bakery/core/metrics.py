"""Prometheus metrics for monitoring."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# HTTP Request metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests in progress",
    ["method", "endpoint"],
)

# Forecast engine metrics
forecast_suggestions_total = Counter(
    "forecast_suggestions_total",
    "Product suggestions produced",
    ["tier"],  # stock, intermediate, advanced
)

forecast_products_skipped_total = Counter(
    "forecast_products_skipped_total",
    "Products omitted because no history backs a suggestion",
)

forecast_run_duration_seconds = Histogram(
    "forecast_run_duration_seconds",
    "Duration of one store suggestion run",
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

recommendations_total = Counter(
    "recommendations_total",
    "Class A production recommendations produced",
)

# Daily insight metrics
insight_requests_total = Counter(
    "insight_requests_total",
    "Daily insight lookups",
    ["source"],  # cache, ai, fallback, race
)

# Application info
app_uptime_seconds = Gauge(
    "app_uptime_seconds",
    "Application uptime in seconds",
)

app_info = Gauge(
    "app_info",
    "Application information",
    ["version"],
)
