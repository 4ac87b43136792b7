"""Tests for the HTTP API."""

from __future__ import annotations

from datetime import date
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bakery.core.config import Settings, get_settings, local_today
from bakery.db.models import DailyInsight
from bakery.db.session import get_db
from bakery.web.main import app


@pytest.fixture
def client(engine):
    """Test client bound to the in-memory database."""

    def override_get_db():
        session = Session(engine)
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: Settings(insight_api_key=None)

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


# =============================================================================
# Predictions
# =============================================================================


def test_predictions_cold_start(client, store, add_product, add_sales):
    bolo = add_product("Bolo de Cenoura")
    add_product("Torta Nova")
    add_sales(bolo, 2026, {"jan": 900, "fev": 900})

    response = client.post(
        "/api/v1/predictions",
        json={"store_id": store.id, "stocks": {str(bolo.id): 10}, "as_of": "2026-10-18"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["store_id"] == store.id
    assert data["suggestions"] == [
        {
            "product_id": bolo.id,
            "product_name": "Bolo de Cenoura",
            "suggestion": 25,
            "confidence": "stock",
            "confidence_label": "Histórico vendas",
            "days_of_history": 0,
        }
    ]


def test_predictions_default_store(client, store, add_product, add_sales):
    bolo = add_product("Bolo")
    add_sales(bolo, 2026, {"jan": 900})

    response = client.post("/api/v1/predictions", json={"as_of": "2026-10-18"})

    assert response.status_code == 200
    assert response.json()["store_id"] == 1


def test_predictions_rejects_invalid_stock(client):
    response = client.post("/api/v1/predictions", json={"stocks": {"1": "muito"}})

    assert response.status_code == 422


# =============================================================================
# Recommendations
# =============================================================================


def test_post_recommendations(client, add_product):
    bolo = add_product("Bolo", class_a=True, forecast=100)

    response = client.post(
        "/api/v1/recommendations",
        json={"items": [{"product_id": bolo.id, "stock": 20, "orders": 150}]},
    )

    assert response.status_code == 200
    [rec] = response.json()["recommendations"]
    assert rec["suggested_production"] == 230
    assert rec["forecast"] == 100


def test_get_recommendations(client, add_product):
    add_product("Bolo", class_a=True, forecast=60)
    add_product("Pão", forecast=60)

    response = client.get("/api/v1/recommendations")

    assert response.status_code == 200
    assert [r["suggested_production"] for r in response.json()["recommendations"]] == [60]


def test_recommendations_reject_negative_stock(client):
    response = client.post(
        "/api/v1/recommendations",
        json={"items": [{"product_id": 1, "stock": -1, "orders": 0}]},
    )

    assert response.status_code == 422


# =============================================================================
# Daily insight
# =============================================================================


def test_daily_insight_is_cached(client, db):
    first = client.get("/api/v1/daily-insight")
    second = client.get("/api/v1/daily-insight")

    assert first.status_code == 200
    assert first.json()["date"] == local_today(Settings()).isoformat()
    assert first.json()["insight"] == second.json()["insight"]
    assert first.json()["insight"].startswith("Hoje é dia ")
    assert db.query(DailyInsight).count() == 1


def test_daily_insight_history(client, db):
    db.add(DailyInsight(date=date(2026, 10, 1), insight="Antigo"))
    db.add(DailyInsight(date=date(2026, 10, 2), insight="Recente"))
    db.commit()

    response = client.get("/api/v1/daily-insight/history?limit=1")

    assert response.status_code == 200
    assert [row["insight"] for row in response.json()["insights"]] == ["Recente"]


def test_daily_insight_cleanup(client, db):
    db.add(DailyInsight(date=date(2000, 1, 1), insight="Muito antigo"))
    db.commit()

    response = client.post("/api/v1/daily-insight", json={"action": "cleanup"})

    assert response.status_code == 200
    assert response.json()["deleted_count"] == 1


def test_daily_insight_unknown_action(client):
    response = client.post("/api/v1/daily-insight", json={"action": "regenerate"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Ação não reconhecida"


# =============================================================================
# Errors and monitoring
# =============================================================================


def test_unhandled_error_returns_500(engine):
    app.dependency_overrides[get_db] = lambda: Session(engine)
    try:
        with patch(
            "bakery.web.routers.recommendations.get_product_recommendations",
            side_effect=RuntimeError("database is locked"),
        ):
            response = TestClient(app, raise_server_exceptions=False).get("/api/v1/recommendations")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["error"] == "internal_server_error"
    assert response.json()["request_id"]


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "req-123"


def test_healthz(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["checks"]["database"]["status"] == "ok"


def test_metrics_endpoint(client):
    client.get("/health")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in response.text
