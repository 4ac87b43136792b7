"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from bakery.db.models import Base, DailyOrderHistory, Product, ProductForecast, SalesHistory, Store
from bakery.db.repository import sunday_based_weekday
from bakery.domain.forecast.params import ForecastParams


@pytest.fixture
def engine():
    """In-memory SQLite shared across threads (TestClient runs in a worker thread)."""
    eng = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine) -> Session:
    """Database session on the in-memory engine."""
    session = Session(engine)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def params() -> ForecastParams:
    """Default heuristics, independent of the environment."""
    return ForecastParams()


@pytest.fixture
def store(db) -> Store:
    s = Store(id=1, name="Loja Centro")
    db.add(s)
    db.commit()
    return s


@pytest.fixture
def add_product(db):
    """Create a product."""

    def _add(name: str, *, class_a: bool = False, orderable: bool = True, forecast: float | None = None):
        product = Product(name=name, is_class_a=class_a, is_orderable=orderable)
        db.add(product)
        db.flush()
        if forecast is not None:
            db.add(ProductForecast(product_id=product.id, average_daily_forecast=forecast))
        db.commit()
        return product

    return _add


@pytest.fixture
def add_sales(db):
    """Add monthly sales rows: add_sales(product, year, {"jan": 900, ...})."""

    def _add(product: Product, year: int, months: dict[str, int]):
        for month, total in months.items():
            db.add(SalesHistory(product_id=product.id, year=year, month=month, total=total))
        db.commit()

    return _add


@pytest.fixture
def add_orders(db):
    """Add order history rows: add_orders(product, store, day, qty, times=1)."""

    def _add(product: Product, store: Store, day: date, qty: int, times: int = 1):
        for _ in range(times):
            db.add(
                DailyOrderHistory(
                    product_id=product.id,
                    store_id=store.id,
                    order_date=day,
                    quantity_ordered=qty,
                    stock_at_time=0,
                    day_of_week=sunday_based_weekday(day),
                )
            )
        db.commit()

    return _add
