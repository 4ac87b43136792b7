"""Sales analysis feeding the daily insight."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from bakery.db.models import Product, SalesHistory

MONTH_LABELS = ["jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez"]

_MONTH_INDEX = case(
    {label: i + 1 for i, label in enumerate(MONTH_LABELS)},
    value=SalesHistory.month,
)


@dataclass(frozen=True)
class ProductTotal:
    name: str
    total: int


@dataclass(frozen=True)
class MonthTotal:
    month: str
    total: int


@dataclass(frozen=True)
class ProductGrowth:
    product: str
    growth: float  # percent


@dataclass
class SalesAnalysis:
    """Snapshot of sales performance used to write the daily insight."""

    top_products: list[ProductTotal] = field(default_factory=list)
    monthly_trends: list[MonthTotal] = field(default_factory=list)
    year_over_year_growth: list[ProductGrowth] = field(default_factory=list)
    current_month: str = "jan"
    current_day: int = 1

    def month_rank(self) -> int:
        """1-based rank of the current month in monthly_trends (0 = unranked)."""
        for i, trend in enumerate(self.monthly_trends):
            if trend.month.lower() == self.current_month.lower():
                return i + 1
        return 0


def top_products(db: Session, year: int, limit: int = 5) -> list[ProductTotal]:
    """Best sellers by units in the given year."""
    total = func.sum(SalesHistory.total).label("total")
    stmt = (
        select(Product.name, total)
        .join(Product, SalesHistory.product_id == Product.id)
        .where(SalesHistory.year == year)
        .group_by(Product.name)
        .order_by(total.desc())
        .limit(limit)
    )
    return [ProductTotal(name=name, total=int(t or 0)) for name, t in db.execute(stmt).all()]


def monthly_trends(db: Session, as_of: date, limit: int = 12) -> list[MonthTotal]:
    """Month labels ranked by units over the trailing twelve months."""
    total = func.sum(SalesHistory.total).label("total")
    window_start = (as_of.year - 1) * 12 + as_of.month
    stmt = (
        select(SalesHistory.month, total)
        .where(SalesHistory.year >= as_of.year - 1)
        .where(SalesHistory.year * 12 + _MONTH_INDEX >= window_start)
        .group_by(SalesHistory.month)
        .order_by(total.desc())
        .limit(limit)
    )
    return [MonthTotal(month=month, total=int(t or 0)) for month, t in db.execute(stmt).all()]


def _totals_by_product(db: Session, year: int) -> dict[str, int]:
    stmt = (
        select(Product.name, func.sum(SalesHistory.total))
        .join(Product, SalesHistory.product_id == Product.id)
        .where(SalesHistory.year == year)
        .group_by(Product.name)
    )
    return {name: int(t or 0) for name, t in db.execute(stmt).all()}


def year_over_year_growth(db: Session, year: int, limit: int = 5) -> list[ProductGrowth]:
    """Growth (%) of each product's current-year units over the previous year.

    Products without previous-year sales are measured against 1 unit; a
    previous-year total of exactly 0 gives 0 growth.
    """
    current = _totals_by_product(db, year)
    previous = _totals_by_product(db, year - 1)

    growth = []
    for product, current_total in current.items():
        base = previous.get(product, 1)
        pct = round((current_total - previous.get(product, 0)) * 100.0 / base, 2) if base else 0.0
        growth.append(ProductGrowth(product=product, growth=pct))

    growth.sort(key=lambda g: g.growth, reverse=True)
    return growth[:limit]


def analyze_sales_data(db: Session, as_of: date) -> SalesAnalysis:
    """Collect top products, month ranking and growth for the insight."""
    return SalesAnalysis(
        top_products=top_products(db, as_of.year),
        monthly_trends=monthly_trends(db, as_of),
        year_over_year_growth=year_over_year_growth(db, as_of.year),
        current_month=MONTH_LABELS[as_of.month - 1],
        current_day=as_of.day,
    )
