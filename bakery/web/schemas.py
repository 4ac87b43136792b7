"""Pydantic schemas for API requests and responses."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


# Prediction schemas
class PredictionRequest(BaseModel):
    """Stock on hand per product for one store."""

    store_id: int | None = Field(None, description="Store ID (default store when omitted)")
    stocks: dict[int, int] = Field(default_factory=dict, description="productId -> quantity")
    as_of: dt.date | None = Field(None, description="Reference date (default: today)")


class ProductSuggestionDTO(BaseModel):
    """Suggested order quantity for one product."""

    model_config = ConfigDict(from_attributes=True)

    product_id: int
    product_name: str
    suggestion: int
    confidence: str
    confidence_label: str
    days_of_history: int


class PredictionResponse(BaseModel):
    success: bool = True
    store_id: int
    suggestions: list[ProductSuggestionDTO]


# Recommendation schemas
class OrderItem(BaseModel):
    """Stock and encomendas entered for one product."""

    product_id: int
    stock: int = Field(..., ge=0)
    orders: int = Field(..., ge=0)


class RecommendationRequest(BaseModel):
    items: list[OrderItem]


class ProductRecommendationDTO(BaseModel):
    """Production recommendation for one Class A product."""

    model_config = ConfigDict(from_attributes=True)

    product_id: int
    product_name: str
    forecast: float
    stock: int
    orders: int
    suggested_production: int


class RecommendationResponse(BaseModel):
    success: bool = True
    recommendations: list[ProductRecommendationDTO]


# Daily insight schemas
class InsightResponse(BaseModel):
    success: bool = True
    insight: str
    date: dt.date


class InsightRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: dt.date
    insight: str


class InsightHistoryResponse(BaseModel):
    success: bool = True
    insights: list[InsightRow]


class InsightAction(BaseModel):
    action: str
