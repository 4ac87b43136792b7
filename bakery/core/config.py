"""Configuration management with pydantic-settings.

Provides type-safe configuration with environment variable validation.
Every heuristic constant used by the forecast engine lives here so it can be
tuned per deployment without code changes.
"""

from __future__ import annotations

from datetime import date, datetime
from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Database ===
    database_url: str = Field(
        "sqlite:///./bakery.db",
        description="Database URL (SQLite locally, Postgres in production)",
    )

    # === Application settings ===
    app_timezone: str = Field("America/Sao_Paulo", description="Application timezone", validation_alias="TZ")
    log_level: str = Field("INFO", description="Root log level")
    log_file_path: str | None = Field(None, description="JSON log file path (None = stdout only)")
    default_store_id: int = Field(1, description="Store used when the caller has none (owner view)")

    # === Forecast: tier selection ===
    forecast_intermediate_min_days: int = Field(7, description="Days of history to leave the stock tier")
    forecast_advanced_min_days: int = Field(90, description="Days of history to reach the advanced tier")

    # === Forecast: shared ===
    forecast_min_suggestion: int = Field(5, description="Minimum suggested quantity when data exists")
    forecast_sales_years_back: int = Field(1, description="Sales history years before current year")
    forecast_days_per_month: int = Field(30, description="Days per month for daily sales averages")

    # === Forecast: stock tier ===
    forecast_stock_safety_margin: float = Field(1.15, description="Upward margin over sales average")

    # === Forecast: intermediate tier ===
    forecast_intermediate_window_days: int = Field(30, description="Order history lookback window")
    forecast_intermediate_min_records: int = Field(10, description="Records needed to trust orders alone")
    forecast_intermediate_order_weight: float = Field(0.6, description="Order weight in sparse blend")
    forecast_intermediate_sales_weight: float = Field(0.4, description="Sales weight in sparse blend")
    forecast_intermediate_fallback: float = Field(15, description="Base when no signal is available")

    # === Forecast: advanced tier ===
    forecast_advanced_window_days: int = Field(60, description="Order history lookback window")
    forecast_advanced_sales_weight: float = Field(0.3, description="Sales weight in combined base")
    forecast_advanced_order_weight: float = Field(0.7, description="Order weight in combined base")
    forecast_advanced_fallback: float = Field(20, description="Base when no signal is available")
    forecast_quinzena_cutoff_day: int = Field(15, description="Last day of the first half-month")
    forecast_quinzena_factor: float = Field(0.9, description="Demand factor for the second half-month")

    # === Simple recommendation formula ===
    recommendation_forecast_share: float = Field(
        1.0, description="Share of the flat forecast used for walk-in (vitrine) production"
    )

    # === Daily insight ===
    insight_api_key: str | None = Field(None, description="API key for the insight LLM endpoint")
    insight_api_base_url: str = Field(
        "https://api.aimlapi.com/v1", description="OpenAI-compatible base URL for insights"
    )
    insight_model: str = Field("deepseek/deepseek-thinking-v3.2-exp", description="Insight model")
    insight_temperature: float = Field(0.7, description="Sampling temperature")
    insight_max_tokens: int = Field(1536, description="Maximum tokens in the generated insight")
    insight_retention_days: int = Field(90, description="Days of cached insights to keep")
    insight_second_half_factor: float = Field(0.88, description="Second half-month production factor")
    insight_weak_month_factor: float = Field(0.85, description="Weak month production factor")
    insight_strong_month_factor: float = Field(1.15, description="Strong month production factor")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Raises:
        RuntimeError: If an environment variable cannot be parsed.

    """
    try:
        return Settings()
    except ValidationError as e:
        bad_fields = [str(error["loc"][0]).upper() for error in e.errors()]

        error_msg = (
            f"Configuration error: Invalid environment variables: "
            f"{', '.join(bad_fields)}\n"
            f"Please fix them in .env file or in the environment."
        )
        raise RuntimeError(error_msg) from e


def local_today(settings: Settings | None = None) -> date:
    """Current calendar date in the application timezone (TZ)."""
    s = settings or get_settings()
    return datetime.now(ZoneInfo(s.app_timezone)).date()
