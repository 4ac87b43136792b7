"""LLM-written daily insight with rule-based fallback."""

from __future__ import annotations

import logging

import openai

from bakery.core.config import Settings, get_settings
from bakery.core.metrics import insight_requests_total
from bakery.domain.insight.analysis import SalesAnalysis
from bakery.domain.insight.fallback import InsightFactors, generate_fallback_insight

logger = logging.getLogger(__name__)


def _client(settings: Settings) -> openai.AsyncOpenAI:
    return openai.AsyncOpenAI(
        api_key=settings.insight_api_key,
        base_url=settings.insight_api_base_url,
    )


async def generate_insight_with_ai(
    prompt: str,
    analysis: SalesAnalysis,
    *,
    settings: Settings | None = None,
) -> str:
    """Ask the OpenAI-compatible endpoint for today's insight.

    Args:
        prompt: Rendered instruction prompt
        analysis: Sales analysis, used by the fallback text
        settings: Settings override (default: cached settings)

    Returns:
        Insight text. Falls back to the rule-based insight when no API key is
        configured, when the API call fails or when it returns nothing.

    """
    settings = settings or get_settings()
    factors = InsightFactors.from_settings(settings)

    if not settings.insight_api_key:
        logger.warning("INSIGHT_API_KEY not configured, using rule-based insight")
        insight_requests_total.labels(source="fallback").inc()
        return generate_fallback_insight(analysis, factors)

    try:
        response = await _client(settings).chat.completions.create(
            model=settings.insight_model,
            messages=[{"role": "user", "content": prompt}],
            temperature=settings.insight_temperature,
            top_p=0.7,
            frequency_penalty=1,
            max_tokens=settings.insight_max_tokens,
        )

        insight = (response.choices[0].message.content or "").strip() if response.choices else ""
        if not insight:
            raise ValueError("No insight generated")

        logger.info("Generated daily insight with %s", settings.insight_model)
        insight_requests_total.labels(source="ai").inc()
        return insight

    except (openai.OpenAIError, ValueError) as e:
        logger.error(f"Failed to generate AI insight: {e}")
        insight_requests_total.labels(source="fallback").inc()
        return generate_fallback_insight(analysis, factors)
