"""Tests for LLM insight generation."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock, patch

import httpx
import openai
import pytest

from bakery.ai.insight import generate_insight_with_ai
from bakery.core.config import Settings
from bakery.domain.insight.analysis import ProductTotal, SalesAnalysis

ANALYSIS = SalesAnalysis(
    top_products=[ProductTotal("Bolo de Cenoura", 36500)],
    current_month="out",
    current_day=10,
)


def _mock_client(create: AsyncMock) -> Mock:
    client = Mock()
    client.chat.completions.create = create
    return client


@pytest.mark.asyncio
async def test_ai_insight_returned():
    response = Mock(choices=[Mock(message=Mock(content="  Hoje é dia 10 de outubro...  "))])
    create = AsyncMock(return_value=response)
    settings = Settings(insight_api_key="test-key")

    with patch("bakery.ai.insight._client", return_value=_mock_client(create)):
        result = await generate_insight_with_ai("prompt", ANALYSIS, settings=settings)

    assert result == "Hoje é dia 10 de outubro..."
    kwargs = create.call_args.kwargs
    assert kwargs["model"] == settings.insight_model
    assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]


@pytest.mark.asyncio
async def test_no_api_key_uses_fallback():
    with patch("bakery.ai.insight._client") as client:
        result = await generate_insight_with_ai("prompt", ANALYSIS, settings=Settings(insight_api_key=None))

    client.assert_not_called()
    assert result.startswith("Hoje é dia 10 de out")
    assert "Bolo de Cenoura" in result


@pytest.mark.asyncio
async def test_api_error_uses_fallback():
    error = openai.APIConnectionError(request=httpx.Request("POST", "https://api.aimlapi.com/v1/chat/completions"))
    create = AsyncMock(side_effect=error)

    with patch("bakery.ai.insight._client", return_value=_mock_client(create)):
        result = await generate_insight_with_ai("prompt", ANALYSIS, settings=Settings(insight_api_key="test-key"))

    assert "RECOMENDAÇÕES:" in result


@pytest.mark.asyncio
async def test_empty_completion_uses_fallback():
    response = Mock(choices=[Mock(message=Mock(content=""))])

    with patch("bakery.ai.insight._client", return_value=_mock_client(AsyncMock(return_value=response))):
        result = await generate_insight_with_ai("prompt", ANALYSIS, settings=Settings(insight_api_key="test-key"))

    assert result.startswith("Hoje é dia 10 de out")
