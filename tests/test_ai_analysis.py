"""Tests for the OpenRouter recommendation service."""

import json

import httpx
import pytest

from ecoviz.core.config import settings
from ecoviz.schemas.schemas import CalculationData
from ecoviz.services.ai_analysis import (
    FALLBACK_ANALYSIS,
    RecommendationService,
    build_analysis_prompt,
    generate_recommendation,
)


@pytest.fixture
def data(sample_data):
    return CalculationData.model_validate(sample_data)


@pytest.fixture(autouse=True)
def openrouter_settings(monkeypatch):
    monkeypatch.setattr(settings, "OPENROUTER_API_KEY", "test-key")
    monkeypatch.setattr(settings, "AI_MODELS_FREE", "free/model-a")
    monkeypatch.setattr(settings, "AI_MODELS_PAID", "paid/model-b")


def completion(content):
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


def mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_prompt_mentions_footprint_and_inputs(data):
    prompt = build_analysis_prompt(15941.75, data)
    assert "15941.75 kg CO2e" in prompt
    assert "3.99x the global average" in prompt
    assert "average diet, low food waste" in prompt
    assert "10000.0 miles/year at 25.0 mpg" in prompt


@pytest.mark.asyncio
async def test_first_model_success(data):
    requests = []

    def handler(request):
        requests.append(json.loads(request.content))
        return completion("  Switch to a heat pump.  ")

    async with mock_client(handler) as client:
        analysis, model = await generate_recommendation(15941.75, data, client=client)

    assert analysis == "Switch to a heat pump."
    assert model == "free/model-a"
    assert len(requests) == 1
    assert requests[0]["messages"][0]["role"] == "system"


@pytest.mark.asyncio
async def test_rate_limited_model_escalates_to_paid(data):
    def handler(request):
        body = json.loads(request.content)
        if body["model"] == "free/model-a":
            return httpx.Response(429, text="slow down")
        return completion("Fly less.")

    async with mock_client(handler) as client:
        analysis, model = await generate_recommendation(15941.75, data, client=client)

    assert analysis == "Fly less."
    assert model == "paid/model-b"


@pytest.mark.asyncio
async def test_all_models_failing_raises(data):
    async with mock_client(lambda request: httpx.Response(503, text="down")) as client:
        with pytest.raises(RuntimeError, match="All AI models failed"):
            await generate_recommendation(15941.75, data, client=client)


@pytest.mark.asyncio
async def test_missing_api_key_raises(monkeypatch, data):
    monkeypatch.setattr(settings, "OPENROUTER_API_KEY", "")
    with pytest.raises(ValueError):
        await generate_recommendation(15941.75, data)


@pytest.mark.asyncio
async def test_service_returns_fallback_on_failure(data):
    def handler(request):
        raise httpx.ConnectError("no route to host", request=request)

    async with mock_client(handler) as client:
        service = RecommendationService(enabled=True, client=client)
        analysis = await service.recommend(15941.75, data)

    assert analysis == FALLBACK_ANALYSIS


@pytest.mark.asyncio
async def test_service_returns_fallback_without_api_key(monkeypatch, data):
    monkeypatch.setattr(settings, "OPENROUTER_API_KEY", "")
    service = RecommendationService(enabled=True)
    assert await service.recommend(15941.75, data) == FALLBACK_ANALYSIS


@pytest.mark.asyncio
async def test_service_returns_analysis(data):
    async with mock_client(lambda request: completion("Eat less meat.")) as client:
        service = RecommendationService(enabled=True, client=client)
        assert await service.recommend(15941.75, data) == "Eat less meat."


def test_service_enabled_follows_settings(monkeypatch):
    monkeypatch.setattr(settings, "AI_ANALYSIS_ENABLED", False)
    assert RecommendationService().enabled is False


@pytest.mark.asyncio
async def test_null_content_falls_through_to_next_model(data):
    def handler(request):
        body = json.loads(request.content)
        if body["model"] == "free/model-a":
            return completion(None)
        return completion("Use a heat pump.")

    async with mock_client(handler) as client:
        analysis, model = await generate_recommendation(15941.75, data, client=client)

    assert analysis == "Use a heat pump."
    assert model == "paid/model-b"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    {"choices": [{"message": {"content": None}}]},
    {"choices": None},
    {"unexpected": "shape"},
])
async def test_service_returns_fallback_on_malformed_completion(data, body):
    async with mock_client(lambda request: httpx.Response(200, json=body)) as client:
        service = RecommendationService(enabled=True, client=client)
        assert await service.recommend(15941.75, data) == FALLBACK_ANALYSIS
