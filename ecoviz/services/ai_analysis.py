"""
EcoViz — AI Analysis Service
OpenRouter integration with free-first model stack.
Turns a calculated footprint into personalised reduction advice.
"""

import time
import logging
from typing import Optional, Tuple

import httpx

from ecoviz.core.config import settings
from ecoviz.schemas.schemas import CalculationData
from ecoviz.utils.carbon import GLOBAL_AVERAGE_KG, US_AVERAGE_KG, compare_to_averages

logger = logging.getLogger(__name__)

FALLBACK_ANALYSIS = "AI analysis is currently unavailable. Please try again later."

SYSTEM_PROMPT = (
    "You are EcoViz, a sustainability advisor. You explain household carbon "
    "footprints in plain language and suggest practical, specific ways to reduce them. "
    "Keep answers under 200 words and format them as a short summary followed by "
    "3 to 5 bullet-point recommendations."
)


def build_analysis_prompt(total_footprint: float, data: CalculationData) -> str:
    """Build the user prompt describing the footprint and the lifestyle behind it."""
    ratios = compare_to_averages(total_footprint)
    housing = data.housing
    transport = data.transportation

    return f"""My estimated annual carbon footprint is {total_footprint:.2f} kg CO2e.
That is {ratios['global_ratio']}x the global average ({GLOBAL_AVERAGE_KG} kg) and {ratios['us_ratio']}x the US average ({US_AVERAGE_KG} kg).

Housing: {housing.type or 'unspecified'} dwelling, {housing.size or 'unspecified'} occupants
- Electricity: {housing.energy.electricity} kWh/year
- Natural gas: {housing.energy.natural_gas} therms/year
- Heating oil: {housing.energy.heating_oil} gallons/year

Transportation:
- Car: {transport.car.miles_driven} miles/year at {transport.car.fuel_efficiency} mpg
- Bus: {transport.public_transit.bus_miles} miles/year, train: {transport.public_transit.train_miles} miles/year
- Flights: {transport.flights.short_haul} short-haul, {transport.flights.long_haul} long-haul

Food: {data.food.diet_type} diet, {data.food.waste_level} food waste
Consumption: {data.consumption.shopping_habits} shopping, {data.consumption.recycling_habits} recycling

Which changes would reduce my footprint the most?"""


async def _request_completion(
    client: httpx.AsyncClient,
    messages: list,
) -> Tuple[str, str]:
    headers = {
        "Authorization": f"Bearer {settings.OPENROUTER_API_KEY}",
        "Content-Type": "application/json",
        "HTTP-Referer": settings.BRAND_URL,
        "X-Title": settings.APP_NAME,
    }

    last_error = None
    for model_name, tier in settings.ai_models:
        start_time = time.time()
        try:
            logger.info(f"Trying model: {model_name} (tier: {tier})")
            response = await client.post(
                f"{settings.OPENROUTER_BASE_URL}/chat/completions",
                headers=headers,
                json={
                    "model": model_name,
                    "messages": messages,
                    "max_tokens": settings.AI_MAX_TOKENS,
                    "temperature": 0.7,
                },
            )

            if response.status_code == 200:
                data = response.json()
                content = data["choices"][0]["message"].get("content")
                analysis = content.strip() if isinstance(content, str) else ""
                if not analysis:
                    last_error = f"Empty completion from {model_name}"
                    continue
                processing_time = int((time.time() - start_time) * 1000)
                logger.info(f"Success with {model_name}: {len(analysis)} chars, {processing_time}ms")
                return analysis, model_name

            elif response.status_code == 429:
                logger.warning(f"Rate limited on {model_name}, trying next model")
                last_error = f"Rate limited: {response.text}"
                continue
            else:
                logger.warning(f"Error {response.status_code} from {model_name}: {response.text}")
                last_error = f"{response.status_code}: {response.text}"
                continue

        except Exception as e:
            logger.error(f"Exception with {model_name}: {str(e)}")
            last_error = str(e)
            continue

    raise RuntimeError(f"All AI models failed. Last error: {last_error}")


async def generate_recommendation(
    total_footprint: float,
    data: CalculationData,
    client: Optional[httpx.AsyncClient] = None,
) -> Tuple[str, str]:
    """
    Generate footprint reduction advice using OpenRouter chat models.
    Free-first strategy: tries free models, then escalates to paid.

    Returns: (analysis_text, model_used)
    """
    if not settings.OPENROUTER_API_KEY:
        raise ValueError("OPENROUTER_API_KEY is not configured")

    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_analysis_prompt(total_footprint, data)},
    ]

    if client is not None:
        return await _request_completion(client, messages)

    async with httpx.AsyncClient(timeout=settings.AI_TIMEOUT_SECONDS) as owned_client:
        return await _request_completion(owned_client, messages)


class RecommendationService:
    """Request-scoped recommendation collaborator. Never raises from recommend()."""

    def __init__(
        self,
        enabled: Optional[bool] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.enabled = settings.AI_ANALYSIS_ENABLED if enabled is None else enabled
        self.client = client

    async def recommend(self, total_footprint: float, data: CalculationData) -> str:
        try:
            analysis, model_used = await generate_recommendation(
                total_footprint, data, client=self.client
            )
        except Exception as e:
            logger.warning(f"AI analysis unavailable: {str(e)}")
            return FALLBACK_ANALYSIS
        logger.debug(f"AI analysis generated by {model_used}")
        return analysis
