"""
EcoViz — Pydantic Schemas
Request/response models. JSON keys are camelCase; attributes are snake_case.
"""
from datetime import datetime
from typing import Optional, List, Dict

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        allow_inf_nan = False


# ── Housing ──────────────────────────────────────────────────────────────────
class EnergyUsage(CamelModel):
    electricity: float = Field(ge=0, description="Electricity use in kWh/year")
    natural_gas: float = Field(ge=0, description="Natural gas use in therms/year")
    heating_oil: float = Field(ge=0, description="Heating oil use in gallons/year")


class HousingInput(CamelModel):
    type: Optional[str] = Field(default=None, description="Dwelling type, e.g. apartment")
    size: Optional[int] = Field(default=None, ge=1, description="Number of occupants")
    energy: EnergyUsage


# ── Transportation ───────────────────────────────────────────────────────────
class CarUsage(CamelModel):
    miles_driven: float = Field(ge=0)
    fuel_efficiency: float = Field(gt=0, description="Miles per gallon")


class PublicTransitUsage(CamelModel):
    bus_miles: float = Field(ge=0)
    train_miles: float = Field(ge=0)


class FlightUsage(CamelModel):
    short_haul: int = Field(ge=0, description="Short-haul round trips per year")
    long_haul: int = Field(ge=0, description="Long-haul round trips per year")


class TransportationInput(CamelModel):
    car: CarUsage
    public_transit: PublicTransitUsage
    flights: FlightUsage


# ── Food & Consumption ───────────────────────────────────────────────────────
class FoodInput(CamelModel):
    diet_type: str = Field(description="meat-heavy, average, vegetarian or vegan")
    waste_level: str = Field(description="low, average or high")


class ConsumptionInput(CamelModel):
    shopping_habits: str = Field(description="minimal, average or frequent")
    recycling_habits: str = Field(description="none, some, most or all")


class CalculationData(CamelModel):
    housing: HousingInput
    transportation: TransportationInput
    food: FoodInput
    consumption: ConsumptionInput


# ── Calculation ──────────────────────────────────────────────────────────────
class CalculationRequest(CamelModel):
    user_id: str = Field(min_length=1)
    data: CalculationData


class FootprintBreakdown(CamelModel):
    housing: float
    transportation: float
    food: float
    consumption: float


class CalculationResponse(CamelModel):
    user_id: str
    calculation_id: str
    carbon_footprint: float
    breakdown: FootprintBreakdown
    ai_analysis: Optional[str] = None
    averages: Optional[Dict[str, float]] = None
    message: str


class CalculationSummary(CamelModel):
    calculation_id: str
    user_id: str
    carbon_footprint: float
    breakdown: FootprintBreakdown
    ai_analysis: Optional[str] = None
    created_at: datetime


class CalculationHistory(CamelModel):
    user_id: str
    calculations: List[CalculationSummary]


# ── Email ────────────────────────────────────────────────────────────────────
class EmailResults(CamelModel):
    carbon_footprint: float
    breakdown: Optional[FootprintBreakdown] = None
    ai_analysis: Optional[str] = None


class EmailResultsRequest(CamelModel):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", description="Recipient address")
    results: EmailResults


class MessageResponse(BaseModel):
    message: str
