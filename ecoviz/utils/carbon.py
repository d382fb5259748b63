"""
EcoViz — Carbon Footprint Estimation
Annual household emissions in kg CO2e, split into four categories.

Each estimator is a pure function of its input. Unknown enum values fall
back to the average factor; numeric inputs are not guarded here, the HTTP
schemas validate them before they reach this module.
"""

from dataclasses import dataclass, asdict
from typing import Dict

from ecoviz.schemas.schemas import (
    CalculationData, ConsumptionInput, FoodInput, HousingInput, TransportationInput,
)

# kg CO2e per unit of household energy
ELECTRICITY_KG_PER_KWH = 0.42
NATURAL_GAS_KG_PER_THERM = 5.3
HEATING_OIL_KG_PER_GALLON = 10.15

# kg CO2e per unit of travel
GASOLINE_KG_PER_GALLON = 8.89
BUS_KG_PER_MILE = 0.059
TRAIN_KG_PER_MILE = 0.041
SHORT_HAUL_KG_PER_FLIGHT = 1100
LONG_HAUL_KG_PER_FLIGHT = 4400

DAYS_PER_YEAR = 365
CONSUMPTION_BASELINE_KG = 1000

# Daily kg CO2e by diet
DIET_FACTORS = {
    "meat-heavy": 3.3,
    "average": 2.5,
    "vegetarian": 1.7,
    "vegan": 1.5,
}

WASTE_FACTORS = {
    "low": 0.9,
    "average": 1.0,
    "high": 1.1,
}

SHOPPING_FACTORS = {
    "minimal": 0.5,
    "average": 1.0,
    "frequent": 1.5,
}

RECYCLING_FACTORS = {
    "none": 1.2,
    "some": 1.0,
    "most": 0.8,
    "all": 0.6,
}

DEFAULT_DIET_FACTOR = DIET_FACTORS["average"]
DEFAULT_FACTOR = 1.0

# Reference footprints in kg CO2e/year
GLOBAL_AVERAGE_KG = 4000
US_AVERAGE_KG = 16000


@dataclass(frozen=True)
class CarbonFootprint:
    """Annual footprint with its per-category contributions."""
    total: float
    housing: float
    transportation: float
    food: float
    consumption: float

    def breakdown(self) -> Dict[str, float]:
        data = asdict(self)
        data.pop("total")
        return data


def estimate_housing(housing: HousingInput) -> float:
    """
    Emissions from household energy use.

    Dwelling type and occupant count are accepted on the input but do not
    change the result yet.
    """
    energy = housing.energy
    return (
        energy.electricity * ELECTRICITY_KG_PER_KWH
        + energy.natural_gas * NATURAL_GAS_KG_PER_THERM
        + energy.heating_oil * HEATING_OIL_KG_PER_GALLON
    )


def estimate_transportation(transportation: TransportationInput) -> float:
    """Emissions from driving, public transit and flights."""
    car = transportation.car
    transit = transportation.public_transit
    flights = transportation.flights
    return (
        (car.miles_driven / car.fuel_efficiency) * GASOLINE_KG_PER_GALLON
        + transit.bus_miles * BUS_KG_PER_MILE
        + transit.train_miles * TRAIN_KG_PER_MILE
        + flights.short_haul * SHORT_HAUL_KG_PER_FLIGHT
        + flights.long_haul * LONG_HAUL_KG_PER_FLIGHT
    )


def estimate_food(food: FoodInput) -> float:
    diet_factor = DIET_FACTORS.get(food.diet_type, DEFAULT_DIET_FACTOR)
    waste_factor = WASTE_FACTORS.get(food.waste_level, DEFAULT_FACTOR)
    return DAYS_PER_YEAR * diet_factor * waste_factor


def estimate_consumption(consumption: ConsumptionInput) -> float:
    shopping_factor = SHOPPING_FACTORS.get(consumption.shopping_habits, DEFAULT_FACTOR)
    recycling_factor = RECYCLING_FACTORS.get(consumption.recycling_habits, DEFAULT_FACTOR)
    return CONSUMPTION_BASELINE_KG * shopping_factor * recycling_factor


def calculate_carbon_footprint(data: CalculationData) -> CarbonFootprint:
    """Run every category estimator and sum the results."""
    housing = estimate_housing(data.housing)
    transportation = estimate_transportation(data.transportation)
    food = estimate_food(data.food)
    consumption = estimate_consumption(data.consumption)
    return CarbonFootprint(
        total=housing + transportation + food + consumption,
        housing=housing,
        transportation=transportation,
        food=food,
        consumption=consumption,
    )


def calculate_total_carbon_footprint(data: CalculationData) -> float:
    return calculate_carbon_footprint(data).total


def reference_averages() -> Dict[str, float]:
    return {"global": GLOBAL_AVERAGE_KG, "us": US_AVERAGE_KG}


def compare_to_averages(total: float) -> Dict[str, float]:
    """Ratio of a footprint to each reference average."""
    return {
        "global_ratio": round(total / GLOBAL_AVERAGE_KG, 2),
        "us_ratio": round(total / US_AVERAGE_KG, 2),
    }
