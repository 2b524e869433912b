"""Annual emission estimates for each footprint category.

Every estimator follows the same pattern: resolve the emission factors it needs
(region first, then Global), multiply by the annualised activity, sum the
contributions in grams and convert to kilograms. Only the primary commute
factor is mandatory; any other missing factor contributes zero and is recorded
as a warning on the returned :class:`CategoryFootprint`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .constants import (
    AVIATION_MODE,
    DAYS_PER_YEAR,
    DEFAULT_MOTORIZED_MODE,
    DIET_MODE,
    DIGITAL_MODE,
    DOMESTIC_FLIGHT_TYPE,
    ELECTRICITY_MODE,
    GLOBAL_REGION,
    GRAMS_PER_KG,
    INTERNATIONAL_FLIGHT_TYPE,
    KG_PER_TON,
    LEGS_PER_ROUND_TRIP,
    MONTHS_PER_YEAR,
    NATURAL_GAS_MODE,
    PURCHASE_MODE,
    SHOPPING_MODE,
    WEEKS_PER_YEAR,
    Category,
    is_zero_emission_mode,
)
from .factors import EmissionFactorTable
from .profile import UserProfile

LOGGER = logging.getLogger("footprint.estimators")


@dataclass(frozen=True, slots=True)
class CategoryFootprint:
    """Annual emissions attributed to one category."""

    category: Category
    kg_co2e: float
    warnings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.kg_co2e < 0:
            raise ValueError(f"{self.category.value} emissions cannot be negative.")

    @property
    def tons(self) -> float:
        return self.kg_co2e / KG_PER_TON


def _to_footprint(category: Category, grams: float, warnings: list[str]) -> CategoryFootprint:
    return CategoryFootprint(category=category, kg_co2e=grams / GRAMS_PER_KG, warnings=tuple(warnings))


def estimate_transport(profile: UserProfile, table: EmissionFactorTable) -> CategoryFootprint:
    """Commute, flights and other weekly travel in kg CO₂e per year.

    Commute distance is one-way and counted twice per commuting day. Flights
    are round trips (two legs of the average one-way distance) using the
    Global ``Domestic_Medium`` and ``International_Long`` aviation factors.
    Other travel reuses the commute mode, or a gasoline car for walkers and
    cyclists.
    """
    warnings: list[str] = []
    region = profile.region
    mode = profile.commute_mode

    if is_zero_emission_mode(mode):
        commute_g = 0.0
    else:
        factor = table.resolve(mode, None, region).require(step="transport.commute")
        commute_g = profile.daily_commute_km * LEGS_PER_ROUND_TRIP * factor * profile.commute_days

    domestic_factor = table.resolve(AVIATION_MODE, DOMESTIC_FLIGHT_TYPE, GLOBAL_REGION).factor_or_zero(
        warnings, "Domestic flight"
    )
    domestic_g = (
        profile.domestic_flights
        * LEGS_PER_ROUND_TRIP
        * profile.avg_domestic_flight_km
        * domestic_factor
    )

    international_factor = table.resolve(
        AVIATION_MODE, INTERNATIONAL_FLIGHT_TYPE, GLOBAL_REGION
    ).factor_or_zero(warnings, "International flight")
    international_g = (
        profile.international_flights
        * LEGS_PER_ROUND_TRIP
        * profile.avg_international_flight_km
        * international_factor
    )

    other_mode = DEFAULT_MOTORIZED_MODE if is_zero_emission_mode(mode) else mode
    other_factor = table.resolve(other_mode, None, region).factor_or_zero(warnings, "Other travel")
    other_g = profile.other_travel_km_per_week * WEEKS_PER_YEAR * other_factor

    return _to_footprint(
        Category.TRANSPORT, commute_g + domestic_g + international_g + other_g, warnings
    )


def estimate_home(profile: UserProfile, table: EmissionFactorTable) -> CategoryFootprint:
    """Grid electricity and natural gas use."""
    warnings: list[str] = []
    grid = table.resolve(ELECTRICITY_MODE, None, profile.region).factor_or_zero(
        warnings, "Electricity grid"
    )
    gas = table.resolve(NATURAL_GAS_MODE, None, profile.region).factor_or_zero(
        warnings, "Natural gas"
    )
    grams = (
        profile.monthly_electricity_kwh * MONTHS_PER_YEAR * grid
        + profile.monthly_natural_gas_kwh * MONTHS_PER_YEAR * gas
    )
    return _to_footprint(Category.HOME, grams, warnings)


def estimate_food(profile: UserProfile, table: EmissionFactorTable) -> CategoryFootprint:
    warnings: list[str] = []
    daily = table.resolve(DIET_MODE, profile.diet_type, profile.region).factor_or_zero(
        warnings, "Diet"
    )
    return _to_footprint(Category.FOOD, daily * DAYS_PER_YEAR, warnings)


# sub-type -> (profile attribute, periods per year)
DIGITAL_ACTIVITIES: dict[str, tuple[str, int]] = {
    "Video_Streaming": ("streaming_hours_per_day", DAYS_PER_YEAR),
    "AI_Query": ("ai_queries_per_day", DAYS_PER_YEAR),
    "Cloud_Storage": ("cloud_storage_gb", 1),  # factor is per GB-year
    "Video_Call": ("video_call_hours_per_week", WEEKS_PER_YEAR),
    "Email": ("emails_per_day", DAYS_PER_YEAR),
}


def estimate_digital(profile: UserProfile, table: EmissionFactorTable) -> CategoryFootprint:
    warnings: list[str] = []
    grams = 0.0
    for sub_type, (attribute, periods) in DIGITAL_ACTIVITIES.items():
        quantity = getattr(profile, attribute)
        if quantity == 0:
            continue
        factor = table.resolve(DIGITAL_MODE, sub_type, profile.region).factor_or_zero(
            warnings, sub_type.replace("_", " ")
        )
        grams += quantity * periods * factor
    return _to_footprint(Category.DIGITAL, grams, warnings)


PURCHASE_ACTIVITIES: dict[str, str] = {
    "Clothing": "clothing_purchases",
    "Electronics": "electronics_purchases",
    "Furniture": "furniture_purchases",
}


def estimate_consumption(profile: UserProfile, table: EmissionFactorTable) -> CategoryFootprint:
    """Baseline shopping habit plus per-item purchase factors (items per year)."""
    warnings: list[str] = []
    grams = 0.0
    if profile.shopping_frequency:
        grams += table.resolve(
            SHOPPING_MODE, profile.shopping_frequency, profile.region
        ).factor_or_zero(warnings, "Shopping habit")
    for sub_type, attribute in PURCHASE_ACTIVITIES.items():
        count = getattr(profile, attribute)
        if count == 0:
            continue
        factor = table.resolve(PURCHASE_MODE, sub_type, profile.region).factor_or_zero(
            warnings, f"{sub_type} purchase"
        )
        grams += count * factor
    return _to_footprint(Category.CONSUMPTION, grams, warnings)


ESTIMATORS: dict[Category, Callable[[UserProfile, EmissionFactorTable], CategoryFootprint]] = {
    Category.TRANSPORT: estimate_transport,
    Category.HOME: estimate_home,
    Category.FOOD: estimate_food,
    Category.DIGITAL: estimate_digital,
    Category.CONSUMPTION: estimate_consumption,
}


def estimate_all(profile: UserProfile, table: EmissionFactorTable) -> list[CategoryFootprint]:
    """Run every category estimator in category order."""
    results = []
    for category in Category:
        result = ESTIMATORS[category](profile, table)
        LOGGER.debug("%s: %.2f kg CO2e", category.value, result.kg_co2e)
        results.append(result)
    return results
