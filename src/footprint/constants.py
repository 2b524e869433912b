from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    """Footprint categories in their fixed reporting order."""

    TRANSPORT = "Transport"
    HOME = "Home"
    FOOD = "Food"
    DIGITAL = "Digital"
    CONSUMPTION = "Consumption"

    @classmethod
    def parse(cls, value: object) -> "Category":
        label = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == label:
                return member
        raise ValueError(f"Unknown footprint category '{value}'.")

    @property
    def order(self) -> int:
        return list(Category).index(self)


class ParisStatus(str, Enum):
    ALIGNED = "aligned"
    CLOSE = "close"
    ABOVE = "above"


GLOBAL_REGION = "Global"

GRAMS_PER_KG = 1000.0
KG_PER_TON = 1000.0

GLOBAL_AVERAGE_TONS = 4.7
PARIS_TARGET_TONS = 2.0  # 2030 per-capita target
CLOSE_TO_TARGET_MULTIPLIER = 1.5

DAYS_PER_YEAR = 365
WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12
LEGS_PER_ROUND_TRIP = 2

ZERO_EMISSION_MODES = frozenset({"walking", "cycling"})
DEFAULT_MOTORIZED_MODE = "Car_Gasoline"

AVIATION_MODE = "Aviation"
DOMESTIC_FLIGHT_TYPE = "Domestic_Medium"
INTERNATIONAL_FLIGHT_TYPE = "International_Long"

ELECTRICITY_MODE = "Electricity_Grid"
NATURAL_GAS_MODE = "Natural_Gas"
DIET_MODE = "Diet"
DIGITAL_MODE = "Digital"
SHOPPING_MODE = "Shopping"
PURCHASE_MODE = "Purchase"

FACTOR_COLUMNS: dict[str, str] = {
    "mode": "Transport_Mode",
    "sub_type": "Vehicle_Type",
    "region": "Region",
    "factor": "CO2e_Factor_g_per_unit",
    "source": "Source",
    "year": "Year",
}


def is_zero_emission_mode(mode: str | None) -> bool:
    return bool(mode) and str(mode).strip().lower() in ZERO_EMISSION_MODES
