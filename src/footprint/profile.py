"""Lifestyle inputs for a single footprint request and their validation."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, fields
from typing import Any, Mapping

from .errors import ValidationError

# snake_case attribute -> camelCase key used by the front end
WIRE_KEYS: dict[str, str] = {
    "region": "region",
    "commute_mode": "commuteMode",
    "daily_commute_km": "dailyCommuteKm",
    "commute_days": "commuteDays",
    "domestic_flights": "domesticFlights",
    "avg_domestic_flight_km": "avgDomesticFlightKm",
    "international_flights": "internationalFlights",
    "avg_international_flight_km": "avgInternationalFlightKm",
    "other_travel_km_per_week": "otherTravelKm",
    "monthly_electricity_kwh": "monthlyElectricityKWh",
    "monthly_natural_gas_kwh": "monthlyNaturalGasKWh",
    "diet_type": "dietType",
    "streaming_hours_per_day": "streamingHoursPerDay",
    "ai_queries_per_day": "aiQueriesPerDay",
    "cloud_storage_gb": "cloudStorageGB",
    "video_call_hours_per_week": "videoCallHoursPerWeek",
    "emails_per_day": "emailsPerDay",
    "shopping_frequency": "shoppingFrequency",
    "clothing_purchases": "clothingPurchases",
    "electronics_purchases": "electronicsPurchases",
    "furniture_purchases": "furniturePurchases",
}

REQUIRED_FIELDS = (
    "region",
    "commute_mode",
    "daily_commute_km",
    "commute_days",
    "monthly_electricity_kwh",
    "diet_type",
)
TEXT_FIELDS = ("region", "commute_mode", "diet_type", "shopping_frequency")
INTEGER_FIELDS = frozenset(
    {
        "commute_days",
        "domestic_flights",
        "international_flights",
        "ai_queries_per_day",
        "emails_per_day",
        "clothing_purchases",
        "electronics_purchases",
        "furniture_purchases",
    }
)


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Validated lifestyle inputs across the five footprint categories."""

    region: str
    commute_mode: str
    daily_commute_km: float
    commute_days: int
    monthly_electricity_kwh: float
    diet_type: str
    domestic_flights: int = 0
    avg_domestic_flight_km: float = 0.0
    international_flights: int = 0
    avg_international_flight_km: float = 0.0
    other_travel_km_per_week: float = 0.0
    monthly_natural_gas_kwh: float = 0.0
    streaming_hours_per_day: float = 0.0
    ai_queries_per_day: int = 0
    cloud_storage_gb: float = 0.0
    video_call_hours_per_week: float = 0.0
    emails_per_day: int = 0
    shopping_frequency: str | None = None
    clothing_purchases: int = 0
    electronics_purchases: int = 0
    furniture_purchases: int = 0

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if item.name in TEXT_FIELDS:
                if value is None and item.name not in REQUIRED_FIELDS:
                    continue
                object.__setattr__(self, item.name, _coerce_text(item.name, value))
            else:
                object.__setattr__(self, item.name, _coerce_number(item.name, value))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "UserProfile":
        """Build a profile from camelCase (front end) or snake_case keys."""
        if not isinstance(data, Mapping):
            raise ValidationError("User profile payload must be a mapping.")
        values: dict[str, Any] = {}
        for attribute, wire_key in WIRE_KEYS.items():
            if wire_key in data:
                values[attribute] = data[wire_key]
            elif attribute in data:
                values[attribute] = data[attribute]
        missing = [WIRE_KEYS[name] for name in REQUIRED_FIELDS if values.get(name) is None]
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")
        return cls(**values)

    def to_payload(self) -> dict[str, Any]:
        return {wire_key: getattr(self, attribute) for attribute, wire_key in WIRE_KEYS.items()}


def _coerce_text(name: str, value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{WIRE_KEYS[name]} must be a non-empty string.")
    return value.strip()


def _coerce_number(name: str, value: object) -> float | int:
    label = WIRE_KEYS[name]
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(f"Invalid value for {label}: must be a number.")
    number = float(value)
    if not math.isfinite(number):
        raise ValidationError(f"Invalid value for {label}: must be finite.")
    if number < 0:
        raise ValidationError(f"Invalid value for {label}: must be non-negative.")
    if name in INTEGER_FIELDS:
        if not number.is_integer():
            raise ValidationError(f"Invalid value for {label}: must be a whole number.")
        return int(number)
    return number
