"""Ensure the project package is importable during tests without installation."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

root_path = str(ROOT)
if root_path not in sys.path:
    sys.path.insert(0, root_path)

src_path = str(SRC)
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from action_tracker import TrackerContext, load_context  # noqa: E402
from footprint import UserProfile  # noqa: E402

CONFIG_PATH = ROOT / "config.yaml"


@pytest.fixture(scope="session")
def context() -> TrackerContext:
    return load_context(CONFIG_PATH)


@pytest.fixture(scope="session")
def factor_table(context):
    return context.factors


@pytest.fixture(scope="session")
def benchmarks(context):
    return context.benchmarks


@pytest.fixture(scope="session")
def catalog(context):
    return context.catalog


def make_profile(**overrides) -> UserProfile:
    """A profile with every activity at zero unless overridden."""
    values = {
        "region": "Global",
        "commute_mode": "Car_Gasoline",
        "daily_commute_km": 0,
        "commute_days": 0,
        "monthly_electricity_kwh": 0,
        "diet_type": "balanced",
    }
    values.update(overrides)
    return UserProfile(**values)


@pytest.fixture
def profile_factory():
    return make_profile


@pytest.fixture
def example_payload() -> dict:
    return {
        "region": "USA",
        "commuteMode": "Car_Gasoline",
        "dailyCommuteKm": 20,
        "commuteDays": 250,
        "domesticFlights": 2,
        "avgDomesticFlightKm": 1500,
        "internationalFlights": 1,
        "avgInternationalFlightKm": 8000,
        "otherTravelKm": 50,
        "monthlyElectricityKWh": 900,
        "monthlyNaturalGasKWh": 300,
        "dietType": "balanced",
        "streamingHoursPerDay": 2,
        "aiQueriesPerDay": 10,
        "cloudStorageGB": 100,
        "videoCallHoursPerWeek": 5,
        "emailsPerDay": 50,
        "shoppingFrequency": "moderate",
        "clothingPurchases": 10,
        "electronicsPurchases": 1,
        "furniturePurchases": 0,
    }
