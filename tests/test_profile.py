import pytest

from footprint import UserProfile, ValidationError


def test_from_mapping_accepts_front_end_keys(example_payload):
    profile = UserProfile.from_mapping(example_payload)

    assert profile.region == "USA"
    assert profile.commute_mode == "Car_Gasoline"
    assert profile.commute_days == 250
    assert isinstance(profile.commute_days, int)
    assert profile.other_travel_km_per_week == pytest.approx(50.0)
    assert profile.shopping_frequency == "moderate"
    assert set(profile.to_payload()) == set(example_payload)


def test_from_mapping_accepts_snake_case_keys():
    profile = UserProfile.from_mapping(
        {
            "region": "Europe",
            "commute_mode": "Bus",
            "daily_commute_km": 12.5,
            "commute_days": 200.0,
            "monthly_electricity_kwh": 250,
            "diet_type": "vegan",
        }
    )

    assert profile.commute_days == 200
    assert isinstance(profile.commute_days, int)
    assert profile.domestic_flights == 0
    assert profile.shopping_frequency is None


def test_payload_round_trip_preserves_values(example_payload):
    profile = UserProfile.from_mapping(example_payload)

    assert UserProfile.from_mapping(profile.to_payload()) == profile


@pytest.mark.parametrize("missing", ["region", "commuteMode", "dailyCommuteKm", "dietType"])
def test_missing_required_field_is_rejected(example_payload, missing):
    del example_payload[missing]

    with pytest.raises(ValidationError, match=missing) as excinfo:
        UserProfile.from_mapping(example_payload)
    assert excinfo.value.step == "validation"


def test_negative_value_is_rejected(example_payload):
    example_payload["dailyCommuteKm"] = -10

    with pytest.raises(ValidationError, match="non-negative"):
        UserProfile.from_mapping(example_payload)


@pytest.mark.parametrize("value", ["twenty", None, True, float("nan"), [1]])
def test_non_numeric_value_is_rejected(example_payload, value):
    example_payload["monthlyNaturalGasKWh"] = value

    with pytest.raises(ValidationError):
        UserProfile.from_mapping(example_payload)


def test_integer_field_rejects_fractions(example_payload):
    example_payload["domesticFlights"] = 1.5

    with pytest.raises(ValidationError, match="whole number"):
        UserProfile.from_mapping(example_payload)


def test_blank_text_field_is_rejected(example_payload):
    example_payload["region"] = "   "

    with pytest.raises(ValidationError, match="region"):
        UserProfile.from_mapping(example_payload)


def test_non_mapping_payload_is_rejected():
    with pytest.raises(ValidationError):
        UserProfile.from_mapping(["USA"])
