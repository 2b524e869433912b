import pytest

from footprint import (
    Category,
    EmissionFactorRecord,
    EmissionFactorTable,
    UnresolvedPrimaryFactor,
    estimate_all,
)
from footprint.estimators import (
    estimate_consumption,
    estimate_digital,
    estimate_food,
    estimate_home,
    estimate_transport,
)


def test_zero_inputs_return_zero(factor_table, profile_factory):
    result = estimate_transport(profile_factory(), factor_table)

    assert result.category is Category.TRANSPORT
    assert result.kg_co2e == 0
    assert result.warnings == ()


def test_all_zero_inputs_leave_only_the_diet_baseline(factor_table, profile_factory):
    results = {r.category: r for r in estimate_all(profile_factory(), factor_table)}

    assert list(results) == list(Category)
    for category in (Category.TRANSPORT, Category.HOME, Category.DIGITAL, Category.CONSUMPTION):
        assert results[category].kg_co2e == 0
        assert results[category].warnings == ()
    # diet type is categorical, so food keeps its daily factor x 365
    assert results[Category.FOOD].kg_co2e == pytest.approx(5630 * 365 / 1000)
    assert results[Category.FOOD].warnings == ()


def test_car_commuter_only(factor_table, profile_factory):
    profile = profile_factory(daily_commute_km=20, commute_days=250)

    result = estimate_transport(profile, factor_table)

    # 20 km x 2 legs x 250 days x 164 g/km
    assert result.kg_co2e == pytest.approx(1640.0)


def test_round_trip_counts_both_legs(factor_table, profile_factory):
    profile = profile_factory(daily_commute_km=20, commute_days=1)

    assert estimate_transport(profile, factor_table).kg_co2e == pytest.approx(6.56, abs=0.01)


def test_flights_only(factor_table, profile_factory):
    profile = profile_factory(
        domestic_flights=2,
        avg_domestic_flight_km=1500,
        international_flights=1,
        avg_international_flight_km=8000,
    )

    # 2 x 2 x 1500 x 156 + 1 x 2 x 8000 x 147 grams
    assert estimate_transport(profile, factor_table).kg_co2e == pytest.approx(3288.0)


@pytest.mark.parametrize("region", ["USA", "Europe", "Asia", "Global"])
def test_regional_variation_is_reasonable(factor_table, profile_factory, region):
    profile = profile_factory(
        region=region,
        daily_commute_km=15,
        commute_days=240,
        domestic_flights=1,
        avg_domestic_flight_km=1000,
        other_travel_km_per_week=30,
    )

    kg = estimate_transport(profile, factor_table).kg_co2e

    assert 500 < kg < 3000


def test_electric_car_depends_on_grid(factor_table, profile_factory):
    def commuter(region):
        return profile_factory(
            region=region,
            commute_mode="Car_Electric_BEV",
            daily_commute_km=20,
            commute_days=250,
            other_travel_km_per_week=40,
        )

    norway = estimate_transport(commuter("Norway"), factor_table).kg_co2e
    india = estimate_transport(commuter("India"), factor_table).kg_co2e

    assert norway < india * 0.5


@pytest.mark.parametrize("mode,distance", [("Walking", 5), ("cycling", 10)])
def test_zero_emission_modes(factor_table, profile_factory, mode, distance):
    profile = profile_factory(commute_mode=mode, daily_commute_km=distance, commute_days=250)

    assert estimate_transport(profile, factor_table).kg_co2e == 0


def test_zero_emission_mode_other_travel_uses_car(factor_table, profile_factory):
    profile = profile_factory(commute_mode="Cycling", other_travel_km_per_week=10)

    assert estimate_transport(profile, factor_table).kg_co2e == pytest.approx(10 * 52 * 164 / 1000)


def test_unknown_region_falls_back_to_global(factor_table, profile_factory):
    profile = profile_factory(region="InvalidRegion", daily_commute_km=20, commute_days=250)

    assert estimate_transport(profile, factor_table).kg_co2e == pytest.approx(1640.0)


def test_unknown_commute_mode_is_fatal(factor_table, profile_factory):
    profile = profile_factory(commute_mode="Teleporter", daily_commute_km=20, commute_days=250)

    with pytest.raises(UnresolvedPrimaryFactor) as excinfo:
        estimate_transport(profile, factor_table)
    assert excinfo.value.step == "transport.commute"


def test_missing_flight_factor_degrades_to_zero(profile_factory):
    table = EmissionFactorTable.from_records(
        [EmissionFactorRecord("Car_Gasoline", None, "Global", 164.0)]
    )
    profile = profile_factory(
        daily_commute_km=20, commute_days=250, domestic_flights=3, avg_domestic_flight_km=900
    )

    result = estimate_transport(profile, table)

    assert result.kg_co2e == pytest.approx(1640.0)
    assert any("Domestic flight" in message for message in result.warnings)


def test_frequent_flyer_sanity_bounds(factor_table, profile_factory):
    profile = profile_factory(
        daily_commute_km=30,
        commute_days=250,
        domestic_flights=24,
        avg_domestic_flight_km=1200,
        international_flights=6,
        avg_international_flight_km=10000,
        other_travel_km_per_week=100,
    )

    kg = estimate_transport(profile, factor_table).kg_co2e

    assert 10000 < kg < 50000


def test_public_transit_commuters(factor_table, profile_factory):
    def commuter(mode):
        return profile_factory(
            region="Europe",
            commute_mode=mode,
            daily_commute_km=25,
            commute_days=240,
            other_travel_km_per_week=15,
        )

    assert estimate_transport(commuter("Train_Rail"), factor_table).kg_co2e < 1500
    assert estimate_transport(commuter("Bus"), factor_table).kg_co2e < 2000


def test_home_uses_regional_grid(factor_table, profile_factory):
    profile = profile_factory(
        region="USA", monthly_electricity_kwh=900, monthly_natural_gas_kwh=300
    )

    result = estimate_home(profile, factor_table)

    assert result.kg_co2e == pytest.approx((900 * 12 * 367 + 300 * 12 * 181) / 1000)


def test_food_uses_daily_diet_factor(factor_table, profile_factory):
    vegan = estimate_food(profile_factory(diet_type="vegan"), factor_table)
    meat = estimate_food(profile_factory(diet_type="high_meat"), factor_table)

    assert vegan.kg_co2e == pytest.approx(2890 * 365 / 1000)
    assert vegan.kg_co2e < meat.kg_co2e


def test_unknown_diet_warns_and_contributes_zero(factor_table, profile_factory):
    result = estimate_food(profile_factory(diet_type="carnivore"), factor_table)

    assert result.kg_co2e == 0
    assert len(result.warnings) == 1


def test_digital_activities(factor_table, profile_factory):
    profile = profile_factory(
        streaming_hours_per_day=2,
        ai_queries_per_day=10,
        cloud_storage_gb=100,
        video_call_hours_per_week=5,
        emails_per_day=50,
    )

    expected_g = 2 * 365 * 36 + 10 * 365 * 4.3 + 100 * 10 + 5 * 52 * 150 + 50 * 365 * 4

    assert estimate_digital(profile, factor_table).kg_co2e == pytest.approx(expected_g / 1000)


def test_consumption_baseline_and_purchases(factor_table, profile_factory):
    profile = profile_factory(
        shopping_frequency="moderate", clothing_purchases=10, electronics_purchases=1
    )

    result = estimate_consumption(profile, factor_table)

    assert result.kg_co2e == pytest.approx((600000 + 10 * 15000 + 150000) / 1000)
    assert estimate_consumption(profile_factory(), factor_table).kg_co2e == 0
