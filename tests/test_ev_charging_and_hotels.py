import pytest

from filmcarbon import Category, EVChargingEntry, HotelsEntry, calculate_all


def test_ev_charging_uses_regional_grid(registry):
    entry = EVChargingEntry("United States", 100, state_province="California", miles_driven=350)
    output = calculate_all(Category.EV_CHARGING, [entry], registry)
    result = output.results[0]
    assert result.co2e == pytest.approx(20.3)
    assert result.classification["region"] == "United States - California"
    assert output.totals.total_miles_driven == pytest.approx(350)
    assert output.totals.total_electricity_kwh == pytest.approx(100)


def test_ev_charging_unknown_country_uses_global_average(registry):
    entry = EVChargingEntry("Atlantis", 10)
    result = calculate_all(Category.EV_CHARGING, [entry], registry).results[0]
    assert result.factor == pytest.approx(0.4663)
    assert result.classification["region"] == "World"


def test_ev_charging_without_usage_is_an_error(registry):
    entry = EVChargingEntry("Canada", None)
    output = calculate_all(Category.EV_CHARGING, [entry], registry)
    assert output.results == []
    assert output.errors[0].kind == "MissingDerivationInput"
    assert output.totals.total_co2e == 0.0


def test_ev_charging_totals_by_country(registry):
    entries = [
        EVChargingEntry("Canada", 100),
        EVChargingEntry("Canada", 50, state_province="Ontario"),
        EVChargingEntry("United Kingdom", 10),
    ]
    totals = calculate_all(Category.EV_CHARGING, entries, registry).totals
    assert totals.by_country == pytest.approx({"Canada": 11.83 + 1.5, "United Kingdom": 2.063})
    assert totals.total_miles_driven == 0.0


def test_hotel_year_of_nights(registry):
    entry = HotelsEntry("Midscale Hotel", "United States", 365)
    result = calculate_all(Category.HOTELS, [entry], registry).results[0]
    assert result.quantity == pytest.approx(10869.92)
    assert result.co2e == pytest.approx(10869.92 * 0.3692)


def test_hotel_nights_are_prorated_and_regional(registry):
    entry = HotelsEntry("Luxury Hotel", "United States", 10, state_province="Texas")
    result = calculate_all(Category.HOTELS, [entry], registry).results[0]
    assert result.co2e == pytest.approx(16452.9 * 10 / 365 * 0.383)
    assert result.detail == pytest.approx({"kwh_per_year": 16452.9, "nights": 10.0})


def test_hotel_errors(registry):
    unknown_room = HotelsEntry("Castle", "United States", 3)
    no_nights = HotelsEntry("Economy Hotel", "United States", None)
    output = calculate_all(Category.HOTELS, [unknown_room, no_nights], registry)
    assert {e.entry_id: e.kind for e in output.errors} == {
        unknown_room.id: "FactorNotFound",
        no_nights.id: "MissingDerivationInput",
    }


def test_hotel_totals(registry):
    entries = [
        HotelsEntry("Economy Hotel", "Canada", 5),
        HotelsEntry("Apartment/Condo", "Canada", 30),
        HotelsEntry("Economy Hotel", "United Kingdom", 2),
    ]
    totals = calculate_all(Category.HOTELS, entries, registry).totals
    assert totals.total_nights == pytest.approx(37)
    assert set(totals.by_room_type) == {"Economy Hotel", "Apartment/Condo"}
    assert totals.by_country["United Kingdom"] == pytest.approx(5515.85 * 2 / 365 * 0.2063)
    assert sum(totals.by_room_type.values()) == pytest.approx(totals.total_co2e)
