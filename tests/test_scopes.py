import pytest

from filmcarbon import Category, classify_scopes, module_scope_breakdowns
from filmcarbon.results import (
    CharterFlightsTotals,
    CommercialTravelTotals,
    EVChargingTotals,
    FuelTotals,
    HotelsTotals,
    UtilitiesTotals,
)
from filmcarbon.scopes import module_scope_classification, scope_description

FULL = {
    Category.UTILITIES: UtilitiesTotals(total_co2e=150.0, electricity_co2e=100.0, heat_co2e=50.0),
    Category.FUEL: FuelTotals(total_co2e=503.34),
    Category.EV_CHARGING: EVChargingTotals(total_co2e=20.3),
    Category.HOTELS: HotelsTotals(total_co2e=40.0),
    Category.COMMERCIAL_TRAVEL: CommercialTravelTotals(total_co2e=248.0),
    Category.CHARTER_FLIGHTS: CharterFlightsTotals(total_co2e=962.5),
}


def test_scope_assignment():
    scopes = classify_scopes(FULL)
    assert scopes.scope1 == pytest.approx(50.0 + 503.34)
    assert scopes.scope2 == pytest.approx(100.0 + 20.3)
    assert scopes.scope3 == pytest.approx(40.0 + 248.0 + 962.5)


@pytest.mark.parametrize("totals", [
    FULL,
    {},
    {Category.FUEL: FuelTotals(total_co2e=503.34)},
    {Category.UTILITIES: UtilitiesTotals(), Category.HOTELS: None},
    {Category.UTILITIES: UtilitiesTotals(total_co2e=0.1, electricity_co2e=0.07, heat_co2e=0.03)},
])
def test_scopes_sum_to_total(totals):
    scopes = classify_scopes(totals)
    assert scopes.scope1 + scopes.scope2 + scopes.scope3 == scopes.total
    assert scopes.total == pytest.approx(sum(t.total_co2e for t in totals.values() if t is not None))


def test_fuel_only_production_is_all_scope_one():
    scopes = classify_scopes({Category.FUEL: FuelTotals(total_co2e=503.34)})
    assert scopes.to_dict() == {"scope1": 503.34, "scope2": 0.0, "scope3": 0.0, "total": 503.34}


def test_electricity_only_utilities_is_scope_two():
    scopes = classify_scopes({Category.UTILITIES: UtilitiesTotals(total_co2e=203.0, electricity_co2e=203.0)})
    assert scopes.scope1 == 0.0
    assert scopes.scope2 == pytest.approx(203.0)


def test_module_breakdowns_skip_empty_categories():
    totals = dict(FULL)
    totals[Category.HOTELS] = HotelsTotals()
    del totals[Category.EV_CHARGING]
    breakdowns = module_scope_breakdowns(totals)
    assert [b.module_name for b in breakdowns] == [
        "Utilities", "Fuel", "Commercial Travel", "Charter Flights",
    ]
    utilities = breakdowns[0]
    assert (utilities.scope1, utilities.scope2, utilities.scope3) == (50.0, 100.0, 0.0)
    assert utilities.total == pytest.approx(150.0)


def test_scope_descriptions():
    assert "purchased electricity" in scope_description(2)
    with pytest.raises(ValueError):
        scope_description(4)
    assert module_scope_classification(Category.CHARTER_FLIGHTS)["primary_scope"] == 3
    assert module_scope_classification("ev_charging")["primary_scope"] == 2
