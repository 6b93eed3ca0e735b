import pytest

from filmcarbon import (
    Category,
    ElectricityUsage,
    FuelAmount,
    FuelEntry,
    UtilitiesEntry,
    aggregate,
    calculate_all,
    scope_frame,
)


@pytest.fixture
def outputs(registry):
    utilities = calculate_all(Category.UTILITIES, [
        UtilitiesEntry(
            "Stage 4", "Office", electricity=ElectricityUsage(1000),
            country="United States", state_province="California",
        ),
    ], registry)
    fuel = calculate_all(Category.FUEL, [
        FuelEntry("Generator", "Diesel Fuel", FuelAmount(50)),
        FuelEntry("Generator", "Kerosene-ish", FuelAmount(5)),
    ], registry)
    return {Category.UTILITIES: utilities, Category.FUEL: fuel, Category.HOTELS: None}


def test_summary_totals_and_scopes(outputs):
    summary = aggregate(outputs)
    assert summary.total_co2e == pytest.approx(203.0 + 503.34)
    assert summary.by_category["utilities"] == pytest.approx(203.0)
    assert summary.by_category["fuel"] == pytest.approx(503.34)
    assert summary.by_category["hotels"] == 0.0
    assert summary.scopes.scope1 == pytest.approx(503.34)
    assert summary.scopes.scope2 == pytest.approx(203.0)
    assert summary.scopes.total == pytest.approx(summary.total_co2e)


def test_percentages(outputs):
    summary = aggregate(outputs)
    assert sum(summary.percentages.values()) == pytest.approx(100.0)
    assert summary.percentages["fuel"] == pytest.approx(503.34 / 706.34 * 100)


def test_errors_are_collected_by_category(outputs):
    summary = aggregate(outputs)
    assert list(summary.errors) == ["fuel"]
    assert summary.error_count == 1
    assert summary.to_dict()["errors"]["fuel"][0]["kind"] == "FactorNotFound"


def test_empty_production():
    summary = aggregate({})
    assert summary.total_co2e == 0.0
    assert set(summary.by_category) == {c.value for c in Category}
    assert all(p == 0.0 for p in summary.percentages.values())
    assert summary.module_breakdowns == []


def test_scope_frame(outputs):
    frame = scope_frame(aggregate(outputs))
    assert list(frame["module_name"]) == ["Utilities", "Fuel", "Total"]
    total = frame.set_index("module_name").loc["Total"]
    assert total["scope1"] + total["scope2"] + total["scope3"] == pytest.approx(total["total"])
