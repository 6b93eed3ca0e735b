import pytest

from filmcarbon import Category, FuelAmount, FuelCost, FuelEntry, FuelMileage, calculate_all


def run(registry, *entries):
    return calculate_all(Category.FUEL, entries, registry)


def test_generator_diesel_by_amount(registry):
    entry = FuelEntry("Generator", "Diesel Fuel", FuelAmount(50, "gallons"))
    output = run(registry, entry)

    assert output.results[0].co2e == pytest.approx(503.34)
    assert output.results[0].classification["equipment_category"] == "Equipment"
    assert output.totals.by_equipment_category == pytest.approx({"Vehicle": 0.0, "Equipment": 503.34})
    assert output.totals.by_fuel_type == pytest.approx({"Diesel Fuel": 503.34})


def test_amount_in_liters(registry):
    entry = FuelEntry("Cars", "Gasoline", FuelAmount(100, "liters"))
    result = run(registry, entry).results[0]
    assert result.quantity == pytest.approx(100 / 3.785411784)
    assert result.co2e == pytest.approx(100 / 3.785411784 * 8.8769)


def test_mileage_uses_equipment_mpg(registry):
    cars = FuelEntry("Cars", "Gasoline", FuelMileage(250))
    generator = FuelEntry("Generator", "Diesel Fuel", FuelMileage(100))
    output = run(registry, cars, generator)
    assert output.result_for(cars.id).quantity == pytest.approx(10)
    assert output.result_for(cars.id).co2e == pytest.approx(88.769)
    assert output.result_for(generator.id).quantity == pytest.approx(5)
    assert output.totals.by_equipment_category["Vehicle"] == pytest.approx(88.769)


def test_cost_method(registry):
    entry = FuelEntry("Trailer", "Diesel Fuel", FuelCost(300, 4))
    result = run(registry, entry).results[0]
    assert result.quantity == pytest.approx(75)
    assert result.classification["calculation_method"] == "cost"


@pytest.mark.parametrize("method", [FuelCost(300, 0), FuelCost(300, None), FuelCost(None, 4)])
def test_cost_method_without_usable_price(registry, method):
    entry = FuelEntry("Trailer", "Diesel Fuel", method)
    output = run(registry, entry)
    assert output.results == []
    assert output.errors[0].kind == "MissingDerivationInput"
    assert output.errors[0].entry_id == entry.id


def test_unknown_fuel_does_not_abort_the_batch(registry):
    bad = FuelEntry("Generator", "Unobtainium", FuelAmount(10))
    good = FuelEntry("Generator", "Diesel Fuel", FuelAmount(10))
    output = run(registry, bad, good)
    assert [r.entry_id for r in output.results] == [good.id]
    assert output.skipped_ids == [bad.id]
    assert output.errors[0].kind == "FactorNotFound"
    assert output.totals.total_co2e == pytest.approx(100.668)


def test_propane_by_mass(registry):
    entry = FuelEntry("Cooking Equipment", "Propane", FuelAmount(10, "kg"))
    result = run(registry, entry).results[0]
    assert result.quantity == pytest.approx(5.1)
    assert result.co2e == pytest.approx(5.1 * 5.8944)


def test_natural_gas_metered_in_cubic_feet(registry):
    entry = FuelEntry("Heater", "Natural gas", FuelAmount(1000, "cubic feet"))
    result = run(registry, entry).results[0]
    assert result.quantity == pytest.approx(11.2)
    assert result.co2e == pytest.approx(57.7)


def test_sterno_cans(registry):
    entry = FuelEntry("Cooking Equipment", "Gasoline", FuelAmount(10, "sterno cans"))
    result = run(registry, entry).results[0]
    assert result.quantity == pytest.approx(2.1 / 3.785411784)


def test_energy_unit_is_not_a_fuel_amount(registry):
    entry = FuelEntry("Generator", "Diesel Fuel", FuelAmount(10, "kWh"))
    output = run(registry, entry)
    assert output.errors[0].kind == "UnsupportedConversion"


def test_total_fuel_gallons(registry):
    entries = [
        FuelEntry("Generator", "Diesel Fuel", FuelAmount(50)),
        FuelEntry("Cars", "Gasoline", FuelMileage(250)),
        FuelEntry("Trailer", "Diesel Fuel", FuelCost(40, 4)),
    ]
    totals = run(registry, *entries).totals
    assert totals.total_fuel_gallons == pytest.approx(70)
    assert totals.by_fuel_type == pytest.approx({"Diesel Fuel": 60 * 10.0668, "Gasoline": 88.769})
