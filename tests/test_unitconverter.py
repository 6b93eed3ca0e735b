import itertools

import pytest

from filmcarbon import UnitConverter, UnsupportedConversion, convert, family_of
from filmcarbon.unitconverter import BASE_FACTORS, units_of


@pytest.mark.parametrize("family", sorted(BASE_FACTORS))
def test_round_trip_within_family(family):
    for a, b in itertools.permutations(units_of(family), 2):
        for x in (0.001, 1.0, 42.5, 123456.789):
            back = convert(convert(x, a, b), b, a)
            assert back == pytest.approx(x, rel=1e-9), (a, b, x)


def test_known_conversions():
    assert convert(1, "gallons", "liters") == pytest.approx(3.785411784)
    assert convert(1, "miles", "kilometers") == pytest.approx(1.609344)
    assert convert(1, "acres", "square feet") == pytest.approx(43560)
    assert convert(1, "therms", "kWh") == pytest.approx(29.307107)
    assert convert(1, "ccf", "cubic feet") == pytest.approx(100)
    assert convert(2, "lbs", "kg") == pytest.approx(0.90718474)


def test_same_unit_is_identity():
    assert convert(12.5, "kWh", "kWh") == 12.5


def test_aliases_and_case_are_accepted():
    assert convert(1, "Gallons", "L") == pytest.approx(3.785411784)
    assert convert(1000, "km", "Miles") == pytest.approx(621.371192, rel=1e-6)
    assert family_of(" Square Meters ") == "area"


def test_cross_family_conversion_fails():
    with pytest.raises(UnsupportedConversion) as err:
        convert(10, "gallons", "kWh")
    assert err.value.context == {"from_unit": "gallons", "to_unit": "kWh"}


def test_unknown_unit_fails():
    with pytest.raises(UnsupportedConversion):
        convert(1, "furlongs", "miles")
    with pytest.raises(UnsupportedConversion):
        family_of("hogsheads")


def test_converter_helpers_use_canonical_units():
    assert UnitConverter.energy_to_kwh(1, "MWh") == pytest.approx(1000)
    assert UnitConverter.volume_to_gallons(3.785411784, "liters") == pytest.approx(1)
    assert UnitConverter.distance_to_miles(1.609344, "kilometers") == pytest.approx(1)
    assert UnitConverter.area_to_square_feet(1, "square yards") == pytest.approx(9)
    assert UnitConverter.mass_to_kg(1, "metric tons") == pytest.approx(1000)
