from typing import Dict, List, Tuple

from .exceptions import UnsupportedConversion

# family -> unit -> amount of the family's base unit in one unit
BASE_FACTORS: Dict[str, Dict[str, float]] = {
  "mass": {
    "kg": 1.0,
    "g": 0.001,
    "lbs": 0.45359237,
    "metric tons": 1000.0,
    "short tons": 907.18474,
  },
  "volume": {
    "liters": 1.0,
    "milliliters": 0.001,
    "gallons": 3.785411784,
    "imperial gallons": 4.54609,
    "cubic meters": 1000.0,
    "cubic feet": 28.316846592,
    "ccf": 2831.6846592,
    "ccm": 100000.0,
  },
  "area": {
    "square feet": 1.0,
    "square meters": 10.763910417,
    "square yards": 9.0,
    "acres": 43560.0,
  },
  "energy": {
    "kwh": 1.0,
    "wh": 0.001,
    "mwh": 1000.0,
    "btu": 0.00029307107,
    "therms": 29.307107,
    "megajoules": 1.0 / 3.6,
    "gigajoules": 1000.0 / 3.6,
  },
  "distance": {
    "kilometers": 1.0,
    "meters": 0.001,
    "miles": 1.609344,
  },
}

ALIASES: Dict[str, str] = {
  "kilogram": "kg", "kilograms": "kg", "kgs": "kg",
  "gram": "g", "grams": "g",
  "lb": "lbs", "pound": "lbs", "pounds": "lbs",
  "tonne": "metric tons", "tonnes": "metric tons", "t": "metric tons",
  "liter": "liters", "litre": "liters", "litres": "liters", "l": "liters",
  "ml": "milliliters",
  "gallon": "gallons", "gal": "gallons", "gallon_us": "gallons",
  "gallon_uk": "imperial gallons",
  "cubic meter": "cubic meters", "m3": "cubic meters",
  "cubic foot": "cubic feet", "cf": "cubic feet", "ft3": "cubic feet",
  "square foot": "square feet", "sq ft": "square feet", "sqft": "square feet",
  "square meter": "square meters", "m2": "square meters", "sq m": "square meters",
  "square yard": "square yards", "acre": "acres",
  "therm": "therms",
  "mj": "megajoules", "megajoule": "megajoules",
  "gj": "gigajoules", "gigajoule": "gigajoules",
  "km": "kilometers", "kilometer": "kilometers", "kilometres": "kilometers",
  "mi": "miles", "mile": "miles",
  "m": "meters", "meter": "meters",
}

_INDEX: Dict[str, Tuple[str, float]] = {
  unit: (family, factor) for family, units in BASE_FACTORS.items() for unit, factor in units.items()
}


def normalize_unit(unit: str) -> str:
  name = str(unit or "").strip().lower()
  return ALIASES.get(name, name)


def family_of(unit: str) -> str:
  name = normalize_unit(unit)
  if name not in _INDEX:
    raise UnsupportedConversion(unit, unit, reason="unknown unit")
  return _INDEX[name][0]


def units_of(family: str) -> List[str]:
  return list(BASE_FACTORS[family])


def convert(quantity: float, from_unit: str, to_unit: str) -> float:
  src, dst = normalize_unit(from_unit), normalize_unit(to_unit)
  if src not in _INDEX:
    raise UnsupportedConversion(from_unit, to_unit, reason=f"unknown unit {from_unit!r}")
  if dst not in _INDEX:
    raise UnsupportedConversion(from_unit, to_unit, reason=f"unknown unit {to_unit!r}")
  src_family, src_factor = _INDEX[src]
  dst_family, dst_factor = _INDEX[dst]
  if src_family != dst_family:
    raise UnsupportedConversion(from_unit, to_unit)
  if src == dst:
    return float(quantity)
  return float(quantity) * src_factor / dst_factor


class UnitConverter:
  @staticmethod
  def energy_to_kwh(value: float, unit: str) -> float:
    return convert(value, unit, "kwh")

  @staticmethod
  def volume_to_gallons(value: float, unit: str) -> float:
    return convert(value, unit, "gallons")

  @staticmethod
  def volume_to_liters(value: float, unit: str) -> float:
    return convert(value, unit, "liters")

  @staticmethod
  def volume_to_cubic_feet(value: float, unit: str) -> float:
    return convert(value, unit, "cubic feet")

  @staticmethod
  def distance_to_miles(value: float, unit: str) -> float:
    return convert(value, unit, "miles")

  @staticmethod
  def area_to_square_feet(value: float, unit: str) -> float:
    return convert(value, unit, "square feet")

  @staticmethod
  def mass_to_kg(value: float, unit: str) -> float:
    return convert(value, unit, "kg")
