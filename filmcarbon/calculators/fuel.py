from typing import Any, Dict, Tuple

import pandas as pd

from ..exceptions import MissingDerivationInput, UnsupportedConversion
from ..factor import FactorMatch
from ..inputs import Category, FuelAmount, FuelCost, FuelEntry, FuelMileage
from ..results import EmissionResult, FuelTotals
from ..unitconverter import UnitConverter, convert, family_of, normalize_unit
from .base import CategoryCalculator, column_sum, group_sum, register

# gallon equivalents for fuels metered as gas or by mass
NATURAL_GAS_GALLONS_PER_CUBIC_FOOT = 0.0112
GAS_GALLONS_PER_CUBIC_FOOT = 0.00751
GALLONS_PER_KG = {"Propane": 0.51, "LPG": 0.51, "Butane": 0.43}
DEFAULT_GALLONS_PER_KG = 0.5
STERNO_CAN_LITERS = 0.21

GAS_VOLUME_UNITS = ("cubic feet", "cubic meters", "ccf", "ccm")


@register(Category.FUEL)
class FuelCalculator(CategoryCalculator):
  totals_type = FuelTotals

  def _gallons_from_amount(self, entry: FuelEntry, method: FuelAmount) -> float:
    unit = normalize_unit(method.unit)
    if unit in ("sterno cans", "sterno can"):
      return UnitConverter.volume_to_gallons(method.amount * STERNO_CAN_LITERS, "liters")
    family = family_of(unit)
    if family == "volume" and unit in GAS_VOLUME_UNITS:
      cubic_feet = UnitConverter.volume_to_cubic_feet(method.amount, unit)
      if entry.fuel_type == "Natural gas":
        return cubic_feet * NATURAL_GAS_GALLONS_PER_CUBIC_FOOT
      return cubic_feet * GAS_GALLONS_PER_CUBIC_FOOT
    if family == "volume":
      return UnitConverter.volume_to_gallons(method.amount, unit)
    if family == "mass":
      kg = UnitConverter.mass_to_kg(method.amount, unit)
      return kg * GALLONS_PER_KG.get(entry.fuel_type, DEFAULT_GALLONS_PER_KG)
    raise UnsupportedConversion(method.unit, "gallons")

  def fuel_gallons(self, entry: FuelEntry) -> Tuple[float, str]:
    method = entry.method
    if isinstance(method, FuelAmount):
      if method.amount is None or not method.unit:
        raise MissingDerivationInput("amount", "fuel amount and unit")
      return self._gallons_from_amount(entry, method), f"Direct amount: {method.amount} {method.unit}"
    if isinstance(method, FuelMileage):
      if method.miles is None:
        raise MissingDerivationInput("mileage", "miles driven")
      mpg = self.registry.vehicle_mpg(entry.equipment_type)
      return method.miles / mpg, f"Mileage: {method.miles} miles @ {mpg:g} MPG"
    if isinstance(method, FuelCost):
      if method.total_cost is None or method.price_per_gallon is None:
        raise MissingDerivationInput("cost", "total cost and average price per gallon")
      if method.price_per_gallon <= 0:
        raise MissingDerivationInput("cost", "an average price per gallon greater than 0")
      return (
        method.total_cost / method.price_per_gallon,
        f"Cost: ${method.total_cost} @ ${method.price_per_gallon}/gal",
      )
    raise MissingDerivationInput(type(method).__name__, "a known fuel calculation method")

  def _factor_quantity(self, entry: FuelEntry, gallons: float, factor: FactorMatch) -> float:
    """Quantity in the unit the fuel's factor is expressed in."""
    if normalize_unit(factor.unit) != "cubic feet":
      return convert(gallons, "gallons", factor.unit)
    method = entry.method
    if isinstance(method, FuelAmount) and normalize_unit(method.unit) in GAS_VOLUME_UNITS:
      return UnitConverter.volume_to_cubic_feet(method.amount, method.unit)
    return gallons / NATURAL_GAS_GALLONS_PER_CUBIC_FOOT

  def resolve(self, entry: FuelEntry) -> EmissionResult:
    factor = self.registry.fuel(entry.fuel_type)
    gallons, description = self.fuel_gallons(entry)
    co2e = self._factor_quantity(entry, gallons, factor) * factor.value
    return EmissionResult(
      entry_id=entry.id,
      co2e=co2e,
      quantity=gallons,
      unit="gallons",
      factor=factor.value,
      classification={
        "fuel_type": entry.fuel_type,
        "equipment_category": self.registry.equipment_category(entry.equipment_type),
        "factor_key": factor.key,
        "factor_unit": factor.unit,
        "calculation_method": entry.method.name,
      },
      method=description,
    )

  def row(self, entry: FuelEntry, result: EmissionResult) -> Dict[str, Any]:
    return {
      "co2e": result.co2e,
      "gallons": result.quantity,
      "equipment_category": result.classification["equipment_category"],
      "fuel_type": entry.fuel_type,
    }

  def totals(self, frame: pd.DataFrame) -> FuelTotals:
    by_category = {"Vehicle": 0.0, "Equipment": 0.0}
    by_category.update(group_sum(frame, "equipment_category"))
    return FuelTotals(
      total_co2e=column_sum(frame, "co2e"),
      total_fuel_gallons=column_sum(frame, "gallons"),
      by_equipment_category=by_category,
      by_fuel_type=group_sum(frame, "fuel_type"),
    )
