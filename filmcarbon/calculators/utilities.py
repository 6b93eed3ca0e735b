"""Utilities: grid electricity plus on-site heating (natural gas, fuel oil).

Electricity is canonicalised to kWh, natural gas to cubic feet and fuel oil to
US gallons. Area-based estimates use CBECS annual intensities per square foot,
pro-rated by days occupied.
"""
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from ..exceptions import MissingDerivationInput, UnsupportedConversion
from ..factor import FactorMatch
from ..inputs import Category, ElectricityByArea, ElectricityUsage, HeatByArea, HeatUsage, UtilitiesEntry
from ..results import EmissionResult, UtilitiesTotals
from ..unitconverter import UnitConverter, convert, family_of
from .base import CategoryCalculator, column_sum, group_sum, in_factor_unit, register

NATURAL_GAS_BTU_PER_CUBIC_FOOT = 1037.0
FUEL_OIL_BTU_PER_GALLON = 138500.0
DAYS_PER_YEAR = 365.0

NO_HEAT_FUELS = ("None", "Inc. in Elec.")
HEAT_CANONICAL = {
  "Natural Gas": ("cubic feet", "natural_gas_cf_per_sqft", NATURAL_GAS_BTU_PER_CUBIC_FOOT),
  "Fuel Oil": ("gallons", "fuel_oil_gallons_per_sqft", FUEL_OIL_BTU_PER_GALLON),
}


@register(Category.UTILITIES)
class UtilitiesCalculator(CategoryCalculator):
  totals_type = UtilitiesTotals

  def _square_feet(self, entry: UtilitiesEntry) -> float:
    if entry.area is None or not entry.area_unit:
      raise MissingDerivationInput("area", "area and area_unit")
    return UnitConverter.area_to_square_feet(entry.area, entry.area_unit)

  def _occupancy(self, entry: UtilitiesEntry) -> float:
    days = entry.days_occupied or self.settings.default_days_occupied
    return float(days) / DAYS_PER_YEAR

  def electricity_kwh(self, entry: UtilitiesEntry) -> Tuple[float, str]:
    method = entry.electricity
    if isinstance(method, ElectricityUsage):
      if method.amount is None:
        raise MissingDerivationInput("usage", "electricity usage amount")
      return UnitConverter.energy_to_kwh(method.amount, method.unit or "kWh"), "Electricity: Direct usage"
    if isinstance(method, ElectricityByArea):
      intensity = self.registry.building_intensity(entry.building_type)
      kwh = float(intensity["electricity_kwh_per_sqft"]) * self._square_feet(entry) * self._occupancy(entry)
      return kwh, f"Electricity: Area-based ({entry.building_type})"
    return 0.0, ""

  def heat_quantity(self, entry: UtilitiesEntry) -> Tuple[float, str, str]:
    """Heating fuel consumed in its canonical unit, with the method description."""
    method = entry.heat
    if entry.heat_fuel in NO_HEAT_FUELS or not isinstance(method, (HeatUsage, HeatByArea)):
      return 0.0, "", ""
    # raises FactorNotFound for an unknown heat fuel before any derivation
    self.registry.heating(entry.heat_fuel)
    canonical, intensity_column, btu_per_unit = HEAT_CANONICAL[entry.heat_fuel]
    if isinstance(method, HeatByArea):
      intensity = self.registry.building_intensity(entry.building_type)
      quantity = float(intensity[intensity_column]) * self._square_feet(entry) * self._occupancy(entry)
      return quantity, canonical, f"Heating: Area-based ({entry.building_type}, {entry.heat_fuel})"
    if method.amount is None or not method.unit:
      raise MissingDerivationInput("usage", f"{entry.heat_fuel} usage amount and unit")
    family = family_of(method.unit)
    if family == "volume":
      quantity = convert(method.amount, method.unit, canonical)
    elif family == "energy":
      quantity = convert(method.amount, method.unit, "btu") / btu_per_unit
    else:
      raise UnsupportedConversion(method.unit, canonical)
    return quantity, canonical, f"Heating: Direct usage ({entry.heat_fuel})"

  def resolve(self, entry: UtilitiesEntry) -> EmissionResult:
    kwh, elec_description = self.electricity_kwh(entry)
    grid = self.registry.electricity(entry.country, entry.state_province)
    electricity_co2e = kwh * grid.value

    heat_amount, heat_unit, heat_description = self.heat_quantity(entry)
    heat_co2e = 0.0
    heat_factor: Optional[FactorMatch] = None
    if heat_unit:
      heat_factor = self.registry.heating(entry.heat_fuel)
      heat_co2e = in_factor_unit(heat_amount, heat_unit, heat_factor) * heat_factor.value

    classification: Dict[str, Any] = {
      "region": grid.key_path[-1],
      "factor_key": grid.key,
      "building_type": entry.building_type,
      "heat_fuel": entry.heat_fuel,
    }
    if heat_factor is not None:
      classification["heat_factor_key"] = heat_factor.key
    description = " | ".join(d for d in (elec_description, heat_description) if d)
    return EmissionResult(
      entry_id=entry.id,
      co2e=electricity_co2e + heat_co2e,
      quantity=kwh,
      unit="kWh",
      factor=grid.value,
      classification=classification,
      detail={
        "electricity_co2e": electricity_co2e,
        "heat_co2e": heat_co2e,
        "natural_gas_cubic_feet": heat_amount if heat_unit == "cubic feet" else 0.0,
        "fuel_oil_gallons": heat_amount if heat_unit == "gallons" else 0.0,
        "heat_factor": heat_factor.value if heat_factor else 0.0,
      },
      method=description or "No calculations",
    )

  def row(self, entry: UtilitiesEntry, result: EmissionResult) -> Dict[str, Any]:
    return {
      "co2e": result.co2e,
      "kwh": result.quantity,
      "electricity_co2e": result.detail["electricity_co2e"],
      "heat_co2e": result.detail["heat_co2e"],
      "natural_gas_cubic_feet": result.detail["natural_gas_cubic_feet"],
      "fuel_oil_gallons": result.detail["fuel_oil_gallons"],
      "building_type": entry.building_type,
      "country": entry.country or "Unspecified",
    }

  def totals(self, frame: pd.DataFrame) -> UtilitiesTotals:
    return UtilitiesTotals(
      total_co2e=column_sum(frame, "co2e"),
      electricity_co2e=column_sum(frame, "electricity_co2e"),
      heat_co2e=column_sum(frame, "heat_co2e"),
      total_electricity_kwh=column_sum(frame, "kwh"),
      total_natural_gas_cubic_feet=column_sum(frame, "natural_gas_cubic_feet"),
      total_fuel_oil_gallons=column_sum(frame, "fuel_oil_gallons"),
      by_building_type=group_sum(frame, "building_type"),
      by_country=group_sum(frame, "country"),
    )
