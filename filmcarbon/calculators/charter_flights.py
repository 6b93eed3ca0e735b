from typing import Any, Dict, Tuple

import pandas as pd

from ..exceptions import MissingDerivationInput
from ..inputs import Category, CharterDistance, CharterFlightsEntry, CharterFuel, CharterHours
from ..results import CharterFlightsTotals, EmissionResult
from ..unitconverter import UnitConverter
from .base import CategoryCalculator, column_sum, group_sum, register


@register(Category.CHARTER_FLIGHTS)
class CharterFlightsCalculator(CategoryCalculator):
  totals_type = CharterFlightsTotals

  def fuel_gallons(self, entry: CharterFlightsEntry, aircraft: Dict[str, Any]) -> Tuple[float, Dict[str, float]]:
    method = entry.method
    if isinstance(method, CharterFuel):
      if method.amount is None or not method.unit:
        raise MissingDerivationInput("fuel", "fuel amount and unit")
      return UnitConverter.volume_to_gallons(method.amount, method.unit), {}
    if isinstance(method, CharterHours):
      if method.hours is None:
        raise MissingDerivationInput("hours", "hours flown")
      return method.hours * float(aircraft["gallons_per_hour"]), {"hours_flown": float(method.hours)}
    if isinstance(method, CharterDistance):
      if method.distance is None or not method.unit:
        raise MissingDerivationInput("distance", "distance flown and unit")
      miles = UnitConverter.distance_to_miles(method.distance, method.unit)
      return miles / float(aircraft["miles_per_gallon"]), {"distance_miles": miles}
    raise MissingDerivationInput(type(method).__name__, "a known charter calculation method")

  def resolve(self, entry: CharterFlightsEntry) -> EmissionResult:
    aircraft = self.registry.aircraft(entry.aircraft_type)
    gallons, detail = self.fuel_gallons(entry, aircraft)
    factor = float(aircraft["factor_per_gallon"])
    return EmissionResult(
      entry_id=entry.id,
      co2e=gallons * factor,
      quantity=gallons,
      unit="gallons",
      factor=factor,
      classification={
        "aircraft_type": entry.aircraft_type,
        "fuel_type": str(aircraft["fuel_type"]),
        "calculation_method": entry.method.name,
      },
      detail=detail,
      method=entry.method.name,
    )

  def row(self, entry: CharterFlightsEntry, result: EmissionResult) -> Dict[str, Any]:
    return {
      "co2e": result.co2e,
      "gallons": result.quantity,
      "hours": result.detail.get("hours_flown", 0.0),
      "miles": result.detail.get("distance_miles", 0.0),
      "aircraft_type": entry.aircraft_type,
      "calculation_method": entry.method.name,
    }

  def totals(self, frame: pd.DataFrame) -> CharterFlightsTotals:
    return CharterFlightsTotals(
      total_co2e=column_sum(frame, "co2e"),
      total_fuel_gallons=column_sum(frame, "gallons"),
      total_hours_flown=column_sum(frame, "hours"),
      total_distance_flown=column_sum(frame, "miles"),
      by_aircraft_type=group_sum(frame, "aircraft_type"),
      by_calculation_method=group_sum(frame, "calculation_method"),
    )
