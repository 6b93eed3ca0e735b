from typing import Any, Dict, Optional

import pandas as pd

from ..exceptions import FactorNotFound, MissingDerivationInput
from ..inputs import TRANSPORT_TYPES, Category, CommercialTravelEntry
from ..results import CommercialTravelTotals, EmissionResult
from ..unitconverter import UnitConverter
from .base import CategoryCalculator, column_sum, group_sum, register

SHORT_HAUL_LIMIT_MILES = 288.0
LONG_HAUL_LIMIT_MILES = 688.0


def unmeasured_flights(frame: pd.DataFrame) -> int:
  if frame.empty:
    return 0
  return int(((frame["transport_type"] == "Flight") & (frame["distance_known"] == 0)).sum())


def classify_flight(miles: Optional[float]) -> str:
  """Short < 288 mi <= Medium <= 688 mi < Long; Average when the distance is unknown."""
  if miles is None:
    return "Average"
  if miles < SHORT_HAUL_LIMIT_MILES:
    return "Short"
  if miles <= LONG_HAUL_LIMIT_MILES:
    return "Medium"
  return "Long"


@register(Category.COMMERCIAL_TRAVEL)
class CommercialTravelCalculator(CategoryCalculator):
  totals_type = CommercialTravelTotals

  def resolve(self, entry: CommercialTravelEntry) -> EmissionResult:
    if entry.transport_type not in TRANSPORT_TYPES:
      raise FactorNotFound("travel", "transport_type", entry.transport_type)
    miles = None
    if entry.passenger_distance is not None:
      miles = UnitConverter.distance_to_miles(entry.passenger_distance, entry.distance_unit or "miles")

    classification: Dict[str, Any] = {"transport_type": entry.transport_type}
    if entry.transport_type == "Flight":
      tier = classify_flight(miles)
      factor = self.registry.travel(f"Flight - {tier}")
      classification["flight_classification"] = tier
    else:
      if miles is None:
        raise MissingDerivationInput("distance", "passenger distance")
      factor = self.registry.travel(entry.transport_type)
    classification["factor_key"] = factor.key

    # a flight without a distance carries the Average tier and no passenger miles
    quantity = miles if miles is not None else 0.0
    return EmissionResult(
      entry_id=entry.id,
      co2e=quantity * factor.value,
      quantity=quantity,
      unit="miles",
      factor=factor.value,
      classification=classification,
      detail={"distance_known": 1.0 if miles is not None else 0.0},
      method=f"{quantity:g} passenger miles",
    )

  def row(self, entry: CommercialTravelEntry, result: EmissionResult) -> Dict[str, Any]:
    return {
      "co2e": result.co2e,
      "miles": result.quantity,
      "transport_type": entry.transport_type,
      "flight_classification": result.classification.get("flight_classification"),
      "distance_known": result.detail["distance_known"],
    }

  def totals(self, frame: pd.DataFrame) -> CommercialTravelTotals:
    return CommercialTravelTotals(
      total_co2e=column_sum(frame, "co2e"),
      total_passenger_miles=column_sum(frame, "miles"),
      flights_without_distance=unmeasured_flights(frame),
      by_transport_type=group_sum(frame, "transport_type"),
      by_flight_classification=group_sum(frame, "flight_classification"),
    )
