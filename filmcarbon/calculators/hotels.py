from typing import Any, Dict

import pandas as pd

from ..exceptions import MissingDerivationInput
from ..inputs import Category, HotelsEntry
from ..results import EmissionResult, HotelsTotals
from .base import CategoryCalculator, column_sum, group_sum, register

DAYS_PER_YEAR = 365.0


@register(Category.HOTELS)
class HotelsCalculator(CategoryCalculator):
  """CO2e = grid factor x annual kWh for the room type x (room nights / 365)."""

  totals_type = HotelsTotals

  def resolve(self, entry: HotelsEntry) -> EmissionResult:
    room = self.registry.room_energy(entry.room_type)
    if entry.total_nights is None:
      raise MissingDerivationInput("nights", "total room nights")
    grid = self.registry.electricity(entry.country, entry.state_province)
    kwh_per_year = float(room["kwh_per_year"])
    kwh = kwh_per_year * (entry.total_nights / DAYS_PER_YEAR)
    return EmissionResult(
      entry_id=entry.id,
      co2e=kwh * grid.value,
      quantity=kwh,
      unit="kWh",
      factor=grid.value,
      classification={
        "region": grid.key_path[-1],
        "factor_key": grid.key,
        "room_type": entry.room_type,
      },
      detail={"kwh_per_year": kwh_per_year, "nights": float(entry.total_nights)},
      method=f"{entry.total_nights:g} nights @ {kwh_per_year:g} kWh/year",
    )

  def row(self, entry: HotelsEntry, result: EmissionResult) -> Dict[str, Any]:
    return {
      "co2e": result.co2e,
      "nights": result.detail["nights"],
      "room_type": entry.room_type,
      "country": entry.country or "Unspecified",
    }

  def totals(self, frame: pd.DataFrame) -> HotelsTotals:
    return HotelsTotals(
      total_co2e=column_sum(frame, "co2e"),
      total_nights=column_sum(frame, "nights"),
      by_room_type=group_sum(frame, "room_type"),
      by_country=group_sum(frame, "country"),
    )
