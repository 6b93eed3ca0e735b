from typing import Any, Dict

import pandas as pd

from ..exceptions import MissingDerivationInput
from ..inputs import Category, EVChargingEntry
from ..results import EmissionResult, EVChargingTotals
from .base import CategoryCalculator, column_sum, group_sum, register


@register(Category.EV_CHARGING)
class EVChargingCalculator(CategoryCalculator):
  totals_type = EVChargingTotals

  def resolve(self, entry: EVChargingEntry) -> EmissionResult:
    if entry.electricity_kwh is None:
      raise MissingDerivationInput("usage", "electricity usage in kWh")
    grid = self.registry.electricity(entry.country, entry.state_province)
    return EmissionResult(
      entry_id=entry.id,
      co2e=entry.electricity_kwh * grid.value,
      quantity=float(entry.electricity_kwh),
      unit="kWh",
      factor=grid.value,
      classification={"region": grid.key_path[-1], "factor_key": grid.key},
      method="Charging: Direct usage",
    )

  def row(self, entry: EVChargingEntry, result: EmissionResult) -> Dict[str, Any]:
    return {
      "co2e": result.co2e,
      "kwh": result.quantity,
      "miles": entry.miles_driven or 0.0,
      "country": entry.country or "Unspecified",
    }

  def totals(self, frame: pd.DataFrame) -> EVChargingTotals:
    return EVChargingTotals(
      total_co2e=column_sum(frame, "co2e"),
      total_electricity_kwh=column_sum(frame, "kwh"),
      total_miles_driven=column_sum(frame, "miles"),
      by_country=group_sum(frame, "country"),
    )
