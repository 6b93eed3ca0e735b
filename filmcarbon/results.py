import datetime as dt
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .inputs import Category


@dataclass(frozen=True)
class EmissionResult:
  entry_id: str
  co2e: float
  quantity: float
  unit: str
  factor: float
  classification: Dict[str, Any] = field(default_factory=dict)
  detail: Dict[str, float] = field(default_factory=dict)
  method: str = ""

  def to_dict(self) -> Dict[str, Any]:
    return asdict(self)


@dataclass(frozen=True)
class EntryError:
  entry_id: str
  kind: str
  message: str
  context: Dict[str, Any] = field(default_factory=dict)

  def to_dict(self) -> Dict[str, Any]:
    return asdict(self)


@dataclass
class CategoryTotals:
  total_co2e: float = 0.0

  def to_dict(self) -> Dict[str, Any]:
    return asdict(self)


@dataclass
class UtilitiesTotals(CategoryTotals):
  electricity_co2e: float = 0.0
  heat_co2e: float = 0.0
  total_electricity_kwh: float = 0.0
  total_natural_gas_cubic_feet: float = 0.0
  total_fuel_oil_gallons: float = 0.0
  by_building_type: Dict[str, float] = field(default_factory=dict)
  by_country: Dict[str, float] = field(default_factory=dict)


@dataclass
class FuelTotals(CategoryTotals):
  total_fuel_gallons: float = 0.0
  by_equipment_category: Dict[str, float] = field(default_factory=lambda: {"Vehicle": 0.0, "Equipment": 0.0})
  by_fuel_type: Dict[str, float] = field(default_factory=dict)


@dataclass
class EVChargingTotals(CategoryTotals):
  total_electricity_kwh: float = 0.0
  total_miles_driven: float = 0.0
  by_country: Dict[str, float] = field(default_factory=dict)


@dataclass
class HotelsTotals(CategoryTotals):
  total_nights: float = 0.0
  by_room_type: Dict[str, float] = field(default_factory=dict)
  by_country: Dict[str, float] = field(default_factory=dict)


@dataclass
class CommercialTravelTotals(CategoryTotals):
  total_passenger_miles: float = 0.0
  flights_without_distance: int = 0
  by_transport_type: Dict[str, float] = field(default_factory=dict)
  by_flight_classification: Dict[str, float] = field(default_factory=dict)


@dataclass
class CharterFlightsTotals(CategoryTotals):
  total_fuel_gallons: float = 0.0
  total_hours_flown: float = 0.0
  total_distance_flown: float = 0.0
  by_aircraft_type: Dict[str, float] = field(default_factory=dict)
  by_calculation_method: Dict[str, float] = field(default_factory=dict)


TOTALS_TYPES = {
  Category.UTILITIES: UtilitiesTotals,
  Category.FUEL: FuelTotals,
  Category.EV_CHARGING: EVChargingTotals,
  Category.HOTELS: HotelsTotals,
  Category.COMMERCIAL_TRAVEL: CommercialTravelTotals,
  Category.CHARTER_FLIGHTS: CharterFlightsTotals,
}


@dataclass
class CalculationOutput:
  category: Category
  results: List[EmissionResult]
  totals: CategoryTotals
  errors: List[EntryError] = field(default_factory=list)
  calculated_at: Optional[dt.datetime] = None
  factors_version: str = ""
  source: str = ""

  @property
  def metadata(self) -> Dict[str, Any]:
    return {
      "calculated_at": self.calculated_at.isoformat() if self.calculated_at else None,
      "factors_version": self.factors_version,
      "source": self.source,
    }

  @property
  def skipped_ids(self) -> List[str]:
    return [e.entry_id for e in self.errors]

  def result_for(self, entry_id: str) -> Optional[EmissionResult]:
    for result in self.results:
      if result.entry_id == entry_id:
        return result
    return None

  def to_dict(self) -> Dict[str, Any]:
    return {
      "category": self.category.value,
      "results": [r.to_dict() for r in self.results],
      "totals": self.totals.to_dict(),
      "errors": [e.to_dict() for e in self.errors],
      "metadata": self.metadata,
    }
