import logging
from functools import lru_cache
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from .config import EngineSettings, get_settings
from .exceptions import FactorNotFound, FactorTableError

logger = logging.getLogger(__name__)

FACTORS_VERSION = "4.2.9"
FACTORS_SOURCE = "DEFRA 2023 / IEA 2023 / EPA eGRID2022 / Canada NIR 2023"

# only these countries sub-divide their grid factor by state/province
REGIONAL_GRID_COUNTRIES = ("United States", "Canada")
REGION_SEPARATOR = " - "

TABLE_COLUMNS: Dict[str, set] = {
  "factors": {"category", "subcategory", "region", "factor", "unit", "source", "year"},
  "buildings": {"building_type", "electricity_kwh_per_sqft", "natural_gas_cf_per_sqft", "fuel_oil_gallons_per_sqft"},
  "rooms": {"room_type", "kwh_per_year"},
  "aircraft": {"aircraft_type", "gallons_per_hour", "miles_per_gallon", "factor_per_gallon"},
  "equipment": {"equipment_type", "equipment_category", "miles_per_gallon"},
}

TABLE_FILES: Dict[str, str] = {
  "factors": "emission_factors.csv",
  "buildings": "building_intensity.csv",
  "rooms": "hotel_energy.csv",
  "aircraft": "aircraft.csv",
  "equipment": "equipment.csv",
}


@dataclass(frozen=True)
class FactorMatch:
  value: float
  unit: str
  key_path: Tuple[str, ...]
  source: str = ""
  year: Optional[int] = None

  @property
  def key(self) -> str:
    return " / ".join(self.key_path)


def region_key(country: str, state: Optional[str] = None) -> str:
  if state and country in REGIONAL_GRID_COUNTRIES:
    return f"{country}{REGION_SEPARATOR}{state}"
  return country


class FactorRegistry:
  def __init__(
    self,
    df: pd.DataFrame,
    tables: Optional[Mapping[str, pd.DataFrame]] = None,
    version: str = FACTORS_VERSION,
    source: str = FACTORS_SOURCE,
    global_region: str = "World",
    default_mpg: float = 20.0,
  ):
    self.df = df.copy()
    self.tables: Dict[str, pd.DataFrame] = {"factors": self.df}
    for name, table in (tables or {}).items():
      self.tables[name] = table.copy()
    self.factors_version = version
    self.source = source
    self.global_region = global_region
    self.default_mpg = default_mpg
    self._validate()

  def _validate(self):
    for name, frame in self.tables.items():
      required = TABLE_COLUMNS.get(name, set())
      missing = required - set(frame.columns)
      if missing:
        raise FactorTableError(f"Missing columns in {name} table: {sorted(missing)}", {"table": name})

  def table(self, name: str) -> pd.DataFrame:
    if name not in self.tables:
      raise KeyError(f"Unknown factor table: {name}")
    return self.tables[name].copy()

  def table_names(self) -> List[str]:
    return sorted(self.tables)

  def lookup(
    self, category: str, subcategory: str, regions: Sequence[str] = ("GLOBAL",), key: str = "subcategory"
  ) -> FactorMatch:
    rows = self.df[(self.df["category"] == category) & (self.df["subcategory"] == subcategory)]
    if rows.empty:
      raise FactorNotFound(category, key, subcategory)
    for region in regions:
      candidates = rows[rows["region"] == region]
      if candidates.empty:
        continue
      row = candidates.sort_values("year", ascending=False, kind="stable").iloc[0]
      return FactorMatch(
        value=float(row["factor"]),
        unit=str(row["unit"]),
        key_path=(category, subcategory, region),
        source=str(row["source"]),
        year=int(row["year"]),
      )
    raise FactorNotFound(category, "region", regions[0] if regions else None)

  def electricity(self, country: Optional[str] = None, state: Optional[str] = None) -> FactorMatch:
    regions: List[str] = []
    if country:
      if state and country in REGIONAL_GRID_COUNTRIES:
        regions.append(region_key(country, state))
      regions.append(country)
    regions.append(self.global_region)
    match = self.lookup("electricity", "grid", regions)
    if match.key_path[-1] != regions[0]:
      logger.debug("Electricity factor for %r fell back to %r", regions[0], match.key_path[-1])
    return match

  def heating(self, heat_fuel: str) -> FactorMatch:
    return self.lookup("heating", heat_fuel, key="heat_fuel")

  def fuel(self, fuel_type: str) -> FactorMatch:
    return self.lookup("fuel", fuel_type, key="fuel_type")

  def travel(self, subcategory: str) -> FactorMatch:
    return self.lookup("travel", subcategory, key="transport_type")

  def _row(self, table: str, column: str, value: Any) -> Dict[str, Any]:
    frame = self.tables.get(table)
    if frame is None:
      raise FactorNotFound(table, column, value)
    rows = frame[frame[column] == value]
    if rows.empty:
      raise FactorNotFound(table, column, value)
    return rows.iloc[0].to_dict()

  def building_intensity(self, building_type: str) -> Dict[str, Any]:
    return self._row("buildings", "building_type", building_type)

  def room_energy(self, room_type: str) -> Dict[str, Any]:
    return self._row("rooms", "room_type", room_type)

  def aircraft(self, aircraft_type: str) -> Dict[str, Any]:
    return self._row("aircraft", "aircraft_type", aircraft_type)

  def equipment_category(self, equipment_type: str) -> str:
    try:
      return str(self._row("equipment", "equipment_type", equipment_type)["equipment_category"])
    except FactorNotFound:
      return "Equipment"

  def vehicle_mpg(self, equipment_type: str) -> float:
    try:
      mpg = self._row("equipment", "equipment_type", equipment_type)["miles_per_gallon"]
    except FactorNotFound:
      return self.default_mpg
    if pd.isna(mpg) or float(mpg) <= 0:
      return self.default_mpg
    return float(mpg)


def load_registry(directory: Path, settings: Optional[EngineSettings] = None) -> FactorRegistry:
  settings = settings or get_settings()
  directory = Path(directory)
  frames = {}
  for name, filename in TABLE_FILES.items():
    path = directory / filename
    if not path.exists():
      raise FactorTableError(f"Factor table not found: {path}", {"table": name, "path": str(path)})
    frames[name] = pd.read_csv(path)
  factors = frames.pop("factors")
  return FactorRegistry(
    factors,
    tables=frames,
    global_region=settings.global_region,
    default_mpg=settings.default_mpg,
  )


def load_default_registry(settings: Optional[EngineSettings] = None) -> FactorRegistry:
  settings = settings or get_settings()
  return load_registry(settings.factors_dir, settings)


@lru_cache(maxsize=1)
def default_registry() -> FactorRegistry:
  return load_default_registry()
