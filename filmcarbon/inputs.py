"""Activity entries, one frozen dataclass per category.

Entries that can be quantified in more than one way carry an explicit method
value (``FuelAmount``, ``FuelMileage``, ``FuelCost`` ...). Each method holds
only the fields it needs; a field left as ``None`` is reported by the
calculator as a missing derivation input.
"""
import datetime as dt
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Optional, Union

import pandas as pd


def new_entry_id() -> str:
  return uuid.uuid4().hex


class Category(str, Enum):
  UTILITIES = "utilities"
  FUEL = "fuel"
  EV_CHARGING = "ev_charging"
  HOTELS = "hotels"
  COMMERCIAL_TRAVEL = "commercial_travel"
  CHARTER_FLIGHTS = "charter_flights"

  @property
  def label(self) -> str:
    return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
  Category.UTILITIES: "Utilities",
  Category.FUEL: "Fuel",
  Category.EV_CHARGING: "EV Charging",
  Category.HOTELS: "Hotels & Housing",
  Category.COMMERCIAL_TRAVEL: "Commercial Travel",
  Category.CHARTER_FLIGHTS: "Charter Flights",
}


# Utilities

@dataclass(frozen=True)
class ElectricityUsage:
  amount: Optional[float]
  unit: str = "kWh"
  name: ClassVar[str] = "usage"


@dataclass(frozen=True)
class ElectricityByArea:
  name: ClassVar[str] = "area"


@dataclass(frozen=True)
class NoElectricity:
  name: ClassVar[str] = "none"


@dataclass(frozen=True)
class HeatUsage:
  amount: Optional[float]
  unit: Optional[str] = None
  name: ClassVar[str] = "usage"


@dataclass(frozen=True)
class HeatByArea:
  name: ClassVar[str] = "area"


@dataclass(frozen=True)
class NoHeat:
  name: ClassVar[str] = "none"


ElectricityMethod = Union[ElectricityUsage, ElectricityByArea, NoElectricity]
HeatMethod = Union[HeatUsage, HeatByArea, NoHeat]


@dataclass(frozen=True)
class UtilitiesEntry:
  location_name: str
  building_type: str
  electricity: ElectricityMethod = NoElectricity()
  heat_fuel: str = "None"
  heat: HeatMethod = NoHeat()
  country: Optional[str] = None
  state_province: Optional[str] = None
  area: Optional[float] = None
  area_unit: Optional[str] = None
  days_occupied: Optional[int] = None
  description: Optional[str] = None
  date: Optional[dt.date] = None
  id: str = field(default_factory=new_entry_id)


# Fuel

@dataclass(frozen=True)
class FuelAmount:
  amount: Optional[float]
  unit: Optional[str] = "gallons"
  name: ClassVar[str] = "amount"


@dataclass(frozen=True)
class FuelMileage:
  miles: Optional[float]
  name: ClassVar[str] = "mileage"


@dataclass(frozen=True)
class FuelCost:
  total_cost: Optional[float]
  price_per_gallon: Optional[float]
  name: ClassVar[str] = "cost"


FuelMethod = Union[FuelAmount, FuelMileage, FuelCost]


@dataclass(frozen=True)
class FuelEntry:
  equipment_type: str
  fuel_type: str
  method: FuelMethod
  reason_for_use: Optional[str] = None
  end_date: Optional[dt.date] = None
  date: Optional[dt.date] = None
  id: str = field(default_factory=new_entry_id)


# EV charging

@dataclass(frozen=True)
class EVChargingEntry:
  country: str
  electricity_kwh: Optional[float]
  state_province: Optional[str] = None
  zip_code: Optional[str] = None
  address: Optional[str] = None
  miles_driven: Optional[float] = None
  description: Optional[str] = None
  date: Optional[dt.date] = None
  id: str = field(default_factory=new_entry_id)


# Hotels & housing

@dataclass(frozen=True)
class HotelsEntry:
  room_type: str
  country: str
  total_nights: Optional[float]
  state_province: Optional[str] = None
  city: Optional[str] = None
  date: Optional[dt.date] = None
  id: str = field(default_factory=new_entry_id)


# Commercial travel

TRANSPORT_TYPES = ("Flight", "National rail", "International rail", "Light rail and tram", "Ferry")


@dataclass(frozen=True)
class CommercialTravelEntry:
  transport_type: str
  passenger_distance: Optional[float] = None
  distance_unit: str = "miles"
  departure_city: Optional[str] = None
  arrival_city: Optional[str] = None
  description: Optional[str] = None
  date: Optional[dt.date] = None
  id: str = field(default_factory=new_entry_id)


# Charter & helicopter flights

@dataclass(frozen=True)
class CharterFuel:
  amount: Optional[float]
  unit: Optional[str] = "gallons"
  name: ClassVar[str] = "fuel"


@dataclass(frozen=True)
class CharterHours:
  hours: Optional[float]
  name: ClassVar[str] = "hours"


@dataclass(frozen=True)
class CharterDistance:
  distance: Optional[float]
  unit: Optional[str] = "miles"
  name: ClassVar[str] = "distance"


CharterMethod = Union[CharterFuel, CharterHours, CharterDistance]


@dataclass(frozen=True)
class CharterFlightsEntry:
  aircraft_type: str
  method: CharterMethod
  model: Optional[str] = None
  description: Optional[str] = None
  date: Optional[dt.date] = None
  id: str = field(default_factory=new_entry_id)


ENTRY_TYPES = {
  Category.UTILITIES: UtilitiesEntry,
  Category.FUEL: FuelEntry,
  Category.EV_CHARGING: EVChargingEntry,
  Category.HOTELS: HotelsEntry,
  Category.COMMERCIAL_TRAVEL: CommercialTravelEntry,
  Category.CHARTER_FLIGHTS: CharterFlightsEntry,
}


def category_of(entry: Any) -> Category:
  for category, cls in ENTRY_TYPES.items():
    if isinstance(entry, cls):
      return category
  raise TypeError(f"Not an activity entry: {type(entry).__name__}")


# Flat records (as produced by an import collaborator)

def _num(record: Mapping[str, Any], key: str) -> Optional[float]:
  value = record.get(key)
  if value is None or (isinstance(value, str) and not value.strip()):
    return None
  if isinstance(value, float) and pd.isna(value):
    return None
  return float(value)


def _text(record: Mapping[str, Any], key: str, default: Optional[str] = None) -> Optional[str]:
  value = record.get(key)
  if value is None or (isinstance(value, float) and pd.isna(value)):
    return default
  value = str(value)
  return value if value.strip() else default


def _date(record: Mapping[str, Any], key: str = "date") -> Optional[dt.date]:
  value = record.get(key)
  if value is None or (isinstance(value, str) and not value.strip()):
    return None
  if isinstance(value, dt.datetime):
    return value.date()
  if isinstance(value, dt.date):
    return value
  return pd.Timestamp(value).date()


def _common(record: Mapping[str, Any]) -> Dict[str, Any]:
  common: Dict[str, Any] = {"date": _date(record)}
  if record.get("id"):
    common["id"] = str(record["id"])
  return common


def _electricity_method(record: Mapping[str, Any]) -> ElectricityMethod:
  flag = _text(record, "electricity_method", "none")
  if flag == "usage":
    return ElectricityUsage(_num(record, "electricity_usage"), _text(record, "electricity_unit", "kWh"))
  if flag == "area":
    return ElectricityByArea()
  if flag == "none":
    return NoElectricity()
  raise ValueError(f"Unknown electricity method: {flag!r}")


def _heat_method(record: Mapping[str, Any]) -> HeatMethod:
  flag = _text(record, "heat_method", "none")
  if flag == "usage":
    fuel = _text(record, "heat_fuel")
    if fuel == "Natural Gas":
      return HeatUsage(_num(record, "natural_gas_usage"), _text(record, "natural_gas_unit"))
    if fuel == "Fuel Oil":
      return HeatUsage(_num(record, "fuel_oil_usage"), _text(record, "fuel_oil_unit"))
    return HeatUsage(_num(record, "heat_usage"), _text(record, "heat_unit"))
  if flag == "area":
    return HeatByArea()
  if flag == "none":
    return NoHeat()
  raise ValueError(f"Unknown heat method: {flag!r}")


def _fuel_method(record: Mapping[str, Any]) -> FuelMethod:
  flag = _text(record, "calculation_method")
  if flag == "amount":
    return FuelAmount(_num(record, "fuel_amount"), _text(record, "fuel_unit"))
  if flag == "mileage":
    return FuelMileage(_num(record, "miles_driven"))
  if flag == "cost":
    return FuelCost(_num(record, "total_cost"), _num(record, "average_price_per_gallon"))
  raise ValueError(f"Unknown fuel calculation method: {flag!r}")


def _charter_method(record: Mapping[str, Any]) -> CharterMethod:
  flag = _text(record, "calculation_method")
  if flag == "fuel":
    return CharterFuel(_num(record, "fuel_amount"), _text(record, "fuel_unit"))
  if flag == "hours":
    return CharterHours(_num(record, "hours_flown"))
  if flag == "distance":
    return CharterDistance(_num(record, "distance_flown"), _text(record, "distance_unit"))
  raise ValueError(f"Unknown charter calculation method: {flag!r}")


def entry_from_record(category: Category, record: Mapping[str, Any]) -> Any:
  category = Category(category)
  common = _common(record)
  if category is Category.UTILITIES:
    return UtilitiesEntry(
      location_name=_text(record, "location_name", ""),
      building_type=_text(record, "building_type", "Other"),
      electricity=_electricity_method(record),
      heat_fuel=_text(record, "heat_fuel", "None"),
      heat=_heat_method(record),
      country=_text(record, "country"),
      state_province=_text(record, "state_province"),
      area=_num(record, "area"),
      area_unit=_text(record, "area_unit"),
      days_occupied=_num(record, "days_occupied"),
      description=_text(record, "description"),
      **common,
    )
  if category is Category.FUEL:
    return FuelEntry(
      equipment_type=_text(record, "equipment_type", "Other"),
      fuel_type=_text(record, "fuel_type", ""),
      method=_fuel_method(record),
      reason_for_use=_text(record, "reason_for_use"),
      end_date=_date(record, "end_date"),
      **common,
    )
  if category is Category.EV_CHARGING:
    return EVChargingEntry(
      country=_text(record, "country", ""),
      electricity_kwh=_num(record, "electricity_usage_kwh"),
      state_province=_text(record, "state_province"),
      zip_code=_text(record, "zip_code"),
      address=_text(record, "address"),
      miles_driven=_num(record, "miles_driven"),
      description=_text(record, "description"),
      **common,
    )
  if category is Category.HOTELS:
    return HotelsEntry(
      room_type=_text(record, "room_type", ""),
      country=_text(record, "country", ""),
      total_nights=_num(record, "total_nights"),
      state_province=_text(record, "state_province"),
      city=_text(record, "city"),
      **common,
    )
  if category is Category.COMMERCIAL_TRAVEL:
    return CommercialTravelEntry(
      transport_type=_text(record, "transport_type", ""),
      passenger_distance=_num(record, "passenger_distance"),
      distance_unit=_text(record, "distance_unit", "miles"),
      departure_city=_text(record, "departure_city"),
      arrival_city=_text(record, "arrival_city"),
      description=_text(record, "description"),
      **common,
    )
  return CharterFlightsEntry(
    aircraft_type=_text(record, "aircraft_type", ""),
    method=_charter_method(record),
    model=_text(record, "model"),
    description=_text(record, "description"),
    **common,
  )
