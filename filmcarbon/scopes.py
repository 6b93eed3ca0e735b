"""Scope 1/2/3 classification by operational control.

Scope 1: utilities heating (natural gas, fuel oil) and all fuel combustion.
Scope 2: utilities grid electricity and EV charging.
Scope 3: hotels & housing, commercial travel and charter flights.

Utilities is the only category split across two scopes. Missing categories
contribute zero.
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .inputs import Category
from .results import CategoryTotals, UtilitiesTotals

SCOPE_DESCRIPTIONS = {
  1: "Direct emissions from owned or controlled sources (fuel combustion in generators, production vehicles, facility heating)",
  2: "Indirect emissions from purchased electricity (grid electricity at facilities, EV charging)",
  3: "All other indirect emissions (hotels, commercial travel, charter flights)",
}

MODULE_SCOPES: Dict[Category, Tuple[int, str]] = {
  Category.UTILITIES: (1, "Electricity (Scope 2), Natural Gas & Fuel Oil (Scope 1)"),
  Category.FUEL: (1, "Scope 1: Direct fuel combustion in generators and production vehicles"),
  Category.EV_CHARGING: (2, "Scope 2: Grid electricity for vehicle charging"),
  Category.HOTELS: (3, "Scope 3: Crew accommodation (business travel)"),
  Category.COMMERCIAL_TRAVEL: (3, "Scope 3: Business travel (flights, rail, ferry)"),
  Category.CHARTER_FLIGHTS: (3, "Scope 3: Charter services (when not operationally controlled)"),
}


@dataclass(frozen=True)
class ScopeBreakdown:
  scope1: float = 0.0
  scope2: float = 0.0
  scope3: float = 0.0
  total: float = 0.0

  def to_dict(self) -> Dict[str, float]:
    return asdict(self)


@dataclass(frozen=True)
class ModuleScopeBreakdown:
  module_name: str
  scope1: float
  scope2: float
  scope3: float
  total: float

  def to_dict(self) -> Dict[str, Any]:
    return asdict(self)


TotalsByCategory = Mapping[Category, Optional[CategoryTotals]]


def category_scopes(category: Category, totals: Optional[CategoryTotals]) -> Tuple[float, float, float]:
  if totals is None:
    return 0.0, 0.0, 0.0
  if category is Category.UTILITIES:
    if isinstance(totals, UtilitiesTotals):
      return totals.heat_co2e, totals.electricity_co2e, 0.0
    return 0.0, totals.total_co2e, 0.0
  primary = MODULE_SCOPES[category][0]
  split = [0.0, 0.0, 0.0]
  split[primary - 1] = totals.total_co2e
  return split[0], split[1], split[2]


def classify_scopes(totals_by_category: TotalsByCategory) -> ScopeBreakdown:
  scope1 = scope2 = scope3 = 0.0
  for category in Category:
    s1, s2, s3 = category_scopes(category, totals_by_category.get(category))
    scope1 += s1
    scope2 += s2
    scope3 += s3
  return ScopeBreakdown(scope1=scope1, scope2=scope2, scope3=scope3, total=scope1 + scope2 + scope3)


def module_scope_breakdowns(totals_by_category: TotalsByCategory) -> List[ModuleScopeBreakdown]:
  breakdowns = []
  for category in Category:
    totals = totals_by_category.get(category)
    if totals is None or totals.total_co2e <= 0:
      continue
    s1, s2, s3 = category_scopes(category, totals)
    breakdowns.append(ModuleScopeBreakdown(category.label, s1, s2, s3, s1 + s2 + s3))
  return breakdowns


def scope_description(scope: int) -> str:
  if scope not in SCOPE_DESCRIPTIONS:
    raise ValueError(f"Unknown scope: {scope}")
  return SCOPE_DESCRIPTIONS[scope]


def module_scope_classification(category: Category) -> Dict[str, Any]:
  primary, description = MODULE_SCOPES[Category(category)]
  return {"primary_scope": primary, "description": description}
