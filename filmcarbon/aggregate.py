import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .inputs import Category
from .results import CalculationOutput, EntryError
from .scopes import ModuleScopeBreakdown, ScopeBreakdown, classify_scopes, module_scope_breakdowns


@dataclass
class ProductionSummary:
  total_co2e: float = 0.0
  by_category: Dict[str, float] = field(default_factory=lambda: {c.value: 0.0 for c in Category})
  percentages: Dict[str, float] = field(default_factory=lambda: {c.value: 0.0 for c in Category})
  scopes: ScopeBreakdown = field(default_factory=ScopeBreakdown)
  module_breakdowns: List[ModuleScopeBreakdown] = field(default_factory=list)
  errors: Dict[str, List[EntryError]] = field(default_factory=dict)
  calculated_at: Optional[dt.datetime] = None

  @property
  def error_count(self) -> int:
    return sum(len(errors) for errors in self.errors.values())

  def to_dict(self) -> Dict[str, Any]:
    return {
      "total_co2e": self.total_co2e,
      "by_category": dict(self.by_category),
      "percentages": dict(self.percentages),
      "scopes": self.scopes.to_dict(),
      "module_breakdowns": [m.to_dict() for m in self.module_breakdowns],
      "errors": {k: [e.to_dict() for e in v] for k, v in self.errors.items()},
      "calculated_at": self.calculated_at.isoformat() if self.calculated_at else None,
    }


def aggregate(outputs: Mapping[Category, Optional[CalculationOutput]]) -> ProductionSummary:
  totals = {}
  by_category = {c.value: 0.0 for c in Category}
  errors: Dict[str, List[EntryError]] = {}
  for category in Category:
    output = outputs.get(category)
    if output is None:
      continue
    totals[category] = output.totals
    by_category[category.value] = output.totals.total_co2e
    if output.errors:
      errors[category.value] = list(output.errors)

  scopes = classify_scopes(totals)
  grand_total = sum(by_category.values())
  percentages = {
    key: (value / grand_total * 100.0 if grand_total > 0 else 0.0) for key, value in by_category.items()
  }
  return ProductionSummary(
    total_co2e=grand_total,
    by_category=by_category,
    percentages=percentages,
    scopes=scopes,
    module_breakdowns=module_scope_breakdowns(totals),
    errors=errors,
    calculated_at=dt.datetime.now(dt.timezone.utc),
  )
