"""Flat tables of engine output for export collaborators (CSV, JSON, sheets)."""
from typing import Any, Dict, List

import pandas as pd

from .aggregate import ProductionSummary
from .results import CalculationOutput

RESULT_COLUMNS = ["category", "entry_id", "co2e_kg", "quantity", "unit", "factor", "method"]
ERROR_COLUMNS = ["category", "entry_id", "kind", "message"]


def results_frame(output: CalculationOutput) -> pd.DataFrame:
  rows: List[Dict[str, Any]] = []
  for result in output.results:
    row = {
      "category": output.category.value,
      "entry_id": result.entry_id,
      "co2e_kg": result.co2e,
      "quantity": result.quantity,
      "unit": result.unit,
      "factor": result.factor,
      "method": result.method,
    }
    row.update({f"classification.{k}": v for k, v in result.classification.items()})
    row.update({f"detail.{k}": v for k, v in result.detail.items()})
    rows.append(row)
  if not rows:
    return pd.DataFrame(columns=RESULT_COLUMNS)
  return pd.DataFrame(rows)


def errors_frame(output: CalculationOutput) -> pd.DataFrame:
  rows = [
    {"category": output.category.value, "entry_id": e.entry_id, "kind": e.kind, "message": e.message}
    for e in output.errors
  ]
  return pd.DataFrame(rows, columns=ERROR_COLUMNS)


def scope_frame(summary: ProductionSummary) -> pd.DataFrame:
  rows = [m.to_dict() for m in summary.module_breakdowns]
  rows.append({"module_name": "Total", **summary.scopes.to_dict()})
  return pd.DataFrame(rows, columns=["module_name", "scope1", "scope2", "scope3", "total"])
