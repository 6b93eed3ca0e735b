import datetime as dt
import logging
import math
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

import numpy as np
import pandas as pd

from ..config import EngineSettings, get_settings
from ..exceptions import CalculationError, MissingDerivationInput
from ..factor import FactorMatch, FactorRegistry, default_registry
from ..inputs import ENTRY_TYPES, Category
from ..results import CalculationOutput, CategoryTotals, EmissionResult, EntryError
from ..unitconverter import convert

logger = logging.getLogger(__name__)

CALCULATORS: Dict[Category, Type["CategoryCalculator"]] = {}


def register(category: Category):
  def wrap(cls):
    cls.category = category
    CALCULATORS[category] = cls
    return cls
  return wrap


def column_sum(frame: pd.DataFrame, column: str) -> float:
  if frame.empty or column not in frame.columns:
    return 0.0
  return float(np.sum(frame[column].to_numpy(dtype=float)))


def group_sum(frame: pd.DataFrame, key: str, value: str = "co2e") -> Dict[str, float]:
  if frame.empty or key not in frame.columns:
    return {}
  grouped = frame.groupby(key, sort=False, dropna=True)[value].sum()
  return {str(k): float(v) for k, v in grouped.items()}


def ensure_finite(result: EmissionResult) -> EmissionResult:
  for name in ("co2e", "quantity"):
    if not math.isfinite(getattr(result, name)):
      raise MissingDerivationInput(result.method or "calculation", f"a finite {name} (got {getattr(result, name)!r})")
  return result


def in_factor_unit(quantity: float, unit: str, factor: FactorMatch) -> float:
  return convert(quantity, unit, factor.unit)


class CategoryCalculator:
  category: Category
  totals_type: Type[CategoryTotals] = CategoryTotals

  def __init__(self, registry: FactorRegistry, settings: Optional[EngineSettings] = None):
    self.registry = registry
    self.settings = settings or get_settings()

  def resolve(self, entry: Any) -> EmissionResult:
    raise NotImplementedError

  def row(self, entry: Any, result: EmissionResult) -> Dict[str, Any]:
    return {"co2e": result.co2e, "quantity": result.quantity}

  def totals(self, frame: pd.DataFrame) -> CategoryTotals:
    return self.totals_type(total_co2e=column_sum(frame, "co2e"))

  def summarize(self, resolved: List[Tuple[Any, EmissionResult]]) -> CategoryTotals:
    frame = pd.DataFrame([self.row(entry, result) for entry, result in resolved])
    return self.totals(frame)


def calculate_all(
  category: Category,
  entries: Iterable[Any],
  registry: Optional[FactorRegistry] = None,
  settings: Optional[EngineSettings] = None,
) -> CalculationOutput:
  category = Category(category)
  registry = registry or default_registry()
  calculator = CALCULATORS[category](registry, settings)
  expected = ENTRY_TYPES[category]

  results: List[EmissionResult] = []
  errors: List[EntryError] = []
  resolved: List[Tuple[Any, EmissionResult]] = []
  for entry in entries:
    if not isinstance(entry, expected):
      raise TypeError(f"{category.value} calculator cannot take {type(entry).__name__}")
    try:
      result = ensure_finite(calculator.resolve(entry))
    except CalculationError as exc:
      logger.warning("Skipping %s entry %s: %s", category.value, entry.id, exc.message)
      errors.append(EntryError(entry.id, type(exc).__name__, exc.message, exc.context))
      continue
    results.append(result)
    resolved.append((entry, result))

  totals = calculator.summarize(resolved)
  logger.debug(
    "Calculated %s: %d results, %d skipped, %.3f kg CO2e",
    category.value, len(results), len(errors), totals.total_co2e,
  )
  return CalculationOutput(
    category=category,
    results=results,
    totals=totals,
    errors=errors,
    calculated_at=dt.datetime.now(dt.timezone.utc),
    factors_version=registry.factors_version,
    source=registry.source,
  )
