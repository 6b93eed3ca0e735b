"""Entry collections per category, recalculated in full on every change.

The ledger owns no storage of its own: collections live in an injected
``EntryRepository`` addressed by opaque string keys. After each mutation the
affected category is recomputed from scratch and its cached output replaced.
"""
import dataclasses
import datetime as dt
import logging
from typing import Any, Dict, List, Optional, Protocol

from .calculators import calculate_all
from .config import EngineSettings
from .aggregate import ProductionSummary, aggregate
from .exceptions import EntryNotFound
from .factor import FactorRegistry, default_registry
from .inputs import Category, category_of
from .results import CalculationOutput

logger = logging.getLogger(__name__)


def storage_key(category: Category) -> str:
  return f"filmcarbon/{Category(category).value}"


class EntryRepository(Protocol):
  def load(self, key: str) -> List[Any]:
    ...

  def save(self, key: str, entries: List[Any]) -> None:
    ...


class InMemoryRepository:
  def __init__(self):
    self._data: Dict[str, List[Any]] = {}

  def load(self, key: str) -> List[Any]:
    return list(self._data.get(key, []))

  def save(self, key: str, entries: List[Any]) -> None:
    self._data[key] = list(entries)

  def keys(self) -> List[str]:
    return sorted(self._data)


def _dedupe(entries: List[Any]) -> List[Any]:
  seen: Dict[str, int] = {}
  out: List[Any] = []
  for entry in entries:
    if entry.id in seen:
      out[seen[entry.id]] = entry
      continue
    seen[entry.id] = len(out)
    out.append(entry)
  return out


class ProductionLedger:
  def __init__(
    self,
    repository: Optional[EntryRepository] = None,
    registry: Optional[FactorRegistry] = None,
    settings: Optional[EngineSettings] = None,
  ):
    self.repository = repository if repository is not None else InMemoryRepository()
    self.registry = registry or default_registry()
    self.settings = settings
    self._outputs: Dict[Category, CalculationOutput] = {}

  def _load(self, category: Category) -> List[Any]:
    return _dedupe(self.repository.load(storage_key(category)))

  def _calculate(self, category: Category, entries: List[Any]) -> CalculationOutput:
    output = calculate_all(category, entries, self.registry, self.settings)
    self._outputs[category] = output
    return output

  def _commit(self, category: Category, entries: List[Any]) -> CalculationOutput:
    entries = _dedupe(entries)
    self.repository.save(storage_key(category), entries)
    return self._calculate(category, entries)

  def entries(self, category: Category) -> List[Any]:
    undated = dt.date.max
    return sorted(self._load(Category(category)), key=lambda e: (e.date is None, e.date or undated))

  def add_entry(self, entry: Any) -> CalculationOutput:
    category = category_of(entry)
    logger.debug("Adding %s entry %s", category.value, entry.id)
    return self._commit(category, self._load(category) + [entry])

  def update_entry(self, entry_id: str, entry: Any) -> CalculationOutput:
    category = category_of(entry)
    current = self._load(category)
    if not any(e.id == entry_id for e in current):
      raise EntryNotFound(category.value, entry_id)
    if entry.id != entry_id:
      entry = dataclasses.replace(entry, id=entry_id)
    return self._commit(category, [entry if e.id == entry_id else e for e in current])

  def delete_entry(self, category: Category, entry_id: str) -> CalculationOutput:
    category = Category(category)
    current = self._load(category)
    remaining = [e for e in current if e.id != entry_id]
    if len(remaining) == len(current):
      raise EntryNotFound(category.value, entry_id)
    return self._commit(category, remaining)

  def clear(self, category: Category) -> CalculationOutput:
    return self._commit(Category(category), [])

  def recalculate(self, category: Optional[Category] = None) -> Dict[Category, CalculationOutput]:
    categories = [Category(category)] if category is not None else list(Category)
    for c in categories:
      self._calculate(c, self._load(c))
    return {c: self._outputs[c] for c in categories}

  def output(self, category: Category) -> CalculationOutput:
    category = Category(category)
    if category not in self._outputs:
      self._calculate(category, self._load(category))
    return self._outputs[category]

  def summary(self) -> ProductionSummary:
    return aggregate({c: self.output(c) for c in Category})
