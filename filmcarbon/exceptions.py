"""Exception hierarchy for filmcarbon.

    FilmCarbonError
    ├── CalculationError          (local to one entry, never escapes calculate_all)
    │   ├── UnsupportedConversion
    │   ├── FactorNotFound
    │   └── MissingDerivationInput
    ├── EntryNotFound
    └── FactorTableError

Every exception carries a ``context`` dict with the offending keys so it can be
reported next to the entry it belongs to.
"""
from typing import Any, Dict, Optional


class FilmCarbonError(Exception):
  def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
    super().__init__(message)
    self.message = message
    self.context = dict(context or {})

  def to_dict(self) -> Dict[str, Any]:
    return {"error_type": type(self).__name__, "message": self.message, "context": self.context}


class CalculationError(FilmCarbonError):
  pass


class UnsupportedConversion(CalculationError):
  def __init__(self, from_unit: str, to_unit: str, reason: str = "units belong to different families"):
    super().__init__(
      f"Cannot convert {from_unit!r} to {to_unit!r}: {reason}",
      {"from_unit": from_unit, "to_unit": to_unit},
    )
    self.from_unit = from_unit
    self.to_unit = to_unit


class FactorNotFound(CalculationError):
  def __init__(self, category: str, key: str, value: Any = None):
    super().__init__(
      f"No {category} emission factor for {key}={value!r}",
      {"category": category, "key": key, "value": value},
    )
    self.category = category
    self.key = key


class MissingDerivationInput(CalculationError):
  def __init__(self, method: str, missing: str):
    super().__init__(
      f"Calculation method {method!r} requires {missing}",
      {"method": method, "missing": missing},
    )
    self.method = method
    self.missing = missing


class EntryNotFound(FilmCarbonError):
  def __init__(self, category: str, entry_id: str):
    super().__init__(f"No {category} entry with id {entry_id!r}", {"category": category, "entry_id": entry_id})


class FactorTableError(FilmCarbonError):
  pass
