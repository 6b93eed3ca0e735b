from .exceptions import (
  FilmCarbonError, CalculationError, UnsupportedConversion, FactorNotFound,
  MissingDerivationInput, EntryNotFound, FactorTableError,
)
from .config import EngineSettings, get_settings
from .unitconverter import UnitConverter, convert, family_of
from .factor import FactorRegistry, FactorMatch, load_default_registry, load_registry, default_registry
from .inputs import (
  Category, UtilitiesEntry, ElectricityUsage, ElectricityByArea, NoElectricity, HeatUsage, HeatByArea, NoHeat,
  FuelEntry, FuelAmount, FuelMileage, FuelCost, EVChargingEntry, HotelsEntry, CommercialTravelEntry,
  CharterFlightsEntry, CharterFuel, CharterHours, CharterDistance, entry_from_record, new_entry_id,
)
from .results import EmissionResult, EntryError, CalculationOutput
from .calculators import calculate_all, classify_flight
from .scopes import ScopeBreakdown, ModuleScopeBreakdown, classify_scopes, module_scope_breakdowns
from .aggregate import ProductionSummary, aggregate
from .ledger import ProductionLedger, InMemoryRepository
from .reporting import results_frame, errors_frame, scope_frame

__version__ = "0.1.0"
