from .base import CALCULATORS, CategoryCalculator, calculate_all
from .utilities import UtilitiesCalculator
from .fuel import FuelCalculator
from .ev_charging import EVChargingCalculator
from .hotels import HotelsCalculator
from .commercial_travel import CommercialTravelCalculator, classify_flight
from .charter_flights import CharterFlightsCalculator
