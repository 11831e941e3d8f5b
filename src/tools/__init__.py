from .accommodation import find_accommodation
from .airports import lookup_airport_code
from .flights import search_flights
from .geocoding import geocode_location
from .weather import get_weather

__all__ = [
    "find_accommodation",
    "lookup_airport_code",
    "search_flights",
    "geocode_location",
    "get_weather",
]
