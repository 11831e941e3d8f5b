from typing import Dict, List, Optional, TypedDict

from models.schemas import AirportLookupResult


class AirportInfo(TypedDict):
    code: str
    name: str
    city: str
    country: str


CITY_TO_AIRPORT: Dict[str, AirportInfo] = {
    # North America
    "new york": {"code": "JFK", "name": "John F. Kennedy International Airport", "city": "New York", "country": "USA"},
    "los angeles": {"code": "LAX", "name": "Los Angeles International Airport", "city": "Los Angeles", "country": "USA"},
    "chicago": {"code": "ORD", "name": "O'Hare International Airport", "city": "Chicago", "country": "USA"},
    "miami": {"code": "MIA", "name": "Miami International Airport", "city": "Miami", "country": "USA"},
    "san francisco": {"code": "SFO", "name": "San Francisco International Airport", "city": "San Francisco", "country": "USA"},
    "toronto": {"code": "YYZ", "name": "Toronto Pearson International Airport", "city": "Toronto", "country": "Canada"},
    "vancouver": {"code": "YVR", "name": "Vancouver International Airport", "city": "Vancouver", "country": "Canada"},
    # Europe
    "london": {"code": "LHR", "name": "Heathrow Airport", "city": "London", "country": "UK"},
    "paris": {"code": "CDG", "name": "Charles de Gaulle Airport", "city": "Paris", "country": "France"},
    "amsterdam": {"code": "AMS", "name": "Amsterdam Airport Schiphol", "city": "Amsterdam", "country": "Netherlands"},
    "frankfurt": {"code": "FRA", "name": "Frankfurt Airport", "city": "Frankfurt", "country": "Germany"},
    "madrid": {"code": "MAD", "name": "Adolfo Suárez Madrid-Barajas Airport", "city": "Madrid", "country": "Spain"},
    "rome": {"code": "FCO", "name": "Leonardo da Vinci International Airport", "city": "Rome", "country": "Italy"},
    "zurich": {"code": "ZRH", "name": "Zurich Airport", "city": "Zurich", "country": "Switzerland"},
    "vienna": {"code": "VIE", "name": "Vienna International Airport", "city": "Vienna", "country": "Austria"},
    "munich": {"code": "MUC", "name": "Munich Airport", "city": "Munich", "country": "Germany"},
    "barcelona": {"code": "BCN", "name": "Barcelona-El Prat Airport", "city": "Barcelona", "country": "Spain"},
    # Asia
    "tokyo": {"code": "NRT", "name": "Narita International Airport", "city": "Tokyo", "country": "Japan"},
    "beijing": {"code": "PEK", "name": "Beijing Capital International Airport", "city": "Beijing", "country": "China"},
    "shanghai": {"code": "PVG", "name": "Shanghai Pudong International Airport", "city": "Shanghai", "country": "China"},
    "hong kong": {"code": "HKG", "name": "Hong Kong International Airport", "city": "Hong Kong", "country": "Hong Kong"},
    "singapore": {"code": "SIN", "name": "Singapore Changi Airport", "city": "Singapore", "country": "Singapore"},
    "seoul": {"code": "ICN", "name": "Incheon International Airport", "city": "Seoul", "country": "South Korea"},
    "bangkok": {"code": "BKK", "name": "Suvarnabhumi Airport", "city": "Bangkok", "country": "Thailand"},
    "kuala lumpur": {"code": "KUL", "name": "Kuala Lumpur International Airport", "city": "Kuala Lumpur", "country": "Malaysia"},
    "mumbai": {"code": "BOM", "name": "Chhatrapati Shivaji Maharaj International Airport", "city": "Mumbai", "country": "India"},
    "delhi": {"code": "DEL", "name": "Indira Gandhi International Airport", "city": "Delhi", "country": "India"},
    # Middle East & Africa
    "dubai": {"code": "DXB", "name": "Dubai International Airport", "city": "Dubai", "country": "UAE"},
    "doha": {"code": "DOH", "name": "Hamad International Airport", "city": "Doha", "country": "Qatar"},
    "istanbul": {"code": "IST", "name": "Istanbul Airport", "city": "Istanbul", "country": "Turkey"},
    "cairo": {"code": "CAI", "name": "Cairo International Airport", "city": "Cairo", "country": "Egypt"},
    "johannesburg": {"code": "JNB", "name": "O.R. Tambo International Airport", "city": "Johannesburg", "country": "South Africa"},
    "casablanca": {"code": "CMN", "name": "Mohammed V International Airport", "city": "Casablanca", "country": "Morocco"},
    # Australia & Oceania
    "sydney": {"code": "SYD", "name": "Kingsford Smith Airport", "city": "Sydney", "country": "Australia"},
    "melbourne": {"code": "MEL", "name": "Melbourne Airport", "city": "Melbourne", "country": "Australia"},
    "auckland": {"code": "AKL", "name": "Auckland Airport", "city": "Auckland", "country": "New Zealand"},
    # South America
    "sao paulo": {"code": "GRU", "name": "São Paulo/Guarulhos International Airport", "city": "São Paulo", "country": "Brazil"},
    "rio de janeiro": {"code": "GIG", "name": "Rio de Janeiro/Galeão International Airport", "city": "Rio de Janeiro", "country": "Brazil"},
    "buenos aires": {"code": "EZE", "name": "Ezeiza International Airport", "city": "Buenos Aires", "country": "Argentina"},
    "lima": {"code": "LIM", "name": "Jorge Chávez International Airport", "city": "Lima", "country": "Peru"},
    "bogota": {"code": "BOG", "name": "El Dorado International Airport", "city": "Bogotá", "country": "Colombia"},
}

# Only aliases whose target exists in CITY_TO_AIRPORT can resolve.
CITY_ALIASES: Dict[str, str] = {
    "nyc": "new york",
    "la": "los angeles",
    "sf": "san francisco",
    "chi": "chicago",
    "vegas": "las vegas",
    "dc": "washington",
    "philly": "philadelphia",
    "bos": "boston",
    "sea": "seattle",
    "atl": "atlanta",
}

POPULAR_CITIES = ["new york", "london", "paris", "tokyo", "sydney"]


def _found(city: str, key: str, confidence: str) -> AirportLookupResult:
    info = CITY_TO_AIRPORT[key]
    return AirportLookupResult(
        success=True,
        city=city,
        matched_city=key,
        airport_code=info["code"],
        airport_name=info["name"],
        country=info["country"],
        confidence=confidence,
    )


def find_fuzzy_match(city_name: str) -> Optional[str]:
    for city in CITY_TO_AIRPORT:
        if city in city_name or city_name in city:
            return city
    return None


def suggest_cities(city_name: str, limit: int = 5) -> List[str]:
    first_letter = city_name[:1].lower()
    suggestions = [city for city in CITY_TO_AIRPORT if first_letter and city.startswith(first_letter)]
    return (suggestions or list(POPULAR_CITIES))[:limit]


def lookup_airport_code(city: str) -> AirportLookupResult:
    """
    Resolve a city name to its main airport code.

    Order: exact name, alias (both "high" confidence), substring match in
    either direction ("medium"), then a first-three-letters guess ("low").
    """
    city_name = (city or "").lower().strip()

    if city_name in CITY_TO_AIRPORT:
        return _found(city, city_name, "high")

    alias = CITY_ALIASES.get(city_name)
    if alias and alias in CITY_TO_AIRPORT:
        return _found(city, alias, "high")

    fuzzy = find_fuzzy_match(city_name) if city_name else None
    if fuzzy:
        return _found(city, fuzzy, "medium")

    if len(city_name) >= 3:
        return AirportLookupResult(
            success=True,
            city=city,
            airport_code=city_name[:3].upper(),
            airport_name=f"{city} Airport (estimated)",
            country="Unknown",
            confidence="low",
            note="This is an estimated airport code. Please verify before booking.",
        )

    return AirportLookupResult(
        success=False,
        city=city,
        error=f"No airport code found for {city}. Please try a major city name or provide the airport code directly.",
        suggestions=suggest_cities(city_name),
    )
