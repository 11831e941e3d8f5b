from datetime import date
from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, Field


class TripPreferences(BaseModel):
    budget: str = ""
    interests: list[str] = Field(default_factory=list)
    accommodation_type: str = ""
    travel_style: str = ""
    origin: str = ""


class TripRequest(BaseModel):
    destination: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    preferences: TripPreferences = Field(default_factory=TripPreferences)
    request_id: str = Field(default_factory=lambda: uuid4().hex)

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days


class BudgetBreakdown(BaseModel):
    accommodation: int = 0
    activities: int = 0
    transportation: int = 0
    food: int = 0
    miscellaneous: int = 0
    total: int = 0
    currency: str = "USD"


class Activity(BaseModel):
    name: str
    description: str
    duration: str
    location: str = "Location TBD"
    tips: list[str] = Field(default_factory=list)


class DayPlan(BaseModel):
    day: int
    date: date
    activities: list[Activity] = Field(default_factory=list)


class LocalRecommendations(BaseModel):
    hidden_gems: list[str] = Field(default_factory=list)
    customs: list[str] = Field(default_factory=list)
    transportation: list[str] = Field(default_factory=list)
    dining: list[str] = Field(default_factory=list)
    safety: list[str] = Field(default_factory=list)
    seasonal: list[str] = Field(default_factory=list)
    events: list[str] = Field(default_factory=list)
    timing: list[str] = Field(default_factory=list)
    language: list[str] = Field(default_factory=list)
    shopping: list[str] = Field(default_factory=list)


class Temperature(BaseModel):
    min: int
    max: int
    unit: str = "°C"


class WeatherDay(BaseModel):
    date: str
    temperature: Temperature
    condition: str
    description: str = ""
    humidity: int = 0
    wind_speed: int = 0
    precipitation: float = 0.0
    icon: str = "01d"


class WeatherInfo(BaseModel):
    location: str
    forecast: list[WeatherDay] = Field(default_factory=list)
    summary: str = ""
    recommendations: list[str] = Field(default_factory=list)


class Money(BaseModel):
    amount: float = 0
    currency: str = "USD"


class FlightEndpoint(BaseModel):
    airport: str = "N/A"
    city: str = "N/A"
    time: str = "N/A"
    date: str = "N/A"


class FlightSegment(BaseModel):
    departure: FlightEndpoint = Field(default_factory=FlightEndpoint)
    arrival: FlightEndpoint = Field(default_factory=FlightEndpoint)
    airline: str = "Unknown"
    flight_number: str = "N/A"
    duration: str = "N/A"
    aircraft: str = "N/A"


class Baggage(BaseModel):
    carry_on: bool = True
    checked: str = "Check with airline"


class FlightOption(BaseModel):
    id: str
    price: Money = Field(default_factory=Money)
    outbound: list[FlightSegment] = Field(default_factory=list)
    return_flights: list[FlightSegment] = Field(default_factory=list)
    total_duration: str = "N/A"
    stops: int = 0
    cabin_class: Literal["economy", "premium_economy", "business", "first"] = "economy"
    booking_url: str = ""
    airline: str = "Unknown"
    baggage: Baggage = Field(default_factory=Baggage)


class FlightSearchResults(BaseModel):
    origin: str
    destination: str
    departure_date: str
    return_date: str = ""
    passengers: int = 1
    flights: list[FlightOption] = Field(default_factory=list)
    search_summary: str = ""
    recommendations: list[str] = Field(default_factory=list)
    last_updated: str = ""


class Coordinates(BaseModel):
    lat: float = 0.0
    lng: float = 0.0


class AccommodationLocation(BaseModel):
    address: str = ""
    distance_from_center: str = ""
    coordinates: Coordinates = Field(default_factory=Coordinates)


class AccommodationOption(BaseModel):
    id: str
    name: str
    type: Literal["hotel", "hostel", "apartment", "resort", "guesthouse", "bnb"]
    rating: float = Field(0.0, ge=0, le=5)
    price_per_night: Money = Field(default_factory=Money)
    total_price: Money = Field(default_factory=Money)
    location: AccommodationLocation = Field(default_factory=AccommodationLocation)
    amenities: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    description: str = ""
    cancellation_policy: str = ""
    booking_url: str = ""
    check_in: str = ""
    check_out: str = ""
    room_type: str = ""
    guest_capacity: int = 1
    breakfast_included: bool = False


class AccommodationSearchResults(BaseModel):
    destination: str
    check_in_date: str
    check_out_date: str
    nights: int
    accommodation_type: str
    accommodations: list[AccommodationOption] = Field(default_factory=list)
    search_summary: str = ""
    recommendations: list[str] = Field(default_factory=list)
    last_updated: str = ""


class AirportLookupResult(BaseModel):
    success: bool
    city: str
    airport_code: str = ""
    airport_name: str = ""
    country: str = ""
    confidence: Literal["high", "medium", "low", ""] = ""
    matched_city: str = ""
    note: str = ""
    error: str = ""
    suggestions: list[str] = Field(default_factory=list)


class AgentResponse(BaseModel):
    success: bool
    data: Any = None
    error: str = ""


class TravelPlan(BaseModel):
    destination: str
    start_date: date
    end_date: date
    itinerary: list[DayPlan]
    budget: BudgetBreakdown
    general_tips: list[str] = Field(default_factory=list)
    local_recommendations: list[str] = Field(default_factory=list)
    language_tips: list[str] = Field(default_factory=list)
    weather_info: WeatherInfo | None = None
    flight_info: FlightSearchResults | None = None
    accommodation_info: AccommodationSearchResults | None = None
