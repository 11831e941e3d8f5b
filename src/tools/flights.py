import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import httpx

from core.config import ProviderSettings
from core.errors import ConfigurationError, ProviderError, ProviderTimeoutError
from models.schemas import Baggage, FlightEndpoint, FlightOption, FlightSegment, Money

logger = logging.getLogger(__name__)

TRAVEL_CLASS_CODES = {
    "economy": "1",
    "premium": "2",
    "premium_economy": "2",
    "business": "3",
    "first": "4",
}


def travel_class_code(cabin_class: Optional[str]) -> str:
    if not cabin_class:
        return "1"
    return TRAVEL_CLASS_CODES.get(cabin_class.lower(), "1")


def _endpoint(raw: Optional[Dict[str, Any]]) -> FlightEndpoint:
    raw = raw or {}
    return FlightEndpoint(
        airport=raw.get("id") or "N/A",
        city=raw.get("name") or "N/A",
        time=str(raw.get("time") or "N/A"),
        date=str(raw.get("date") or "N/A"),
    )


def parse_segments(segments: List[Dict[str, Any]]) -> List[FlightSegment]:
    return [
        FlightSegment(
            departure=_endpoint(segment.get("departure_airport")),
            arrival=_endpoint(segment.get("arrival_airport")),
            airline=segment.get("airline") or "Unknown",
            flight_number=segment.get("flight_number") or "N/A",
            duration=str(segment.get("duration") or "N/A"),
            aircraft=segment.get("airplane") or "N/A",
        )
        for segment in segments
        if isinstance(segment, dict)
    ]


def normalize_flights(data: Dict[str, Any], currency: str = "USD") -> List[FlightOption]:
    """
    Flatten SerpAPI's `best_flights` then `other_flights` into FlightOptions,
    keeping the provider's order.
    """
    offers: List[Dict[str, Any]] = []
    for key in ("best_flights", "other_flights"):
        group = data.get(key)
        if isinstance(group, list):
            offers.extend(offer for offer in group if isinstance(offer, dict))

    options: List[FlightOption] = []
    for index, offer in enumerate(offers):
        segments = offer.get("flights") or []
        options.append(
            FlightOption(
                id=f"serp_flight_{index}",
                price=Money(amount=offer.get("price") or 0, currency=currency),
                outbound=parse_segments(segments),
                return_flights=parse_segments(offer.get("return_flights") or []),
                total_duration=str(offer.get("total_duration") or "N/A"),
                stops=len(offer.get("layovers") or []),
                airline=offer.get("airline") or (segments[0].get("airline") if segments else None) or "Unknown",
                baggage=Baggage(checked=offer.get("baggage") or "Check with airline"),
            )
        )
    return options


def _mock_segment(
    from_place: Tuple[str, str],
    to_place: Tuple[str, str],
    departure_time: str,
    arrival_time: str,
    on: str,
    airline: str,
    flight_number: str,
    duration: str,
    aircraft: str,
) -> FlightSegment:
    return FlightSegment(
        departure=FlightEndpoint(airport=from_place[1], city=from_place[0], time=departure_time, date=on),
        arrival=FlightEndpoint(airport=to_place[1], city=to_place[0], time=arrival_time, date=on),
        airline=airline,
        flight_number=flight_number,
        duration=duration,
        aircraft=aircraft,
    )


def mock_flights(
    origin: str,
    destination: str,
    departure_date: date,
    return_date: Optional[date] = None,
    origin_code: Optional[str] = None,
    destination_code: Optional[str] = None,
) -> List[FlightOption]:
    """
    Two canned round-trip options. Airport codes default to the first three
    letters of each place name.
    """
    out = departure_date.isoformat()
    back = return_date.isoformat() if return_date else ""
    origin_place = (origin, (origin_code or origin[:3]).upper())
    destination_place = (destination, (destination_code or destination[:3]).upper())
    return [
        FlightOption(
            id="mock_flight_1",
            price=Money(amount=650, currency="USD"),
            outbound=[
                _mock_segment(origin_place, destination_place, "08:30", "14:45", out, "Delta Airlines", "DL123", "6h 15m", "Boeing 737")
            ],
            return_flights=[
                _mock_segment(destination_place, origin_place, "16:20", "22:35", back, "Delta Airlines", "DL124", "6h 15m", "Boeing 737")
            ]
            if return_date
            else [],
            total_duration="12h 30m" if return_date else "6h 15m",
            stops=0,
            airline="Delta Airlines",
            baggage=Baggage(carry_on=True, checked="23kg included"),
        ),
        FlightOption(
            id="mock_flight_2",
            price=Money(amount=520, currency="USD"),
            outbound=[
                _mock_segment(origin_place, destination_place, "12:15", "20:30", out, "United Airlines", "UA456", "8h 15m", "Airbus A320")
            ],
            return_flights=[
                _mock_segment(destination_place, origin_place, "09:45", "18:00", back, "United Airlines", "UA457", "8h 15m", "Airbus A320")
            ]
            if return_date
            else [],
            total_duration="16h 30m" if return_date else "8h 15m",
            stops=1,
            airline="United Airlines",
            baggage=Baggage(carry_on=True, checked="20kg included"),
        ),
    ]


async def _fetch_flights(
    origin: str,
    destination: str,
    departure_date: date,
    return_date: Optional[date],
    settings: ProviderSettings,
    adults: int = 1,
    cabin_class: Optional[str] = None,
) -> List[FlightOption]:
    if not settings.configured:
        raise ConfigurationError("SERP API key not configured")

    params = {
        "engine": "google_flights",
        "departure_id": origin,
        "arrival_id": destination,
        "outbound_date": departure_date.isoformat(),
        "adults": str(max(1, adults)),
        "travel_class": travel_class_code(cabin_class),
        "currency": "USD",
        "api_key": settings.api_key,
    }
    # SerpAPI treats a search without return_date as one-way.
    if return_date:
        params["return_date"] = return_date.isoformat()
    else:
        params["type"] = "2"

    try:
        async with httpx.AsyncClient(timeout=settings.timeout_seconds) as client:
            resp = await client.get(settings.base_url, params=params, headers={"Accept": "application/json"})
            resp.raise_for_status()
        data = resp.json()
    except httpx.TimeoutException as exc:
        raise ProviderTimeoutError(f"SERP API timed out: {exc}", provider="serpapi") from exc
    except (httpx.HTTPError, ValueError) as exc:
        raise ProviderError(f"SERP API error: {exc}", provider="serpapi") from exc

    if isinstance(data, dict) and data.get("error"):
        raise ProviderError(f"SERP API reported: {data['error']}", provider="serpapi")
    return normalize_flights(data if isinstance(data, dict) else {})


async def search_flights(
    origin: str,
    destination: str,
    departure_date: date,
    return_date: Optional[date],
    settings: ProviderSettings,
    max_results: int = 5,
    origin_city: Optional[str] = None,
    destination_city: Optional[str] = None,
) -> List[FlightOption]:
    """
    Google Flights search through SerpAPI. `origin` and `destination` are
    airport codes; the optional city names only label the mock fallback used
    when no key is configured, the call fails, or nothing comes back.
    """
    try:
        flights = await _fetch_flights(origin, destination, departure_date, return_date, settings)
    except ConfigurationError as exc:
        logger.warning("%s; returning mock flight data", exc)
        flights = []
    except ProviderError as exc:
        logger.warning("Flight search failed for %s -> %s: %s", origin, destination, exc)
        flights = []
    else:
        if not flights:
            logger.warning("SERP API returned no flights for %s -> %s; using mock data", origin, destination)

    if flights:
        return flights[:max_results]
    return mock_flights(
        origin_city or origin,
        destination_city or destination,
        departure_date,
        return_date,
        origin_code=origin,
        destination_code=destination,
    )
