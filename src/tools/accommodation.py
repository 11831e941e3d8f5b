import logging
from typing import Any, Dict, List, Optional

import httpx

from core.config import ProviderSettings
from core.errors import ConfigurationError, ProviderError, ProviderTimeoutError
from models.schemas import (
    AccommodationLocation,
    AccommodationOption,
    Coordinates,
    Money,
    TripRequest,
)
from tools.geocoding import geocode_location, haversine_km

logger = logging.getLogger(__name__)

# OpenStreetMap `tourism` tag -> our accommodation type
OSM_TYPES = {
    "hotel": "hotel",
    "motel": "hotel",
    "hostel": "hostel",
    "guest_house": "guesthouse",
    "apartment": "apartment",
    "chalet": "resort",
}

# Nightly estimates for live results, which carry no prices.
ESTIMATED_NIGHTLY_RATES = {
    "hotel": 120,
    "hostel": 40,
    "guesthouse": 70,
    "apartment": 90,
    "resort": 180,
    "bnb": 80,
}


def _option(
    request: TripRequest,
    nights: int,
    id: str,
    name: str,
    type: str,
    rating: float,
    nightly: float,
    address: str,
    distance: str,
    amenities: List[str],
    description: str,
    cancellation_policy: str,
    booking_url: str,
    room_type: str,
    guest_capacity: int,
    breakfast_included: bool,
    coordinates: Optional[Coordinates] = None,
) -> AccommodationOption:
    return AccommodationOption(
        id=id,
        name=name,
        type=type,
        rating=rating,
        price_per_night=Money(amount=nightly, currency="USD"),
        total_price=Money(amount=round(nightly * nights, 2), currency="USD"),
        location=AccommodationLocation(
            address=address,
            distance_from_center=distance,
            coordinates=coordinates or Coordinates(),
        ),
        amenities=amenities,
        images=[],
        description=description,
        cancellation_policy=cancellation_policy,
        booking_url=booking_url,
        check_in=request.start_date.isoformat(),
        check_out=request.end_date.isoformat(),
        room_type=room_type,
        guest_capacity=guest_capacity,
        breakfast_included=breakfast_included,
    )


def billable_nights(request: TripRequest) -> int:
    return max(1, request.nights)


def mock_accommodation(request: TripRequest) -> List[AccommodationOption]:
    """
    Canned options shaped by the preferred accommodation type. Unknown types
    get a single mid-range hotel.
    """
    destination = request.destination
    nights = billable_nights(request)
    kind = (request.preferences.accommodation_type or "hotel").lower()

    if kind == "hotel":
        return [
            _option(
                request, nights, "hotel-1", f"Grand {destination} Hotel", "hotel", 4.5, 150,
                f"123 Main Street, {destination}", "0.5 km",
                ["Free WiFi", "Pool", "Gym", "Restaurant", "Room Service", "Concierge"],
                f"Luxury hotel in the heart of {destination} with modern amenities and excellent service.",
                "Free cancellation until 24 hours before check-in", "https://booking.com/hotel-1",
                "Deluxe Double Room", 2, True,
            ),
            _option(
                request, nights, "hotel-2", f"{destination} Business Hotel", "hotel", 4.0, 120,
                f"456 Business District, {destination}", "1.2 km",
                ["Free WiFi", "Business Center", "Meeting Rooms", "Airport Shuttle"],
                "Modern business hotel perfect for both leisure and business travelers.",
                "Free cancellation until 48 hours before check-in", "https://booking.com/hotel-2",
                "Standard Double Room", 2, False,
            ),
        ]
    if kind == "hostel":
        return [
            _option(
                request, nights, "hostel-1", f"{destination} Backpackers Hostel", "hostel", 4.2, 35,
                f"789 Backpacker Street, {destination}", "0.8 km",
                ["Free WiFi", "Shared Kitchen", "Common Room", "Luggage Storage", "Laundry"],
                "Friendly hostel with great atmosphere, perfect for budget travelers and meeting other travelers.",
                "Free cancellation until 24 hours before check-in", "https://hostelworld.com/hostel-1",
                "Shared Dormitory (6 beds)", 1, True,
            ),
            _option(
                request, nights, "hostel-2", f"Central {destination} Hostel", "hostel", 4.0, 45,
                f"321 Central Plaza, {destination}", "0.3 km",
                ["Free WiFi", "Shared Kitchen", "Bar", "Tours Desk", "24/7 Reception"],
                "Modern hostel in prime location with excellent facilities and social atmosphere.",
                "Free cancellation until 48 hours before check-in", "https://hostelworld.com/hostel-2",
                "Private Double Room", 2, False,
            ),
        ]
    if kind in ("apartment", "airbnb"):
        return [
            _option(
                request, nights, "apartment-1", f"Cozy {destination} Apartment", "apartment", 4.7, 85,
                f"567 Residential Area, {destination}", "1.5 km",
                ["Free WiFi", "Full Kitchen", "Washing Machine", "Balcony", "Parking"],
                "Charming apartment with all amenities, perfect for a home-away-from-home experience.",
                "Moderate cancellation policy", "https://airbnb.com/apartment-1",
                "Entire Apartment (1 bedroom)", 4, False,
            ),
            _option(
                request, nights, "apartment-2", f"Modern {destination} Loft", "apartment", 4.8, 110,
                f"890 Trendy District, {destination}", "0.7 km",
                ["Free WiFi", "Full Kitchen", "Rooftop Terrace", "Gym Access", "Concierge"],
                "Stylish modern loft in trendy neighborhood with amazing city views.",
                "Strict cancellation policy", "https://airbnb.com/apartment-2",
                "Entire Loft (2 bedrooms)", 6, False,
            ),
        ]
    return [
        _option(
            request, nights, "default-1", f"{destination} Comfort Inn", "hotel", 4.0, 100,
            f"100 Comfort Street, {destination}", "1.0 km",
            ["Free WiFi", "Breakfast", "Parking"],
            "Comfortable accommodation with essential amenities at a great value.",
            "Free cancellation until 24 hours before check-in", "https://booking.com/default-1",
            "Standard Room", 2, True,
        )
    ]


def _element_coordinates(element: Dict[str, Any]) -> Optional[Coordinates]:
    lat = element.get("lat")
    lon = element.get("lon")
    if lat is None or lon is None:
        center = element.get("center") or {}
        lat, lon = center.get("lat"), center.get("lon")
    if lat is None or lon is None:
        return None
    return Coordinates(lat=float(lat), lng=float(lon))


def _rating(tags: Dict[str, str]) -> float:
    try:
        return min(5.0, max(0.0, float(tags.get("stars", 0))))
    except ValueError:
        return 0.0


def map_osm_elements(
    elements: List[Dict[str, Any]],
    request: TripRequest,
    geo: Dict[str, Any],
    limit: int = 6,
) -> List[AccommodationOption]:
    nights = billable_nights(request)
    options: List[AccommodationOption] = []
    for idx, element in enumerate(elements[:limit]):
        tags = element.get("tags") or {}
        kind = OSM_TYPES.get(tags.get("tourism", ""), "bnb")
        coords = _element_coordinates(element)
        distance = ""
        if coords is not None:
            km = haversine_km((geo["lat"], geo["lon"]), (coords.lat, coords.lng))
            distance = f"{km:.1f} km"
        amenities = []
        if tags.get("internet_access"):
            amenities.append("Internet access")
        if tags.get("breakfast"):
            amenities.append("Breakfast")
        if tags.get("bicycle_parking"):
            amenities.append("Bike parking")
        if tags.get("wheelchair") == "yes":
            amenities.append("Wheelchair accessible")
        street = " ".join(bit for bit in [tags.get("addr:housenumber"), tags.get("addr:street")] if bit)
        options.append(
            _option(
                request,
                nights,
                f"osm-{element.get('id', idx)}",
                tags.get("name") or f"Option {idx + 1} near {geo['name']}",
                kind,
                _rating(tags),
                ESTIMATED_NIGHTLY_RATES[kind],
                f"{street}, {geo['name']}" if street else geo["name"],
                distance,
                amenities,
                f"{kind.title()} near {geo['name']} center (prices estimated).",
                "Check with property",
                tags.get("website", ""),
                "Standard Room",
                2,
                bool(tags.get("breakfast")),
                coordinates=coords,
            )
        )
    return options


async def _fetch_accommodation(request: TripRequest, settings: ProviderSettings) -> List[AccommodationOption]:
    """
    Overpass needs no credential. The accommodation api_key only switches the
    live lookup on and is never sent with the query.
    """
    if not settings.configured:
        raise ConfigurationError("Live accommodation lookup not enabled")

    geo = await geocode_location(request.destination)
    if not geo:
        raise ProviderError(f"Could not find coordinates for {request.destination}", provider="overpass")

    # Query Overpass (OpenStreetMap) for nearby lodging points of interest.
    query = f"""
    [out:json][timeout:10];
    (
      node["tourism"~"hotel|hostel|motel|guest_house|apartment|chalet"](around:5000,{geo['lat']},{geo['lon']});
      way["tourism"~"hotel|hostel|motel|guest_house|apartment|chalet"](around:5000,{geo['lat']},{geo['lon']});
    );
    out center 8;
    """
    try:
        async with httpx.AsyncClient(timeout=settings.timeout_seconds) as client:
            resp = await client.get(settings.base_url, params={"data": query})
            resp.raise_for_status()
        data = resp.json()
    except httpx.TimeoutException as exc:
        raise ProviderTimeoutError(f"Overpass timed out: {exc}", provider="overpass") from exc
    except (httpx.HTTPError, ValueError) as exc:
        raise ProviderError(f"Overpass error: {exc}", provider="overpass") from exc

    if not isinstance(data, dict):
        raise ProviderError("Overpass returned an unexpected payload", provider="overpass")

    return map_osm_elements(data.get("elements") or [], request, geo)


async def find_accommodation(request: TripRequest, settings: ProviderSettings) -> List[AccommodationOption]:
    """
    Lodging near the destination from OpenStreetMap when accommodation search
    is enabled, otherwise (or on failure / no results) canned options.
    """
    try:
        options = await _fetch_accommodation(request, settings)
    except ConfigurationError as exc:
        logger.warning("%s; using mock accommodation data", exc)
        return mock_accommodation(request)
    except ProviderError as exc:
        logger.warning("Accommodation lookup failed for %s: %s", request.destination, exc)
        return mock_accommodation(request)

    if not options:
        logger.warning("No accommodation found near %s; using mock data", request.destination)
        return mock_accommodation(request)
    return options
