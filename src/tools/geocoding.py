import logging
import math
from typing import Optional, Tuple, TypedDict

import httpx

from core.config import ProviderSettings

logger = logging.getLogger(__name__)

OPEN_METEO_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"


class GeoResult(TypedDict):
    name: str
    lat: float
    lon: float
    country: Optional[str]


def haversine_km(p1: Tuple[float, float], p2: Tuple[float, float]) -> float:
    lat1, lon1 = p1
    lat2, lon2 = p2
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 6371.0 * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


async def _geocode_openweather(query: str, settings: ProviderSettings) -> Optional[GeoResult]:
    url = f"{settings.base_url.rstrip('/')}/geo/1.0/direct"
    params = {"q": query, "limit": 1, "appid": settings.api_key}
    async with httpx.AsyncClient(timeout=settings.timeout_seconds) as client:
        resp = await client.get(url, params=params)
        resp.raise_for_status()
    data = resp.json()
    if not data:
        return None
    best = data[0]
    return {
        "name": best.get("name") or query,
        "lat": float(best["lat"]),
        "lon": float(best["lon"]),
        "country": best.get("country"),
    }


async def _geocode_open_meteo(query: str, timeout: float) -> Optional[GeoResult]:
    params = {"name": query, "count": 1, "language": "en", "format": "json"}
    async with httpx.AsyncClient(timeout=timeout) as client:
        resp = await client.get(OPEN_METEO_GEOCODING_URL, params=params)
        resp.raise_for_status()
    data = resp.json()
    results = data.get("results") or []
    if not results:
        return None
    best = results[0]
    return {
        "name": best.get("name") or query,
        "lat": float(best["latitude"]),
        "lon": float(best["longitude"]),
        "country": best.get("country"),
    }


async def geocode_location(query: str, settings: Optional[ProviderSettings] = None) -> Optional[GeoResult]:
    """
    Resolve a place name to coordinates. Uses OpenWeather's geocoding API when
    the given provider settings carry a key, otherwise the free Open-Meteo API.
    Returns None on any failure so callers can fall back to mock data.
    """
    if not query:
        return None
    try:
        if settings is not None and settings.configured:
            return await _geocode_openweather(query, settings)
        timeout = settings.timeout_seconds if settings is not None else 8
        return await _geocode_open_meteo(query, timeout)
    except Exception as exc:
        logger.warning("Geocoding failed for %s: %s", query, exc)
        return None
