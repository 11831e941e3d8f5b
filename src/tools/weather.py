import logging
import math
import random
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Tuple

import httpx

from core.config import ProviderSettings
from core.errors import ConfigurationError, ProviderError, ProviderTimeoutError
from extraction.text import round_half_up
from models.schemas import Temperature, WeatherDay, WeatherInfo
from tools.geocoding import geocode_location

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY = (
    "Generally pleasant weather expected in {destination} with clear skies and comfortable temperatures."
)
FALLBACK_RECOMMENDATIONS = [
    "Pack light, breathable clothing for warm days",
    "Bring a light jacket for cooler evenings",
    "Don't forget sunscreen and sunglasses",
    "Perfect weather for outdoor activities and sightseeing",
]


def _sample_date(sample: Dict[str, Any]) -> date:
    return datetime.fromtimestamp(sample["dt"], tz=timezone.utc).date()


def _optional_number(value: Any) -> float:
    # Missing or null readings count as zero.
    return 0.0 if value is None else float(value)


def _reading(sample: Dict[str, Any]) -> Dict[str, Any]:
    """
    Numeric fields of one forecast sample, coerced to floats. Raises on a
    missing or non-numeric temperature so the caller can skip the sample.
    """
    main = sample["main"]
    weather = sample.get("weather") or [{}]
    if not isinstance(weather, list) or not isinstance(weather[0], dict):
        weather = [{}]
    reading = {
        "temp": float(main["temp"]),
        "humidity": _optional_number(main.get("humidity")),
        "wind": _optional_number((sample.get("wind") or {}).get("speed")),
        "rain": _optional_number((sample.get("rain") or {}).get("3h")),
    }
    if not all(math.isfinite(value) for value in reading.values()):
        raise ValueError(f"non-finite reading in sample: {reading}")
    reading["weather"] = weather[0]
    return reading


def _dominant_condition(readings: List[Dict[str, Any]]) -> Tuple[str, Dict[str, Any]]:
    """
    Most frequent condition code of the day; ties go to whichever code was
    seen first. Also returns the first sample carrying that code.
    """
    counts: Dict[str, int] = {}
    first_seen: Dict[str, Dict[str, Any]] = {}
    for reading in readings:
        weather = reading["weather"]
        condition = weather.get("main") or "Unknown"
        counts[condition] = counts.get(condition, 0) + 1
        first_seen.setdefault(condition, weather)
    dominant = max(counts, key=lambda name: counts[name])
    return dominant, first_seen[dominant]


def _summarize_day(day: date, readings: List[Dict[str, Any]]) -> WeatherDay:
    temps = [r["temp"] for r in readings]
    humidities = [r["humidity"] for r in readings]
    winds = [r["wind"] for r in readings]
    rain = sum(r["rain"] for r in readings)
    condition, weather = _dominant_condition(readings)
    return WeatherDay(
        date=day.isoformat(),
        temperature=Temperature(min=round_half_up(min(temps)), max=round_half_up(max(temps))),
        condition=condition,
        description=weather.get("description") or "",
        humidity=round_half_up(sum(humidities) / len(humidities)),
        wind_speed=round_half_up(sum(winds) / len(winds)),
        precipitation=round(rain, 2),
        icon=weather.get("icon") or "01d",
    )


def normalize_forecast(samples: List[Dict[str, Any]], start: date, end: date) -> List[WeatherDay]:
    """
    Collapse 3-hourly forecast samples into one WeatherDay per calendar date
    inside [start, end], in order of first appearance. Samples with a bad
    timestamp or temperature are skipped; null humidity, wind or rain read as 0.
    """
    buckets: Dict[date, List[Dict[str, Any]]] = {}
    for sample in samples:
        try:
            day = _sample_date(sample)
            reading = _reading(sample)
        except (KeyError, IndexError, TypeError, ValueError, AttributeError, OverflowError, OSError):
            logger.debug("Skipping malformed forecast sample: %s", sample)
            continue
        if start <= day <= end:
            buckets.setdefault(day, []).append(reading)
    return [_summarize_day(day, readings) for day, readings in buckets.items()]


def mock_forecast(start: date, end: date) -> List[WeatherDay]:
    forecast: List[WeatherDay] = []
    current = start
    while current <= end:
        forecast.append(
            WeatherDay(
                date=current.isoformat(),
                temperature=Temperature(min=random.randint(20, 24), max=random.randint(28, 34)),
                condition="Clear",
                description="Clear sky",
                humidity=random.randint(45, 64),
                wind_speed=random.randint(5, 14),
                precipitation=0.0,
                icon="01d",
            )
        )
        current += timedelta(days=1)
    return forecast


def mock_weather(destination: str, start: date, end: date) -> WeatherInfo:
    return WeatherInfo(
        location=destination,
        forecast=mock_forecast(start, end),
        summary=FALLBACK_SUMMARY.format(destination=destination),
        recommendations=list(FALLBACK_RECOMMENDATIONS),
    )


async def _fetch_weather(destination: str, start: date, end: date, settings: ProviderSettings) -> WeatherInfo:
    if not settings.configured:
        raise ConfigurationError("OpenWeather API key not configured")

    geo = await geocode_location(destination, settings)
    if not geo:
        raise ProviderError(f"Could not find coordinates for {destination}", provider="openweather")

    params = {"lat": geo["lat"], "lon": geo["lon"], "appid": settings.api_key, "units": "metric"}
    url = f"{settings.base_url.rstrip('/')}/data/2.5/forecast"
    try:
        async with httpx.AsyncClient(timeout=settings.timeout_seconds) as client:
            resp = await client.get(url, params=params)
            resp.raise_for_status()
        data = resp.json()
    except httpx.TimeoutException as exc:
        raise ProviderTimeoutError(f"Weather API timed out: {exc}", provider="openweather") from exc
    except (httpx.HTTPError, ValueError) as exc:
        raise ProviderError(f"Weather API error: {exc}", provider="openweather") from exc

    if not isinstance(data, dict):
        raise ProviderError("Weather API returned an unexpected payload", provider="openweather")

    forecast = normalize_forecast(data.get("list") or [], start, end)
    location = (data.get("city") or {}).get("name") or geo["name"]
    return WeatherInfo(location=location, forecast=forecast)


async def get_weather(destination: str, start: date, end: date, settings: ProviderSettings) -> WeatherInfo:
    """
    Daily forecast for the trip window from OpenWeather when a key is
    configured, falling back to a mock forecast when the key is missing, the
    call fails, or no forecast day falls inside the window.
    """
    try:
        info = await _fetch_weather(destination, start, end, settings)
    except ConfigurationError as exc:
        logger.warning("%s; using mock weather data", exc)
        return mock_weather(destination, start, end)
    except ProviderError as exc:
        logger.warning("Weather lookup failed for %s: %s", destination, exc)
        return mock_weather(destination, start, end)

    if not info.forecast:
        logger.warning("Weather API returned no days inside %s..%s; using mock data", start, end)
        return mock_weather(destination, start, end)
    return info
