import unittest
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, patch

import httpx

from core.config import ProviderSettings
from tests.helpers import MockAsyncClient, MockResponse
from tools.weather import get_weather, mock_forecast, normalize_forecast

START = date(2030, 6, 1)
END = date(2030, 6, 3)
GEO = {"name": "Paris", "lat": 48.85, "lon": 2.35, "country": "FR"}


def sample(day: date, hour: int, temp: float, main: str, icon: str = "01d", description: str = "", **extra):
    ts = datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc).timestamp()
    item = {
        "dt": int(ts),
        "main": {"temp": temp, "humidity": extra.pop("humidity", 50)},
        "weather": [{"main": main, "description": description or main.lower(), "icon": icon}],
        "wind": {"speed": extra.pop("wind", 3)},
    }
    item.update(extra)
    return item


def settings(api_key="test-key") -> ProviderSettings:
    return ProviderSettings(api_key=api_key, base_url="https://api.openweathermap.org")


class NormalizeForecastTests(unittest.TestCase):
    def test_dominant_condition_uses_first_matching_sample(self):
        samples = [
            sample(START, 9, 20.4, "Clear", icon="01d", description="clear sky", humidity=60, wind=3),
            sample(START, 12, 25.5, "Clear", icon="02d", description="mostly clear", humidity=70, wind=4),
            sample(START, 15, 18.5, "Rain", icon="10d", description="light rain", humidity=80, wind=5, rain={"3h": 1.25}),
        ]
        (day,) = normalize_forecast(samples, START, END)

        self.assertEqual(day.date, "2030-06-01")
        self.assertEqual(day.condition, "Clear")
        self.assertEqual(day.icon, "01d")
        self.assertEqual(day.description, "clear sky")
        self.assertEqual(day.temperature.min, 19)
        self.assertEqual(day.temperature.max, 26)
        self.assertEqual(day.temperature.unit, "°C")
        self.assertEqual(day.humidity, 70)
        self.assertEqual(day.wind_speed, 4)
        self.assertAlmostEqual(day.precipitation, 1.25)

    def test_ties_go_to_first_condition_seen(self):
        samples = [sample(START, 9, 15, "Clouds"), sample(START, 12, 16, "Rain")]
        (day,) = normalize_forecast(samples, START, END)
        self.assertEqual(day.condition, "Clouds")

    def test_drops_days_outside_window_and_bad_samples(self):
        samples = [
            sample(date(2030, 5, 31), 12, 10, "Clear"),
            sample(START, 12, 12, "Clear"),
            {"dt": "not-a-timestamp"},
            {"main": {"temp": 10}},
            sample(date(2030, 6, 2), 12, 14, "Rain"),
            sample(date(2030, 6, 4), 12, 16, "Snow"),
        ]
        days = normalize_forecast(samples, START, END)
        self.assertEqual([d.date for d in days], ["2030-06-01", "2030-06-02"])

    def test_null_humidity_and_wind_read_as_zero(self):
        quiet = sample(START, 12, 20, "Clear", humidity=None, wind=None)
        (day,) = normalize_forecast([quiet], START, END)

        self.assertEqual(day.humidity, 0)
        self.assertEqual(day.wind_speed, 0)
        self.assertEqual(day.temperature.max, 20)

    def test_non_numeric_temperatures_are_skipped(self):
        samples = [
            sample(START, 9, "warm", "Rain"),
            sample(START, 12, float("nan"), "Rain"),
            sample(START, 15, 22, "Clear"),
        ]
        (day,) = normalize_forecast(samples, START, END)

        self.assertEqual(day.condition, "Clear")
        self.assertEqual(day.temperature.min, 22)

    def test_mock_forecast_covers_every_day(self):
        days = mock_forecast(START, END)

        self.assertEqual([d.date for d in days], ["2030-06-01", "2030-06-02", "2030-06-03"])
        for day in days:
            self.assertTrue(20 <= day.temperature.min <= 24)
            self.assertTrue(28 <= day.temperature.max <= 34)
            self.assertEqual(day.condition, "Clear")


class GetWeatherTests(unittest.IsolatedAsyncioTestCase):
    async def test_uses_mock_weather_without_api_key(self):
        info = await get_weather("Cloud City", START, END, settings(api_key=None))

        self.assertEqual(info.location, "Cloud City")
        self.assertEqual(len(info.forecast), 3)
        self.assertIn("Cloud City", info.summary)
        self.assertEqual(len(info.recommendations), 4)

    async def test_uses_mock_weather_when_geocode_fails(self):
        with patch("tools.weather.geocode_location", new=AsyncMock(return_value=None)):
            info = await get_weather("Nowhere", START, END, settings())

        self.assertEqual(info.location, "Nowhere")
        self.assertEqual(len(info.forecast), 3)

    async def test_fetches_weather_from_api(self):
        payload = {
            "city": {"name": "Paris"},
            "list": [sample(START, 9, 18, "Clouds"), sample(date(2030, 6, 2), 9, 21, "Clear")],
        }
        client = MockAsyncClient(MockResponse(payload))
        with patch("tools.weather.geocode_location", new=AsyncMock(return_value=GEO)), patch(
            "tools.weather.httpx.AsyncClient", return_value=client
        ):
            info = await get_weather("Paris", START, END, settings())

        self.assertEqual(info.location, "Paris")
        self.assertEqual([d.condition for d in info.forecast], ["Clouds", "Clear"])
        self.assertEqual(info.summary, "")
        url, params = client.calls[0]
        self.assertTrue(url.endswith("/data/2.5/forecast"))
        self.assertEqual(params["units"], "metric")
        self.assertEqual(params["appid"], "test-key")

    async def test_null_readings_from_api_do_not_fall_back(self):
        partial = sample(START, 9, 20, "Clouds", humidity=None)
        partial["wind"] = None
        client = MockAsyncClient(MockResponse({"city": {"name": "Paris"}, "list": [partial]}))
        with patch("tools.weather.geocode_location", new=AsyncMock(return_value=GEO)), patch(
            "tools.weather.httpx.AsyncClient", return_value=client
        ):
            info = await get_weather("Paris", START, END, settings())

        (day,) = info.forecast
        self.assertEqual(day.condition, "Clouds")
        self.assertEqual(day.humidity, 0)
        self.assertEqual(day.wind_speed, 0)

    async def test_non_object_payload_falls_back(self):
        client = MockAsyncClient(MockResponse(["unexpected"]))
        with patch("tools.weather.geocode_location", new=AsyncMock(return_value=GEO)), patch(
            "tools.weather.httpx.AsyncClient", return_value=client
        ):
            info = await get_weather("Paris", START, END, settings())

        self.assertEqual(len(info.forecast), 3)
        self.assertEqual(info.forecast[0].condition, "Clear")

    async def test_http_error_falls_back(self):
        client = MockAsyncClient(MockResponse({}, status_code=500))
        with patch("tools.weather.geocode_location", new=AsyncMock(return_value=GEO)), patch(
            "tools.weather.httpx.AsyncClient", return_value=client
        ):
            info = await get_weather("Paris", START, END, settings())

        self.assertEqual(len(info.forecast), 3)
        self.assertTrue(info.summary.startswith("Generally pleasant weather"))

    async def test_timeout_falls_back(self):
        client = MockAsyncClient(error=httpx.ReadTimeout("slow"))
        with patch("tools.weather.geocode_location", new=AsyncMock(return_value=GEO)), patch(
            "tools.weather.httpx.AsyncClient", return_value=client
        ):
            info = await get_weather("Paris", START, END, settings())

        self.assertEqual(len(info.forecast), 3)

    async def test_forecast_outside_window_falls_back(self):
        payload = {"list": [sample(date(2030, 7, 1), 9, 18, "Clouds")]}
        with patch("tools.weather.geocode_location", new=AsyncMock(return_value=GEO)), patch(
            "tools.weather.httpx.AsyncClient", return_value=MockAsyncClient(MockResponse(payload))
        ):
            info = await get_weather("Paris", START, END, settings())

        self.assertEqual(len(info.forecast), 3)
        self.assertEqual(info.forecast[0].condition, "Clear")


if __name__ == "__main__":
    unittest.main()
