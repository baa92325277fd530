"""Shared test fixtures."""

from typing import Dict, List, Optional

import pytest

from village_forecast.weather.client import OpenMeteoForecastClient
from village_forecast.weather.geocoding import CityNotFoundError, OpenMeteoGeocodingClient
from village_forecast.weather.models import DailyForecast, ForecastResult, Location
from village_forecast.weather.service import WeatherService

GEOCODING_URL = "https://geocoding.test/v1/search"
FORECAST_URL = "https://forecast.test/v1/forecast"

FORECAST_DATES = [
    "2026-10-17", "2026-10-18", "2026-10-19", "2026-10-20",
    "2026-10-21", "2026-10-22", "2026-10-23",
]


def geocoding_payload(name: str = "Jammalamadugu", lat: float = 14.84677, lon: float = 78.38314) -> dict:
    return {
        "results": [
            {
                "id": 1269227,
                "name": name,
                "latitude": lat,
                "longitude": lon,
                "elevation": 203.0,
                "country_code": "IN",
                "timezone": "Asia/Kolkata",
                "country": "India",
                "admin1": "Andhra Pradesh",
            }
        ],
        "generationtime_ms": 0.71,
    }


@pytest.fixture
def forecast_payload() -> dict:
    return {
        "latitude": 14.875,
        "longitude": 78.375,
        "timezone": "Asia/Kolkata",
        "daily_units": {
            "time": "iso8601",
            "temperature_2m_max": "°C",
            "temperature_2m_min": "°C",
            "precipitation_sum": "mm",
            "precipitation_probability_max": "%",
        },
        "daily": {
            "time": FORECAST_DATES,
            "temperature_2m_max": [35.1, 34.0, 33.2, 30.5, 36.0, 29.8, 34.4],
            "temperature_2m_min": [24.3, 24.0, 23.5, 22.9, 25.1, 22.0, 23.8],
            "precipitation_sum": [0.0, 1.2, 3.4, 12.5, 0.0, 20.1, 0.3],
            "precipitation_probability_max": [10, 60, 61, 85, 0, 100, 45],
        },
    }


@pytest.fixture
def weather_service() -> WeatherService:
    return WeatherService(
        geocoding_client=OpenMeteoGeocodingClient(base_url=GEOCODING_URL),
        forecast_client=OpenMeteoForecastClient(base_url=FORECAST_URL),
    )


class MemoryCityStore:
    """In-memory city store recording every save."""

    def __init__(self, city: Optional[str] = None):
        self.city = city
        self.saved: List[str] = []

    async def load(self) -> Optional[str]:
        return self.city

    async def save(self, name: str) -> None:
        self.city = name
        self.saved.append(name)


class StubWeatherService:
    """Weather service answering from a fixed set of forecasts."""

    def __init__(self, forecasts: Dict[str, ForecastResult]):
        self.forecasts = {city.lower(): forecast for city, forecast in forecasts.items()}
        self.queries: List[str] = []
        self.closed = False

    async def resolve_location(self, city: str) -> Location:
        self.queries.append(city)
        forecast = self.forecasts.get(city.strip().lower())
        if forecast is None:
            raise CityNotFoundError(city)
        return Location(name=forecast.location, latitude=15.0, longitude=78.0)

    async def get_forecast(self, location: Location) -> ForecastResult:
        return self.forecasts[location.name.lower()]

    async def get_forecast_for_city(self, city: str) -> ForecastResult:
        return await self.get_forecast(await self.resolve_location(city))

    async def aclose(self):
        self.closed = True


def make_forecast(location: str, probabilities: List[float]) -> ForecastResult:
    return ForecastResult(
        location=location,
        days=[
            DailyForecast(
                date=FORECAST_DATES[index],
                temp_max=34.0,
                temp_min=24.0,
                precipitation_sum=1.5,
                precipitation_probability_max=probability,
            )
            for index, probability in enumerate(probabilities)
        ],
    )


@pytest.fixture
def memory_store() -> MemoryCityStore:
    return MemoryCityStore()


@pytest.fixture
def stub_service() -> StubWeatherService:
    return StubWeatherService({
        "Jammalamadugu": make_forecast("Jammalamadugu", [10, 70, 60]),
        "Guntur": make_forecast("Guntur", [90, 20]),
    })


class GatedService(StubWeatherService):
    """Stub whose lookups for one city wait until ``release`` is set."""

    def __init__(self, forecasts: Dict[str, ForecastResult], gated_city: str):
        super().__init__(forecasts)
        self.gated_city = gated_city
        self.release = None

    async def resolve_location(self, city: str) -> Location:
        if city == self.gated_city:
            await self.release.wait()
        return await super().resolve_location(city)
