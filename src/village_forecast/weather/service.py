"""Weather service for assembling daily forecasts."""

import logging
from typing import List, Optional

from village_forecast.weather.client import OpenMeteoForecastClient
from village_forecast.weather.geocoding import OpenMeteoGeocodingClient
from village_forecast.weather.models import (
    DailyForecast, ForecastResult, Location, OpenMeteoDaily
)

logger = logging.getLogger(__name__)


class WeatherService:
    """Service composing geocoding and forecast lookups."""

    def __init__(
        self,
        geocoding_client: Optional[OpenMeteoGeocodingClient] = None,
        forecast_client: Optional[OpenMeteoForecastClient] = None
    ):
        """Initialize the weather service.

        Args:
            geocoding_client: Geocoding client instance (creates default if None)
            forecast_client: Forecast client instance (creates default if None)
        """
        self.geocoding_client = geocoding_client or OpenMeteoGeocodingClient()
        self.forecast_client = forecast_client or OpenMeteoForecastClient()

    async def resolve_location(self, city: str) -> Location:
        """Resolve a city name to a location.

        Raises:
            CityNotFoundError: If no location matches
            httpx.HTTPError: If API request fails
        """
        return await self.geocoding_client.resolve(city)

    async def get_forecast(self, location: Location) -> ForecastResult:
        """Get the daily forecast for a resolved location.

        Args:
            location: Resolved location

        Returns:
            ForecastResult named after the location

        Raises:
            ValueError: If coordinates are invalid or the series lengths differ
            httpx.HTTPError: If API request fails
            ValidationError: If response format is invalid
        """
        daily = await self.forecast_client.get_daily_forecast(location.latitude, location.longitude)
        days = self._build_daily_forecasts(daily)

        logger.info(f"Built forecast for {location.name} with {len(days)} days")
        return ForecastResult(location=location.name, days=days)

    async def get_forecast_for_city(self, city: str) -> ForecastResult:
        """Resolve a city and get its forecast in one call.

        Nothing is persisted.
        """
        location = await self.resolve_location(city)
        return await self.get_forecast(location)

    def _build_daily_forecasts(self, daily: OpenMeteoDaily) -> List[DailyForecast]:
        """Turn the provider's parallel daily arrays into one record per day.

        Args:
            daily: Daily block of the forecast response

        Returns:
            List of daily forecasts in provider order

        Raises:
            ValueError: If the arrays do not share the same length
        """
        series = [
            daily.temperature_2m_max,
            daily.temperature_2m_min,
            daily.precipitation_sum,
            daily.precipitation_probability_max,
        ]
        if any(len(values) != len(daily.time) for values in series):
            raise ValueError(
                f"Misaligned daily series: {len(daily.time)} dates, "
                f"lengths {[len(values) for values in series]}"
            )

        return [
            DailyForecast(
                date=date,
                temp_max=temp_max,
                temp_min=temp_min,
                precipitation_sum=precipitation_sum,
                precipitation_probability_max=probability,
            )
            for date, temp_max, temp_min, precipitation_sum, probability in zip(daily.time, *series)
        ]

    async def aclose(self):
        """Close both API clients."""
        for client in (self.geocoding_client, self.forecast_client):
            try:
                await client.aclose()
            except Exception as e:
                logger.error(f"Error closing {type(client).__name__}: {e}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
