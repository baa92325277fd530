"""HTTP client for the Open-Meteo forecast API."""

import logging

import httpx
from pydantic import ValidationError

from village_forecast.config import (
    FORECAST_API_URL, FORECAST_DAILY_FIELDS, HTTP_TIMEOUT_SECONDS, USER_AGENT
)
from village_forecast.weather.models import OpenMeteoDaily, OpenMeteoForecastResponse

logger = logging.getLogger(__name__)


class OpenMeteoForecastClient:
    """Async client for fetching daily forecasts from Open-Meteo."""

    def __init__(
        self,
        base_url: str = FORECAST_API_URL,
        user_agent: str = USER_AGENT,
        timeout: float = HTTP_TIMEOUT_SECONDS
    ):
        """Initialize the forecast client.

        Args:
            base_url: Forecast endpoint URL
            user_agent: User-Agent header for API requests
            timeout: Request timeout in seconds
        """
        self.base_url = base_url
        self.user_agent = user_agent
        self.client = httpx.AsyncClient(
            headers={"User-Agent": self.user_agent},
            timeout=timeout
        )

    async def get_daily_forecast(self, lat: float, lon: float) -> OpenMeteoDaily:
        """Fetch the daily forecast for given coordinates.

        The provider returns one value per day in each requested series, all of
        the same length as ``time``.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees

        Returns:
            Daily forecast series

        Raises:
            ValueError: If coordinates are invalid
            httpx.HTTPError: If API request fails
            ValidationError: If response format is invalid
        """
        if not (-90 <= lat <= 90) or not (-180 <= lon <= 180):
            raise ValueError(f"Invalid coordinates: lat={lat}, lon={lon}")

        params = {
            "latitude": lat,
            "longitude": lon,
            "daily": ",".join(FORECAST_DAILY_FIELDS),
            "timezone": "auto",
        }

        logger.info(f"Fetching daily forecast for lat={lat}, lon={lon}")

        try:
            response = await self.client.get(self.base_url, params=params)
            response.raise_for_status()

            forecast = OpenMeteoForecastResponse(**response.json())

            logger.info(
                f"Successfully fetched {len(forecast.daily.time)} forecast days "
                f"(timezone={forecast.timezone})"
            )
            return forecast.daily

        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from forecast API: {e.response.status_code} - {e.response.text}")
            raise
        except httpx.RequestError as e:
            logger.error(f"Request error to forecast API: {e}")
            raise
        except ValidationError as e:
            logger.error(f"Invalid forecast API response format: {e}")
            raise

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
