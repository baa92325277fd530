"""Geocoding client for the Open-Meteo geocoding API."""

import logging

import httpx
from pydantic import ValidationError

from village_forecast.config import GEOCODING_API_URL, HTTP_TIMEOUT_SECONDS, USER_AGENT
from village_forecast.weather.models import GeocodingResponse, Location

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Raised when geocoding fails."""
    pass


class CityNotFoundError(GeocodingError):
    """Raised when the geocoding API has no match for a query."""

    def __init__(self, query: str):
        super().__init__(f"City '{query}' not found")
        self.query = query


class OpenMeteoGeocodingClient:
    """Async client resolving place names to coordinates."""

    def __init__(
        self,
        base_url: str = GEOCODING_API_URL,
        user_agent: str = USER_AGENT,
        timeout: float = HTTP_TIMEOUT_SECONDS
    ):
        """Initialize the geocoding client.

        Args:
            base_url: Geocoding search endpoint URL
            user_agent: User-Agent header for API requests
            timeout: Request timeout in seconds
        """
        self.base_url = base_url
        self.client = httpx.AsyncClient(
            headers={"User-Agent": user_agent},
            timeout=timeout
        )

    async def resolve(self, query: str) -> Location:
        """Resolve a free-text place name to its best match.

        Args:
            query: Place name to look up

        Returns:
            Location with canonical name and coordinates

        Raises:
            CityNotFoundError: If the API returns no match
            httpx.HTTPError: If API request fails
            ValidationError: If response format is invalid
        """
        params = {"name": query, "count": 1, "language": "en", "format": "json"}

        logger.info(f"Geocoding city: {query}")

        try:
            response = await self.client.get(self.base_url, params=params)
            response.raise_for_status()
            geocoding = GeocodingResponse(**response.json())

        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from geocoding API: {e.response.status_code} - {e.response.text}")
            raise
        except httpx.RequestError as e:
            logger.error(f"Request error to geocoding API: {e}")
            raise
        except ValidationError as e:
            logger.error(f"Invalid geocoding API response format: {e}")
            raise

        if not geocoding.results:
            logger.info(f"No geocoding match for '{query}'")
            raise CityNotFoundError(query)

        match = geocoding.results[0]
        location = Location(name=match.name, latitude=match.latitude, longitude=match.longitude)
        logger.info(f"Successfully geocoded '{query}' to {location.name} ({location.latitude}, {location.longitude})")
        return location

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
