"""Data models for the village forecast service."""

from typing import List, Optional

from pydantic import BaseModel, Field

from village_forecast.config import RAIN_PROBABILITY_THRESHOLD


def will_rain(probability: Optional[float]) -> bool:
    """Classify a day's max precipitation probability as rain / no rain.

    Args:
        probability: Max precipitation probability in percent, None if unknown

    Returns:
        True only when the probability is strictly above the threshold
    """
    if probability is None:
        return False
    return probability > RAIN_PROBABILITY_THRESHOLD


class Location(BaseModel):
    """Resolved location from the geocoding API."""
    name: str = Field(..., description="Canonical place name")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")


class DailyForecast(BaseModel):
    """One day of the daily forecast."""
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    temp_max: Optional[float] = Field(None, description="Maximum temperature in Celsius")
    temp_min: Optional[float] = Field(None, description="Minimum temperature in Celsius")
    precipitation_sum: Optional[float] = Field(None, description="Total precipitation in mm")
    precipitation_probability_max: Optional[float] = Field(
        None, description="Maximum precipitation probability in percent"
    )

    @property
    def will_rain(self) -> bool:
        return will_rain(self.precipitation_probability_max)


class ForecastResult(BaseModel):
    """Forecast for a resolved location, one entry per day in ascending date order."""
    location: str = Field(..., description="Resolved location name")
    days: List[DailyForecast] = Field(..., description="Daily forecasts")


class SearchState(BaseModel):
    """State behind the forecast page."""
    query_text: str = Field("", description="Current text of the city input")
    result: Optional[ForecastResult] = Field(None, description="Last successful forecast")
    is_loading: bool = Field(False, description="True while a search is running")
    error_message: Optional[str] = Field(None, description="Message of the last failed search")


class GeocodingResult(BaseModel):
    """Single match from the Open-Meteo geocoding API."""
    name: str = Field(..., description="Place name")
    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")


class GeocodingResponse(BaseModel):
    """Raw response from the Open-Meteo geocoding API."""
    results: Optional[List[GeocodingResult]] = Field(
        None, description="Matches, missing when nothing was found"
    )


class OpenMeteoDaily(BaseModel):
    """Daily block of an Open-Meteo forecast, parallel arrays indexed by day."""
    time: List[str] = Field(..., description="Dates in YYYY-MM-DD format")
    temperature_2m_max: List[Optional[float]] = Field(..., description="Max temperatures")
    temperature_2m_min: List[Optional[float]] = Field(..., description="Min temperatures")
    precipitation_sum: List[Optional[float]] = Field(..., description="Precipitation sums")
    precipitation_probability_max: List[Optional[float]] = Field(
        ..., description="Max precipitation probabilities"
    )


class OpenMeteoForecastResponse(BaseModel):
    """Raw response from the Open-Meteo forecast API."""
    latitude: float = Field(..., description="Grid latitude used by the provider")
    longitude: float = Field(..., description="Grid longitude used by the provider")
    timezone: Optional[str] = Field(None, description="Timezone resolved by the provider")
    daily: OpenMeteoDaily = Field(..., description="Daily aggregates")


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Additional error details")
