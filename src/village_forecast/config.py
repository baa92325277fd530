"""Configuration settings for the village forecast service."""

import os
from typing import Final, Tuple
from dotenv import load_dotenv

load_dotenv()

# Open-Meteo API configuration
GEOCODING_API_URL: str = os.getenv("GEOCODING_API_URL", "https://geocoding-api.open-meteo.com/v1/search")
FORECAST_API_URL: str = os.getenv("FORECAST_API_URL", "https://api.open-meteo.com/v1/forecast")
USER_AGENT: Final[str] = "VillageForecast/0.1 (user@example.com)"
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

# Daily aggregates requested from the forecast API
FORECAST_DAILY_FIELDS: Final[Tuple[str, ...]] = (
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "precipitation_probability_max",
)

# Used when no city has been saved yet
DEFAULT_CITY: Final[str] = "Jammalamadugu"

# A day counts as rainy when its max precipitation probability is above this
RAIN_PROBABILITY_THRESHOLD: Final[int] = 60

# User-facing error messages
NOT_FOUND_MESSAGE: Final[str] = "City not found. Please try again."
NETWORK_ERROR_MESSAGE: Final[str] = "Could not fetch weather. Please try again."

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

# Redis storage for the last searched city
REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
LAST_CITY_KEY: str = os.getenv("LAST_CITY_KEY", "lastCity")
