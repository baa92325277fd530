"""API endpoints for the village forecast service."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import ValidationError

from village_forecast.api.pages import get_orchestrator
from village_forecast.config import DEFAULT_CITY, RAIN_PROBABILITY_THRESHOLD
from village_forecast.weather.geocoding import CityNotFoundError
from village_forecast.weather.models import ErrorResponse, ForecastResult, SearchState
from village_forecast.weather.search import SearchOrchestrator
from village_forecast.weather.service import WeatherService

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/weather", tags=["weather"])


def get_weather_service(request: Request) -> WeatherService:
    """Dependency to get the application's weather service."""
    return request.app.state.weather_service


@router.get("/state", response_model=SearchState)
async def get_search_state(
    orchestrator: SearchOrchestrator = Depends(get_orchestrator)
) -> SearchState:
    """Get the state shown on the forecast page."""
    return orchestrator.state


@router.get(
    "/forecast",
    response_model=ForecastResult,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    }
)
async def get_city_forecast(
    city: str = Query(..., description="City or village name"),
    weather_service: WeatherService = Depends(get_weather_service)
) -> ForecastResult:
    """Get the 7-day forecast for a city without touching the saved city.

    Args:
        city: City or village name

    Returns:
        ForecastResult with one entry per day

    Raises:
        HTTPException: If the city is empty or unknown, or the provider fails
    """
    if not city.strip():
        raise HTTPException(status_code=400, detail="City name must not be empty.")

    try:
        forecast = await weather_service.get_forecast_for_city(city)
        logger.info(f"Successfully retrieved forecast with {len(forecast.days)} days")
        return forecast

    except CityNotFoundError as e:
        logger.warning(f"Forecast lookup failed: {e}")
        raise HTTPException(status_code=404, detail=str(e))

    except ValidationError as e:
        logger.error(f"Provider data validation error: {e}")
        raise HTTPException(status_code=502, detail="Weather service returned invalid data")

    except ValueError as e:
        logger.error(f"Error getting forecast: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        logger.error(f"Unexpected error getting forecast: {e}")
        raise HTTPException(status_code=502, detail="Weather service temporarily unavailable")


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status response
    """
    return {"status": "healthy", "service": "village-forecast"}


@router.get("/info")
async def get_service_info() -> dict:
    """Get service information.

    Returns:
        Service information including default city and features
    """
    return {
        "service": "Village Forecast Service",
        "version": "0.1.0",
        "default_city": DEFAULT_CITY,
        "rain_probability_threshold": RAIN_PROBABILITY_THRESHOLD,
        "features": [
            "7-day daily forecast by city or village name",
            "English / Telugu forecast page",
            "Remembers the last searched city"
        ],
        "data_source": "Open-Meteo geocoding and forecast APIs"
    }
