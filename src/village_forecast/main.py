"""Main FastAPI application for the village forecast service."""

import asyncio
import logging
import traceback
from contextlib import asynccontextmanager, suppress
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from village_forecast.api.endpoints import router as weather_router
from village_forecast.api.pages import router as page_router
from village_forecast.config import DEBUG, HOST, PORT, REDIS_URL
from village_forecast.logging_config import configure_logging
from village_forecast.storage.city_store import CityStore, RedisCityStore
from village_forecast.view.page import STATIC_DIR
from village_forecast.weather.search import SearchOrchestrator
from village_forecast.weather.service import WeatherService

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)


def build_lifespan(
    weather_service: Optional[WeatherService] = None,
    city_store: Optional[CityStore] = None
):
    """Build the lifespan handler wiring services into the app state.

    Args:
        weather_service: Weather service to use (creates default if None)
        city_store: City store to use (creates Redis store if None)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        service = weather_service or WeatherService()
        store = city_store
        if store is None:
            logger.info(f"Connecting to Redis at {REDIS_URL}")
            store = RedisCityStore()

        orchestrator = SearchOrchestrator(service, store)
        app.state.weather_service = service
        app.state.city_store = store
        app.state.orchestrator = orchestrator

        try:
            logger.info("Starting Village Forecast Service")
            # First search runs in the background so the page can show it loading
            app.state.startup_task = asyncio.create_task(orchestrator.initialize())
            yield
        except Exception as e:
            logger.error(f"Startup error: {e}")
            logger.error(traceback.format_exc())
            raise
        finally:
            logger.info("Shutting down Village Forecast Service")
            startup_task = app.state.startup_task
            if not startup_task.done():
                startup_task.cancel()
                with suppress(asyncio.CancelledError):
                    await startup_task
            await orchestrator.cancel_pending()
            await service.aclose()
            if hasattr(store, "aclose"):
                try:
                    await store.aclose()
                except Exception as e:
                    logger.error(f"Error closing city store: {e}")

    return lifespan


def create_app(
    weather_service: Optional[WeatherService] = None,
    city_store: Optional[CityStore] = None
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        weather_service: Weather service to use (creates default if None)
        city_store: City store to use (creates Redis store if None)

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Village Forecast Service",
        description="7-day English / Telugu weather forecast by city name using Open-Meteo",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=build_lifespan(weather_service, city_store)
    )

    # Stylesheet for the forecast page
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    # Include routers
    app.include_router(page_router)
    app.include_router(weather_router)

    @app.get("/api", tags=["root"])
    async def api_info() -> dict:
        """API information endpoint.

        Returns:
            Basic service information
        """
        return {
            "message": "Village Forecast Service",
            "page": "/",
            "docs": "/docs",
            "redoc": "/redoc",
            "state": "/weather/state",
            "forecast": "/weather/forecast?city=<name>",
            "health": "/weather/health"
        }

    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        reload=DEBUG,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
