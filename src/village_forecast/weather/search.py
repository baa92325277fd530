"""Search orchestration behind the forecast page."""

import asyncio
import logging
from contextlib import suppress
from typing import Optional, Set

from village_forecast.config import DEFAULT_CITY, NETWORK_ERROR_MESSAGE, NOT_FOUND_MESSAGE
from village_forecast.storage.city_store import CityStore
from village_forecast.weather.geocoding import CityNotFoundError
from village_forecast.weather.models import SearchState
from village_forecast.weather.service import WeatherService

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """Runs city searches and keeps the page state.

    A search geocodes the query, saves the resolved name, then fetches the
    forecast. Failures are turned into a user-facing message on the state and
    never propagate. Overlapping searches are not cancelled: whichever finishes
    last writes the state.
    """

    def __init__(
        self,
        weather_service: WeatherService,
        city_store: CityStore,
        default_city: str = DEFAULT_CITY
    ):
        """Initialize the orchestrator.

        Args:
            weather_service: Service used for geocoding and forecasts
            city_store: Storage for the last resolved city
            default_city: City searched on first start when nothing was saved
        """
        self.weather_service = weather_service
        self.city_store = city_store
        self.default_city = default_city
        self._state = SearchState()
        self._initialized = False
        self._pending: Set[asyncio.Task] = set()

    @property
    def state(self) -> SearchState:
        return self._state

    def set_query_text(self, text: str) -> None:
        self._state.query_text = text

    @property
    def pending_searches(self) -> Set[asyncio.Task]:
        return set(self._pending)

    def submit(self, query_text: str) -> Optional[asyncio.Task]:
        """Start a search in the background and return its task.

        The state shows loading as soon as this returns, so a page rendered
        right after a form submission shows the indicator. Blank queries
        start nothing and return None.
        """
        if not query_text.strip():
            logger.debug("Ignoring empty search")
            return None

        self._state.is_loading = True
        self._state.error_message = None

        task = asyncio.create_task(self.search(query_text))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def cancel_pending(self) -> None:
        """Cancel background searches that have not finished."""
        for task in list(self._pending):
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

    async def initialize(self) -> None:
        """Run the first search with the saved city or the default one.

        Only the first call does anything.
        """
        if self._initialized:
            return
        self._initialized = True

        saved_city = await self.city_store.load()
        query = saved_city or self.default_city
        logger.info(f"Initial search for '{query}' ({'saved' if saved_city else 'default'} city)")

        self.set_query_text(query)
        await self.search(query)

    async def search(self, query_text: str) -> None:
        """Search a city and update the state with its forecast or an error.

        Args:
            query_text: City name as typed by the user
        """
        if not query_text.strip():
            logger.debug("Ignoring empty search")
            return

        self._state.is_loading = True
        self._state.error_message = None

        try:
            location = await self.weather_service.resolve_location(query_text)

            # Saved before the forecast call, so a failed forecast still remembers the city
            await self.city_store.save(location.name)

            result = await self.weather_service.get_forecast(location)
            self._state.result = result
            self._state.error_message = None
            logger.info(f"Search for '{query_text}' resolved to {result.location}")

        except CityNotFoundError as e:
            logger.warning(f"Search failed: {e}")
            self._state.error_message = NOT_FOUND_MESSAGE
        except Exception as e:
            logger.error(f"Could not fetch weather for '{query_text}': {e}")
            self._state.error_message = NETWORK_ERROR_MESSAGE
        finally:
            self._state.is_loading = False
