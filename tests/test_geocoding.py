"""Tests for the Open-Meteo geocoding client with mocked httpx."""

import asyncio

import httpx
import pytest
import respx

from conftest import GEOCODING_URL, geocoding_payload
from village_forecast.weather.geocoding import (
    CityNotFoundError, GeocodingError, OpenMeteoGeocodingClient
)


@pytest.fixture
def geocoder() -> OpenMeteoGeocodingClient:
    return OpenMeteoGeocodingClient(base_url=GEOCODING_URL)


class TestResolve:
    @respx.mock
    def test_success(self, geocoder: OpenMeteoGeocodingClient):
        respx.get(GEOCODING_URL).mock(
            return_value=httpx.Response(200, json=geocoding_payload("Guntur", 16.29974, 80.45729))
        )

        location = asyncio.run(geocoder.resolve("guntur"))
        assert location.name == "Guntur"
        assert location.latitude == pytest.approx(16.29974)
        assert location.longitude == pytest.approx(80.45729)

    @respx.mock
    def test_query_parameters(self, geocoder: OpenMeteoGeocodingClient):
        route = respx.get(GEOCODING_URL).mock(
            return_value=httpx.Response(200, json=geocoding_payload())
        )

        asyncio.run(geocoder.resolve("Jammalamadugu"))
        assert route.called
        params = route.calls.last.request.url.params
        assert params["name"] == "Jammalamadugu"
        assert params["count"] == "1"
        assert params["language"] == "en"
        assert params["format"] == "json"

    @respx.mock
    def test_user_agent_header(self, geocoder: OpenMeteoGeocodingClient):
        route = respx.get(GEOCODING_URL).mock(
            return_value=httpx.Response(200, json=geocoding_payload())
        )

        asyncio.run(geocoder.resolve("Jammalamadugu"))
        assert "VillageForecast" in route.calls.last.request.headers["user-agent"]

    @respx.mock
    def test_missing_results_is_not_found(self, geocoder: OpenMeteoGeocodingClient):
        respx.get(GEOCODING_URL).mock(
            return_value=httpx.Response(200, json={"generationtime_ms": 0.3})
        )

        with pytest.raises(CityNotFoundError) as exc_info:
            asyncio.run(geocoder.resolve("Xyzzyville"))
        assert exc_info.value.query == "Xyzzyville"
        assert isinstance(exc_info.value, GeocodingError)

    @respx.mock
    def test_empty_results_is_not_found(self, geocoder: OpenMeteoGeocodingClient):
        respx.get(GEOCODING_URL).mock(
            return_value=httpx.Response(200, json={"results": []})
        )

        with pytest.raises(CityNotFoundError):
            asyncio.run(geocoder.resolve("Xyzzyville"))

    @respx.mock
    def test_http_error_propagates(self, geocoder: OpenMeteoGeocodingClient):
        respx.get(GEOCODING_URL).mock(return_value=httpx.Response(500))

        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(geocoder.resolve("Guntur"))

    @respx.mock
    def test_transport_error_propagates(self, geocoder: OpenMeteoGeocodingClient):
        respx.get(GEOCODING_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(httpx.RequestError):
            asyncio.run(geocoder.resolve("Guntur"))
