"""
Unit tests for WeatherClient.

The aiohttp session is replaced by a MagicMock whose get() returns async
context managers, so no network access is needed.

Covers:
- Successful two-step lookup (location search → forecast)
- Typed failures: unknown place, non-2xx status, transport error, bad JSON
- Session ownership (own session closed on exit, shared session left open)
"""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from kamela.config.settings import WeatherSettings
from kamela.weather import (
    LocationNotFoundError,
    WeatherClient,
    WeatherError,
    WeatherParseError,
    WeatherRequestError,
    WeatherStatusError,
)


LONDON = {
    "Key": "328328",
    "LocalizedName": "London",
    "Country": {"ID": "GB", "LocalizedName": "United Kingdom"},
    "Rank": 10,
}

FORECAST = {
    "Headline": {
        "Text": "Rain Tuesday night",
        "Category": "rain",
        "Severity": 5,
    },
    "DailyForecasts": [],
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_response(body=None, status=200, reason="OK", json_error=None):
    """Build the async context manager returned by session.get()."""
    response = MagicMock()
    response.status = status
    response.reason = reason
    if json_error is not None:
        response.json = AsyncMock(side_effect=json_error)
    else:
        response.json = AsyncMock(return_value=body)

    cm = MagicMock()
    cm.__aenter__ = AsyncMock(return_value=response)
    cm.__aexit__ = AsyncMock(return_value=False)
    return cm


def _make_session(*responses):
    session = MagicMock(spec=aiohttp.ClientSession)
    session.get = MagicMock(side_effect=list(responses))
    session.close = AsyncMock()
    return session


@pytest.fixture
def settings():
    return WeatherSettings(api_key="test-key", base_url="http://weather.test/")


# ---------------------------------------------------------------------------
# Successful lookups
# ---------------------------------------------------------------------------

class TestGetForecast:
    @pytest.mark.asyncio
    async def test_returns_location_and_headline(self, settings):
        session = _make_session(_make_response([LONDON]), _make_response(FORECAST))

        async with WeatherClient(settings, session=session) as client:
            location, forecast = await client.get_forecast("London")

        assert location.localized_name == "London"
        assert str(location) == "London, GB"
        assert forecast.headline.overview == "Rain Tuesday night"
        assert forecast.headline.category == "rain"

    @pytest.mark.asyncio
    async def test_location_and_headline_are_non_empty(self, settings):
        session = _make_session(_make_response([LONDON]), _make_response(FORECAST))

        async with WeatherClient(settings, session=session) as client:
            location, forecast = await client.get_forecast("London")

        assert str(location)
        assert forecast.headline.overview

    @pytest.mark.asyncio
    async def test_requests_search_then_forecast_for_first_location(self, settings):
        paris = {**LONDON, "Key": "999", "LocalizedName": "Paris"}
        session = _make_session(_make_response([LONDON, paris]), _make_response(FORECAST))

        async with WeatherClient(settings, session=session) as client:
            location, _ = await client.get_forecast("  London ")

        assert location.key == "328328"
        search_call, forecast_call = session.get.call_args_list
        assert search_call.args[0] == "http://weather.test/locations/v1/cities/search"
        assert search_call.kwargs["params"] == {"apikey": "test-key", "q": "London"}
        assert forecast_call.args[0] == "http://weather.test/forecasts/v1/daily/5day/328328"
        assert forecast_call.kwargs["params"] == {"apikey": "test-key"}

    @pytest.mark.asyncio
    async def test_missing_category_is_optional(self, settings):
        forecast = {"Headline": {"Text": "Pleasant this weekend"}}
        session = _make_session(_make_response([LONDON]), _make_response(forecast))

        async with WeatherClient(settings, session=session) as client:
            _, result = await client.get_forecast("London")

        assert result.headline.category is None


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestGetForecastErrors:
    @pytest.mark.asyncio
    async def test_unknown_place_raises_location_not_found(self, settings):
        session = _make_session(_make_response([]))

        async with WeatherClient(settings, session=session) as client:
            with pytest.raises(LocationNotFoundError) as exc_info:
                await client.get_forecast("Atlantis")

        assert exc_info.value.place == "Atlantis"
        assert str(exc_info.value) == "Could not find location 'Atlantis'"
        assert session.get.call_count == 1

    @pytest.mark.asyncio
    async def test_blank_place_raises_without_request(self, settings):
        session = _make_session()

        async with WeatherClient(settings, session=session) as client:
            with pytest.raises(LocationNotFoundError):
                await client.get_forecast("   ")

        session.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_2xx_status_raises_status_error(self, settings):
        session = _make_session(_make_response({"Code": "Unauthorized"}, status=401, reason="Unauthorized"))

        async with WeatherClient(settings, session=session) as client:
            with pytest.raises(WeatherStatusError) as exc_info:
                await client.get_forecast("London")

        assert exc_info.value.status == 401
        assert "401" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_forecast_status_error_after_successful_search(self, settings):
        session = _make_session(_make_response([LONDON]), _make_response(None, status=503, reason="Service Unavailable"))

        async with WeatherClient(settings, session=session) as client:
            with pytest.raises(WeatherStatusError) as exc_info:
                await client.get_forecast("London")

        assert exc_info.value.status == 503

    @pytest.mark.asyncio
    async def test_connection_error_raises_request_error(self, settings):
        session = MagicMock(spec=aiohttp.ClientSession)
        session.get = MagicMock(side_effect=aiohttp.ClientConnectionError("connection refused"))

        async with WeatherClient(settings, session=session) as client:
            with pytest.raises(WeatherRequestError):
                await client.get_forecast("London")

    @pytest.mark.asyncio
    async def test_timeout_raises_request_error(self, settings):
        cm = MagicMock()
        cm.__aenter__ = AsyncMock(side_effect=asyncio.TimeoutError())
        cm.__aexit__ = AsyncMock(return_value=False)
        session = _make_session(cm)

        async with WeatherClient(settings, session=session) as client:
            with pytest.raises(WeatherRequestError):
                await client.get_forecast("London")

    @pytest.mark.asyncio
    async def test_invalid_json_raises_parse_error(self, settings):
        bad = json.JSONDecodeError("Expecting value", "<html>", 0)
        session = _make_session(_make_response(json_error=bad))

        async with WeatherClient(settings, session=session) as client:
            with pytest.raises(WeatherParseError):
                await client.get_forecast("London")

    @pytest.mark.asyncio
    async def test_location_missing_fields_raises_parse_error(self, settings):
        session = _make_session(_make_response([{"Key": "328328"}]))

        async with WeatherClient(settings, session=session) as client:
            with pytest.raises(WeatherParseError):
                await client.get_forecast("London")

    @pytest.mark.asyncio
    async def test_search_returning_object_raises_parse_error(self, settings):
        session = _make_session(_make_response({"Message": "not a list"}))

        async with WeatherClient(settings, session=session) as client:
            with pytest.raises(WeatherParseError):
                await client.get_forecast("London")

    @pytest.mark.asyncio
    async def test_empty_headline_raises_parse_error(self, settings):
        session = _make_session(_make_response([LONDON]), _make_response({"Headline": {"Text": ""}}))

        async with WeatherClient(settings, session=session) as client:
            with pytest.raises(WeatherParseError):
                await client.get_forecast("London")

    @pytest.mark.asyncio
    async def test_all_failures_are_weather_errors(self, settings):
        """Callers only need to catch WeatherError."""
        session = _make_session(_make_response([]))

        async with WeatherClient(settings, session=session) as client:
            with pytest.raises(WeatherError):
                await client.get_forecast("Nowhere")

    @pytest.mark.asyncio
    async def test_unopened_client_raises_runtime_error(self, settings):
        client = WeatherClient(settings)
        with pytest.raises(RuntimeError):
            await client.get_forecast("London")


# ---------------------------------------------------------------------------
# Session lifecycle
# ---------------------------------------------------------------------------

class TestSessionLifecycle:
    @pytest.mark.asyncio
    async def test_shared_session_is_not_closed(self, settings):
        session = _make_session()

        async with WeatherClient(settings, session=session):
            pass

        session.close.assert_not_called()

    @pytest.mark.asyncio
    async def test_own_session_is_opened_and_closed(self, settings):
        session = _make_session()

        with patch("kamela.weather.client.aiohttp.ClientSession", return_value=session) as factory:
            async with WeatherClient(settings):
                factory.assert_called_once_with()

        session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_timeout_setting_is_passed_to_session(self):
        settings = WeatherSettings(api_key="k", timeout_seconds=5)
        session = _make_session()

        with patch("kamela.weather.client.aiohttp.ClientSession", return_value=session) as factory:
            async with WeatherClient(settings):
                pass

        timeout = factory.call_args.kwargs["timeout"]
        assert timeout.total == 5
