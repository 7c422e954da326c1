"""
AccuWeather client.

A forecast lookup is two GET requests against the AccuWeather data service:

    /locations/v1/cities/search?q=<place>   →  [Location, ...]
    /forecasts/v1/daily/5day/<location key> →  Forecast (headline)

The first location returned by the search wins. Every failure surfaces as a
WeatherError subclass; transport, status and parsing problems are never
retried.
"""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp
from pydantic import TypeAdapter, ValidationError

from kamela.config.logging import get_logger
from kamela.config.settings import WeatherSettings
from kamela.weather.models import (
    Forecast,
    Location,
    LocationNotFoundError,
    WeatherError,
    WeatherParseError,
    WeatherRequestError,
    WeatherStatusError,
)

logger = get_logger(__name__)

_LOCATIONS = TypeAdapter(list[Location])


class WeatherClient:
    """
    Looks up forecast headlines by place name.

    Use as an async context manager. If no session is given, the client opens
    its own aiohttp session on entry and closes it on exit; a session passed
    in by the caller is left open.

    Args:
        settings: Provider configuration (API key, base URL, timeout)
        session: Optional shared aiohttp session
    """

    def __init__(
        self,
        settings: WeatherSettings,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._settings = settings
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> WeatherClient:
        if self._session is None:
            kwargs: dict[str, Any] = {}
            if self._settings.timeout_seconds is not None:
                kwargs["timeout"] = aiohttp.ClientTimeout(total=self._settings.timeout_seconds)
            self._session = aiohttp.ClientSession(**kwargs)
            logger.debug("Opened weather HTTP session")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False

    async def close(self) -> None:
        """Close the HTTP session if this client opened it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            logger.debug("Closed weather HTTP session")

    async def get_forecast(self, place: str) -> tuple[Location, Forecast]:
        """
        Resolve a place name and fetch its forecast headline.

        Args:
            place: Free-text place name, e.g. "London"

        Returns:
            The resolved location and its forecast

        Raises:
            LocationNotFoundError: The place is blank or unknown to the provider
            WeatherRequestError: The provider could not be reached
            WeatherStatusError: The provider returned a non-2xx status
            WeatherParseError: The response body was not what we expect
        """
        place = place.strip()
        try:
            if not place:
                raise LocationNotFoundError(place)
            location = await self._find_location(place)
            forecast = await self._fetch_forecast(location)
        except WeatherError as e:
            logger.warning(f"Weather lookup for {place!r} failed: {e}")
            raise

        logger.info(f"Weather lookup for {place!r} resolved to {location} (key {location.key})")
        return location, forecast

    async def _find_location(self, place: str) -> Location:
        data = await self._get_json(
            "/locations/v1/cities/search",
            {"apikey": self._settings.api_key, "q": place},
        )
        try:
            locations = _LOCATIONS.validate_python(data)
        except ValidationError as e:
            raise WeatherParseError("weather service returned an unexpected location list") from e

        if not locations:
            raise LocationNotFoundError(place)
        return locations[0]

    async def _fetch_forecast(self, location: Location) -> Forecast:
        data = await self._get_json(
            f"/forecasts/v1/daily/5day/{location.key}",
            {"apikey": self._settings.api_key},
        )
        try:
            return Forecast.model_validate(data)
        except ValidationError as e:
            raise WeatherParseError("weather service returned an unexpected forecast") from e

    async def _get_json(self, path: str, params: dict[str, str]) -> Any:
        """GET a provider endpoint and decode its JSON body."""
        if self._session is None:
            raise RuntimeError("WeatherClient is not open; use it with 'async with'")

        url = f"{self._settings.base_url.rstrip('/')}{path}"
        try:
            async with self._session.get(url, params=params) as response:
                if not 200 <= response.status < 300:
                    raise WeatherStatusError(response.status, response.reason)
                try:
                    # content_type=None: the provider doesn't always label errors as JSON
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise WeatherParseError("weather service returned invalid JSON") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise WeatherRequestError(f"could not reach weather service ({e.__class__.__name__})") from e
