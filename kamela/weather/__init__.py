"""
Weather lookup layer.

Resolves a free-text place name with AccuWeather and returns the location
together with the forecast headline:

    WeatherClient.get_forecast("London")  →  (Location, Forecast)

Failures are raised as WeatherError subclasses whose messages are safe to
show to Discord users.
"""

from kamela.weather.client import WeatherClient
from kamela.weather.models import (
    Country,
    Forecast,
    Headline,
    Location,
    LocationNotFoundError,
    WeatherError,
    WeatherParseError,
    WeatherRequestError,
    WeatherStatusError,
)

__all__ = [
    "WeatherClient",
    "Country",
    "Forecast",
    "Headline",
    "Location",
    "LocationNotFoundError",
    "WeatherError",
    "WeatherParseError",
    "WeatherRequestError",
    "WeatherStatusError",
]
