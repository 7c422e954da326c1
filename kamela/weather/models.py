"""
Data structures and errors for the weather lookup.

The models mirror the parts of the AccuWeather responses the bot uses:
- Location: one entry of the city search result
- Forecast: the daily forecast document, of which only the headline is kept

Provider field names are PascalCase; the models expose snake_case attributes
and accept the provider names through aliases.
"""

from pydantic import BaseModel, ConfigDict, Field


class Country(BaseModel):
    """Country a location belongs to."""

    id: str = Field(alias="ID", description="ISO country code, e.g. GB")
    localized_name: str = Field(alias="LocalizedName", description="Country name")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Location(BaseModel):
    """A location resolved from a free-text place name."""

    key: str = Field(alias="Key", min_length=1, description="Provider location key")
    localized_name: str = Field(alias="LocalizedName", min_length=1, description="City name")
    country: Country = Field(alias="Country")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def __str__(self) -> str:
        return f"{self.localized_name}, {self.country.id}"


class Headline(BaseModel):
    """Short human-readable summary of the forecast."""

    overview: str = Field(alias="Text", min_length=1, description="Headline text")
    category: str | None = Field(None, alias="Category", description="e.g. rain, snow")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Forecast(BaseModel):
    """Daily forecast for a location."""

    headline: Headline = Field(alias="Headline")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class WeatherError(Exception):
    """Base class for weather lookup failures. The message is safe to show to users."""


class WeatherRequestError(WeatherError):
    """The provider could not be reached."""


class WeatherStatusError(WeatherError):
    """The provider answered with a non-2xx status."""

    def __init__(self, status: int, reason: str | None = None):
        self.status = status
        self.reason = reason
        detail = f" {reason}" if reason else ""
        super().__init__(f"weather service returned HTTP {status}{detail}")


class WeatherParseError(WeatherError):
    """The provider's response was not the JSON we expect."""


class LocationNotFoundError(WeatherError):
    """The provider knows no location for the given place name."""

    def __init__(self, place: str):
        self.place = place
        super().__init__(f"Could not find location '{place}'")
