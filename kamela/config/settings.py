"""
Application settings and configuration management.

Uses Pydantic Settings for validation and environment variable support.

Every value has one flat name (DISCORD_TOKEN, WEATHER_API_KEY, LOG_LEVEL,
...), read from the process environment first and from the .env file second.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENV_FILE = ".env"


class BotSettings(BaseSettings):
    """Discord bot configuration."""

    name: str = Field(default="Kamela Bot", description="Bot display name")
    token: str = Field(default="", description="Discord bot token")
    guild_id: int | None = Field(
        default=None,
        description="If set, registers slash commands on this guild only (instant). "
                    "If None, registers them globally (up to 1 hour propagation).",
    )
    application_id: int | None = Field(
        default=None,
        description="Discord application ID. Optional; discord.py fetches it at login otherwise.",
    )
    reply_style: Literal["text", "embed"] = Field(
        default="embed",
        description="Reply as plain text messages or as rich embeds",
    )
    support_url: str = Field(
        default="", description="Invite link to the support server, shown by /support"
    )
    issues_url: str = Field(
        default="", description="Issue tracker URL, shown by /issues"
    )

    model_config = SettingsConfigDict(
        env_prefix="DISCORD_",
        env_file=DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )


class WeatherSettings(BaseSettings):
    """Weather provider (AccuWeather) configuration."""

    api_key: str = Field(default="", description="AccuWeather API key")
    base_url: str = Field(
        default="http://dataservice.accuweather.com",
        description="Base URL of the AccuWeather data service",
    )
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Total timeout per request. None keeps aiohttp's default.",
    )

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_",
        env_file=DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )


class Settings(BaseSettings):
    """Main application settings."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_file: Path | None = Field(default=None, description="Log file path")

    bot: BotSettings = Field(default_factory=BotSettings)
    weather: WeatherSettings = Field(default_factory=WeatherSettings)

    model_config = SettingsConfigDict(
        env_file=DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def missing_secrets(self) -> list[str]:
        """Return the names of required secrets that are not set."""
        missing = []
        if not self.bot.token:
            missing.append("DISCORD_TOKEN")
        if not self.weather.api_key:
            missing.append("WEATHER_API_KEY")
        return missing


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        env_file: Path to .env file (default: .env in the current directory)

    Returns:
        Loaded settings instance
    """
    env_file = env_file or DEFAULT_ENV_FILE
    return Settings(
        bot=BotSettings(_env_file=env_file),
        weather=WeatherSettings(_env_file=env_file),
        _env_file=env_file,
    )
