"""
CommandDispatcher — turns a validated command into exactly one Reply.

The cogs own the Discord side (registration, deferral, sending); the
dispatcher owns what each command answers:

    info     → "<bot name> v<version>"
    support  → static help text (+ support server link if configured)
    issues   → static issue-reporting text (+ tracker link if configured)
    weather  → WeatherClient lookup, formatted as a forecast or an error

Weather failures are turned into "Error: ..." replies rather than raised, so
a bad place name never escapes the interaction handler.
"""

from __future__ import annotations

from typing import assert_never

import discord

from kamela import __version__
from kamela.bot.commands import BotCommand
from kamela.bot.replies import Reply, ReplyFormatter
from kamela.config.logging import get_logger
from kamela.config.settings import Settings
from kamela.weather import WeatherClient, WeatherError

logger = get_logger(__name__)

MISSING_PLACE_MESSAGE = "the weather command needs a place, e.g. /weather place:London"


class CommandDispatcher:
    """
    Builds the reply for each registered command.

    Args:
        weather_client: An open WeatherClient
        settings: Full application settings (bot name, reply style, links)
    """

    def __init__(self, weather_client: WeatherClient, settings: Settings) -> None:
        self._weather = weather_client
        self._settings = settings
        self.formatter = ReplyFormatter(
            style=settings.bot.reply_style,
            footer=f"{settings.bot.name} v{__version__}",
        )

    async def dispatch(self, command: BotCommand, place: str | None = None) -> Reply:
        """
        Produce the reply for one invocation.

        Args:
            command: The invoked command
            place: The "place" option; only used by /weather

        Returns:
            The reply to send
        """
        logger.debug(f"Dispatching /{command.value} (place={place!r})")
        match command:
            case BotCommand.INFO:
                return self._info()
            case BotCommand.SUPPORT:
                return self._support()
            case BotCommand.ISSUES:
                return self._issues()
            case BotCommand.WEATHER:
                return await self._weather_reply(place)
            case _:
                assert_never(command)

    def _info(self) -> Reply:
        name = self._settings.bot.name
        return self.formatter.message(name, f"{name} v{__version__}")

    def _support(self) -> Reply:
        body = (
            f"Need a hand with {self._settings.bot.name}? "
            "Try `/info` to check the running version, or ask a server admin."
        )
        if self._settings.bot.support_url:
            body += f"\nSupport server: {self._settings.bot.support_url}"
        return self.formatter.message("Support", body, color=discord.Color.green())

    def _issues(self) -> Reply:
        body = (
            "Found a bug or a wrong forecast? Please report it with the command you ran "
            "and what you expected to see."
        )
        if self._settings.bot.issues_url:
            body += f"\nIssue tracker: {self._settings.bot.issues_url}"
        return self.formatter.message("Report an issue", body, color=discord.Color.orange())

    async def _weather_reply(self, place: str | None) -> Reply:
        if place is None or not place.strip():
            return self.formatter.error(MISSING_PLACE_MESSAGE, title="Missing place", ephemeral=True)

        try:
            location, forecast = await self._weather.get_forecast(place)
        except WeatherError as e:
            return self.formatter.error(str(e), title="Weather lookup failed")
        return self.formatter.weather(location, forecast)
