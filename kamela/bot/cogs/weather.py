"""
WeatherCog — /weather place:<city>.

The place option is optional at registration so Discord lets the command
through without it; the dispatcher answers that case with an ephemeral error.
A real lookup is deferred first, since two provider round-trips can run past
Discord's 3 second response window.
"""

from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from kamela.bot.commands import PLACE_OPTION_DESCRIPTION, BotCommand
from kamela.bot.replies import send_reply
from kamela.config.logging import get_logger

logger = get_logger(__name__)


class WeatherCog(commands.Cog):
    """Provides the /weather slash command."""

    def __init__(self, bot) -> None:
        self.bot = bot

    @app_commands.command(name=BotCommand.WEATHER.value, description=BotCommand.WEATHER.description)
    @app_commands.describe(place=PLACE_OPTION_DESCRIPTION)
    async def weather(self, interaction: discord.Interaction, place: str | None = None) -> None:
        """
        /weather place:<city>

        Examples:
          /weather place:London
          /weather place:Kuala Lumpur
        """
        dispatcher = self.bot.dispatcher

        if place is None or not place.strip():
            reply = await dispatcher.dispatch(BotCommand.WEATHER, place)
            await send_reply(interaction, reply)
            return

        try:
            await interaction.response.defer()
        except discord.HTTPException as e:
            logger.error(f"Cannot defer /weather for {place!r}: {e}")
            return

        reply = await dispatcher.dispatch(BotCommand.WEATHER, place)
        await send_reply(interaction, reply, followup=True)
