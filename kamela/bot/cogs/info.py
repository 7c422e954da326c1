"""
InfoCog — static informational commands.

/info, /support and /issues never leave the process: the reply is built from
settings and sent straight away, no deferral needed.
"""

from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from kamela.bot.commands import BotCommand
from kamela.bot.replies import send_reply


class InfoCog(commands.Cog):
    """Provides /info, /support and /issues."""

    def __init__(self, bot) -> None:
        self.bot = bot

    @app_commands.command(name=BotCommand.INFO.value, description=BotCommand.INFO.description)
    async def info(self, interaction: discord.Interaction) -> None:
        await self._respond(interaction, BotCommand.INFO)

    @app_commands.command(name=BotCommand.SUPPORT.value, description=BotCommand.SUPPORT.description)
    async def support(self, interaction: discord.Interaction) -> None:
        await self._respond(interaction, BotCommand.SUPPORT)

    @app_commands.command(name=BotCommand.ISSUES.value, description=BotCommand.ISSUES.description)
    async def issues(self, interaction: discord.Interaction) -> None:
        await self._respond(interaction, BotCommand.ISSUES)

    async def _respond(self, interaction: discord.Interaction, command: BotCommand) -> None:
        reply = await self.bot.dispatcher.dispatch(command)
        await send_reply(interaction, reply)
