"""
KamelaBot — discord.py bot client.

Manages the full bot lifecycle:
- Opens the weather client once at startup and shares it through the dispatcher
- Loads command cogs (InfoCog, WeatherCog)
- Syncs slash commands (guild-local when a guild ID is configured, global otherwise)
- Cleans up all resources on shutdown via AsyncExitStack
"""

from __future__ import annotations

import discord
from contextlib import AsyncExitStack

from discord import app_commands
from discord.ext import commands

from kamela.bot.dispatcher import CommandDispatcher
from kamela.config.logging import get_logger
from kamela.config.settings import Settings
from kamela.weather import WeatherClient

logger = get_logger(__name__)


class KamelaBot(commands.Bot):
    """
    Discord bot answering /info, /support, /issues and /weather.

    Holds the shared dispatcher and exposes it to cogs. The weather client's
    HTTP session lives on the AsyncExitStack so it's closed when the bot shuts
    down.

    Args:
        settings: Full application settings (bot token, guild, weather API key, etc.)
    """

    def __init__(self, settings: Settings) -> None:
        # Slash commands only; no privileged intents needed
        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=discord.Intents.default(),
            application_id=settings.bot.application_id,
        )
        self.settings = settings
        self.dispatcher: CommandDispatcher | None = None
        self._exit_stack = AsyncExitStack()

    async def setup_hook(self) -> None:
        """
        Called after login, before connecting to the Gateway.

        Opens the weather client, loads cogs, and syncs slash commands.
        """
        weather_client = await self._exit_stack.enter_async_context(
            WeatherClient(self.settings.weather)
        )
        self.dispatcher = CommandDispatcher(weather_client, self.settings)
        logger.info(f"Dispatcher ready (reply style: {self.settings.bot.reply_style})")

        from kamela.bot.cogs.info import InfoCog
        from kamela.bot.cogs.weather import WeatherCog
        await self.add_cog(InfoCog(self))
        await self.add_cog(WeatherCog(self))
        logger.info("Cogs loaded")

        await self.sync_commands()

    async def sync_commands(self) -> list[app_commands.AppCommand]:
        """
        Register the slash commands with Discord.

        Failures are logged and swallowed so the bot still connects.
        """
        try:
            if self.settings.bot.guild_id:
                guild = discord.Object(id=self.settings.bot.guild_id)
                self.tree.copy_global_to(guild=guild)
                synced = await self.tree.sync(guild=guild)
                logger.info(
                    f"Registered {len(synced)} slash command(s) on guild "
                    f"{self.settings.bot.guild_id}: {', '.join(c.name for c in synced)}"
                )
            else:
                synced = await self.tree.sync()
                logger.info(
                    f"Registered {len(synced)} global slash command(s): "
                    f"{', '.join(c.name for c in synced)} (may take up to 1 hour to propagate)"
                )
            return synced
        except discord.errors.Forbidden:
            logger.warning(
                "Could not register slash commands (403 Forbidden). "
                "The bot is missing the 'applications.commands' OAuth2 scope. "
                "Re-invite the bot using an OAuth2 URL that includes both 'bot' "
                "and 'applications.commands' scopes."
            )
        except Exception as e:
            logger.warning(f"Slash command registration failed: {e}. The bot will still start.")
        return []

    async def on_ready(self) -> None:
        """Called when the bot successfully connects to Discord."""
        logger.info(f"{self.user} is connected! (id: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")

    async def close(self) -> None:
        """Graceful shutdown — clean up all async resources before disconnecting."""
        logger.info(f"Shutting down {self.settings.bot.name}...")
        await self._exit_stack.aclose()
        await super().close()
