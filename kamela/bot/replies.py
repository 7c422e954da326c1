"""
Reply payloads and delivery.

Every interaction gets exactly one Reply: either a plain-text message or an
embed, depending on the configured reply style. ReplyFormatter builds them;
send_reply() delivers one and logs (but does not retry) delivery failures.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

import discord

from kamela.config.logging import get_logger
from kamela.weather import Forecast, Location

logger = get_logger(__name__)

ReplyStyle = Literal["text", "embed"]

# Discord embed limits
_TITLE_LIMIT = 256
_DESCRIPTION_LIMIT = 4096


@dataclass(frozen=True)
class Reply:
    """A single interaction response: text content or an embed."""

    content: str | None = None
    embed: discord.Embed | None = None
    ephemeral: bool = False

    def as_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for send_message() / followup.send()."""
        if self.embed is not None:
            return {"embed": self.embed, "ephemeral": self.ephemeral}
        return {"content": self.content, "ephemeral": self.ephemeral}


class ReplyFormatter:
    """
    Builds replies in the configured style.

    Args:
        style: "text" for plain messages, "embed" for rich embeds
        footer: Footer text put on every embed (e.g. "Kamela Bot v0.4.0")
    """

    def __init__(self, style: ReplyStyle, footer: str) -> None:
        self.style = style
        self.footer = footer

    def message(
        self,
        title: str,
        body: str,
        *,
        color: discord.Color | None = None,
        ephemeral: bool = False,
    ) -> Reply:
        """A general reply. Text style sends the body only."""
        if self.style == "text":
            return Reply(content=body, ephemeral=ephemeral)

        embed = discord.Embed(
            title=title[:_TITLE_LIMIT],
            description=body[:_DESCRIPTION_LIMIT],
            color=color or discord.Color.blurple(),
        )
        embed.set_footer(text=self.footer)
        return Reply(embed=embed, ephemeral=ephemeral)

    def error(self, message: str, *, title: str = "Error", ephemeral: bool = False) -> Reply:
        if self.style == "text":
            return Reply(content=f"Error: {message}", ephemeral=ephemeral)
        return self.message(title, message, color=discord.Color.red(), ephemeral=ephemeral)

    def weather(self, location: Location, forecast: Forecast) -> Reply:
        headline = forecast.headline.overview
        if self.style == "text":
            return Reply(content=f"Forecast: {headline} in {location}")

        embed = discord.Embed(
            title=f"Weather in {location}"[:_TITLE_LIMIT],
            description=headline[:_DESCRIPTION_LIMIT],
            color=discord.Color.blue(),
        )
        if forecast.headline.category:
            embed.add_field(name="Category", value=forecast.headline.category, inline=True)
        embed.set_footer(text=f"{self.footer} | Data from AccuWeather")
        return Reply(embed=embed)


async def send_reply(
    interaction: discord.Interaction,
    reply: Reply,
    *,
    followup: bool = False,
) -> bool:
    """
    Send a reply to an interaction.

    Args:
        interaction: The interaction being answered
        reply: Payload to send
        followup: True if the response was deferred and must go through the webhook

    Returns:
        True if Discord accepted the reply, False if delivery failed (already logged)
    """
    try:
        if followup:
            await interaction.followup.send(**reply.as_kwargs())
        else:
            await interaction.response.send_message(**reply.as_kwargs())
    except discord.HTTPException as e:
        command = interaction.command.name if interaction.command else "?"
        logger.error(f"Cannot respond to /{command}: {e}")
        return False
    return True
