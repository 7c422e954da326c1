"""
Discord Bot Layer.

Registers the slash commands, turns each interaction into a BotCommand,
and sends the dispatcher's reply back to Discord.
"""

from kamela.bot.client import KamelaBot
from kamela.bot.commands import BotCommand, UnknownCommandError
from kamela.bot.dispatcher import CommandDispatcher
from kamela.bot.replies import Reply, ReplyFormatter, send_reply

__all__ = [
    "KamelaBot",
    "BotCommand",
    "UnknownCommandError",
    "CommandDispatcher",
    "Reply",
    "ReplyFormatter",
    "send_reply",
]
