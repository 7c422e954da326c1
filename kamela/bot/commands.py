"""
The closed set of slash commands the bot registers and answers.

Cogs register their commands under BotCommand values, and the dispatcher
matches on BotCommand members, so a name outside this enum can't reach the
dispatcher. Raw names coming from elsewhere go through BotCommand.from_name().
"""

from enum import Enum


class UnknownCommandError(ValueError):
    """Raised for a command name that is not one of the registered commands."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown command: {name!r}")


class BotCommand(str, Enum):
    INFO = "info"
    WEATHER = "weather"
    SUPPORT = "support"
    ISSUES = "issues"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def from_name(cls, name: str) -> "BotCommand":
        try:
            return cls(name)
        except ValueError:
            raise UnknownCommandError(name) from None


_DESCRIPTIONS = {
    BotCommand.INFO: "Info about Kamela Bot",
    BotCommand.WEATHER: "Returns information about the weather",
    BotCommand.SUPPORT: "Where to get help with Kamela Bot",
    BotCommand.ISSUES: "How to report a problem with Kamela Bot",
}

PLACE_OPTION_DESCRIPTION = "City to return weather for"
