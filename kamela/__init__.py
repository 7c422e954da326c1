"""
Kamela Bot - a small Discord bot with info and weather slash commands.

The bot registers a fixed set of slash commands and answers them with static
text or with a weather headline looked up from AccuWeather.
"""

__version__ = "0.4.0"
