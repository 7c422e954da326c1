"""
Kamela Bot CLI entry point.

Provides command-line interface for running the bot and utility commands.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from kamela import __version__
from kamela.config.logging import get_logger, setup_logging
from kamela.config.settings import Settings, load_settings


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="kamela",
        description="Discord bot with info and weather slash commands",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Kamela Bot {__version__}",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level from config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "run",
        help="Run the Discord bot",
    )

    subparsers.add_parser(
        "config",
        help="Show current configuration",
    )

    subparsers.add_parser(
        "commands",
        help="List the slash commands the bot registers",
    )

    weather_parser = subparsers.add_parser(
        "weather",
        help="Look up a forecast headline without Discord (needs WEATHER_API_KEY)",
    )
    weather_parser.add_argument(
        "place",
        help='Place to look up, e.g. "London"',
    )

    return parser


def cmd_config(settings: Settings) -> int:
    """Show current configuration."""
    logger = get_logger(__name__)

    logger.info("\n=== Kamela Bot Configuration ===\n")
    logger.info(f"Log Level: {settings.log_level}")
    logger.info(f"Log File: {settings.log_file or 'None (console only)'}")
    logger.info(f"\nBot Name: {settings.bot.name}")
    logger.info(f"Discord Token: {'Set' if settings.bot.token else 'Not set'}")
    logger.info(f"Guild ID: {settings.bot.guild_id or 'None (global commands)'}")
    logger.info(f"Application ID: {settings.bot.application_id or 'None (fetched at login)'}")
    logger.info(f"Reply Style: {settings.bot.reply_style}")
    logger.info(f"Support URL: {settings.bot.support_url or 'None'}")
    logger.info(f"Issues URL: {settings.bot.issues_url or 'None'}")
    logger.info(f"\nWeather API Key: {'Set' if settings.weather.api_key else 'Not set'}")
    logger.info(f"Weather Base URL: {settings.weather.base_url}")
    logger.info(f"Weather Timeout: {settings.weather.timeout_seconds or 'aiohttp default'}")

    return 0


def cmd_commands() -> int:
    """Print the registered slash commands."""
    from kamela.bot.commands import BotCommand

    for command in BotCommand:
        print(f"/{command.value:<10} {command.description}")
    return 0


def cmd_run(settings: Settings) -> int:
    """Start the Discord bot."""
    logger = get_logger(__name__)

    missing = settings.missing_secrets()
    if missing:
        logger.error(
            f"Missing required secret(s): {', '.join(missing)}. "
            "Set them in the environment or in your .env file."
        )
        return 1

    from kamela.bot import KamelaBot

    bot = KamelaBot(settings)
    logger.info(f"Starting {settings.bot.name} v{__version__}...")
    # log_handler=None: disable discord.py's default logging setup and use ours
    bot.run(settings.bot.token, log_handler=None)
    return 0


async def cmd_weather(args, settings: Settings) -> int:
    """
    Look up a forecast from the command line.

    Prints the same text the bot sends in text reply style.
    """
    logger = get_logger(__name__)

    if not settings.weather.api_key:
        logger.error("Weather API key not set. Add WEATHER_API_KEY=<your-key> to your .env file.")
        return 1

    from kamela.bot.replies import ReplyFormatter
    from kamela.weather import WeatherClient, WeatherError

    async with WeatherClient(settings.weather) as client:
        try:
            location, forecast = await client.get_forecast(args.place)
        except WeatherError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    reply = ReplyFormatter(style="text", footer=settings.bot.name).weather(location, forecast)
    print(reply.content)
    return 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    try:
        settings = load_settings(env_file=args.env_file)
    except ValidationError as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    if args.log_level:
        settings.log_level = args.log_level

    setup_logging(settings)

    if args.command == "config":
        return cmd_config(settings)
    elif args.command == "commands":
        return cmd_commands()
    elif args.command == "run":
        return cmd_run(settings)
    elif args.command == "weather":
        return asyncio.run(cmd_weather(args, settings))
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
