"""Slash-command cogs. Each command name comes from BotCommand."""
