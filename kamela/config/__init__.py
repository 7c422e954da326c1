"""Configuration (pydantic-settings) and logging setup."""
