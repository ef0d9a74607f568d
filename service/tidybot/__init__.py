"""Tidybot: deletes join/leave service messages in Telegram groups."""

__version__ = "0.1.0"
