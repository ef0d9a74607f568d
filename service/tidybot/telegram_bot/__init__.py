"""
Telegram bot module for Tidybot.

ARCHITECTURE: one webhook delivery -> at most one Bot API call.
- Verifies the webhook secret
- Classifies the update (help request, join, leave, irrelevant)
- Applies the owner-only policy to joins
- Performs the resulting call in the background after acknowledging
"""

from .dispatcher import handle_update, execute_action
from .telegram_api import TelegramAPI, get_telegram_api, close_telegram_api

__all__ = [
    "handle_update",
    "execute_action",
    "TelegramAPI",
    "get_telegram_api",
    "close_telegram_api",
]
