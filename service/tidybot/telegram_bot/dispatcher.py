"""
Webhook dispatcher - authenticates, decodes and routes one update.

handle_update() is synchronous and side-effect free: it returns the action
to perform. execute_action() performs it and is meant to run as a
background task after Telegram has been acknowledged.
"""

from typing import Optional

from pydantic import ValidationError

from tidybot.config import Settings
from .classifier import classify_update
from .errors import AuthenticationError, MalformedInputError
from .logging_config import bot_logger as logger
from .policy import Action, DeleteMessage, LeaveGroup, SendHelp, plan_action
from .schemas import Update
from .telegram_api import TelegramAPI

HELP_TEXT = """This bot keeps your group chats tidy and free of clutter by automatically deleting the "user has joined" and "user has left" service messages.

To make it work, simply:
1. Add me to your group.
2. Promote me to an Admin.
3. Grant me the "Delete Messages" permission."""


def help_text(settings: Settings) -> str:
    return settings.help_text or HELP_TEXT


def verify_secret(secret_header: Optional[str], settings: Settings) -> None:
    """Exact, case-sensitive match against the configured webhook secret."""
    if secret_header is None or secret_header != settings.telegram_webhook_secret:
        raise AuthenticationError("Invalid webhook secret token")


def parse_update(body: bytes) -> Update:
    try:
        return Update.model_validate_json(body)
    except ValidationError as e:
        raise MalformedInputError(f"Invalid update payload: {e.error_count()} error(s)") from e


def handle_update(secret_header: Optional[str], body: bytes, settings: Settings) -> Optional[Action]:
    """
    Process one webhook delivery up to the point of deciding what to do.

    Args:
        secret_header: Value of X-Telegram-Bot-Api-Secret-Token (None if missing)
        body: Raw request body
        settings: Application settings

    Returns:
        The single action to perform, or None if the update needs nothing.

    Raises:
        AuthenticationError: secret mismatch, checked before the body is parsed
        MalformedInputError: body is not a Telegram update
    """
    verify_secret(secret_header, settings)

    update = parse_update(body)
    classification = classify_update(update)
    action = plan_action(classification, settings)

    logger.debug(
        f"Update {update.update_id}: {type(classification).__name__} -> "
        f"{type(action).__name__ if action else 'no action'}"
    )
    return action


async def execute_action(action: Action, api: TelegramAPI, settings: Settings) -> None:
    """Perform exactly one Bot API call for the action. Never raises on API failures."""
    if isinstance(action, SendHelp):
        await api.send_message(action.chat_id, help_text(settings))
    elif isinstance(action, DeleteMessage):
        await api.delete_message(action.chat_id, action.message_id)
    elif isinstance(action, LeaveGroup):
        logger.info(f"Leaving group {action.chat_id} due to unauthorized add.")
        await api.leave_chat(action.chat_id)
