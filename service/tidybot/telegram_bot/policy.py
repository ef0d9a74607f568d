"""
Authorization policy - turns a classification into at most one action.

Owner-only mode (OWNER_ID and BOT_ID both configured) makes the bot leave
any group it was added to by someone other than the owner. Ordinary joins
are never affected by it.
"""

from dataclasses import dataclass
from typing import Optional, Union

from tidybot.config import Settings
from .classifier import (
    Classification,
    GroupJoin,
    GroupLeave,
    PrivateHelpRequest,
)
from .logging_config import bot_logger as logger


@dataclass(frozen=True)
class SendHelp:
    chat_id: int


@dataclass(frozen=True)
class DeleteMessage:
    chat_id: int
    message_id: int


@dataclass(frozen=True)
class LeaveGroup:
    chat_id: int


Action = Union[SendHelp, DeleteMessage, LeaveGroup]


def _delete(chat_id: int, message_id: Optional[int]) -> Optional[DeleteMessage]:
    if message_id is None:
        logger.warning(f"Service message in chat {chat_id} has no message_id, nothing to delete")
        return None
    return DeleteMessage(chat_id=chat_id, message_id=message_id)


def authorize_join(join: GroupJoin, settings: Settings) -> Optional[Action]:
    """
    Decide what to do with a join service message.

    Returns:
        LeaveGroup if owner-only mode is on, the bot itself is among the new
        members and the actor is not the owner. The join message stays
        undeleted in that case. Otherwise DeleteMessage.
    """
    if settings.owner_check_enabled:
        bot_was_added = settings.bot_id in join.new_member_ids
        if bot_was_added and join.actor_id != settings.owner_id:
            return LeaveGroup(chat_id=join.chat_id)

    return _delete(join.chat_id, join.message_id)


def plan_action(classification: Classification, settings: Settings) -> Optional[Action]:
    """Map a classification to the single outbound action (or None)."""
    if isinstance(classification, PrivateHelpRequest):
        return SendHelp(chat_id=classification.chat_id)

    if isinstance(classification, GroupJoin):
        return authorize_join(classification, settings)

    if isinstance(classification, GroupLeave):
        return _delete(classification.chat_id, classification.message_id)

    return None
