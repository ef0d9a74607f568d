"""
Update classifier - decides what kind of event an update is.

Pure function over the parsed update, no I/O and no configuration:
- /start or /help in a private chat   -> PrivateHelpRequest
- new members in a group/supergroup   -> GroupJoin
- member left a group/supergroup      -> GroupLeave
- anything else                       -> Irrelevant
"""

from dataclasses import dataclass
from typing import Optional, Union

from .schemas import Update

HELP_COMMANDS = frozenset({"/start", "/help"})
GROUP_CHAT_TYPES = frozenset({"group", "supergroup"})


@dataclass(frozen=True)
class PrivateHelpRequest:
    chat_id: int


@dataclass(frozen=True)
class GroupJoin:
    chat_id: int
    message_id: Optional[int]
    new_member_ids: tuple[int, ...]
    actor_id: Optional[int]  # whoever sent the service message


@dataclass(frozen=True)
class GroupLeave:
    chat_id: int
    message_id: Optional[int]


@dataclass(frozen=True)
class Irrelevant:
    pass


Classification = Union[PrivateHelpRequest, GroupJoin, GroupLeave, Irrelevant]


def classify_update(update: Update) -> Classification:
    """
    Classify a Telegram update.

    Join is checked before leave; Telegram never sends both in one message.
    """
    msg = update.message
    if msg is None:
        return Irrelevant()

    chat = msg.chat

    if chat.type == "private":
        if msg.text in HELP_COMMANDS:
            return PrivateHelpRequest(chat_id=chat.id)
        return Irrelevant()

    if chat.type not in GROUP_CHAT_TYPES:
        return Irrelevant()

    if msg.new_chat_members:
        return GroupJoin(
            chat_id=chat.id,
            message_id=msg.message_id,
            new_member_ids=tuple(member.id for member in msg.new_chat_members),
            actor_id=msg.from_user.id if msg.from_user else None,
        )

    if msg.left_chat_member is not None:
        return GroupLeave(chat_id=chat.id, message_id=msg.message_id)

    return Irrelevant()
