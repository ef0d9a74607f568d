"""
Pydantic models for the part of a Telegram Update the bot reads.

Only the fields used for classification are declared; everything else in
the payload is ignored.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class TelegramModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class User(TelegramModel):
    id: int


class Chat(TelegramModel):
    id: int
    type: str  # private, group, supergroup, channel


class Message(TelegramModel):
    message_id: Optional[int] = None
    chat: Chat
    from_user: Optional[User] = Field(default=None, alias="from")
    text: Optional[str] = None
    new_chat_members: Optional[list[User]] = None
    left_chat_member: Optional[User] = None


class Update(TelegramModel):
    update_id: Optional[int] = None
    message: Optional[Message] = None
