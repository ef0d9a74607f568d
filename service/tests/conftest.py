"""
Shared fixtures for the Tidybot test suite.
"""

import os

import pytest

# Settings are required at import of the app's dependencies
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "123456:TEST_TOKEN")
os.environ.setdefault("TELEGRAM_WEBHOOK_SECRET", "test-secret")

from tidybot.config import Settings

SECRET = "test-secret"
OWNER_ID = 1
BOT_ID = 999


def make_settings(**overrides) -> Settings:
    values = {
        "telegram_bot_token": "123456:TEST_TOKEN",
        "telegram_webhook_secret": SECRET,
        "owner_id": None,
        "bot_id": None,
        "help_text": "",
        "public_base_url": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeTelegramAPI:
    """Records Bot API calls instead of making them."""

    def __init__(self, webhook_reply=None):
        self.calls: list[tuple] = []
        self.webhook_reply = webhook_reply

    async def set_webhook(self, url, secret_token):
        self.calls.append(("setWebhook", url, secret_token))
        return self.webhook_reply

    async def send_message(self, chat_id, text):
        self.calls.append(("sendMessage", chat_id, text))
        return True

    async def delete_message(self, chat_id, message_id):
        self.calls.append(("deleteMessage", chat_id, message_id))
        return True

    async def leave_chat(self, chat_id):
        self.calls.append(("leaveChat", chat_id))
        return True


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def owner_settings() -> Settings:
    return make_settings(owner_id=OWNER_ID, bot_id=BOT_ID)


@pytest.fixture
def fake_api() -> FakeTelegramAPI:
    return FakeTelegramAPI()
