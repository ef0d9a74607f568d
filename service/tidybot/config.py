from typing import Optional

from pydantic import PrivateAttr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Telegram
    telegram_bot_token: str
    telegram_webhook_secret: str  # Must match X-Telegram-Bot-Api-Secret-Token exactly
    telegram_api_base: str = "https://api.telegram.org"
    telegram_api_timeout: float = 10.0

    # Externally reachable URL for /setup (defaults to the request's own host)
    public_base_url: str = ""

    # Owner-only mode: both must be set, otherwise anyone may add the bot
    owner_id: Optional[int] = None
    bot_id: Optional[int] = None

    # Overrides the built-in /help reply
    help_text: str = ""

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    _owner_check_enabled: bool = PrivateAttr(default=False)

    @field_validator("owner_id", "bot_id", mode="before")
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def model_post_init(self, __context) -> None:
        self._owner_check_enabled = self.owner_id is not None and self.bot_id is not None

    @property
    def owner_check_enabled(self) -> bool:
        """True when the bot may only be added to groups by the owner."""
        return self._owner_check_enabled


@lru_cache()
def get_settings() -> Settings:
    return Settings()
