"""
Telegram Bot API client.

Thin wrapper over the four calls the bot makes. Every call is attempted
once; failures are logged and swallowed so they never reach the webhook
response or crash the process.
"""

import httpx
from typing import Any, Optional

from tidybot.config import get_settings
from .errors import OutboundCallFailure
from .logging_config import bot_logger as logger


class TelegramAPI:
    """
    Client for the Telegram Bot API.

    Posts JSON bodies to {base_url}/bot{token}/{method}.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.telegram.org",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = f"{base_url.rstrip('/')}/bot{token}"
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def _call(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Perform one Bot API call.

        Raises:
            OutboundCallFailure: on transport errors, undecodable replies or
                non-2xx statuses. The decoded reply is attached when present.
        """
        try:
            response = await self.client.post(f"{self.base_url}/{method}", json=payload)
        except httpx.HTTPError as e:
            raise OutboundCallFailure(method, f"{type(e).__name__}: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise OutboundCallFailure(method, f"HTTP {response.status_code}, undecodable reply") from e

        if not isinstance(data, dict):
            raise OutboundCallFailure(method, f"HTTP {response.status_code}, unexpected reply")

        if response.is_error or not data.get("ok", False):
            description = data.get("description", "no description")
            raise OutboundCallFailure(method, f"HTTP {response.status_code}: {description}")

        return data

    async def _fire(self, method: str, payload: dict[str, Any]) -> bool:
        try:
            await self._call(method, payload)
        except OutboundCallFailure as e:
            logger.warning(str(e))
            return False
        logger.debug(f"{method} ok: {payload}")
        return True

    async def set_webhook(self, url: str, secret_token: str) -> Optional[dict[str, Any]]:
        """
        Register the webhook, restricted to "message" updates.

        Returns:
            Telegram's raw reply (also when it reports an error), or None if
            the request itself failed.
        """
        payload = {
            "url": url,
            "secret_token": secret_token,
            "allowed_updates": ["message"],
        }
        try:
            response = await self.client.post(f"{self.base_url}/setWebhook", json=payload)
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"setWebhook failed: {e}", exc_info=True)
            return None

    async def send_message(self, chat_id: int, text: str) -> bool:
        return await self._fire("sendMessage", {"chat_id": chat_id, "text": text})

    async def delete_message(self, chat_id: int, message_id: int) -> bool:
        """Delete a message. "Message not found" counts as a failed call, nothing more."""
        return await self._fire("deleteMessage", {"chat_id": chat_id, "message_id": message_id})

    async def leave_chat(self, chat_id: int) -> bool:
        return await self._fire("leaveChat", {"chat_id": chat_id})

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()


# Global instance
_telegram_api: Optional[TelegramAPI] = None


def get_telegram_api() -> TelegramAPI:
    """Get or create the Bot API client singleton."""
    global _telegram_api
    if _telegram_api is None:
        settings = get_settings()
        _telegram_api = TelegramAPI(
            token=settings.telegram_bot_token,
            base_url=settings.telegram_api_base,
            timeout=settings.telegram_api_timeout,
        )
    return _telegram_api


async def close_telegram_api() -> None:
    global _telegram_api
    if _telegram_api is not None:
        await _telegram_api.close()
        _telegram_api = None
