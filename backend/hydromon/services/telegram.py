"""Minimal async client for the Telegram Bot API."""
import logging
from typing import Any, Optional

import httpx

from hydromon.errors import BotApiError

logger = logging.getLogger(__name__)

API_BASE = "https://api.telegram.org"


class TelegramBot:
    def __init__(
        self,
        token: str,
        base_url: str = API_BASE,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._url = f"{base_url}/bot{token}"
        self._timeout = timeout
        self._transport = transport

    async def _call(self, method: str, payload: Optional[dict[str, Any]] = None) -> Any:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(f"{self._url}/{method}", json=payload or {})
        except httpx.HTTPError as exc:
            raise BotApiError(f"Telegram {method} request failed", details=str(exc)) from exc

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if resp.status_code != 200 or not body.get("ok"):
            raise BotApiError(
                body.get("description") or f"Telegram {method} failed",
                status_code=resp.status_code,
                details=resp.text,
            )
        return body.get("result")

    async def send_message(self, chat_id: str, text: str) -> dict:
        return await self._call("sendMessage", {"chat_id": chat_id, "text": text})

    async def get_me(self) -> dict:
        return await self._call("getMe")

    async def set_webhook(self, url: str) -> bool:
        return await self._call("setWebhook", {"url": url})

    async def delete_webhook(self) -> bool:
        return await self._call("deleteWebhook")

    async def replace_webhook(self, url: str) -> None:
        """Drop any existing webhook, then register url."""
        await self.delete_webhook()
        logger.info("Existing webhook deleted")
        await self.set_webhook(url)
        logger.info("Webhook set: %s", url)
