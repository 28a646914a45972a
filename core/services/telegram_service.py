"""
Telegram Bot API client
Handles sending messages, acknowledging button presses and downloading
uploaded files over the HTTP Bot API
"""

import asyncio
import logging
from typing import Any, AsyncIterator, Dict, List, Optional

import aiohttp

from core.exceptions import TransportError
from core.services.transport import ChatTransport
from models.schemas import ConversationId

logger = logging.getLogger(__name__)

DOWNLOAD_BLOCK_SIZE = 64 * 1024


class TelegramService(ChatTransport):
    """Chat transport backed by the Telegram Bot API"""

    def __init__(self, bot_token: str, api_base: str = "https://api.telegram.org",
                 request_timeout: int = 30):
        self.bot_token = bot_token
        self.api_base = api_base.rstrip("/")
        self.request_timeout = request_timeout

        if not bot_token:
            logger.warning("⚠️  Telegram bot token not configured - sending will fail")

    def _method_url(self, method: str) -> str:
        return f"{self.api_base}/bot{self.bot_token}/{method}"

    def _file_url(self, file_path: str) -> str:
        return f"{self.api_base}/file/bot{self.bot_token}/{file_path}"

    async def _call(self, method: str, payload: Optional[Dict[str, Any]] = None,
                    timeout: Optional[int] = None) -> Any:
        """
        Call a Bot API method and return its ``result``.

        Raises:
            TransportError: On HTTP/connection failures or ``ok: false`` replies
        """
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self._method_url(method),
                    json=payload or {},
                    timeout=aiohttp.ClientTimeout(total=timeout or self.request_timeout)
                ) as response:
                    status = response.status
                    data = await response.json(content_type=None)

        except asyncio.TimeoutError as e:
            raise TransportError(f"Telegram {method} timed out") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Telegram {method} connection error: {e}") from e
        except ValueError as e:
            raise TransportError(f"Telegram {method} returned invalid JSON: {e}") from e

        # Empty bodies (e.g. a proxy 502) parse to None
        if not isinstance(data, dict):
            raise TransportError(f"Telegram {method} returned no JSON object (HTTP {status})", status=status)

        if not data.get("ok"):
            description = data.get("description", "unknown error")
            status = data.get("error_code")
            raise TransportError(f"Telegram {method} failed ({status}): {description}", status=status)

        return data.get("result")

    async def send_text(self, destination: ConversationId, text: str,
                        options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload = {**(options or {}), "chat_id": destination, "text": text}

        logger.info(f"📤 Sending message to {destination} ({len(text)} chars)")
        logger.debug(f"   Message: {text[:100]}...")

        result = await self._call("sendMessage", payload)
        logger.debug(f"✅ Message sent | message_id: {result.get('message_id')}")
        return result

    async def answer_interaction(self, interaction_id: str) -> None:
        await self._call("answerCallbackQuery", {"callback_query_id": interaction_id})

    async def get_file_path(self, file_id: str) -> str:
        """Resolve a file_id to the path used for downloading"""
        result = await self._call("getFile", {"file_id": file_id})
        file_path = (result or {}).get("file_path")
        if not file_path:
            raise TransportError(f"Telegram getFile returned no file_path for {file_id}")
        return file_path

    async def fetch_bytes(self, file_reference: str) -> AsyncIterator[bytes]:
        file_path = await self.get_file_path(file_reference)
        logger.info(f"📥 Downloading file {file_path}")

        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    self._file_url(file_path),
                    timeout=aiohttp.ClientTimeout(total=self.request_timeout)
                ) as response:
                    if response.status != 200:
                        raise TransportError(
                            f"File download failed with HTTP {response.status}", status=response.status
                        )
                    async for block in response.content.iter_chunked(DOWNLOAD_BLOCK_SIZE):
                        yield block

        except asyncio.TimeoutError as e:
            raise TransportError(f"File download timed out: {file_path}") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"File download error: {e}") from e

    async def get_updates(self, offset: Optional[int] = None, timeout: int = 25) -> List[Dict[str, Any]]:
        """Long-poll for new updates"""
        payload: Dict[str, Any] = {
            "timeout": timeout,
            "allowed_updates": ["message", "callback_query"],
        }
        if offset is not None:
            payload["offset"] = offset

        # HTTP timeout must outlast the long-poll window
        return await self._call("getUpdates", payload, timeout=timeout + 10) or []

    async def set_webhook(self, url: str, secret_token: Optional[str] = None) -> None:
        payload: Dict[str, Any] = {
            "url": url,
            "allowed_updates": ["message", "callback_query"],
        }
        if secret_token:
            payload["secret_token"] = secret_token

        await self._call("setWebhook", payload)
        logger.info(f"✅ Telegram webhook registered: {url}")

    async def delete_webhook(self) -> None:
        """Remove any webhook so getUpdates polling is allowed"""
        await self._call("deleteWebhook", {"drop_pending_updates": False})
        logger.info("🔌 Telegram webhook removed")
