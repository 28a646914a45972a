"""
Long-polling runner for Telegram updates.

Each update is translated into a conversation event and handled in its
own asyncio task, so a slow LLM call in one chat does not hold up others.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Set

from pydantic import ValidationError

from core.exceptions import TransportError
from core.services.telegram_service import TelegramService
from models.schemas import ConversationEvent
from models.telegram import TelegramUpdate

logger = logging.getLogger(__name__)

EventHandler = Callable[[ConversationEvent], Awaitable[None]]


def dispatch_update(update: Dict[str, Any], handler: EventHandler,
                    tasks: Set["asyncio.Task[None]"]) -> Optional["asyncio.Task[None]"]:
    """
    Parse a raw update and schedule its handling.

    Returns:
        The scheduled task, or None when the update carries nothing to handle
    """
    try:
        event = TelegramUpdate.model_validate(update).to_event()
    except ValidationError as e:
        logger.warning(f"⚠️  Skipping malformed update {update.get('update_id')}: {e}")
        return None

    if event is None:
        logger.debug(f"Skipping unsupported update {update.get('update_id')}")
        return None

    task = asyncio.create_task(handler(event))
    tasks.add(task)
    task.add_done_callback(tasks.discard)
    return task


class TelegramPoller:
    """Background task that pulls updates with getUpdates"""

    def __init__(self, telegram: TelegramService, handler: EventHandler,
                 poll_timeout: int = 25, retry_delay: float = 5.0):
        self.telegram = telegram
        self.handler = handler
        self.poll_timeout = poll_timeout
        self.retry_delay = retry_delay
        self._offset: Optional[int] = None
        self._poll_task: Optional["asyncio.Task[None]"] = None
        self._handler_tasks: Set["asyncio.Task[None]"] = set()

    def start(self):
        """Start background polling"""
        if not self._poll_task:
            self._poll_task = asyncio.create_task(self._poll_forever())
            logger.info("🤖 Resume Assistant Bot is polling for updates...")

    async def stop(self):
        """Stop polling and let in-flight handlers finish"""
        if self._poll_task:
            self._poll_task.cancel()
            try:
                await self._poll_task
            except asyncio.CancelledError:
                pass
            self._poll_task = None

        if self._handler_tasks:
            await asyncio.gather(*self._handler_tasks, return_exceptions=True)

    async def poll_once(self) -> int:
        """Fetch one batch of updates and schedule them; returns the batch size"""
        updates = await self.telegram.get_updates(offset=self._offset, timeout=self.poll_timeout)
        for update in updates:
            self._offset = update["update_id"] + 1
            dispatch_update(update, self.handler, self._handler_tasks)
        return len(updates)

    async def _poll_forever(self):
        while True:
            try:
                await self.poll_once()
            except asyncio.CancelledError:
                break
            except TransportError as e:
                logger.error(f"❌ Telegram Polling Error: {e}")
                await asyncio.sleep(self.retry_delay)
