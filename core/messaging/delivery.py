"""
Outbound delivery of long messages.

Every reply the bot sends goes through ``DeliveryPipeline.send_message``:
markup is stripped, the text is split into platform-safe chunks and the
chunks are sent one after another with a short pause in between. A chunk
that fails is logged and skipped; the rest still go out.
"""

import asyncio
import logging
import re
from typing import Any, Awaitable, Callable, Dict, List, Optional

from core.exceptions import TransportError
from core.messaging.chunker import DEFAULT_MAX_LENGTH, split_message
from core.services.transport import ChatTransport
from models.schemas import ConversationId

logger = logging.getLogger(__name__)

NO_RESPONSE_NOTICE = "⚠️ No response generated"
DEFAULT_CHUNK_DELAY = 0.5

# Markdown control characters; chunks cut independently end up with unbalanced styling.
# Slash commands such as /end_interview are matched first and kept intact.
MARKUP_CHARACTERS = re.compile(r"(/[A-Za-z0-9_]+)|[*_`~#]")


def strip_markup(text: str) -> str:
    """Remove markdown styling characters so the text renders as plain text"""
    return MARKUP_CHARACTERS.sub(lambda match: match.group(1) or "", text)


def plain_text_options(options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Copy of the send options with formatting forced to plain text"""
    forced = dict(options or {})
    forced.pop("parse_mode", None)
    return forced


class DeliveryPipeline:
    """
    Sends replies to a chat with pacing and per-chunk failure isolation.

    Sends to one destination are strictly sequential: each chunk is awaited
    before the delay starts, and the next chunk is only sent once the delay
    has elapsed.
    """

    def __init__(self, transport: ChatTransport,
                 max_length: int = DEFAULT_MAX_LENGTH,
                 chunk_delay: float = DEFAULT_CHUNK_DELAY,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.transport = transport
        self.max_length = max_length
        self.chunk_delay = chunk_delay
        self._sleep = sleep

    async def send_message(self, destination: ConversationId, message: Optional[str],
                           options: Optional[Dict[str, Any]] = None) -> int:
        """
        Send a message of any length as plain text.

        Args:
            destination: Conversation identifier
            message: Message text, possibly containing markdown
            options: Platform options (reply_markup etc.) attached to every chunk

        Returns:
            Number of chunks delivered successfully
        """
        plain_text = strip_markup(message or "")
        if not plain_text.strip():
            logger.warning(f"⚠️  Empty message for {destination} - sending placeholder")
            return await self.send_chunks(destination, [NO_RESPONSE_NOTICE], options, self.chunk_delay)

        chunks = split_message(plain_text, self.max_length)
        if len(chunks) > 1:
            logger.info(f"✂️  Split {len(plain_text)} chars into {len(chunks)} chunks for {destination}")

        return await self.send_chunks(destination, chunks, options, self.chunk_delay)

    async def send_chunks(self, destination: ConversationId, chunks: List[str],
                          options: Optional[Dict[str, Any]] = None,
                          delay: float = DEFAULT_CHUNK_DELAY) -> int:
        """
        Send chunks in order, one at a time.

        The first chunk is sent immediately; each later chunk waits for the
        previous attempt to resolve and then for ``delay`` seconds. A
        TransportError on one chunk does not stop the others.

        Returns:
            Number of chunks delivered successfully
        """
        send_options = plain_text_options(options)
        delivered = 0

        for index, chunk in enumerate(chunks):
            if index > 0 and delay > 0:
                await self._sleep(delay)

            try:
                await self.transport.send_text(destination, chunk, send_options)
                delivered += 1
            except TransportError as e:
                logger.error(
                    f"❌ Error sending chunk {index + 1}/{len(chunks)} to {destination}: {e}"
                )

        if delivered < len(chunks):
            logger.warning(f"⚠️  Delivered {delivered}/{len(chunks)} chunks to {destination}")

        return delivered
