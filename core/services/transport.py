"""
Collaborator interfaces consumed by the conversation core.

The core never talks to Telegram or Gemini directly; it goes through these
interfaces so handlers can be exercised with in-memory fakes.
"""

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Dict, Optional, Protocol

from models.schemas import ConversationId


class ChatTransport(ABC):
    """Send/receive primitives of the chat platform"""

    @abstractmethod
    async def send_text(self, destination: ConversationId, text: str,
                        options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Send one text message.

        Args:
            destination: Conversation identifier
            text: Message body (already within the platform size limit)
            options: Platform options such as reply_markup

        Returns:
            Platform delivery result

        Raises:
            TransportError: If the platform rejected or never received the message
        """

    @abstractmethod
    async def answer_interaction(self, interaction_id: str) -> None:
        """Acknowledge a button press so the client stops its loading indicator"""

    @abstractmethod
    def fetch_bytes(self, file_reference: str) -> AsyncIterator[bytes]:
        """
        Stream the content of an uploaded file.

        Raises:
            TransportError: If the file cannot be resolved or downloaded
        """


class TextGenerator(Protocol):
    """LLM collaborator: never raises, returns a placeholder on failure"""

    async def generate_text(self, prompt: str) -> str:
        ...
