"""Subset of the Telegram Bot API update schema the bot reacts to"""
from pydantic import BaseModel, ConfigDict
from typing import Optional

from models.schemas import (
    ButtonPressEvent,
    CommandEvent,
    ConversationEvent,
    DocumentUploadEvent,
    FreeTextEvent,
)


class TelegramChat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    type: Optional[str] = None


class TelegramDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    file_id: str
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class TelegramMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message_id: int
    chat: TelegramChat
    text: Optional[str] = None
    document: Optional[TelegramDocument] = None


class TelegramCallbackQuery(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    data: Optional[str] = None
    message: Optional[TelegramMessage] = None


class TelegramUpdate(BaseModel):
    """An incoming update from getUpdates or the webhook"""
    model_config = ConfigDict(extra="ignore")

    update_id: int
    message: Optional[TelegramMessage] = None
    callback_query: Optional[TelegramCallbackQuery] = None

    def to_event(self) -> Optional[ConversationEvent]:
        """
        Translate the update into a conversation event.

        Returns None for updates the bot does not handle (stickers, photos,
        callback queries without a chat, ...).
        """
        if self.callback_query is not None:
            query = self.callback_query
            if query.message is None or query.data is None:
                return None
            return ButtonPressEvent(
                conversation_id=query.message.chat.id,
                action=query.data,
                interaction_id=query.id,
            )

        message = self.message
        if message is None:
            return None

        if message.document is not None:
            return DocumentUploadEvent(
                conversation_id=message.chat.id,
                file_id=message.document.file_id,
                file_name=message.document.file_name,
                mime_type=message.document.mime_type,
            )

        if message.text is None:
            return None

        if message.text.startswith("/"):
            return CommandEvent(
                conversation_id=message.chat.id,
                command=parse_command(message.text),
            )

        return FreeTextEvent(conversation_id=message.chat.id, text=message.text)


def parse_command(text: str) -> str:
    """'/start@ResumeBot payload' -> 'start'"""
    head = text.split(maxsplit=1)[0] if text.strip() else text
    return head.lstrip("/").split("@", 1)[0].lower()
