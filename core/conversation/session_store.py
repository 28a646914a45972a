"""
Session storage for conversation state.

This module holds the per-conversation session records. The state machine
reads a session, works on it, and writes it back within one event; the
store hands out copies so a caller never mutates the stored record behind
the store's back.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Tuple

from models.schemas import ConversationId, Session

logger = logging.getLogger(__name__)


@dataclass
class StorageConfig:
    """Configuration for session storage"""
    # None keeps sessions until the flow ends or the process restarts
    session_ttl: Optional[timedelta] = None


class SessionStore(ABC):
    """Keyed session storage used by the conversation state machine"""

    @abstractmethod
    def get(self, conversation_id: ConversationId) -> Optional[Session]:
        """Return a copy of the session, or None when the conversation has no flow in progress"""

    @abstractmethod
    def set(self, conversation_id: ConversationId, session: Session) -> None:
        """Store (replace) the session for a conversation"""

    @abstractmethod
    def delete(self, conversation_id: ConversationId) -> bool:
        """Drop the session; returns True if one existed"""


class InMemorySessionStore(SessionStore):
    """
    Process-local session store.

    Sessions are ephemeral and lost on restart. There is no locking: the
    platform delivers one chat's messages one at a time.
    """

    def __init__(self, config: Optional[StorageConfig] = None):
        self.config = config or StorageConfig()
        self._sessions: Dict[ConversationId, Tuple[Session, datetime]] = {}

    def _is_expired(self, stored_at: datetime) -> bool:
        ttl = self.config.session_ttl
        return ttl is not None and datetime.now(timezone.utc) - stored_at >= ttl

    def get(self, conversation_id: ConversationId) -> Optional[Session]:
        entry = self._sessions.get(conversation_id)
        if entry is None:
            return None

        session, stored_at = entry
        if self._is_expired(stored_at):
            logger.info(f"⌛ Session for {conversation_id} expired ({session.mode.value}) - dropping")
            del self._sessions[conversation_id]
            return None

        return session.model_copy(deep=True)

    def set(self, conversation_id: ConversationId, session: Session) -> None:
        self._sessions[conversation_id] = (session.model_copy(deep=True), datetime.now(timezone.utc))
        logger.debug(f"💾 Session saved for {conversation_id}: {session.mode.value}")

    def delete(self, conversation_id: ConversationId) -> bool:
        existed = self._sessions.pop(conversation_id, None) is not None
        if existed:
            logger.debug(f"🗑️  Session deleted for {conversation_id}")
        return existed

    def active_count(self) -> int:
        """Number of conversations with a flow in progress"""
        return len(self._sessions)

