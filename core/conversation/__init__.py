"""
Core conversation handling for the resume assistant.

This package provides:
- Session storage keyed by conversation
- The transition table and the state machine that runs it
- Prompt templates and user-facing reply texts
"""

from .session_store import (
    InMemorySessionStore,
    SessionStore,
    StorageConfig,
)
from .transitions import (
    Transition,
    TransitionGuards,
    TransitionRules,
)
from .state_machine import ConversationStateMachine

__all__ = [
    'ConversationStateMachine',
    'InMemorySessionStore',
    'SessionStore',
    'StorageConfig',
    'Transition',
    'TransitionGuards',
    'TransitionRules',
]
