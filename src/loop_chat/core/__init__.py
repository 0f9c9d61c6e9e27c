"""Core state management: the conversation store and the dispatcher."""

from .conversation_store import ConfigurationError, ConversationStore, StoreError
from .dispatcher import DispatchError, Dispatcher

__all__ = [
    "ConfigurationError",
    "ConversationStore",
    "DispatchError",
    "Dispatcher",
    "StoreError",
]
