"""Data models for the conversation transcript."""

from .message import ContentType, Message, MessageKind, from_epoch_millis, to_epoch_millis
from .state import ConversationState

__all__ = [
    # Message models
    "ContentType",
    "MessageKind",
    "Message",
    "from_epoch_millis",
    "to_epoch_millis",
    # State
    "ConversationState",
]
