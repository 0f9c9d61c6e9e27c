"""Conversation state snapshot."""

from dataclasses import dataclass
from typing import Any

from .message import Message


@dataclass(frozen=True)
class ConversationState:
    """Read-only snapshot of a conversation.

    ``messages`` is a tuple, so a snapshot handed to a reader can never be
    changed by later transitions; every transition builds a new snapshot.
    """

    chat_enabled: bool = False
    messages: tuple[Message, ...] = ()
    room_name: str | None = None
    display_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict."""
        return {
            "chatEnabled": self.chat_enabled,
            "roomName": self.room_name,
            "displayName": self.display_name,
            "messages": [message.to_dict() for message in self.messages],
        }
