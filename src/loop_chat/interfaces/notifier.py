"""Abstract interface for notifying the surrounding host application."""

from enum import StrEnum
from typing import Protocol


class HostEvent(StrEnum):
    """Payload-less signals emitted to the host."""

    CHAT_ENABLED = "chat-enabled"
    MESSAGE_APPENDED = "message-appended-enabled"
    # Lets the host show an indicator while the chat panel is collapsed
    MESSAGE_APPENDED_WHILE_DISABLED = "message-appended-disabled"


class HostNotifier(Protocol):
    """Receives host notifications from the conversation store."""

    def notify(self, event: HostEvent) -> None:
        """
        Deliver a host event.

        Args:
            event: The event being signalled
        """
        ...
