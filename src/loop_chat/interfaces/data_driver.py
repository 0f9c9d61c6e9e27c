"""Abstract interface for the outbound chat transport."""

from typing import Any, Protocol


class DataDriver(Protocol):
    """Transmits chat messages to the remote peer.

    The store hands over the message and does not wait for, or rely on, the
    outcome of the send.
    """

    def send_text_chat_message(self, message: dict[str, Any]) -> None:
        """
        Send a chat message to the remote peer.

        Args:
            message: Wire payload, keyed by camelCase field names
                (``contentType``, ``message``, ``sentTimestamp``, and
                optionally ``extraData`` and ``displayName``)
        """
        ...
