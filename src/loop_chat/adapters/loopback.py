"""In-process data driver and host notifier.

The loopback driver stands in for the peer-to-peer data channel: it records
what was sent and echoes text messages back as received messages, the same
way the remote side reflects them during a real session.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog

from loop_chat.actions.catalog import ReceivedTextChatMessage
from loop_chat.models.message import ContentType, to_epoch_millis

if TYPE_CHECKING:
    from loop_chat.core.dispatcher import Dispatcher
    from loop_chat.interfaces.notifier import HostEvent

log = structlog.get_logger()


class LoopbackDataDriver:
    """Data driver that records sent messages and echoes them back.

    Attributes:
        sent: Every payload handed to the driver, in order.
    """

    def __init__(
        self,
        dispatcher: Dispatcher | None = None,
        *,
        echo_content_types: Iterable[str] = (ContentType.TEXT,),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the driver.

        Args:
            dispatcher: Where echoed messages are dispatched (optional)
            echo_content_types: Content types echoed back as received
            clock: Source of the received timestamp for echoes
        """
        self.sent: list[dict[str, Any]] = []
        self._dispatcher = dispatcher
        self._echo_content_types = tuple(echo_content_types)
        self._clock = clock or (lambda: datetime.now(UTC))

    def attach(self, dispatcher: Dispatcher) -> None:
        """Echo future messages through ``dispatcher``."""
        self._dispatcher = dispatcher

    def send_text_chat_message(self, message: dict[str, Any]) -> None:
        """Record a message and echo it if its content type is echoed."""
        self.sent.append(dict(message))
        content_type = message.get("contentType")
        log.debug("loopback_message_sent", content_type=content_type, count=len(self.sent))

        if self._dispatcher is None or content_type not in self._echo_content_types:
            return

        values = dict(message)
        values["receivedTimestamp"] = to_epoch_millis(self._clock())
        self._dispatcher.enqueue(ReceivedTextChatMessage.from_values(values))


class LoggingNotifier:
    """Host notifier that logs and records every event.

    Attributes:
        events: Every event received, in order.
    """

    def __init__(self) -> None:
        self.events: list[HostEvent] = []

    def notify(self, event: HostEvent) -> None:
        self.events.append(event)
        log.info("host_notification", host_event=str(event))
