"""Conversation store for the in-room text chat.

This module implements the ConversationStore class that owns the chat
transcript of one room session. It:
- Reacts to a fixed set of actions (see ConversationStore.ACTIONS)
- Publishes a new immutable ConversationState on every change
- Forwards outgoing messages to the injected data driver
- Signals the host application when the transcript grows

Snapshots are never modified after publication, so a reader holding an old
snapshot keeps seeing exactly what it was given.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, ClassVar
from urllib.parse import urlparse

import structlog

from loop_chat.actions.catalog import SendTextChatMessage
from loop_chat.interfaces.notifier import HostEvent
from loop_chat.models.message import (
    ContentType,
    Message,
    MessageKind,
    from_epoch_millis,
    to_epoch_millis,
)
from loop_chat.models.state import ConversationState

if TYPE_CHECKING:
    from loop_chat.actions.base import Action
    from loop_chat.actions.catalog import (
        DataChannelsAvailable,
        ReceivedTextChatMessage,
        RemotePeerConnected,
        RemotePeerDisconnected,
        SetOwnDisplayName,
        UpdateRoomContext,
        UpdateRoomInfo,
    )
    from loop_chat.interfaces.data_driver import DataDriver
    from loop_chat.interfaces.notifier import HostNotifier

log = structlog.get_logger()

StateListener = Callable[[ConversationState], None]

# Content types this version knows how to display when received
RECEIVABLE_CONTENT_TYPES = (
    ContentType.TEXT,
    ContentType.CONTEXT_TILE,
    ContentType.NOTIFICATION,
)

# Appending these does not notify the host
SILENT_CONTENT_TYPES = (ContentType.CONTEXT, ContentType.NOTIFICATION)

PEER_LEFT_SESSION = "peer_left_session"
PEER_UNEXPECTED_QUIT = "peer_unexpected_quit"
PEER_JOIN_SESSION = "peer_join_session"


class StoreError(Exception):
    """Base exception for store errors."""


class ConfigurationError(StoreError):
    """The store was created without a required collaborator."""


def _hostname(url: Any) -> str | None:
    """Return the hostname of a URL, or None if it has none or is unparseable."""
    if not isinstance(url, str):
        return None
    try:
        return urlparse(url).hostname
    except ValueError:
        log.debug("context_url_unparseable", url=url)
        return None


class ConversationStore:
    """Owns the conversation state for one room session.

    Responsibilities:
    - Keep the ordered transcript, replacing the room context entry rather
      than duplicating it
    - Attribute received text to ourselves when the sender name is ours
    - Send outgoing messages through the data driver
    - Emit host notifications for chat availability and new messages

    Actions are handled one at a time, in the order they arrive; the
    transcript order is the handling order.

    Example:
        store = ConversationStore(data_driver, notifier)
        dispatcher.register(store, store.ACTIONS)
        dispatcher.dispatch(SetOwnDisplayName(display_name="Ada"))
        store.get_state().display_name  # "Ada"
    """

    # Action name -> handler method
    ACTIONS: ClassVar[dict[str, str]] = {
        "dataChannelsAvailable": "data_channels_available",
        "receivedTextChatMessage": "received_text_chat_message",
        "sendTextChatMessage": "send_text_chat_message",
        "updateRoomInfo": "update_room_info",
        "updateRoomContext": "update_room_context",
        "remotePeerDisconnected": "remote_peer_disconnected",
        "remotePeerConnected": "remote_peer_connected",
        "setOwnDisplayName": "set_own_display_name",
    }

    def __init__(
        self,
        data_driver: DataDriver | None,
        notifier: HostNotifier | None = None,
        *,
        reemit_chat_enabled: bool = False,
        room_name_from_context: bool = False,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the ConversationStore.

        Args:
            data_driver: Transport used to send messages to the peer
            notifier: Receives host notifications (optional)
            reemit_chat_enabled: Emit "chat enabled" on every available=True,
                not only when chat goes from disabled to enabled
            room_name_from_context: Name the room after its first context
                url when no room name is given
            clock: Source of the current time, for store-generated entries

        Raises:
            ConfigurationError: If no data driver is given
        """
        if data_driver is None:
            raise ConfigurationError("Missing option data_driver")

        self._data_driver = data_driver
        self._notifier = notifier
        self._reemit_chat_enabled = reemit_chat_enabled
        self._room_name_from_context = room_name_from_context
        self._clock = clock or (lambda: datetime.now(UTC))

        self._state = ConversationState()
        self._listeners: list[StateListener] = []

        # Positions in the transcript, kept in step with every append
        self._context_index: int | None = None
        self._last_tile_index: int | None = None

    # =========================================================================
    # State access
    # =========================================================================

    @property
    def state(self) -> ConversationState:
        """The current state snapshot."""
        return self._state

    def get_state(self) -> ConversationState:
        """Return the current state snapshot."""
        return self._state

    def add_change_listener(self, listener: StateListener) -> None:
        """Call ``listener`` with every newly published snapshot."""
        self._listeners.append(listener)

    def remove_change_listener(self, listener: StateListener) -> None:
        """Stop calling ``listener``. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def handle(self, action: Action) -> None:
        """Route an action to its handler.

        Actions this store does not subscribe to are ignored.
        """
        method_name = self.ACTIONS.get(action.name)
        if method_name is None:
            log.debug("action_ignored", action=action.name)
            return
        getattr(self, method_name)(action)

    # =========================================================================
    # Action handlers
    # =========================================================================

    def data_channels_available(self, action: DataChannelsAvailable) -> None:
        """Enable or disable text chat."""
        was_enabled = self._state.chat_enabled
        self._set_state(chat_enabled=action.available)

        if action.available and (self._reemit_chat_enabled or not was_enabled):
            log.info("chat_enabled")
            self._notify(HostEvent.CHAT_ENABLED)
        elif was_enabled and not action.available:
            log.info("chat_disabled")

    def send_text_chat_message(self, action: SendTextChatMessage) -> None:
        """Send a message to the peer.

        Text messages get our display name attached and are not added to the
        transcript here: they show up when the peer's copy comes back as a
        received message. Everything else is added as sent straight away.
        """
        payload = action.to_payload()

        if action.content_type == ContentType.TEXT:
            if self._state.display_name:
                payload["displayName"] = self._state.display_name
        else:
            self._append_message(
                MessageKind.SENT,
                content_type=action.content_type,
                body=action.message,
                extra_data=action.extra_data,
                sent_at=from_epoch_millis(action.sent_timestamp),
            )

        log.debug(
            "sending_chat_message",
            content_type=str(action.content_type),
            length=len(action.message),
        )
        self._data_driver.send_text_chat_message(payload)

    def received_text_chat_message(self, action: ReceivedTextChatMessage) -> None:
        """Add a message from the peer to the transcript.

        Content types this version does not understand are dropped.
        """
        if action.content_type not in RECEIVABLE_CONTENT_TYPES:
            log.debug("unsupported_content_type_dropped", content_type=str(action.content_type))
            return

        is_text = action.content_type == ContentType.TEXT
        kind = MessageKind.RECEIVED
        # TODO: compare a stable user id once peers send one; display names can change
        if is_text and action.display_name == self._state.display_name:
            kind = MessageKind.SENT

        self._append_message(
            kind,
            content_type=action.content_type,
            body=action.message,
            extra_data=action.extra_data,
            sent_at=from_epoch_millis(action.sent_timestamp),
            received_at=from_epoch_millis(action.received_timestamp),
            sender_display_name=action.display_name if is_text else None,
        )

    def update_room_info(self, action: UpdateRoomInfo) -> None:
        """Record the room name and show the room's context link."""
        context_urls = action.room_context_urls or []

        room_name = action.room_name
        if not room_name and context_urls and self._room_name_from_context:
            room_name = context_urls[0].description or context_urls[0].location
        if room_name:
            self._set_state(room_name=room_name)

        if not context_urls:
            return

        # Only the first url is shown
        url_data = context_urls[0]
        self._append_message(
            MessageKind.SPECIAL,
            content_type=ContentType.CONTEXT,
            body=url_data.description,
            extra_data={
                "location": url_data.location,
                "thumbnail": url_data.thumbnail,
            },
        )

    def update_room_context(self, action: UpdateRoomContext) -> None:
        """Announce a change of shared page as a context tile.

        Nothing is sent when the newest tile already points at the same site.
        """
        if self._last_tile_index is None:
            self._send_context_tile(action)
            return

        last_tile = self._state.messages[self._last_tile_index]
        old_url = (last_tile.extra_data or {}).get("newRoomURL")
        old_host = _hostname(old_url)
        new_host = _hostname(action.new_room_url)
        # Without hostnames, only an identical url counts as the same site
        if old_host == new_host and (old_host is not None or old_url == action.new_room_url):
            log.debug("context_tile_unchanged", hostname=new_host)
            return

        self._send_context_tile(action)

    def remote_peer_disconnected(self, action: RemotePeerDisconnected) -> None:
        """Note in the transcript that the peer left or dropped out."""
        text_key = PEER_LEFT_SESSION if action.peer_hungup else PEER_UNEXPECTED_QUIT
        log.info("remote_peer_disconnected", peer_hungup=action.peer_hungup)
        self._append_peer_notification(text_key, "disconnected")

    def remote_peer_connected(self, action: RemotePeerConnected | None = None) -> None:
        """Note in the transcript that the peer joined."""
        log.info("remote_peer_connected")
        self._append_peer_notification(PEER_JOIN_SESSION, "connected")

    def set_own_display_name(self, action: SetOwnDisplayName) -> None:
        """Set the name attached to our outgoing text messages."""
        log.debug("display_name_changed")
        self._set_state(display_name=action.display_name)

    # =========================================================================
    # Internals
    # =========================================================================

    def _send_context_tile(self, action: UpdateRoomContext) -> None:
        tile = SendTextChatMessage(
            content_type=ContentType.CONTEXT_TILE,
            message=action.new_room_description or "",
            sent_timestamp=to_epoch_millis(self._clock()),
            extra_data={
                "roomToken": action.room_token,
                "newRoomThumbnail": action.new_room_thumbnail,
                "newRoomURL": action.new_room_url,
            },
        )
        self.send_text_chat_message(tile)

    def _append_peer_notification(self, text_key: str, peer_status: str) -> None:
        self._append_message(
            MessageKind.RECEIVED,
            content_type=ContentType.NOTIFICATION,
            body=text_key,
            extra_data={"peerStatus": peer_status},
            received_at=self._clock(),
        )

    def _append_message(
        self,
        kind: MessageKind,
        *,
        content_type: str,
        body: str | None,
        extra_data: dict[str, Any] | None = None,
        sent_at: datetime | None = None,
        received_at: datetime | None = None,
        sender_display_name: str | None = None,
    ) -> None:
        """Add a message to a new copy of the transcript and publish it.

        A context message takes over the slot of the existing one, if any.
        """
        message = Message(
            kind=kind,
            content_type=content_type,
            body=body,
            extra_data=extra_data,
            sent_at=sent_at,
            received_at=received_at,
            sender_display_name=sender_display_name,
        )

        messages = list(self._state.messages)
        if content_type == ContentType.CONTEXT and self._context_index is not None:
            messages[self._context_index] = message
        else:
            messages.append(message)
            if content_type == ContentType.CONTEXT:
                self._context_index = len(messages) - 1
            elif content_type == ContentType.CONTEXT_TILE:
                self._last_tile_index = len(messages) - 1

        self._set_state(messages=tuple(messages))

        if content_type in SILENT_CONTENT_TYPES:
            return
        if self._state.chat_enabled:
            self._notify(HostEvent.MESSAGE_APPENDED)
        else:
            self._notify(HostEvent.MESSAGE_APPENDED_WHILE_DISABLED)

    def _set_state(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)

    def _notify(self, event: HostEvent) -> None:
        if self._notifier is None:
            return
        self._notifier.notify(event)
