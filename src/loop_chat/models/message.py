"""Data models for chat transcript entries."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

import structlog

log = structlog.get_logger()


class ContentType(StrEnum):
    """Kinds of content a transcript entry can carry."""

    TEXT = "chat-text"
    CONTEXT = "chat-context"
    CONTEXT_TILE = "context-tile"
    NOTIFICATION = "chat-notification"


class MessageKind(StrEnum):
    """Who a transcript entry is attributed to."""

    SENT = "sent"
    RECEIVED = "recv"
    SPECIAL = "special"


@dataclass(frozen=True)
class Message:
    """One entry in the conversation transcript."""

    kind: MessageKind
    content_type: str
    body: str | None
    extra_data: dict[str, Any] | None = None
    sent_at: datetime | None = None
    received_at: datetime | None = None
    sender_display_name: str | None = None  # Only set when the sender named themselves

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict."""
        data: dict[str, Any] = {
            "kind": str(self.kind),
            "contentType": str(self.content_type),
            "body": self.body,
            "extraData": self.extra_data,
            "sentAt": self.sent_at.isoformat() if self.sent_at else None,
            "receivedAt": self.received_at.isoformat() if self.received_at else None,
        }
        if self.sender_display_name is not None:
            data["displayName"] = self.sender_display_name
        return data


def from_epoch_millis(value: float | None) -> datetime | None:
    """Convert a wire timestamp (milliseconds since the epoch) to a datetime.

    Missing, non-finite and out-of-range timestamps give None.
    """
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    except (OverflowError, ValueError, OSError):
        log.debug("timestamp_out_of_range", timestamp=value)
        return None


def to_epoch_millis(value: datetime) -> float:
    """Convert a datetime to a wire timestamp (milliseconds since the epoch)."""
    return value.timestamp() * 1000
