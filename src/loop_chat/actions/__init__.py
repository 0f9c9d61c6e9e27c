"""Action records, their catalog and validation errors."""

from .base import (
    Action,
    ActionCatalog,
    ActionCatalogError,
    ActionError,
    ActionValidationError,
    UnknownActionError,
)
from .catalog import (
    ALL_ACTIONS,
    DataChannelsAvailable,
    ReceivedTextChatMessage,
    RemotePeerConnected,
    RemotePeerDisconnected,
    RoomContextUrl,
    SendTextChatMessage,
    SetOwnDisplayName,
    UpdateRoomContext,
    UpdateRoomInfo,
    build_default_catalog,
)

__all__ = [
    # Base
    "Action",
    "ActionCatalog",
    "build_default_catalog",
    "ALL_ACTIONS",
    # Errors
    "ActionError",
    "ActionValidationError",
    "ActionCatalogError",
    "UnknownActionError",
    # Conversation actions
    "DataChannelsAvailable",
    "SendTextChatMessage",
    "ReceivedTextChatMessage",
    "UpdateRoomInfo",
    "RoomContextUrl",
    "UpdateRoomContext",
    "RemotePeerDisconnected",
    "RemotePeerConnected",
    "SetOwnDisplayName",
]
