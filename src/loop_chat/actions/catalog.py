"""The catalog of action kinds used by the room UI.

Each class is one action kind. Field names are snake_case; the camelCase
names used on the wire are accepted as aliases.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .base import Action, ActionCatalog, Boolean, Number

# =============================================================================
# Window setup
# =============================================================================


class GetWindowData(Action):
    """Get the window data for the provided window id."""

    name: ClassVar[str] = "getWindowData"

    window_id: str


class ExtractTokenInfo(Action):
    """Extract the token information and type for the standalone window."""

    name: ClassVar[str] = "extractTokenInfo"

    window_path: str
    window_hash: str


class SetupWindowData(Action):
    """Pass round the window data so that stores can record it."""

    name: ClassVar[str] = "setupWindowData"

    room_token: str


class FetchServerData(Action):
    """Fetch the data from the server for a room token."""

    name: ClassVar[str] = "fetchServerData"

    token: str
    window_type: str
    crypto_key: str | None = None


class WindowUnload(Action):
    """Signals the window is being unloaded."""

    name: ClassVar[str] = "windowUnload"


# =============================================================================
# Session and peers
# =============================================================================


class RemotePeerDisconnected(Action):
    """The remote peer was disconnected.

    ``peer_hungup`` is true if the peer intentionally disconnected.
    """

    name: ClassVar[str] = "remotePeerDisconnected"

    peer_hungup: Boolean


class ConnectionFailure(Action):
    """The connection failed."""

    name: ClassVar[str] = "connectionFailure"

    reason: str


class ConnectedToSdkServers(Action):
    """The session is now connected to the servers."""

    name: ClassVar[str] = "connectedToSdkServers"


class RemotePeerConnected(Action):
    """A remote peer has connected to the room."""

    name: ClassVar[str] = "remotePeerConnected"


class DataChannelsAvailable(Action):
    """The session has (or lost) a data channel."""

    name: ClassVar[str] = "dataChannelsAvailable"

    available: Boolean


class ConnectionStatus(Action):
    """Current session, publisher and connection status."""

    name: ClassVar[str] = "connectionStatus"

    event: str
    state: str
    connections: Number
    send_streams: Number
    recv_streams: Number


# =============================================================================
# Text chat
# =============================================================================


class SendTextChatMessage(Action):
    """Send a message to the other peer."""

    name: ClassVar[str] = "sendTextChatMessage"

    content_type: str
    message: str
    sent_timestamp: Number
    extra_data: dict[str, Any] | None = None


class ReceivedTextChatMessage(Action):
    """A message has been received from the other peer."""

    name: ClassVar[str] = "receivedTextChatMessage"

    content_type: str
    message: str
    received_timestamp: Number
    # Context tiles carry no display name
    display_name: str | None = None
    sent_timestamp: Number | None = None
    extra_data: dict[str, Any] | None = None


class SetOwnDisplayName(Action):
    """Display name identifying this user."""

    name: ClassVar[str] = "setOwnDisplayName"

    display_name: str


# =============================================================================
# Participants and presence
# =============================================================================


class UpdatedParticipant(Action):
    """Participant data has been received."""

    name: ClassVar[str] = "updatedParticipant"

    participant_name: str
    user_id: str


class UpdatedPresence(Action):
    """Presence data has been received."""

    name: ClassVar[str] = "updatedPresence"

    is_here: Boolean
    pinged_ago: Number
    user_id: str


# =============================================================================
# Pages
# =============================================================================


class AddPage(Action):
    """Add a page to the current room."""

    name: ClassVar[str] = "addPage"

    title: str
    thumbnail_img: str = Field(alias="thumbnail_img")
    url: str


class AddedPage(Action):
    """A page has been added by the other peer."""

    name: ClassVar[str] = "addedPage"

    page_id: str
    added_by: str = Field(alias="added_by")
    added_time: Number = Field(alias="added_time")
    metadata: dict[str, Any]


class DeletePage(Action):
    """Delete a page of the current room."""

    name: ClassVar[str] = "deletePage"

    page_id: str


class DeletedPage(Action):
    """A page has been removed."""

    name: ClassVar[str] = "deletedPage"

    page_id: str
    added_by: str = Field(alias="added_by")
    added_time: Number = Field(alias="added_time")
    metadata: dict[str, Any]
    deleted: dict[str, Any]


class UpdatePage(Action):
    """Update a page with newly obtained metadata."""

    name: ClassVar[str] = "updatePage"

    thumbnail_img: str = Field(alias="thumbnail_img")
    title: str
    page_id: str


# =============================================================================
# Cursors
# =============================================================================


class SendCursorData(Action):
    """Send cursor data to the other peer."""

    name: ClassVar[str] = "sendCursorData"

    type: str
    ratio_x: Number | None = None
    ratio_y: Number | None = None


class ReceivedCursorData(Action):
    """Cursor data has been received from the other peer."""

    name: ClassVar[str] = "receivedCursorData"

    type: str
    ratio_x: Number | None = None
    ratio_y: Number | None = None


# =============================================================================
# Media
# =============================================================================


class SetupStreamElements(Action):
    """Publisher/subscriber configuration required by the SDK."""

    name: ClassVar[str] = "setupStreamElements"

    publisher_config: dict[str, Any]


class TileShown(Action):
    """A waiting tile was shown."""

    name: ClassVar[str] = "tileShown"


class GotMediaPermission(Action):
    """Local media has been obtained."""

    name: ClassVar[str] = "gotMediaPermission"


class MediaConnected(Action):
    """Media is now up for the call."""

    name: ClassVar[str] = "mediaConnected"


class VideoDimensionsChanged(Action):
    """The dimensions of a stream changed, or a stream connected."""

    name: ClassVar[str] = "videoDimensionsChanged"

    is_local: Boolean
    video_type: str
    dimensions: dict[str, Any]


class VideoScreenStreamChanged(Action):
    """The screen stream gained or lost video."""

    name: ClassVar[str] = "videoScreenStreamChanged"

    has_video: Boolean


class MediaStreamCreated(Action):
    """A local or remote media stream has been created."""

    name: ClassVar[str] = "mediaStreamCreated"

    has_audio: Boolean
    has_video: Boolean
    is_local: Boolean
    src_media_element: Any


class MediaStreamDestroyed(Action):
    """A local or remote media stream has been destroyed."""

    name: ClassVar[str] = "mediaStreamDestroyed"

    is_local: Boolean


class RemoteVideoStatus(Action):
    """The remote stream enabled or disabled its video."""

    name: ClassVar[str] = "remoteVideoStatus"

    video_enabled: Boolean


class SetMute(Action):
    """Mute or unmute part of a stream."""

    name: ClassVar[str] = "setMute"

    # "audio" or "video"
    type: str
    enabled: Boolean


class StartBrowserShare(Action):
    """Start a browser tab share."""

    name: ClassVar[str] = "startBrowserShare"


class EndScreenShare(Action):
    """End a screen share."""

    name: ClassVar[str] = "endScreenShare"


class ToggleBrowserSharing(Action):
    """Pause or resume a screen share."""

    name: ClassVar[str] = "toggleBrowserSharing"

    enabled: Boolean


class ScreenSharingState(Action):
    """Screen sharing became active or inactive."""

    name: ClassVar[str] = "screenSharingState"

    state: str


class ReceivingScreenShare(Action):
    """A shared screen is (or is no longer) being received."""

    name: ClassVar[str] = "receivingScreenShare"

    receiving: Boolean
    # Only present when receiving is true
    src_media_element: Any = None


# =============================================================================
# Rooms
# =============================================================================


class RoomContextUrl(BaseModel):
    """A URL attached to a room's context."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    description: str | None = None
    location: str | None = None
    thumbnail: str | None = None


class CreateRoom(Action):
    """Create a new room."""

    name: ClassVar[str] = "createRoom"

    urls: list[dict[str, Any]] | None = None


class CreatedRoom(Action):
    """A room has been created."""

    name: ClassVar[str] = "createdRoom"

    decrypted_context: dict[str, Any]
    room_token: str
    room_url: str


class CreateRoomError(Action):
    """Room creation failed."""

    name: ClassVar[str] = "createRoomError"

    error: dict[str, Any]


class DeleteRoom(Action):
    """Delete a room."""

    name: ClassVar[str] = "deleteRoom"

    room_token: str


class DeleteRoomError(Action):
    """Room deletion failed."""

    name: ClassVar[str] = "deleteRoomError"

    error: dict[str, Any]


class GetAllRooms(Action):
    """Retrieve the room list."""

    name: ClassVar[str] = "getAllRooms"


class GetAllRoomsError(Action):
    """Fetching the room list failed.

    The error is either raised by our own code or is the error object
    returned by the server.
    """

    name: ClassVar[str] = "getAllRoomsError"

    error: Exception | dict[str, Any]


class UpdateRoomList(Action):
    """Replace the room list."""

    name: ClassVar[str] = "updateRoomList"

    room_list: list[Any]


class OpenRoom(Action):
    """Open a room."""

    name: ClassVar[str] = "openRoom"

    room_token: str


class UpdateRoomContext(Action):
    """The room context changed, e.g. because the shared tab changed."""

    name: ClassVar[str] = "updateRoomContext"

    room_token: str
    new_room_name: str | None = None
    new_room_description: str | None = None
    new_room_thumbnail: str | None = None
    new_room_url: str | None = Field(default=None, alias="newRoomURL")
    sent_timestamp: Number | None = None


class UpdateRoomContextError(Action):
    """Updating the room context failed."""

    name: ClassVar[str] = "updateRoomContextError"

    error: Exception | dict[str, Any]


class UpdateRoomContextDone(Action):
    """Updating the room context finished successfully."""

    name: ClassVar[str] = "updateRoomContextDone"


class CopyRoomUrl(Action):
    """Copy a room url to the clipboard.

    ``from_`` is where the invitation is shared from ("panel" or
    "conversation").
    """

    name: ClassVar[str] = "copyRoomUrl"

    from_: str = Field(alias="from")
    room_url: str


class EmailRoomUrl(Action):
    """Email a room url."""

    name: ClassVar[str] = "emailRoomUrl"

    from_: str = Field(alias="from")
    room_url: str
    room_description: str | None = None


class FacebookShareRoomUrl(Action):
    """Share a room url on Facebook."""

    name: ClassVar[str] = "facebookShareRoomUrl"

    from_: str = Field(alias="from")
    room_url: str
    room_origin: str | None = None


class RoomFailure(Action):
    """Something went wrong with the room."""

    name: ClassVar[str] = "roomFailure"

    error: dict[str, Any]
    # True when the failure happened on the join request
    failed_join_request: Boolean


class UpdateRoomInfo(Action):
    """Room information has been received."""

    name: ClassVar[str] = "updateRoomInfo"

    room_url: str
    participants: list[Any] | None = None
    room_context_urls: list[RoomContextUrl] | None = None
    room_info_failure: str | None = None
    room_name: str | None = None
    room_state: str | None = None


class UserAgentHandlesRoom(Action):
    """Whether the user agent will handle the room."""

    name: ClassVar[str] = "userAgentHandlesRoom"

    handles_room: Boolean


class UpdateUserAgentRoomState(Action):
    name: ClassVar[str] = "updateUserAgentRoomState"

    status: str


class OpenUserAgentRoom(Action):
    """Open a room via the user agent."""

    name: ClassVar[str] = "openUserAgentRoom"


class InitiateWebRTC(Action):
    """Start the WebRTC connection."""

    name: ClassVar[str] = "initiateWebRTC"


class MetricsLogJoinRoom(Action):
    """Records what type of join happened."""

    name: ClassVar[str] = "metricsLogJoinRoom"

    user_agent_handled_room: Boolean
    own_room: Boolean | None = None


class RetryAfterRoomFailure(Action):
    name: ClassVar[str] = "retryAfterRoomFailure"


class SetupWebRTCTokens(Action):
    """The user has joined the room on the server."""

    name: ClassVar[str] = "setupWebRTCTokens"

    api_key: str
    session_token: str
    session_id: str


class LeaveConversation(Action):
    """The user wants to leave the conversation."""

    name: ClassVar[str] = "leaveConversation"


class LeaveRoom(Action):
    """The user wants to leave the room."""

    name: ClassVar[str] = "leaveRoom"


# =============================================================================
# Misc
# =============================================================================


class ShowFeedbackForm(Action):
    name: ClassVar[str] = "showFeedbackForm"


class RecordClick(Action):
    """Record a link click.

    ``link_info`` is a generic description of the link, not the URL itself.
    """

    name: ClassVar[str] = "recordClick"

    link_info: str


class ShowSnackbar(Action):
    name: ClassVar[str] = "showSnackbar"

    label: str


ALL_ACTIONS: tuple[type[Action], ...] = (
    GetWindowData,
    ExtractTokenInfo,
    SetupWindowData,
    FetchServerData,
    WindowUnload,
    RemotePeerDisconnected,
    ConnectionFailure,
    ConnectedToSdkServers,
    RemotePeerConnected,
    DataChannelsAvailable,
    ConnectionStatus,
    SendTextChatMessage,
    ReceivedTextChatMessage,
    SetOwnDisplayName,
    UpdatedParticipant,
    UpdatedPresence,
    AddPage,
    AddedPage,
    DeletePage,
    DeletedPage,
    UpdatePage,
    SendCursorData,
    ReceivedCursorData,
    SetupStreamElements,
    TileShown,
    GotMediaPermission,
    MediaConnected,
    VideoDimensionsChanged,
    VideoScreenStreamChanged,
    MediaStreamCreated,
    MediaStreamDestroyed,
    RemoteVideoStatus,
    SetMute,
    StartBrowserShare,
    EndScreenShare,
    ToggleBrowserSharing,
    ScreenSharingState,
    ReceivingScreenShare,
    CreateRoom,
    CreatedRoom,
    CreateRoomError,
    DeleteRoom,
    DeleteRoomError,
    GetAllRooms,
    GetAllRoomsError,
    UpdateRoomList,
    OpenRoom,
    UpdateRoomContext,
    UpdateRoomContextError,
    UpdateRoomContextDone,
    CopyRoomUrl,
    EmailRoomUrl,
    FacebookShareRoomUrl,
    RoomFailure,
    UpdateRoomInfo,
    UserAgentHandlesRoom,
    UpdateUserAgentRoomState,
    OpenUserAgentRoom,
    InitiateWebRTC,
    MetricsLogJoinRoom,
    RetryAfterRoomFailure,
    SetupWebRTCTokens,
    LeaveConversation,
    LeaveRoom,
    ShowFeedbackForm,
    RecordClick,
    ShowSnackbar,
)


def build_default_catalog(*, reject_name_field: bool = False) -> ActionCatalog:
    """Build a catalog holding every action kind above."""
    catalog = ActionCatalog(reject_name_field=reject_name_field)
    for action_cls in ALL_ACTIONS:
        catalog.register(action_cls)
    return catalog
