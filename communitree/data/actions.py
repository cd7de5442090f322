"""The closed set of actions accepted by the reducer.

Each action is a frozen pydantic model whose ``type`` literal is the
discriminant. :data:`Action` is the tagged union of all of them, so raw
dictionaries (for example replayed from a log) can be parsed with
:func:`parse_action`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter

from ..core.enums import EngagementType, ModalType, TrackType, TrustPointAction, ViewMode
from ..core.models import (
    DARPAN_ID_PATTERN,
    NGO,
    AppState,
    ChatThread,
    CommuniTreeModel,
    Event,
    Message,
    Notification,
    User,
    UserEvent,
)


# ---------------------------------------------------------------------------
# Sync
# ---------------------------------------------------------------------------
class SyncWithStorage(CommuniTreeModel):
    type: Literal["SYNC_WITH_STORAGE"] = "SYNC_WITH_STORAGE"
    state: AppState


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------
class SetUser(CommuniTreeModel):
    type: Literal["SET_USER"] = "SET_USER"
    user: User | None


class UpdateUser(CommuniTreeModel):
    type: Literal["UPDATE_USER"] = "UPDATE_USER"
    updates: dict[str, Any]


class UpdateTrustPoints(CommuniTreeModel):
    type: Literal["UPDATE_TRUST_POINTS"] = "UPDATE_TRUST_POINTS"
    user_id: str
    delta: int
    reason: TrustPointAction | None = None


class AddEngagementEvent(CommuniTreeModel):
    type: Literal["ADD_ENGAGEMENT_EVENT"] = "ADD_ENGAGEMENT_EVENT"
    event_id: str
    kind: EngagementType
    trust_points_awarded: int = 0
    timestamp: datetime | None = None
    id: str | None = None


class UpdateEngagementHistory(CommuniTreeModel):
    type: Literal["UPDATE_ENGAGEMENT_HISTORY"] = "UPDATE_ENGAGEMENT_HISTORY"
    history: list[UserEvent]


# ---------------------------------------------------------------------------
# Track
# ---------------------------------------------------------------------------
class SwitchTrack(CommuniTreeModel):
    type: Literal["SWITCH_TRACK"] = "SWITCH_TRACK"
    track: TrackType


class SetTheme(CommuniTreeModel):
    type: Literal["SET_THEME"] = "SET_THEME"
    theme: TrackType


# ---------------------------------------------------------------------------
# NGOs
# ---------------------------------------------------------------------------
class SetNGOs(CommuniTreeModel):
    type: Literal["SET_NGOS"] = "SET_NGOS"
    ngos: list[NGO]


class AddNGO(CommuniTreeModel):
    type: Literal["ADD_NGO"] = "ADD_NGO"
    ngo: NGO


class UpdateNGO(CommuniTreeModel):
    type: Literal["UPDATE_NGO"] = "UPDATE_NGO"
    id: str
    updates: dict[str, Any]


class VerifyNGO(CommuniTreeModel):
    type: Literal["VERIFY_NGO"] = "VERIFY_NGO"
    id: str
    darpan_id: str = Field(pattern=DARPAN_ID_PATTERN)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------
class SetEvents(CommuniTreeModel):
    type: Literal["SET_EVENTS"] = "SET_EVENTS"
    events: list[Event]


class AddEvent(CommuniTreeModel):
    type: Literal["ADD_EVENT"] = "ADD_EVENT"
    event: Event


class UpdateEvent(CommuniTreeModel):
    type: Literal["UPDATE_EVENT"] = "UPDATE_EVENT"
    id: str
    updates: dict[str, Any]


class RSVPEvent(CommuniTreeModel):
    type: Literal["RSVP_EVENT"] = "RSVP_EVENT"
    event_id: str
    user_id: str


class CancelRSVP(CommuniTreeModel):
    type: Literal["CANCEL_RSVP"] = "CANCEL_RSVP"
    event_id: str
    user_id: str


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------
class SetChatThreads(CommuniTreeModel):
    type: Literal["SET_CHAT_THREADS"] = "SET_CHAT_THREADS"
    threads: list[ChatThread]


class AddChatThread(CommuniTreeModel):
    type: Literal["ADD_CHAT_THREAD"] = "ADD_CHAT_THREAD"
    thread: ChatThread


class UpdateChatThread(CommuniTreeModel):
    type: Literal["UPDATE_CHAT_THREAD"] = "UPDATE_CHAT_THREAD"
    id: str
    updates: dict[str, Any]


class SendMessage(CommuniTreeModel):
    type: Literal["SEND_MESSAGE"] = "SEND_MESSAGE"
    thread_id: str
    message: Message


class MarkMessagesRead(CommuniTreeModel):
    type: Literal["MARK_MESSAGES_READ"] = "MARK_MESSAGES_READ"
    thread_id: str
    message_ids: list[str]


# ---------------------------------------------------------------------------
# UI
# ---------------------------------------------------------------------------
class SetLoading(CommuniTreeModel):
    type: Literal["SET_LOADING"] = "SET_LOADING"
    is_loading: bool


class ShowModal(CommuniTreeModel):
    type: Literal["SHOW_MODAL"] = "SHOW_MODAL"
    modal: ModalType


class HideModal(CommuniTreeModel):
    type: Literal["HIDE_MODAL"] = "HIDE_MODAL"


class SetViewMode(CommuniTreeModel):
    type: Literal["SET_VIEW_MODE"] = "SET_VIEW_MODE"
    view_mode: ViewMode


class AddNotification(CommuniTreeModel):
    type: Literal["ADD_NOTIFICATION"] = "ADD_NOTIFICATION"
    notification: Notification


class RemoveNotification(CommuniTreeModel):
    type: Literal["REMOVE_NOTIFICATION"] = "REMOVE_NOTIFICATION"
    id: str


class MarkNotificationRead(CommuniTreeModel):
    type: Literal["MARK_NOTIFICATION_READ"] = "MARK_NOTIFICATION_READ"
    id: str


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------
class UpdatePreferences(CommuniTreeModel):
    type: Literal["UPDATE_PREFERENCES"] = "UPDATE_PREFERENCES"
    updates: dict[str, Any]


ACTION_CLASSES: tuple[type[CommuniTreeModel], ...] = (
    SyncWithStorage,
    SetUser,
    UpdateUser,
    UpdateTrustPoints,
    AddEngagementEvent,
    UpdateEngagementHistory,
    SwitchTrack,
    SetTheme,
    SetNGOs,
    AddNGO,
    UpdateNGO,
    VerifyNGO,
    SetEvents,
    AddEvent,
    UpdateEvent,
    RSVPEvent,
    CancelRSVP,
    SetChatThreads,
    AddChatThread,
    UpdateChatThread,
    SendMessage,
    MarkMessagesRead,
    SetLoading,
    ShowModal,
    HideModal,
    SetViewMode,
    AddNotification,
    RemoveNotification,
    MarkNotificationRead,
    UpdatePreferences,
)

ACTION_TAGS: frozenset[str] = frozenset(cls.model_fields["type"].default for cls in ACTION_CLASSES)

Action = Annotated[Union[ACTION_CLASSES], Field(discriminator="type")]  # noqa: UP007

_ACTION_ADAPTER: TypeAdapter[Any] = TypeAdapter(Action)


def parse_action(data: dict[str, Any]) -> Any:
    """Build the matching action model from a raw ``{"type": ..., ...}`` dict.

    Raises :class:`pydantic.ValidationError` for unknown tags or bad payloads.
    """
    return _ACTION_ADAPTER.validate_python(data)
