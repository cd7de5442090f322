"""Data models for CommuniTree's core entities.

The models are implemented using :mod:`pydantic` so that they provide
runtime validation and convenient serialisation to and from JSON. All of
them are frozen: the only way to change application state is to dispatch an
action through :class:`~communitree.data.store.AppStore`, whose reducer
builds new model instances with ``model_copy``.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from .enums import (
    ChatContextType,
    EngagementType,
    EventCategory,
    MessageType,
    ModalType,
    NGOCategory,
    NotificationType,
    RSVPStatus,
    TrackType,
    VenueRating,
    VerificationStatus,
    ViewMode,
)
from .trust import INITIAL_POINTS, MAX_POINTS, MIN_POINTS
from .venues import rate_venue_type

DARPAN_ID_PATTERN = r"^\d{5}$"


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


class CommuniTreeModel(BaseModel):
    """Base class for every immutable domain model."""

    model_config = ConfigDict(frozen=True)


class UserEvent(CommuniTreeModel):
    """One entry of a user's engagement history."""

    id: str = Field(default_factory=new_id)
    event_id: str
    type: EngagementType
    timestamp: datetime = Field(default_factory=utcnow)
    trust_points_awarded: int = 0


class User(CommuniTreeModel):
    """Represents an individual participating in CommuniTree.

    Attributes
    ----------
    id:
        Internal unique identifier. Defaults to a random UUID4 string.
    trust_points:
        Reputation score, always within ``[0, 100]``. It only changes through
        the ``UPDATE_TRUST_POINTS`` action.
    event_history:
        Append-only engagement records, each carrying a signed point delta.
    chat_history:
        Identifiers of the chat threads the user takes part in.

    """

    id: str = Field(default_factory=new_id)
    name: str
    email: str
    trust_points: int = Field(default=INITIAL_POINTS, ge=MIN_POINTS, le=MAX_POINTS)
    verification_status: VerificationStatus = VerificationStatus.PENDING
    event_history: list[UserEvent] = Field(default_factory=list)
    chat_history: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class ContactInfo(CommuniTreeModel):
    email: str
    phone: str | None = None
    website: str | None = None
    address: str | None = None


class NGO(CommuniTreeModel):
    """A non-governmental organisation looking for volunteers.

    A verified NGO always carries its 5-digit Darpan ID.
    """

    id: str = Field(default_factory=new_id)
    name: str
    project_title: str
    description: str = ""
    category: NGOCategory
    contact_info: ContactInfo
    darpan_id: str | None = Field(default=None, pattern=DARPAN_ID_PATTERN)
    is_verified: bool = False
    volunteers_needed: int = Field(default=0, ge=0)
    current_volunteers: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def _verified_requires_darpan_id(self) -> NGO:
        if self.is_verified and not self.darpan_id:
            raise ValueError("a verified NGO must carry a Darpan ID")
        return self

    @property
    def open_positions(self) -> int:
        return max(0, self.volunteers_needed - self.current_volunteers)


class Venue(CommuniTreeModel):
    """Where an event takes place.

    ``safety_rating`` is computed from ``type`` and cannot be set directly;
    a stored rating is ignored when a venue is loaded.
    """

    id: str = Field(default_factory=new_id)
    name: str
    address: str = ""
    type: str
    coordinates: tuple[float, float] = (0.0, 0.0)
    description: str | None = None
    amenities: list[str] = Field(default_factory=list)
    capacity: int | None = Field(default=None, gt=0)
    accessibility_features: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def safety_rating(self) -> VenueRating:
        return rate_venue_type(self.type)


class Event(CommuniTreeModel):
    id: str = Field(default_factory=new_id)
    title: str
    description: str = ""
    category: EventCategory
    venue: Venue
    organizer_id: str
    organizer_name: str = ""
    rsvp_list: list[str] = Field(default_factory=list)
    max_attendees: int = Field(gt=0)
    date_time: datetime
    duration: int = Field(default=60, gt=0)  # minutes
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def spots_left(self) -> int:
        return self.max_attendees - len(self.rsvp_list)


class Message(CommuniTreeModel):
    id: str = Field(default_factory=new_id)
    sender_id: str
    content: str
    timestamp: datetime = Field(default_factory=utcnow)
    type: MessageType = MessageType.TEXT
    is_read: bool = False


class ChatContext(CommuniTreeModel):
    """Tagged reference to the NGO or event a thread is about."""

    type: ChatContextType
    reference_id: str
    title: str
    description: str | None = None


class ChatThread(CommuniTreeModel):
    id: str = Field(default_factory=new_id)
    participants: list[str] = Field(default_factory=list)  # user ids
    context: ChatContext
    messages: list[Message] = Field(default_factory=list)
    last_activity: datetime = Field(default_factory=utcnow)
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class RSVP(CommuniTreeModel):
    """Intent-to-attend record for an ``(event_id, user_id)`` pair."""

    id: str = Field(default_factory=new_id)
    event_id: str
    user_id: str
    status: RSVPStatus = RSVPStatus.CONFIRMED
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Notification(CommuniTreeModel):
    id: str = Field(default_factory=new_id)
    type: NotificationType
    title: str
    message: str
    timestamp: datetime = Field(default_factory=utcnow)
    is_read: bool = False
    action_url: str | None = None


class UIState(CommuniTreeModel):
    is_loading: bool = False
    active_modal: ModalType | None = None
    notifications: list[Notification] = Field(default_factory=list)
    theme: TrackType = TrackType.IMPACT
    view_mode: ViewMode = ViewMode.GRID


class UserPreferences(CommuniTreeModel):
    last_selected_track: TrackType = TrackType.IMPACT
    notifications_enabled: bool = True
    preferred_categories: list[str] = Field(default_factory=list)
    location_permission: bool = False


class AppState(CommuniTreeModel):
    """The whole application state owned by the store."""

    user: User | None = None
    current_track: TrackType = TrackType.IMPACT
    ngos: list[NGO] = Field(default_factory=list)
    events: list[Event] = Field(default_factory=list)
    chat_threads: list[ChatThread] = Field(default_factory=list)
    ui: UIState = Field(default_factory=UIState)
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    available_users: list[User] = Field(default_factory=list)


def initial_state(track: TrackType = TrackType.IMPACT) -> AppState:
    """Return the state of a fresh session: no user, empty collections."""
    return AppState(
        current_track=track,
        ui=UIState(theme=track),
        preferences=UserPreferences(last_selected_track=track),
    )
