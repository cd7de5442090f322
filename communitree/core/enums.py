"""Enumerations shared by the CommuniTree models and rule functions."""

from __future__ import annotations

from enum import StrEnum


class TrackType(StrEnum):
    IMPACT = "impact"  # NGO volunteering
    GROW = "grow"  # social events


class ViewMode(StrEnum):
    GRID = "grid"
    LIST = "list"


class ModalType(StrEnum):
    VERIFICATION = "verification"
    CHAT = "chat"
    RSVP = "rsvp"
    PROFILE = "profile"
    TRUST_WARNING = "trust-warning"
    LOGIN = "login"
    SIGNUP = "signup"
    EVENT = "event"
    NGO = "ngo"


class NotificationType(StrEnum):
    TRUST_POINTS = "trust-points"
    EVENT_REMINDER = "event-reminder"
    CHAT_MESSAGE = "chat-message"
    CHAT = "chat"
    VERIFICATION = "verification"
    SYSTEM = "system"
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class VerificationStatus(StrEnum):
    PENDING = "pending"
    VERIFIED = "verified"


class VenueType(StrEnum):
    PUBLIC = "public"  # parks, libraries, community centers
    COMMERCIAL = "commercial"  # cafes, studios, restaurants
    PRIVATE = "private"  # homes, unlisted venues


class VenueRating(StrEnum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class NGOCategory(StrEnum):
    EDUCATION = "Education"
    HEALTHCARE = "Healthcare"
    ENVIRONMENT = "Environment"
    ANIMAL_WELFARE = "Animal Welfare"
    COMMUNITY_DEVELOPMENT = "Community Development"
    DISASTER_RELIEF = "Disaster Relief"
    WOMEN_EMPOWERMENT = "Women Empowerment"
    CHILD_WELFARE = "Child Welfare"


class EventCategory(StrEnum):
    POETRY = "Poetry"
    ART = "Art"
    FITNESS = "Fitness"
    READING = "Reading"
    MUSIC = "Music"
    DANCE = "Dance"
    COOKING = "Cooking"
    TECHNOLOGY = "Technology"
    PHOTOGRAPHY = "Photography"
    GARDENING = "Gardening"


class EngagementType(StrEnum):
    ORGANIZED = "organized"
    ATTENDED = "attended"
    RSVP = "rsvp"
    NO_SHOW = "no_show"


class MessageType(StrEnum):
    TEXT = "text"
    SYSTEM = "system"
    NOTIFICATION = "notification"


class ChatContextType(StrEnum):
    NGO = "ngo"
    EVENT = "event"


class RSVPStatus(StrEnum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class TrustPointAction(StrEnum):
    ORGANIZE_EVENT = "ORGANIZE_EVENT"
    ATTEND_EVENT = "ATTEND_EVENT"
    NO_SHOW = "NO_SHOW"
    VERIFY_IDENTITY = "VERIFY_IDENTITY"
    REPORT_VIOLATION = "REPORT_VIOLATION"
    VOLUNTEER_ACTIVITY = "VOLUNTEER_ACTIVITY"
    COMMUNITY_CONTRIBUTION = "COMMUNITY_CONTRIBUTION"


class TrustTier(StrEnum):
    NEW = "New"
    BRONZE = "Bronze"
    SILVER = "Silver"
    HIGH = "High"
    ELITE = "Elite"
