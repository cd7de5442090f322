"""Derived views over :class:`~communitree.core.models.AppState`.

Nothing here is cached; callers re-run selectors against each new state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .enums import EngagementType
from .models import NGO, AppState, Event, Notification, User, utcnow


def find_ngo(state: AppState, ngo_id: str) -> NGO | None:
    return next((ngo for ngo in state.ngos if ngo.id == ngo_id), None)


def find_event(state: AppState, event_id: str) -> Event | None:
    return next((event for event in state.events if event.id == event_id), None)


def verified_ngos(state: AppState) -> list[NGO]:
    return [ngo for ngo in state.ngos if ngo.is_verified]


def unverified_ngos(state: AppState) -> list[NGO]:
    return [ngo for ngo in state.ngos if not ngo.is_verified]


def ngos_by_category(state: AppState, category: str) -> list[NGO]:
    return [ngo for ngo in state.ngos if ngo.category == category]


def ngos_by_volunteer_need(state: AppState) -> list[NGO]:
    """NGOs still short of volunteers, largest shortfall first."""
    needing = [ngo for ngo in state.ngos if ngo.current_volunteers < ngo.volunteers_needed]
    return sorted(needing, key=lambda ngo: ngo.open_positions, reverse=True)


def upcoming_events(state: AppState, *, now: datetime | None = None) -> list[Event]:
    cutoff = now or utcnow()
    upcoming = [event for event in state.events if event.is_active and event.date_time > cutoff]
    return sorted(upcoming, key=lambda event: event.date_time)


def user_rsvp_events(state: AppState) -> list[Event]:
    if state.user is None:
        return []
    return [event for event in state.events if state.user.id in event.rsvp_list]


def user_organized_events(state: AppState) -> list[Event]:
    if state.user is None:
        return []
    return [event for event in state.events if event.organizer_id == state.user.id]


def events_with_spots(state: AppState) -> list[Event]:
    return [event for event in state.events if len(event.rsvp_list) < event.max_attendees]


def events_by_safety_rating(state: AppState, rating: str) -> list[Event]:
    return [event for event in state.events if event.venue.safety_rating == rating]


def has_user_rsvpd(state: AppState, event_id: str) -> bool:
    if state.user is None:
        return False
    event = find_event(state, event_id)
    return event is not None and state.user.id in event.rsvp_list


def unread_notifications(state: AppState) -> list[Notification]:
    return [n for n in state.ui.notifications if not n.is_read]


@dataclass(frozen=True)
class ImpactMetrics:
    total_events: int = 0
    events_organized: int = 0
    events_attended: int = 0
    no_shows: int = 0
    total_trust_points_earned: int = 0
    total_trust_points_lost: int = 0
    attendance_rate: float = 100.0
    reliability_score: str = "Excellent"
    community_contributions: int = 0


def community_impact_metrics(user: User | None) -> ImpactMetrics:
    """Summarise a user's engagement history for the profile page."""
    if user is None:
        return ImpactMetrics()

    history = user.event_history
    organized = sum(1 for e in history if e.type == EngagementType.ORGANIZED)
    attended = sum(1 for e in history if e.type == EngagementType.ATTENDED)
    rsvps = sum(1 for e in history if e.type == EngagementType.RSVP)
    no_shows = sum(1 for e in history if e.type == EngagementType.NO_SHOW)

    if no_shows == 0:
        reliability = "Excellent"
    elif no_shows <= 2:
        reliability = "Good"
    else:
        reliability = "Needs Improvement"

    return ImpactMetrics(
        total_events=len(history),
        events_organized=organized,
        events_attended=attended,
        no_shows=no_shows,
        total_trust_points_earned=sum(max(0, e.trust_points_awarded) for e in history),
        total_trust_points_lost=abs(sum(min(0, e.trust_points_awarded) for e in history)),
        attendance_rate=attended / rsvps * 100 if rsvps else 100.0,
        reliability_score=reliability,
        community_contributions=sum(
            1
            for e in history
            if e.trust_points_awarded > 0
            and e.type in (EngagementType.ORGANIZED, EngagementType.ATTENDED)
        ),
    )
