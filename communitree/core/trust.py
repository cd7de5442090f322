"""Trust-point economy.

Trust points are an integer reputation score in ``[MIN_POINTS, MAX_POINTS]``.
Named actions map to fixed deltas and every accumulation is clamped. The
thresholds and the tier table below are constants, not configuration.
"""

from __future__ import annotations

from dataclasses import dataclass

from .enums import TrustPointAction, TrustTier

TRUST_POINT_VALUES: dict[TrustPointAction, int] = {
    TrustPointAction.ORGANIZE_EVENT: 20,
    TrustPointAction.ATTEND_EVENT: 5,
    TrustPointAction.NO_SHOW: -10,
    TrustPointAction.VERIFY_IDENTITY: 10,
    TrustPointAction.REPORT_VIOLATION: -5,
    TrustPointAction.VOLUNTEER_ACTIVITY: 15,
    TrustPointAction.COMMUNITY_CONTRIBUTION: 10,
}

MIN_POINTS = 0
MAX_POINTS = 100
INITIAL_POINTS = 50
RSVP_THRESHOLD = 20
WARNING_THRESHOLD = 30
CRITICAL_THRESHOLD = 10

# Lower bound of each tier, highest first.
_TIERS: tuple[tuple[int, TrustTier], ...] = (
    (90, TrustTier.ELITE),
    (70, TrustTier.HIGH),
    (50, TrustTier.SILVER),
    (20, TrustTier.BRONZE),
)


def clamp_points(points: int) -> int:
    return max(MIN_POINTS, min(MAX_POINTS, points))


def apply_delta(points: int, delta: int) -> int:
    """Return ``points + delta`` clamped to the valid range."""
    return clamp_points(points + delta)


def get_trust_point_delta(action: TrustPointAction | str) -> int:
    return TRUST_POINT_VALUES[TrustPointAction(action)]


def calculate_trust_points(points: int, action: TrustPointAction | str) -> int:
    """Return the trust points after ``action`` is applied to ``points``."""
    return apply_delta(points, get_trust_point_delta(action))


def get_trust_tier(points: int) -> TrustTier:
    for lower, tier in _TIERS:
        if points >= lower:
            return tier
    return TrustTier.NEW


def has_sufficient_trust_points(points: int, required: int = RSVP_THRESHOLD) -> bool:
    """RSVP eligibility check. ``required`` defaults to the RSVP threshold."""
    return points >= required


def should_show_rsvp_warning(points: int) -> bool:
    """True once a user is close to (or below) the RSVP threshold."""
    return points < WARNING_THRESHOLD


def rsvp_warning_message(points: int) -> str | None:
    if not should_show_rsvp_warning(points):
        return None
    if not has_sufficient_trust_points(points):
        return (
            f"You need at least {RSVP_THRESHOLD} trust points to RSVP "
            f"(current: {points}/{MAX_POINTS})."
        )
    return (
        f"Your trust points are low ({points}/{MAX_POINTS}). "
        "Missing events will further reduce your points."
    )


@dataclass(frozen=True)
class TrustStatus:
    points: int
    tier: TrustTier
    is_low: bool
    is_critical: bool
    percentage: float
    points_to_safe: int
    points_to_max: int


def trust_status(points: int) -> TrustStatus:
    return TrustStatus(
        points=points,
        tier=get_trust_tier(points),
        is_low=should_show_rsvp_warning(points),
        is_critical=points <= CRITICAL_THRESHOLD,
        percentage=points / MAX_POINTS * 100,
        points_to_safe=max(0, WARNING_THRESHOLD - points),
        points_to_max=MAX_POINTS - points,
    )


def recommendations(points: int) -> list[str]:
    """Suggest how a user below the RSVP threshold can earn points back."""
    if has_sufficient_trust_points(points):
        return []
    needed = RSVP_THRESHOLD - points
    if needed <= 5:
        return ["Attend one event to reach safe level"]
    if needed <= 15:
        return ["Volunteer with an NGO or attend 2-3 events"]
    return ["Organize an event or complete multiple volunteer activities"]


@dataclass(frozen=True)
class ActionInfo:
    action: TrustPointAction
    name: str
    description: str
    points: int
    category: str


_CATALOGUE: tuple[tuple[TrustPointAction, str, str, str], ...] = (
    (TrustPointAction.ATTEND_EVENT, "Attend Event", "Show up to events you RSVP to", "participation"),
    (TrustPointAction.ORGANIZE_EVENT, "Organize Event", "Host community events", "leadership"),
    (TrustPointAction.VOLUNTEER_ACTIVITY, "Volunteer Work", "Participate in NGO activities", "service"),
    (TrustPointAction.VERIFY_IDENTITY, "Verify Identity", "Complete identity verification", "verification"),
    (
        TrustPointAction.COMMUNITY_CONTRIBUTION,
        "Community Contribution",
        "Make positive community contributions",
        "contribution",
    ),
    (TrustPointAction.NO_SHOW, "No Show", "Not attending events you RSVP to", "violation"),
    (TrustPointAction.REPORT_VIOLATION, "Community Violation", "Violating community guidelines", "violation"),
)


def _catalogue() -> list[ActionInfo]:
    return [
        ActionInfo(action, name, description, TRUST_POINT_VALUES[action], category)
        for action, name, description, category in _CATALOGUE
    ]


def positive_actions() -> list[ActionInfo]:
    return [info for info in _catalogue() if info.points > 0]


def negative_actions() -> list[ActionInfo]:
    return [info for info in _catalogue() if info.points < 0]
