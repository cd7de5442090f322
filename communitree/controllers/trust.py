"""Trust point awards and the read-only trust views of the signed-in user."""

from __future__ import annotations

import logging

from ..core.enums import EngagementType, TrustPointAction, TrustTier
from ..core.errors import AuthenticationRequired
from ..core.models import User
from ..core.trust import (
    INITIAL_POINTS,
    TrustStatus,
    calculate_trust_points,
    get_trust_point_delta,
    get_trust_tier,
    has_sufficient_trust_points,
    recommendations,
    rsvp_warning_message,
    trust_status,
)
from ..data.actions import AddEngagementEvent, UpdateTrustPoints
from ..data.store import AppStore

logger = logging.getLogger(__name__)

_ENGAGEMENT_FOR_ACTION = {
    TrustPointAction.ORGANIZE_EVENT: EngagementType.ORGANIZED,
    TrustPointAction.ATTEND_EVENT: EngagementType.ATTENDED,
    TrustPointAction.NO_SHOW: EngagementType.NO_SHOW,
}


class TrustPointsController:
    def __init__(self, store: AppStore) -> None:
        self.store = store

    def _user(self) -> User:
        user = self.store.state.user
        if user is None:
            raise AuthenticationRequired("User must be authenticated to change trust points")
        return user

    @property
    def current_points(self) -> int:
        user = self.store.state.user
        return user.trust_points if user is not None else INITIAL_POINTS

    @property
    def trust_tier(self) -> TrustTier:
        return get_trust_tier(self.current_points)

    @property
    def can_rsvp(self) -> bool:
        return has_sufficient_trust_points(self.current_points)

    @property
    def rsvp_warning(self) -> str | None:
        return rsvp_warning_message(self.current_points)

    def status(self) -> TrustStatus:
        return trust_status(self.current_points)

    def recommendations(self) -> list[str]:
        return recommendations(self.current_points)

    def points_after(self, action: TrustPointAction | str) -> int:
        """Preview the balance after ``action`` without changing anything."""
        return calculate_trust_points(self.current_points, action)

    def award_points(self, action: TrustPointAction | str, event_id: str | None = None) -> int:
        """Apply the delta for ``action`` and return the new balance.

        When ``event_id`` is given and the action concerns an event, the
        change is also recorded in the user's engagement history.
        """
        user = self._user()
        action = TrustPointAction(action)
        delta = get_trust_point_delta(action)
        self.store.dispatch(UpdateTrustPoints(user_id=user.id, delta=delta, reason=action))
        kind = _ENGAGEMENT_FOR_ACTION.get(action)
        if event_id is not None and kind is not None:
            self.store.dispatch(
                AddEngagementEvent(
                    event_id=event_id,
                    kind=kind,
                    trust_points_awarded=delta,
                    timestamp=self.store.clock(),
                )
            )
        logger.info("User %s: %s (%+d) -> %d points", user.id, action, delta, self.current_points)
        return self.current_points

    def mark_attendance(self, event_id: str, attended: bool) -> int:
        action = TrustPointAction.ATTEND_EVENT if attended else TrustPointAction.NO_SHOW
        return self.award_points(action, event_id)
