"""RSVP lifecycle: optimistic create and cancel against an :class:`RSVPService`."""

from __future__ import annotations

import logging
import uuid

from ..adapters.base import RSVPService
from ..core.enums import RSVPStatus
from ..core.errors import AuthenticationRequired, RSVPNotFound, user_message
from ..core.models import RSVP, User
from ..data.actions import CancelRSVP, RSVPEvent
from ..data.store import AppStore
from .optimistic import with_optimistic_update

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "temp-"


class RSVPController:
    """Keeps the signed-in user's RSVP records in sync with the service.

    Records move ``confirmed -> cancelled``; a cancelled record is never
    revived, a new RSVP creates a new record. The store only learns about a
    change once the service has confirmed it.
    """

    def __init__(self, store: AppStore, service: RSVPService) -> None:
        self.store = store
        self.service = service
        self.rsvps: list[RSVP] = []
        self.error: str | None = None

    def _current_user(self) -> User:
        user = self.store.state.user
        if user is None:
            raise AuthenticationRequired("User must be authenticated to RSVP")
        return user

    def _replace(self, record_id: str, record: RSVP) -> None:
        self.rsvps = [record if r.id == record_id else r for r in self.rsvps]

    def _confirmed(self, event_id: str) -> RSVP | None:
        for record in self.rsvps:
            if record.event_id == event_id and record.status == RSVPStatus.CONFIRMED:
                return record
        return None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_rsvpd(self, event_id: str) -> bool:
        return self._confirmed(event_id) is not None

    def rsvp_for(self, event_id: str) -> RSVP | None:
        """Return the confirmed record for ``event_id``, if any."""
        return self._confirmed(event_id)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    async def load(self) -> list[RSVP]:
        """Fetch the user's RSVPs from the service, replacing local records."""
        user = self.store.state.user
        if user is None:
            self.rsvps = []
            return self.rsvps
        self.error = None
        try:
            self.rsvps = await self.service.get_user_rsvps(user.id)
        except Exception as exc:
            self.error = user_message(exc)
            raise
        return self.rsvps

    async def create_rsvp(self, event_id: str) -> RSVP:
        user = self._current_user()
        existing = self._confirmed(event_id)
        # In-flight temp records are not checked; concurrent creates both reach the service.
        if existing is not None and not existing.id.startswith(TEMP_ID_PREFIX):
            return existing
        self.error = None
        now = self.store.clock()
        temp = RSVP(
            id=f"{TEMP_ID_PREFIX}{uuid.uuid4()}",
            event_id=event_id,
            user_id=user.id,
            status=RSVPStatus.CONFIRMED,
            created_at=now,
            updated_at=now,
        )

        def apply() -> RSVP:
            self.rsvps = [temp, *self.rsvps]
            return temp

        def commit(created: RSVP) -> None:
            self._replace(temp.id, created)
            self.store.dispatch(RSVPEvent(event_id=event_id, user_id=user.id))

        def rollback(snapshot: RSVP) -> None:
            self.rsvps = [r for r in self.rsvps if r.id != snapshot.id]

        try:
            created = await with_optimistic_update(
                apply,
                lambda: self.service.create_rsvp(event_id, user.id),
                commit,
                rollback,
            )
        except Exception as exc:
            self.error = user_message(exc)
            raise
        logger.info("User %s RSVP'd to event %s", user.id, event_id)
        return created

    async def cancel_rsvp(self, event_id: str) -> None:
        user = self._current_user()
        existing = self._confirmed(event_id)
        if existing is None:
            raise RSVPNotFound(f"No confirmed RSVP for event {event_id}")
        self.error = None

        def apply() -> RSVP:
            cancelled = existing.model_copy(
                update={"status": RSVPStatus.CANCELLED, "updated_at": self.store.clock()}
            )
            self._replace(existing.id, cancelled)
            return existing

        def commit(_: None) -> None:
            self.store.dispatch(CancelRSVP(event_id=event_id, user_id=user.id))

        def rollback(snapshot: RSVP) -> None:
            self._replace(snapshot.id, snapshot)

        try:
            await with_optimistic_update(
                apply,
                lambda: self.service.cancel_rsvp(event_id, user.id),
                commit,
                rollback,
            )
        except Exception as exc:
            self.error = user_message(exc)
            raise
        logger.info("User %s cancelled RSVP for event %s", user.id, event_id)

    def clear_error(self) -> None:
        self.error = None
