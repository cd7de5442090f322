"""The application store: single owner of all mutable domain state."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..core.enums import NotificationType
from ..core.models import AppState, Notification, initial_state, utcnow
from .actions import AddNotification, SyncWithStorage
from .reducer import reduce
from .storage import StateStorage

logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]

# Transitions saved right away so they survive a restart.
PERSISTED_ACTIONS = frozenset({"UPDATE_TRUST_POINTS", "VERIFY_NGO", "RSVP_EVENT", "CANCEL_RSVP"})


class AppStore:
    """Holds the current :class:`AppState` and routes every change through the reducer.

    ``dispatch`` is the only entry point that changes state. The store is
    created once by :func:`communitree.app.create_app` and handed to the
    controllers that need it.
    """

    def __init__(
        self,
        state: AppState | None = None,
        storage: StateStorage | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._state = state if state is not None else initial_state()
        self.storage = storage
        self.clock = clock
        self._listeners: list[Listener] = []

    @property
    def state(self) -> AppState:
        return self._state

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def dispatch(self, action) -> AppState:
        """Reduce ``action`` into the current state and notify listeners.

        Listeners are only called when the state object actually changed.
        """
        previous = self._state
        new_state = reduce(previous, action, now=self.clock())
        if new_state is previous:
            return previous

        self._state = new_state
        if action.type in PERSISTED_ACTIONS:
            self.save()
        for listener in list(self._listeners):
            listener(new_state)
        return new_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Persistence helpers
    # ------------------------------------------------------------------
    def hydrate(self) -> bool:
        """Replace the state with the stored snapshot, if there is one."""
        if self.storage is None:
            return False
        loaded = self.storage.load()
        if loaded is None:
            return False
        self.dispatch(SyncWithStorage(state=loaded))
        logger.info(
            "Loaded state: %d NGOs, %d events, %d chat threads",
            len(loaded.ngos),
            len(loaded.events),
            len(loaded.chat_threads),
        )
        return True

    def save(self) -> None:
        if self.storage is None:
            return
        try:
            self.storage.save(self._state)
        except OSError:
            # In-memory state stays authoritative; the next save retries.
            logger.exception("Failed to persist application state")

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------
    def notify(
        self,
        type: NotificationType | str,
        title: str,
        message: str,
        *,
        action_url: str | None = None,
    ) -> Notification:
        """Create a notification and add it to the UI state."""
        notification = Notification(
            type=NotificationType(type),
            title=title,
            message=message,
            timestamp=self.clock(),
            action_url=action_url,
        )
        self.dispatch(AddNotification(notification=notification))
        return notification
