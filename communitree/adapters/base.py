"""Base interfaces for the external services the controllers talk to."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.models import RSVP


class RSVPService(ABC):
    """Backend that stores RSVP records."""

    @abstractmethod
    async def create_rsvp(self, event_id: str, user_id: str) -> RSVP:
        """Create a confirmed RSVP and return the stored record."""

    @abstractmethod
    async def cancel_rsvp(self, event_id: str, user_id: str) -> None:
        """Mark the confirmed RSVP of ``user_id`` for ``event_id`` as cancelled."""

    @abstractmethod
    async def get_user_rsvps(self, user_id: str) -> list[RSVP]:
        """Return every RSVP of ``user_id``, newest first."""


class VerificationService(ABC):
    """Backend that checks an NGO's Darpan ID."""

    @abstractmethod
    async def verify_ngo(self, ngo_id: str, darpan_id: str) -> bool:
        """Return ``True`` when ``darpan_id`` is confirmed for ``ngo_id``."""
