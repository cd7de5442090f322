"""Core package for CommuniTree.

This module exposes the store, the main data models and the composition
root so that consumers of the package can simply import them from
``communitree``.
"""

from .app import App, create_app
from .core.models import NGO, RSVP, AppState, Event, User, Venue
from .data.actions import parse_action
from .data.reducer import reduce
from .data.store import AppStore

__all__ = [
    "App",
    "AppState",
    "AppStore",
    "Event",
    "NGO",
    "RSVP",
    "User",
    "Venue",
    "create_app",
    "parse_action",
    "reduce",
]
