"""Venue safety classification.

The safety rating of a venue is derived data: it is a total function of the
venue ``type`` and is recomputed every time it is read. Unrecognised types
fall back to the most cautious rating.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .enums import VenueRating, VenueType

if TYPE_CHECKING:
    from .models import Venue

_RATINGS: dict[str, VenueRating] = {
    VenueType.PUBLIC: VenueRating.GREEN,
    VenueType.COMMERCIAL: VenueRating.YELLOW,
    VenueType.PRIVATE: VenueRating.RED,
}

_BADGES: dict[str, str] = {
    VenueRating.GREEN: "Safe Venue",
    VenueRating.YELLOW: "Moderate Risk",
    VenueRating.RED: "High Caution",
}

_RATING_DESCRIPTIONS: dict[str, str] = {
    VenueRating.GREEN: "Safe - Public venue with good security",
    VenueRating.YELLOW: "Moderate - Commercial venue, exercise normal caution",
    VenueRating.RED: "Caution - Private venue, meet with care",
}

_TYPE_DESCRIPTIONS: dict[str, str] = {
    VenueType.PUBLIC: "Public venue (parks, libraries, community centers)",
    VenueType.COMMERCIAL: "Commercial venue (cafes, studios, restaurants)",
    VenueType.PRIVATE: "Private venue (homes, private properties)",
}


def rate_venue_type(venue_type: str) -> VenueRating:
    """Return the safety rating for ``venue_type``."""
    return _RATINGS.get(venue_type, VenueRating.RED)


def rate_venue(venue: Venue) -> VenueRating:
    return rate_venue_type(venue.type)


def venue_rating_badge(rating: str) -> str:
    """Badge text shown on event cards for ``rating``."""
    return _BADGES.get(rating, "Unknown")


def venue_rating_description(rating: str) -> str:
    return _RATING_DESCRIPTIONS.get(rating, "Unknown safety level")


def venue_type_description(venue_type: str) -> str:
    return _TYPE_DESCRIPTIONS.get(venue_type, "Unknown venue type")


def is_venue_safe(rating: str) -> bool:
    """Green and yellow venues are considered safe for events."""
    return rating in (VenueRating.GREEN, VenueRating.YELLOW)


def with_venue_type(venue: Venue, venue_type: str) -> Venue:
    """Return a copy of ``venue`` with a new type.

    The rating follows automatically because ``Venue.safety_rating`` is
    computed from the type on every access.
    """
    return venue.model_copy(update={"type": venue_type})
