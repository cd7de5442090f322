"""Search, filter and sort for the NGO and event feeds.

Every feed derives its visible list the same way, in this order:

1. case-insensitive substring search across a fixed set of text fields;
2. categorical equality filter;
3. boolean filters;
4. a stable sort on one of a fixed set of keys, ascending or descending.

The functions are pure and never modify their input, so they are safe to run
on every keystroke.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any, TypeVar

from .models import NGO, Event, utcnow

T = TypeVar("T")

ALL_CATEGORIES = "all"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class NGOSortKey(StrEnum):
    NAME = "name"
    CATEGORY = "category"
    VOLUNTEERS_NEEDED = "volunteers_needed"
    CREATED = "created"


class EventSortKey(StrEnum):
    DATE = "date"
    TITLE = "title"
    CATEGORY = "category"
    ATTENDEES = "attendees"
    SPOTS_LEFT = "spots_left"


def derive_list(
    items: Iterable[T],
    *,
    search: str = "",
    search_fields: Callable[[T], Iterable[str]],
    category: str | None = None,
    category_of: Callable[[T], str] | None = None,
    flags: Sequence[Callable[[T], bool]] = (),
    sort_key: Callable[[T], Any] | None = None,
    direction: SortDirection | str = SortDirection.ASC,
) -> list[T]:
    """Apply search, category filter, boolean filters and sort to ``items``."""
    result = list(items)

    needle = search.strip().casefold()
    if needle:
        result = [
            item for item in result if any(needle in text.casefold() for text in search_fields(item))
        ]

    if category and category != ALL_CATEGORIES and category_of is not None:
        result = [item for item in result if category_of(item) == category]

    for flag in flags:
        result = [item for item in result if flag(item)]

    if sort_key is not None:
        # ``sorted`` is stable in both directions, ties keep input order.
        result = sorted(result, key=sort_key, reverse=SortDirection(direction) is SortDirection.DESC)
    return result


# ---------------------------------------------------------------------------
# NGO feed
# ---------------------------------------------------------------------------
def _ngo_text(ngo: NGO) -> tuple[str, ...]:
    return (ngo.name, ngo.project_title, ngo.description)


_NGO_SORT_KEYS: dict[NGOSortKey, Callable[[NGO], Any]] = {
    NGOSortKey.NAME: lambda ngo: ngo.name.casefold(),
    NGOSortKey.CATEGORY: lambda ngo: str(ngo.category).casefold(),
    NGOSortKey.VOLUNTEERS_NEEDED: lambda ngo: ngo.volunteers_needed - ngo.current_volunteers,
    NGOSortKey.CREATED: lambda ngo: ngo.created_at,
}


@dataclass(frozen=True)
class NGOQuery:
    search: str = ""
    category: str | None = None
    verified_only: bool = False
    needs_volunteers: bool = False
    sort_by: NGOSortKey | str = NGOSortKey.NAME
    direction: SortDirection | str = SortDirection.ASC


def filter_ngos(ngos: Iterable[NGO], query: NGOQuery | None = None) -> list[NGO]:
    query = query or NGOQuery()
    flags: list[Callable[[NGO], bool]] = []
    if query.verified_only:
        flags.append(lambda ngo: ngo.is_verified)
    if query.needs_volunteers:
        flags.append(lambda ngo: ngo.current_volunteers < ngo.volunteers_needed)
    return derive_list(
        ngos,
        search=query.search,
        search_fields=_ngo_text,
        category=query.category,
        category_of=lambda ngo: ngo.category,
        flags=flags,
        sort_key=_NGO_SORT_KEYS[NGOSortKey(query.sort_by)],
        direction=query.direction,
    )


# ---------------------------------------------------------------------------
# Event feed
# ---------------------------------------------------------------------------
def _event_text(event: Event) -> tuple[str, ...]:
    return (event.title, event.description, event.venue.name, event.organizer_name)


_EVENT_SORT_KEYS: dict[EventSortKey, Callable[[Event], Any]] = {
    EventSortKey.DATE: lambda event: event.date_time,
    EventSortKey.TITLE: lambda event: event.title.casefold(),
    EventSortKey.CATEGORY: lambda event: str(event.category).casefold(),
    EventSortKey.ATTENDEES: lambda event: len(event.rsvp_list),
    EventSortKey.SPOTS_LEFT: lambda event: event.spots_left,
}


@dataclass(frozen=True)
class EventQuery:
    search: str = ""
    category: str | None = None
    upcoming_only: bool = False
    with_spots_only: bool = False
    sort_by: EventSortKey | str = EventSortKey.DATE
    direction: SortDirection | str = SortDirection.ASC


def filter_events(
    events: Iterable[Event], query: EventQuery | None = None, *, now: datetime | None = None
) -> list[Event]:
    query = query or EventQuery()
    flags: list[Callable[[Event], bool]] = []
    if query.upcoming_only:
        cutoff = now or utcnow()
        flags.append(lambda event: event.date_time > cutoff)
    if query.with_spots_only:
        flags.append(lambda event: event.spots_left > 0)
    return derive_list(
        events,
        search=query.search,
        search_fields=_event_text,
        category=query.category,
        category_of=lambda event: event.category,
        flags=flags,
        sort_key=_EVENT_SORT_KEYS[EventSortKey(query.sort_by)],
        direction=query.direction,
    )


def toggle_sort(
    current_key: str, current_direction: SortDirection | str, new_key: str
) -> tuple[str, SortDirection]:
    """Selecting the active key flips direction; a new key starts ascending."""
    if new_key == current_key:
        flipped = SortDirection.DESC if SortDirection(current_direction) is SortDirection.ASC else SortDirection.ASC
        return new_key, flipped
    return new_key, SortDirection.ASC
