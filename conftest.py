"""Test configuration for ensuring package imports and shared fixtures."""

import os
import sys
from datetime import UTC, datetime, timedelta

import pytest

# Add the repository root (the directory containing this file) to ``sys.path``
# if it is not already present.  This mirrors the behaviour of running the
# tests via ``python -m pytest`` where the working directory is automatically on
# the import path.
ROOT_DIR = os.path.abspath(os.path.dirname(__file__))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from communitree.adapters.base import RSVPService, VerificationService  # noqa: E402
from communitree.core.models import (  # noqa: E402
    NGO,
    RSVP,
    AppState,
    ContactInfo,
    Event,
    User,
    Venue,
)
from communitree.data.storage import MemoryStateStorage  # noqa: E402
from communitree.data.store import AppStore  # noqa: E402

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def user() -> User:
    return User(id="u1", name="Asha", email="asha@example.org", trust_points=75)


@pytest.fixture
def ngos() -> list[NGO]:
    return [
        NGO(
            id="n1",
            name="Green Roots",
            project_title="Tree Plantation Drive",
            description="Planting native saplings across the city.",
            category="Environment",
            contact_info=ContactInfo(email="hello@greenroots.org"),
            volunteers_needed=20,
            current_volunteers=5,
            created_at=NOW - timedelta(days=3),
        ),
        NGO(
            id="n2",
            name="Read Together",
            project_title="Weekend Literacy Classes",
            description="Teaching adults to read.",
            category="Education",
            contact_info=ContactInfo(email="team@readtogether.org"),
            darpan_id="12345",
            is_verified=True,
            volunteers_needed=10,
            current_volunteers=10,
            created_at=NOW - timedelta(days=10),
        ),
        NGO(
            id="n3",
            name="Paws Shelter",
            project_title="Animal Rescue",
            description="Caring for stray animals.",
            category="Animal Welfare",
            contact_info=ContactInfo(email="care@paws.org"),
            volunteers_needed=8,
            current_volunteers=2,
            created_at=NOW - timedelta(days=1),
        ),
    ]


@pytest.fixture
def events() -> list[Event]:
    return [
        Event(
            id="e1",
            title="Poetry Night",
            description="Open mic for new poets.",
            category="Poetry",
            venue=Venue(id="v1", name="City Library", type="public"),
            organizer_id="u2",
            organizer_name="Ravi",
            rsvp_list=["u3"],
            max_attendees=10,
            date_time=NOW + timedelta(days=2),
        ),
        Event(
            id="e2",
            title="Sunrise Yoga",
            description="Morning stretch in the park.",
            category="Fitness",
            venue=Venue(id="v2", name="Brew Cafe", type="commercial"),
            organizer_id="u1",
            organizer_name="Asha",
            rsvp_list=["u2", "u3"],
            max_attendees=2,
            date_time=NOW + timedelta(days=1),
        ),
        Event(
            id="e3",
            title="Home Cooking Class",
            description="Learn to cook dal.",
            category="Cooking",
            venue=Venue(id="v3", name="Meera's Kitchen", type="private"),
            organizer_id="u3",
            organizer_name="Meera",
            max_attendees=6,
            date_time=NOW - timedelta(days=1),
        ),
    ]


@pytest.fixture
def state(user, ngos, events) -> AppState:
    return AppState(user=user, ngos=ngos, events=events)


@pytest.fixture
def storage() -> MemoryStateStorage:
    return MemoryStateStorage()


@pytest.fixture
def store(state, storage) -> AppStore:
    return AppStore(state=state, storage=storage, clock=lambda: NOW)


class FakeRSVPService(RSVPService):
    """In-memory RSVP backend that can be told to fail."""

    def __init__(self) -> None:
        self.fail_with: Exception | None = None
        self.calls: list[tuple[str, str, str]] = []
        self.records: list[RSVP] = []
        # snapshots of ``watch.rsvps`` taken while a request is in flight
        self.seen_during_request: list[list[RSVP]] = []
        self.watch = None

    def _observe(self, *call: str) -> None:
        self.calls.append(call)
        if self.watch is not None:
            self.seen_during_request.append(list(self.watch.rsvps))
        if self.fail_with:
            raise self.fail_with

    async def create_rsvp(self, event_id, user_id):
        self._observe("create", event_id, user_id)
        record = RSVP(id=f"srv-{len(self.calls)}", event_id=event_id, user_id=user_id)
        self.records.append(record)
        return record

    async def cancel_rsvp(self, event_id, user_id):
        self._observe("cancel", event_id, user_id)

    async def get_user_rsvps(self, user_id):
        if self.fail_with:
            raise self.fail_with
        return list(self.records)


class FakeVerificationService(VerificationService):
    def __init__(self) -> None:
        self.result = True
        self.error: Exception | None = None
        self.calls: list[tuple[str, str]] = []

    async def verify_ngo(self, ngo_id, darpan_id):
        self.calls.append((ngo_id, darpan_id))
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def rsvp_service() -> FakeRSVPService:
    return FakeRSVPService()


@pytest.fixture
def verification_service() -> FakeVerificationService:
    return FakeVerificationService()
