"""Tests for :mod:`communitree.data.reducer`."""

from types import SimpleNamespace

from communitree.core.enums import EngagementType, ModalType, TrackType, TrustPointAction
from communitree.core.models import (
    NGO,
    AppState,
    ChatContext,
    ChatThread,
    ContactInfo,
    Message,
    Notification,
    User,
)
from communitree.data.actions import (
    ACTION_TAGS,
    AddEngagementEvent,
    AddNGO,
    AddNotification,
    CancelRSVP,
    HideModal,
    MarkMessagesRead,
    MarkNotificationRead,
    RemoveNotification,
    RSVPEvent,
    SendMessage,
    SetChatThreads,
    SetNGOs,
    SetUser,
    ShowModal,
    SwitchTrack,
    SyncWithStorage,
    UpdateEvent,
    UpdateNGO,
    UpdatePreferences,
    UpdateTrustPoints,
    UpdateUser,
    VerifyNGO,
    parse_action,
)
from communitree.data.reducer import handled_tags, reduce


def test_every_action_has_a_handler():
    assert set(handled_tags()) == ACTION_TAGS


def test_unknown_action_returns_same_state(state, now):
    assert reduce(state, SimpleNamespace(type="NOT_A_REAL_ACTION"), now=now) is state
    assert reduce(state, object(), now=now) is state


def test_sync_with_storage_replaces_everything(state, now):
    loaded = AppState()
    assert reduce(state, SyncWithStorage(state=loaded), now=now) is loaded


def test_set_user_and_logout(state, now):
    other = User(id="u9", name="Kiran", email="k@example.org")
    assert reduce(state, SetUser(user=other), now=now).user is other
    assert reduce(state, SetUser(user=None), now=now).user is None


def test_update_user_cannot_touch_id_or_points(state, now):
    new = reduce(
        state,
        UpdateUser(updates={"name": "Asha R", "id": "hacker", "trust_points": 100}),
        now=now,
    )
    assert new.user.name == "Asha R"
    assert new.user.id == "u1"
    assert new.user.trust_points == 75
    assert new.user.updated_at == now


def test_update_user_without_user_is_noop(state, now):
    logged_out = state.model_copy(update={"user": None})
    assert reduce(logged_out, UpdateUser(updates={"name": "X"}), now=now) is logged_out


def test_update_user_invalid_merge_is_noop(state, now):
    assert reduce(state, UpdateUser(updates={"email": None}), now=now) is state


def test_trust_points_clamped(state, now):
    up = reduce(state, UpdateTrustPoints(user_id="u1", delta=40), now=now)
    assert up.user.trust_points == 100
    down = reduce(up, UpdateTrustPoints(user_id="u1", delta=-250), now=now)
    assert down.user.trust_points == 0


def test_trust_points_identity_mismatch_is_noop(state, now):
    assert reduce(state, UpdateTrustPoints(user_id="someone-else", delta=5), now=now) is state


def test_trust_points_shares_untouched_slices(state, now):
    new = reduce(
        state,
        UpdateTrustPoints(user_id="u1", delta=5, reason=TrustPointAction.ATTEND_EVENT),
        now=now,
    )
    assert new is not state
    assert new.ngos is state.ngos
    assert new.events is state.events
    assert new.ui is state.ui


def test_add_engagement_event(state, now):
    new = reduce(
        state,
        AddEngagementEvent(event_id="e1", kind=EngagementType.ATTENDED, trust_points_awarded=5),
        now=now,
    )
    (entry,) = new.user.event_history
    assert entry.event_id == "e1"
    assert entry.trust_points_awarded == 5
    assert entry.timestamp == now
    assert entry.id


def test_switch_track_updates_all_mirrors(state, now):
    new = reduce(state, SwitchTrack(track=TrackType.GROW), now=now)
    assert new.current_track == TrackType.GROW
    assert new.ui.theme == TrackType.GROW
    assert new.preferences.last_selected_track == TrackType.GROW


def test_verify_ngo(state, now):
    new = reduce(state, VerifyNGO(id="n1", darpan_id="54321"), now=now)
    ngo = new.ngos[0]
    assert ngo.is_verified and ngo.darpan_id == "54321"
    assert ngo.updated_at == now
    # untouched NGOs are shared
    assert new.ngos[1] is state.ngos[1]


def test_verify_unknown_ngo_is_noop(state, now):
    assert reduce(state, VerifyNGO(id="missing", darpan_id="54321"), now=now) is state


def test_verification_is_monotonic(state, now):
    # n2 is verified in the fixture
    assert reduce(state, UpdateNGO(id="n2", updates={"is_verified": False}), now=now) is state
    assert reduce(state, UpdateNGO(id="n2", updates={"darpan_id": None}), now=now) is state
    # values pydantic would coerce to False are refused too
    for falsy in (0, "false", "no", "0", "off"):
        assert reduce(state, UpdateNGO(id="n2", updates={"is_verified": falsy}), now=now) is state
    raw = parse_action({"type": "UPDATE_NGO", "id": "n2", "updates": {"is_verified": "no"}})
    assert reduce(state, raw, now=now).ngos[1].is_verified
    assert reduce(state, UpdateNGO(id="n2", updates={"darpan_id": ""}), now=now) is state

    renamed = reduce(state, UpdateNGO(id="n2", updates={"name": "Read Together Trust"}), now=now)
    assert renamed.ngos[1].name == "Read Together Trust"
    assert renamed.ngos[1].is_verified

    stale = NGO(
        id="n2",
        name="Read Together",
        project_title="Weekend Literacy Classes",
        category="Education",
        contact_info=ContactInfo(email="team@readtogether.org"),
    )
    refreshed = reduce(state, SetNGOs(ngos=[stale]), now=now)
    assert refreshed.ngos[0].is_verified
    assert refreshed.ngos[0].darpan_id == "12345"


def test_update_ngo_rejects_invalid_counts(state, now):
    assert reduce(state, UpdateNGO(id="n1", updates={"volunteers_needed": -1}), now=now) is state


def test_add_ngo_appends(state, now):
    ngo = NGO(name="New", project_title="P", category="Healthcare", contact_info=ContactInfo(email="a@b.org"))
    new = reduce(state, AddNGO(ngo=ngo), now=now)
    assert new.ngos[-1] is ngo
    assert len(new.ngos) == len(state.ngos) + 1


def test_rsvp_and_cancel(state, now):
    joined = reduce(state, RSVPEvent(event_id="e1", user_id="u1"), now=now)
    assert joined.events[0].rsvp_list == ["u3", "u1"]
    assert joined.events[0].updated_at == now

    left = reduce(joined, CancelRSVP(event_id="e1", user_id="u1"), now=now)
    assert left.events[0].rsvp_list == ["u3"]

    # cancelling when not on the list changes nothing
    assert reduce(left, CancelRSVP(event_id="e1", user_id="u1"), now=now) is left


def test_rsvp_does_not_dedupe(state, now):
    once = reduce(state, RSVPEvent(event_id="e1", user_id="u1"), now=now)
    twice = reduce(once, RSVPEvent(event_id="e1", user_id="u1"), now=now)
    assert twice.events[0].rsvp_list == ["u3", "u1", "u1"]


def test_update_event_merges(state, now):
    new = reduce(state, UpdateEvent(id="e1", updates={"title": "Poetry Slam"}), now=now)
    assert new.events[0].title == "Poetry Slam"
    assert reduce(state, UpdateEvent(id="e1", updates={"max_attendees": 0}), now=now) is state


def _thread():
    return ChatThread(
        id="t1",
        participants=["u1", "u2"],
        context=ChatContext(type="ngo", reference_id="n1", title="Green Roots"),
        messages=[
            Message(id="m1", sender_id="u2", content="hi"),
            Message(id="m2", sender_id="u2", content="there"),
        ],
    )


def test_chat_messages(state, now):
    with_thread = reduce(state, SetChatThreads(threads=[_thread()]), now=now)
    sent = reduce(
        with_thread,
        SendMessage(thread_id="t1", message=Message(id="m3", sender_id="u1", content="hello")),
        now=now,
    )
    thread = sent.chat_threads[0]
    assert [m.id for m in thread.messages] == ["m1", "m2", "m3"]
    assert thread.last_activity == now

    read = reduce(sent, MarkMessagesRead(thread_id="t1", message_ids=["m1"]), now=now)
    assert [m.is_read for m in read.chat_threads[0].messages] == [True, False, False]
    # already read: nothing to do
    assert reduce(read, MarkMessagesRead(thread_id="t1", message_ids=["m1"]), now=now) is read


def test_modal_and_notifications(state, now):
    shown = reduce(state, ShowModal(modal=ModalType.VERIFICATION), now=now)
    assert shown.ui.active_modal == ModalType.VERIFICATION
    assert shown.ngos is state.ngos
    assert reduce(shown, HideModal(), now=now).ui.active_modal is None

    note = Notification(id="x1", type="info", title="Hi", message="Welcome")
    added = reduce(state, AddNotification(notification=note), now=now)
    assert added.ui.notifications == [note]
    read = reduce(added, MarkNotificationRead(id="x1"), now=now)
    assert read.ui.notifications[0].is_read
    assert reduce(read, MarkNotificationRead(id="x1"), now=now) is read
    removed = reduce(read, RemoveNotification(id="x1"), now=now)
    assert removed.ui.notifications == []
    assert reduce(removed, RemoveNotification(id="x1"), now=now) is removed


def test_update_preferences(state, now):
    new = reduce(state, UpdatePreferences(updates={"notifications_enabled": False}), now=now)
    assert new.preferences.notifications_enabled is False
    assert new.user is state.user
