"""CommuniTree state reducer.

Pure function: ``(state, action) -> state``. No side effects, no IO.

Rules every handler follows:

* unknown action tags return the input ``state`` object itself;
* a branch that finds nothing to change (missing entity, no signed-in user,
  identity mismatch, an update that would break a model invariant) also
  returns the input ``state`` object;
* otherwise a new ``AppState`` is returned, built with ``model_copy`` so that
  sub-objects that did not change are reused by reference.

The reducer never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, TypeVar

from pydantic import ValidationError

from ..core.models import NGO, AppState, CommuniTreeModel, UserEvent, new_id, utcnow
from ..core.trust import apply_delta
from .actions import ACTION_TAGS

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=CommuniTreeModel)
Handler = Callable[[AppState, Any, datetime], AppState]

# Fields ``UPDATE_USER`` may not touch: identity and trust points.
_PROTECTED_USER_FIELDS = frozenset({"id", "trust_points"})


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def reduce(state: AppState, action: Any, *, now: datetime | None = None) -> AppState:
    """Apply one ``action`` to ``state`` and return the next state."""
    tag = getattr(action, "type", None)
    handler = _HANDLERS.get(tag) if isinstance(tag, str) else None
    if handler is None:
        logger.debug("Ignoring unknown action %r", tag)
        return state
    return handler(state, action, now or utcnow())


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _merge(model: M, updates: dict[str, Any]) -> M:
    """Return ``model`` with ``updates`` applied, re-validated.

    When the merged data is invalid ``model`` itself is returned.
    """
    try:
        return type(model).model_validate({**dict(model), **updates})
    except ValidationError as exc:
        logger.debug(
            "Rejected update of %s %s: %s",
            type(model).__name__,
            getattr(model, "id", ""),
            exc.errors(include_url=False),
        )
        return model


def _replace_matching(items: list[M], item_id: str, change: Callable[[M], M]) -> list[M]:
    """Apply ``change`` to the items whose id is ``item_id``.

    Returns ``items`` itself when no item changed.
    """
    changed = False
    result: list[M] = []
    for item in items:
        if getattr(item, "id", None) == item_id:
            new = change(item)
            changed = changed or new is not item
            result.append(new)
        else:
            result.append(item)
    return result if changed else items


def _with(state: AppState, field: str, value: Any) -> AppState:
    if getattr(state, field) is value:
        return state
    return state.model_copy(update={field: value})


def _with_ui(state: AppState, **changes: Any) -> AppState:
    return state.model_copy(update={"ui": state.ui.model_copy(update=changes)})


# ---------------------------------------------------------------------------
# Sync
# ---------------------------------------------------------------------------
def _sync_with_storage(state: AppState, action: Any, now: datetime) -> AppState:
    return action.state


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------
def _set_user(state: AppState, action: Any, now: datetime) -> AppState:
    return state.model_copy(update={"user": action.user})


def _update_user(state: AppState, action: Any, now: datetime) -> AppState:
    if state.user is None:
        return state
    updates = {k: v for k, v in action.updates.items() if k not in _PROTECTED_USER_FIELDS}
    if len(updates) != len(action.updates):
        logger.debug("UPDATE_USER ignored protected fields for user %s", state.user.id)
    return _with(state, "user", _merge(state.user, {**updates, "updated_at": now}))


def _update_trust_points(state: AppState, action: Any, now: datetime) -> AppState:
    user = state.user
    if user is None or user.id != action.user_id:
        logger.debug("Trust point update for %s rejected: not the current user", action.user_id)
        return state
    points = apply_delta(user.trust_points, action.delta)
    return _with(state, "user", user.model_copy(update={"trust_points": points, "updated_at": now}))


def _add_engagement_event(state: AppState, action: Any, now: datetime) -> AppState:
    user = state.user
    if user is None:
        return state
    entry = UserEvent(
        id=action.id or new_id(),
        event_id=action.event_id,
        type=action.kind,
        timestamp=action.timestamp or now,
        trust_points_awarded=action.trust_points_awarded,
    )
    updated = user.model_copy(update={"event_history": [*user.event_history, entry], "updated_at": now})
    return _with(state, "user", updated)


def _update_engagement_history(state: AppState, action: Any, now: datetime) -> AppState:
    if state.user is None:
        return state
    updated = state.user.model_copy(update={"event_history": list(action.history), "updated_at": now})
    return _with(state, "user", updated)


# ---------------------------------------------------------------------------
# Track
# ---------------------------------------------------------------------------
def _switch_track(state: AppState, action: Any, now: datetime) -> AppState:
    # The three mirrored fields only ever change together, here.
    return state.model_copy(
        update={
            "current_track": action.track,
            "ui": state.ui.model_copy(update={"theme": action.track}),
            "preferences": state.preferences.model_copy(update={"last_selected_track": action.track}),
        }
    )


def _set_theme(state: AppState, action: Any, now: datetime) -> AppState:
    return _with_ui(state, theme=action.theme)


# ---------------------------------------------------------------------------
# NGOs
# ---------------------------------------------------------------------------
def _keep_verification(incoming: NGO, current: NGO | None) -> NGO:
    if current is None or incoming.is_verified:
        return incoming
    return incoming.model_copy(update={"is_verified": True, "darpan_id": current.darpan_id})


def _set_ngos(state: AppState, action: Any, now: datetime) -> AppState:
    verified = {ngo.id: ngo for ngo in state.ngos if ngo.is_verified}
    ngos = [_keep_verification(ngo, verified.get(ngo.id)) for ngo in action.ngos]
    return state.model_copy(update={"ngos": ngos})


def _add_ngo(state: AppState, action: Any, now: datetime) -> AppState:
    return state.model_copy(update={"ngos": [*state.ngos, action.ngo]})


def _unverifies(before: NGO, after: NGO) -> bool:
    return before.is_verified and not (after.is_verified and after.darpan_id)


def _update_ngo(state: AppState, action: Any, now: datetime) -> AppState:
    def change(ngo: NGO) -> NGO:
        merged = _merge(ngo, {**action.updates, "updated_at": now})
        # Verification is monotonic.
        if _unverifies(ngo, merged):
            logger.debug("Refusing to un-verify NGO %s", ngo.id)
            return ngo
        return merged

    return _with(state, "ngos", _replace_matching(state.ngos, action.id, change))


def _verify_ngo(state: AppState, action: Any, now: datetime) -> AppState:
    ngos = _replace_matching(
        state.ngos,
        action.id,
        lambda ngo: ngo.model_copy(
            update={"is_verified": True, "darpan_id": action.darpan_id, "updated_at": now}
        ),
    )
    return _with(state, "ngos", ngos)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------
def _set_events(state: AppState, action: Any, now: datetime) -> AppState:
    return state.model_copy(update={"events": list(action.events)})


def _add_event(state: AppState, action: Any, now: datetime) -> AppState:
    return state.model_copy(update={"events": [*state.events, action.event]})


def _update_event(state: AppState, action: Any, now: datetime) -> AppState:
    events = _replace_matching(
        state.events, action.id, lambda event: _merge(event, {**action.updates, "updated_at": now})
    )
    return _with(state, "events", events)


def _rsvp_event(state: AppState, action: Any, now: datetime) -> AppState:
    # Duplicates are not filtered here; callers check ``has_user_rsvpd`` first.
    events = _replace_matching(
        state.events,
        action.event_id,
        lambda event: event.model_copy(
            update={"rsvp_list": [*event.rsvp_list, action.user_id], "updated_at": now}
        ),
    )
    return _with(state, "events", events)


def _cancel_rsvp(state: AppState, action: Any, now: datetime) -> AppState:
    def change(event):
        if action.user_id not in event.rsvp_list:
            return event
        remaining = [uid for uid in event.rsvp_list if uid != action.user_id]
        return event.model_copy(update={"rsvp_list": remaining, "updated_at": now})

    return _with(state, "events", _replace_matching(state.events, action.event_id, change))


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------
def _set_chat_threads(state: AppState, action: Any, now: datetime) -> AppState:
    return state.model_copy(update={"chat_threads": list(action.threads)})


def _add_chat_thread(state: AppState, action: Any, now: datetime) -> AppState:
    return state.model_copy(update={"chat_threads": [*state.chat_threads, action.thread]})


def _update_chat_thread(state: AppState, action: Any, now: datetime) -> AppState:
    threads = _replace_matching(
        state.chat_threads,
        action.id,
        lambda thread: _merge(thread, {**action.updates, "last_activity": now}),
    )
    return _with(state, "chat_threads", threads)


def _send_message(state: AppState, action: Any, now: datetime) -> AppState:
    threads = _replace_matching(
        state.chat_threads,
        action.thread_id,
        lambda thread: thread.model_copy(
            update={"messages": [*thread.messages, action.message], "last_activity": now}
        ),
    )
    return _with(state, "chat_threads", threads)


def _mark_messages_read(state: AppState, action: Any, now: datetime) -> AppState:
    wanted = set(action.message_ids)

    def change(thread):
        messages = [
            msg.model_copy(update={"is_read": True}) if msg.id in wanted and not msg.is_read else msg
            for msg in thread.messages
        ]
        if all(new is old for new, old in zip(messages, thread.messages)):
            return thread
        return thread.model_copy(update={"messages": messages})

    return _with(state, "chat_threads", _replace_matching(state.chat_threads, action.thread_id, change))


# ---------------------------------------------------------------------------
# UI
# ---------------------------------------------------------------------------
def _set_loading(state: AppState, action: Any, now: datetime) -> AppState:
    return _with_ui(state, is_loading=action.is_loading)


def _show_modal(state: AppState, action: Any, now: datetime) -> AppState:
    return _with_ui(state, active_modal=action.modal)


def _hide_modal(state: AppState, action: Any, now: datetime) -> AppState:
    return _with_ui(state, active_modal=None)


def _set_view_mode(state: AppState, action: Any, now: datetime) -> AppState:
    return _with_ui(state, view_mode=action.view_mode)


def _add_notification(state: AppState, action: Any, now: datetime) -> AppState:
    return _with_ui(state, notifications=[*state.ui.notifications, action.notification])


def _remove_notification(state: AppState, action: Any, now: datetime) -> AppState:
    remaining = [n for n in state.ui.notifications if n.id != action.id]
    if len(remaining) == len(state.ui.notifications):
        return state
    return _with_ui(state, notifications=remaining)


def _mark_notification_read(state: AppState, action: Any, now: datetime) -> AppState:
    notifications = _replace_matching(
        state.ui.notifications,
        action.id,
        lambda n: n if n.is_read else n.model_copy(update={"is_read": True}),
    )
    if notifications is state.ui.notifications:
        return state
    return _with_ui(state, notifications=notifications)


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------
def _update_preferences(state: AppState, action: Any, now: datetime) -> AppState:
    return _with(state, "preferences", _merge(state.preferences, action.updates))


_HANDLERS: dict[str, Handler] = {
    "SYNC_WITH_STORAGE": _sync_with_storage,
    "SET_USER": _set_user,
    "UPDATE_USER": _update_user,
    "UPDATE_TRUST_POINTS": _update_trust_points,
    "ADD_ENGAGEMENT_EVENT": _add_engagement_event,
    "UPDATE_ENGAGEMENT_HISTORY": _update_engagement_history,
    "SWITCH_TRACK": _switch_track,
    "SET_THEME": _set_theme,
    "SET_NGOS": _set_ngos,
    "ADD_NGO": _add_ngo,
    "UPDATE_NGO": _update_ngo,
    "VERIFY_NGO": _verify_ngo,
    "SET_EVENTS": _set_events,
    "ADD_EVENT": _add_event,
    "UPDATE_EVENT": _update_event,
    "RSVP_EVENT": _rsvp_event,
    "CANCEL_RSVP": _cancel_rsvp,
    "SET_CHAT_THREADS": _set_chat_threads,
    "ADD_CHAT_THREAD": _add_chat_thread,
    "UPDATE_CHAT_THREAD": _update_chat_thread,
    "SEND_MESSAGE": _send_message,
    "MARK_MESSAGES_READ": _mark_messages_read,
    "SET_LOADING": _set_loading,
    "SHOW_MODAL": _show_modal,
    "HIDE_MODAL": _hide_modal,
    "SET_VIEW_MODE": _set_view_mode,
    "ADD_NOTIFICATION": _add_notification,
    "REMOVE_NOTIFICATION": _remove_notification,
    "MARK_NOTIFICATION_READ": _mark_notification_read,
    "UPDATE_PREFERENCES": _update_preferences,
}


def handled_tags() -> Sequence[str]:
    return tuple(_HANDLERS)


# Every action in the union must have a handler and vice versa.
if set(_HANDLERS) != ACTION_TAGS:  # pragma: no cover - import-time guard
    raise RuntimeError(
        "reducer handlers out of sync with actions: "
        f"missing={sorted(ACTION_TAGS - set(_HANDLERS))} extra={sorted(set(_HANDLERS) - ACTION_TAGS)}"
    )
