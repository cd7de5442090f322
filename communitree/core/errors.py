"""Error taxonomy for the CommuniTree core.

The reducer never raises: stale or illegal actions degrade to no-ops. The
exceptions here are raised by the validation helpers, the service adapters
and the controllers. Only the text returned by :func:`user_message` is meant
to reach a user.
"""

from __future__ import annotations

from typing import Any, Literal

ServiceErrorCode = Literal["not_found", "permission_denied", "constraint_violation", "network_error"]


class CommuniTreeError(Exception):
    """Base class for all errors raised by the package."""


class FieldValidationError(CommuniTreeError):
    """Input rejected before any service call, with a field-level message."""

    def __init__(self, message: str, field: str, constraint: str) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.constraint = constraint


class ServiceError(CommuniTreeError):
    """An external service (RSVP, verification) failed."""

    def __init__(
        self,
        message: str,
        code: ServiceErrorCode = "network_error",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class AuthenticationRequired(CommuniTreeError):
    """The operation needs a signed-in user."""


class RSVPNotFound(CommuniTreeError):
    """There is no confirmed RSVP to cancel for the given event."""


class ChatThreadNotFound(CommuniTreeError):
    """The thread does not exist in the current state."""


_SERVICE_MESSAGES: dict[str, str] = {
    "not_found": "The requested item was not found.",
    "permission_denied": "You don't have permission to perform this action.",
    "constraint_violation": "This action cannot be completed due to data constraints.",
    "network_error": "Unable to connect to the server. Please check your connection and try again.",
}


def user_message(error: BaseException) -> str:
    """Convert ``error`` to a plain-language message safe to show to users."""
    if isinstance(error, FieldValidationError):
        return error.message
    if isinstance(error, ServiceError):
        return _SERVICE_MESSAGES.get(error.code, "Something went wrong. Please try again.")
    if isinstance(error, AuthenticationRequired):
        return "Please sign in to continue."
    if isinstance(error, ChatThreadNotFound):
        return "This conversation is no longer available."
    if isinstance(error, RSVPNotFound):
        return "No confirmed RSVP found for this event."
    return "An unexpected error occurred. Please try again."
