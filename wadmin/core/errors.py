"""Error taxonomy shared by the session manager and the workout console."""

from __future__ import annotations

from typing import Optional

from wadmin.core.constants import (
    MSG_DELETE_FAILED,
    MSG_FETCH_FAILED,
    MSG_LOGIN_FALLBACK,
    MSG_MISSING_TOKEN,
    MSG_UNREACHABLE,
    MSG_UPDATE_FAILED,
)


class WorkoutAdminError(RuntimeError):
    """Base class for failures surfaced to the operator."""

    default_message = "Unexpected error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthError(WorkoutAdminError):
    """The login endpoint answered with an error."""

    default_message = MSG_LOGIN_FALLBACK


class NetworkUnreachable(WorkoutAdminError):
    """No response was received from the server."""

    default_message = MSG_UNREACHABLE


class MissingCredential(WorkoutAdminError):
    """No bearer token is stored; raised before any network call."""

    default_message = MSG_MISSING_TOKEN


class FetchFailed(WorkoutAdminError):
    default_message = MSG_FETCH_FAILED


class UpdateFailed(WorkoutAdminError):
    default_message = MSG_UPDATE_FAILED


class DeleteFailed(WorkoutAdminError):
    default_message = MSG_DELETE_FAILED


class ValidationError(WorkoutAdminError):
    """A draft failed client-side validation."""
