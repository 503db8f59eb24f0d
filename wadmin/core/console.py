"""Workout console: committed list, search-driven fetch, edit/delete flow."""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, List, Optional, Union

from wadmin.core.api import APIError, WorkoutAdminAPI
from wadmin.core.constants import MSG_CONFIRM_DELETE
from wadmin.core.errors import (
    DeleteFailed,
    FetchFailed,
    UpdateFailed,
    ValidationError,
    WorkoutAdminError,
)
from wadmin.core.models import EditDraft, WorkoutRecord
from wadmin.core.validation import validate_workout

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], bool]


def _dedupe(records: List[WorkoutRecord]) -> List[WorkoutRecord]:
    seen = set()
    unique: List[WorkoutRecord] = []
    for record in records:
        if record.id in seen:
            logger.warning("Dropping duplicate workout id %r from response", record.id)
            continue
        seen.add(record.id)
        unique.append(record)
    return unique


class WorkoutConsole:
    """In-memory view of the server's workouts for one operator.

    Operations never raise: failures land in ``error`` (the message shown to
    the operator) and ``failure`` (the exception, for callers that need the
    kind). Every operation clears both before doing anything else.

    Fetches are numbered as they are issued. A response only replaces
    ``workouts`` when it belongs to the newest fetch issued so far, so a slow
    answer to an old query cannot overwrite a newer one. Saves and deletes
    apply to the list as it stands when they complete.
    """

    def __init__(self, api: WorkoutAdminAPI) -> None:
        self.api = api
        self.workouts: List[WorkoutRecord] = []
        self.query = ""
        self.error = ""
        self.failure: Optional[WorkoutAdminError] = None
        self.draft: Optional[EditDraft] = None
        self._in_flight = 0
        self._fetch_ids = itertools.count(1)
        self._latest_fetch = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def editing(self) -> bool:
        return self.draft is not None

    def _clear_error(self) -> None:
        self.error = ""
        self.failure = None

    def _fail(self, exc: WorkoutAdminError) -> None:
        self.error = exc.message
        self.failure = exc
        logger.warning("%s: %s", type(exc).__name__, exc.message)

    @staticmethod
    def _from_api_error(exc: APIError, error_cls: type) -> WorkoutAdminError:
        if exc.no_response:
            return error_cls()
        return error_cls(exc.server_message)

    def find(self, workout_id: Any) -> Optional[WorkoutRecord]:
        for record in self.workouts:
            if record.id == workout_id:
                return record
        return None

    # Query & fetch

    def search(self, query: str) -> None:
        """Set the active query and refetch with it."""
        self.query = query
        self.fetch_workouts(query)

    def refresh(self) -> None:
        self.fetch_workouts(self.query)

    def fetch_workouts(self, query: str = "") -> Optional[List[WorkoutRecord]]:
        """Fetch workouts matching ``query`` and replace the committed list."""
        fetch_id = next(self._fetch_ids)
        self._latest_fetch = fetch_id
        self._in_flight += 1
        self._clear_error()
        try:
            try:
                payload = self.api.list_workouts(query)
                records = _dedupe([WorkoutRecord.from_payload(item) for item in payload])
            except APIError as exc:
                raise self._from_api_error(exc, FetchFailed) from exc
            except (TypeError, ValueError) as exc:
                raise FetchFailed() from exc
        except WorkoutAdminError as exc:
            if fetch_id == self._latest_fetch:
                self._fail(exc)
            else:
                logger.debug("Ignoring failure of superseded fetch #%d", fetch_id)
            return None
        finally:
            self._in_flight -= 1

        if fetch_id != self._latest_fetch:
            logger.debug(
                "Discarding fetch #%d for %r, superseded by #%d",
                fetch_id,
                query,
                self._latest_fetch,
            )
            return records

        self.workouts = records
        logger.debug("Fetched %d workouts for query %r", len(records), query)
        return records

    # Edit & delete

    def begin_edit(self, record: Union[WorkoutRecord, Any]) -> EditDraft:
        """Open a draft for a record (or record id), replacing any open draft."""
        if not isinstance(record, WorkoutRecord):
            found = self.find(record)
            if found is None:
                raise KeyError(f"No workout with id {record!r}")
            record = found
        self._clear_error()
        self.draft = EditDraft.from_record(record)
        return self.draft

    def update_draft_field(self, field: str, value: Any) -> None:
        if self.draft is None:
            raise RuntimeError("No workout is being edited")
        self.draft.update_field(field, value)

    def cancel_edit(self) -> None:
        self.draft = None
        self._clear_error()

    validate = staticmethod(validate_workout)

    def save(self) -> bool:
        """Validate and push the open draft; close it on success."""
        self._clear_error()
        draft = self.draft
        if draft is None:
            raise RuntimeError("No workout is being edited")

        message = validate_workout(draft)
        if message:
            self._fail(ValidationError(message))
            return False

        updated = draft.to_record()
        try:
            self.api.update_workout(updated.id, updated.to_payload())
        except APIError as exc:
            self._fail(self._from_api_error(exc, UpdateFailed))
            return False
        except WorkoutAdminError as exc:
            self._fail(exc)
            return False

        self.workouts = [updated if item.id == updated.id else item for item in self.workouts]
        self.draft = None
        self._clear_error()
        return True

    def delete(self, workout_id: Any, confirm: ConfirmFn) -> bool:
        """Delete a workout after the operator confirms."""
        if not confirm(MSG_CONFIRM_DELETE):
            return False
        self._clear_error()
        try:
            self.api.delete_workout(workout_id)
        except APIError as exc:
            self._fail(self._from_api_error(exc, DeleteFailed))
            return False
        except WorkoutAdminError as exc:
            self._fail(exc)
            return False

        self.workouts = [item for item in self.workouts if item.id != workout_id]
        return True
