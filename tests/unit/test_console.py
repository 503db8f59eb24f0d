from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List, Optional

import pytest

from wadmin.core.api import APIError, WorkoutAdminAPI
from wadmin.core.console import WorkoutConsole
from wadmin.core.errors import (
    DeleteFailed,
    FetchFailed,
    MissingCredential,
    UpdateFailed,
    ValidationError,
)
from wadmin.core.models import WorkoutRecord
from wadmin.core.session import SessionManager
from wadmin.core.storage import TokenStore


class FakeAPI:
    """In-memory admin API keyed by query string."""

    def __init__(self, results: Optional[Dict[str, List[Dict[str, Any]]]] = None) -> None:
        self.results = results or {}
        self.calls: List[tuple] = []
        self.fail_with: Dict[str, APIError] = {}
        self.on_list: Optional[Callable[[str], None]] = None

    def list_workouts(self, query: str = "") -> List[Dict[str, Any]]:
        self.calls.append(("list", query))
        if self.on_list is not None:
            hook, self.on_list = self.on_list, None
            hook(query)
        if "list" in self.fail_with:
            raise self.fail_with["list"]
        return copy.deepcopy(self.results.get(query, []))

    def update_workout(self, workout_id: Any, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("update", workout_id, payload))
        if "update" in self.fail_with:
            raise self.fail_with["update"]
        return {}

    def delete_workout(self, workout_id: Any) -> Dict[str, Any]:
        self.calls.append(("delete", workout_id))
        if "delete" in self.fail_with:
            raise self.fail_with["delete"]
        return {}


def _yes(_: str) -> bool:
    return True


def _no(_: str) -> bool:
    return False


@pytest.fixture()
def api(alice_workouts: List[Dict[str, Any]], all_workouts: List[Dict[str, Any]]) -> FakeAPI:
    return FakeAPI({"alice": alice_workouts, "": all_workouts})


@pytest.fixture()
def console(api: FakeAPI) -> WorkoutConsole:
    return WorkoutConsole(api)  # type: ignore[arg-type]


@pytest.fixture()
def loaded(console: WorkoutConsole) -> WorkoutConsole:
    console.search("")
    assert len(console.workouts) == 5
    return console


def test_search_replaces_list_in_server_order(console: WorkoutConsole, api: FakeAPI) -> None:
    console.search("alice")
    assert [w.id for w in console.workouts] == [1, 2]
    assert console.query == "alice"

    console.search("")
    assert [w.id for w in console.workouts] == [1, 2, 3, 4, 42]
    assert api.calls == [("list", "alice"), ("list", "")]
    assert console.loading is False
    assert console.error == ""


def test_fetch_with_narrower_result_drops_old_records(loaded: WorkoutConsole) -> None:
    loaded.search("alice")
    assert [w.id for w in loaded.workouts] == [1, 2]


def test_fetch_failure_keeps_list_and_prefers_server_message(loaded: WorkoutConsole, api: FakeAPI) -> None:
    before = list(loaded.workouts)
    api.fail_with["list"] = APIError("boom", status_code=500, server_message="Query too broad")
    assert loaded.fetch_workouts("x") is None
    assert loaded.workouts == before
    assert loaded.error == "Query too broad"
    assert isinstance(loaded.failure, FetchFailed)


def test_fetch_failure_without_message_uses_generic(loaded: WorkoutConsole, api: FakeAPI) -> None:
    api.fail_with["list"] = APIError("boom")
    loaded.refresh()
    assert loaded.error == "Failed to fetch workouts. Please try again."


def test_successful_retry_clears_stale_error(loaded: WorkoutConsole, api: FakeAPI) -> None:
    api.fail_with["list"] = APIError("boom")
    loaded.search("alice")
    assert loaded.error
    del api.fail_with["list"]
    loaded.search("alice")
    assert loaded.error == ""
    assert loaded.failure is None


def test_duplicate_ids_in_response_keep_first(console: WorkoutConsole, api: FakeAPI) -> None:
    api.results["dup"] = [
        {"id": 7, "workout_type": "Run", "duration": 1, "calories_burned": 1},
        {"id": 7, "workout_type": "Swim", "duration": 1, "calories_burned": 1},
    ]
    console.search("dup")
    assert [(w.id, w.workout_type) for w in console.workouts] == [(7, "Run")]


def test_malformed_payload_is_fetch_failure(loaded: WorkoutConsole, api: FakeAPI) -> None:
    api.results["bad"] = [{"workout_type": "no id"}]
    loaded.search("bad")
    assert isinstance(loaded.failure, FetchFailed)
    assert len(loaded.workouts) == 5


def test_non_object_items_are_fetch_failure(loaded: WorkoutConsole, api: FakeAPI) -> None:
    api.results["bad"] = ["idle"]
    loaded.search("bad")
    assert isinstance(loaded.failure, FetchFailed)
    assert loaded.error == "Failed to fetch workouts. Please try again."
    assert len(loaded.workouts) == 5
    assert loaded.loading is False


def test_superseded_fetch_does_not_overwrite_newer_result(console: WorkoutConsole, api: FakeAPI) -> None:
    # While the request for "a" is in flight the operator types "alice",
    # whose response arrives first.
    states: List[bool] = []

    def type_more(_: str) -> None:
        states.append(console.loading)
        console.search("alice")
        states.append(console.loading)

    api.results["a"] = [{"id": 99, "workout_type": "Stale", "duration": 1, "calories_burned": 1}]
    api.on_list = type_more
    console.search("a")

    assert [w.id for w in console.workouts] == [1, 2]
    assert console.query == "alice"
    assert states == [True, True]
    assert console.loading is False


def test_superseded_fetch_failure_is_not_reported(console: WorkoutConsole, api: FakeAPI) -> None:
    def newer_then_fail(_: str) -> None:
        console.search("alice")
        api.fail_with["list"] = APIError("late failure")

    api.on_list = newer_then_fail
    console.search("a")
    assert console.error == ""
    assert [w.id for w in console.workouts] == [1, 2]


def test_begin_edit_then_cancel_leaves_list_identical(loaded: WorkoutConsole) -> None:
    before = [w.to_payload() for w in loaded.workouts]
    loaded.begin_edit(3)
    loaded.update_draft_field("workout_type", "Diving")
    loaded.update_draft_field("duration", "999")
    loaded.cancel_edit()
    assert loaded.draft is None
    assert [w.to_payload() for w in loaded.workouts] == before


def test_begin_edit_discards_previous_draft(loaded: WorkoutConsole) -> None:
    first = loaded.begin_edit(1)
    first.update_field("workout_type", "Changed")
    second = loaded.begin_edit(2)
    assert loaded.draft is second
    assert loaded.begin_edit(1).workout_type == "Running"


def test_begin_edit_unknown_id_raises(loaded: WorkoutConsole) -> None:
    with pytest.raises(KeyError):
        loaded.begin_edit(12345)


def test_save_replaces_exactly_one_record(loaded: WorkoutConsole, api: FakeAPI) -> None:
    others = [w for w in loaded.workouts if w.id != 3]
    loaded.begin_edit(3)
    loaded.update_draft_field("workout_type", "Open Water")
    loaded.update_draft_field("duration", "90")

    assert loaded.save() is True
    assert loaded.draft is None
    assert loaded.error == ""
    assert len(loaded.workouts) == 5
    updated = loaded.find(3)
    assert updated is not None
    assert (updated.workout_type, updated.duration, updated.calories_burned) == ("Open Water", 90, 400)
    assert [w for w in loaded.workouts if w.id != 3] == others
    assert api.calls[-1] == (
        "update",
        3,
        {
            "id": 3,
            "user_name": "Bob",
            "user_email": "bob@example.com",
            "workout_type": "Open Water",
            "duration": 90,
            "calories_burned": 400,
        },
    )


def test_save_with_negative_duration_makes_no_call(loaded: WorkoutConsole, api: FakeAPI) -> None:
    before = list(loaded.workouts)
    calls_before = len(api.calls)
    loaded.begin_edit(1)
    loaded.update_draft_field("duration", -5)

    assert loaded.save() is False
    assert loaded.error == "Duration must be a positive number"
    assert isinstance(loaded.failure, ValidationError)
    assert len(api.calls) == calls_before
    assert loaded.workouts == before
    assert loaded.draft is not None


def test_save_failure_keeps_draft_open_for_retry(loaded: WorkoutConsole, api: FakeAPI) -> None:
    before = list(loaded.workouts)
    loaded.begin_edit(2)
    loaded.update_draft_field("workout_type", "Spin Class")
    api.fail_with["update"] = APIError("boom", status_code=500)

    assert loaded.save() is False
    assert loaded.error == "Failed to update workout. Please try again."
    assert isinstance(loaded.failure, UpdateFailed)
    assert loaded.workouts == before
    assert loaded.draft is not None and loaded.draft.workout_type == "Spin Class"

    del api.fail_with["update"]
    assert loaded.save() is True
    assert loaded.error == ""
    assert loaded.find(2).workout_type == "Spin Class"  # type: ignore[union-attr]


def test_save_applies_to_list_current_at_completion(loaded: WorkoutConsole) -> None:
    loaded.begin_edit(1)
    loaded.update_draft_field("workout_type", "Hill Repeats")
    loaded.search("alice")
    assert loaded.save() is True
    assert [w.workout_type for w in loaded.workouts] == ["Hill Repeats", "Cycling"]


def test_delete_confirmed_removes_one(loaded: WorkoutConsole, api: FakeAPI) -> None:
    assert loaded.delete(42, _yes) is True
    assert [w.id for w in loaded.workouts] == [1, 2, 3, 4]
    assert api.calls[-1] == ("delete", 42)


def test_delete_declined_changes_nothing(loaded: WorkoutConsole, api: FakeAPI) -> None:
    calls_before = len(api.calls)
    prompts: List[str] = []

    def decline(message: str) -> bool:
        prompts.append(message)
        return False

    assert loaded.delete(42, decline) is False
    assert prompts == ["Are you sure you want to delete this workout?"]
    assert len(loaded.workouts) == 5
    assert len(api.calls) == calls_before


def test_delete_server_error_keeps_record(loaded: WorkoutConsole, api: FakeAPI) -> None:
    api.fail_with["delete"] = APIError("boom", status_code=500)
    assert loaded.delete(42, _yes) is False
    assert loaded.find(42) is not None
    assert isinstance(loaded.failure, DeleteFailed)
    assert loaded.error == "Failed to delete workout. Please try again."


def test_validate_is_exposed_on_console(loaded: WorkoutConsole) -> None:
    draft = loaded.begin_edit(1)
    draft.update_field("workout_type", "ab")
    assert loaded.validate(draft) == "Workout type must be at least 3 characters"


def test_operations_without_token_never_touch_network(
    monkeypatch: pytest.MonkeyPatch, token_store: TokenStore
) -> None:
    def fail_request(**_: Any) -> None:
        raise AssertionError("network must not be touched")

    monkeypatch.setattr("wadmin.core.api.requests.request", fail_request)
    session = SessionManager(base_url="http://api.test", store=token_store)
    console = WorkoutConsole(WorkoutAdminAPI(base_url=session.base_url, auth_header=session.auth_header))
    console.workouts = [
        WorkoutRecord(id=1, user_name="A", workout_type="Running", duration=10, calories_burned=10)
    ]

    assert console.fetch_workouts("") is None
    assert isinstance(console.failure, MissingCredential)
    assert console.error == "Authentication token is missing. Please log in."

    console.begin_edit(1)
    console.update_draft_field("workout_type", "Walking")
    assert console.save() is False
    assert isinstance(console.failure, MissingCredential)
    assert console.draft is not None

    assert console.delete(1, _yes) is False
    assert isinstance(console.failure, MissingCredential)
    assert [w.workout_type for w in console.workouts] == ["Running"]
