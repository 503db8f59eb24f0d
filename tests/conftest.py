from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from typer.testing import CliRunner

from wadmin.core.storage import TokenStore


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    data_dir = tmp_path / "data"
    monkeypatch.setenv("WADMIN_DATA_DIR", str(data_dir))
    monkeypatch.setenv("WADMIN_CONFIG_FILE", str(tmp_path / "config" / "config.toml"))
    monkeypatch.delenv("WADMIN_TOKEN_STORE", raising=False)
    monkeypatch.delenv("WADMIN_BACKEND_URL", raising=False)
    monkeypatch.delenv("WADMIN_EMAIL", raising=False)
    monkeypatch.delenv("WADMIN_PASSWORD", raising=False)
    monkeypatch.setattr("wadmin.core.api.time.sleep", lambda _: None)
    return data_dir


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def token_store(tmp_path: Path) -> TokenStore:
    return TokenStore(tmp_path / "session.json")


@pytest.fixture()
def logged_in_store(isolated_env: Path) -> TokenStore:
    store = TokenStore(isolated_env / "session.json")
    store.set("token", "tok-123")
    return store


def _workout(
    workout_id: int,
    user_name: str,
    workout_type: str = "Running",
    duration: Any = 30,
    calories_burned: Any = 250,
    image_url: Optional[str] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": workout_id,
        "user_name": user_name,
        "user_email": f"{user_name.lower()}@example.com",
        "workout_type": workout_type,
        "duration": duration,
        "calories_burned": calories_burned,
    }
    if image_url is not None:
        payload["image_url"] = image_url
    return payload


@pytest.fixture()
def alice_workouts() -> List[Dict[str, Any]]:
    return [
        _workout(1, "Alice", "Running", 30, 300),
        _workout(2, "Alice", "Cycling", 60, 550, image_url="https://img.example.com/2.png"),
    ]


@pytest.fixture()
def all_workouts(alice_workouts: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return alice_workouts + [
        _workout(3, "Bob", "Swimming", 45, 400),
        _workout(4, "Carol", "Rowing", 20, 180),
        _workout(42, "Dave", "Yoga", 50, 150),
    ]
