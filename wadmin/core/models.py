"""Workout record and edit draft models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Optional

from wadmin.core.constants import EDITABLE_FIELDS, PLACEHOLDER_IMAGE_URL


@dataclass(frozen=True)
class WorkoutRecord:
    """One workout as returned by the admin API."""

    id: Any
    user_name: str = ""
    user_email: str = ""
    workout_type: Any = ""
    duration: Any = None
    calories_burned: Any = None
    image_url: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "WorkoutRecord":
        if not isinstance(payload, dict):
            raise ValueError(f"Workout payload must be an object, got {type(payload).__name__}")
        if "id" not in payload:
            raise ValueError("Workout payload is missing 'id'")
        known = {item.name for item in fields(cls)}
        return cls(**{key: value for key, value in payload.items() if key in known})

    def to_payload(self) -> Dict[str, Any]:
        payload = asdict(self)
        if payload["image_url"] is None:
            del payload["image_url"]
        return payload

    @property
    def display_image(self) -> str:
        return self.image_url or PLACEHOLDER_IMAGE_URL


@dataclass
class EditDraft:
    """Mutable working copy of a single record."""

    record: WorkoutRecord
    workout_type: Any = ""
    duration: Any = None
    calories_burned: Any = None
    image_url: Optional[str] = None

    @classmethod
    def from_record(cls, record: WorkoutRecord) -> "EditDraft":
        return cls(
            record=record,
            workout_type=record.workout_type,
            duration=record.duration,
            calories_burned=record.calories_burned,
            image_url=record.image_url,
        )

    @property
    def id(self) -> Any:
        return self.record.id

    def update_field(self, field: str, value: Any) -> None:
        if field not in EDITABLE_FIELDS:
            raise KeyError(f"Field {field!r} is not editable")
        setattr(self, field, value)

    def to_record(self) -> WorkoutRecord:
        """Materialize the draft, normalizing numeric strings from form input."""
        return replace(
            self.record,
            workout_type=self.workout_type,
            duration=_normalize_number(self.duration),
            calories_burned=_normalize_number(self.calories_burned),
            image_url=self.image_url or None,
        )


def _normalize_number(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    try:
        number = float(value)
    except ValueError:
        return value
    return int(number) if number.is_integer() else number
