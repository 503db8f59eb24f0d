"""Client-side validation of workout edits."""

from __future__ import annotations

import math
from typing import Any, Optional

from wadmin.core.constants import (
    MIN_WORKOUT_TYPE_LENGTH,
    MSG_CALORIES,
    MSG_DURATION,
    MSG_WORKOUT_TYPE,
)


def parse_positive_number(value: Any) -> Optional[float]:
    """Return the value as a float when it is a finite number > 0, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number) or number <= 0:
        return None
    return number


def validate_workout(draft: Any) -> Optional[str]:
    """Check a draft and return the first failing rule's message.

    Rules run in a fixed order (workout type, duration, calories burned) so
    the message is deterministic when several fields are wrong.
    """
    workout_type = getattr(draft, "workout_type", None)
    if not isinstance(workout_type, str) or len(workout_type) < MIN_WORKOUT_TYPE_LENGTH:
        return MSG_WORKOUT_TYPE
    if parse_positive_number(getattr(draft, "duration", None)) is None:
        return MSG_DURATION
    if parse_positive_number(getattr(draft, "calories_burned", None)) is None:
        return MSG_CALORIES
    return None
