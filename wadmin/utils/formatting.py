"""Formatting helpers used for console output."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from rich.table import Table

from wadmin.core.models import WorkoutRecord


def format_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if value is None or value == "":
        return "N/A"
    return str(value)


def format_duration(minutes: Any) -> str:
    """Format duration in minutes, e.g. ``45 min``."""
    text = format_number(minutes)
    return text if text == "N/A" else f"{text} min"


def format_calories(calories: Any) -> str:
    text = format_number(calories)
    return text if text == "N/A" else f"{text} cal"


def workout_row(record: WorkoutRecord) -> Dict[str, str]:
    """Render one record as display strings keyed by column."""
    return {
        "id": str(record.id),
        "user": record.user_name or "",
        "email": record.user_email or "",
        "workout_type": str(record.workout_type or ""),
        "duration": format_duration(record.duration),
        "calories_burned": format_calories(record.calories_burned),
        "image": record.display_image,
    }


def workouts_table(records: Iterable[WorkoutRecord], title: str = "Workouts") -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("User")
    table.add_column("Email")
    table.add_column("Workout Type")
    table.add_column("Duration", justify="right")
    table.add_column("Calories Burned", justify="right")
    table.add_column("Image")
    for record in records:
        row = workout_row(record)
        table.add_row(
            row["id"],
            row["user"],
            row["email"],
            row["workout_type"],
            row["duration"],
            row["calories_burned"],
            row["image"],
        )
    return table


def workouts_plain(records: Iterable[WorkoutRecord]) -> List[str]:
    """Tab-separated lines for piping."""
    lines = []
    for record in records:
        row = workout_row(record)
        lines.append("\t".join(row.values()))
    return lines
