"""Workout list, edit and delete commands."""

from __future__ import annotations

from contextlib import nullcontext
from typing import Any, Dict, Optional

import typer

from wadmin.commands.common import (
    exit_with_console_error,
    get_state,
    print_json_payload,
    records_payload,
)
from wadmin.core.console import WorkoutConsole
from wadmin.core.models import WorkoutRecord
from wadmin.core.state import CLIState
from wadmin.utils.formatting import workouts_plain, workouts_table


def _fetch(state: CLIState, console: WorkoutConsole, query: str) -> None:
    status_ctx = state.console.status("Loading workouts...") if not state.plain_output else nullcontext()
    with status_ctx:
        console.search(query)
    if console.error:
        exit_with_console_error(state, console)


def find_by_raw_id(console: WorkoutConsole, raw_id: str) -> Optional[WorkoutRecord]:
    """Match a command-line id against the loaded records (ids may be ints)."""
    for record in console.workouts:
        if str(record.id) == raw_id:
            return record
    return None


def list_command(
    ctx: typer.Context,
    query: str = typer.Option("", "--query", "-q", help="Filter workouts by user"),
) -> None:
    """List workouts, optionally filtered by a search query."""
    state = get_state(ctx)
    console = state.workout_console()
    _fetch(state, console, query)

    if state.json_output:
        print_json_payload(
            state,
            {"query": query, "total": len(console.workouts), "workouts": records_payload(console.workouts)},
        )
        return
    if state.plain_output:
        typer.echo(f"total\t{len(console.workouts)}")
        for line in workouts_plain(console.workouts):
            typer.echo(line)
        return

    state.console.print(workouts_table(console.workouts))
    state.console.print(f"{len(console.workouts)} workout(s)")


def edit_command(
    ctx: typer.Context,
    workout_id: str = typer.Argument(..., help="Workout ID"),
    workout_type: Optional[str] = typer.Option(None, "--workout-type", help="New workout type"),
    duration: Optional[str] = typer.Option(None, "--duration", help="New duration in minutes"),
    calories_burned: Optional[str] = typer.Option(None, "--calories-burned", help="New calories burned"),
    image_url: Optional[str] = typer.Option(None, "--image-url", help="New image URL"),
    query: str = typer.Option("", "--query", "-q", help="Search query used to locate the workout"),
) -> None:
    """Edit one workout and save it."""
    changes: Dict[str, Any] = {
        "workout_type": workout_type,
        "duration": duration,
        "calories_burned": calories_burned,
        "image_url": image_url,
    }
    changes = {key: value for key, value in changes.items() if value is not None}
    if not changes:
        raise typer.BadParameter(
            "Provide at least one of --workout-type, --duration, --calories-burned, --image-url"
        )

    state = get_state(ctx)
    console = state.workout_console()
    _fetch(state, console, query)

    record = find_by_raw_id(console, workout_id)
    if record is None:
        state.console.print(f"Workout {workout_id} not found")
        raise typer.Exit(code=1)

    console.begin_edit(record)
    for field, value in changes.items():
        console.update_draft_field(field, value)
    if not console.save():
        exit_with_console_error(state, console)

    updated = console.find(record.id)
    payload = {"status": "updated", "workout": updated.to_payload() if updated else None}
    if state.json_output:
        print_json_payload(state, payload)
        return
    if state.plain_output:
        typer.echo("status\tupdated")
        typer.echo(f"workout_id\t{workout_id}")
        return
    state.console.print(f"Updated workout {workout_id}")


def delete_command(
    ctx: typer.Context,
    workout_id: str = typer.Argument(..., help="Workout ID"),
    force: bool = typer.Option(False, "--force", help="Skip confirmation prompt"),
) -> None:
    """Delete workout by ID."""
    state = get_state(ctx)
    console = state.workout_console()

    def confirm(message: str) -> bool:
        return force or typer.confirm(message, default=False)

    if not console.delete(workout_id, confirm):
        if not console.error:
            raise typer.Exit(code=0)
        exit_with_console_error(state, console)

    payload = {"status": "deleted", "workout_id": workout_id}
    if state.json_output:
        print_json_payload(state, payload)
        return
    if state.plain_output:
        typer.echo("status\tdeleted")
        typer.echo(f"workout_id\t{workout_id}")
        return
    state.console.print(f"Deleted workout {workout_id}")
