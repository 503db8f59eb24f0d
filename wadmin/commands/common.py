"""Shared command helpers."""

from __future__ import annotations

import json
from typing import Any, Dict, List

import typer

from wadmin.core.console import WorkoutConsole
from wadmin.core.models import WorkoutRecord
from wadmin.core.state import CLIState


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)


def records_payload(records: List[WorkoutRecord]) -> List[Dict[str, Any]]:
    return [record.to_payload() for record in records]


def exit_with_console_error(state: CLIState, console: WorkoutConsole) -> None:
    """Report the console's current error in the active output mode and exit 1."""
    kind = type(console.failure).__name__ if console.failure else "Error"
    if state.json_output:
        print_json_payload(state, {"status": "error", "kind": kind, "message": console.error})
    elif state.plain_output:
        typer.echo("status\terror")
        typer.echo(f"kind\t{kind}")
        typer.echo(f"message\t{console.error}")
    else:
        state.console.print(f"[red]{console.error}[/red]")
    raise typer.Exit(code=1)
