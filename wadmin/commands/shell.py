"""Interactive admin console."""

from __future__ import annotations

import shlex
from typing import Callable, Dict, List

import typer

from wadmin.commands.common import get_state
from wadmin.commands.workouts import find_by_raw_id
from wadmin.core.console import WorkoutConsole
from wadmin.core.state import CLIState
from wadmin.utils.formatting import workouts_plain, workouts_table

HELP_TEXT = """Commands:
  search [TEXT]        refetch workouts matching TEXT (empty for all)
  list                 show the loaded workouts
  refresh              refetch with the current search
  edit ID              open a draft for workout ID
  set FIELD VALUE      change a draft field (workout_type, duration, calories_burned, image_url)
  draft                show the open draft
  save                 validate and save the draft
  cancel               discard the draft
  delete ID            delete workout ID (asks for confirmation)
  quit                 leave the console"""


class ShellSession:
    """Line-oriented front end over a WorkoutConsole."""

    def __init__(self, state: CLIState, console: WorkoutConsole) -> None:
        self.state = state
        self.console = console
        self.handlers: Dict[str, Callable[[List[str]], None]] = {
            "search": self.do_search,
            "list": self.do_list,
            "refresh": self.do_refresh,
            "edit": self.do_edit,
            "set": self.do_set,
            "draft": self.do_draft,
            "save": self.do_save,
            "cancel": self.do_cancel,
            "delete": self.do_delete,
            "help": self.do_help,
        }

    def out(self, message: str) -> None:
        if self.state.plain_output:
            typer.echo(message)
        else:
            self.state.console.print(message, markup=False)

    def show_error(self) -> None:
        if self.console.error:
            self.out(f"Error: {self.console.error}")

    def do_help(self, args: List[str]) -> None:
        self.out(HELP_TEXT)

    def do_list(self, args: List[str]) -> None:
        if self.state.plain_output:
            for line in workouts_plain(self.console.workouts):
                typer.echo(line)
        else:
            self.state.console.print(workouts_table(self.console.workouts))
        self.out(f"{len(self.console.workouts)} workout(s)")

    def do_search(self, args: List[str]) -> None:
        self.console.search(" ".join(args))
        if self.console.error:
            self.show_error()
            return
        self.do_list([])

    def do_refresh(self, args: List[str]) -> None:
        self.console.refresh()
        if self.console.error:
            self.show_error()
            return
        self.do_list([])

    def do_edit(self, args: List[str]) -> None:
        if len(args) != 1:
            self.out("Usage: edit ID")
            return
        record = find_by_raw_id(self.console, args[0])
        if record is None:
            self.out(f"Workout {args[0]} not found")
            return
        self.console.begin_edit(record)
        self.do_draft([])

    def do_set(self, args: List[str]) -> None:
        if self.console.draft is None:
            self.out("No workout is being edited")
            return
        if len(args) < 2:
            self.out("Usage: set FIELD VALUE")
            return
        try:
            self.console.update_draft_field(args[0], " ".join(args[1:]))
        except KeyError as exc:
            self.out(str(exc.args[0]))

    def do_draft(self, args: List[str]) -> None:
        draft = self.console.draft
        if draft is None:
            self.out("No workout is being edited")
            return
        self.out(f"Editing workout {draft.id}")
        self.out(f"  workout_type     {draft.workout_type}")
        self.out(f"  duration         {draft.duration}")
        self.out(f"  calories_burned  {draft.calories_burned}")
        self.out(f"  image_url        {draft.image_url or ''}")

    def do_save(self, args: List[str]) -> None:
        if self.console.draft is None:
            self.out("No workout is being edited")
            return
        workout_id = self.console.draft.id
        if self.console.save():
            self.out(f"Saved workout {workout_id}")
        else:
            self.show_error()

    def do_cancel(self, args: List[str]) -> None:
        self.console.cancel_edit()
        self.out("Edit cancelled")

    def do_delete(self, args: List[str]) -> None:
        if len(args) != 1:
            self.out("Usage: delete ID")
            return
        record = find_by_raw_id(self.console, args[0])
        workout_id = record.id if record is not None else args[0]
        answers: List[bool] = []

        def confirm(message: str) -> bool:
            answers.append(typer.confirm(message, default=False))
            return answers[-1]

        if self.console.delete(workout_id, confirm):
            self.out(f"Deleted workout {args[0]}")
        elif answers and answers[-1]:
            self.show_error()

    def handle(self, line: str) -> bool:
        """Run one command line; returns False when the session should end."""
        head, _, rest = line.strip().partition(" ")
        if not head:
            return True
        command = head.lower()
        if command == "search":
            # Search text is taken as typed; names like o'brien are not shell quoting.
            rest = rest.strip()
            args = [rest] if rest else []
        else:
            try:
                args = shlex.split(rest)
            except ValueError as exc:
                self.out(f"Could not parse command: {exc}")
                return True
        if command in {"quit", "exit"}:
            return False
        handler = self.handlers.get(command)
        if handler is None:
            self.out(f"Unknown command: {command}. Type 'help' for commands.")
            return True
        handler(args)
        return True

    def run(self) -> None:
        self.do_search([])
        while True:
            try:
                line = typer.prompt("wadmin", default="", show_default=False, prompt_suffix="> ")
            except typer.Abort:
                break
            if not self.handle(line):
                break


def shell_command(ctx: typer.Context) -> None:
    """Open an interactive console to search, edit and delete workouts."""
    state = get_state(ctx)
    ShellSession(state, state.workout_console()).run()
