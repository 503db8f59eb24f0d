"""Entry point for wadmin."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from wadmin import __version__
from wadmin.commands.auth import login_command, logout_command, status_command
from wadmin.commands.shell import shell_command
from wadmin.commands.workouts import delete_command, edit_command, list_command
from wadmin.core.config import ConfigError, load_config
from wadmin.core.log import configure_logging
from wadmin.core.state import CLIState

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="Workout admin console",
    no_args_is_help=True,
)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def main_callback(
    ctx: typer.Context,
    backend_url: Optional[str] = typer.Option(
        None,
        "--backend-url",
        envvar="WADMIN_BACKEND_URL",
        help="Backend base URL (default from config, then http://localhost:5000)",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON where available"),
    plain_output: bool = typer.Option(False, "--plain", help="Tab-separated output without rich formatting"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and state changes"),
    quiet: bool = typer.Option(False, "--quiet", help="Suppress console output"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Resolve config and the operator session for the invoked command."""
    if json_output and plain_output:
        typer.echo("Options --json and --plain are mutually exclusive.")
        raise typer.Exit(code=2)

    try:
        cfg = load_config(config.expanduser().resolve() if config else None)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    console = Console(quiet=quiet, no_color=plain_output, log_time=False, log_path=False)
    configure_logging(console, verbose=verbose, quiet=quiet)

    state = CLIState.from_config(
        cfg,
        console,
        base_url=backend_url.rstrip("/") if backend_url else None,
        json_output=json_output,
        plain_output=plain_output,
    )
    logger.debug("Backend %s, token store %s", state.session.base_url, state.session.store.path)
    ctx.obj = state


app.command("login")(login_command)
app.command("logout")(logout_command)
app.command("status")(status_command)
app.command("list")(list_command)
app.command("edit")(edit_command)
app.command("delete")(delete_command)
app.command("shell")(shell_command)


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
