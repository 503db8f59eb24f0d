"""Authentication commands."""

from __future__ import annotations

from contextlib import nullcontext

import typer

from wadmin.commands.common import get_state, print_json_payload
from wadmin.core.errors import AuthError, NetworkUnreachable


def login_command(
    ctx: typer.Context,
    email: str = typer.Option(..., prompt=True, help="Admin email", envvar="WADMIN_EMAIL"),
    password: str = typer.Option(
        ...,
        prompt=True,
        hide_input=True,
        help="Admin password",
        envvar="WADMIN_PASSWORD",
    ),
) -> None:
    """Log in and store the session token."""
    state = get_state(ctx)
    session = state.session

    try:
        status_ctx = state.console.status("Logging in...") if not state.plain_output else nullcontext()
        with status_ctx:
            session.login(email, password)
    except (AuthError, NetworkUnreachable) as exc:
        if state.json_output:
            print_json_payload(
                state,
                {"status": "error", "kind": type(exc).__name__, "message": exc.message},
            )
        elif state.plain_output:
            typer.echo("status\terror")
            typer.echo(f"message\t{exc.message}")
        else:
            state.console.print(f"Login failed: {exc.message}")
        raise typer.Exit(code=1)

    if state.json_output:
        print_json_payload(state, {"status": "success", "authenticated": True, "email": email})
        return
    if state.plain_output:
        typer.echo("status\tsuccess")
        typer.echo(f"email\t{email}")
        return
    state.console.print(f"Logged in as {email}")


def logout_command(ctx: typer.Context) -> None:
    """Delete the stored session token."""
    state = get_state(ctx)
    removed = state.session.logout()

    if state.json_output:
        print_json_payload(state, {"status": "success", "logged_out": removed})
        return
    if state.plain_output:
        typer.echo("status\tsuccess")
        typer.echo(f"logged_out\t{str(removed).lower()}")
        return
    state.console.print("Session token removed" if removed else "No stored session token")


def status_command(ctx: typer.Context) -> None:
    """Show whether a session token is stored."""
    state = get_state(ctx)
    session = state.session
    payload = {"authenticated": session.is_authenticated, "base_url": session.base_url}

    if state.json_output:
        print_json_payload(state, payload)
        return
    if state.plain_output:
        typer.echo(f"authenticated\t{str(payload['authenticated']).lower()}")
        typer.echo(f"base_url\t{payload['base_url']}")
        return
    label = "Authenticated" if session.is_authenticated else "Not logged in"
    state.console.print(f"{label} ({session.base_url})")
