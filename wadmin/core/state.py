"""Per-invocation session wiring shared by all commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from rich.console import Console

from wadmin.core.api import WorkoutAdminAPI
from wadmin.core.config import resolve_base_url, resolve_token_store
from wadmin.core.console import WorkoutConsole
from wadmin.core.session import SessionManager
from wadmin.core.storage import TokenStore


@dataclass
class CLIState:
    """Output mode plus the operator session resolved once from config.

    Commands read ``session`` for the base URL and token store instead of
    looking them up again.
    """

    session: SessionManager
    console: Console
    json_output: bool = False
    plain_output: bool = False
    max_retries: int = 3
    timeout_seconds: Optional[float] = None

    @classmethod
    def from_config(
        cls,
        config: Dict[str, Any],
        console: Console,
        base_url: Optional[str] = None,
        json_output: bool = False,
        plain_output: bool = False,
    ) -> "CLIState":
        api_cfg = config.get("api", {})
        timeout = float(api_cfg.get("timeout_seconds", 0) or 0) or None
        session = SessionManager(
            base_url=base_url or resolve_base_url(config),
            store=TokenStore(resolve_token_store(config)),
            timeout_seconds=timeout,
        )
        return cls(
            session=session,
            console=console,
            json_output=json_output and not plain_output,
            plain_output=plain_output,
            max_retries=int(api_cfg.get("max_retries", 3)),
            timeout_seconds=timeout,
        )

    def workout_console(self) -> WorkoutConsole:
        """A fresh console whose requests authenticate through ``session``."""
        api = WorkoutAdminAPI(
            base_url=self.session.base_url,
            auth_header=self.session.auth_header,
            max_retries=self.max_retries,
            timeout_seconds=self.timeout_seconds,
        )
        return WorkoutConsole(api)
