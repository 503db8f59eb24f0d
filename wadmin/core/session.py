"""Operator session: login, persisted bearer token, auth headers."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from wadmin.core.constants import LOGIN_PATH, TOKEN_KEY
from wadmin.core.errors import AuthError, MissingCredential, NetworkUnreachable
from wadmin.core.storage import TokenStore

logger = logging.getLogger(__name__)


def _response_message(response: requests.Response, *keys: str) -> Optional[str]:
    """Pull a server-supplied message out of a JSON error body."""
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    for key in keys:
        value = data.get(key)
        if value:
            return str(value)
    return None


class SessionManager:
    """Owns the bearer token for the operator session.

    Unauthenticated until ``login`` succeeds; back to unauthenticated when the
    stored token is removed by ``logout`` or from outside the process. Token
    validity is never checked locally, each API response decides.
    """

    def __init__(
        self,
        base_url: str,
        store: TokenStore,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.store = store
        self.timeout_seconds = timeout_seconds or None

    def login(self, email: str, password: str) -> str:
        """Exchange credentials for a token and persist it."""
        try:
            response = requests.post(
                f"{self.base_url}{LOGIN_PATH}",
                json={"email": email, "password": password},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.warning("Login request got no response: %s", exc)
            raise NetworkUnreachable() from exc

        if not response.ok:
            message = _response_message(response, "error")
            logger.warning("Login rejected with status %s", response.status_code)
            raise AuthError(message)

        token: Any = None
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            token = payload.get("token")
        if not token:
            raise AuthError("Login response did not include a token")

        self.store.set(TOKEN_KEY, str(token))
        logger.debug("Stored session token for %s", email)
        return str(token)

    def logout(self) -> bool:
        """Forget the stored token."""
        return self.store.remove(TOKEN_KEY)

    def current_credential(self) -> Optional[str]:
        token = self.store.get(TOKEN_KEY)
        if token is None or not token.strip():
            return None
        return token

    @property
    def is_authenticated(self) -> bool:
        return self.current_credential() is not None

    def auth_header(self) -> Dict[str, str]:
        """Build the Authorization header, failing fast without a token."""
        token = self.current_credential()
        if token is None:
            raise MissingCredential()
        return {"Authorization": f"Bearer {token}"}
