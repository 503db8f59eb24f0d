"""Workout admin REST API client with retry on transient failures."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

import requests

from wadmin.core.constants import RETRYABLE_STATUS_CODES, WORKOUTS_PATH

logger = logging.getLogger(__name__)


class APIError(RuntimeError):
    """Raised for API failures after retries.

    ``status_code`` is ``None`` when no response was received at all.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        server_message: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message

    @property
    def no_response(self) -> bool:
        return self.status_code is None


def _server_message(response: requests.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        for key in ("message", "error"):
            if data.get(key):
                return str(data[key])
    return None


class WorkoutAdminAPI:
    """Thin wrapper around the admin workout endpoints.

    ``auth_header`` is called right before every request so a token removed
    mid-session is noticed on the next call.
    """

    def __init__(
        self,
        base_url: str,
        auth_header: Callable[[], Dict[str, str]],
        max_retries: int = 3,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.auth_header = auth_header
        self.max_retries = max(1, max_retries)
        self.timeout_seconds = timeout_seconds or None

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        headers.update(self.auth_header())
        return headers

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        headers = self._headers()
        url = f"{self.base_url}{path}"
        last_error: Optional[APIError] = None

        for attempt in range(1, self.max_retries + 1):
            try:
                response = requests.request(
                    method=method,
                    url=url,
                    headers=headers,
                    params=params,
                    json=json_data,
                    timeout=self.timeout_seconds,
                )
            except requests.RequestException as exc:
                last_error = APIError(f"API request failed for {method} {path}: {exc}")
            else:
                if response.ok:
                    if not response.text:
                        return {}
                    try:
                        return response.json()
                    except ValueError as exc:
                        raise APIError(
                            f"Invalid JSON from {method} {path}",
                            status_code=response.status_code,
                        ) from exc

                last_error = APIError(
                    f"API request failed for {method} {path}: HTTP {response.status_code}",
                    status_code=response.status_code,
                    server_message=_server_message(response),
                )
                if response.status_code not in RETRYABLE_STATUS_CODES:
                    break

            if attempt >= self.max_retries:
                break
            logger.debug("Retrying %s %s after attempt %d", method, path, attempt)
            time.sleep(min(2**attempt, 8))

        raise last_error or APIError(f"API request failed for {method} {path}")

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("GET", path, params=params)

    def put(self, path: str, payload: Dict[str, Any]) -> Any:
        return self._request("PUT", path, json_data=payload)

    def delete(self, path: str) -> Any:
        return self._request("DELETE", path)

    def list_workouts(self, query: str = "") -> List[Dict[str, Any]]:
        payload = self.get(WORKOUTS_PATH, params={"query": query})
        if not isinstance(payload, list):
            raise APIError(f"Expected a list from GET {WORKOUTS_PATH}", status_code=200)
        return payload

    def update_workout(self, workout_id: Any, payload: Dict[str, Any]) -> Any:
        return self.put(f"{WORKOUTS_PATH}/{workout_id}", payload)

    def delete_workout(self, workout_id: Any) -> Any:
        return self.delete(f"{WORKOUTS_PATH}/{workout_id}")
