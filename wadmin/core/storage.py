"""Persisted key/value slots backing the operator session."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class TokenStore:
    """Small JSON file of named string slots that survives restarts.

    Only the session token is stored today, but the file is a mapping so the
    slot name stays explicit in the data.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable token store %s", self.path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): str(value) for key, value in data.items() if value is not None}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2) + "\n")
        os.chmod(self.path, 0o600)

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value or None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> bool:
        """Drop a slot; returns whether it was present."""
        data = self._load()
        if key not in data:
            return False
        del data[key]
        if data:
            self._save(data)
        else:
            self.path.unlink(missing_ok=True)
        return True
