"""Configuration loading and path resolution."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from wadmin.core.constants import DEFAULT_BASE_URL


class ConfigError(RuntimeError):
    """Raised when config file parsing fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_data_dir() -> Path:
    """Resolve XDG-style data directory with env override."""
    raw = os.getenv("WADMIN_DATA_DIR", "~/.local/share/wadmin")
    return expand_path(raw)


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("WADMIN_CONFIG_FILE", "~/.config/wadmin/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    data_dir = default_data_dir()
    return {
        "api": {
            "base_url": DEFAULT_BASE_URL,
            "max_retries": 3,
            "timeout_seconds": 0,
        },
        "auth": {
            "token_store": str(data_dir / "session.json"),
        },
    }


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except Exception as exc:
        if suffix in {".toml", ""}:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()
    if cfg_path.exists():
        cfg = _deep_merge(cfg, _read_config(cfg_path))
    return cfg


def resolve_base_url(config: Dict[str, Any]) -> str:
    """Resolve backend base URL: env first, then config, then local default."""
    raw = os.getenv("WADMIN_BACKEND_URL") or config.get("api", {}).get("base_url")
    return str(raw or DEFAULT_BASE_URL).rstrip("/")


def resolve_token_store(config: Dict[str, Any]) -> Path:
    """Resolve token store file path from env/config."""
    raw = os.getenv("WADMIN_TOKEN_STORE") or config.get("auth", {}).get("token_store")
    if not raw:
        raw = str(default_data_dir() / "session.json")
    return expand_path(raw)
