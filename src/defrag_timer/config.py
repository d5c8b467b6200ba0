"""User configuration for Defrag Timer."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    """Immutable configuration loaded from disk."""

    minutes: int = 5
    seconds: int = 0
    rows: int = 8
    cols: int = 20
    unmovable_rows: int = 2
    free_space_percent: int = 25
    fragmented_file_percent: int = 40
    frame_interval_ms: int = 33


def get_config_dir(app_name: str = "defrag-timer") -> Path:
    """Return the per-user config directory for the current platform."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        root = Path(base) if base else Path.home() / "AppData" / "Roaming"
        return _ensure_dir(root / app_name)
    if os.name == "posix" and _is_macos():
        return _ensure_dir(Path.home() / "Library" / "Application Support" / app_name)
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return _ensure_dir(root / app_name)


def get_config_path() -> Path:
    """Return the full config file path."""
    return get_config_dir() / "config.json"


def load_config() -> AppConfig:
    """Load configuration from disk, falling back to defaults on error."""
    path = get_config_path()
    if not path.exists():
        return AppConfig()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.exception("Failed to load config from %s", path)
        return AppConfig()
    if not isinstance(raw, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return AppConfig()
    return _config_from_mapping(raw)


def _ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def _is_macos() -> bool:
    return os.uname().sysname == "Darwin" if hasattr(os, "uname") else False


def _get_int(
    raw: dict[str, Any],
    key: str,
    default: int,
    *,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    """Fetch an integer value with optional clamping."""
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        value = default
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None:
        value = min(max_value, value)
    return value


def _config_from_mapping(raw: dict[str, Any]) -> AppConfig:
    """Normalize raw JSON data into an AppConfig."""
    defaults = AppConfig()
    rows = _get_int(raw, "rows", defaults.rows, min_value=1, max_value=64)
    return AppConfig(
        minutes=_get_int(raw, "minutes", defaults.minutes, min_value=0),
        seconds=_get_int(raw, "seconds", defaults.seconds, min_value=0, max_value=59),
        rows=rows,
        cols=_get_int(raw, "cols", defaults.cols, min_value=1, max_value=128),
        unmovable_rows=_get_int(
            raw, "unmovable_rows", defaults.unmovable_rows, min_value=0, max_value=rows
        ),
        free_space_percent=_get_int(
            raw,
            "free_space_percent",
            defaults.free_space_percent,
            min_value=0,
            max_value=100,
        ),
        fragmented_file_percent=_get_int(
            raw,
            "fragmented_file_percent",
            defaults.fragmented_file_percent,
            min_value=0,
            max_value=100,
        ),
        frame_interval_ms=_get_int(
            raw, "frame_interval_ms", defaults.frame_interval_ms, min_value=10
        ),
    )
