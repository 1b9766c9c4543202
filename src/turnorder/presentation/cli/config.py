"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict

from turnorder.core.constants import QUEUE_STEPS, TIMELINE_LENGTH

_DEFAULTS: Dict[str, int] = {
    "queue_steps": QUEUE_STEPS,
    "timeline_length": TIMELINE_LENGTH,
}


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "TurnOrder"
        return Path.home() / "TurnOrder"
    return Path.home() / ".config" / "turnorder"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def _normalize_positive_int(value: object, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def _normalize(raw: Dict[str, object]) -> Dict[str, int]:
    return {key: _normalize_positive_int(raw.get(key), default) for key, default in _DEFAULTS.items()}


def load_config(path: Path | None = None) -> Dict[str, int]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return dict(_DEFAULTS)
    if not isinstance(raw, dict):
        return dict(_DEFAULTS)
    return _normalize(raw)


def save_config(config: Dict[str, object], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = _normalize(config)
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
