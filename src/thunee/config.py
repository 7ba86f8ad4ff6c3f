"""
Match configuration: house-rule toggles and ball tunables.

The engine receives a ``GameConfig`` at construction time and never touches
storage itself. ``load_config`` / ``save_config`` are for the settings
collaborator (CLI, app shell): they persist the same camelCase keys the
settings store uses, and loading falls back to defaults instead of failing.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_BLIND_SUCCESS_BALLS = 8
DEFAULT_MATCH_TARGET = 12
KUNUCK_MATCH_TARGET = 13


@dataclass(frozen=True)
class GameConfig:
    # Special call toggles
    enable_royals: bool = True
    enable_blind_thunee: bool = True
    enable_blind_royals: bool = True
    enable_jodi: bool = True
    enable_double: bool = True
    enable_kunuck: bool = True

    # House rules
    enable_first_third_only_jodi_calls: bool = True  # Jodi only right after trick 1 or 3
    enable_call_over_teammates: bool = False
    enable_call_and_loss: bool = False

    # Tunables
    blind_thunee_success_balls: int = DEFAULT_BLIND_SUCCESS_BALLS
    blind_royals_success_balls: int = DEFAULT_BLIND_SUCCESS_BALLS
    match_target: int = DEFAULT_MATCH_TARGET

    def with_overrides(self, **overrides: Any) -> "GameConfig":
        return replace(self, **overrides)


DEFAULT_CONFIG = GameConfig()


def basic_config() -> GameConfig:
    """Plain game: open Thunee is the only declaration left on."""
    return GameConfig(
        enable_royals=False,
        enable_blind_thunee=False,
        enable_blind_royals=False,
        enable_jodi=False,
        enable_double=False,
        enable_kunuck=False,
    )


def strict_config() -> GameConfig:
    """Strict house rules: first/third-trick Jodi and call-and-loss."""
    return GameConfig(
        enable_first_third_only_jodi_calls=True,
        enable_call_over_teammates=False,
        enable_call_and_loss=True,
    )


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


_KEYS = {f.name: _camel(f.name) for f in fields(GameConfig)}


def config_to_dict(config: GameConfig) -> Dict[str, Any]:
    """JSON-compatible dict with the settings store's camelCase keys."""
    return {key: getattr(config, name) for name, key in _KEYS.items()}


def config_from_dict(d: Dict[str, Any]) -> GameConfig:
    """
    Build a GameConfig from a settings dict.

    Missing keys take the default; values of the wrong type are ignored (and
    take the default) rather than raising. Unknown keys are ignored.
    """
    values: Dict[str, Any] = {}
    for f in fields(GameConfig):
        key = _KEYS[f.name]
        if key not in d:
            continue
        raw = d[key]
        default = getattr(DEFAULT_CONFIG, f.name)
        # bool is a subclass of int: check it first so True never becomes a ball count
        if isinstance(default, bool):
            valid = isinstance(raw, bool)
        else:
            valid = isinstance(raw, int) and not isinstance(raw, bool) and raw > 0
        if valid:
            values[f.name] = raw
        else:
            logger.warning("Ignoring invalid value %r for setting %s", raw, key)
    return GameConfig(**values)


def load_config(path: Path | str) -> GameConfig:
    """Load settings from a JSON file; defaults when missing or unreadable."""
    path = Path(path)
    if not path.exists():
        return DEFAULT_CONFIG
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, dict):
            raise ValueError("settings file must contain a JSON object")
        return config_from_dict(payload)
    except (OSError, ValueError, TypeError) as exc:
        # json.JSONDecodeError is a ValueError
        logger.warning("Could not read settings from %s (%s); using defaults", path, exc)
        return DEFAULT_CONFIG


def save_config(config: GameConfig, path: Path | str) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(config_to_dict(config), f, indent=2)


__all__ = [
    "GameConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_MATCH_TARGET",
    "KUNUCK_MATCH_TARGET",
    "basic_config",
    "strict_config",
    "config_to_dict",
    "config_from_dict",
    "load_config",
    "save_config",
]
