"""Runtime configuration loaded from JSON and overridden on the command line."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .playback import DEFAULT_DOT, DEFAULT_TONE_HZ
from .transport import DEFAULT_BAUDRATE, DEFAULT_RECONNECT_INTERVAL


class ConfigError(ValueError):
    """Raised when a configuration file or override is invalid."""


@dataclass(frozen=True)
class AppConfig:
    port: Optional[str] = None
    baudrate: int = DEFAULT_BAUDRATE
    dot: float = DEFAULT_DOT
    tone_hz: float = DEFAULT_TONE_HZ
    mute: bool = False
    seed: Optional[int] = None
    reconnect_interval: float = DEFAULT_RECONNECT_INTERVAL

    def __post_init__(self) -> None:
        if self.baudrate <= 0:
            raise ConfigError("baudrate must be positive")
        if self.dot <= 0:
            raise ConfigError("dot must be a positive number of seconds")
        if self.tone_hz <= 0:
            raise ConfigError("tone_hz must be positive")
        if self.reconnect_interval <= 0:
            raise ConfigError("reconnect_interval must be positive")

    def with_overrides(self, overrides: Mapping[str, Any]) -> "AppConfig":
        """Return a copy with every non-``None`` value of *overrides* applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **_coerce_fields(changes))


_FIELD_TYPES: Dict[str, tuple] = {
    "port": (str,),
    "baudrate": (int,),
    "dot": (int, float),
    "tone_hz": (int, float),
    "mute": (bool,),
    "seed": (int,),
    "reconnect_interval": (int, float),
}


def _coerce_fields(values: Mapping[str, Any]) -> Dict[str, Any]:
    known = {field.name for field in fields(AppConfig)}
    result: Dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            raise ConfigError(f"Unknown configuration key {key!r}")
        if value is None:
            if key in ("port", "seed"):
                result[key] = None
                continue
            raise ConfigError(f"{key} cannot be null")
        expected = _FIELD_TYPES[key]
        # bool is an int subclass; only accept it where a bool is wanted.
        if isinstance(value, bool) and bool not in expected:
            raise ConfigError(f"{key} must not be a boolean")
        if not isinstance(value, expected):
            names = " or ".join(kind.__name__ for kind in expected)
            raise ConfigError(f"{key} must be of type {names}")
        if key in ("dot", "tone_hz", "reconnect_interval"):
            value = float(value)
        result[key] = value
    return result


def load_config(path: Path) -> AppConfig:
    try:
        contents = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file {path} does not exist") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Configuration file {path} is not valid JSON: {exc}") from exc
    if not isinstance(contents, dict):
        raise ConfigError("Configuration file must contain a JSON object")
    return AppConfig(**_coerce_fields(contents))


__all__ = ["AppConfig", "ConfigError", "load_config"]
