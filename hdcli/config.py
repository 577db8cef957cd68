"""User configuration stored as TOML in the per-user config directory."""

from __future__ import annotations

import os
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import tomli_w

_APP_DIR = "headsdown"
_CONFIG_FILE = "config.toml"


@dataclass
class TelemetryConfig:
    """Anonymous usage telemetry settings."""

    enabled: bool = False


@dataclass
class CalibrationConfig:
    """Calibration reporting settings (improves verdict accuracy over time)."""

    enabled: bool = True


@dataclass
class Config:
    """The whole user configuration."""

    default_duration: int | None = None
    default_model: str | None = None
    api_url: str | None = None
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    calibration: CalibrationConfig = field(default_factory=CalibrationConfig)
    aliases: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Build a config from parsed TOML, ignoring unknown keys."""
        aliases_raw = _typed(data, "aliases", dict, {})
        aliases: dict[str, str] = {}
        for name, command in aliases_raw.items():
            if not isinstance(command, str):
                raise ValueError(f"invalid type for alias {name!r}: expected a string")
            aliases[name] = command
        telemetry = _typed(data, "telemetry", dict, {})
        calibration = _typed(data, "calibration", dict, {})
        return cls(
            default_duration=_typed(data, "default_duration", int, None),
            default_model=_typed(data, "default_model", str, None),
            api_url=_typed(data, "api_url", str, None),
            telemetry=TelemetryConfig(enabled=_typed(telemetry, "enabled", bool, False)),
            calibration=CalibrationConfig(enabled=_typed(calibration, "enabled", bool, True)),
            aliases=aliases,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a TOML-ready mapping; unset optional values are left out."""
        data: dict[str, Any] = {}
        if self.default_duration is not None:
            data["default_duration"] = self.default_duration
        if self.default_model is not None:
            data["default_model"] = self.default_model
        if self.api_url is not None:
            data["api_url"] = self.api_url
        data["telemetry"] = {"enabled": self.telemetry.enabled}
        data["calibration"] = {"enabled": self.calibration.enabled}
        data["aliases"] = dict(self.aliases)
        return data


def _typed(table: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = table.get(key, default)
    if value is default:
        return value
    if kind is int and isinstance(value, bool):
        raise ValueError(f"invalid type for {key!r}: expected an integer")
    if not isinstance(value, kind):
        raise ValueError(f"invalid type for {key!r}: expected {kind.__name__}")
    return value


def config_dir() -> Path:
    """Return the config directory, respecting XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg is not None:
        return Path(xdg) / _APP_DIR
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise RuntimeError("Could not determine config directory") from exc
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if not appdata:
            raise RuntimeError("Could not determine config directory")
        return Path(appdata) / _APP_DIR / _APP_DIR / "config"
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / "app.headsdown.headsdown"
    return home / ".config" / _APP_DIR


def config_path() -> Path:
    """Return the path of the config file."""
    return config_dir() / _CONFIG_FILE


def load() -> Config:
    """Load the config from disk, or the defaults when no file exists."""
    path = config_path()
    if not path.exists():
        return Config()
    try:
        contents = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise OSError(f"Failed to read {path}: {exc}") from exc
    try:
        return Config.from_dict(tomllib.loads(contents))
    except (tomllib.TOMLDecodeError, ValueError) as exc:
        raise ValueError(f"Failed to parse {path}: {exc}") from exc


def save(config: Config) -> None:
    """Write the config to disk, creating its directory if needed."""
    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    contents = tomli_w.dumps(config.to_dict())
    try:
        path.write_text(contents, encoding="utf-8")
    except OSError as exc:
        raise OSError(f"Failed to write {path}: {exc}") from exc


def update(func: Callable[[Config], Any]) -> None:
    """Load the config, let ``func`` change it in place, and save it."""
    config = load()
    func(config)
    save(config)