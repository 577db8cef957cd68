"""Verdict threshold settings: update variables, response decoding and display."""

from __future__ import annotations

import json
from typing import Any

from hdcli import format as fmt
from hdcli.availability import ResponseShapeError

_MISSING = object()


def build_update_variables(
    thresholds: str | None = None,
    default_wrap_up_mode: str | None = None,
    wrap_up_threshold_minutes: int | None = None,
) -> dict[str, Any]:
    """Build the variables for a settings update.

    ``thresholds`` is a JSON object given as text. Raises ``ValueError`` when
    nothing is to be updated or when the thresholds are not valid JSON.
    """
    if thresholds is None and default_wrap_up_mode is None and wrap_up_threshold_minutes is None:
        raise ValueError(
            "No updates provided. Pass at least one of --thresholds, "
            "--default-wrap-up-mode, or --wrap-up-threshold-minutes."
        )
    parsed_thresholds: Any = None
    if thresholds is not None:
        try:
            parsed_thresholds = json.loads(thresholds)
        except json.JSONDecodeError as exc:
            raise ValueError(f"thresholds must be valid JSON: {exc}") from exc
    return {
        "thresholds": parsed_thresholds,
        "defaultWrapUpMode": (
            default_wrap_up_mode.upper() if default_wrap_up_mode is not None else None
        ),
        "wrapUpThresholdMinutes": wrap_up_threshold_minutes,
    }


def _require(data: dict[str, Any], key: str, kind: type) -> Any:
    value = data.get(key)
    if value is None:
        raise ResponseShapeError(f"field {key!r} is missing")
    if (kind is int and isinstance(value, bool)) or not isinstance(value, kind):
        raise ResponseShapeError(f"field {key!r} must be {kind.__name__}")
    return value


def decode_settings(data: Any) -> dict[str, Any]:
    """Check a verdict settings object from the API and return its fields."""
    if not isinstance(data, dict):
        raise ResponseShapeError("verdict settings must be an object")
    thresholds = data.get("thresholds", _MISSING)
    if thresholds is _MISSING:
        raise ResponseShapeError("field 'thresholds' is missing")
    return {
        "id": _require(data, "id", str),
        "thresholds": thresholds,
        "defaultWrapUpMode": _require(data, "defaultWrapUpMode", str),
        "wrapUpThresholdMinutes": _require(data, "wrapUpThresholdMinutes", int),
        "updatedAt": _require(data, "updatedAt", str),
    }


def format_settings(settings: dict[str, Any]) -> str:
    """Render decoded verdict settings as terminal lines."""
    lines = [
        "",
        f"  {fmt.styled_bold('Verdict settings')}",
        "",
        f"  {fmt.styled_dimmed('ID:')} {settings['id']}",
        f"  {fmt.styled_dimmed('Default wrap-up mode:')} {settings['defaultWrapUpMode']}",
        f"  {fmt.styled_dimmed('Wrap-up threshold:')} "
        f"{settings['wrapUpThresholdMinutes']} min",
        f"  {fmt.styled_dimmed('Thresholds:')}",
        json.dumps(settings["thresholds"], indent=2, ensure_ascii=False),
        "",
    ]
    return "\n".join(lines)