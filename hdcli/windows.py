"""Reachability window inputs: validation, normalisation and display."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from hdcli import format as fmt
from hdcli.availability import ResponseShapeError, format_days

_ORDERED_DAYS = (
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
)

_DAY_ALIASES = {
    "mon": "MONDAY",
    "monday": "MONDAY",
    "tue": "TUESDAY",
    "tues": "TUESDAY",
    "tuesday": "TUESDAY",
    "wed": "WEDNESDAY",
    "wednesday": "WEDNESDAY",
    "thu": "THURSDAY",
    "thur": "THURSDAY",
    "thurs": "THURSDAY",
    "thursday": "THURSDAY",
    "fri": "FRIDAY",
    "friday": "FRIDAY",
    "sat": "SATURDAY",
    "saturday": "SATURDAY",
    "sun": "SUNDAY",
    "sunday": "SUNDAY",
}

_REQUIRED_FOR_CREATE = ("label", "mode", "days", "start", "end")


@dataclass
class WindowInputArgs:
    """Fields a user may pass when creating or updating a window."""

    label: str | None = None
    mode: str | None = None
    days: str | None = None
    start: str | None = None
    end: str | None = None
    alerts_policy: str | None = None
    priority: int | None = None
    auto_activate: bool | None = None
    snooze: bool | None = None
    status: bool | None = None
    status_emoji: str | None = None
    status_text: str | None = None


def require_create_fields(args: WindowInputArgs) -> None:
    """Raise ``ValueError`` unless the fields a new window needs are all set."""
    if any(getattr(args, name) is None for name in _REQUIRED_FOR_CREATE):
        raise ValueError("Create requires --label, --mode, --days, --start, and --end.")


def all_fields_empty(args: WindowInputArgs) -> bool:
    """Whether no field at all was given."""
    return all(getattr(args, f.name) is None for f in fields(args))


def normalize_mode(mode: str) -> str:
    return mode.strip().replace("-", "_").upper()


def normalize_alerts_policy(policy: str) -> str:
    return policy.strip().replace("-", "_").upper()


def normalize_day(day: str) -> str:
    """Map a day name or abbreviation to its upper-case full name."""
    key = day.strip().lower()
    return _DAY_ALIASES.get(key, key.replace("-", "_").upper())


def normalize_days_input(text: str) -> list[str]:
    """Turn 'Mon-Fri' (a range, wrapping past Sunday) or 'Mon,Wed' into day names."""
    normalized = text.strip()
    parts = normalized.split("-")
    if len(parts) == 2:
        start, end = normalize_day(parts[0]), normalize_day(parts[1])
        if start in _ORDERED_DAYS and end in _ORDERED_DAYS:
            start_idx = _ORDERED_DAYS.index(start)
            end_idx = _ORDERED_DAYS.index(end)
            if start_idx <= end_idx:
                return list(_ORDERED_DAYS[start_idx : end_idx + 1])
            return list(_ORDERED_DAYS[start_idx:] + _ORDERED_DAYS[: end_idx + 1])
    return [normalize_day(part) for part in normalized.split(",")]


def build_input(args: WindowInputArgs) -> dict[str, Any]:
    """Build the API input object from the given fields, leaving unset ones out."""
    transforms: dict[str, tuple[str, Any]] = {
        "label": ("label", None),
        "mode": ("mode", normalize_mode),
        "days": ("days", normalize_days_input),
        "start": ("startTime", None),
        "end": ("endTime", None),
        "alerts_policy": ("alertsPolicy", normalize_alerts_policy),
        "priority": ("priority", None),
        "auto_activate": ("autoActivate", None),
        "snooze": ("snooze", None),
        "status": ("status", None),
        "status_emoji": ("statusEmoji", None),
        "status_text": ("statusText", None),
    }
    result: dict[str, Any] = {}
    for name, (key, transform) in transforms.items():
        value = getattr(args, name)
        if value is not None:
            result[key] = transform(value) if transform else value
    return result


def _field(window: dict[str, Any], key: str, kind: type, required: bool = False) -> Any:
    value = window.get(key)
    if value is None:
        if required:
            raise ResponseShapeError(f"field {key!r} is missing")
        return None
    if (kind is int and isinstance(value, bool)) or not isinstance(value, kind):
        raise ResponseShapeError(f"field {key!r} must be {kind.__name__}")
    return value


def _days(window: dict[str, Any]) -> list[str] | str | None:
    value = window.get("days")
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(day, str) for day in value):
        return value
    raise ResponseShapeError("field 'days' must be a string or a list of strings")


def _flag(value: bool | None) -> str:
    return "true" if value else "false"


def format_window(window: dict[str, Any]) -> str:
    """Render a window object from the API as indented terminal lines."""
    if not isinstance(window, dict):
        raise ResponseShapeError("window must be an object")
    window_id = _field(window, "id", str, required=True)
    label = _field(window, "label", str, required=True)
    mode = _field(window, "mode", str, required=True).upper()
    days = format_days(_days(window))
    start = _field(window, "startTime", str) or "-"
    end = _field(window, "endTime", str) or "-"
    policy = _field(window, "alertsPolicy", str) or "-"
    priority = _field(window, "priority", int) or 0
    auto_activate = _field(window, "autoActivate", bool)
    status = _field(window, "status", bool)
    emoji = _field(window, "statusEmoji", str) or ""
    text = _field(window, "statusText", str) or ""

    lines = [
        f"  {fmt.styled_dimmed('•')} {fmt.styled_bold(label)} ({fmt.color_mode(mode)})",
        f"    {fmt.styled_dimmed('Window:')} {days} {start}-{end}",
        f"    {fmt.styled_dimmed('Alerts:')} {policy.lower().replace('_', ' ')}",
        f"    {fmt.styled_dimmed('Priority:')} {priority}  "
        f"{fmt.styled_dimmed('Auto:')} {_flag(auto_activate)}  "
        f"{fmt.styled_dimmed('Status:')} {_flag(status)}",
    ]
    if emoji or text:
        lines.append(f"    {fmt.styled_dimmed('Message:')} {emoji} {text}")
    lines.append(f"    {fmt.styled_dimmed('ID:')} {fmt.styled_dimmed(window_id)}")
    lines.append("")
    return "\n".join(lines)