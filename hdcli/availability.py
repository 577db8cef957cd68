"""Availability resolution data returned by the API, with strict shape checks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

Days = list[str] | str


class ResponseShapeError(ValueError):
    """Raised when an API payload does not have the expected shape."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to decode API response shape: {detail}")


def _optional(data: dict[str, Any], key: str, kind: type) -> Any:
    value = data.get(key)
    if value is None:
        return None
    if kind is int and isinstance(value, bool) or not isinstance(value, kind):
        raise ResponseShapeError(f"field {key!r} must be {kind.__name__}")
    return value


def _parse_days(value: Any) -> Days | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(day, str) for day in value):
        return list(value)
    raise ResponseShapeError("field 'days' must be a string or a list of strings")


@dataclass
class AvailabilityWindow:
    """A window as reported inside an availability resolution."""

    id: str | None = None
    label: str | None = None
    mode: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    days: Days | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "mode": self.mode,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "days": self.days,
        }


@dataclass
class AvailabilityResolution:
    """Whether the user is reachable now and which windows apply."""

    in_reachable_hours: bool | None = None
    next_transition_at: str | None = None
    active_window: AvailabilityWindow | None = None
    next_window: AvailabilityWindow | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "inReachableHours": self.in_reachable_hours,
            "nextTransitionAt": self.next_transition_at,
            "activeWindow": self.active_window.to_dict() if self.active_window else None,
            "nextWindow": self.next_window.to_dict() if self.next_window else None,
        }


def parse_window(data: Any) -> AvailabilityWindow | None:
    """Decode a window object; ``None`` stays ``None``."""
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ResponseShapeError("window must be an object")
    return AvailabilityWindow(
        id=_optional(data, "id", str),
        label=_optional(data, "label", str),
        mode=_optional(data, "mode", str),
        start_time=_optional(data, "startTime", str),
        end_time=_optional(data, "endTime", str),
        days=_parse_days(data.get("days")),
    )


def parse_resolution(data: Any) -> AvailabilityResolution | None:
    """Decode an availability resolution object; ``None`` stays ``None``."""
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ResponseShapeError("availability must be an object")
    return AvailabilityResolution(
        in_reachable_hours=_optional(data, "inReachableHours", bool),
        next_transition_at=_optional(data, "nextTransitionAt", str),
        active_window=parse_window(data.get("activeWindow")),
        next_window=parse_window(data.get("nextWindow")),
    )


def format_days(days: Days | None) -> str:
    """Render days as a lower-case comma list, a single string as is, else '-'."""
    if isinstance(days, str):
        return days
    if days:
        return ",".join(day.lower() for day in days)
    return "-"