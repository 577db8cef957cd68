"""Rendering of the status, live watch and whoami views."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from hdcli import format as fmt
from hdcli.availability import ResponseShapeError, parse_resolution


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def _parse_time(text: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed.astimezone(timezone.utc)


def _clock(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def _optional(data: dict[str, Any], key: str, kind: type) -> Any:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, kind):
        raise ResponseShapeError(f"field {key!r} must be {kind.__name__}")
    return value


def _object(data: dict[str, Any], key: str) -> dict[str, Any] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ResponseShapeError(f"field {key!r} must be an object")
    return value


def format_status(data: Any, now: datetime | None = None) -> str:
    """Render the status view; raises ``ResponseShapeError`` on a bad payload."""
    if not isinstance(data, dict):
        raise ResponseShapeError("response must be an object")
    contract = _object(data, "activeContract") or {}
    mode_raw = _optional(contract, "mode", str)
    status_text = _optional(contract, "statusText", str)
    status_emoji = _optional(contract, "statusEmoji", str)
    expires_raw = _optional(contract, "expiresAt", str)
    lock = _optional(contract, "lock", bool)
    availability = parse_resolution(data.get("availability"))
    profile = _object(data, "profile") or {}
    name = _optional(profile, "name", str) or "Unknown"
    mode = (mode_raw or "UNKNOWN").upper()

    lines = [
        "",
        f"  {fmt.styled_bold('●')} {fmt.styled_bold(name)}",
        "",
        f"  {fmt.styled_dimmed('Mode:')} {fmt.color_mode(mode)}",
    ]
    if status_text is not None:
        if status_emoji is not None:
            lines.append(f"  {fmt.styled_dimmed('Status:')} {status_emoji} {status_text}")
        else:
            lines.append(f"  {fmt.styled_dimmed('Status:')} {status_text}")

    if expires_raw is not None:
        expires_at = _parse_time(expires_raw)
        if expires_at is not None:
            remaining = expires_at - _now(now)
            minutes = int(remaining.total_seconds() / 60)
            if minutes > 0:
                lines.append(
                    f"  {fmt.styled_dimmed('Time:')} "
                    f"{fmt.styled_bold(fmt.format_duration(minutes))} remaining "
                    f"(until {_clock(expires_at)})"
                )

    if availability is not None:
        if availability.in_reachable_hours is not None:
            state = "Reachable now" if availability.in_reachable_hours else "Not reachable now"
            lines.append(f"  {fmt.styled_dimmed('Availability:')} {state}")
        window = availability.active_window
        if window is not None and window.label is not None:
            lines.append(f"  {fmt.styled_dimmed('Window:')} {window.label}")
        if availability.next_transition_at is not None:
            next_at = _parse_time(availability.next_transition_at)
            if next_at is not None:
                lines.append(f"  {fmt.styled_dimmed('Next change:')} {_clock(next_at)}")

    if lock is True:
        lines.append(f"  {fmt.styled_dimmed('Lock:')} {fmt.styled_yellow_bold('🔒 Locked')}")

    lines.append("")
    return "\n".join(lines)


def format_countdown(seconds: int) -> str:
    """Render remaining seconds as 'Mm SSs' or, past an hour, 'Hh MMm SSs'."""
    minutes, secs = divmod(seconds, 60)
    if minutes >= 60:
        return f"{minutes // 60}h {minutes % 60:02d}m {secs:02d}s"
    return f"{minutes}m {secs:02d}s"


def _get(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, dict) else None


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def format_watch(data: Any, now: datetime | None = None) -> str:
    """Render the seven lines of one live dashboard frame; missing data shows '-'."""
    contract = _get(data, "activeContract")
    profile = _get(data, "profile")
    availability = _get(data, "availability")

    name = _text(_get(profile, "name")) or "Unknown"
    mode = (_text(_get(contract, "mode")) or "UNKNOWN").upper()

    lines = [
        f"  {fmt.styled_bold('●')} {fmt.styled_bold(name)}",
        f"  {fmt.styled_dimmed('Mode:')} {fmt.color_mode(mode)}",
    ]

    emoji = _text(_get(contract, "statusEmoji")) or ""
    status_text = _text(_get(contract, "statusText")) or ""
    if emoji or status_text:
        lines.append(f"  {fmt.styled_dimmed('Status:')} {emoji} {status_text}")
    else:
        lines.append(f"  {fmt.styled_dimmed('Status:')} -")

    expires_raw = _text(_get(contract, "expiresAt"))
    expires_at = _parse_time(expires_raw) if expires_raw is not None else None
    if expires_at is None:
        lines.append(f"  {fmt.styled_dimmed('Time:')} -")
    else:
        remaining = int((expires_at - _now(now)) / timedelta(seconds=1))
        if remaining > 0:
            lines.append(
                f"  {fmt.styled_dimmed('Time:')} "
                f"{fmt.styled_bold(format_countdown(remaining))} "
                f"(until {_clock(expires_at)})"
            )
        else:
            lines.append(f"  {fmt.styled_dimmed('Time:')} expired")

    in_hours = _get(availability, "inReachableHours")
    if isinstance(in_hours, bool):
        state = "Reachable now" if in_hours else "Not reachable now"
        lines.append(f"  {fmt.styled_dimmed('Availability:')} {state}")
    else:
        lines.append(f"  {fmt.styled_dimmed('Availability:')} -")

    label = _text(_get(_get(availability, "activeWindow"), "label"))
    if label is not None:
        lines.append(f"  {fmt.styled_dimmed('Window:')} {label}")
    else:
        lines.append(f"  {fmt.styled_dimmed('Window:')} -")

    next_raw = _text(_get(availability, "nextTransitionAt"))
    next_at = _parse_time(next_raw) if next_raw is not None else None
    if next_at is not None:
        lines.append(
            f"  {fmt.styled_dimmed('Next change:')} {fmt.styled_dimmed(_clock(next_at))}"
        )
    else:
        lines.append(f"  {fmt.styled_dimmed('Next change:')} -")

    return "\n".join(lines)


def format_profile(profile: Any, api_url: str) -> str:
    """Render the authenticated identity and the API it talks to."""
    name = _text(_get(profile, "name")) or "Unknown"
    email = _text(_get(profile, "email")) or "Unknown"
    location = _text(_get(profile, "location"))
    lines = [
        "",
        f"  {fmt.styled_green_bold('✓')} {fmt.styled_bold(name)}",
        f"  {fmt.styled_dimmed('Email:')} {email}",
    ]
    if location is not None:
        lines.append(f"  {fmt.styled_dimmed('Location:')} {location}")
    lines.append(f"  {fmt.styled_dimmed('API:')} {fmt.styled_dimmed(api_url)}")
    lines.append("")
    return "\n".join(lines)