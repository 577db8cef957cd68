from datetime import datetime, timedelta, timezone

import pytest

from hdcli import format as fmt
from hdcli.availability import ResponseShapeError
from hdcli.dashboard import format_countdown, format_profile, format_status, format_watch

NOW = datetime(2026, 4, 21, 16, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    fmt.colors_enabled.cache_clear()
    yield
    fmt.colors_enabled.cache_clear()


def _full_status():
    return {
        "activeContract": {
            "mode": "busy",
            "statusText": "Deep work",
            "statusEmoji": "🎧",
            "expiresAt": "2026-04-21T17:00:00Z",
            "lock": True,
        },
        "availability": {
            "inReachableHours": True,
            "nextTransitionAt": "2026-04-21T18:00:00Z",
            "activeWindow": {"label": "Focus", "mode": "BUSY"},
            "nextWindow": None,
        },
        "profile": {"name": "Ada"},
    }


def test_status_shape_mismatch_on_mode():
    data = {
        "activeContract": {"mode": 123, "statusText": None, "lock": False},
        "availability": None,
        "profile": None,
    }
    with pytest.raises(ResponseShapeError, match="Failed to decode API response shape"):
        format_status(data, NOW)


def test_status_shape_mismatch_on_availability():
    data = {"availability": {"inReachableHours": "yes"}}
    with pytest.raises(ResponseShapeError, match="Failed to decode API response shape"):
        format_status(data, NOW)


def test_status_full_view():
    out = format_status(_full_status(), NOW)
    assert "● Ada" in out
    assert "Mode: BUSY" in out
    assert "Status: 🎧 Deep work" in out
    assert "1 hour" in out and "remaining" in out
    assert "(until 5:00 PM)" in out
    assert "Availability: Reachable now" in out
    assert "Window: Focus" in out
    assert "🔒 Locked" in out
    assert out.startswith("\n") and out.endswith("\n")


def test_status_defaults_when_empty():
    out = format_status({}, NOW)
    assert "● Unknown" in out
    assert "Mode: UNKNOWN" in out
    assert "Status:" not in out
    assert "Lock:" not in out


def test_status_text_without_emoji_and_expired_time():
    data = _full_status()
    data["activeContract"]["statusEmoji"] = None
    data["activeContract"]["expiresAt"] = (NOW - timedelta(minutes=5)).isoformat()
    data["availability"]["inReachableHours"] = False
    out = format_status(data, NOW)
    assert "Status: Deep work" in out
    assert "Time:" not in out
    assert "Availability: Not reachable now" in out


def test_watch_has_seven_lines_with_dashes_for_missing():
    out = format_watch({}, NOW)
    lines = out.split("\n")
    assert len(lines) == 7
    assert lines[0].endswith("Unknown")
    assert lines[1].endswith("UNKNOWN")
    assert all(line.endswith("-") for line in lines[2:])


def test_watch_full_frame():
    lines = format_watch(_full_status(), NOW).split("\n")
    assert len(lines) == 7
    assert "Mode: BUSY" in lines[1]
    assert "🎧 Deep work" in lines[2]
    assert format_countdown(3600) in lines[3]
    assert "Reachable now" in lines[4]
    assert "Focus" in lines[5]


def test_watch_expired_and_wrong_types_fall_back():
    data = {
        "activeContract": {"mode": 5, "expiresAt": "2026-04-21T15:00:00Z"},
        "availability": {"inReachableHours": "yes", "nextTransitionAt": "not a time"},
    }
    lines = format_watch(data, NOW).split("\n")
    assert lines[1].endswith("UNKNOWN")
    assert lines[3].endswith("expired")
    assert lines[4].endswith("-")
    assert lines[6].endswith("-")


def test_countdown_under_an_hour():
    assert format_countdown(65) == "1m 05s"


def test_countdown_over_an_hour():
    assert format_countdown(3725) == "1h 02m 05s"


@pytest.mark.parametrize("seconds", [1, 59, 600, 3599, 3600, 7261, 86399])
def test_countdown_round_trips(seconds):
    text = format_countdown(seconds)
    parts = {part[-1]: int(part[:-1]) for part in text.split()}
    total = parts.get("h", 0) * 3600 + parts["m"] * 60 + parts["s"]
    assert total == seconds


def test_profile_view():
    profile = {"name": "Ada", "email": "ada@example.com", "location": "Lisbon"}
    out = format_profile(profile, "https://api.example.com")
    assert "✓ Ada" in out
    assert "Email: ada@example.com" in out
    assert "Location: Lisbon" in out
    assert "API: https://api.example.com" in out


def test_profile_defaults_without_location():
    out = format_profile({}, "https://api.example.com")
    assert "✓ Unknown" in out
    assert "Email: Unknown" in out
    assert "Location:" not in out