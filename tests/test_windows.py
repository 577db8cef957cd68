import pytest

from hdcli import format as fmt
from hdcli.availability import ResponseShapeError
from hdcli.windows import (
    WindowInputArgs,
    all_fields_empty,
    build_input,
    format_window,
    normalize_alerts_policy,
    normalize_day,
    normalize_days_input,
    normalize_mode,
    require_create_fields,
)


@pytest.fixture
def plain_output(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    fmt.colors_enabled.cache_clear()
    yield
    fmt.colors_enabled.cache_clear()


def _full_args():
    return WindowInputArgs(
        label="Focus",
        mode="busy",
        days="Mon-Fri",
        start="09:00:00",
        end="17:00:00",
        alerts_policy="do_not_disturb",
        priority=10,
        auto_activate=True,
        snooze=False,
        status=True,
        status_emoji="🎧",
        status_text="Deep work",
    )


def test_build_input_normalizes_enums_and_maps_fields():
    data = build_input(_full_args())
    assert data["mode"] == "BUSY"
    assert data["alertsPolicy"] == "DO_NOT_DISTURB"
    assert data["startTime"] == "09:00:00"
    assert data["endTime"] == "17:00:00"
    assert data["statusEmoji"] == "🎧"
    assert data["snooze"] is False
    assert data["priority"] == 10
    assert len(data["days"]) == 5


def test_build_input_leaves_out_unset_fields():
    assert build_input(WindowInputArgs(priority=5)) == {"priority": 5}


def test_create_requires_core_fields():
    with pytest.raises(ValueError, match="Create requires"):
        require_create_fields(WindowInputArgs())
    args = WindowInputArgs(
        label="Focus", mode="busy", days="Mon-Fri", start="09:00:00", end="17:00:00"
    )
    require_create_fields(args)
    assert not all_fields_empty(args)


def test_create_requires_end():
    with pytest.raises(ValueError):
        require_create_fields(
            WindowInputArgs(label="Focus", mode="busy", days="Mon", start="09:00:00")
        )


def test_all_fields_empty_detects_changes():
    assert all_fields_empty(WindowInputArgs())
    assert not all_fields_empty(WindowInputArgs(priority=5))


def test_normalize_days_input_supports_ranges_and_lists():
    assert len(normalize_days_input("Mon-Fri")) == 5
    assert normalize_days_input("Mon,Wed,Fri") == ["MONDAY", "WEDNESDAY", "FRIDAY"]


def test_normalize_days_input_wraps_range():
    assert normalize_days_input("Fri-Mon") == ["FRIDAY", "SATURDAY", "SUNDAY", "MONDAY"]


def test_normalize_days_input_unknown_range_falls_back():
    assert normalize_days_input("Mon-Fri-Sat") == ["MON_FRI_SAT"]


def test_normalize_day_aliases_and_unknown():
    assert normalize_day(" Thurs ") == "THURSDAY"
    assert normalize_day("tues") == "TUESDAY"
    assert normalize_day("week-end") == "WEEK_END"


def test_normalize_mode_and_policy():
    assert normalize_mode(" busy ") == "BUSY"
    assert normalize_alerts_policy("take-a-number") == "TAKE_A_NUMBER"


def test_format_window_renders_fields(plain_output):
    window = {
        "id": "w1",
        "label": "Focus",
        "mode": "busy",
        "days": ["MONDAY", "TUESDAY"],
        "startTime": "09:00:00",
        "endTime": "17:00:00",
        "alertsPolicy": "DO_NOT_DISTURB",
        "autoActivate": True,
        "priority": 1,
        "status": False,
        "statusEmoji": "🎧",
        "statusText": "Deep work",
        "snooze": False,
    }
    text = format_window(window)
    assert "Focus (BUSY)" in text
    assert "Window: monday,tuesday 09:00:00-17:00:00" in text
    assert "Alerts: do not disturb" in text
    assert "Priority: 1  Auto: true  Status: false" in text
    assert "Message: 🎧 Deep work" in text
    assert "ID: w1" in text


def test_format_window_defaults_for_missing_fields(plain_output):
    text = format_window({"id": "w2", "label": "Quiet", "mode": "offline"})
    assert "Window: - --" in text
    assert "Alerts: -" in text
    assert "Priority: 0  Auto: false  Status: false" in text
    assert "Message:" not in text


def test_format_window_rejects_bad_shape():
    with pytest.raises(ResponseShapeError, match="Failed to decode API response shape"):
        format_window({"id": "w1", "label": "Focus", "mode": 7})