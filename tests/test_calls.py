import pytest

from hdcli.calls import (
    CallCta,
    UnknownCallSignals,
    format_headsdown_call_for_terminal,
    render_headsdown_call,
)


def _assert_cta(cta, expected):
    if expected is None:
        assert cta is None
    else:
        label, action_key, ui_intent = expected
        assert cta is not None
        assert cta.label == label
        assert cta.action_key == action_key
        assert cta.ui_intent == ui_intent


@pytest.mark.parametrize(
    "key, title, primary, secondary",
    [
        (
            "good_to_run",
            "Good to run",
            ("Let the agent proceed", "continue", None),
            ("Why this call?", None, "view_details"),
        ),
        (
            "keep_it_tight",
            "Keep it tight",
            ("Narrow scope", "narrow_scope", None),
            ("Why this call?", None, "view_details"),
        ),
        (
            "not_worth_starting_now",
            "Not worth starting now",
            ("Queue for later", "queue_for_later", None),
            ("Why this call?", None, "view_details"),
        ),
        (
            "off_the_clock",
            "Off the clock",
            ("Queue for later", "queue_for_later", None),
            ("Why this call?", None, "view_details"),
        ),
        (
            "rabbit_hole_detected",
            "Rabbit hole detected",
            ("Pause + summarize", "pause_and_summarize", None),
            ("Allow 15m", "allow_for_duration", None),
        ),
        (
            "ready_to_resume",
            "Ready to resume",
            ("Resume approved work", "resume_run", None),
            ("Keep queued", "keep_queued", None),
        ),
        (
            "all_contained",
            "All contained",
            None,
            ("Review runs", None, "review_runs"),
        ),
        (
            "needs_your_yes",
            "Needs your yes",
            ("Review request", None, "review_request"),
            ("Keep queued", "keep_queued", None),
        ),
    ],
)
def test_renders_all_canonical_calls(key, title, primary, secondary):
    call = render_headsdown_call(key, None)
    assert call.key == key
    assert call.title == title
    assert call.body != ""
    _assert_cta(call.primary_cta, primary)
    _assert_cta(call.secondary_cta, secondary)


def test_renders_uppercase_graphql_enum_style_call_key():
    call = render_headsdown_call("READY_TO_RESUME", None)
    assert call.key == "ready_to_resume"
    assert call.title == "Ready to resume"


def test_key_is_trimmed_before_lookup():
    call = render_headsdown_call("  good_to_run \n")
    assert call.key == "good_to_run"


def test_unknown_call_falls_back_to_needs_your_yes_for_action_required():
    call = render_headsdown_call("future_call", UnknownCallSignals(action_required=True))
    assert call.key == "needs_your_yes"
    assert call.title == "Needs your yes"
    assert call.body == "HeadsDown needs a human decision before this agent continues."
    _assert_cta(call.primary_cta, ("Review request", None, "review_request"))
    _assert_cta(call.secondary_cta, ("Why this call?", None, "view_details"))


def test_unknown_call_falls_back_to_needs_your_yes_for_risk_boundary_signal():
    call = render_headsdown_call(
        "future_call", UnknownCallSignals(has_risk_or_boundary_signal=True)
    )
    assert call.key == "needs_your_yes"


def test_unknown_call_falls_back_to_keep_it_tight_for_limit_scope_uncertainty():
    call = render_headsdown_call(
        "future_call", UnknownCallSignals(has_limit_scope_or_validation_signal=True)
    )
    assert call.key == "keep_it_tight"
    assert call.title == "Keep it tight"
    assert "useful slice" in call.body
    _assert_cta(call.primary_cta, ("Review request", None, "review_request"))
    _assert_cta(call.secondary_cta, ("Why this call?", None, "view_details"))


def test_unknown_call_falls_back_to_all_contained_with_no_action_and_in_bounds():
    call = render_headsdown_call(
        "future_call",
        UnknownCallSignals(explicit_no_action_needed=True, explicit_in_bounds=True),
    )
    assert call.key == "all_contained"
    assert "Nothing needs you right now" in call.body
    _assert_cta(call.primary_cta, None)
    _assert_cta(call.secondary_cta, ("Review runs", None, "review_runs"))


def test_no_action_without_in_bounds_is_not_all_contained():
    call = render_headsdown_call(
        "future_call", UnknownCallSignals(explicit_no_action_needed=True)
    )
    assert call.key == "needs_your_yes"


def test_unknown_call_defaults_to_needs_your_yes_when_signal_is_ambiguous():
    call = render_headsdown_call("future_call", UnknownCallSignals())
    assert call.key == "needs_your_yes"


def test_unknown_call_without_signals_defaults_to_needs_your_yes():
    call = render_headsdown_call("future_call")
    assert call.key == "needs_your_yes"
    assert call.body == "HeadsDown needs a human decision before this agent continues."


def test_unknown_call_uses_server_title_and_body_when_available():
    call = render_headsdown_call(
        "future_call",
        UnknownCallSignals(
            action_required=True,
            server_title="Server supplied title",
            server_body="Server supplied body",
        ),
    )
    assert call.title == "Server supplied title"
    assert call.body == "Server supplied body"


def test_unknown_call_without_server_body_uses_safe_default_explanation():
    call = render_headsdown_call("future_call", UnknownCallSignals(action_required=True))
    assert call.body == "HeadsDown needs a human decision before this agent continues."


def test_fallback_does_not_change_canonical_call():
    render_headsdown_call("future_call", UnknownCallSignals(server_title="Changed"))
    call = render_headsdown_call("needs_your_yes")
    assert call.title == "Needs your yes"
    assert call.secondary_cta == CallCta("Keep queued", action_key="keep_queued")


def test_terminal_format_contains_title_body_and_ctas():
    call = render_headsdown_call("rabbit_hole_detected", None)
    formatted = format_headsdown_call_for_terminal(call)
    assert "HEADSDOWN CALL" in formatted
    assert "Rabbit hole detected" in formatted
    assert "Primary: Pause + summarize" in formatted
    assert "Secondary: Allow 15m" in formatted


def test_terminal_format_omits_missing_primary():
    call = render_headsdown_call("all_contained")
    lines = format_headsdown_call_for_terminal(call).split("\n")
    assert lines[0] == "HEADSDOWN CALL"
    assert lines[1] == "All contained"
    assert lines[-1] == "Secondary: Review runs"
    assert not any(line.startswith("Primary:") for line in lines)