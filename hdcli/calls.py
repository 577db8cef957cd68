"""Rendering of HeadsDown calls: the backend's verdict vocabulary for agent runs."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class CallCta:
    """A call-to-action attached to a call."""

    label: str
    action_key: str | None = None
    ui_intent: str | None = None


@dataclass(frozen=True)
class CallDisplay:
    """A call ready to show to the user."""

    key: str
    title: str
    body: str
    primary_cta: CallCta | None = None
    secondary_cta: CallCta | None = None


@dataclass(frozen=True)
class UnknownCallSignals:
    """Hints used to pick a safe fallback when the call key is not recognised."""

    action_required: bool = False
    has_risk_or_boundary_signal: bool = False
    has_limit_scope_or_validation_signal: bool = False
    explicit_no_action_needed: bool = False
    explicit_in_bounds: bool = False
    server_title: str | None = None
    server_body: str | None = None


_WHY = CallCta("Why this call?", ui_intent="view_details")
_REVIEW_REQUEST = CallCta("Review request", ui_intent="review_request")
_KEEP_QUEUED = CallCta("Keep queued", action_key="keep_queued")
_QUEUE_FOR_LATER = CallCta("Queue for later", action_key="queue_for_later")

_CANONICAL_CALLS: dict[str, CallDisplay] = {
    call.key: call
    for call in (
        CallDisplay(
            key="good_to_run",
            title="Good to run",
            body=(
                "This task fits the time, scope, and attention available right now. "
                "Let the agent proceed within the approved bounds."
            ),
            primary_cta=CallCta("Let the agent proceed", action_key="continue"),
            secondary_cta=_WHY,
        ),
        CallDisplay(
            key="keep_it_tight",
            title="Keep it tight",
            body=(
                "There is enough room for a useful slice, not an open-ended run. "
                "Ask the agent for the smallest version that still ships value."
            ),
            primary_cta=CallCta("Narrow scope", action_key="narrow_scope"),
            secondary_cta=_WHY,
        ),
        CallDisplay(
            key="not_worth_starting_now",
            title="Not worth starting now",
            body=(
                "The likely cost is higher than the likely value right now. "
                "Queue it for later instead of burning time on a weak run."
            ),
            primary_cta=_QUEUE_FOR_LATER,
            secondary_cta=_WHY,
        ),
        CallDisplay(
            key="off_the_clock",
            title="Off the clock",
            body=(
                "Non-urgent agent decisions wait until the next work window. "
                "Safe continuation can stay contained, but new asks should queue."
            ),
            primary_cta=_QUEUE_FOR_LATER,
            secondary_cta=_WHY,
        ),
        CallDisplay(
            key="rabbit_hole_detected",
            title="Rabbit hole detected",
            body=(
                "The work is growing past the size that was worth approving. "
                "Pause, save the handoff, and re-scope before it becomes cleanup work."
            ),
            primary_cta=CallCta("Pause + summarize", action_key="pause_and_summarize"),
            secondary_cta=CallCta("Allow 15m", action_key="allow_for_duration"),
        ),
        CallDisplay(
            key="ready_to_resume",
            title="Ready to resume",
            body=(
                "HeadsDown saved the thread so the agent can pick up without starting over. "
                "Resume the approved work or keep it queued."
            ),
            primary_cta=CallCta("Resume approved work", action_key="resume_run"),
            secondary_cta=_KEEP_QUEUED,
        ),
        CallDisplay(
            key="all_contained",
            title="All contained",
            body=(
                "Runs are staying inside your time, scope, and interruption limits. "
                "Nothing needs you right now."
            ),
            primary_cta=None,
            secondary_cta=CallCta("Review runs", ui_intent="review_runs"),
        ),
        CallDisplay(
            key="needs_your_yes",
            title="Needs your yes",
            body=(
                "An agent wants to cross a boundary that should not be automatic. "
                "Review the request and approve, narrow, or keep it queued."
            ),
            primary_cta=_REVIEW_REQUEST,
            secondary_cta=_KEEP_QUEUED,
        ),
    )
}


def _fallback_call(fallback_key: str) -> CallDisplay:
    call = _CANONICAL_CALLS[fallback_key]
    if fallback_key == "needs_your_yes":
        return replace(
            call,
            body="HeadsDown needs a human decision before this agent continues.",
            primary_cta=_REVIEW_REQUEST,
            secondary_cta=_WHY,
        )
    if fallback_key == "keep_it_tight":
        return replace(call, primary_cta=_REVIEW_REQUEST, secondary_cta=_WHY)
    return call


def _fallback_key(signals: UnknownCallSignals) -> str:
    if signals.action_required or signals.has_risk_or_boundary_signal:
        return "needs_your_yes"
    if signals.has_limit_scope_or_validation_signal:
        return "keep_it_tight"
    if signals.explicit_no_action_needed and signals.explicit_in_bounds:
        return "all_contained"
    return "needs_your_yes"


def render_headsdown_call(
    key: str, unknown: UnknownCallSignals | None = None
) -> CallDisplay:
    """Return the display for a call key, falling back safely for unknown keys."""
    call = _CANONICAL_CALLS.get(key.strip().lower())
    if call is not None:
        return call

    signals = unknown if unknown is not None else UnknownCallSignals()
    fallback = _fallback_call(_fallback_key(signals))
    if signals.server_title is not None:
        fallback = replace(fallback, title=signals.server_title)
    if signals.server_body is not None:
        fallback = replace(fallback, body=signals.server_body)
    return fallback


def format_headsdown_call_for_terminal(call: CallDisplay) -> str:
    """Render a call as plain terminal lines."""
    lines = ["HEADSDOWN CALL", call.title, call.body]
    if call.primary_cta is not None:
        lines.append(f"Primary: {call.primary_cta.label}")
    if call.secondary_cta is not None:
        lines.append(f"Secondary: {call.secondary_cta.label}")
    return "\n".join(lines)