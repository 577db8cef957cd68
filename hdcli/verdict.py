"""Task proposals: request input, verdict decoding and display."""

from __future__ import annotations

from typing import Any

from hdcli import format as fmt
from hdcli.availability import ResponseShapeError

AGENT_REF = "headsdown-cli"
SOURCE_REF = "cli"


def build_proposal_input(
    description: str,
    files: int | None = None,
    minutes: int | None = None,
    model: str | None = None,
) -> dict[str, Any]:
    """Build the proposal input object; unset estimates are left out."""
    proposal: dict[str, Any] = {
        "description": description,
        "agentRef": AGENT_REF,
        "sourceRef": SOURCE_REF,
    }
    if files is not None:
        proposal["estimatedFiles"] = files
    if minutes is not None:
        proposal["estimatedMinutes"] = minutes
    if model is not None:
        proposal["model"] = model
    return proposal


def _required_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        raise ResponseShapeError(f"field {key!r} is missing")
    if not isinstance(value, str):
        raise ResponseShapeError(f"field {key!r} must be str")
    return value


def _optional(data: dict[str, Any], key: str, kind: type) -> Any:
    value = data.get(key)
    if value is None:
        return None
    if (kind is int and isinstance(value, bool)) or not isinstance(value, kind):
        raise ResponseShapeError(f"field {key!r} must be {kind.__name__}")
    return value


def _decode_guidance(value: Any) -> dict[str, Any] | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ResponseShapeError("field 'wrapUpGuidance' must be an object")
    return {
        "selectedMode": _optional(value, "selectedMode", str),
        "remainingMinutes": _optional(value, "remainingMinutes", int),
    }


def decode_verdict(data: Any) -> dict[str, Any]:
    """Check a ``submitProposal`` object and return the fields the CLI reports."""
    if not isinstance(data, dict):
        raise ResponseShapeError("submitProposal must be an object")
    return {
        "decision": _required_str(data, "decision"),
        "reason": _required_str(data, "reason"),
        "proposalId": _required_str(data, "proposalId"),
        "wrapUpGuidance": _decode_guidance(data.get("wrapUpGuidance")),
    }


def format_verdict(
    verdict: dict[str, Any],
    description: str,
    files: int | None = None,
    minutes: int | None = None,
    model: str | None = None,
) -> str:
    """Render a decoded verdict and the proposal it answers as terminal lines."""
    decision = verdict["decision"].upper()
    lines = [
        "",
        f"  {fmt.styled_dimmed('Verdict:')} {fmt.color_verdict(decision)}",
        "",
        f"  {fmt.styled_dimmed('Reason:')} {verdict['reason']}",
    ]

    guidance = verdict.get("wrapUpGuidance")
    if guidance is not None:
        mode = guidance.get("selectedMode")
        if mode is not None:
            lines.append(f"  {fmt.styled_dimmed('Delivery mode:')} {mode}")
        remaining = guidance.get("remainingMinutes")
        if remaining is not None:
            lines.append(f"  {fmt.styled_dimmed('Attention window:')} {remaining} min")

    lines.append("")
    lines.append(f"  {fmt.styled_dimmed('Task:')} {description}")
    if files is not None:
        lines.append(f"  {fmt.styled_dimmed('Scope:')} ~{files} files")
    if minutes is not None:
        lines.append(f"  {fmt.styled_dimmed('Estimate:')} ~{minutes} minutes")
    if model is not None:
        lines.append(f"  {fmt.styled_dimmed('Model:')} {model}")
    lines.append("")
    return "\n".join(lines)