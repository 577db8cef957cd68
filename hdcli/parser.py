"""Command-line grammar of the ``hd`` command."""

from __future__ import annotations

import argparse
import os
from typing import Any

_VERSION = "0.1.0"

MODES = ["online", "busy", "limited", "offline"]
ALERTS_POLICIES = ["off", "interruptable", "do_not_disturb", "take_a_number", "after_hours"]
GRANT_SCOPES = ["session", "workspace", "agent"]
WRAP_UP_MODES = ["auto", "wrap_up", "full_depth"]
PROPOSAL_VERDICTS = ["approved", "deferred"]
OUTCOMES = ["completed", "failed", "partially_completed", "cancelled", "timed_out"]
SHELLS = ["bash", "elvish", "fish", "powershell", "zsh"]

_COMMAND_NAMES = frozenset(
    {
        "auth", "status", "availability", "windows", "presets", "grants", "override",
        "preset", "digest", "autoresponder", "verdict-settings", "proposals",
        "interrupt", "whoami", "busy", "online", "offline", "limited", "verdict",
        "watch", "install", "doctor", "update", "remove", "hook", "telemetry",
        "calibration", "outcome", "alias", "completions", "manpages",
    }
)


def _bool(text: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise argparse.ArgumentTypeError(f"invalid value {text!r}: expected 'true' or 'false'")


def _comma_list(text: str) -> list[str]:
    return text.split(",")


def _common_options() -> argparse.ArgumentParser:
    # Global options repeated on every subcommand; SUPPRESS keeps the top-level value
    # unless the option is given again after the subcommand.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--api-url", default=argparse.SUPPRESS, help=argparse.SUPPRESS)
    common.add_argument(
        "--json", action="store_true", default=argparse.SUPPRESS, help=argparse.SUPPRESS
    )
    return common


def _add(subparsers: Any, name: str, help_text: str | None, common: argparse.ArgumentParser):
    kwargs: dict[str, Any] = {"parents": [common]}
    if help_text is not None:
        kwargs["help"] = help_text
        kwargs["description"] = help_text
    return subparsers.add_parser(name, **kwargs)


def _window_fields(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("--label", required=required, help="Window label")
    parser.add_argument("--mode", required=required, choices=MODES, help="Mode")
    parser.add_argument("--days", required=required, help="Days expression (e.g. Mon-Fri)")
    parser.add_argument("--start", required=required, help="Start time (HH:MM:SS)")
    parser.add_argument("--end", required=required, help="End time (HH:MM:SS)")
    parser.add_argument("--alerts-policy", choices=ALERTS_POLICIES, help="Alerts policy")
    parser.add_argument("--priority", type=int, help="Priority (higher wins)")
    parser.add_argument("--auto-activate", type=_bool, help="Auto activate this window")
    parser.add_argument("--snooze", type=_bool, help="Enable snooze for this window")
    parser.add_argument("--status", type=_bool, help="Set status enabled/disabled")
    parser.add_argument("--status-emoji", help="Optional status emoji")
    parser.add_argument("--status-text", help="Optional status text")


def _grant_filters(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--active", type=_bool)
    parser.add_argument("--scope", choices=GRANT_SCOPES)
    parser.add_argument("--session-id")
    parser.add_argument("--workspace-ref")
    parser.add_argument("--agent-id")
    parser.add_argument("--source")


def _integration_options(parser: argparse.ArgumentParser, writes: bool) -> None:
    parser.add_argument("tool", nargs="?", help="Supported local tool")
    parser.add_argument("--all", action="store_true", help="Apply to every supported tool")
    if writes:
        parser.add_argument(
            "--dry-run", action="store_true", help="Show planned changes without writing files"
        )
        parser.add_argument(
            "-y", "--yes", action="store_true", help="Skip confirmation prompts for bulk runs"
        )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for every ``hd`` command."""
    common = _common_options()
    parser = argparse.ArgumentParser(
        prog="hd", description="HeadsDown CLI — manage your availability from the terminal"
    )
    parser.add_argument("--version", action="version", version=f"hd {_VERSION}")
    parser.add_argument(
        "--api-url",
        default=os.environ.get("HEADSDOWN_API_URL"),
        help="API base URL (defaults to https://headsdown.app)",
    )
    parser.add_argument("--json", action="store_true", help="Output as JSON (for scripting)")
    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    _add(commands, "auth", "Authenticate with HeadsDown via Device Flow", common)
    _add(commands, "status", "Show your current availability status", common)
    availability = _add(commands, "availability", "Show your availability resolution", common)
    availability.add_argument("--at", help="RFC3339 timestamp to resolve at (defaults to now)")

    windows = _add(commands, "windows", "Manage reachability windows", common)
    window_actions = windows.add_subparsers(dest="action", metavar="ACTION")
    _add(window_actions, "list", "List configured windows", common)
    _window_fields(_add(window_actions, "create", "Create a reachability window", common), True)
    window_update = _add(window_actions, "update", "Update a reachability window", common)
    window_update.add_argument("id", help="Window id")
    _window_fields(window_update, False)
    _add(window_actions, "delete", "Delete a reachability window", common).add_argument(
        "id", help="Window id"
    )

    presets = _add(commands, "presets", "Manage preset configurations", common)
    preset_actions = presets.add_subparsers(dest="action", metavar="ACTION")
    _add(preset_actions, "list", "List configured presets", common)

    grants = _add(commands, "grants", "Manage delegation grants", common)
    grant_actions = grants.add_subparsers(dest="action", metavar="ACTION")
    _add(grant_actions, "list-active", "List active grants", common)
    _grant_filters(_add(grant_actions, "list", "List grants with optional filters", common))
    grant_create = _add(grant_actions, "create", "Create a grant", common)
    grant_create.add_argument("--scope", required=True, choices=GRANT_SCOPES)
    grant_create.add_argument("--session-id")
    grant_create.add_argument("--workspace-ref")
    grant_create.add_argument("--agent-id")
    grant_create.add_argument("--permissions", type=_comma_list, action="extend", default=[])
    grant_create.add_argument("--duration-minutes", type=int)
    grant_create.add_argument("--expires-at")
    grant_create.add_argument("--source")
    _add(grant_actions, "revoke", "Revoke one grant by id", common).add_argument("id")
    _grant_filters(
        _add(grant_actions, "revoke-many", "Revoke many grants with optional filters", common)
    )

    override = _add(commands, "override", "Manage temporary availability overrides", common)
    override_actions = override.add_subparsers(dest="action", metavar="ACTION")
    _add(override_actions, "get", "Get active override", common)
    override_set = _add(override_actions, "set", "Set a temporary override", common)
    override_set.add_argument("--mode", required=True, choices=MODES)
    override_set.add_argument("--duration-minutes", type=int)
    override_set.add_argument("--expires-at")
    override_set.add_argument("--reason")
    override_clear = _add(
        override_actions, "clear", "Clear active override (or specific id)", common
    )
    override_clear.add_argument("--id")
    override_clear.add_argument("--reason")

    _add(commands, "preset", "Apply a preset by name or ID", common).add_argument(
        "name", help="Preset name or ID"
    )

    digest = _add(commands, "digest", "Manage digest summaries", common)
    digest_actions = digest.add_subparsers(dest="action", metavar="ACTION")
    _add(digest_actions, "list", "List recent digest summaries", common).add_argument(
        "--latest", type=int, help="Number of latest summaries to fetch"
    )
    _add(digest_actions, "dismiss", "Dismiss a digest entry by id", common).add_argument("id")

    autoresponder = _add(commands, "autoresponder", "Manage auto-responder text", common)
    responder_actions = autoresponder.add_subparsers(dest="action", metavar="ACTION")
    _add(responder_actions, "get", "Show current auto-responder settings", common)
    responder_set = _add(responder_actions, "set", "Update auto-responder text templates", common)
    responder_set.add_argument("--busy-text")
    responder_set.add_argument("--limited-text")
    responder_set.add_argument("--offline-text")

    verdict_settings = _add(
        commands, "verdict-settings", "Manage verdict threshold settings", common
    )
    settings_actions = verdict_settings.add_subparsers(dest="action", metavar="ACTION")
    _add(settings_actions, "get", "Show current verdict settings", common)
    settings_set = _add(settings_actions, "set", "Update verdict settings", common)
    settings_set.add_argument("--thresholds", help="JSON object for thresholds")
    settings_set.add_argument(
        "--default-wrap-up-mode",
        choices=WRAP_UP_MODES,
        help="Default delivery mode near attention deadline",
    )
    settings_set.add_argument(
        "--wrap-up-threshold-minutes",
        type=int,
        help="Minutes before attention deadline where wrap-up behavior activates",
    )

    proposals = _add(commands, "proposals", "List recent task proposals", common)
    proposals.add_argument("--latest", type=int, help="Number of latest proposals to fetch")
    proposals.add_argument("--verdict", choices=PROPOSAL_VERDICTS, help="Filter by decision")

    _add(commands, "interrupt", "Evaluate whether interrupting someone is allowed", common)\
        .add_argument("handle", help="User handle to evaluate")
    _add(commands, "whoami", "Show your authenticated identity", common)
    _add(commands, "busy", "Set your mode to busy", common).add_argument(
        "duration", nargs="?", help='Duration (e.g. "2h", "30m", "90min", "until 5pm")'
    )
    _add(commands, "online", "Set your mode to online", common)
    _add(commands, "offline", "Set your mode to offline", common)
    _add(commands, "limited", "Set your mode to limited", common).add_argument(
        "duration", nargs="?", help='Duration (e.g. "2h", "30m", "90min", "until 5pm")'
    )

    verdict = _add(commands, "verdict", "Submit a task proposal and get a verdict", common)
    verdict.add_argument("description", help="Task description")
    verdict.add_argument("--files", type=int, help="Estimated number of files to change")
    verdict.add_argument("--minutes", type=int, help="Estimated minutes to complete")
    verdict.add_argument("--model", help="AI model being used")

    _add(commands, "watch", "Live-updating status dashboard", common)

    _integration_options(
        _add(commands, "install", "Install a HeadsDown integration for a local tool", common),
        writes=True,
    )
    _integration_options(
        _add(commands, "doctor", "Check CLI health, connectivity, and integrations", common),
        writes=False,
    )
    update = _add(commands, "update", "Refresh installed HeadsDown integrations", common)
    _integration_options(update, writes=True)
    update.add_argument(
        "--cli", action="store_true", help="Update the hd CLI itself instead of integrations"
    )
    remove = _add(commands, "remove", "Remove a HeadsDown integration from a local tool", common)
    remove.add_argument("tool", help="Supported local tool")
    remove.add_argument(
        "--dry-run", action="store_true", help="Show planned changes without writing files"
    )

    for name, help_text, verbs in (
        ("hook", "Manage git hook integration", ("install", "uninstall", "status")),
        ("telemetry", "Manage anonymous usage telemetry", ("on", "off", "status")),
        ("calibration", "Manage calibration reporting", ("on", "off", "status")),
    ):
        group = _add(commands, name, help_text, common)
        actions = group.add_subparsers(dest="action", required=True, metavar="ACTION")
        for verb in verbs:
            _add(actions, verb, None, common)

    outcome = _add(commands, "outcome", "Report the outcome of an agent task", common)
    outcome.add_argument("proposal_id", help="Proposal ID from the verdict")
    outcome.add_argument("outcome", choices=OUTCOMES, help="What happened")
    outcome.add_argument("-d", "--duration", type=int, help="Duration in minutes")
    outcome.add_argument("-f", "--files", type=int, help="Files modified")
    outcome.add_argument("-l", "--lines", type=int, help="Lines changed")
    outcome.add_argument("-t", "--turns", type=int, help="Turn count")
    outcome.add_argument("--error-category", help="Error category if failed")
    outcome.add_argument("--tests-passed", type=_bool, help="Whether tests passed")

    alias = _add(commands, "alias", "Manage command aliases", common)
    alias_actions = alias.add_subparsers(dest="action", required=True, metavar="ACTION")
    alias_set = _add(alias_actions, "set", 'Set an alias (e.g. hd alias set focus "busy 2h")', common)
    alias_set.add_argument("name", help="Alias name")
    alias_set.add_argument("alias_command", metavar="command", help='Command to alias')
    _add(alias_actions, "remove", "Remove an alias", common).add_argument(
        "name", help="Alias name"
    )
    _add(alias_actions, "list", "List all aliases", common)

    _add(commands, "completions", "Generate shell completions", common).add_argument(
        "shell", choices=SHELLS, help="Shell to generate completions for"
    )
    _add(commands, "manpages", None, common).add_argument("dir", help="Output directory")

    return parser


def command_name(command: argparse.Namespace | str) -> str:
    """Return the name under which a parsed command is reported."""
    name = command if isinstance(command, str) else getattr(command, "command", None)
    if name not in _COMMAND_NAMES:
        raise ValueError(f"unknown command: {name!r}")
    return name