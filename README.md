# hdcli

Building blocks for a HeadsDown availability tool: local configuration,
the `hd` command-line grammar, request inputs for the API, checks on API
responses, and plain or coloured terminal rendering of statuses, verdicts,
windows and calls.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## What is in the package

- `hdcli.config` – `Config`, `TelemetryConfig` and `CalibrationConfig`
  dataclasses with `load()`, `save(config)` and `update(func)`, plus
  `config_dir()` and `config_path()`.
- `hdcli.format` – `format_duration`, `color_mode`, `color_verdict` and the
  `styled_*` helpers.
- `hdcli.availability` – `parse_resolution`, `parse_window`, `format_days`
  and `ResponseShapeError`, raised whenever an API payload has the wrong
  shape.
- `hdcli.windows` – `WindowInputArgs`, `require_create_fields`,
  `all_fields_empty`, `build_input`, the `normalize_*` helpers and
  `format_window`.
- `hdcli.verdict` – `build_proposal_input`, `decode_verdict`,
  `format_verdict`.
- `hdcli.verdict_settings` – `build_update_variables`, `decode_settings`,
  `format_settings`.
- `hdcli.dashboard` – `format_status`, `format_watch`, `format_countdown`,
  `format_profile`.
- `hdcli.calls` – `render_headsdown_call` and
  `format_headsdown_call_for_terminal`.
- `hdcli.telemetry_cmd` – `enable()`, `disable()` and `status()`, which
  change and report the telemetry setting in the config file.
- `hdcli.parser` – `build_parser()` returns an `argparse` parser for the
  full `hd` grammar; `command_name(namespace)` names the parsed command.

## Examples

```python
from hdcli.format import format_duration
from hdcli.windows import normalize_days_input
from hdcli.verdict import build_proposal_input
from hdcli.calls import render_headsdown_call, format_headsdown_call_for_terminal
from hdcli.parser import build_parser, command_name

format_duration(90)                  # "1h 30m"
normalize_days_input("Mon,Wed,Fri")  # ["MONDAY", "WEDNESDAY", "FRIDAY"]
normalize_days_input("Fri-Mon")      # ["FRIDAY", "SATURDAY", "SUNDAY", "MONDAY"]

build_proposal_input("refactor auth module", files=5, minutes=30)
# {"description": "refactor auth module", "agentRef": "headsdown-cli",
#  "sourceRef": "cli", "estimatedFiles": 5, "estimatedMinutes": 30}

call = render_headsdown_call("rabbit_hole_detected", None)
print(format_headsdown_call_for_terminal(call))

args = build_parser().parse_args(["--json", "status"])
command_name(args)                   # "status"
```

## Configuration

Settings live in `config.toml` inside the `headsdown` configuration
directory. When `XDG_CONFIG_HOME` is set the directory is
`$XDG_CONFIG_HOME/headsdown`; otherwise the platform's usual per-user
configuration location is used. A missing file means defaults; unknown keys
are ignored and malformed TOML raises `ValueError`:

```toml
default_duration = 120
default_model = "gpt-4"
api_url = "https://headsdown.example.com"

[telemetry]
enabled = false

[calibration]
enabled = true

[aliases]
focus = "busy 2h"
brb = "offline"
```

Telemetry is off by default; calibration is on by default.

## Colour

Styled output is used only when standard output is a terminal. Setting
`NO_COLOR` turns colour off; setting `FORCE_COLOR` turns it on even when the
output is redirected. The decision is made once per process.

## What the package does not do

- It installs no `hd` command. `build_parser()` describes the grammar, but
  nothing here runs a parsed command, expands aliases or picks the API
  address from flag, config and default.
- It does not talk to the HeadsDown API. Request inputs are built and
  response payloads are checked and rendered, but sending requests,
  authentication and the live polling loop are left to the caller.
- It sends no telemetry; only the on/off setting is stored.