"""The ``telemetry`` command: turn anonymous usage telemetry on, off, or show it."""

from __future__ import annotations

from hdcli import config
from hdcli import format as fmt


def _set_enabled(enabled: bool) -> None:
    def apply(cfg: config.Config) -> None:
        cfg.telemetry.enabled = enabled

    config.update(apply)


def enable() -> None:
    """Enable telemetry and say so."""
    _set_enabled(True)
    print()
    print(
        f"  {fmt.styled_green_bold('✓')} Telemetry enabled. "
        "Anonymous usage data helps improve the CLI"
    )
    print(f"  {fmt.styled_dimmed('ℹ')} No personal data or commands are ever sent")
    print()


def disable() -> None:
    """Disable telemetry and say so."""
    _set_enabled(False)
    print()
    print(f"  {fmt.styled_green_bold('✓')} Telemetry disabled")
    print()


def status() -> bool:
    """Print whether telemetry is enabled and return that setting."""
    cfg = config.load()
    enabled = cfg.telemetry.enabled
    print()
    if enabled:
        print(
            f"  {fmt.styled_green_bold('●')} Telemetry is {fmt.styled_green_bold('enabled')}"
        )
        print(
            f"  {fmt.styled_dimmed('ℹ')} Only anonymous usage counts "
            "(command names, OS, version) are collected"
        )
    else:
        print(f"  {fmt.styled_dimmed('●')} Telemetry is {fmt.styled_dimmed('disabled')}")
    print()
    print(
        f"  {fmt.styled_dimmed('Tip:')} Toggle with: hd telemetry on | hd telemetry off"
    )
    print()
    return enabled