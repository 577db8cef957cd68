"""Terminal formatting helpers that honour NO_COLOR, FORCE_COLOR and TTY detection."""

from __future__ import annotations

import functools
import os
import sys

_RESET = "\x1b[0m"
_BOLD = "1"
_DIM = "2"
_UNDERLINE = "4"
_RED = "31"
_GREEN = "32"
_YELLOW = "33"
_CYAN = "36"


@functools.cache
def colors_enabled() -> bool:
    """Whether stdout should get colour output; decided once and cached."""
    if "NO_COLOR" in os.environ:
        return False
    if "FORCE_COLOR" in os.environ:
        return True
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def _paint(text: str, *codes: str) -> str:
    return f"\x1b[{';'.join(codes)}m{text}{_RESET}"


def _styled(text: str, *codes: str) -> str:
    return _paint(text, *codes) if colors_enabled() else text


_MODE_COLOURS = {
    "ONLINE": (_GREEN, _BOLD),
    "BUSY": (_RED, _BOLD),
    "LIMITED": (_YELLOW, _BOLD),
    "OFFLINE": (_DIM, _BOLD),
}

_VERDICT_COLOURS = {
    "APPROVED": (_GREEN, _BOLD),
    "SCOPE DOWN": (_YELLOW, _BOLD),
    "DEFERRED": (_RED, _BOLD),
}


def color_mode(mode: str) -> str:
    """Colour a mode name by its kind; plain text when colour is off."""
    return _styled(mode, *_MODE_COLOURS.get(mode.upper(), (_BOLD,)))


def color_verdict(decision: str) -> str:
    """Colour a verdict decision, spelling SCOPE_DOWN as 'SCOPE DOWN'."""
    display = decision.upper()
    if display == "SCOPE_DOWN":
        display = "SCOPE DOWN"
    return _styled(display, *_VERDICT_COLOURS.get(display, (_BOLD,)))


def format_duration(minutes: int) -> str:
    """Render a number of minutes as '30 min', '1 hour', '2 hours' or '1h 30m'."""
    if minutes < 60:
        return f"{minutes} min"
    hours, remaining = divmod(minutes, 60)
    if remaining:
        return f"{hours}h {remaining}m"
    return "1 hour" if hours == 1 else f"{hours} hours"


def styled_green_bold(text: str) -> str:
    return _styled(text, _GREEN, _BOLD)


def styled_yellow_bold(text: str) -> str:
    return _styled(text, _YELLOW, _BOLD)


def styled_cyan_bold(text: str) -> str:
    return _styled(text, _CYAN, _BOLD)


def styled_cyan_underline(text: str) -> str:
    return _styled(text, _CYAN, _UNDERLINE)


def styled_bold(text: str) -> str:
    return _styled(text, _BOLD)


def styled_dimmed(text: str) -> str:
    return _styled(text, _DIM)