"""ANSI text utilities - measuring and fitting strings with escape codes."""

from __future__ import annotations

import re

from pixel_term.core.color import Color

# Pattern to match ANSI escape sequences (including ~ terminator for F-keys, etc.)
_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;?]*[A-Za-z~]')

RESET = '\x1b[0m'


def visible_len(s: str) -> int:
    """Get visible length of string (excluding ANSI escape codes)."""
    return len(_ANSI_ESCAPE.sub('', s))


def styled(text: str, fg: Color | None = None, bg: Color | None = None) -> str:
    """Wrap text in true color SGR codes followed by a reset."""
    params = []
    if fg is not None:
        params.append(fg.to_sgr_fg())
    if bg is not None:
        params.append(bg.to_sgr_bg())
    if not params:
        return text
    return f"\x1b[{';'.join(params)}m{text}{RESET}"


def truncate(s: str, max_width: int) -> str:
    """
    Truncate an ANSI-escaped string to max visible width.

    Escape codes are kept; a reset is appended when anything was cut so
    colors do not bleed into the rest of the line.
    """
    if max_width <= 0:
        return ""
    out: list[str] = []
    vis = 0
    pos = 0
    while pos < len(s) and vis < max_width:
        match = _ANSI_ESCAPE.match(s, pos)
        if match:
            out.append(match.group())
            pos = match.end()
            continue
        out.append(s[pos])
        vis += 1
        pos += 1
    if pos < len(s):
        out.append(RESET)
    return ''.join(out)


def fit(s: str, width: int) -> str:
    """Truncate if too long, pad if too short. Always returns exactly width visible chars."""
    vlen = visible_len(s)
    if vlen > width:
        return truncate(s, width)
    return s + ' ' * (width - vlen)
