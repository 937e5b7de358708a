"""Status bar widget for displaying info and shortcuts."""

from __future__ import annotations

from dataclasses import dataclass

from pixel_term.cli.core.ansi_text import truncate, visible_len
from pixel_term.cli.widgets.base import BaseWidget, Rect


@dataclass
class Shortcut:
    """A keyboard shortcut to display."""
    key: str
    label: str


class StatusBarWidget(BaseWidget):
    """Bottom status bar: info on the left, shortcuts on the right.

    While a command line is being typed the whole bar shows it instead.
    """

    def __init__(self) -> None:
        super().__init__()
        self._left_text = ""
        self._center_text = ""
        self._shortcuts: list[Shortcut] = []
        self._command_line: str | None = None

    def set_left(self, text: str) -> None:
        self._left_text = text

    def set_center(self, text: str) -> None:
        self._center_text = text

    def set_shortcuts(self, shortcuts: list[Shortcut]) -> None:
        self._shortcuts = shortcuts

    def set_command_line(self, text: str | None) -> None:
        """Show `text` as an input line, or None to go back to the status view."""
        self._command_line = text

    def render(self, bounds: Rect) -> list[str]:
        """Render the status bar, fitting within bounds.width."""
        width = bounds.width

        if self._command_line is not None:
            text = truncate(f"{self._command_line}\x1b[7m \x1b[27m", width)
            padding = " " * max(0, width - visible_len(text))
            return [f"{text}{padding}\x1b[0m"]

        # Shortcuts from the right, only what fits
        shortcut_parts: list[str] = []
        shortcuts_len = 0
        for sc in reversed(self._shortcuts):
            part = f"\x1b[7m {sc.key} \x1b[0;100;36m{sc.label} "
            part_len = visible_len(part)
            if shortcuts_len + part_len + 20 < width:
                shortcut_parts.insert(0, part)
                shortcuts_len += part_len
            else:
                break

        left_center = f" {self._left_text}"
        if self._center_text:
            left_center += f"  {self._center_text}"
        available = width - shortcuts_len
        if visible_len(left_center) > available:
            left_center = truncate(left_center, max(0, available - 1)) + "…"

        padding = " " * max(0, width - visible_len(left_center) - shortcuts_len)
        return [f"\x1b[100m\x1b[97m{left_center}{padding}{''.join(shortcut_parts)}\x1b[0m"]
