"""Full-screen terminal front end for EditorApp.

Layout:
    +---------------------------+------------+
    |                           |  Palette   |
    |      Canvas               |  (slots)   |
    |                           |            |
    +---------------------------+------------+
    | Status bar / command line               |
    +-----------------------------------------+
"""

from __future__ import annotations

from typing import Optional

from pixel_term.app import EditorApp
from pixel_term.cli.core.ansi_text import fit
from pixel_term.cli.core.terminal import Terminal, TerminalSize
from pixel_term.cli.widgets.base import Rect
from pixel_term.cli.widgets.canvas_view import CanvasWidget
from pixel_term.cli.widgets.palette_panel import PaletteWidget
from pixel_term.cli.widgets.status_bar import Shortcut, StatusBarWidget
from pixel_term.command.instruction import QUIT, Direction, Move
from pixel_term.command.keys import Key, KeyToken
from pixel_term.command.stream import EventSource, KeyInput


# Layout constants
PALETTE_WIDTH = 28
MIN_CANVAS_WIDTH = 20
STATUS_BAR_HEIGHT = 1

_KEY_SYMBOLS = {
    Key.UP: "↑",
    Key.DOWN: "↓",
    Key.LEFT: "←",
    Key.RIGHT: "→",
}


def _key_label(token: KeyToken) -> str:
    if isinstance(token, Key):
        return _KEY_SYMBOLS.get(token, token.name.title())
    return token


class EditorScreen:
    """Composes the widgets for one EditorApp into screen lines."""

    def __init__(self, app: EditorApp) -> None:
        self.app = app
        self.canvas = CanvasWidget()
        self.palette = PaletteWidget()
        self.status_bar = StatusBarWidget()
        self.status_bar.set_shortcuts(self._shortcuts())

    def _shortcuts(self) -> list[Shortcut]:
        table = self.app.table
        move_keys = "".join(
            _key_label(token)
            for direction in (Direction.LEFT, Direction.DOWN, Direction.UP, Direction.RIGHT)
            for token in table.keys_for(Move(direction))
            if isinstance(token, str)
        )
        prefix = table.command_prefix
        shortcuts = [Shortcut(move_keys, "Move")]
        shortcuts.extend(Shortcut(_key_label(t), "Quit") for t in table.keys_for(QUIT))
        shortcuts.append(Shortcut(f"{prefix}w", "Save"))
        shortcuts.append(Shortcut(f"{prefix}q", "Quit"))
        return shortcuts

    def _update(self) -> None:
        app = self.app
        self.canvas.update(app.canvas.render_projection(), app.canvas.cursor)
        self.palette.update(app.palette, app.table, app.selected_slot)

        if app.machine.in_command_line:
            self.status_bar.set_command_line(app.machine.command_buffer)
            return
        self.status_bar.set_command_line(None)

        x, y = app.canvas.cursor
        status = f"({x},{y}) {app.canvas.color_under_cursor().hex}"
        if app.canvas.modified:
            status = "[*] " + status
        self.status_bar.set_left(status)
        if app.message:
            self.status_bar.set_center(app.message)
        else:
            path = app.canvas.path
            self.status_bar.set_center(path.name if path else "(untitled)")

    def render(self, size: TerminalSize) -> list[str]:
        """Render all widgets into exactly size.rows lines."""
        self._update()

        content_height = max(1, size.rows - STATUS_BAR_HEIGHT)
        palette_width = PALETTE_WIDTH
        if size.cols - palette_width - 1 < MIN_CANVAS_WIDTH:
            palette_width = 0
        canvas_width = size.cols - palette_width - (1 if palette_width else 0)

        canvas_lines = self.canvas.render(Rect(0, 0, canvas_width, content_height))
        palette_lines: list[str] = []
        if palette_width:
            palette_lines = self.palette.render(Rect(0, 0, palette_width, content_height))

        output: list[str] = []
        for y in range(content_height):
            line = fit(canvas_lines[y] if y < len(canvas_lines) else "", canvas_width)
            if palette_width:
                side = palette_lines[y] if y < len(palette_lines) else ""
                line += "\x1b[90m│\x1b[0m" + fit(side, palette_width)
            output.append(line)

        output.extend(self.status_bar.render(Rect(0, content_height, size.cols, STATUS_BAR_HEIGHT)))
        return output

    def draw(self, app: Optional[EditorApp] = None) -> None:
        """Render callback for EditorApp.run."""
        Terminal.draw_frame(self.render(Terminal.size()))


def run_editor(app: EditorApp, source: EventSource | None = None) -> None:
    """
    Run `app` interactively in the terminal.

    The terminal is restored before any exception leaves this function.
    """
    screen = EditorScreen(app)
    with Terminal.managed_mode():
        Terminal.clear()
        app.run(source or KeyInput(), render=screen.draw)
