"""TUI widgets."""

from pixel_term.cli.widgets.base import BaseWidget, Rect
from pixel_term.cli.widgets.canvas_view import CanvasWidget
from pixel_term.cli.widgets.palette_panel import PaletteWidget
from pixel_term.cli.widgets.status_bar import StatusBarWidget, Shortcut

__all__ = [
    "BaseWidget",
    "Rect",
    "CanvasWidget",
    "PaletteWidget",
    "StatusBarWidget",
    "Shortcut",
]
