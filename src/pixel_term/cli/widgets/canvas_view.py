"""Canvas widget: draws a RenderableGrid, scrolled to keep the cursor visible."""

from __future__ import annotations

from typing import Optional

from pixel_term.cli.core.ansi_text import styled
from pixel_term.cli.widgets.base import BaseWidget, Rect
from pixel_term.core.pixel_buffer import RenderableGrid

# Each pixel is drawn as two terminal columns. With fg == bg the glyph is
# invisible; the cursor cell shows it in the inverted color.
CELL_GLYPH = "[]"
CELL_WIDTH = len(CELL_GLYPH)


class CanvasWidget(BaseWidget):
    """Displays the image grid with the cursor overlay."""

    def __init__(self) -> None:
        super().__init__()
        self._grid: Optional[RenderableGrid] = None
        self._cursor = (0, 0)
        self._scroll_x = 0
        self._scroll_y = 0

    def update(self, grid: RenderableGrid, cursor: tuple[int, int]) -> None:
        """Set the grid to draw and the cursor it was projected for."""
        self._grid = grid
        self._cursor = cursor

    def _follow_cursor(self, cols: int, rows: int) -> None:
        """Shift the viewport just enough to contain the cursor."""
        cx, cy = self._cursor
        if cx < self._scroll_x:
            self._scroll_x = cx
        elif cx >= self._scroll_x + cols:
            self._scroll_x = cx - cols + 1
        if cy < self._scroll_y:
            self._scroll_y = cy
        elif cy >= self._scroll_y + rows:
            self._scroll_y = cy - rows + 1

    def render(self, bounds: Rect) -> list[str]:
        if self._grid is None:
            lines = [""] * bounds.height
            msg = "(No image loaded)"
            if bounds.height > 2 and bounds.width > len(msg):
                lines[bounds.height // 2] = f"\x1b[90m{msg:^{bounds.width}}\x1b[0m"
            return lines

        cols = max(1, bounds.width // CELL_WIDTH)
        rows = max(1, bounds.height)
        self._follow_cursor(cols, rows)

        grid = self._grid
        x_end = min(grid.width, self._scroll_x + cols)
        y_end = min(grid.height, self._scroll_y + rows)

        lines = []
        for y in range(self._scroll_y, y_end):
            row = grid.rows[y]
            lines.append("".join(
                styled(CELL_GLYPH, fg=cell.fg, bg=cell.bg)
                for cell in row[self._scroll_x:x_end]
            ))
        while len(lines) < bounds.height:
            lines.append("")
        return lines
