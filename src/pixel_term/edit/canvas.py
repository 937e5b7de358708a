"""Canvas - a pixel buffer with a movable cursor."""

from __future__ import annotations

import logging
from pathlib import Path

from pixel_term.command.instruction import Direction
from pixel_term.core.color import Color
from pixel_term.core.errors import ImageError
from pixel_term.core.pixel_buffer import PixelBuffer, RenderableGrid

logger = logging.getLogger(__name__)


class CanvasError(Exception):
    """Error occurred while processing the canvas image."""

    def __init__(self, image_error: ImageError) -> None:
        super().__init__(str(image_error))
        self.image_error = image_error


class Canvas:
    """
    Editing surface: one PixelBuffer and one cursor.

    The cursor starts at (0, 0) and is always inside the buffer; moving past
    an edge leaves it where it is.
    """

    def __init__(self, buffer: PixelBuffer) -> None:
        self._buffer = buffer
        self._cursor_x = 0
        self._cursor_y = 0

    @classmethod
    def open(cls, path: str | Path) -> Canvas:
        """Load a PNG into a new canvas; raises CanvasError on failure."""
        try:
            return cls(PixelBuffer.open(path))
        except ImageError as err:
            raise CanvasError(err) from err

    @property
    def buffer(self) -> PixelBuffer:
        return self._buffer

    @property
    def cursor(self) -> tuple[int, int]:
        """Cursor position as (x, y)."""
        return (self._cursor_x, self._cursor_y)

    @property
    def path(self) -> Path | None:
        return self._buffer.path

    @property
    def modified(self) -> bool:
        return self._buffer.modified

    def move_cursor(self, direction: Direction) -> None:
        """Move the cursor one cell, clamped to the buffer."""
        if direction == Direction.UP:
            self._cursor_y = max(0, self._cursor_y - 1)
        elif direction == Direction.DOWN:
            self._cursor_y = min(self._buffer.height - 1, self._cursor_y + 1)
        elif direction == Direction.LEFT:
            self._cursor_x = max(0, self._cursor_x - 1)
        elif direction == Direction.RIGHT:
            self._cursor_x = min(self._buffer.width - 1, self._cursor_x + 1)

    def color_under_cursor(self) -> Color:
        return self._buffer.color_at(self._cursor_x, self._cursor_y)

    def paint(self, color: Color) -> None:
        """Paint the pixel under the cursor."""
        self._buffer.paint(self._cursor_x, self._cursor_y, color)

    def render_projection(self) -> RenderableGrid:
        """Display grid with the cursor cell inverted."""
        return self._buffer.with_cursor_overlay(self._cursor_x, self._cursor_y)

    def save(self) -> None:
        """Save the image to its current path."""
        try:
            self._buffer.save()
        except ImageError as err:
            logger.error("Save failed: %s", err)
            raise CanvasError(err) from err

    def save_as(self, path: str | Path) -> None:
        """Save the image to `path` and keep using it."""
        try:
            self._buffer.save_as(path)
        except ImageError as err:
            logger.error("Save as %s failed: %s", path, err)
            raise CanvasError(err) from err
