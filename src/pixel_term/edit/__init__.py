"""Editing surface for pixel images."""

from pixel_term.edit.canvas import Canvas, CanvasError

__all__ = ["Canvas", "CanvasError"]
