"""
pixel-term: terminal raster image editor

Load an 8-bit RGB PNG, move a cursor over its pixels, paint them from a
six-color palette and write the result back.

Quick Start:
    >>> import pixel_term as pt
    >>> canvas = pt.open("image.png")
    >>> canvas.move_cursor(pt.Direction.RIGHT)
    >>> canvas.paint(pt.Color(255, 0, 0))
    >>> canvas.save()

Features:
    - PNG load/save restricted to 8-bit RGB (no alpha, no palette)
    - Clamped cursor movement and cursor overlay rendering
    - vi-style Normal mode keys and a `:` command line
      (`:q`, `:w`, `:w <path>`, `:set <slot> <r> <g> <b>`)
    - JSON configuration for key bindings and palette defaults
    - Headless key scripts for batch edits
"""

import logging

__version__ = "0.1.0"

# Core types
from pixel_term.core.color import Color
from pixel_term.core.errors import (
    ImageError,
    ImageIoError,
    UnsupportedFormatError,
    DecodeError,
    EncodeError,
)
from pixel_term.core.palette import Palette, PaletteSlot
from pixel_term.core.pixel_buffer import PixelBuffer

# Editing
from pixel_term.edit.canvas import Canvas, CanvasError
from pixel_term.command.instruction import Direction
from pixel_term.app import EditorApp

logging.getLogger(__name__).addHandler(logging.NullHandler())


def open(path) -> Canvas:
    """Load a PNG into a Canvas with the cursor at (0, 0)."""
    return Canvas.open(path)


__all__ = [
    # Version
    "__version__",
    # Core types
    "Color",
    "Palette",
    "PaletteSlot",
    "PixelBuffer",
    # Errors
    "ImageError",
    "ImageIoError",
    "UnsupportedFormatError",
    "DecodeError",
    "EncodeError",
    "CanvasError",
    # Editing
    "Canvas",
    "Direction",
    "EditorApp",
    "open",
]
