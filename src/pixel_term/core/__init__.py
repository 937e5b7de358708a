"""Core data structures: colors, the pixel buffer and the palette."""

from pixel_term.core.color import Color
from pixel_term.core.errors import (
    ImageError,
    ImageIoError,
    UnsupportedFormatError,
    DecodeError,
    EncodeError,
)
from pixel_term.core.palette import Palette, PaletteSlot
from pixel_term.core.pixel_buffer import PixelBuffer, RenderableGrid, DisplayCell

__all__ = [
    "Color",
    "ImageError",
    "ImageIoError",
    "UnsupportedFormatError",
    "DecodeError",
    "EncodeError",
    "Palette",
    "PaletteSlot",
    "PixelBuffer",
    "RenderableGrid",
    "DisplayCell",
]
