"""Palette - six fixed color slots used for painting."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Iterator

from pixel_term.core.color import Color


class PaletteSlot(IntEnum):
    """Palette slot identifiers; the value is the slot's position."""
    SLOT0 = 0
    SLOT1 = 1
    SLOT2 = 2
    SLOT3 = 3
    SLOT4 = 4
    SLOT5 = 5


NUM_SLOTS = len(PaletteSlot)

# Default slot colors, in slot order
DEFAULT_COLORS: tuple[Color, ...] = (
    Color(0, 0, 0),        # black
    Color(127, 127, 127),  # gray
    Color(255, 255, 255),  # white
    Color(255, 0, 0),      # red
    Color(0, 255, 0),      # green
    Color(0, 0, 255),      # blue
)


class Palette:
    """
    Exactly six colors addressed by PaletteSlot.

    Every slot always holds a color; there is no way to add or remove slots.
    """

    def __init__(self, colors: Iterable[Color] = DEFAULT_COLORS) -> None:
        cells = list(colors)
        if len(cells) != NUM_SLOTS:
            raise ValueError(f"Palette needs exactly {NUM_SLOTS} colors, got {len(cells)}")
        self._cells = cells

    def color(self, slot: PaletteSlot) -> Color:
        """Return the color stored in `slot`."""
        return self._cells[slot]

    def set_color(self, slot: PaletteSlot, color: Color) -> None:
        """Replace the color stored in `slot`."""
        self._cells[slot] = color

    def items(self) -> Iterator[tuple[PaletteSlot, Color]]:
        """Iterate over (slot, color) pairs in slot order."""
        for slot in PaletteSlot:
            yield slot, self._cells[slot]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Palette):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Palette({', '.join(c.hex for c in self._cells)})"
