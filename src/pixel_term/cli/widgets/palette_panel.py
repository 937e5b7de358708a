"""Palette widget: the six slots with their keys and colors."""

from __future__ import annotations

from typing import Optional

from pixel_term.cli.core.ansi_text import styled
from pixel_term.cli.widgets.base import BaseWidget, Rect
from pixel_term.command.keyconfig import KeyBindingTable
from pixel_term.core.palette import Palette, PaletteSlot

SWATCH = "    "


class PaletteWidget(BaseWidget):
    """Lists palette slots; the selected slot is marked."""

    def __init__(self) -> None:
        super().__init__()
        self._palette: Optional[Palette] = None
        self._table: Optional[KeyBindingTable] = None
        self._selected = PaletteSlot.SLOT0

    def update(self, palette: Palette, table: KeyBindingTable, selected: PaletteSlot) -> None:
        self._palette = palette
        self._table = table
        self._selected = selected

    def render(self, bounds: Rect) -> list[str]:
        lines = ["\x1b[1mPalette\x1b[0m", ""]
        if self._palette is not None and self._table is not None:
            for slot, color in self._palette.items():
                marker = "\x1b[1;33m>\x1b[0m" if slot == self._selected else " "
                key = self._table.palette_char(slot)
                lines.append(f"{marker} \x1b[7m {key} \x1b[0m {styled(SWATCH, bg=color)} {color.hex}")
            lines.append("")
            prefix = self._table.command_prefix
            lines.append(f"\x1b[90m{prefix}set <key> r g b\x1b[0m")
        lines = lines[:bounds.height]
        while len(lines) < bounds.height:
            lines.append("")
        return lines
