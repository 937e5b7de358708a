"""EditorApp - owns the editing state and applies instructions to it.

The governing loop is strictly sequential:

    render -> wait for one input event -> feed the input machine
           -> apply the resulting instruction -> repeat until Quit

Rendering is optional so the same loop drives the terminal UI and headless
key-script runs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from pixel_term.command.input_mode import InputModeMachine
from pixel_term.command.instruction import (
    Instruction,
    Move,
    NoOp,
    Quit,
    Save,
    SaveAs,
    SelectPalette,
    SetPalette,
)
from pixel_term.command.keyconfig import KeyBindingTable
from pixel_term.command.stream import EventSource
from pixel_term.config import EditorConfig
from pixel_term.core.palette import Palette, PaletteSlot
from pixel_term.edit.canvas import Canvas

logger = logging.getLogger(__name__)


class EditorApp:
    """
    Editing session for a single image.

    Attributes:
        canvas: The image with its cursor
        palette: The six paint colors
        machine: Input mode machine turning events into instructions
        selected_slot: Palette slot most recently selected
        message: Short status text from the last save, or None
    """

    def __init__(
        self,
        canvas: Canvas,
        palette: Palette | None = None,
        table: KeyBindingTable | None = None,
    ) -> None:
        self.canvas = canvas
        self.palette = palette or Palette()
        self.machine = InputModeMachine(table)
        self.selected_slot = PaletteSlot.SLOT0
        self.message: Optional[str] = None
        self.running = False

    @classmethod
    def open(cls, path: str | Path, config: EditorConfig | None = None) -> EditorApp:
        """Load `path` and build a session from `config` (defaults if None)."""
        config = config or EditorConfig()
        return cls(
            Canvas.open(path),
            palette=config.palette(),
            table=KeyBindingTable.from_config(config),
        )

    @property
    def table(self) -> KeyBindingTable:
        return self.machine.table

    def apply(self, instruction: Instruction) -> bool:
        """
        Apply one instruction.

        Returns:
            False when the loop should stop, True otherwise

        Raises:
            CanvasError: Saving failed
        """
        if isinstance(instruction, NoOp):
            return True

        logger.debug("Applying %r", instruction)
        self.message = None

        if isinstance(instruction, Quit):
            return False
        if isinstance(instruction, Move):
            self.canvas.move_cursor(instruction.direction)
        elif isinstance(instruction, SelectPalette):
            self.selected_slot = instruction.slot
            self.canvas.paint(self.palette.color(instruction.slot))
        elif isinstance(instruction, SetPalette):
            self.palette.set_color(instruction.slot, instruction.color)
        elif isinstance(instruction, Save):
            self.canvas.save()
            self.message = f"Saved: {self.canvas.path}"
        elif isinstance(instruction, SaveAs):
            self.canvas.save_as(instruction.path)
            self.message = f"Saved: {instruction.path}"
        else:
            raise TypeError(f"Unknown instruction: {instruction!r}")
        return True

    def run(
        self,
        source: EventSource,
        render: Callable[[EditorApp], None] | None = None,
    ) -> None:
        """
        Run the loop until Quit or until `source` runs dry.

        Args:
            source: Where input events come from
            render: Called with the app before each read
        """
        self.running = True
        try:
            while self.running:
                if render is not None:
                    render(self)
                event = source.read()
                if event is None:
                    logger.debug("Input exhausted")
                    break
                instruction = self.machine.feed(event)
                self.running = self.apply(instruction)
        finally:
            self.running = False
