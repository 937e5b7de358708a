"""Instructions - the closed set of effects the input layer can request."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Union

from pixel_term.core.color import Color
from pixel_term.core.palette import PaletteSlot


class Direction(Enum):
    """Cursor movement direction."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()


@dataclass(frozen=True)
class Quit:
    """Stop the application loop."""


@dataclass(frozen=True)
class NoOp:
    """Nothing to do."""


@dataclass(frozen=True)
class Move:
    direction: Direction


@dataclass(frozen=True)
class SelectPalette:
    """Select a palette slot and paint the cursor cell with it."""
    slot: PaletteSlot


@dataclass(frozen=True)
class SetPalette:
    """Replace the color of a palette slot."""
    slot: PaletteSlot
    color: Color


@dataclass(frozen=True)
class Save:
    """Save the image to its current path."""


@dataclass(frozen=True)
class SaveAs:
    """Save the image to a new path and keep using that path."""
    path: Path


Instruction = Union[Quit, NoOp, Move, SelectPalette, SetPalette, Save, SaveAs]

QUIT = Quit()
NOOP = NoOp()
SAVE = Save()
