"""Key binding table for Normal mode.

The table is the single source of truth for which character selects which
palette slot. The command grammar resolves the slot letter of
`:set <slot> <r> <g> <b>` through the same table, so the two can never
disagree.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional, Sequence

from pixel_term.command.instruction import (
    QUIT,
    Direction,
    Instruction,
    Move,
    SelectPalette,
)
from pixel_term.command.keys import Key, KeyEvent, KeyToken
from pixel_term.core.palette import NUM_SLOTS, PaletteSlot

if TYPE_CHECKING:
    from pixel_term.config import EditorConfig


DEFAULT_COMMAND_PREFIX = ":"
DEFAULT_QUIT_KEY = "q"
DEFAULT_MOVEMENT_KEYS: Mapping[Direction, str] = MappingProxyType({
    Direction.LEFT: "h",
    Direction.DOWN: "j",
    Direction.UP: "k",
    Direction.RIGHT: "l",
})
DEFAULT_PALETTE_KEYS: tuple[str, ...] = ("w", "e", "r", "s", "d", "f")

ARROW_KEYS: Mapping[Key, Direction] = MappingProxyType({
    Key.LEFT: Direction.LEFT,
    Key.DOWN: Direction.DOWN,
    Key.UP: Direction.UP,
    Key.RIGHT: Direction.RIGHT,
})


class KeyBindingTable:
    """
    Immutable mapping from key token to Instruction.

    Also carries the command-line prefix character and the slot <-> character
    mapping used by the `:set` command.
    """

    __slots__ = ("_bindings", "_command_prefix", "_palette_chars")

    def __init__(
        self,
        bindings: Mapping[KeyToken, Instruction],
        command_prefix: str,
        palette_chars: Sequence[str],
    ) -> None:
        if len(palette_chars) != NUM_SLOTS:
            raise ValueError(f"Need {NUM_SLOTS} palette characters, got {len(palette_chars)}")
        if len(set(palette_chars)) != NUM_SLOTS:
            raise ValueError(f"Palette characters must be distinct: {list(palette_chars)}")
        if len(command_prefix) != 1:
            raise ValueError(f"Command prefix must be a single character, got {command_prefix!r}")
        if command_prefix in bindings:
            raise ValueError(f"Command prefix {command_prefix!r} is also bound in Normal mode")
        self._bindings = MappingProxyType(dict(bindings))
        self._command_prefix = command_prefix
        self._palette_chars = tuple(palette_chars)

    @classmethod
    def build(
        cls,
        command_prefix: str = DEFAULT_COMMAND_PREFIX,
        quit_key: str = DEFAULT_QUIT_KEY,
        movement_keys: Mapping[Direction, str] = DEFAULT_MOVEMENT_KEYS,
        palette_keys: Sequence[str] = DEFAULT_PALETTE_KEYS,
        arrow_keys: bool = True,
    ) -> KeyBindingTable:
        """Assemble a table from the individual key choices."""
        bindings: dict[KeyToken, Instruction] = {quit_key: QUIT}
        for direction, ch in movement_keys.items():
            bindings[ch] = Move(direction)
        if arrow_keys:
            for key, direction in ARROW_KEYS.items():
                bindings[key] = Move(direction)
        for slot, ch in zip(PaletteSlot, palette_keys):
            bindings[ch] = SelectPalette(slot)

        expected = 1 + len(movement_keys) + (len(ARROW_KEYS) if arrow_keys else 0) + len(palette_keys)
        if len(bindings) != expected:
            raise ValueError("The same key is bound to more than one instruction")
        return cls(bindings, command_prefix, palette_keys)

    @classmethod
    def default(cls) -> KeyBindingTable:
        return cls.build()

    @classmethod
    def from_config(cls, config: EditorConfig) -> KeyBindingTable:
        return cls.build(
            command_prefix=config.command_prefix,
            quit_key=config.quit_key,
            movement_keys=config.movement_keys,
            palette_keys=config.palette_keys,
            arrow_keys=config.arrow_keys,
        )

    @property
    def command_prefix(self) -> str:
        return self._command_prefix

    def get(self, token: KeyToken | None) -> Optional[Instruction]:
        """Instruction bound to `token`, if any."""
        if token is None:
            return None
        return self._bindings.get(token)

    def lookup(self, event: KeyEvent) -> Optional[Instruction]:
        return self.get(event.token)

    def palette_char(self, slot: PaletteSlot) -> str:
        """Character that selects `slot`."""
        return self._palette_chars[slot]

    def slot_for_char(self, ch: str) -> Optional[PaletteSlot]:
        """Palette slot selected by `ch`, or None."""
        for slot in PaletteSlot:
            if self._palette_chars[slot] == ch:
                return slot
        return None

    def keys_for(self, instruction: Instruction) -> list[KeyToken]:
        """All tokens bound to `instruction` (for help text)."""
        return [token for token, bound in self._bindings.items() if bound == instruction]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyBindingTable):
            return NotImplemented
        return (
            dict(self._bindings) == dict(other._bindings)
            and self._command_prefix == other._command_prefix
            and self._palette_chars == other._palette_chars
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"KeyBindingTable(prefix={self._command_prefix!r}, "
            f"palette={''.join(self._palette_chars)!r}, {len(self._bindings)} bindings)"
        )
