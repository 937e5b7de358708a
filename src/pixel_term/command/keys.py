"""Input event tokens consumed by the input mode machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union


class Key(Enum):
    """Named key constants."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESCAPE = auto()
    TAB = auto()
    BACKSPACE = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    DELETE = auto()
    INSERT = auto()
    F1 = auto()
    F2 = auto()
    F3 = auto()
    F4 = auto()
    F5 = auto()
    F10 = auto()
    F12 = auto()


@dataclass(frozen=True)
class KeyEvent:
    """Represents a keyboard input event."""
    key: Optional[Key] = None  # Named key if recognized
    char: Optional[str] = None  # Character if printable
    raw: str = ""  # Raw escape sequence

    @property
    def is_char(self) -> bool:
        """Check if this is a printable character."""
        return self.char is not None and self.key is None

    @property
    def token(self) -> Key | str | None:
        """Lookup token for key binding tables: the named key or the character."""
        if self.key is not None:
            return self.key
        return self.char

    @classmethod
    def of_char(cls, ch: str) -> KeyEvent:
        return cls(char=ch, raw=ch)

    @classmethod
    def of_key(cls, key: Key) -> KeyEvent:
        return cls(key=key)


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal was resized."""
    rows: int
    cols: int


InputEvent = Union[KeyEvent, ResizeEvent]

# Key binding tables map either a named key or a single character
KeyToken = Union[Key, str]
