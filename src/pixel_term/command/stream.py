"""Input event sources for the application loop."""

from __future__ import annotations

import re
from collections import deque
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Protocol

from pixel_term.command.keys import InputEvent, Key, KeyEvent, ResizeEvent

if TYPE_CHECKING:
    from pixel_term.cli.core.input import InputReader
    from pixel_term.cli.core.terminal import TerminalSize


class EventSource(Protocol):
    """Anything the application loop can pull input events from."""

    def read(self) -> Optional[InputEvent]:
        """Block until the next event is available; None means no more input."""
        ...


class KeyInput:
    """Live keyboard input from the terminal, plus resize notifications."""

    def __init__(
        self,
        reader: InputReader | None = None,
        size: Callable[[], TerminalSize] | None = None,
    ) -> None:
        from pixel_term.cli.core.input import InputReader
        from pixel_term.cli.core.terminal import Terminal

        self._reader = reader or InputReader()
        self._size = size or Terminal.size
        self._last_size = self._size()

    def read(self) -> Optional[InputEvent]:
        while True:
            current = self._size()
            if current != self._last_size:
                self._last_size = current
                return ResizeEvent(current.rows, current.cols)
            event = self._reader.read(timeout=0.1)
            if event is not None:
                return event


class ProgrammedInput:
    """Replays a fixed list of events; used for tests and headless runs."""

    def __init__(self, events: Iterable[InputEvent]) -> None:
        self._remaining = deque(events)

    @classmethod
    def from_script(cls, script: str) -> ProgrammedInput:
        return cls(parse_key_script(script))

    @property
    def remaining(self) -> int:
        return len(self._remaining)

    def read(self) -> Optional[InputEvent]:
        if not self._remaining:
            return None
        return self._remaining.popleft()


KEY_NAMES: dict[str, Key] = {
    "enter": Key.ENTER,
    "cr": Key.ENTER,
    "bs": Key.BACKSPACE,
    "backspace": Key.BACKSPACE,
    "esc": Key.ESCAPE,
    "tab": Key.TAB,
    "up": Key.UP,
    "down": Key.DOWN,
    "left": Key.LEFT,
    "right": Key.RIGHT,
}

_NAMED_KEY = re.compile(r"<([A-Za-z]+)>")


def parse_key_script(script: str) -> list[KeyEvent]:
    """
    Turn a key script into key events.

    Plain characters become character events. Named keys are written in angle
    brackets, e.g. ``:w out.png<Enter>``; ``<lt>`` is a literal ``<``.

    Raises:
        ValueError: On an unknown key name
    """
    events: list[KeyEvent] = []
    pos = 0
    while pos < len(script):
        match = _NAMED_KEY.match(script, pos)
        if match:
            name = match.group(1).lower()
            if name == "lt":
                events.append(KeyEvent.of_char("<"))
            elif name in KEY_NAMES:
                events.append(KeyEvent.of_key(KEY_NAMES[name]))
            else:
                raise ValueError(f"Unknown key name: <{match.group(1)}>")
            pos = match.end()
            continue
        ch = script[pos]
        if ch == "\n":
            events.append(KeyEvent.of_key(Key.ENTER))
        else:
            events.append(KeyEvent.of_char(ch))
        pos += 1
    return events
