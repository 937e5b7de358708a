"""Raw keyboard reader producing KeyEvent tokens."""

from __future__ import annotations

import os
import select
import sys
import time
from typing import Optional

from pixel_term.command.keys import Key, KeyEvent


class InputReader:
    """
    Keyboard input reader for a terminal in raw mode.

    Uses os.read() to bypass Python's I/O buffering and properly
    handle escape sequences that may arrive split across reads.
    """

    # Escape sequence mappings (without the \x1b prefix)
    SEQUENCES: dict[str, Key] = {
        # Arrow keys (CSI)
        '[A': Key.UP,
        '[B': Key.DOWN,
        '[C': Key.RIGHT,
        '[D': Key.LEFT,
        # Arrow keys (SS3 - application mode)
        'OA': Key.UP,
        'OB': Key.DOWN,
        'OC': Key.RIGHT,
        'OD': Key.LEFT,
        # Navigation
        '[H': Key.HOME,
        '[F': Key.END,
        '[1~': Key.HOME,
        '[4~': Key.END,
        '[5~': Key.PAGE_UP,
        '[6~': Key.PAGE_DOWN,
        '[2~': Key.INSERT,
        '[3~': Key.DELETE,
        # Function keys
        'OP': Key.F1,
        'OQ': Key.F2,
        'OR': Key.F3,
        'OS': Key.F4,
        '[15~': Key.F5,
        '[21~': Key.F10,
        '[24~': Key.F12,
    }

    SIMPLE_KEYS: dict[str, Key] = {
        '\r': Key.ENTER,
        '\n': Key.ENTER,
        '\t': Key.TAB,
        '\x7f': Key.BACKSPACE,
        '\x08': Key.BACKSPACE,
    }

    # How long to wait for the rest of an escape sequence
    ESCAPE_TIMEOUT = 0.1

    def __init__(self, fd: int | None = None) -> None:
        self._pending = ""
        self._fd = sys.stdin.fileno() if fd is None else fd

    def read(self, timeout: float = 0.1) -> Optional[KeyEvent]:
        """
        Read a single key event.

        Returns None if no input available within timeout.
        """
        if not self._pending:
            if not self._has_input(timeout):
                return None
            self._fill()
        return self._next_event()

    def feed(self, text: str) -> None:
        """Queue raw input as if it had been typed."""
        self._pending += text

    def _fill(self) -> None:
        """Read everything currently available into the pending buffer."""
        self._read_chunk()
        if self._pending != '\x1b':
            return
        # A lone escape may be the start of a sequence still in flight
        deadline = time.monotonic() + self.ESCAPE_TIMEOUT
        while time.monotonic() < deadline:
            if not self._has_input(min(0.025, max(0.0, deadline - time.monotonic()))):
                continue
            self._read_chunk()
            rest = self._pending[1:]
            if rest and (rest[-1].isalpha() or rest[-1] == '~' or rest in self.SEQUENCES):
                return

    def _read_chunk(self) -> None:
        try:
            data = os.read(self._fd, 1024)
        except (OSError, BlockingIOError):
            return
        self._pending += data.decode('utf-8', errors='replace')

    def _next_event(self) -> Optional[KeyEvent]:
        """Pop the next key event off the pending buffer."""
        while self._pending:
            head = self._pending[0]
            if head in self.SIMPLE_KEYS:
                self._pending = self._pending[1:]
                return KeyEvent(key=self.SIMPLE_KEYS[head], raw=head)
            if head == '\x1b':
                return self._parse_escape_sequence()
            self._pending = self._pending[1:]
            if head.isprintable():
                return KeyEvent(char=head, raw=head)
            # Unknown control character - skip it
        return None

    def _parse_escape_sequence(self) -> KeyEvent:
        """Parse an escape sequence at the start of the pending buffer."""
        rest = self._pending[1:]
        end = 0
        for i, ch in enumerate(rest):
            if ch == '\x1b':
                break
            end = i + 1
            if i > 0 and (ch.isalpha() or ch == '~'):
                break

        if end == 0:
            self._pending = rest
            return KeyEvent(key=Key.ESCAPE, raw='\x1b')

        seq = rest[:end]
        self._pending = rest[end:]
        return KeyEvent(key=self.SEQUENCES.get(seq), raw='\x1b' + seq)

    def _has_input(self, timeout: float) -> bool:
        """Check if input is available within timeout."""
        try:
            ready, _, _ = select.select([self._fd], [], [], timeout)
            return bool(ready)
        except (ValueError, OSError):
            return False
