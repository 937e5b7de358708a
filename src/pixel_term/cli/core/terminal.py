"""Low-level terminal operations."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Sequence


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int


class Terminal:
    """Terminal I/O for the full-screen editor."""

    @staticmethod
    def size() -> TerminalSize:
        """Get current terminal dimensions."""
        try:
            size = os.get_terminal_size()
            return TerminalSize(size.lines, size.columns)
        except OSError:
            return TerminalSize(24, 80)

    @staticmethod
    def write(text: str) -> None:
        """Write text to terminal."""
        sys.stdout.write(text)
        sys.stdout.flush()

    @staticmethod
    def clear() -> None:
        """Clear screen and move cursor to home."""
        Terminal.write('\x1b[2J\x1b[H')

    @staticmethod
    def draw_frame(lines: Sequence[str]) -> None:
        """Redraw the whole screen from the top-left corner, one line per row."""
        # Raw mode disables output newline translation, so rows are joined with CRLF
        body = '\x1b[0m\x1b[K\r\n'.join(lines)
        Terminal.write(f'\x1b[H{body}\x1b[0m\x1b[K\x1b[J')

    @staticmethod
    @contextmanager
    def raw_mode() -> Iterator[None]:
        """Context manager for raw terminal mode (Unix only)."""
        try:
            import termios
            import tty
        except ImportError:
            # Windows or no termios - just yield
            yield
            return
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    @staticmethod
    @contextmanager
    def managed_mode() -> Iterator[None]:
        """Full TUI mode: alternate screen, hidden cursor, raw input."""
        Terminal.write('\x1b[?1049h\x1b[?25l')
        try:
            with Terminal.raw_mode():
                yield
        finally:
            Terminal.write('\x1b[0m\x1b[?25h\x1b[?1049l')
