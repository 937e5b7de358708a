"""Core TUI infrastructure - terminal I/O and keyboard input."""

from pixel_term.cli.core.terminal import Terminal, TerminalSize
from pixel_term.cli.core.input import InputReader

__all__ = [
    "Terminal",
    "TerminalSize",
    "InputReader",
]
