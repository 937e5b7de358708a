"""Two-mode input state machine.

States:
    NormalMode       keys map directly to instructions through the binding table
    CommandLineMode  keys are accumulated as text; Enter submits the line

Transitions:
    Normal      + prefix key  -> CommandLine(prefix)     emits NoOp
    Normal      + other key   -> Normal                  emits bound instruction or NoOp
    CommandLine + Enter       -> Normal                  emits parsed instruction or NoOp
    CommandLine + printable   -> CommandLine(buf + ch)   emits NoOp
    CommandLine + Backspace   -> CommandLine(buf[:-1])   emits NoOp (the prefix is kept)
    CommandLine + other key   -> unchanged               emits NoOp
    any state   + non-key     -> unchanged               emits NoOp
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from pixel_term.command.grammar import CommandGrammar
from pixel_term.command.instruction import NOOP, Instruction
from pixel_term.command.keyconfig import KeyBindingTable
from pixel_term.command.keys import InputEvent, Key, KeyEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalMode:
    """Keys are looked up in the binding table."""


@dataclass(frozen=True)
class CommandLineMode:
    """Keys edit a command line; `buffer` always starts with the prefix."""
    buffer: str


InputMode = Union[NormalMode, CommandLineMode]

NORMAL = NormalMode()


def transition(
    state: InputMode,
    event: InputEvent,
    table: KeyBindingTable,
    grammar: CommandGrammar,
) -> tuple[InputMode, Instruction]:
    """Compute the next state and the instruction emitted for one event."""
    if not isinstance(event, KeyEvent):
        return state, NOOP

    if isinstance(state, NormalMode):
        if event.is_char and event.char == table.command_prefix:
            return CommandLineMode(table.command_prefix), NOOP
        instruction = table.lookup(event)
        return state, instruction if instruction is not None else NOOP

    if isinstance(state, CommandLineMode):
        if event.key == Key.ENTER:
            instruction = grammar.parse(state.buffer)
            logger.debug("Command line %r -> %r", state.buffer, instruction)
            return NORMAL, instruction
        if event.key == Key.BACKSPACE:
            if len(state.buffer) > len(table.command_prefix):
                return CommandLineMode(state.buffer[:-1]), NOOP
            return state, NOOP
        if event.is_char and event.char.isprintable():
            return CommandLineMode(state.buffer + event.char), NOOP
        return state, NOOP

    raise TypeError(f"Unknown input mode: {state!r}")


class InputModeMachine:
    """
    Feeds input events one at a time through `transition`.

    The binding table is injected at construction and never changes.
    """

    def __init__(self, table: KeyBindingTable | None = None) -> None:
        self._table = table or KeyBindingTable.default()
        self._grammar = CommandGrammar(self._table)
        self._state: InputMode = NORMAL

    @property
    def table(self) -> KeyBindingTable:
        return self._table

    @property
    def state(self) -> InputMode:
        return self._state

    @property
    def in_command_line(self) -> bool:
        return isinstance(self._state, CommandLineMode)

    @property
    def command_buffer(self) -> str:
        """Current command line text, or "" in Normal mode."""
        if isinstance(self._state, CommandLineMode):
            return self._state.buffer
        return ""

    def feed(self, event: InputEvent) -> Instruction:
        """Consume one event and return the instruction it produces."""
        self._state, instruction = transition(self._state, event, self._table, self._grammar)
        return instruction
