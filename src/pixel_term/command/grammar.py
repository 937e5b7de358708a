"""Command-line grammar.

A submitted command line (prefix included) is matched against an ordered list
of rules; the first rule that matches wins:

    :q                          Quit
    :w                          Save
    :w <path>                   SaveAs(path)
    :set <slot> <r> <g> <b>     SetPalette(slot, Color(r, g, b))

Whitespace is tolerated around the whole line, after the prefix and between
tokens. Anything else, including a bad slot letter, a channel outside 0-255 or
trailing garbage, yields NoOp. Failures are deliberately silent.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from pixel_term.command.instruction import (
    NOOP,
    QUIT,
    SAVE,
    Instruction,
    SaveAs,
    SetPalette,
)
from pixel_term.command.keyconfig import KeyBindingTable
from pixel_term.core.color import Color

Builder = Callable[["re.Match[str]", KeyBindingTable], Optional[Instruction]]


@dataclass(frozen=True)
class GrammarRule:
    """A named pattern plus the function turning its match into an Instruction.

    The builder may return None to reject a syntactic match, in which case the
    next rule is tried.
    """
    name: str
    body: str
    build: Builder


def _build_quit(match: re.Match[str], table: KeyBindingTable) -> Optional[Instruction]:
    return QUIT


def _build_save(match: re.Match[str], table: KeyBindingTable) -> Optional[Instruction]:
    return SAVE


def _build_save_as(match: re.Match[str], table: KeyBindingTable) -> Optional[Instruction]:
    return SaveAs(Path(match.group("path")))


def _build_set_palette(match: re.Match[str], table: KeyBindingTable) -> Optional[Instruction]:
    slot = table.slot_for_char(match.group("slot"))
    if slot is None:
        return None
    try:
        channels = [int(match.group(name)) for name in ("r", "g", "b")]
    except ValueError:
        return None
    if not all(0 <= c <= 255 for c in channels):
        return None
    return SetPalette(slot, Color(*channels))


RULES: tuple[GrammarRule, ...] = (
    GrammarRule("quit", r"q", _build_quit),
    GrammarRule("save", r"w", _build_save),
    GrammarRule("save_as", r"w\s+(?P<path>\S+)", _build_save_as),
    GrammarRule(
        "set_palette",
        r"set\s+(?P<slot>\w)\s+(?P<r>[0-9]+)\s+(?P<g>[0-9]+)\s+(?P<b>[0-9]+)",
        _build_set_palette,
    ),
)


class CommandGrammar:
    """Parses submitted command lines using a key binding table."""

    def __init__(self, table: KeyBindingTable, rules: tuple[GrammarRule, ...] = RULES) -> None:
        self._table = table
        prefix = re.escape(table.command_prefix)
        self._rules = [
            (rule, re.compile(rf"\s*{prefix}\s*{rule.body}\s*", re.ASCII))
            for rule in rules
        ]

    def parse(self, line: str) -> Instruction:
        """Turn a full command line into an Instruction (NoOp if nothing matches)."""
        for rule, pattern in self._rules:
            match = pattern.fullmatch(line)
            if match is None:
                continue
            instruction = rule.build(match, self._table)
            if instruction is not None:
                return instruction
        return NOOP


def parse_command_line(line: str, table: KeyBindingTable | None = None) -> Instruction:
    """Parse a single command line with a throwaway grammar."""
    return CommandGrammar(table or KeyBindingTable.default()).parse(line)
