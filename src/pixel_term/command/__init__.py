"""Input handling: key tokens, instructions, key bindings and the command line."""

from pixel_term.command.keys import Key, KeyEvent, ResizeEvent, InputEvent
from pixel_term.command.instruction import (
    Direction,
    Instruction,
    Quit,
    NoOp,
    Move,
    SelectPalette,
    SetPalette,
    Save,
    SaveAs,
)
from pixel_term.command.keyconfig import KeyBindingTable
from pixel_term.command.grammar import CommandGrammar, parse_command_line
from pixel_term.command.input_mode import (
    InputModeMachine,
    NormalMode,
    CommandLineMode,
    transition,
)
from pixel_term.command.stream import ProgrammedInput, parse_key_script

__all__ = [
    "Key",
    "KeyEvent",
    "ResizeEvent",
    "InputEvent",
    "Direction",
    "Instruction",
    "Quit",
    "NoOp",
    "Move",
    "SelectPalette",
    "SetPalette",
    "Save",
    "SaveAs",
    "KeyBindingTable",
    "CommandGrammar",
    "parse_command_line",
    "InputModeMachine",
    "NormalMode",
    "CommandLineMode",
    "transition",
    "ProgrammedInput",
    "parse_key_script",
]
