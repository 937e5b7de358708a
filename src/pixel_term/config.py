"""Editor configuration: key choices and the initial palette.

Configuration is read once at startup from a JSON file. Any key left out
keeps its default:

    {
        "command_prefix": ":",
        "quit_key": "q",
        "movement_keys": {"left": "h", "down": "j", "up": "k", "right": "l"},
        "palette_keys": "wersdf",
        "palette_colors": ["#000000", [127, 127, 127], "#FFFFFF",
                           "#FF0000", "#00FF00", "#0000FF"],
        "arrow_keys": true
    }
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from pixel_term.command.instruction import Direction
from pixel_term.command.keyconfig import (
    DEFAULT_COMMAND_PREFIX,
    DEFAULT_MOVEMENT_KEYS,
    DEFAULT_PALETTE_KEYS,
    DEFAULT_QUIT_KEY,
)
from pixel_term.core.color import Color
from pixel_term.core.palette import DEFAULT_COLORS, NUM_SLOTS, Palette

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PIXEL_TERM_CONFIG"

_WORD_CHAR = re.compile(r"\w", re.ASCII)
_HEX_COLOR = re.compile(r"#?([0-9A-Fa-f]{6})")

_KNOWN_KEYS = {
    "command_prefix",
    "quit_key",
    "movement_keys",
    "palette_keys",
    "palette_colors",
    "arrow_keys",
}


class ConfigError(ValueError):
    """Invalid or unreadable configuration."""


def default_config_path() -> Path:
    """Location of the per-user configuration file."""
    return Path.home() / ".config" / "pixel-term" / "config.json"


@dataclass(frozen=True)
class EditorConfig:
    """Startup configuration for key bindings and palette."""
    command_prefix: str = DEFAULT_COMMAND_PREFIX
    quit_key: str = DEFAULT_QUIT_KEY
    movement_keys: Mapping[Direction, str] = field(
        default_factory=lambda: dict(DEFAULT_MOVEMENT_KEYS)
    )
    palette_keys: tuple[str, ...] = DEFAULT_PALETTE_KEYS
    palette_colors: tuple[Color, ...] = DEFAULT_COLORS
    arrow_keys: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check key and color choices; raises ConfigError."""
        single_keys = {"command_prefix": self.command_prefix, "quit_key": self.quit_key}
        for name, ch in single_keys.items():
            _check_key_char(name, ch)

        if set(self.movement_keys) != set(Direction):
            raise ConfigError("movement_keys must define left, down, up and right")
        for direction, ch in self.movement_keys.items():
            _check_key_char(f"movement_keys.{direction.name.lower()}", ch)

        if len(self.palette_keys) != NUM_SLOTS:
            raise ConfigError(f"palette_keys needs {NUM_SLOTS} characters, got {len(self.palette_keys)}")
        for ch in self.palette_keys:
            _check_key_char("palette_keys", ch)
            if not _WORD_CHAR.fullmatch(ch):
                raise ConfigError(f"palette key {ch!r} must be a letter, digit or underscore")

        if len(self.palette_colors) != NUM_SLOTS:
            raise ConfigError(f"palette_colors needs {NUM_SLOTS} colors, got {len(self.palette_colors)}")

        bound = [self.command_prefix, self.quit_key, *self.movement_keys.values(), *self.palette_keys]
        duplicates = sorted({ch for ch in bound if bound.count(ch) > 1})
        if duplicates:
            raise ConfigError(f"keys bound more than once: {', '.join(duplicates)}")

    def palette(self) -> Palette:
        """Initial palette for this configuration."""
        return Palette(self.palette_colors)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EditorConfig:
        """Build a config from parsed JSON, defaulting missing keys."""
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a JSON object")
        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            raise ConfigError(f"unknown configuration keys: {', '.join(sorted(unknown))}")

        kwargs: dict[str, Any] = {}
        for name in ("command_prefix", "quit_key"):
            if name in data:
                kwargs[name] = data[name]
        if "movement_keys" in data:
            kwargs["movement_keys"] = _parse_movement_keys(data["movement_keys"])
        if "palette_keys" in data:
            keys = data["palette_keys"]
            if not isinstance(keys, (str, list)):
                raise ConfigError("palette_keys must be a string or a list of characters")
            kwargs["palette_keys"] = tuple(keys)
        if "palette_colors" in data:
            colors = data["palette_colors"]
            if not isinstance(colors, list):
                raise ConfigError("palette_colors must be a list")
            kwargs["palette_colors"] = tuple(_parse_color(c) for c in colors)
        if "arrow_keys" in data:
            if not isinstance(data["arrow_keys"], bool):
                raise ConfigError("arrow_keys must be true or false")
            kwargs["arrow_keys"] = data["arrow_keys"]
        return cls(**kwargs)


def _check_key_char(name: str, ch: Any) -> None:
    if not isinstance(ch, str) or len(ch) != 1 or not ch.isprintable() or ch.isspace():
        raise ConfigError(f"{name} must be a single printable character, got {ch!r}")


def _parse_movement_keys(value: Any) -> dict[Direction, str]:
    if not isinstance(value, Mapping):
        raise ConfigError("movement_keys must be an object")
    keys = dict(DEFAULT_MOVEMENT_KEYS)
    for name, ch in value.items():
        try:
            direction = Direction[str(name).upper()]
        except KeyError:
            raise ConfigError(f"unknown movement direction: {name!r}") from None
        keys[direction] = ch
    return keys


def _parse_color(value: Any) -> Color:
    """Parse "#RRGGBB" / "RRGGBB" strings or [r, g, b] lists."""
    if isinstance(value, str):
        match = _HEX_COLOR.fullmatch(value.strip())
        if not match:
            raise ConfigError(f"cannot parse color: {value!r}")
        digits = match.group(1)
        return Color(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
    if isinstance(value, list) and len(value) == 3 and all(
        isinstance(c, int) and not isinstance(c, bool) for c in value
    ):
        try:
            return Color.from_rgb(*value)
        except ValueError as err:
            raise ConfigError(str(err)) from err
    raise ConfigError(f"cannot parse color: {value!r}")


def load_config(path: str | Path | None = None) -> EditorConfig:
    """
    Load the editor configuration.

    Lookup order: `path`, then $PIXEL_TERM_CONFIG, then the per-user default
    location. An explicitly named file must exist; a missing default file
    means built-in defaults.

    Raises:
        ConfigError: The file cannot be read or holds invalid settings
    """
    explicit = True
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = Path(env_path).expanduser()
        else:
            path = default_config_path()
            explicit = False
    path = Path(path)

    if not path.exists():
        if explicit:
            raise ConfigError(f"configuration file not found: {path}")
        logger.debug("No configuration at %s, using defaults", path)
        return EditorConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as err:
        raise ConfigError(f"{path}: invalid JSON: {err}") from err
    except OSError as err:
        raise ConfigError(f"cannot read {path}: {err}") from err

    try:
        config = EditorConfig.from_dict(data)
    except ConfigError as err:
        logger.warning("Rejected configuration %s: %s", path, err)
        raise ConfigError(f"{path}: {err}") from err
    logger.info("Loaded configuration from %s", path)
    return config
