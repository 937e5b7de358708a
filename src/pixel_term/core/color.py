"""Color representation for raster images."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Color:
    """
    A 24-bit color value (three 8-bit channels).

    Plain value type: two colors are equal when all three channels are.
    """
    r: int
    g: int
    b: int

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> Color:
        """Create a Color from RGB values, validating the channel range."""
        if not all(0 <= c <= 255 for c in (r, g, b)):
            raise ValueError(f"RGB values must be 0-255, got ({r}, {g}, {b})")
        return cls(r, g, b)

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        """Get hex representation."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def opposite(self) -> Color:
        """Channel-wise inverse, used to draw the cursor over a cell."""
        return Color(255 - self.r, 255 - self.g, 255 - self.b)

    def to_sgr_fg(self) -> str:
        """Return SGR parameters for a true color foreground."""
        return f"38;2;{self.r};{self.g};{self.b}"

    def to_sgr_bg(self) -> str:
        """Return SGR parameters for a true color background."""
        return f"48;2;{self.r};{self.g};{self.b}"


WHITE = Color(255, 255, 255)
