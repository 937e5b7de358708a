"""Base widget and layout rectangle."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class Rect:
    """Rectangle bounds for widget positioning."""
    x: int
    y: int
    width: int
    height: int


class BaseWidget(ABC):
    """Base class for screen regions rendered as lists of ANSI lines."""

    @abstractmethod
    def render(self, bounds: Rect) -> list[str]:
        """Render widget content as at most bounds.height lines."""
        pass
