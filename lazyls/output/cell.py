"""Rendered, width-measured units of output.

A ``Cell`` pairs styled text with the number of terminal columns it takes
once escape sequences are stripped. Widths come from a ``WidthMeasurer``
that is created per render call and memoizes each distinct string.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..ansi import display_width


class WidthMeasurer:
    """Memoized ``display_width`` scoped to a single render call."""

    def __init__(self) -> None:
        self._widths: dict[str, int] = {}
        self.misses = 0

    def measure(self, text: str) -> int:
        width = self._widths.get(text)
        if width is None:
            width = display_width(text)
            self._widths[text] = width
            self.misses += 1
        return width

    def __len__(self) -> int:
        return len(self._widths)


def measure(text: str) -> int:
    """Return the terminal width of styled ``text`` without caching."""
    return display_width(text)


@dataclass(frozen=True)
class Cell:
    """Styled text plus its display width, fixed at creation."""

    text: str
    width: int

    @classmethod
    def measured(cls, text: str, measurer: WidthMeasurer) -> Cell:
        return cls(text=text, width=measurer.measure(text))

    @classmethod
    def blank(cls) -> Cell:
        return cls(text="", width=0)


class Alignment(Enum):
    LEFT = "left"
    RIGHT = "right"

    def pad(self, cell: Cell, width: int) -> str:
        """Pad ``cell`` to ``width`` columns using its measured width.

        The styled text is emitted unchanged; only spaces are added.
        """
        padding = " " * max(0, width - cell.width)
        if self is Alignment.LEFT:
            return cell.text + padding
        return padding + cell.text


__all__ = [
    "Alignment",
    "Cell",
    "WidthMeasurer",
    "measure",
]
