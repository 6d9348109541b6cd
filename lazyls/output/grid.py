"""Grid fitting: pack width-measured cells into as few rows as possible.

Candidate column counts are tried from one row (every cell in its own
column) down to a single column. The first arrangement whose column widths
plus separators fit the console wins. When even a single column is too wide
the engine reports ``DoesNotFit`` and ``render_grid`` falls back to one cell
per line.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .cell import Cell

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 2


@dataclass(frozen=True)
class GridOptions:
    """``across`` fills rows first; otherwise cells run down each column."""

    across: bool = False
    console_width: int = 80


@dataclass(frozen=True)
class DoesNotFit:
    """No grid fits: the widest cell alone exceeds the console width."""

    widest: int
    console_width: int


@dataclass(frozen=True)
class GridLayout:
    """Cells assigned to rows and columns with fixed column widths."""

    cells: tuple[Cell, ...]
    across: bool
    num_rows: int
    num_columns: int
    column_widths: tuple[int, ...]

    def cell_index(self, row: int, column: int) -> int:
        if self.across:
            return row * self.num_columns + column
        return column * self.num_rows + row

    def rows(self) -> Iterator[list[Cell]]:
        """Yield each row's cells left to right, skipping empty slots."""
        for row in range(self.num_rows):
            row_cells: list[Cell] = []
            for column in range(self.num_columns):
                index = self.cell_index(row, column)
                if index < len(self.cells):
                    row_cells.append(self.cells[index])
            yield row_cells

    @property
    def total_width(self) -> int:
        if not self.column_widths:
            return 0
        return sum(self.column_widths) + SEPARATOR_WIDTH * (len(self.column_widths) - 1)

    def render(self) -> str:
        """Render rows, padding every cell except the last in each row."""
        separator = " " * SEPARATOR_WIDTH
        lines: list[str] = []
        for row in range(self.num_rows):
            parts: list[tuple[int, Cell]] = []
            for column in range(self.num_columns):
                index = self.cell_index(row, column)
                if index >= len(self.cells):
                    continue
                parts.append((column, self.cells[index]))
            rendered: list[str] = []
            for position, (column, cell) in enumerate(parts):
                if position == len(parts) - 1:
                    rendered.append(cell.text)
                else:
                    rendered.append(cell.text + " " * (self.column_widths[column] - cell.width))
            lines.append(separator.join(rendered) + "\n")
        return "".join(lines)


def _column_widths(widths: Sequence[int], num_rows: int, num_columns: int, across: bool) -> list[int]:
    column_widths = [0] * num_columns
    for index, width in enumerate(widths):
        if across:
            column = index % num_columns
        else:
            column = index // num_rows
        if width > column_widths[column]:
            column_widths[column] = width
    return column_widths


def _fits(column_widths: Sequence[int], console_width: int) -> bool:
    total = sum(column_widths) + SEPARATOR_WIDTH * (len(column_widths) - 1)
    return total <= console_width


def _max_plausible_columns(widths: Sequence[int], console_width: int) -> int:
    """Upper bound on columns: even the narrowest cells must fit side by side."""
    narrowest = sorted(widths)
    total = 0
    count = 0
    for width in narrowest:
        extra = width if count == 0 else width + SEPARATOR_WIDTH
        if total + extra > console_width:
            break
        total += extra
        count += 1
    return max(1, count)


def fit(cells: Sequence[Cell], options: GridOptions) -> GridLayout | DoesNotFit:
    """Find the arrangement with the most columns that fits the console.

    Row-major placement (``across``) puts cell ``i`` in column ``i % c``;
    column-major placement fills ``rows`` cells down each column, so only
    ``ceil(len / rows)`` columns are occupied and measured.
    """
    cells = tuple(cells)
    count = len(cells)
    if count == 0:
        return GridLayout(cells=(), across=options.across, num_rows=0, num_columns=0, column_widths=())

    widths = [cell.width for cell in cells]
    widest = max(widths)
    if widest > options.console_width:
        return DoesNotFit(widest=widest, console_width=options.console_width)

    seen: set[tuple[int, int]] = set()
    for candidate in range(_max_plausible_columns(widths, options.console_width), 0, -1):
        num_rows = -(-count // candidate)
        num_columns = candidate if options.across else -(-count // num_rows)
        if (num_rows, num_columns) in seen:
            continue
        seen.add((num_rows, num_columns))

        column_widths = _column_widths(widths, num_rows, num_columns, options.across)
        if _fits(column_widths, options.console_width):
            return GridLayout(
                cells=cells,
                across=options.across,
                num_rows=num_rows,
                num_columns=num_columns,
                column_widths=tuple(column_widths),
            )

    # A single column is as wide as the widest cell, which fits.
    raise AssertionError("single-column layout must fit")


def render_lines(cells: Sequence[Cell]) -> str:
    """Render one cell per line with no padding."""
    return "".join(f"{cell.text}\n" for cell in cells)


def render_grid(cells: Sequence[Cell], options: GridOptions) -> str:
    """Render ``cells`` as a grid, or one per line when no grid fits."""
    layout = fit(cells, options)
    if isinstance(layout, DoesNotFit):
        logger.debug(
            "grid does not fit: widest cell %d > console width %d",
            layout.widest,
            layout.console_width,
        )
        return render_lines(cells)
    return layout.render()


__all__ = [
    "DoesNotFit",
    "GridLayout",
    "GridOptions",
    "SEPARATOR_WIDTH",
    "fit",
    "render_grid",
    "render_lines",
]
