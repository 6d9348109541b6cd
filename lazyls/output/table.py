"""Column-width aggregation for multi-field rows.

Each column is as wide as its widest cell across every row (a header row
included, when the caller passes one). Cells are padded by their measured
width so escape sequences never consume padding, and the last column is
left unpadded so lines carry no trailing whitespace.
"""

from __future__ import annotations

from collections.abc import Sequence

from .cell import Alignment, Cell


def column_widths(rows: Sequence[Sequence[Cell]], num_columns: int) -> list[int]:
    """Return the max cell width of each of ``num_columns`` columns."""
    widths = [0] * num_columns
    for row in rows:
        for index, cell in enumerate(row):
            if cell.width > widths[index]:
                widths[index] = cell.width
    return widths


def render_row(row: Sequence[Cell], widths: Sequence[int], alignments: Sequence[Alignment]) -> str:
    last = len(row) - 1
    parts: list[str] = []
    for index, cell in enumerate(row):
        if index == last:
            parts.append(cell.text)
        else:
            parts.append(alignments[index].pad(cell, widths[index]))
    return " ".join(parts)


def layout(rows: Sequence[Sequence[Cell]], alignments: Sequence[Alignment]) -> list[str]:
    """Render ``rows`` as aligned lines, one per row.

    Raises ``ValueError`` if a row's length differs from ``alignments``.
    """
    if not rows:
        return []

    num_columns = len(alignments)
    for row_index, row in enumerate(rows):
        if len(row) != num_columns:
            raise ValueError(
                f"row {row_index} has {len(row)} cells, expected {num_columns}"
            )

    widths = column_widths(rows, num_columns)
    return [render_row(row, widths, alignments) for row in rows]


__all__ = [
    "column_widths",
    "layout",
    "render_row",
]
