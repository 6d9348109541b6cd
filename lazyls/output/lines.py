"""Lines view: one file name per line."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ..fs.types import Entry
from .cell import WidthMeasurer
from .colours import Colours
from .file_name import LinkStyle, file_name_cell
from .grid import render_lines


def render_lines_view(
    entries: Sequence[Entry],
    colours: Colours,
    measurer: WidthMeasurer,
    classify: bool = False,
    target_lookup: Callable[[Entry], Entry | None] | None = None,
) -> str:
    cells = [
        file_name_cell(
            entry,
            colours,
            measurer,
            link_style=LinkStyle.FULL_LINK_PATHS,
            classify=classify,
            target_lookup=target_lookup,
        )
        for entry in entries
    ]
    return render_lines(cells)
