"""View selection and dispatch to the lines, grid, details, and tree renderers."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from ..fs.types import Entry
from .cell import WidthMeasurer
from .colours import Colours
from .details import DetailsRenderer, TableOptions
from .file_name import LinkStyle, file_name_cell
from .grid import GridOptions, render_grid
from .lines import render_lines_view
from .tree import TreeRow, render_tree_lines, tree_prefix


class Mode(Enum):
    LINES = "lines"
    GRID = "grid"
    DETAILS = "details"
    GRID_DETAILS = "grid-details"
    TREE = "tree"


_TABLE_MODES = frozenset({Mode.DETAILS, Mode.GRID_DETAILS, Mode.TREE})


@dataclass(frozen=True)
class View:
    """Everything needed to render one block of entries.

    In tree mode ``table`` is optional: without it the tree is names only.
    """

    mode: Mode = Mode.LINES
    colours: Colours = field(default_factory=Colours.plain)
    classify: bool = False
    grid: GridOptions | None = None
    table: TableOptions | None = None
    header: bool = False

    @property
    def shows_git(self) -> bool:
        return self.mode in _TABLE_MODES and self.table is not None and self.table.git


def _details_renderer(
    view: View,
    measurer: WidthMeasurer,
    git_lookup: Callable[[Entry], str] | None,
    target_lookup: Callable[[Entry], Entry | None] | None,
) -> DetailsRenderer:
    return DetailsRenderer(
        options=view.table or TableOptions(),
        colours=view.colours,
        measurer=measurer,
        git_lookup=git_lookup,
        target_lookup=target_lookup,
    )


def render_view(
    entries: Sequence[Entry],
    view: View,
    git_lookup: Callable[[Entry], str] | None = None,
    target_lookup: Callable[[Entry], Entry | None] | None = None,
) -> str:
    """Render ``entries`` with ``view``; widths are cached for this call only."""
    if view.mode is Mode.TREE:
        return render_tree([TreeRow(entry) for entry in entries], view, git_lookup, target_lookup)

    measurer = WidthMeasurer()

    if view.mode is Mode.DETAILS:
        renderer = _details_renderer(view, measurer, git_lookup, target_lookup)
        return renderer.render(entries, header=view.header)

    if view.mode is Mode.GRID_DETAILS:
        renderer = _details_renderer(view, measurer, git_lookup, target_lookup)
        if view.grid is None:
            return renderer.render(entries, header=view.header)
        return renderer.render_grid(entries, view.grid, header=view.header)

    if view.mode is Mode.GRID and view.grid is not None:
        cells = [
            file_name_cell(entry, view.colours, measurer, LinkStyle.JUST_FILENAMES, view.classify)
            for entry in entries
        ]
        return render_grid(cells, view.grid)

    return render_lines_view(entries, view.colours, measurer, view.classify, target_lookup)


def render_tree(
    rows: Sequence[TreeRow],
    view: View,
    git_lookup: Callable[[Entry], str] | None = None,
    target_lookup: Callable[[Entry], Entry | None] | None = None,
) -> str:
    """Render pre-ordered tree rows, as a table when ``view.table`` is set."""
    if view.table is None:
        return render_tree_lines(rows, view.colours, view.classify, target_lookup)
    renderer = _details_renderer(view, WidthMeasurer(), git_lookup, target_lookup)
    entries = [row.entry for row in rows]
    prefixes = [tree_prefix(row.ancestry, view.colours) for row in rows]
    return renderer.render(entries, header=view.header, name_prefixes=prefixes)


__all__ = [
    "Mode",
    "View",
    "render_tree",
    "render_view",
]
