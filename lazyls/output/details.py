"""Details view: one aligned row of metadata fields per entry.

The same rows also feed the grid-details view, which packs several rows
per line, and the long tree view, which prefixes names with tree guides.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime, tzinfo
from enum import Enum

from ..fs.types import Entry
from ..users import UserCache
from .cell import Alignment, Cell, WidthMeasurer
from .colours import Colours, Style
from .fields import (
    SizeFormat,
    TimeFormat,
    TimeType,
    blocks_cell,
    git_cell,
    group_cell,
    inode_cell,
    links_cell,
    permissions_cell,
    size_cell,
    time_cell,
    user_cell,
)
from .file_name import LinkStyle, file_name_cell
from .grid import SEPARATOR_WIDTH, DoesNotFit, GridOptions, fit
from .table import layout


class ColumnKind(Enum):
    PERMISSIONS = "Permissions"
    FILE_SIZE = "Size"
    BLOCKS = "Blocks"
    USER = "User"
    GROUP = "Group"
    HARD_LINKS = "Links"
    INODE = "inode"
    TIMESTAMP = "Date"
    GIT = "Git"
    FILE_NAME = "Name"


_RIGHT_ALIGNED = frozenset({ColumnKind.FILE_SIZE, ColumnKind.HARD_LINKS, ColumnKind.INODE, ColumnKind.BLOCKS})


@dataclass(frozen=True)
class Column:
    kind: ColumnKind

    @property
    def alignment(self) -> Alignment:
        if self.kind in _RIGHT_ALIGNED:
            return Alignment.RIGHT
        return Alignment.LEFT

    @property
    def header(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class TimestampColumn(Column):
    """One timestamp column; several may be shown side by side."""

    kind: ColumnKind = field(default=ColumnKind.TIMESTAMP, init=False)
    time_type: TimeType = TimeType.MODIFIED

    @property
    def header(self) -> str:
        return self.time_type.header


@dataclass(frozen=True)
class TableOptions:
    """Which detail columns to show and how to format them."""

    size_format: SizeFormat = SizeFormat.DECIMAL
    time_format: TimeFormat = TimeFormat.DEFAULT
    time_types: tuple[TimeType, ...] = (TimeType.MODIFIED,)
    inode: bool = False
    links: bool = False
    blocks: bool = False
    group: bool = False
    git: bool = False

    def columns(self) -> list[Column]:
        """Return the columns in display order; the file name is always last."""
        columns: list[Column] = []
        if self.inode:
            columns.append(Column(ColumnKind.INODE))
        columns.append(Column(ColumnKind.PERMISSIONS))
        if self.links:
            columns.append(Column(ColumnKind.HARD_LINKS))
        columns.append(Column(ColumnKind.FILE_SIZE))
        if self.blocks:
            columns.append(Column(ColumnKind.BLOCKS))
        columns.append(Column(ColumnKind.USER))
        if self.group:
            columns.append(Column(ColumnKind.GROUP))
        for time_type in self.time_types:
            columns.append(TimestampColumn(time_type))
        if self.git:
            columns.append(Column(ColumnKind.GIT))
        columns.append(Column(ColumnKind.FILE_NAME))
        return columns


@dataclass
class DetailsRenderer:
    """Builds detail rows for one render call.

    Holds the caches that are scoped to a single listing: measured widths
    and user/group names.
    """

    options: TableOptions
    colours: Colours
    measurer: WidthMeasurer = field(default_factory=WidthMeasurer)
    users: UserCache = field(default_factory=UserCache)
    git_lookup: Callable[[Entry], str] | None = None
    target_lookup: Callable[[Entry], Entry | None] | None = None
    now: datetime | None = None
    tz: tzinfo | None = None

    def header_row(self, columns: Sequence[Column]) -> list[Cell]:
        return [
            Cell.measured(self.colours.paint(Style.HEADER, column.header), self.measurer)
            for column in columns
        ]

    def cell_for(self, entry: Entry, column: Column) -> Cell:
        kind = column.kind
        if kind is ColumnKind.PERMISSIONS:
            return permissions_cell(entry, self.colours, self.measurer)
        if kind is ColumnKind.FILE_SIZE:
            return size_cell(entry, self.options.size_format, self.colours, self.measurer)
        if kind is ColumnKind.BLOCKS:
            return blocks_cell(entry, self.colours, self.measurer)
        if kind is ColumnKind.USER:
            return user_cell(entry, self.users, self.colours, self.measurer)
        if kind is ColumnKind.GROUP:
            return group_cell(entry, self.users, self.colours, self.measurer)
        if kind is ColumnKind.HARD_LINKS:
            return links_cell(entry, self.colours, self.measurer)
        if kind is ColumnKind.INODE:
            return inode_cell(entry, self.colours, self.measurer)
        if isinstance(column, TimestampColumn):
            return time_cell(
                entry,
                column.time_type,
                self.options.time_format,
                self.colours,
                self.measurer,
                now=self.now,
                tz=self.tz,
            )
        if kind is ColumnKind.GIT:
            status = self.git_lookup(entry) if self.git_lookup is not None else "--"
            return git_cell(status, self.colours, self.measurer)
        return file_name_cell(
            entry,
            self.colours,
            self.measurer,
            link_style=LinkStyle.FULL_LINK_PATHS,
            target_lookup=self.target_lookup,
        )

    def rows(
        self,
        entries: Sequence[Entry],
        header: bool = False,
        name_prefixes: Sequence[str] | None = None,
    ) -> tuple[list[list[Cell]], list[Alignment]]:
        """Build one row of cells per entry, optionally under a header row.

        ``name_prefixes`` runs parallel to ``entries``; each prefix (tree
        guides, say) is drawn in front of that entry's file name.
        """
        columns = self.options.columns()
        rows: list[list[Cell]] = []
        if header and entries:
            rows.append(self.header_row(columns))
        for index, entry in enumerate(entries):
            row = [self.cell_for(entry, column) for column in columns]
            if name_prefixes is not None and name_prefixes[index]:
                prefix = Cell.measured(name_prefixes[index], self.measurer)
                name = row[-1]
                row[-1] = Cell(text=prefix.text + name.text, width=prefix.width + name.width)
            rows.append(row)
        return rows, [column.alignment for column in columns]

    def render(
        self,
        entries: Sequence[Entry],
        header: bool = False,
        name_prefixes: Sequence[str] | None = None,
    ) -> str:
        rows, alignments = self.rows(entries, header=header, name_prefixes=name_prefixes)
        return "".join(f"{line}\n" for line in layout(rows, alignments))

    def render_grid(self, entries: Sequence[Entry], grid: GridOptions, header: bool = False) -> str:
        """Pack whole detail rows side by side as grid columns.

        Every row is laid out with the same column widths first, so the
        rows line up within each grid column. When only one grid column
        fits, this is the plain table. A header, if requested, is repeated
        above each grid column.
        """
        rows, alignments = self.rows(entries, header=header)
        lines = layout(rows, alignments)
        header_cell = Cell.measured(lines.pop(0), self.measurer) if header and lines else None
        cells = [Cell.measured(line, self.measurer) for line in lines]

        floor = header_cell.width if header_cell is not None else 0
        sized = [Cell(text=cell.text, width=max(cell.width, floor)) for cell in cells]
        result = fit(sized, grid)
        if isinstance(result, DoesNotFit) or result.num_columns <= 1:
            table_lines = lines if header_cell is None else [header_cell.text, *lines]
            return "".join(f"{line}\n" for line in table_lines)

        text = replace(result, cells=tuple(cells)).render()
        if header_cell is None:
            return text
        headings = [Alignment.LEFT.pad(header_cell, width) for width in result.column_widths[:-1]]
        headings.append(header_cell.text)
        return (" " * SEPARATOR_WIDTH).join(headings) + "\n" + text


__all__ = [
    "Column",
    "ColumnKind",
    "DetailsRenderer",
    "TableOptions",
    "TimestampColumn",
]
