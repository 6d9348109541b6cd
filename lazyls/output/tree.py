"""Tree view: entries indented beneath their directories with guide lines.

Each row remembers, for every level between it and the root, whether it
was the last child at that level. That is all the prefix needs: ``├──``
or ``└──`` at the row's own level, ``│`` or blank above it.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from ..fs.types import Entry
from .colours import Colours, Style
from .file_name import LinkStyle, file_name_text


class TreePart(Enum):
    EDGE = "├──"
    LINE = "│  "
    CORNER = "└──"
    BLANK = "   "


@dataclass(frozen=True)
class TreeRow:
    """An entry plus the is-last flag of each of its ancestors' levels."""

    entry: Entry
    ancestry: tuple[bool, ...] = ()

    @property
    def depth(self) -> int:
        return len(self.ancestry)


def tree_parts(ancestry: Sequence[bool]) -> list[TreePart]:
    if not ancestry:
        return []
    parts = [TreePart.BLANK if last else TreePart.LINE for last in ancestry[:-1]]
    parts.append(TreePart.CORNER if ancestry[-1] else TreePart.EDGE)
    return parts


def tree_prefix(ancestry: Sequence[bool], colours: Colours) -> str:
    """Return the painted guide text drawn before a row's name."""
    parts = tree_parts(ancestry)
    if not parts:
        return ""
    return colours.paint(Style.PUNCTUATION, "".join(f"{part.value} " for part in parts))


def render_tree_lines(
    rows: Sequence[TreeRow],
    colours: Colours,
    classify: bool = False,
    target_lookup: Callable[[Entry], Entry | None] | None = None,
) -> str:
    lines: list[str] = []
    for row in rows:
        name = file_name_text(row.entry, colours, LinkStyle.FULL_LINK_PATHS, classify, target_lookup)
        lines.append(f"{tree_prefix(row.ancestry, colours)}{name}\n")
    return "".join(lines)


__all__ = [
    "TreePart",
    "TreeRow",
    "render_tree_lines",
    "tree_parts",
    "tree_prefix",
]
