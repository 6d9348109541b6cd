"""Rendering of filtered entries into lines, grids, and detail tables."""

from __future__ import annotations

from .cell import Alignment, Cell, WidthMeasurer, measure
from .colours import Colours, Style
from .grid import DoesNotFit, GridLayout, GridOptions, fit, render_grid
from .table import layout
from .tree import TreeRow
from .view import Mode, View, render_tree, render_view

__all__ = [
    "Alignment",
    "Cell",
    "Colours",
    "DoesNotFit",
    "GridLayout",
    "GridOptions",
    "Mode",
    "Style",
    "TreeRow",
    "View",
    "WidthMeasurer",
    "fit",
    "layout",
    "measure",
    "render_grid",
    "render_tree",
    "render_view",
]
