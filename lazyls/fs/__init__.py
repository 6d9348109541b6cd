"""Filesystem entries plus the filter/sort stage applied before rendering."""

from __future__ import annotations

from .filter import DotFilter, FileFilter, IgnorePatterns, SortCase, SortField, SortKind
from .glob import GlobPattern, PatternError
from .scan import entry_from_path, link_target_entry, list_directory
from .types import Entry, FileType, extension_of

__all__ = [
    "DotFilter",
    "Entry",
    "FileFilter",
    "FileType",
    "GlobPattern",
    "IgnorePatterns",
    "PatternError",
    "SortCase",
    "SortField",
    "SortKind",
    "entry_from_path",
    "extension_of",
    "link_target_entry",
    "list_directory",
]
