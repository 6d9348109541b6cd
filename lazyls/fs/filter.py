"""Filtering and sorting of directory entries before they are rendered.

The pipeline is: dot filtering, ignore-glob filtering, a stable sort on the
requested field, an optional reverse, then an optional stable regrouping
that moves directories ahead of everything else. Each step preserves the
relative order produced by the previous one.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from functools import cmp_to_key

from ..natural import natural_compare
from .glob import GlobPattern, PatternError
from .types import Entry


class SortCase(Enum):
    """Whether name comparison distinguishes ``A`` from ``a``."""

    SENSITIVE = "sensitive"
    INSENSITIVE = "insensitive"


class SortKind(Enum):
    UNSORTED = "unsorted"
    NAME = "name"
    EXTENSION = "extension"
    SIZE = "size"
    INODE = "inode"
    MODIFIED_DATE = "modified"
    ACCESSED_DATE = "accessed"
    CREATED_DATE = "created"
    FILE_TYPE = "type"


@dataclass(frozen=True)
class SortField:
    """Metadata field to sort by; ``case`` only applies to name/extension."""

    kind: SortKind
    case: SortCase = SortCase.SENSITIVE

    @classmethod
    def unsorted(cls) -> SortField:
        return cls(SortKind.UNSORTED)

    @classmethod
    def name(cls, case: SortCase = SortCase.SENSITIVE) -> SortField:
        return cls(SortKind.NAME, case)

    @classmethod
    def extension(cls, case: SortCase = SortCase.SENSITIVE) -> SortField:
        return cls(SortKind.EXTENSION, case)

    @classmethod
    def of(cls, kind: SortKind) -> SortField:
        return cls(kind)


class DotFilter(Enum):
    """Which invisible ``.``-prefixed entries to include in a listing."""

    JUST_FILES = "just-files"
    DOTFILES = "dotfiles"
    DOTFILES_AND_DOTS = "dotfiles-and-dots"

    def shows(self, entry: Entry) -> bool:
        if entry.is_dot_or_dotdot:
            return self is DotFilter.DOTFILES_AND_DOTS
        if entry.is_dotfile:
            return self is not DotFilter.JUST_FILES
        return True


@dataclass(frozen=True)
class IgnorePatterns:
    """Globs tested against each file name; any match hides the file."""

    patterns: tuple[GlobPattern, ...] = ()

    @classmethod
    def parse(cls, sources: Iterable[str]) -> tuple[IgnorePatterns, list[PatternError]]:
        """Compile each glob independently.

        Returns the valid patterns in input order and the errors for the
        inputs that failed to compile.
        """
        patterns: list[GlobPattern] = []
        errors: list[PatternError] = []
        for source in sources:
            try:
                patterns.append(GlobPattern.compile(source))
            except PatternError as exc:
                errors.append(exc)
        return cls(tuple(patterns)), errors

    @classmethod
    def empty(cls) -> IgnorePatterns:
        return cls()

    def is_ignored(self, name: str) -> bool:
        return any(pattern.matches(name) for pattern in self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)


def _compare_values(left: int, right: int) -> int:
    return (left > right) - (left < right)


_NUMERIC_FIELDS: dict[SortKind, Callable[[Entry], int]] = {
    SortKind.SIZE: lambda entry: entry.size,
    SortKind.INODE: lambda entry: entry.inode,
    SortKind.MODIFIED_DATE: lambda entry: entry.modified_time,
    SortKind.ACCESSED_DATE: lambda entry: entry.accessed_time,
    SortKind.CREATED_DATE: lambda entry: entry.created_time,
}


@dataclass(frozen=True)
class FileFilter:
    """How to filter and order one listing's entries."""

    list_dirs_first: bool = False
    sort_field: SortField = field(default_factory=SortField.name)
    reverse: bool = False
    dot_filter: DotFilter = DotFilter.JUST_FILES
    ignore_patterns: IgnorePatterns = field(default_factory=IgnorePatterns.empty)

    def filter_dots(self, entries: Iterable[Entry]) -> list[Entry]:
        return [entry for entry in entries if self.dot_filter.shows(entry)]

    def filter_discovered(self, entries: Iterable[Entry]) -> list[Entry]:
        """Drop ignored entries found by expanding a directory."""
        return [entry for entry in entries if not self.ignore_patterns.is_ignored(entry.name)]

    def filter_named(self, entries: Iterable[Entry]) -> list[Entry]:
        """Drop ignored entries among paths the user named explicitly.

        Uses the same predicate as ``filter_discovered``; it is a separate
        entry point so callers can choose a different policy for named paths.
        """
        return [entry for entry in entries if not self.ignore_patterns.is_ignored(entry.name)]

    def compare(self, a: Entry, b: Entry) -> int:
        """Compare two entries under ``sort_field``, returning -1, 0, or 1."""
        kind = self.sort_field.kind
        ignore_case = self.sort_field.case is SortCase.INSENSITIVE

        if kind is SortKind.UNSORTED:
            return 0
        if kind is SortKind.NAME:
            return natural_compare(a.name, b.name, ignore_case)
        numeric = _NUMERIC_FIELDS.get(kind)
        if numeric is not None:
            return _compare_values(numeric(a), numeric(b))
        if kind is SortKind.FILE_TYPE:
            order = _compare_values(a.file_type.rank, b.file_type.rank)
            return order or natural_compare(a.name, b.name)
        if kind is SortKind.EXTENSION:
            ext_a = a.extension.casefold() if ignore_case else a.extension
            ext_b = b.extension.casefold() if ignore_case else b.extension
            order = (ext_a > ext_b) - (ext_a < ext_b)
            return order or natural_compare(a.name, b.name, ignore_case)
        raise ValueError(f"unknown sort field: {self.sort_field!r}")

    def sort(self, entries: Sequence[Entry]) -> list[Entry]:
        """Return ``entries`` stably sorted, reversed, and regrouped."""
        ordered = list(entries)
        if self.sort_field.kind is not SortKind.UNSORTED:
            ordered.sort(key=cmp_to_key(self.compare))

        if self.reverse:
            ordered.reverse()

        if self.list_dirs_first:
            # Relies on list.sort being stable.
            ordered.sort(key=lambda entry: not entry.is_directory)

        return ordered

    def apply(self, entries: Iterable[Entry]) -> list[Entry]:
        """Filter and order entries discovered inside a directory."""
        return self.sort(self.filter_discovered(self.filter_dots(entries)))


__all__ = [
    "DotFilter",
    "FileFilter",
    "IgnorePatterns",
    "SortCase",
    "SortField",
    "SortKind",
]
