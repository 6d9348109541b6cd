"""Listing driver: stat named paths, expand directories, write views.

Named files are rendered together first, then each directory in turn.
In tree mode each directory is one block of rows nested beneath it.
Errors for individual paths are reported and the remaining paths are still
listed; the return value is the process exit status.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TextIO

from .fs.filter import DotFilter
from .fs.scan import entry_from_path, link_target_entry, list_directory
from .fs.types import Entry
from .git_status import GitStatus
from .options import Options
from .output.tree import TreeRow
from .output.view import render_tree, render_view

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_RUNTIME_ERROR = 1
EXIT_MISSING_PATH = 2


def _git_lookup_for(directory: Path, options: Options) -> Callable[[Entry], str] | None:
    if not options.view.shows_git:
        return None
    git = GitStatus.scan(directory)
    if git is None:
        return None
    return git.status_for


class Lister:
    """Writes listings for a batch of paths to ``out``, errors to ``err``."""

    def __init__(self, options: Options, out: TextIO, err: TextIO) -> None:
        self.options = options
        self.out = out
        self.err = err
        self.status = EXIT_OK
        self._blocks_written = 0

    def _report(self, path: Path | str, exc: OSError, status: int = EXIT_RUNTIME_ERROR) -> None:
        message = exc.strerror or str(exc)
        self.err.write(f"{path}: {message}\n")
        if self.status == EXIT_OK:
            self.status = status

    def _write_block(self, text: str, header: str | None = None) -> None:
        if self._blocks_written:
            self.out.write("\n")
        if header is not None:
            self.out.write(f"{header}:\n")
        self.out.write(text)
        self._blocks_written += 1

    def run(self, raw_paths: Sequence[str]) -> int:
        file_filter = self.options.file_filter
        files: list[Entry] = []
        directories: list[Entry] = []

        for raw in raw_paths:
            try:
                entry = entry_from_path(Path(raw), named=True)
            except OSError as exc:
                self._report(raw, exc, EXIT_MISSING_PATH)
                continue
            points_to_directory = entry.is_directory or (entry.is_symlink and entry.path.is_dir())
            if points_to_directory and not self.options.list_dirs:
                directories.append(entry)
            else:
                files.append(entry)

        files = file_filter.sort(file_filter.filter_named(files))
        directories = file_filter.sort(directories)

        if files:
            git_lookup = _git_lookup_for(files[0].path.parent, self.options)
            self._write_block(render_view(files, self.options.view, git_lookup, link_target_entry))

        if self.options.tree:
            for directory in directories:
                self._list_tree(directory)
            return self.status

        show_headers = bool(files) or len(directories) > 1 or self.options.recurse
        for directory in directories:
            self._list_directory(directory.path, show_headers, depth=1)

        return self.status

    def _list_directory(self, directory: Path, show_header: bool, depth: int) -> None:
        entries = self._children(directory)
        if entries is None:
            return
        git_lookup = _git_lookup_for(directory, self.options)
        header = str(directory) if show_header else None
        self._write_block(render_view(entries, self.options.view, git_lookup, link_target_entry), header)

        if not self.options.recurse:
            return
        if self.options.level is not None and depth >= self.options.level:
            return
        for entry in entries:
            if entry.is_directory and not entry.is_dot_or_dotdot:
                self._list_directory(entry.path, True, depth + 1)

    def _children(self, directory: Path) -> list[Entry] | None:
        file_filter = self.options.file_filter
        include_dots = file_filter.dot_filter is DotFilter.DOTFILES_AND_DOTS
        try:
            children, errors = list_directory(directory, include_dots=include_dots)
        except OSError as exc:
            self._report(directory, exc)
            return None

        for child_path, exc in errors:
            self._report(child_path, exc)
        return file_filter.apply(children)

    def _list_tree(self, root: Entry) -> None:
        rows = [TreeRow(root)]
        self._collect_tree_rows(root.path, (), rows)
        git_lookup = _git_lookup_for(root.path, self.options)
        self._write_block(render_tree(rows, self.options.view, git_lookup, link_target_entry))

    def _collect_tree_rows(self, directory: Path, ancestry: tuple[bool, ...], rows: list[TreeRow]) -> None:
        entries = self._children(directory)
        if entries is None:
            return
        depth = len(ancestry) + 1
        level = self.options.level
        for index, entry in enumerate(entries):
            child_ancestry = (*ancestry, index == len(entries) - 1)
            rows.append(TreeRow(entry, child_ancestry))
            if entry.is_directory and not entry.is_dot_or_dotdot and (level is None or depth < level):
                self._collect_tree_rows(entry.path, child_ancestry, rows)


def run_listing(paths: Sequence[str], options: Options, out: TextIO, err: TextIO) -> int:
    """List ``paths`` (``.`` when empty) and return the exit status."""
    return Lister(options, out, err).run(list(paths) or ["."])


__all__ = [
    "EXIT_MISSING_PATH",
    "EXIT_OK",
    "EXIT_RUNTIME_ERROR",
    "Lister",
    "run_listing",
]
