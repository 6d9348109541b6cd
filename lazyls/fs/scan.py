"""Filesystem scanning into immutable ``Entry`` records.

Every entry is ``lstat``-ed exactly once, so symlinks are described rather
than followed. Children that vanish or cannot be stat'ed mid-scan are
reported separately instead of aborting the whole directory.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from .types import Entry, FileType

logger = logging.getLogger(__name__)


def _entry_from_stat(
    name: str,
    path: Path,
    st: os.stat_result,
    path_prefix: str = "",
) -> Entry:
    file_type = FileType.from_mode(st.st_mode)
    link_target: str | None = None
    link_broken = False
    if file_type is FileType.SYMLINK:
        try:
            link_target = os.readlink(path)
        except OSError:
            link_target = None
        try:
            os.stat(path)
        except OSError:
            link_broken = True

    return Entry(
        name=name,
        path=path,
        file_type=file_type,
        is_executable=bool(st.st_mode & stat.S_IXUSR),
        size=int(st.st_size),
        modified_time=int(st.st_mtime_ns),
        accessed_time=int(st.st_atime_ns),
        created_time=int(st.st_ctime_ns),
        inode=int(st.st_ino),
        links=int(st.st_nlink),
        blocks=int(getattr(st, "st_blocks", 0)),
        uid=int(st.st_uid),
        gid=int(st.st_gid),
        mode=int(st.st_mode),
        link_target=link_target,
        link_broken=link_broken,
        path_prefix=path_prefix,
    )


def _named_prefix(path: Path) -> str:
    """Return the parent text shown before an explicitly named path."""
    parent = str(path.parent)
    if parent == ".":
        return ""
    if parent == path.anchor:
        return parent
    return parent + os.sep


def entry_from_path(path: Path, named: bool = False) -> Entry:
    """Build an entry for ``path`` using ``lstat``.

    ``named`` marks a path the user typed on the command line; its parent
    directory is kept as a display prefix. Raises ``OSError`` when the path
    cannot be stat'ed.
    """
    st = os.lstat(path)
    name = path.name or str(path)
    prefix = _named_prefix(path) if named and path.name else ""
    return _entry_from_stat(name, path, st, path_prefix=prefix)


def link_target_entry(entry: Entry) -> Entry | None:
    """Return an entry describing what a symlink points at.

    Returns ``None`` for non-links, broken links, or unreadable targets.
    """
    if entry.link_target is None or entry.link_broken:
        return None
    target_path = entry.path.parent / entry.link_target
    try:
        st = os.lstat(target_path)
    except OSError:
        return None
    return _entry_from_stat(target_path.name or entry.link_target, target_path, st)


def list_directory(
    directory: Path,
    include_dots: bool = False,
) -> tuple[list[Entry], list[tuple[Path, OSError]]]:
    """Scan ``directory`` into entries in filesystem order.

    Returns ``(entries, errors)`` where ``errors`` holds children that could
    not be stat'ed. With ``include_dots`` the ``.`` and ``..`` entries are
    prepended. Raises ``OSError`` when the directory itself cannot be opened.
    """
    entries: list[Entry] = []
    errors: list[tuple[Path, OSError]] = []

    if include_dots:
        for dot_name, dot_path in ((".", directory), ("..", directory / "..")):
            try:
                entries.append(_entry_from_stat(dot_name, dot_path, os.lstat(dot_path)))
            except OSError as exc:
                errors.append((dot_path, exc))

    with os.scandir(directory) as children:
        for child in children:
            child_path = Path(child.path)
            try:
                st = child.stat(follow_symlinks=False)
            except OSError as exc:
                logger.debug("cannot stat %s: %s", child_path, exc)
                errors.append((child_path, exc))
                continue
            entries.append(_entry_from_stat(child.name, child_path, st))

    return entries, errors


__all__ = [
    "entry_from_path",
    "link_target_entry",
    "list_directory",
]
