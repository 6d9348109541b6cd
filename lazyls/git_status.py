"""Git status lookups for the details view.

Runs ``git status --porcelain`` once per listed directory and answers
two-character ``index``/``worktree`` codes for files, merging every status
beneath a directory for directories.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .fs.types import Entry

logger = logging.getLogger(__name__)

# First match wins when several statuses merge into one column.
STATUS_PRIORITY: tuple[str, ...] = ("A", "M", "D", "R", "T")
UNMODIFIED = "-"
CLEAN_STATUS = UNMODIFIED * 2

_PORCELAIN_CODES: dict[str, str] = {
    "A": "A",
    "M": "M",
    "D": "D",
    "R": "R",
    "T": "T",
    "C": "A",
}


def _run_git(cwd: Path, args: list[str], timeout_seconds: float) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(
            ["git", "-C", str(cwd), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("git %s failed: %s", " ".join(args), exc)
        return None


def iter_porcelain_records(output: str) -> list[tuple[str, str]]:
    """Split ``--porcelain=v1 -z`` output into ``(XY, path)`` records."""
    records: list[tuple[str, str]] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if not token:
            continue
        if len(token) < 4 or token[2] != " ":
            continue

        status = token[:2]
        path_text = token[3:]
        records.append((status, path_text))

        # For renamed/copied entries, porcelain -z appends an extra token
        # containing the source path; the first path token is the destination.
        if "R" in status or "C" in status:
            index += 1

    return records


def _column_code(code: str) -> str:
    return _PORCELAIN_CODES.get(code, UNMODIFIED)


def display_code(porcelain_status: str) -> str:
    """Translate a porcelain ``XY`` pair into the displayed two characters.

    Untracked files are new in the working tree and show ``-A``.
    """
    if porcelain_status == "??":
        return UNMODIFIED + "A"
    return _column_code(porcelain_status[0]) + _column_code(porcelain_status[1])


def merge_codes(codes: Iterable[str]) -> str:
    """Merge display codes column by column using ``STATUS_PRIORITY``."""
    index_codes: set[str] = set()
    worktree_codes: set[str] = set()
    for code in codes:
        index_codes.add(code[0])
        worktree_codes.add(code[1])

    def pick(column: set[str]) -> str:
        for candidate in STATUS_PRIORITY:
            if candidate in column:
                return candidate
        return UNMODIFIED

    return pick(index_codes) + pick(worktree_codes)


@dataclass(frozen=True)
class GitStatus:
    """Statuses of every changed path in one repository."""

    repo_root: Path
    statuses: tuple[tuple[Path, str], ...]

    @classmethod
    def scan(cls, path: Path, timeout_seconds: float = 2.0) -> GitStatus | None:
        """Discover the repository containing ``path`` and read its status.

        Returns ``None`` when git is missing or ``path`` is not in a work tree.
        """
        if shutil.which("git") is None:
            logger.debug("git executable not found")
            return None

        path = path.resolve()
        top_proc = _run_git(path, ["rev-parse", "--show-toplevel"], timeout_seconds)
        if top_proc is None or top_proc.returncode != 0:
            return None
        top_level = top_proc.stdout.strip()
        if not top_level:
            return None
        repo_root = Path(top_level).resolve()

        status_proc = _run_git(
            repo_root,
            ["status", "--porcelain=v1", "-z", "--untracked-files=all"],
            timeout_seconds,
        )
        if status_proc is None or status_proc.returncode != 0:
            logger.debug("git status failed in %s", repo_root)
            return None

        return cls.from_porcelain(repo_root, status_proc.stdout)

    @classmethod
    def from_porcelain(cls, repo_root: Path, output: str) -> GitStatus:
        statuses: list[tuple[Path, str]] = []
        for status, rel_path in iter_porcelain_records(output):
            if not rel_path or status == "!!":
                continue
            target = repo_root / rel_path.rstrip("/")
            statuses.append((target, display_code(status)))
        return cls(repo_root=repo_root, statuses=tuple(statuses))

    def status(self, path: Path) -> str:
        """Return the code for a single file, ``--`` when it is clean."""
        resolved = _resolve(path)
        for target, code in self.statuses:
            if target == resolved:
                return code
        return CLEAN_STATUS

    def dir_status(self, directory: Path) -> str:
        """Merge the codes of every changed path under ``directory``."""
        resolved = _resolve(directory)
        return merge_codes(
            code
            for target, code in self.statuses
            if target == resolved or target.is_relative_to(resolved)
        )

    def status_for(self, entry: Entry) -> str:
        if entry.is_directory:
            return self.dir_status(entry.path)
        return self.status(entry.path)


def _resolve(path: Path) -> Path:
    """Resolve the parent only, so a symlink is looked up as itself."""
    try:
        if path.name in {"", ".", ".."}:
            return path.resolve()
        return path.parent.resolve() / path.name
    except OSError:
        return path.absolute()


__all__ = [
    "CLEAN_STATUS",
    "GitStatus",
    "STATUS_PRIORITY",
    "display_code",
    "iter_porcelain_records",
    "merge_codes",
]
