"""Domain datatypes for listed filesystem entries."""

from __future__ import annotations

import stat
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class FileType(Enum):
    """Closed classification of a filesystem object.

    Declaration order is the order used when sorting by type.
    """

    DIRECTORY = (0, "d")
    FILE = (1, ".")
    SYMLINK = (2, "l")
    PIPE = (3, "|")
    SOCKET = (4, "s")
    CHAR_DEVICE = (5, "c")
    BLOCK_DEVICE = (6, "b")
    SPECIAL = (7, "?")

    @property
    def rank(self) -> int:
        return self.value[0]

    @property
    def type_char(self) -> str:
        return self.value[1]

    @classmethod
    def from_mode(cls, mode: int) -> FileType:
        if stat.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat.S_ISREG(mode):
            return cls.FILE
        if stat.S_ISLNK(mode):
            return cls.SYMLINK
        if stat.S_ISFIFO(mode):
            return cls.PIPE
        if stat.S_ISSOCK(mode):
            return cls.SOCKET
        if stat.S_ISCHR(mode):
            return cls.CHAR_DEVICE
        if stat.S_ISBLK(mode):
            return cls.BLOCK_DEVICE
        return cls.SPECIAL


def extension_of(name: str) -> str:
    """Return the text after the last ``.`` in ``name``, or ``""``."""
    dot = name.rfind(".")
    if dot < 0:
        return ""
    return name[dot + 1 :]


@dataclass(frozen=True)
class Entry:
    """One filesystem object to display, with metadata observed once."""

    name: str
    path: Path
    file_type: FileType = FileType.FILE
    is_executable: bool = False
    size: int = 0
    modified_time: int = 0
    accessed_time: int = 0
    created_time: int = 0
    inode: int = 0
    links: int = 1
    blocks: int = 0
    uid: int = 0
    gid: int = 0
    mode: int = 0
    link_target: str | None = None
    link_broken: bool = False
    path_prefix: str = ""
    extension: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extension", extension_of(self.name))

    @property
    def is_directory(self) -> bool:
        return self.file_type is FileType.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.file_type is FileType.SYMLINK

    @property
    def is_file(self) -> bool:
        return self.file_type is FileType.FILE

    @property
    def is_executable_file(self) -> bool:
        return self.file_type is FileType.FILE and self.is_executable

    @property
    def is_dotfile(self) -> bool:
        return self.name.startswith(".")

    @property
    def is_dot_or_dotdot(self) -> bool:
        return self.name in {".", ".."}


__all__ = [
    "Entry",
    "FileType",
    "extension_of",
]
